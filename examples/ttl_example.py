"""
TTL — cache-wide expiry on a running event loop.

Key concepts:
- Every computed result arms an expiry entry
- One timer serves all entries, soonest first
- When an entry fires, the whole instance cache is cleared
"""

import asyncio
import logging

from memosel import memo
from memosel.expiry import ExpiryScheduler
from examples._infra import banner, run


scheduler = ExpiryScheduler()

quote = (
    memo()
    .scheduler(scheduler)
    .ttl(100)
    .size(0)
    .use("symbol", lambda symbol: symbol)
    .build(lambda f: {"symbol": f["symbol"], "price": len(f["symbol"]) * 10})
)


async def main() -> None:
    banner("TTL: Cache-wide Expiry")

    print("\n1. First reads (compute):")
    aapl = quote("AAPL")
    quote("MSFT")
    print(f"   cached: {len(quote)}")

    await asyncio.sleep(0.05)
    print("\n2. At 50ms (hit):")
    print(f"   same object: {quote('AAPL') is aapl}")

    await asyncio.sleep(0.1)
    print("\n3. At 150ms (reaped):")
    print(f"   cached: {len(quote)}")
    print(f"   same object: {quote('AAPL') is aapl}")

    print("\nDone!")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    run(main)
