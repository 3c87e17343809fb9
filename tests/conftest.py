"""Shared fixtures: virtual time for expiry tests."""

from __future__ import annotations

from typing import Iterator

import pytest

from memosel.expiry import (
    ExpiryScheduler,
    ManualClock,
    ManualLoop,
    set_default_scheduler,
)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def loop(clock: ManualClock) -> ManualLoop:
    return ManualLoop(clock)


@pytest.fixture
def scheduler(loop: ManualLoop, clock: ManualClock) -> ExpiryScheduler:
    return ExpiryScheduler(loop=loop, clock=clock)


@pytest.fixture(autouse=True)
def fresh_default_scheduler() -> Iterator[None]:
    """Keep the process-wide scheduler from leaking between tests."""
    set_default_scheduler(None)
    yield
    set_default_scheduler(None)
