"""
memosel — memoized structured selectors.

    from memosel import memo              # Fluent selector builder
    from memosel import selector as M     # Selector engine
    from memosel import expiry as X       # TTL scheduling
"""

import logging

from memosel import selector
from memosel import expiry
from memosel.selector import (
    memo,
    Memo,
    Selector,
    FamilySelector,
    ConfigError,
    ConfigErrorKind,
    strict_equal,
)
from memosel.expiry import (
    ExpiryScheduler,
    ManualClock,
    ManualLoop,
    get_default_scheduler,
    set_default_scheduler,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = (
    "selector",
    "expiry",
    "memo",
    "Memo",
    "Selector",
    "FamilySelector",
    "ConfigError",
    "ConfigErrorKind",
    "strict_equal",
    "ExpiryScheduler",
    "ManualClock",
    "ManualLoop",
    "get_default_scheduler",
    "set_default_scheduler",
)
