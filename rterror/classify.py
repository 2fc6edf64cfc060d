# rterror/classify.py
"""
Predicates over a cause chain for transient system conditions.

Only ``OSError`` values carry an ``errno``; other links are recognised
by their exception type alone.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import errno
from typing import FrozenSet, Optional

from rterror.chain import ExceptionTypes, iter_chain

TEMPORARY_ERRNOS: FrozenSet[int] = frozenset({
    errno.EINTR,
    errno.EMFILE,
    errno.ENFILE,
    errno.ECONNRESET,
    errno.ECONNABORTED,
    errno.EAGAIN,
    errno.EWOULDBLOCK,
    errno.ETIMEDOUT,
})

TIMEOUT_ERRNOS: FrozenSet[int] = frozenset({
    errno.EAGAIN,
    errno.EWOULDBLOCK,
    errno.ETIMEDOUT,
})

TEMPORARY_TYPES: ExceptionTypes = (
    InterruptedError,
    BlockingIOError,
    ConnectionResetError,
    ConnectionAbortedError,
    TimeoutError,
)

TIMEOUT_TYPES: ExceptionTypes = (
    TimeoutError,
    BlockingIOError,
    asyncio.TimeoutError,
    concurrent.futures.TimeoutError,
)


def _matches(
    err: Optional[BaseException],
    codes: FrozenSet[int],
    types: ExceptionTypes,
) -> bool:
    for link in iter_chain(err):
        if isinstance(link, types):
            return True
        if isinstance(link, OSError) and link.errno in codes:
            return True
    return False


def is_temporary(err: Optional[BaseException]) -> bool:
    """Report whether any link of the chain is a temporary condition."""
    return _matches(err, TEMPORARY_ERRNOS, TEMPORARY_TYPES)


def is_timeout(err: Optional[BaseException]) -> bool:
    """Report whether any link of the chain is a timeout."""
    return _matches(err, TIMEOUT_ERRNOS, TIMEOUT_TYPES)
