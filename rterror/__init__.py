"""rterror — runtime errors that remember where they were created.

An :class:`RTError` records the file, line, function and package of the
code that constructed it, expands a templated message lazily, and can
wrap a cause so the whole chain renders as an indented tree::

    >>> from rterror import RTError
    >>> err = RTError("open {p0}", "conf.yml").wrap(FileNotFoundError("gone"))
    >>> print(err)                                   # doctest: +SKIP
    app.py:12:app.load(): open conf.yml
    `--gone

Submodules
----------
error
    ``RTError`` plus the ``new`` / ``new_skip_caller`` constructors.
callsite
    ``CallSite`` value and the frame capturer.
chain
    ``Traceable`` capability, ``unwrap`` / ``iter_chain`` /
    ``is_in_chain`` / ``find_in_chain`` / ``render_chain``.
classify
    ``is_temporary`` / ``is_timeout`` predicates over a chain.
config
    Process-wide ``settings`` (default output template, indent marker,
    call-site capture switch).

Templates are expanded by the sibling :mod:`rtformat` package.
"""

from __future__ import annotations

from rterror.callsite import UNKNOWN_CALL_SITE, CallSite, capture
from rterror.chain import (
    Traceable,
    find_in_chain,
    is_in_chain,
    iter_chain,
    render_chain,
    unwrap,
)
from rterror.classify import is_temporary, is_timeout
from rterror.config import (
    DEFAULT_FORMAT,
    DEFAULT_INDENT,
    PLAIN_FORMAT,
    Settings,
    configure,
    get_default_format,
    reset_default_format,
    set_default_format,
    settings,
)
from rterror.error import SKIP_CALL, RTError, new, new_skip_caller

__version__: str = "0.1.0"
__all__: list[str] = [
    "__version__",
    "CallSite",
    "DEFAULT_FORMAT",
    "DEFAULT_INDENT",
    "PLAIN_FORMAT",
    "RTError",
    "SKIP_CALL",
    "Settings",
    "Traceable",
    "UNKNOWN_CALL_SITE",
    "capture",
    "configure",
    "find_in_chain",
    "get_default_format",
    "is_in_chain",
    "is_temporary",
    "is_timeout",
    "iter_chain",
    "new",
    "new_skip_caller",
    "render_chain",
    "reset_default_format",
    "set_default_format",
    "settings",
    "unwrap",
]
