# rterror/callsite.py
"""
Call-site capture.

A :class:`CallSite` is the file/line/function/package location recorded
when an error value is constructed.  Exactly one frame is read; this is
not a traceback.

Naming follows Python's module system rather than file paths:

    function       = "<module>.<qualname>"     e.g. "app.db.Pool.acquire"
    package        = "<module>"                e.g. "app.db"
    function_base  = "<qualname>"              e.g. "Pool.acquire"
    package_base   = last dotted segment       e.g. "db"
"""

from __future__ import annotations

import inspect
import os
from dataclasses import dataclass
from types import FrameType
from typing import Any, Optional

from rterror.config import settings


@dataclass(frozen=True)
class CallSite:
    """Immutable location of the code that created an error."""

    file: str = ""
    line: int = 0
    function: str = ""
    package: str = ""

    @classmethod
    def from_frame(cls, frame: FrameType) -> "CallSite":
        """Build a call site from a live frame object."""
        code = frame.f_code
        module = frame.f_globals.get("__name__") or ""
        # co_qualname exists from 3.11 on; older interpreters only know co_name
        qualname = getattr(code, "co_qualname", code.co_name)
        function = f"{module}.{qualname}" if module else qualname
        return cls(
            file=os.path.abspath(code.co_filename) if code.co_filename else "",
            line=frame.f_lineno or 0,
            function=function,
            package=module,
        )

    @property
    def file_base(self) -> str:
        return os.path.basename(self.file)

    @property
    def function_base(self) -> str:
        if self.package and self.function.startswith(self.package + "."):
            return self.function[len(self.package) + 1:]
        return self.function

    @property
    def package_base(self) -> str:
        return self.package.rsplit(".", 1)[-1]

    @property
    def known(self) -> bool:
        return bool(self.file or self.function)

    def __str__(self) -> str:
        if not self.known:
            return "<unknown call site>"
        return f"{self.file}:{self.line} ({self.function})"


UNKNOWN_CALL_SITE = CallSite()


def capture(skip: int = 0, owner: Any = None) -> CallSite:
    """Return the call site of the caller of the function calling this.

    Args:
        skip: extra frames to ascend, so that helpers built on top of a
            constructor can report their own caller.
        owner: when given, frames of methods running on *owner* (their
            ``self`` is *owner*) are skipped as well.  Subclass
            ``__init__`` chains are transparent this way.

    Never raises; returns :data:`UNKNOWN_CALL_SITE` when the interpreter
    does not expose frames or the stack is too shallow.
    """
    if not settings.capture_call_site:
        return UNKNOWN_CALL_SITE

    frame: Optional[FrameType] = inspect.currentframe()
    try:
        # this frame, then the frame that asked for its caller
        for _ in range(max(skip, 0) + 2):
            if frame is None:
                return UNKNOWN_CALL_SITE
            frame = frame.f_back

        if owner is not None:
            while frame is not None and frame.f_locals.get("self") is owner:
                frame = frame.f_back

        if frame is None:
            return UNKNOWN_CALL_SITE
        return CallSite.from_frame(frame)
    finally:
        del frame
