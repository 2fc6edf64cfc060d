# rterror/config.py
"""
Process-wide settings for error rendering.

The single :data:`settings` instance is built from the environment at
import time and read whenever an error is constructed or rendered.

Environment
───────────
  RTERROR_FORMAT       default output template for new errors
  RTERROR_PLAIN        any non-empty value selects :data:`PLAIN_FORMAT`
  RTERROR_INDENT       marker placed before each wrapped cause
  RTERROR_NO_CALLSITE  any non-empty value disables frame capture

Colour output additionally honours ``NO_COLOR`` / ``FORCE_COLOR`` through
termcolor.

Settings are plain mutable state: change them at start-up, not while
other threads are constructing errors.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from typing import Any, List, Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_FORMAT: str = (
    "{.file_base | cyan}:{.line | magenta | bold}:"
    "{.package_base | blue}.{.function_base | blue | bold}(): {.message}"
)
PLAIN_FORMAT: str = "{.file_base}:{.line}:{.package_base}.{.function_base}(): {.message}"
DEFAULT_INDENT: str = "`--"


@dataclass
class Settings:
    """Tuning knobs for error construction and rendering."""

    format: str = DEFAULT_FORMAT
    indent: str = DEFAULT_INDENT
    capture_call_site: bool = True

    def validate(self) -> List[str]:
        """Return a list of validation warnings (empty if valid)."""
        warnings: List[str] = []
        if not self.format:
            warnings.append("format is empty; errors will render as blank lines")
        if not self.indent:
            warnings.append("indent is empty; wrapped causes will not be indented")
        elif "\n" in self.indent:
            warnings.append("indent contains a newline")
        return warnings

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        result = cls()
        if env.get("RTERROR_PLAIN"):
            result.format = PLAIN_FORMAT
        if env.get("RTERROR_FORMAT"):
            result.format = env["RTERROR_FORMAT"]
        if env.get("RTERROR_INDENT"):
            result.indent = env["RTERROR_INDENT"]
        if env.get("RTERROR_NO_CALLSITE"):
            result.capture_call_site = False
        return result


settings = Settings.from_env()


def configure(**changes: Any) -> Settings:
    """Update the process-wide :data:`settings` in place.

    Unknown keys raise ``TypeError``; validation problems are logged.
    """
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(changes) - known)
    if unknown:
        raise TypeError(f"unknown setting(s): {', '.join(unknown)}")
    for key, value in changes.items():
        setattr(settings, key, value)
    for warning in settings.validate():
        logger.warning("rterror settings: %s", warning)
    return settings


def get_default_format() -> str:
    """Return the output template given to newly constructed errors."""
    return settings.format


def set_default_format(template: str) -> None:
    """Replace the output template given to newly constructed errors."""
    configure(format=template)


def reset_default_format() -> None:
    """Restore :data:`DEFAULT_FORMAT` as the process-wide default."""
    configure(format=DEFAULT_FORMAT)
