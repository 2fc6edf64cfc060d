# rtformat/errors.py
"""
Exception hierarchy for template expansion.

┌──────────────────────────────────────────────────────────────┐
│  FormatError (base)                                          │
│  ├── TemplateSyntaxError   - malformed template text         │
│  ├── FieldLookupError      - unresolved field / index        │
│  ├── UnknownFunctionError  - pipe names no registered fn     │
│  └── FieldFormatError      - format spec, pipe or str failed │
└──────────────────────────────────────────────────────────────┘

Every failure raised by :mod:`rtformat` is a :class:`FormatError`, so
callers that must never crash only need a single ``except`` clause.
"""

from __future__ import annotations

from typing import Optional


class FormatError(Exception):
    """Base exception for all template expansion failures."""

    def __init__(
        self,
        message: str,
        template: str = "",
        position: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.template = template
        self.position = position

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at offset {self.position} in {self.template!r})"


class TemplateSyntaxError(FormatError):
    """The template text does not follow the replacement-field grammar."""


class FieldLookupError(FormatError):
    """A replacement field references something that does not exist."""

    def __init__(self, message: str, field: str = "", template: str = "") -> None:
        super().__init__(message, template=template)
        self.field = field


class UnknownFunctionError(FieldLookupError):
    """A pipe names a function that is not registered on the formatter."""


class FieldFormatError(FormatError):
    """A resolved value could not be converted to text."""

    def __init__(self, message: str, field: str = "", template: str = "") -> None:
        super().__init__(message, template=template)
        self.field = field
