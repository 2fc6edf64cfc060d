"""rtformat — "replacement field" template expansion.

Templates use curly-brace replacement fields that are resolved against
positional arguments, keyword arguments or the attributes of a subject
object, optionally piped through named transformations::

    >>> from rtformat import format
    >>> format("Error message {p1} - {p0}", 3, "foo")
    'Error message foo - 3'

Submodules
----------
grammar
    Parsimonious PEG grammar for replacement fields and the cached
    template compiler.
formatter
    ``Formatter`` (expansion engine, pipe-function registry) and the
    module-level ``format`` / ``format_object`` helpers.
errors
    ``FormatError`` and its subclasses.  Every expansion failure is a
    ``FormatError``.
"""

from __future__ import annotations

from rtformat.errors import (
    FieldFormatError,
    FieldLookupError,
    FormatError,
    TemplateSyntaxError,
    UnknownFunctionError,
)
from rtformat.formatter import (
    Formatter,
    default_formatter,
    default_functions,
    format,
    format_object,
    snake_case,
)
from rtformat.grammar import Field, Reference, compile_template

__version__: str = "0.1.0"
__all__: list[str] = [
    "__version__",
    "Field",
    "FieldFormatError",
    "FieldLookupError",
    "FormatError",
    "Formatter",
    "Reference",
    "TemplateSyntaxError",
    "UnknownFunctionError",
    "compile_template",
    "default_formatter",
    "default_functions",
    "format",
    "format_object",
    "snake_case",
]
