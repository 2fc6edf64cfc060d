# rtformat/formatter.py
"""
Template expansion against positional/keyword arguments or an object.

Usage::

    from rtformat import Formatter

    f = Formatter()
    f.format("Error message {p1} - {p0}", 3, "foo")   # 'Error message foo - 3'
    f.format("retry {} of {}", 1, 5)                  # 'retry 1 of 5'
    f.format("unused args", 1, 2)                     # 'unused args 1 2'
    f.format_object("{.path | base}:{.line}", site)   # 'main.py:12'

Pipe functions transform a value before it is written out.  Besides the
text helpers registered below, every termcolor colour, highlight and
attribute name is available as a pipe (``{.line | magenta | bold}``).
"""

from __future__ import annotations

import builtins
import os
import re
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Set

from termcolor import ATTRIBUTES, COLORS, HIGHLIGHTS, colored

from rtformat.errors import (
    FieldFormatError,
    FieldLookupError,
    FormatError,
    UnknownFunctionError,
)
from rtformat.grammar import Field, Reference, compile_template

PipeFunction = Callable[[Any], Any]

_MISSING = object()
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def snake_case(name: str) -> str:
    """``FileBase`` → ``file_base``; names already in snake_case are unchanged."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


# ───────────────────────────────────────────────────────────────────
#  Built-in pipe functions
# ───────────────────────────────────────────────────────────────────

def _base(value: Any) -> str:
    return os.path.basename(str(value).rstrip("/\\")) or str(value)


def _dir(value: Any) -> str:
    return os.path.dirname(str(value))


def _tail(value: Any) -> str:
    return str(value).rsplit(".", 1)[-1]


def _color(name: str) -> PipeFunction:
    return lambda value: colored(str(value), name)


def _highlight(name: str) -> PipeFunction:
    return lambda value: colored(str(value), on_color=name)


def _attribute(name: str) -> PipeFunction:
    return lambda value: colored(str(value), attrs=[name])


def default_functions() -> Dict[str, PipeFunction]:
    """Return a fresh table of the built-in pipe functions."""
    functions: Dict[str, PipeFunction] = {
        "base": _base,
        "dir": _dir,
        "tail": _tail,
        "upper": lambda v: str(v).upper(),
        "lower": lambda v: str(v).lower(),
        "title": lambda v: str(v).title(),
        "strip": lambda v: str(v).strip(),
        "repr": repr,
        "quote": lambda v: f"'{v}'",
    }
    functions.update({name: _color(name) for name in COLORS})
    functions.update({name: _highlight(name) for name in HIGHLIGHTS})
    functions.update({name: _attribute(name) for name in ATTRIBUTES})
    return functions


# ═══════════════════════════════════════════════════════════════════
#  FORMATTER
# ═══════════════════════════════════════════════════════════════════

class _Expansion:
    """Per-call bookkeeping: auto index cursor and used positionals."""

    __slots__ = ("template", "args", "kwargs", "subject", "cursor", "used")

    def __init__(
        self,
        template: str,
        args: Sequence[Any],
        kwargs: Mapping[str, Any],
        subject: Any,
    ) -> None:
        self.template = template
        self.args = args
        self.kwargs = kwargs
        self.subject = subject
        self.cursor = 0
        self.used: Set[int] = set()

    def positional(self, index: int, field: Field) -> Any:
        if index >= len(self.args):
            raise FieldLookupError(
                f"positional argument {index} out of range "
                f"({len(self.args)} given)",
                field=field.source,
                template=self.template,
            )
        self.used.add(index)
        return self.args[index]


class Formatter:
    """Expands ``{...}`` replacement fields.

    Parameters
    ----------
    functions:
        Extra pipe functions, merged over the built-in table.
    append_unused:
        Append positional arguments the template never referenced,
        separated by single spaces.
    """

    def __init__(
        self,
        functions: Optional[Mapping[str, PipeFunction]] = None,
        append_unused: bool = True,
    ) -> None:
        self._functions = default_functions()
        if functions:
            self._functions.update(functions)
        self.append_unused = append_unused

    def __repr__(self) -> str:
        return f"Formatter(functions={len(self._functions)}, append_unused={self.append_unused})"

    # -------- pipe registry --------

    def register(self, name: str, function: PipeFunction) -> "Formatter":
        """Register (or replace) a pipe function."""
        self._functions[name] = function
        return self

    @property
    def functions(self) -> Iterable[str]:
        return sorted(self._functions)

    # -------- expansion --------

    def format(self, template: str, *args: Any, **kwargs: Any) -> str:
        """Expand *template* against positional and keyword arguments.

        Raises:
            FormatError: on malformed templates or unresolvable fields.
        """
        state = _Expansion(template, args, kwargs, _MISSING)
        result = self._expand(state)
        if self.append_unused:
            extra = [
                self._text(arg, None, state)
                for index, arg in enumerate(args)
                if index not in state.used
            ]
            if extra:
                result = " ".join([result, *extra]) if result else " ".join(extra)
        return result

    def format_object(self, template: str, subject: Any) -> str:
        """Expand *template* against the attributes of *subject*.

        Raises:
            FormatError: on malformed templates or unresolvable fields.
        """
        return self._expand(_Expansion(template, (), {}, subject))

    def _expand(self, state: _Expansion) -> str:
        chunks: List[str] = []
        for part in compile_template(state.template):
            if isinstance(part, str):
                chunks.append(part)
                continue
            value = self._resolve(part, state)
            if part.spec:
                try:
                    value = builtins.format(value, part.spec)
                except Exception as exc:
                    raise FieldFormatError(
                        f"invalid format spec {part.spec!r}: {exc}",
                        field=part.source,
                        template=state.template,
                    ) from exc
            for name in part.pipes:
                value = self._pipe(name, value, part, state)
            chunks.append(self._text(value, part, state))
        return "".join(chunks)

    def _resolve(self, field: Field, state: _Expansion) -> Any:
        ref: Reference = field.reference
        if ref.kind == "auto":
            index = state.cursor
            state.cursor += 1
            return state.positional(index, field)
        if ref.kind == "index":
            return state.positional(ref.index, field)
        if ref.kind == "name":
            if ref.name not in state.kwargs:
                raise FieldLookupError(
                    f"no argument named {ref.name!r}",
                    field=field.source,
                    template=state.template,
                )
            return state.kwargs[ref.name]

        target = state.subject
        if target is _MISSING:
            target = state.positional(0, field)
        for name in ref.path:
            target = self._lookup(target, name, field, state)
        return target

    def _lookup(self, target: Any, name: str, field: Field, state: _Expansion) -> Any:
        candidates = [name]
        alternative = snake_case(name)
        if alternative != name:
            candidates.append(alternative)

        for candidate in candidates:
            if isinstance(target, Mapping):
                if candidate in target:
                    return target[candidate]
                continue
            try:
                return getattr(target, candidate)
            except AttributeError:
                continue
            except Exception as exc:
                raise FieldLookupError(
                    f"reading {candidate!r} failed: {exc}",
                    field=field.source,
                    template=state.template,
                ) from exc

        raise FieldLookupError(
            f"{type(target).__name__} has no field {name!r}",
            field=field.source,
            template=state.template,
        )

    def _pipe(self, name: str, value: Any, field: Field, state: _Expansion) -> Any:
        function = self._functions.get(name)
        if function is None:
            raise UnknownFunctionError(
                f"unknown pipe function {name!r}",
                field=field.source,
                template=state.template,
            )
        try:
            return function(value)
        except FormatError:
            raise
        except Exception as exc:
            raise FieldFormatError(
                f"pipe function {name!r} failed: {exc}",
                field=field.source,
                template=state.template,
            ) from exc

    @staticmethod
    def _text(value: Any, field: Optional[Field], state: _Expansion) -> str:
        if isinstance(value, str):
            return value
        try:
            return str(value)
        except Exception as exc:
            raise FieldFormatError(
                f"cannot convert {type(value).__name__} to text: {exc}",
                field=field.source if field else "",
                template=state.template,
            ) from exc


# ───────────────────────────────────────────────────────────────────
#  Module-level convenience
# ───────────────────────────────────────────────────────────────────

default_formatter = Formatter()


def format(template: str, *args: Any, **kwargs: Any) -> str:  # noqa: A001
    """Expand *template* with the shared default formatter."""
    return default_formatter.format(template, *args, **kwargs)


def format_object(template: str, subject: Any) -> str:
    """Expand *template* against *subject* with the shared default formatter."""
    return default_formatter.format_object(template, subject)
