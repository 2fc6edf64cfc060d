# rterror/error.py
"""
Runtime error value with call site, templated message and cause chain.

Usage::

    from rterror import RTError

    def load(path):
        try:
            return open(path).read()
        except OSError as exc:
            raise RTError("cannot load {p0}", path).wrap(exc)

``str(err)`` renders the whole chain::

    loader.py:5:loader.load(): cannot load conf.yml
    `--[Errno 2] No such file or directory: 'conf.yml'

The message template and the output template are both expanded lazily
by an :class:`rtformat.Formatter`.  Expansion never raises: a template
that cannot be expanded renders as the raw message template.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Tuple

from rtformat import FormatError, Formatter, default_formatter

from rterror.callsite import CallSite, capture
from rterror.chain import Traceable, is_in_chain, render_chain
from rterror.config import settings

logger = logging.getLogger(__name__)

SKIP_CALL: int = 1


class RTError(Traceable, Exception):
    """
    An exception that remembers where it was created.

    Positional *arguments* are substituted into the *message* template
    (``{}``, ``{0}`` or ``{p0}``); arguments the template does not
    reference are appended, space separated.
    """

    def __init__(self, message: str = "", *arguments: Any) -> None:
        super().__init__(message, *arguments)
        self._initialize(message, arguments, 0)

    @classmethod
    def new_skip_caller(cls, skip: int, message: str = "", *arguments: Any) -> "RTError":
        """Create an error attributed *skip* frames above the caller.

        ``skip=0`` identifies the caller of this method; wrapper helpers
        pass ``1`` to report their own caller instead.  A subclass
        ``__init__`` is not run on this path.
        """
        err = cls.__new__(cls)
        Exception.__init__(err, message, *arguments)
        err._initialize(message, arguments, skip)
        return err

    def _initialize(self, message: str, arguments: Tuple[Any, ...], skip: int) -> None:
        self._message = message
        self._arguments = arguments
        self._format = settings.format
        self._formatter: Formatter = default_formatter
        self._cause: Optional[BaseException] = None
        # skip this frame and the public constructor that called it
        self._call_site = capture(skip + SKIP_CALL, owner=self)

    # -------- accessors --------

    @property
    def raw_message(self) -> str:
        """The unexpanded message template."""
        return self._message

    @property
    def arguments(self) -> Tuple[Any, ...]:
        return self._arguments

    @property
    def call_site(self) -> CallSite:
        return self._call_site

    @property
    def line(self) -> int:
        return self._call_site.line

    @property
    def file(self) -> str:
        return self._call_site.file

    @property
    def file_base(self) -> str:
        return self._call_site.file_base

    @property
    def function(self) -> str:
        return self._call_site.function

    @property
    def function_base(self) -> str:
        return self._call_site.function_base

    @property
    def package(self) -> str:
        return self._call_site.package

    @property
    def package_base(self) -> str:
        return self._call_site.package_base

    # -------- output template / formatter --------

    @property
    def format(self) -> str:
        return self._format

    def set_format(self, template: str) -> "RTError":
        self._format = template
        return self

    def get_format(self) -> str:
        return self._format

    def reset_format(self) -> "RTError":
        """Restore the process-wide default output template."""
        self._format = settings.format
        return self

    @property
    def formatter(self) -> Formatter:
        return self._formatter

    def set_formatter(self, formatter: Formatter) -> "RTError":
        self._formatter = formatter
        return self

    def get_formatter(self) -> Formatter:
        return self._formatter

    # -------- rendering --------

    @property
    def message(self) -> str:
        """The message template expanded against the arguments."""
        try:
            return self._formatter.format(self._message, *self._arguments)
        except FormatError as exc:
            logger.debug("message template not expanded (%s): %s", self._call_site, exc)
            return self._message

    def render(self) -> str:
        """The output template expanded against this error, no causes."""
        try:
            return self._formatter.format_object(self._format, self)
        except FormatError as exc:
            logger.debug("output template not expanded (%s): %s", self._call_site, exc)
            return self._message

    top_error = render

    def __str__(self) -> str:
        return render_chain(self)

    def __repr__(self) -> str:
        params = ", ".join(repr(v) for v in (self._message, *self._arguments))
        return f"{type(self).__name__}({params})"

    # -------- pickling --------

    def __reduce__(self) -> Tuple[Any, ...]:
        state = dict(self.__dict__)
        # the shared formatter holds closures; it is reattached on load
        if state.get("_formatter") is default_formatter:
            del state["_formatter"]
        state["__cause__"] = self.__cause__
        return _rebuild, (type(self), self.args), state

    def __setstate__(self, state: Dict[str, Any]) -> None:
        state = dict(state)
        self.__cause__ = state.pop("__cause__", None)
        self.__dict__.update(state)
        self.__dict__.setdefault("_formatter", default_formatter)

    # -------- chaining --------

    def wrap(self, cause: Optional[BaseException]) -> "RTError":
        """Attach *cause* as the next link of the chain (``None`` clears it)."""
        if cause is not None and not isinstance(cause, BaseException):
            raise TypeError(
                f"cause must be an exception, not {type(cause).__name__}"
            )
        self._cause = cause
        self.__cause__ = cause
        return self

    def unwrap(self) -> Optional[BaseException]:
        """The next link of the chain.

        Precedence: the cause given to :meth:`wrap`, then the first
        exception among the arguments, then the ``raise ... from`` cause.
        """
        if self._cause is not None:
            return self._cause
        for argument in self._arguments:
            if isinstance(argument, BaseException):
                return argument
        return self.__cause__

    def is_in_chain(self, target: BaseException) -> bool:
        return is_in_chain(self, target)

    # -------- serialization --------

    def marshal_text(self) -> str:
        return self.render()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "line": self.line,
            "file": self.file,
            "function": self.function,
            "message": self.message,
            "arguments": list(self._arguments),
        }

    def marshal_json(self, **kwargs: Any) -> str:
        """JSON object with ``line``, ``file``, ``function``, ``message`` and ``arguments``."""
        kwargs.setdefault("default", _json_default)
        return json.dumps(self.to_dict(), **kwargs)


def _rebuild(cls: type, args: Tuple[Any, ...]) -> "RTError":
    """Recreate an instance without running ``__init__`` or frame capture."""
    err = cls.__new__(cls)
    Exception.__init__(err, *args)
    return err


def _json_default(value: Any) -> Any:
    if isinstance(value, RTError):
        return value.to_dict()
    if isinstance(value, (set, frozenset)):
        return list(value)
    return str(value)


def new(message: str = "", *arguments: Any) -> RTError:
    """Create an :class:`RTError` attributed to the caller."""
    return RTError.new_skip_caller(SKIP_CALL, message, *arguments)


def new_skip_caller(skip: int, message: str = "", *arguments: Any) -> RTError:
    """Create an :class:`RTError` attributed *skip* frames above the caller."""
    return RTError.new_skip_caller(skip + SKIP_CALL, message, *arguments)
