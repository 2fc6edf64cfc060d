# rterror/chain.py
"""
Cause-chain traversal and rendering.

A chain is the sequence ``err, unwrap(err), unwrap(unwrap(err)), ...``.
:class:`Traceable` errors decide their own next link through
``unwrap()``; any other exception continues through ``__cause__`` (the
link set by ``raise ... from ...``).  Traversal ends at ``None`` or when
a link repeats.

Rendered chains look like::

    <error>
    `--<cause>
       `--<cause of cause>
          `--<root cause>
"""

from __future__ import annotations

import abc
from typing import Iterator, List, Optional, Tuple, Type, Union

from rterror.config import settings

ExceptionTypes = Union[Type[BaseException], Tuple[Type[BaseException], ...]]


class Traceable(abc.ABC):
    """Capability of errors that carry their own cause and rendering."""

    @abc.abstractmethod
    def unwrap(self) -> Optional[BaseException]:
        """Return the next link of the chain, or ``None``."""

    @abc.abstractmethod
    def render(self) -> str:
        """Return the single-line rendering, without any causes."""


def unwrap(err: object) -> Optional[BaseException]:
    """Return the link that follows *err*, or ``None``."""
    if isinstance(err, Traceable):
        return err.unwrap()
    if isinstance(err, BaseException):
        return err.__cause__
    return None


def iter_chain(err: Optional[BaseException]) -> Iterator[BaseException]:
    """Yield *err* and every link after it, most recent first."""
    seen = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        err = unwrap(err)


def is_in_chain(err: Optional[BaseException], target: BaseException) -> bool:
    """Report whether *target* itself is *err* or any of its causes."""
    return any(link is target for link in iter_chain(err))


def find_in_chain(
    err: Optional[BaseException], types: ExceptionTypes
) -> Optional[BaseException]:
    """Return the first link that is an instance of *types*."""
    for link in iter_chain(err):
        if isinstance(link, types):
            return link
    return None


def render_link(err: BaseException) -> str:
    """Single-line rendering of one link."""
    if isinstance(err, Traceable):
        return err.render()
    return str(err) or type(err).__name__


def render_chain(err: BaseException, indent: Optional[str] = None) -> str:
    """Render *err* and its causes as an indented tree."""
    marker = settings.indent if indent is None else indent
    lines: List[str] = [render_link(err)]
    links = iter_chain(err)
    next(links)
    for depth, link in enumerate(links):
        lines.append(" " * (depth * len(marker)) + marker + render_link(link))
    return "\n".join(lines)
