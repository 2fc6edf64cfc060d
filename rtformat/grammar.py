# rtformat/grammar.py
"""
Replacement-field grammar (Parsimonious PEG) and template compiler.

A template is literal text interleaved with replacement fields::

    "{.file_base | cyan}:{.line}: {p1} - {0:>4} {name} {{literal}}"

Field syntax
────────────
    field      = "{" reference? (":" spec)? ("|" function)* "}"
    reference  = ".attr.path"   attribute of the subject / first argument
               | "N" or "pN"    positional argument N
               | "name"         keyword argument
               | (empty)        next positional argument

``{{`` and ``}}`` stand for literal braces.  Anything else containing an
unmatched brace is a :class:`~rtformat.errors.TemplateSyntaxError`.

Compiled templates are cached, so repeated expansion of the same
template (the common case for error messages) only parses once.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union

from parsimonious.exceptions import ParseError, VisitationError
from parsimonious.grammar import Grammar
from parsimonious.nodes import Node, NodeVisitor

from rtformat.errors import TemplateSyntaxError


# ═══════════════════════════════════════════════════════════════════
#  GRAMMAR
# ═══════════════════════════════════════════════════════════════════

TEMPLATE_GRAMMAR = Grammar(r'''
    template    = part*
    part        = escape / field / text

    escape      = "{{" / "}}"
    text        = ~r"[^{}]+"

    field       = "{" _ reference? _ spec? _ pipe* "}"
    reference   = attribute / index / name
    attribute   = ~r"(\.[A-Za-z_][A-Za-z0-9_]*)+"
    index       = ~r"p?[0-9]+(?![A-Za-z0-9_])"
    name        = ~r"[A-Za-z_][A-Za-z0-9_]*"
    spec        = ":" ~r"[^|}]*"
    pipe        = "|" _ function _
    function    = ~r"[A-Za-z_][A-Za-z0-9_]*"

    _           = ~r"[ \t]*"
''')


# ═══════════════════════════════════════════════════════════════════
#  COMPILED TEMPLATE PARTS
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Reference:
    """What a replacement field points at."""

    kind: str  # "attribute", "index", "name" or "auto"
    index: int = 0
    name: str = ""
    path: Tuple[str, ...] = ()

    def __str__(self) -> str:
        if self.kind == "attribute":
            return "." + ".".join(self.path)
        if self.kind == "index":
            return f"p{self.index}"
        if self.kind == "name":
            return self.name
        return ""


AUTO = Reference(kind="auto")


@dataclass(frozen=True)
class Field:
    """A single ``{...}`` replacement field."""

    reference: Reference
    spec: str = ""
    pipes: Tuple[str, ...] = ()
    source: str = ""


Part = Union[str, Field]


# ═══════════════════════════════════════════════════════════════════
#  VISITOR (parse tree → parts)
# ═══════════════════════════════════════════════════════════════════

def _optional(value: Any) -> Optional[Any]:
    """Unpack the visited value of a ``rule?`` expression."""
    if isinstance(value, list):
        return value[0] if value else None
    return None


def _many(value: Any) -> List[Any]:
    """Unpack the visited value of a ``rule*`` expression."""
    return value if isinstance(value, list) else []


class TemplateBuilder(NodeVisitor):
    """Transforms the Parsimonious parse tree into a tuple of parts."""

    grammar = TEMPLATE_GRAMMAR

    def generic_visit(self, node: Node, visited_children: List[Any]) -> Any:
        return visited_children or node

    def visit_template(self, node: Node, visited_children: List[Any]) -> Tuple[Part, ...]:
        parts: List[Part] = []
        for part in visited_children:
            # merge adjacent literal runs ("a{{b" → "a{b")
            if isinstance(part, str) and parts and isinstance(parts[-1], str):
                parts[-1] += part
            else:
                parts.append(part)
        return tuple(parts)

    def visit_part(self, node: Node, visited_children: List[Any]) -> Part:
        return visited_children[0]

    def visit_escape(self, node: Node, visited_children: List[Any]) -> str:
        return node.text[0]

    def visit_text(self, node: Node, visited_children: List[Any]) -> str:
        return node.text

    def visit_field(self, node: Node, visited_children: List[Any]) -> Field:
        _, _, reference, _, spec, _, pipes, _ = visited_children
        return Field(
            reference=_optional(reference) or AUTO,
            spec=_optional(spec) or "",
            pipes=tuple(_many(pipes)),
            source=node.text,
        )

    def visit_reference(self, node: Node, visited_children: List[Any]) -> Reference:
        return visited_children[0]

    def visit_attribute(self, node: Node, visited_children: List[Any]) -> Reference:
        return Reference(kind="attribute", path=tuple(node.text[1:].split(".")))

    def visit_index(self, node: Node, visited_children: List[Any]) -> Reference:
        return Reference(kind="index", index=int(node.text.lstrip("p")))

    def visit_name(self, node: Node, visited_children: List[Any]) -> Reference:
        return Reference(kind="name", name=node.text)

    def visit_spec(self, node: Node, visited_children: List[Any]) -> str:
        return node.text[1:]

    def visit_pipe(self, node: Node, visited_children: List[Any]) -> str:
        return visited_children[2]

    def visit_function(self, node: Node, visited_children: List[Any]) -> str:
        return node.text


@functools.lru_cache(maxsize=512)
def compile_template(template: str) -> Tuple[Part, ...]:
    """Parse *template* into literal strings and :class:`Field` parts.

    Raises:
        TemplateSyntaxError: if the template is malformed.
    """
    try:
        return TemplateBuilder().parse(template)
    except ParseError as exc:
        raise TemplateSyntaxError(
            "malformed replacement field",
            template=template,
            position=exc.pos,
        ) from exc
    except VisitationError as exc:
        raise TemplateSyntaxError(str(exc), template=template) from exc
