"""Logic-less template engine for shader sources.

Grammar
-------
``{{#key}}...{{/key}}``
    Section, rendered iff the flag bound to ``key`` is true.
``{{^key}}...{{/key}}``
    Inverted section, rendered iff the flag bound to ``key`` is false.
``{{key}}``
    Replaced by the text of the scalar bound to ``key``.

The template is parsed once into a tree of :class:`Text`, :class:`Variable` and
:class:`Section` nodes; rendering is a single walk over that tree.

Malformed or unknown input is kept as literal text:

- an opening marker without a matching closing marker for the same key,
- a closing marker without an opening one,
- sections and variables whose key has no binding (their markers are kept, inner
  sections with known keys are still rendered).

Sections of different keys nest freely. Nesting a section inside another one with the
same key is not supported; the current parser pairs each closing marker with the
innermost open section of that key, but this is not guaranteed.

Crossed sections of different keys (``{{#a}}..{{#b}}..{{/a}}..{{/b}}``) are not
supported either: the inner opening marker is unmatched when ``a`` closes, so it becomes
literal text and the later ``{{/b}}`` is a stray closing marker, also literal.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Mapping, Union

_TAG = re.compile(r"\{\{([#^/]?)([A-Za-z_][A-Za-z0-9_.]*)\}\}")


@dataclass(frozen=True, slots=True)
class Text:
    text: str


@dataclass(frozen=True, slots=True)
class Variable:
    key: str
    source: str


@dataclass(frozen=True, slots=True)
class Section:
    key: str
    inverted: bool
    children: tuple[Node, ...]
    open_source: str
    close_source: str


Node = Union[Text, Variable, Section]


class _OpenSection:
    """Section still waiting for its closing marker during parsing."""

    __slots__ = ("key", "inverted", "source", "children")

    def __init__(self, key: str, inverted: bool, source: str) -> None:
        self.key = key
        self.inverted = inverted
        self.source = source
        self.children: list[Node] = []


def _append_text(nodes: list[Node], text: str) -> None:
    if not text:
        return
    if nodes and isinstance(nodes[-1], Text):
        nodes[-1] = Text(nodes[-1].text + text)
    else:
        nodes.append(Text(text))


def _unwind_as_literal(root: list[Node], stack: list[_OpenSection], depth: int) -> None:
    """Turn every open section above ``depth`` back into literal text."""
    while len(stack) > depth:
        pending = stack.pop()
        parent = stack[-1].children if stack else root
        _append_text(parent, pending.source)
        for child in pending.children:
            if isinstance(child, Text):
                _append_text(parent, child.text)
            else:
                parent.append(child)


@dataclass(frozen=True, slots=True)
class Template:
    nodes: tuple[Node, ...]

    def render(self, flags: Mapping[str, bool], scalars: Mapping[str, Any]) -> str:
        out: list[str] = []
        _render_nodes(self.nodes, flags, scalars, out)
        return "".join(out)


def _render_nodes(
        nodes: tuple[Node, ...],
        flags: Mapping[str, bool],
        scalars: Mapping[str, Any],
        out: list[str],
) -> None:
    for node in nodes:
        if isinstance(node, Text):
            out.append(node.text)
        elif isinstance(node, Variable):
            if node.key in scalars:
                out.append(format_scalar(scalars[node.key]))
            else:
                out.append(node.source)
        elif node.key not in flags:
            out.append(node.open_source)
            _render_nodes(node.children, flags, scalars, out)
            out.append(node.close_source)
        elif bool(flags[node.key]) != node.inverted:
            _render_nodes(node.children, flags, scalars, out)


def format_scalar(value: Any) -> str:
    """Shader-language text for a scalar value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return repr(value)
    return str(value)


@lru_cache(maxsize=16)
def parse_template(text: str) -> Template:
    """Parse template text into an immutable node tree."""
    root: list[Node] = []
    stack: list[_OpenSection] = []
    pos = 0

    for match in _TAG.finditer(text):
        current = stack[-1].children if stack else root
        _append_text(current, text[pos:match.start()])
        pos = match.end()

        sigil, key, source = match.group(1), match.group(2), match.group(0)

        if sigil in ("#", "^"):
            stack.append(_OpenSection(key, sigil == "^", source))
            continue

        if not sigil:
            current.append(Variable(key, source))
            continue

        # closing marker: pair with the innermost open section of the same key
        depth = next((i for i in range(len(stack) - 1, -1, -1) if stack[i].key == key), None)
        if depth is None:
            _append_text(current, source)
            continue

        _unwind_as_literal(root, stack, depth + 1)
        opened = stack.pop()
        parent = stack[-1].children if stack else root
        parent.append(
            Section(
                key=key,
                inverted=opened.inverted,
                children=tuple(opened.children),
                open_source=opened.source,
                close_source=source,
            ),
        )

    current = stack[-1].children if stack else root
    _append_text(current, text[pos:])
    _unwind_as_literal(root, stack, 0)
    return Template(tuple(root))


def render_template(text: str, flags: Mapping[str, bool], scalars: Mapping[str, Any]) -> str:
    return parse_template(text).render(flags, scalars)
