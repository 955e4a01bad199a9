"""Markup serialization for htmlbind trees.

Text and attribute values are written out exactly as stored: nothing is
escaped here, whatever is in the tree is assumed to be markup-safe already.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import CDATA, COMMENT, DIRECTIVE, ELEMENT_TYPES, SELF_CLOSING_TAGS, TEXT

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .node import Element, Node


def serialize_start_tag(name: str, attrs: dict[str, str] | None) -> str:
    parts: list[str] = ["<", name]
    for key, value in (attrs or {}).items():
        parts.extend([" ", key, '="', value, '"'])
    return "".join(parts)


def serialize_end_tag(name: str) -> str:
    return f"</{name}>"


def to_html(nodes: Iterable[Node], xhtml_mode: bool = False) -> str:
    """Convert a list of root nodes (or any node sequence) to markup."""
    parts: list[str] = []
    for node in nodes:
        _node_to_html(node, parts, xhtml_mode)
    return "".join(parts)


def _node_to_html(node: Node, parts: list[str], xhtml_mode: bool) -> None:
    node_type = node.type

    if node_type == TEXT:
        parts.append(node.data)
        return

    if node_type == COMMENT:
        parts.append(f"<!--{node.data}-->")
        return

    if node_type in (DIRECTIVE, CDATA):
        parts.append(f"<{node.data}>")
        return

    if node_type in ELEMENT_TYPES:
        _element_to_html(node, parts, xhtml_mode)
        return

    msg = f"Cannot serialize node of type {node_type!r}"
    raise TypeError(msg)


def _element_to_html(element: Element, parts: list[str], xhtml_mode: bool) -> None:
    name = element.name
    parts.append(serialize_start_tag(name, element.attrs))

    if element.children:
        parts.append(">")
        for child in element.children:
            _node_to_html(child, parts, xhtml_mode)
        parts.append(serialize_end_tag(name))
    elif name in SELF_CLOSING_TAGS:
        parts.append(" />" if xhtml_mode else ">")
    else:
        parts.append(">")
        parts.append(serialize_end_tag(name))
