"""Binding attribute writer.

Turns binding inserts found in attribute values and text nodes into
declarations appended to the binding attribute of an anchor element:

    value:EXPR            the `value` attribute
    attr(NAME):EXPR       any other attribute
    text:EXPR             the only child of its parent
    text(first):EXPR      first child of its parent, followed by siblings
    text(next):EXPR       the node after the anchor (its previous sibling)
    text(prev):EXPR       the node before the anchor (its next sibling, root level)
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from .constants import TAG, TEXT
from .expressions import Synthesis, split_bindings, synthesize
from .node import Element

if TYPE_CHECKING:
    from .node import Node, Text
    from .options import BindingOptions

logger = logging.getLogger(__name__)


class BindingAnchorError(ValueError):
    """A text binding has no element to hold its declaration."""

    def __init__(self, node: Node, anchor: Node | None) -> None:
        self.node = node
        self.anchor = anchor
        if anchor is None:
            message = f"No anchor element for text binding {node!r}"
        else:
            message = f"Text binding {node!r} would anchor on non-element {anchor!r}"
        super().__init__(message)


def text_anchor(node: Node) -> Node | None:
    """Node holding a text binding: previous sibling, else parent, else next sibling."""
    return node.previous_sibling or node.parent or node.next_sibling


class BindingWriter:
    __slots__ = ("attribute_name", "expression_root", "pattern", "skipped", "template_delimiters")

    def __init__(self, options: BindingOptions, pattern: re.Pattern[str]) -> None:
        self.attribute_name = options.binding_attribute_name
        self.skipped = options.skipped_attributes
        self.template_delimiters = options.template_delimiters
        self.expression_root = options.expression_root
        self.pattern = pattern

    def visit(self, node: Node, index: int, siblings: list[Node]) -> None:
        """Walker callback: bind attributes of tags and the content of text nodes."""
        if node.type == TAG:
            self.bind_attributes(node)
        elif node.type == TEXT:
            self.bind_text(node)

    def bind_attributes(self, element: Element) -> int:
        added = 0
        # The binding attribute may be created while iterating.
        for name in list(element.attrs):
            if name in self.skipped:
                continue
            synthesis = self._scan(element.attrs[name])
            if synthesis is None:
                continue
            handler = "value" if name == "value" else f"attr({name})"
            self._append_declaration(element, f"{handler}:{synthesis.binding_expr}")
            element.attrs[name] = synthesis.new_data
            added += 1
        return added

    def bind_text(self, node: Text) -> bool:
        synthesis = self._scan(node.data)
        if synthesis is None:
            return False

        anchor = text_anchor(node)
        if not isinstance(anchor, Element):
            raise BindingAnchorError(node, anchor)

        if node.previous_sibling is not None:
            handler = "text(next)"
        elif node.parent is not None:
            handler = "text(first)" if node.next_sibling is not None else "text"
        else:
            handler = "text(prev)"

        self._append_declaration(anchor, f"{handler}:{synthesis.binding_expr}")
        node.data = synthesis.new_data
        return True

    def _scan(self, text: str) -> Synthesis | None:
        parts = split_bindings(text, self.pattern)
        if len(parts) == 1:
            return None
        return synthesize(parts, self.template_delimiters, self.expression_root)

    def _append_declaration(self, element: Element, declaration: str) -> None:
        existing = element.attrs.get(self.attribute_name, "").strip()
        element.attrs[self.attribute_name] = f"{existing},{declaration}" if existing else declaration
        logger.debug("<%s> %s=%r", element.name, self.attribute_name, element.attrs[self.attribute_name])
