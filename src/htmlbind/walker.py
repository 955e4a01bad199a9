"""Pre-order tree traversal that tolerates splicing of the list being walked."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from .node import Node

    NodeVisitor = Callable[[Node, int, list[Node]], None]


def walk(nodes: list[Node], callback: NodeVisitor) -> None:
    """Visit every node of `nodes` and its descendants in document order.

    `callback(node, index, siblings)` may replace `siblings[index]` with any
    number of nodes. When it does, the walk resumes at `index`, so the first
    replacement node is visited next. Only elements are descended into.

    An explicit stack keeps deep trees clear of the recursion limit.
    """
    stack: list[tuple[list[Node], int]] = [(nodes, 0)]
    while stack:
        siblings, index = stack.pop()
        while index < len(siblings):
            node = siblings[index]
            callback(node, index, siblings)
            if index >= len(siblings) or siblings[index] is not node:
                continue
            if node.is_element and node.children:
                stack.append((siblings, index + 1))
                siblings, index = node.children, 0
                continue
            index += 1
