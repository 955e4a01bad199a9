"""The binding transform.

    protect template inserts -> parse -> split text mixing bindings and
    placeholders, wrap text next to comments -> wrap bare text -> write
    bindings -> serialize -> restore
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .binder import BindingWriter, text_anchor
from .constants import TEXT, WRAPPER_TAG
from .expressions import compile_binding_pattern
from .node import Element, replace_node
from .options import BindingOptions, resolve_options
from .protect import TemplateProtector
from .serialize import to_html
from .treebuilder import parse
from .walker import walk

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .node import Node

logger = logging.getLogger(__name__)


class HTMLBindingTransform:
    """Reusable transform for one configuration.

    Instances hold only the resolved options and the compiled binding pattern;
    all per-document state lives inside `transform()`, so one instance can be
    shared freely.
    """

    __slots__ = ("binding_pattern", "options")

    def __init__(self, options: BindingOptions | Mapping[str, Any] | None = None, **overrides: Any) -> None:
        self.options = resolve_options(options, **overrides)
        self.binding_pattern = compile_binding_pattern(self.options.binding_delimiters)

    def transform(self, html: str) -> str:
        protector = TemplateProtector(self.options.template_delimiters)
        html = protector.protect(html)
        nodes = self._parse(html)

        def isolate_bindings(node: Node, index: int, siblings: list[Node]) -> None:
            if node.type != TEXT:
                return
            data = node.data
            match = self.binding_pattern.search(data)
            if match is None:
                return
            alone = match.start() == 0 and match.end() == len(data)
            if protector.contains_placeholder(data) and not alone:
                wrapped = f"<{WRAPPER_TAG}>{match.group(0)}</{WRAPPER_TAG}>"
                fragment = f"{data[: match.start()]}{wrapped}{data[match.end() :]}"
                logger.debug("Splitting text node around %r", match.group(0))
                replace_node(siblings, index, self._parse(fragment))
                return
            anchor = text_anchor(node)
            if anchor is not None and not anchor.is_element:
                # A comment or directive cannot hold the binding attribute.
                logger.debug("Wrapping text next to %r in <%s>", anchor, WRAPPER_TAG)
                wrapper = Element(WRAPPER_TAG)
                replace_node(siblings, index, [wrapper])
                wrapper.append_child(node)

        walk(nodes, isolate_bindings)

        # Root-level text cannot carry a binding attribute: give it a wrapper.
        if len(nodes) == 1 and nodes[0].type == TEXT and self.binding_pattern.search(html):
            logger.debug("Wrapping bare text in <%s>", WRAPPER_TAG)
            nodes = self._parse(f"<{WRAPPER_TAG}>{html}</{WRAPPER_TAG}>")

        writer = BindingWriter(self.options, self.binding_pattern)
        walk(nodes, writer.visit)

        return protector.restore(to_html(nodes, xhtml_mode=self.options.xhtml_mode))

    def _parse(self, html: str) -> list[Node]:
        return parse(html, normalize_whitespace=self.options.normalize_whitespace)


def transform(html: str, options: BindingOptions | Mapping[str, Any] | None = None, **overrides: Any) -> str:
    """Rewrite binding inserts in `html` into binding-attribute declarations.

    `options` may be a BindingOptions, a mapping of option names (Python or
    camelCase spelling) or None; keyword overrides win over both.
    """
    return HTMLBindingTransform(options, **overrides).transform(html)
