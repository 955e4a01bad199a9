import re

from .constants import IMPLIED_END_TAGS, TEXT, VOID_ELEMENTS
from .node import CData, Comment, Directive, Element, Text, link_node
from .tokenizer import Tokenizer, TokenizerOpts
from .tokens import CDataToken, CharacterTokens, CommentToken, DirectiveToken, EOFToken, Tag

_WHITESPACE_RUN = re.compile(r"\s+")


class TreeBuilder:
    """Token sink building a list of root nodes.

    There are no insertion modes: elements nest as written, void elements are
    closed immediately, unmatched end tags are ignored and a handful of optional
    end tags are implied (see IMPLIED_END_TAGS).
    """

    __slots__ = ("normalize_whitespace", "open_elements", "roots")

    def __init__(self, normalize_whitespace=False):
        self.normalize_whitespace = bool(normalize_whitespace)
        self.roots = []
        self.open_elements = []

    @property
    def current_parent(self):
        return self.open_elements[-1] if self.open_elements else None

    def process_token(self, token):
        if isinstance(token, CharacterTokens):
            self._insert_text(token.data)
        elif isinstance(token, Tag):
            if token.kind == Tag.START:
                self._handle_start_tag(token)
            else:
                self._handle_end_tag(token)
        elif isinstance(token, CommentToken):
            self._insert(Comment(token.data))
        elif isinstance(token, DirectiveToken):
            self._insert(Directive(token.data))
        elif isinstance(token, CDataToken):
            self._insert(CData(token.data))
        elif isinstance(token, EOFToken):
            self.open_elements.clear()

    def finish(self):
        self.open_elements.clear()
        return self.roots

    # Token handlers ---------------------------------------------------------

    def _handle_start_tag(self, token):
        name = token.name
        lowered = name.lower()
        self._close_implied(lowered)
        element = Element(name, token.attrs)
        self._insert(element)
        if lowered not in VOID_ELEMENTS:
            self.open_elements.append(element)

    def _handle_end_tag(self, token):
        lowered = token.name.lower()
        if lowered in VOID_ELEMENTS:
            # "</br>" is treated as "<br>", other void end tags are dropped.
            if lowered == "br":
                self._insert(Element(token.name))
            return

        for index in range(len(self.open_elements) - 1, -1, -1):
            if self.open_elements[index].name.lower() == lowered:
                del self.open_elements[index:]
                return

        if lowered == "p":
            # A stray "</p>" yields an empty paragraph.
            self._insert(Element(token.name))

    def _close_implied(self, lowered):
        while self.open_elements:
            current = self.open_elements[-1].name.lower()
            if lowered not in IMPLIED_END_TAGS.get(current, ()):
                return
            self.open_elements.pop()

    # Insertion helpers ------------------------------------------------------

    def _siblings(self):
        parent = self.current_parent
        return parent.children if parent is not None else self.roots

    def _insert(self, node):
        link_node(self._siblings(), node, self.current_parent)

    def _insert_text(self, data):
        siblings = self._siblings()
        if siblings and siblings[-1].type == TEXT:
            last = siblings[-1]
            last.data += data
        else:
            last = Text(data)
            self._insert(last)
        if self.normalize_whitespace:
            last.data = _WHITESPACE_RUN.sub(" ", last.data)


def parse(html, *, normalize_whitespace=False, recognize_cdata=False):
    """Parse markup into a list of root nodes."""
    builder = TreeBuilder(normalize_whitespace=normalize_whitespace)
    tokenizer = Tokenizer(builder, TokenizerOpts(recognize_cdata=recognize_cdata))
    tokenizer.run(html or "")
    return builder.finish()
