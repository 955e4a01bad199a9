"""Markup constants shared by the tree builder, the serializer and the transform.

Usage:
    from htmlbind.constants import SELF_CLOSING_TAGS, VOID_ELEMENTS
"""

# Elements that never receive children while building the tree.
VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "basefont",
        "br",
        "col",
        "command",
        "embed",
        "frame",
        "hr",
        "img",
        "input",
        "isindex",
        "keygen",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# Empty elements serialized without a closing tag (`/>` in xhtml mode).
SELF_CLOSING_TAGS = VOID_ELEMENTS | frozenset(
    {
        # svg
        "circle",
        "ellipse",
        "line",
        "path",
        "polygone",
        "polyline",
        "rect",
        "stop",
        "use",
    }
)

# Elements whose content is raw text up to the matching end tag.
RAWTEXT_ELEMENTS = frozenset({"script", "style"})

HEADING_ELEMENTS = ["h1", "h2", "h3", "h4", "h5", "h6"]

# open element -> start tags that close it when it is the current element
IMPLIED_END_TAGS = {
    "p": ["p", *HEADING_ELEMENTS],
    "li": ["li"],
    "dt": ["dt", "dd"],
    "dd": ["dt", "dd"],
    "tr": ["tr"],
    "td": ["tr", "td", "th"],
    "th": ["tr", "td", "th"],
    "option": ["option", "optgroup"],
    "optgroup": ["optgroup"],
    "head": ["body"],
}

# Node types
TAG = "tag"
SCRIPT = "script"
STYLE = "style"
TEXT = "text"
COMMENT = "comment"
CDATA = "cdata"
DIRECTIVE = "directive"

ELEMENT_TYPES = frozenset({TAG, SCRIPT, STYLE})

# Synthetic inline element used to give bare or mixed text an anchor.
WRAPPER_TAG = "span"

PLACEHOLDER_PREFIX = "htmlbind_"
