from .constants import CDATA, COMMENT, DIRECTIVE, ELEMENT_TYPES, SCRIPT, STYLE, TAG, TEXT


class Node:
    """Represents a node of a parsed markup tree.
    - type: "tag", "script", "style", "text", "comment", "cdata" or "directive"
    - parent: reference to the enclosing Element (None for root nodes)
    - next_sibling/previous_sibling: references to adjacent nodes in the same child list
    """

    __slots__ = ("next_sibling", "parent", "previous_sibling", "type")

    def __init__(self, type):
        self.type = type
        self.parent = None
        self.previous_sibling = None
        self.next_sibling = None

    @property
    def is_element(self):
        return self.type in ELEMENT_TYPES


class Element(Node):
    """An element node.
    - name: tag name exactly as written in the markup
    - attrs: ordered dict of raw attribute values (serialization order)
    - children: list of child Nodes
    """

    __slots__ = ("attrs", "children", "name")

    def __init__(self, name, attrs=None):
        if not name:
            msg = "Empty name passed to Element constructor"
            raise ValueError(msg)
        lowered = name.lower()
        if lowered == "script":
            node_type = SCRIPT
        elif lowered == "style":
            node_type = STYLE
        else:
            node_type = TAG
        super().__init__(node_type)
        self.name = name
        self.attrs = dict(attrs) if attrs else {}
        self.children = []

    def append_child(self, child):
        link_node(self.children, child, self)

    def __repr__(self):
        return f"Element(<{self.name}>, children={len(self.children)})"


class DataNode(Node):
    __slots__ = ("data",)

    def __init__(self, type, data=""):
        super().__init__(type)
        self.data = data

    def __repr__(self):
        return f"{self.__class__.__name__}({self.data[:30]!r})"


class Text(DataNode):
    __slots__ = ()

    def __init__(self, data=""):
        super().__init__(TEXT, data)


class Comment(DataNode):
    __slots__ = ()

    def __init__(self, data=""):
        super().__init__(COMMENT, data)


class CData(DataNode):
    __slots__ = ()

    def __init__(self, data=""):
        super().__init__(CDATA, data)


class Directive(DataNode):
    __slots__ = ()

    def __init__(self, data=""):
        super().__init__(DIRECTIVE, data)


def link_node(siblings, node, parent=None):
    """Append node to siblings (a child list or the root list) and wire up its links."""
    if siblings:
        last = siblings[-1]
        last.next_sibling = node
        node.previous_sibling = last
    else:
        node.previous_sibling = None
    node.next_sibling = None
    node.parent = parent
    siblings.append(node)


def replace_node(siblings, index, new_nodes):
    """Replace siblings[index] with new_nodes, keeping parent and sibling links consistent.

    The new nodes adopt the replaced node's parent. The first one is linked to the
    replaced node's previous sibling and the last one to its next sibling, in both
    directions. The replaced node is detached.
    """
    old = siblings[index]
    parent = old.parent
    before = old.previous_sibling
    after = old.next_sibling
    new_nodes = list(new_nodes)

    previous = before
    for node in new_nodes:
        node.parent = parent
        node.previous_sibling = previous
        if previous is not None:
            previous.next_sibling = node
        previous = node
    if previous is not None:
        previous.next_sibling = after
    if after is not None:
        after.previous_sibling = previous

    siblings[index : index + 1] = new_nodes
    old.parent = None
    old.previous_sibling = None
    old.next_sibling = None
