from .binder import BindingAnchorError, BindingWriter
from .expressions import Synthesis, compile_binding_pattern, split_bindings, synthesize
from .node import CData, Comment, Directive, Element, Node, Text
from .options import DEFAULT_OPTIONS, BindingOptions, resolve_options
from .protect import TemplateProtector, escape_regexp
from .serialize import to_html
from .transform import HTMLBindingTransform, transform
from .treebuilder import parse
from .walker import walk

__all__ = [
    "DEFAULT_OPTIONS",
    "BindingAnchorError",
    "BindingOptions",
    "BindingWriter",
    "CData",
    "Comment",
    "Directive",
    "Element",
    "HTMLBindingTransform",
    "Node",
    "Synthesis",
    "TemplateProtector",
    "Text",
    "compile_binding_pattern",
    "escape_regexp",
    "parse",
    "resolve_options",
    "split_bindings",
    "synthesize",
    "to_html",
    "transform",
    "walk",
]
