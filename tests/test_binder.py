from __future__ import annotations

import unittest

from htmlbind.binder import BindingAnchorError, BindingWriter, text_anchor
from htmlbind.expressions import compile_binding_pattern
from htmlbind.node import Element, Text
from htmlbind.options import DEFAULT_OPTIONS, BindingOptions
from htmlbind.serialize import to_html
from htmlbind.treebuilder import parse
from htmlbind.walker import walk


def bind(html: str, options: BindingOptions = DEFAULT_OPTIONS) -> str:
    nodes = parse(html)
    writer = BindingWriter(options, compile_binding_pattern(options.binding_delimiters))
    walk(nodes, writer.visit)
    return to_html(nodes)


class TestBindAttributes(unittest.TestCase):
    def setUp(self) -> None:
        self.writer = BindingWriter(DEFAULT_OPTIONS, compile_binding_pattern(("{", "}")))

    def test_value_and_other_attributes(self) -> None:
        element = Element("input", {"value": "{a}", "title": "x {b}", "id": "plain"})
        assert self.writer.bind_attributes(element) == 2
        assert element.attrs == {
            "value": "{{a}}",
            "title": "x {{b}}",
            "id": "plain",
            "data-bind": "value:this.a,attr(title):'x '+this.b",
        }

    def test_binding_attribute_is_never_scanned(self) -> None:
        element = Element("p", {"data-bind": "{x}"})
        assert self.writer.bind_attributes(element) == 0
        assert element.attrs == {"data-bind": "{x}"}

    def test_existing_declarations_are_trimmed_and_extended(self) -> None:
        element = Element("input", {"data-bind": " visible:this.v ", "value": "{a}"})
        self.writer.bind_attributes(element)
        assert element.attrs["data-bind"] == "visible:this.v,value:this.a"

    def test_skipped_attributes(self) -> None:
        writer = BindingWriter(BindingOptions(attributes_to_skip=["title"]), compile_binding_pattern(("{", "}")))
        element = Element("a", {"title": "{x}", "href": "{y}"})
        assert writer.bind_attributes(element) == 1
        assert element.attrs["title"] == "{x}"

    def test_script_attributes_are_left_alone(self) -> None:
        assert bind('<script src="{x}"></script>') == '<script src="{x}"></script>'


class TestBindText(unittest.TestCase):
    def test_only_child(self) -> None:
        assert bind("<div>{a}</div>") == '<div data-bind="text:this.a">{{a}}</div>'

    def test_first_child(self) -> None:
        assert bind("<div>{a}<b>x</b></div>") == '<div data-bind="text(first):this.a">{{a}}<b>x</b></div>'

    def test_after_sibling(self) -> None:
        assert bind("<div><b>x</b>{a}</div>") == '<div><b data-bind="text(next):this.a">x</b>{{a}}</div>'

    def test_root_text_before_element(self) -> None:
        assert bind("{a}<b>x</b>") == '{{a}}<b data-bind="text(prev):this.a">x</b>'

    def test_text_without_binding(self) -> None:
        text = Text("nothing here")
        writer = BindingWriter(DEFAULT_OPTIONS, compile_binding_pattern(("{", "}")))
        assert writer.bind_text(text) is False
        assert text.data == "nothing here"

    def test_comment_anchor_is_an_error(self) -> None:
        with self.assertRaises(BindingAnchorError) as ctx:
            bind("<div><!-- note -->{a}</div>")
        assert ctx.exception.anchor.data == " note "
        assert ctx.exception.node.data == "{a}"

    def test_lone_root_text_is_an_error(self) -> None:
        writer = BindingWriter(DEFAULT_OPTIONS, compile_binding_pattern(("{", "}")))
        with self.assertRaises(BindingAnchorError) as ctx:
            writer.bind_text(Text("{a}"))
        assert ctx.exception.anchor is None

    def test_anchor_error_is_a_value_error(self) -> None:
        assert issubclass(BindingAnchorError, ValueError)

    def test_text_anchor_priority(self) -> None:
        div, comment, text = parse("<div><b>x</b>{a}</div><!-- c -->{b}")
        bold, inner = div.children
        assert text_anchor(inner) is bold
        assert text_anchor(bold.children[0]) is bold
        assert text_anchor(text) is comment
        assert text_anchor(div) is comment
        assert text_anchor(Text("{a}")) is None
