from __future__ import annotations

import unittest
from dataclasses import FrozenInstanceError

from htmlbind.options import DEFAULT_OPTIONS, BindingOptions, resolve_options


class TestBindingOptions(unittest.TestCase):
    def test_defaults(self) -> None:
        opts = BindingOptions()
        assert opts.binding_attribute_name == "data-bind"
        assert opts.attributes_to_skip == ()
        assert opts.template_delimiters == ("{{", "}}")
        assert opts.binding_delimiters == ("{", "}")
        assert opts.expression_root == "this"
        assert opts.xhtml_mode is False
        assert opts.normalize_whitespace is False

    def test_normalizes_collections(self) -> None:
        opts = BindingOptions(attributes_to_skip=["title", "alt"], template_delimiters=["<%", "%>"])
        assert opts.attributes_to_skip == ("title", "alt")
        assert opts.template_delimiters == ("<%", "%>")

    def test_skipped_attributes_include_binding_attribute(self) -> None:
        opts = BindingOptions(attributes_to_skip=["title"], binding_attribute_name="ko")
        assert opts.skipped_attributes == frozenset({"title", "ko"})

    def test_is_frozen(self) -> None:
        with self.assertRaises(FrozenInstanceError):
            DEFAULT_OPTIONS.expression_root = "vm"  # type: ignore[misc]

    def test_invalid_values(self) -> None:
        for kwargs in [
            {"template_delimiters": ("{{",)},
            {"template_delimiters": "{}"},
            {"binding_delimiters": ("", "}")},
            {"binding_delimiters": ("{", 1)},
            {"binding_attribute_name": ""},
            {"expression_root": ""},
            {"attributes_to_skip": "title"},
        ]:
            with self.assertRaises(ValueError):
                BindingOptions(**kwargs)


class TestResolveOptions(unittest.TestCase):
    def test_nothing_gives_defaults(self) -> None:
        assert resolve_options() == DEFAULT_OPTIONS
        assert resolve_options({}) == DEFAULT_OPTIONS

    def test_camel_case_names(self) -> None:
        opts = resolve_options(
            {
                "bindingAttributeName": "ko",
                "templateDelimiterPair": ["<%", "%>"],
                "bindingDelimiterPair": ["${", "}"],
                "xhtmlMode": True,
            }
        )
        assert opts.binding_attribute_name == "ko"
        assert opts.template_delimiters == ("<%", "%>")
        assert opts.binding_delimiters == ("${", "}")
        assert opts.xhtml_mode is True
        assert opts.expression_root == "this"

    def test_none_values_are_unset(self) -> None:
        opts = resolve_options({"expression_root": None}, binding_attribute_name=None)
        assert opts == DEFAULT_OPTIONS

    def test_overrides_win(self) -> None:
        opts = resolve_options({"expressionRoot": "vm"}, expression_root="model")
        assert opts.expression_root == "model"

    def test_instance_is_reused_without_overrides(self) -> None:
        opts = BindingOptions(expression_root="vm")
        assert resolve_options(opts) is opts
        derived = resolve_options(opts, xhtml_mode=True)
        assert derived.expression_root == "vm"
        assert derived.xhtml_mode is True
        assert opts.xhtml_mode is False

    def test_unknown_option(self) -> None:
        with self.assertRaises(TypeError):
            resolve_options({"delimiters": ("{", "}")})
        with self.assertRaises(TypeError):
            resolve_options(rootName="vm")

    def test_invalid_value_is_a_value_error(self) -> None:
        with self.assertRaises(ValueError):
            resolve_options(binding_delimiters=("{",))
