"""Transform configuration.

`BindingOptions` is the full configuration record. `resolve_options()` turns
whatever the caller passed (nothing, an options instance, a mapping using
either the Python field names or the camelCase option names, keyword
overrides) into a complete `BindingOptions`, filling every unset field from
`DEFAULT_OPTIONS`.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from dataclasses import dataclass, fields
from typing import Any


def _delimiter_pair(name: str, value: Any) -> tuple[str, str]:
    if isinstance(value, str) or len(value) != 2:
        msg = f"{name} must be a pair of strings, got {value!r}"
        raise ValueError(msg)
    open_delimiter, close_delimiter = value
    if not isinstance(open_delimiter, str) or not isinstance(close_delimiter, str):
        msg = f"{name} must be a pair of strings, got {value!r}"
        raise ValueError(msg)
    if not open_delimiter or not close_delimiter:
        msg = f"{name} delimiters must not be empty"
        raise ValueError(msg)
    return (open_delimiter, close_delimiter)


@dataclass(frozen=True, slots=True)
class BindingOptions:
    """Configuration of one transform.

    - `binding_attribute_name`: attribute receiving the binding declarations.
    - `attributes_to_skip`: attributes never scanned for binding inserts. The
      binding attribute is always skipped, listed here or not.
    - `template_delimiters`: pair wrapping inserts left to the template engine.
    - `binding_delimiters`: pair wrapping binding expressions.
    - `expression_root`: identifier every expression path is qualified with.
    - `xhtml_mode`: serialize empty void elements as `<br />`.
    - `normalize_whitespace`: collapse whitespace runs in text nodes. Off by
      default so text keeps its exact whitespace. Binding tools that parse
      with whitespace normalization always collapse; pass True when output
      has to match theirs.
    """

    binding_attribute_name: str = "data-bind"
    attributes_to_skip: Collection[str] = ()
    template_delimiters: tuple[str, str] = ("{{", "}}")
    binding_delimiters: tuple[str, str] = ("{", "}")
    expression_root: str = "this"
    xhtml_mode: bool = False
    normalize_whitespace: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.binding_attribute_name, str) or not self.binding_attribute_name:
            msg = "binding_attribute_name must be a non-empty string"
            raise ValueError(msg)
        if not isinstance(self.expression_root, str) or not self.expression_root:
            msg = "expression_root must be a non-empty string"
            raise ValueError(msg)

        if isinstance(self.attributes_to_skip, str):
            msg = "attributes_to_skip must be a collection of attribute names, not a string"
            raise ValueError(msg)
        # Normalize lists/sets from user code to a tuple, keeping the given order.
        if not isinstance(self.attributes_to_skip, tuple):
            object.__setattr__(self, "attributes_to_skip", tuple(self.attributes_to_skip))

        object.__setattr__(
            self, "template_delimiters", _delimiter_pair("template_delimiters", self.template_delimiters)
        )
        object.__setattr__(self, "binding_delimiters", _delimiter_pair("binding_delimiters", self.binding_delimiters))
        object.__setattr__(self, "xhtml_mode", bool(self.xhtml_mode))
        object.__setattr__(self, "normalize_whitespace", bool(self.normalize_whitespace))

    @property
    def skipped_attributes(self) -> frozenset[str]:
        return frozenset(self.attributes_to_skip) | {self.binding_attribute_name}


DEFAULT_OPTIONS = BindingOptions()

# camelCase option names accepted in mappings, for configs shared with other tooling
OPTION_ALIASES = {
    "bindingAttributeName": "binding_attribute_name",
    "attributesToSkip": "attributes_to_skip",
    "templateDelimiterPair": "template_delimiters",
    "bindingDelimiterPair": "binding_delimiters",
    "expressionRoot": "expression_root",
    "xhtmlMode": "xhtml_mode",
    "normalizeWhitespace": "normalize_whitespace",
}

_FIELD_NAMES = tuple(f.name for f in fields(BindingOptions))


def _normalize_keys(values: Mapping[str, Any]) -> dict[str, Any]:
    normalized: dict[str, Any] = {}
    for key, value in values.items():
        name = OPTION_ALIASES.get(key, key)
        if name not in _FIELD_NAMES:
            msg = f"Unknown option: {key!r}"
            raise TypeError(msg)
        normalized[name] = value
    return normalized


def resolve_options(options: BindingOptions | Mapping[str, Any] | None = None, **overrides: Any) -> BindingOptions:
    """Build a complete BindingOptions; None values count as unset."""
    if isinstance(options, BindingOptions):
        if not overrides:
            return options
        base = options
        given: dict[str, Any] = {}
    else:
        base = DEFAULT_OPTIONS
        given = _normalize_keys(options or {})
    given.update(_normalize_keys(overrides))

    resolved = {name: getattr(base, name) for name in _FIELD_NAMES}
    for name, value in given.items():
        if value is not None:
            resolved[name] = value
    return BindingOptions(**resolved)
