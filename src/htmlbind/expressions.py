"""Binding-insert scanning and binding-expression synthesis."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .protect import escape_regexp


@dataclass(frozen=True, slots=True)
class Synthesis:
    """Result of rewriting one string that contains binding inserts.

    - `binding_expr`: the `+`-joined expression, ready to sit inside a
      double-quoted attribute value.
    - `new_data`: the original string with every binding insert turned into a
      template insert.
    """

    binding_expr: str
    new_data: str


def compile_binding_pattern(delimiters: tuple[str, str]) -> re.Pattern[str]:
    """Pattern for one binding insert; group 1 is the expression without surrounding whitespace."""
    open_delimiter, close_delimiter = delimiters
    return re.compile(escape_regexp(open_delimiter) + r"\s*(\S.*?)\s*" + escape_regexp(close_delimiter))


def split_bindings(text: str, pattern: re.Pattern[str]) -> list[str]:
    """Split into alternating literal and expression runs.

    The result always has odd length and starts and ends with a (possibly empty)
    literal. A single-item result means the text holds no binding insert.
    """
    return pattern.split(text)


def quote_literal(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("'", "\\'").replace("\r", "\\r").replace("\n", "\\n")
    return f"'{escaped}'"


def synthesize(parts: list[str], template_delimiters: tuple[str, str], root: str) -> Synthesis:
    open_delimiter, close_delimiter = template_delimiters
    expr_pieces: list[str] = []
    data_pieces: list[str] = []

    for index, piece in enumerate(parts):
        if index % 2:
            expr_pieces.append(f"{root}.{piece}")
            data_pieces.append(f"{open_delimiter}{piece}{close_delimiter}")
        elif piece:
            expr_pieces.append(quote_literal(piece))
            data_pieces.append(piece)
        elif index == 2 and len(parts) > 3:
            # "{a}{b}" must stay a string concatenation: this.a+''+this.b
            expr_pieces.append("''")

    return Synthesis(
        binding_expr="+".join(expr_pieces).replace('"', "&quot;"),
        new_data="".join(data_pieces),
    )
