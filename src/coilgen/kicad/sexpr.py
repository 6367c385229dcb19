"""S-expression reading and writing for KiCad footprint files.

KiCad stores footprints as nested lists:

- Atoms: bare tokens (keywords, numbers)
- Quoted strings: "text", with backslash escapes
- Lists: (name child child ...)

Documents are built as plain Python lists and dumped with tab indentation.
Lengths are rendered from integer nanometers by ``nm_to_mm`` and parse back
as ``Decimal`` so a written file can be compared against its geometry
exactly.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from collections.abc import Iterator


class Quoted(str):
    """String atom that is always written in double quotes.

    KiCad quotes names, layers, uuids and property values even when they
    contain no special characters; plain ``str`` atoms are quoted only when
    they must be.
    """

    __slots__ = ()


SExprAtom = Union[str, int, float, Decimal]
SExprNode = Union[SExprAtom, "SExprList"]
SExprList = list["SExprNode"]

# Records KiCad always writes one child per line
KICAD_BLOCKS = frozenset(
    {
        "footprint",
        "property",
        "fp_text",
        "pad",
        "fp_line",
        "fp_circle",
        "fp_arc",
        "stroke",
        "effects",
        "font",
    }
)

_TOKEN_RE = re.compile(
    r"""
    (?P<space>\s+)
    | (?P<open>\()
    | (?P<close>\))
    | (?P<string>"(?:[^"\\]|\\.)*")
    | (?P<atom>[^\s()"]+)
    """,
    re.VERBOSE | re.DOTALL,
)
_BARE_SAFE_RE = re.compile(r'^[^\s"()\\]+$')
_DECIMAL_RE = re.compile(r"^[+-]?(\d+\.\d*|\.\d+)$")
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)

_QUOTE_TABLE = str.maketrans({"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"})
_UNESCAPES = {"n": "\n", "r": "\r", "t": "\t"}


class SExprParseError(ValueError):
    """Malformed S-expression input.

    Attributes:
        message: What went wrong.
        position: Character offset of the offending input.
        line: 1-based line of ``position``.
        column: 1-based column of ``position``.
    """

    def __init__(self, message: str, text: str = "", position: int = 0) -> None:
        self.message = message
        self.position = position
        self.line = text.count("\n", 0, position) + 1
        self.column = position - text.rfind("\n", 0, position)
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"{self.message} at line {self.line}, column {self.column} (position {self.position})"


# ---------------------------------------------------------------------------
# Atom formatting
# ---------------------------------------------------------------------------


def quote_string(value: str) -> str:
    """Wrap a string in double quotes, escaping backslashes, quotes and control characters."""
    return '"' + value.translate(_QUOTE_TABLE) + '"'


def format_string(value: str) -> str:
    """Write ``value`` bare when KiCad can read it back unquoted, else quoted."""
    if _BARE_SAFE_RE.match(value):
        return value
    return quote_string(value)


def format_decimal(value: Decimal) -> str:
    """Fixed-point text of ``value`` without trailing zeros ("1.500" -> "1.5")."""
    text = f"{value:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def format_atom(value: SExprAtom) -> str:
    """Format one atom for output.

    ``Quoted`` strings are always quoted, other strings only when needed.
    Booleans become ``yes``/``no``.

    Raises:
        TypeError: For values that have no S-expression form.
    """
    if isinstance(value, Quoted):
        return quote_string(value)
    if isinstance(value, str):
        return format_string(value)
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, Decimal):
        return format_decimal(value)
    if isinstance(value, float):
        return format_decimal(Decimal(repr(value)))
    raise TypeError(f"Cannot write {type(value).__name__} as an S-expression atom")


def nm_to_mm(value_nm: int) -> str:
    """Render integer nanometers as millimeters.

    Exact decimal shift by six places: at most six fractional digits, no
    trailing zeros, no exponent, and the sign is kept below one millimeter
    (``-250_000`` -> ``"-0.25"``).
    """
    return format_decimal(Decimal(value_nm).scaleb(-6))


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SExprWriter:
    """Pretty-printer producing KiCad-style layout.

    A list is broken onto one child per line only when it has list
    children and either its name is in ``newline_after_first``, it holds
    more than ``inline_threshold`` items, or one of its children nests
    further lists. Leading atoms stay on the opening line and the closing
    paren gets its own line at the opening indentation, as KiCad saves it.

    Attributes:
        indent: Number of ``indent_char`` per nesting level.
        indent_char: Indentation character.
        inline_threshold: Longest list still kept on one line.
        newline_after_first: Record names always written one child per line.
    """

    indent: int = 1
    indent_char: str = "\t"
    inline_threshold: int = 3
    newline_after_first: frozenset[str] = KICAD_BLOCKS

    def write(self, node: SExprNode) -> str:
        return "\n".join(self._lines(node, 0))

    def _breaks(self, items: SExprList) -> bool:
        children = [item for item in items[1:] if isinstance(item, list)]
        if not children:
            return False
        if len(items) > self.inline_threshold:
            return True
        if isinstance(items[0], str) and items[0] in self.newline_after_first:
            return True
        return any(isinstance(sub, list) for child in children for sub in child)

    def _lines(self, node: SExprNode, depth: int) -> list[str]:
        prefix = self.indent_char * (self.indent * depth)
        if not isinstance(node, list) or not self._breaks(node):
            return [prefix + dump_compact(node)]

        split = next(i for i, item in enumerate(node) if isinstance(item, list))
        lines = [prefix + "(" + " ".join(format_atom(atom) for atom in node[:split])]
        for child in node[split:]:
            lines.extend(self._lines(child, depth + 1))
        lines.append(prefix + ")")
        return lines


def dump(node: SExprNode, *, indent: int = 1, indent_char: str = "\t", inline_threshold: int = 3) -> str:
    """Pretty-print ``node`` in KiCad layout (no trailing newline)."""
    writer = SExprWriter(indent=indent, indent_char=indent_char, inline_threshold=inline_threshold)
    return writer.write(node)


def dump_compact(node: SExprNode) -> str:
    """Write ``node`` on a single line."""
    if isinstance(node, list):
        return "(" + " ".join(dump_compact(item) for item in node) + ")"
    return format_atom(node)


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------


def _scan(text: str) -> Iterator[tuple[str, str, int]]:
    """Yield ``(kind, value, position)`` tokens, skipping whitespace."""
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            if text[pos] == '"':
                raise SExprParseError("Unterminated string", text, len(text))
            raise SExprParseError(f"Unexpected character {text[pos]!r}", text, pos)
        kind = match.lastgroup or ""
        if kind != "space":
            yield kind, match.group(), pos
        pos = match.end()


def _unquote(token: str) -> Quoted:
    body = token[1:-1]
    return Quoted(_ESCAPE_RE.sub(lambda m: _UNESCAPES.get(m.group(1), m.group(1)), body))


def _parse_atom(token: str) -> SExprAtom:
    """Convert a bare token to int or Decimal when it is numeric."""
    try:
        return int(token)
    except ValueError:
        pass
    if _DECIMAL_RE.match(token):
        return Decimal(token)
    return token


def parse(text: str) -> SExprNode:
    """Parse one S-expression.

    Quoted strings come back as ``Quoted`` and decimal numbers as
    ``Decimal``, so a parsed document dumps back to the same text and
    millimeter values convert back to integer nanometers exactly.

    Raises:
        SExprParseError: On empty, unbalanced or trailing input.
    """
    stack: list[SExprList] = []
    result: list[SExprNode] = []

    for kind, token, pos in _scan(text):
        if result:
            raise SExprParseError(f"Unexpected token after expression: {token}", text, pos)
        if kind == "open":
            stack.append([])
            continue
        if kind == "close":
            if not stack:
                raise SExprParseError("Unexpected closing parenthesis", text, pos)
            node: SExprNode = stack.pop()
        elif kind == "string":
            node = _unquote(token)
        else:
            node = _parse_atom(token)
        if stack:
            stack[-1].append(node)
        else:
            result.append(node)

    if stack:
        raise SExprParseError("Unclosed list", text, len(text))
    if not result:
        raise SExprParseError("Empty input", text, 0)
    return result[0]


def find_all(node: SExprNode, name: str) -> list[SExprList]:
    """Return every list at or below ``node`` whose first item is ``name``, in document order."""
    if not isinstance(node, list):
        return []
    found: list[SExprList] = [node] if node and node[0] == name else []
    for child in node:
        found.extend(find_all(child, name))
    return found
