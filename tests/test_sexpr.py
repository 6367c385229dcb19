"""Tests for S-expression parsing and generation."""

from __future__ import annotations

from decimal import Decimal

import pytest

from coilgen.kicad import sexpr
from coilgen.kicad.sexpr import Quoted


class TestSExprParsing:
    """Tests for S-expression parsing."""

    def test_parse_empty_list(self) -> None:
        assert sexpr.parse("()") == []

    def test_parse_nested_list(self) -> None:
        assert sexpr.parse("(a (b c) d)") == ["a", ["b", "c"], "d"]

    def test_parse_integers(self) -> None:
        assert sexpr.parse("(1 2 -3)") == [1, 2, -3]

    def test_parse_decimals_exactly(self) -> None:
        result = sexpr.parse("(start 2.965685 -0.565685)")
        assert result == ["start", Decimal("2.965685"), Decimal("-0.565685")]
        assert isinstance(result[1], Decimal)

    def test_parse_quoted_string_is_quoted(self) -> None:
        result = sexpr.parse('(layer "F.Cu")')
        assert result == ["layer", "F.Cu"]
        assert isinstance(result[1], Quoted)
        assert not isinstance(result[0], Quoted)

    def test_parse_quoted_string_with_escapes(self) -> None:
        assert sexpr.parse(r'("line1\nline2")') == ["line1\nline2"]

    def test_parse_multiline(self) -> None:
        text = '(footprint "T1"\n\t(version 20241229)\n\t(layer "F.Cu"))'
        assert sexpr.parse(text) == ["footprint", "T1", ["version", 20241229], ["layer", "F.Cu"]]

    def test_parse_empty_input_raises(self) -> None:
        with pytest.raises(sexpr.SExprParseError):
            sexpr.parse("")

    def test_parse_unclosed_raises(self) -> None:
        with pytest.raises(sexpr.SExprParseError, match="Unclosed"):
            sexpr.parse("(a (b c)")

    def test_parse_unexpected_close_raises(self) -> None:
        with pytest.raises(sexpr.SExprParseError):
            sexpr.parse(")")

    def test_parse_trailing_token_raises(self) -> None:
        with pytest.raises(sexpr.SExprParseError, match="after expression"):
            sexpr.parse("(a) (b)")

    def test_parse_unterminated_string_raises(self) -> None:
        with pytest.raises(sexpr.SExprParseError, match="Unterminated"):
            sexpr.parse('(a "b)')

    def test_parse_error_reports_line(self) -> None:
        with pytest.raises(sexpr.SExprParseError) as exc_info:
            sexpr.parse('(a\n  "unterminated')
        assert "line 2" in str(exc_info.value)
        assert exc_info.value.line == 2
        assert isinstance(exc_info.value, ValueError)


class TestFormatAtom:
    def test_plain_string_unquoted(self) -> None:
        assert sexpr.format_atom("thru_hole") == "thru_hole"

    def test_string_with_space_quoted(self) -> None:
        assert sexpr.format_atom("hello world") == '"hello world"'

    def test_empty_string_quoted(self) -> None:
        assert sexpr.format_atom("") == '""'

    def test_quoted_always_quoted(self) -> None:
        assert sexpr.format_atom(Quoted("F.Cu")) == '"F.Cu"'
        assert sexpr.format_atom(Quoted("")) == '""'

    def test_quoted_escapes(self) -> None:
        assert sexpr.format_atom(Quoted('a"b\\c')) == '"a\\"b\\\\c"'

    def test_bool(self) -> None:
        assert sexpr.format_atom(True) == "yes"
        assert sexpr.format_atom(False) == "no"

    def test_int(self) -> None:
        assert sexpr.format_atom(20241229) == "20241229"

    def test_decimal_trailing_zeros(self) -> None:
        assert sexpr.format_atom(Decimal("1.500")) == "1.5"
        assert sexpr.format_atom(Decimal("2.000")) == "2"

    def test_float(self) -> None:
        assert sexpr.format_atom(0.25) == "0.25"

    def test_unsupported_type(self) -> None:
        with pytest.raises(TypeError):
            sexpr.format_atom(None)  # type: ignore[arg-type]


class TestNmToMm:
    @pytest.mark.parametrize(
        ("value_nm", "expected"),
        [
            (0, "0"),
            (1_000_000, "1"),
            (160_000, "0.16"),
            (-250_000, "-0.25"),
            (-800_000, "-0.8"),
            (2_965_685, "2.965685"),
            (1, "0.000001"),
            (-1, "-0.000001"),
            (123_000_000, "123"),
        ],
    )
    def test_known_values(self, value_nm: int, expected: str) -> None:
        assert sexpr.nm_to_mm(value_nm) == expected

    def test_round_trips_through_decimal(self) -> None:
        for value_nm in (0, 7, -7, 565_685, -2_121_321, 5_108_570, 987_654_321):
            text = sexpr.nm_to_mm(value_nm)
            assert Decimal(text) * 1_000_000 == value_nm
            assert "e" not in text.lower()


class TestSExprWriter:
    def test_atom_only_list_inline(self) -> None:
        assert sexpr.dump(["start", "2.4", "-0.8"]) == "(start 2.4 -0.8)"

    def test_long_atom_only_list_inline(self) -> None:
        assert sexpr.dump(["layers", Quoted("*.Cu"), Quoted("*.Mask"), "a", "b"]) == '(layers "*.Cu" "*.Mask" a b)'

    def test_named_record_multiline(self) -> None:
        node = ["fp_line", ["start", "0", "0"], ["end", "1", "0"]]
        assert sexpr.dump(node) == "(fp_line\n\t(start 0 0)\n\t(end 1 0)\n)"

    def test_leading_atoms_stay_on_opening_line(self) -> None:
        node = ["pad", Quoted("1"), "thru_hole", "circle", ["at", "0", "0"]]
        assert sexpr.dump(node) == '(pad "1" thru_hole circle\n\t(at 0 0)\n)'

    def test_short_unnamed_list_inline(self) -> None:
        assert sexpr.dump(["fill", ["x", "1"]]) == "(fill (x 1))"

    def test_nested_indentation(self) -> None:
        node = ["footprint", Quoted("T1"), ["stroke", ["width", "0.05"], ["type", "default"]]]
        expected = '(footprint "T1"\n\t(stroke\n\t\t(width 0.05)\n\t\t(type default)\n\t)\n)'
        assert sexpr.dump(node) == expected

    def test_custom_indent(self) -> None:
        node = ["fp_line", ["start", "0", "0"]]
        assert sexpr.dump(node, indent=2, indent_char=" ") == "(fp_line\n  (start 0 0)\n)"

    def test_empty_list(self) -> None:
        assert sexpr.dump([]) == "()"

    def test_dump_compact(self) -> None:
        node = ["fp_line", ["start", "0", "0"], ["layer", Quoted("Edge.Cuts")]]
        assert sexpr.dump_compact(node) == '(fp_line (start 0 0) (layer "Edge.Cuts"))'

    def test_dump_parse_round_trip(self) -> None:
        node = [
            "footprint",
            Quoted("T1"),
            ["version", 20241229],
            ["fp_arc", ["start", Decimal("2.4"), Decimal("-0.8")], ["layer", Quoted("F.Cu")]],
        ]
        assert sexpr.parse(sexpr.dump(node)) == node


class TestFindAll:
    def test_finds_nested(self) -> None:
        tree = sexpr.parse("(footprint (pad (uuid a)) (fp_arc (uuid b)) (pad (uuid c)))")
        assert len(sexpr.find_all(tree, "pad")) == 2
        assert len(sexpr.find_all(tree, "uuid")) == 3

    def test_includes_root(self) -> None:
        tree = sexpr.parse("(footprint (a))")
        assert sexpr.find_all(tree, "footprint") == [tree]

    def test_atom_has_no_matches(self) -> None:
        assert sexpr.find_all("pad", "pad") == []
