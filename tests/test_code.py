"""Tests for program trees and the program text parser."""
import pytest
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pypush.errors import ParseError
from pypush.runtime.code import (
    Atom,
    CodeList,
    as_list,
    format_float,
    parse_code,
    points,
    tokenize,
    value_to_code,
)


class TestParser:
    """Tests for parse_code."""

    def test_single_atom_is_not_wrapped(self):
        assert parse_code("integer.+") == Atom("integer.+")

    def test_several_items_are_wrapped(self):
        code = parse_code("1 2 integer.+")
        assert code == CodeList((Atom("1"), Atom("2"), Atom("integer.+")))

    def test_single_list_is_returned_as_is(self):
        assert parse_code("(1 2)") == CodeList((Atom("1"), Atom("2")))

    def test_empty_text_is_empty_list(self):
        assert parse_code("") == CodeList(())
        assert parse_code("   \n\t") == CodeList(())

    def test_nested(self):
        code = parse_code("(1 (2 (3)) ())")
        assert str(code) == "(1 (2 (3)) ())"
        assert points(code) == 7

    def test_parentheses_need_no_spaces(self):
        assert str(parse_code("(a(b)c)")) == "(a (b) c)"

    def test_unexpected_close(self):
        with pytest.raises(ParseError) as excinfo:
            parse_code("1 2)")
        assert excinfo.value.offset == 3
        assert "unexpected ')'" in str(excinfo.value)

    def test_unclosed_open(self):
        with pytest.raises(ParseError) as excinfo:
            parse_code("(1 (2 3)")
        assert excinfo.value.offset == 0
        assert "unclosed '('" in str(excinfo.value)

    def test_parse_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_code(")")

    def test_tokenize_reports_offsets(self):
        assert list(tokenize("(ab  c)")) == [("(", 0), ("ab", 1), ("c", 5), (")", 6)]


class TestProgramTree:
    """Tests for Atom, CodeList and tree helpers."""

    @pytest.mark.parametrize("token", ["", "a b", "a(", ")"])
    def test_invalid_atoms(self, token):
        with pytest.raises(ValueError):
            Atom(token)

    def test_trees_are_immutable(self):
        code = CodeList([Atom("1")])
        assert isinstance(code.items, tuple)
        with pytest.raises(AttributeError):
            code.items = ()

    def test_equality_is_structural(self):
        assert parse_code("(1 (2))") == parse_code("( 1 ( 2 ) )")
        assert hash(parse_code("(1 (2))")) == hash(parse_code("(1 (2))"))

    def test_points(self):
        assert points(Atom("x")) == 1
        assert points(CodeList(())) == 1
        assert points(parse_code("(1 2 (3 4))")) == 6

    def test_points_on_deep_tree(self):
        code = Atom("x")
        for _ in range(5000):
            code = CodeList((code,))
        assert points(code) == 5001

    def test_text_of_deep_tree(self):
        code = Atom("x")
        for _ in range(5000):
            code = CodeList((code,))
        assert str(code) == "(" * 5000 + "x" + ")" * 5000

    def test_text_spacing(self):
        assert str(CodeList((Atom("a"), CodeList(()), CodeList((Atom("b"),)), Atom("c")))) == "(a () (b) c)"

    def test_as_list(self):
        assert as_list(Atom("a")) == CodeList((Atom("a"),))
        lst = parse_code("(a b)")
        assert as_list(lst) is lst

    @pytest.mark.parametrize("value,text", [
        (True, "true"),
        (False, "false"),
        (3, "3"),
        (2.0, "2.0"),
        (0.25, "0.25"),
        ("foo", "foo"),
    ])
    def test_value_to_code(self, value, text):
        assert value_to_code(value) == Atom(text)

    def test_format_float(self):
        assert format_float(1e100) == "1e+100"
        assert format_float(float("-inf")) == "-inf"
        assert format_float(float("nan")) == "nan"
