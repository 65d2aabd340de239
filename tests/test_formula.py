"""Tests for the restricted formula language."""

from decimal import Decimal
from fractions import Fraction

import pytest

from notary_fees.core.exceptions import (
    DivisionByZeroError,
    FormulaSyntaxError,
    MissingVariableError,
)
from notary_fees.services.formula import (
    compile_formula,
    evaluate,
    evaluate_exact,
    referenced_variables,
)
from notary_fees.services.formula.lexer import TokenType, tokenize


class TestTokenizer:
    def test_token_stream(self):
        tokens = tokenize("base * 1.5 + min(a, 2)")
        assert [t.type for t in tokens] == [
            TokenType.IDENT,
            TokenType.STAR,
            TokenType.NUMBER,
            TokenType.PLUS,
            TokenType.IDENT,
            TokenType.LPAREN,
            TokenType.IDENT,
            TokenType.COMMA,
            TokenType.NUMBER,
            TokenType.RPAREN,
            TokenType.EOF,
        ]
        assert tokens[2].text == "1.5"
        assert tokens[2].position == 7

    @pytest.mark.parametrize("char", [">", "?", "=", "'", "^", "%", "&"])
    def test_characters_outside_grammar(self, char):
        with pytest.raises(FormulaSyntaxError) as exc_info:
            tokenize(f"a {char} b")
        assert exc_info.value.token == char
        assert exc_info.value.position == 2


class TestEvaluation:
    @pytest.mark.parametrize(
        "source, expected",
        [
            ("1 + 2 * 3", Decimal("7")),
            ("(1 + 2) * 3", Decimal("9")),
            ("10 / 4", Decimal("2.5")),
            ("10 - 4 - 3", Decimal("3")),
            ("-3 + 5", Decimal("2")),
            ("--3", Decimal("3")),
            ("+4", Decimal("4")),
            ("2 * -3", Decimal("-6")),
        ],
    )
    def test_arithmetic(self, source, expected):
        assert evaluate(source, {}) == expected

    def test_variables(self):
        assert evaluate("base * qty + 20000", {"base": 50000, "qty": 3}) == Decimal("170000")

    def test_numeric_strings_are_accepted(self):
        assert evaluate("price * 2", {"price": "1500"}) == Decimal("3000")

    def test_decimal_inputs_are_exact(self):
        assert evaluate("a + b", {"a": 0.1, "b": 0.2}) == Decimal("0.3")
        assert evaluate("a * 3", {"a": Decimal("0.1")}) == Decimal("0.3")

    def test_exact_result(self):
        assert evaluate_exact("1 / 3", {}) == Fraction(1, 3)

    def test_min_max(self):
        assert evaluate("min(3, x, 5)", {"x": 1}) == Decimal("1")
        assert evaluate("max(3, x, 5)", {"x": 1}) == Decimal("5")
        assert evaluate("max(value * 0.01, 20000)", {"value": 1_000_000}) == Decimal("20000")

    @pytest.mark.parametrize(
        "source, expected",
        [
            ("round(2.5)", Decimal("3")),
            ("round(-2.5)", Decimal("-3")),
            ("round(2.4)", Decimal("2")),
            ("round(1.2345, 2)", Decimal("1.23")),
            ("round(1.235, 2)", Decimal("1.24")),
            ("round(123456, -3)", None),
        ],
    )
    def test_round_half_up(self, source, expected):
        if expected is None:
            with pytest.raises(FormulaSyntaxError):
                evaluate(source, {})
        else:
            assert evaluate(source, {}) == expected

    def test_deterministic(self):
        data = {"base": 123457, "qty": 7}
        results = {evaluate("base / qty * 3", data) for _ in range(5)}
        assert len(results) == 1


class TestEvaluationErrors:
    def test_missing_variable(self):
        with pytest.raises(MissingVariableError) as exc_info:
            evaluate("base * qty", {"base": 1})
        assert exc_info.value.name == "qty"

    def test_null_variable_is_missing(self):
        with pytest.raises(MissingVariableError):
            evaluate("base", {"base": None})

    @pytest.mark.parametrize("value", [True, "", "twelve", [1]])
    def test_wrongly_typed_variable(self, value):
        with pytest.raises(MissingVariableError):
            evaluate("base * 2", {"base": value})

    def test_division_by_zero(self):
        with pytest.raises(DivisionByZeroError):
            evaluate("price / (qty - qty)", {"price": 100, "qty": 2})

    def test_division_by_zero_literal(self):
        with pytest.raises(DivisionByZeroError):
            evaluate("1 / 0", {})

    def test_huge_exponent_is_out_of_range(self):
        with pytest.raises(MissingVariableError) as exc_info:
            evaluate("x * 2", {"x": "1e3000000"})
        assert exc_info.value.details == {"variable": "x", "reason": "out of range"}


class TestSyntaxErrors:
    def test_ternary_is_rejected(self):
        with pytest.raises(FormulaSyntaxError) as exc_info:
            compile_formula("base * qty + (qty > 10 ? 0 : 0)")
        assert exc_info.value.token == ">"
        assert exc_info.value.position == 18

    @pytest.mark.parametrize(
        "source, position",
        [
            ("", 0),
            ("   ", 0),
            ("1 +", 3),
            ("(1 + 2", 6),
            ("1 + 2)", 5),
            ("1 2", 2),
            ("sqrt(4)", 0),
            ("max", 0),
            ("min()", 0),
            ("round(1, 2, 3)", 0),
            ("round(x, y)", 0),
            ("round(1, 1.5)", 0),
            ("f(,)", 0),
        ],
    )
    def test_error_positions(self, source, position):
        with pytest.raises(FormulaSyntaxError) as exc_info:
            compile_formula(source)
        assert exc_info.value.position == position
        assert f"at position {position}" in exc_info.value.message

    def test_nesting_limit(self):
        compile_formula("(" * 50 + "1" + ")" * 50)
        with pytest.raises(FormulaSyntaxError, match="nesting"):
            compile_formula("(" * 51 + "1" + ")" * 51)

    def test_length_limit(self):
        with pytest.raises(FormulaSyntaxError, match="exceeds"):
            compile_formula("1+" * 600 + "1")

    def test_round_digits_limit(self):
        assert evaluate("round(x, 18)", {"x": "1.5"}) == Decimal("1.5")
        with pytest.raises(FormulaSyntaxError, match="must not exceed 18") as exc_info:
            compile_formula("round(x, 3000000)")
        assert exc_info.value.token == "round"
        assert exc_info.value.position == 0


class TestCompilation:
    def test_referenced_variables(self):
        assert referenced_variables("base * qty + min(base, 3)") == frozenset({"base", "qty"})
        assert referenced_variables("1 + 2") == frozenset()

    def test_function_names_are_not_variables(self):
        assert referenced_variables("round(value)") == frozenset({"value"})

    def test_compiled_formulas_are_cached(self):
        assert compile_formula("a + b") is compile_formula("a + b")
