"""
Tree-walking evaluator for parsed fee formulas.

Arithmetic is exact (Fraction). The evaluator reads only the supplied
variables: no I/O, no clock, no randomness, and evaluation of a finite
tree always terminates.
"""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction
from functools import lru_cache
from typing import Any, FrozenSet, Mapping

from notary_fees.core.exceptions import DivisionByZeroError
from notary_fees.core.money import fraction_to_decimal, round_half_up
from notary_fees.services.formula.nodes import (
    BinaryOp,
    FunctionCall,
    Node,
    Number,
    UnaryOp,
    Variable,
)
from notary_fees.services.formula.parser import parse
from notary_fees.utils.input_data import read_number

__all__ = [
    "Expression",
    "compile_formula",
    "evaluate",
    "evaluate_exact",
    "referenced_variables",
]


def _round(value: Fraction, digits: int = 0) -> Fraction:
    factor = Fraction(10) ** digits
    return Fraction(round_half_up(value * factor)) / factor


class Expression:
    """A parsed formula ready to be evaluated against input data."""

    def __init__(self, source: str, tree: Node):
        self.source = source
        self.tree = tree
        self.variables: FrozenSet[str] = frozenset(self._collect_variables(tree))

    @classmethod
    def _collect_variables(cls, node: Node):
        if isinstance(node, Variable):
            yield node.name
        elif isinstance(node, UnaryOp):
            yield from cls._collect_variables(node.operand)
        elif isinstance(node, BinaryOp):
            yield from cls._collect_variables(node.left)
            yield from cls._collect_variables(node.right)
        elif isinstance(node, FunctionCall):
            for arg in node.args:
                yield from cls._collect_variables(arg)

    def evaluate_exact(self, variables: Mapping[str, Any]) -> Fraction:
        return self._eval(self.tree, variables)

    def evaluate(self, variables: Mapping[str, Any]) -> Decimal:
        return fraction_to_decimal(self.evaluate_exact(variables))

    def _eval(self, node: Node, variables: Mapping[str, Any]) -> Fraction:
        if isinstance(node, Number):
            return node.value

        if isinstance(node, Variable):
            return read_number(variables, node.name)

        if isinstance(node, UnaryOp):
            return -self._eval(node.operand, variables)

        if isinstance(node, BinaryOp):
            left = self._eval(node.left, variables)
            right = self._eval(node.right, variables)
            if node.op == "+":
                return left + right
            if node.op == "-":
                return left - right
            if node.op == "*":
                return left * right
            if right == 0:
                raise DivisionByZeroError(self.source)
            return left / right

        if isinstance(node, FunctionCall):
            args = [self._eval(arg, variables) for arg in node.args]
            if node.name == "min":
                return min(args)
            if node.name == "max":
                return max(args)
            if len(args) == 2:
                return _round(args[0], int(args[1]))
            return _round(args[0])

        raise TypeError(f"Unknown node type: {type(node).__name__}")

    def __repr__(self) -> str:
        return f"Expression({self.source!r})"


@lru_cache(maxsize=256)
def compile_formula(source: str) -> Expression:
    """Parse a formula once; repeated calls return the cached expression."""
    return Expression(source, parse(source))


def referenced_variables(source: str) -> FrozenSet[str]:
    """Names of all input fields a formula reads."""
    return compile_formula(source).variables


def evaluate_exact(source: str, variables: Mapping[str, Any]) -> Fraction:
    return compile_formula(source).evaluate_exact(variables)


def evaluate(source: str, variables: Mapping[str, Any]) -> Decimal:
    """Evaluate a formula against input data and return a Decimal."""
    return compile_formula(source).evaluate(variables)
