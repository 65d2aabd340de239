"""
Restricted arithmetic formulas for the FORMULA calculation method.

Supports numbers, input-field names, parentheses, ``+ - * /``, unary minus
and the functions ``min``, ``max`` and ``round``.
"""

from notary_fees.services.formula.evaluator import (
    Expression,
    compile_formula,
    evaluate,
    evaluate_exact,
    referenced_variables,
)
from notary_fees.services.formula.parser import FUNCTION_ARITY, parse

__all__ = [
    "Expression",
    "FUNCTION_ARITY",
    "compile_formula",
    "evaluate",
    "evaluate_exact",
    "parse",
    "referenced_variables",
]
