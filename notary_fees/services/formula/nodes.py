"""
Expression tree for parsed formulas. Nodes are immutable, so a parsed
tree can be cached and shared between threads.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Tuple, Union

__all__ = [
    "Number",
    "Variable",
    "UnaryOp",
    "BinaryOp",
    "FunctionCall",
    "Node",
]


@dataclass(frozen=True)
class Number:
    value: Fraction
    position: int


@dataclass(frozen=True)
class Variable:
    name: str
    position: int


@dataclass(frozen=True)
class UnaryOp:
    op: str
    operand: "Node"
    position: int


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: "Node"
    right: "Node"
    position: int


@dataclass(frozen=True)
class FunctionCall:
    name: str
    args: Tuple["Node", ...]
    position: int


Node = Union[Number, Variable, UnaryOp, BinaryOp, FunctionCall]
