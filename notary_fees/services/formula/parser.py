"""
Recursive-descent parser for fee formulas.

Grammar::

    expr    := term (('+' | '-') term)*
    term    := unary (('*' | '/') unary)*
    unary   := ('-' | '+') unary | primary
    primary := NUMBER | IDENT | IDENT '(' args ')' | '(' expr ')'
    args    := expr (',' expr)*

There is no assignment, comparison, conditional or string syntax; anything
outside the grammar is a FormulaSyntaxError naming the token and position.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Dict, List, Optional, Tuple

from notary_fees.config.settings import settings
from notary_fees.core.exceptions import FormulaSyntaxError
from notary_fees.services.formula.lexer import Token, TokenType, tokenize
from notary_fees.services.formula.nodes import (
    BinaryOp,
    FunctionCall,
    Node,
    Number,
    UnaryOp,
    Variable,
)

__all__ = ["FUNCTION_ARITY", "Parser", "parse"]

# name -> (min args, max args); None means unbounded
FUNCTION_ARITY: Dict[str, Tuple[int, Optional[int]]] = {
    "min": (1, None),
    "max": (1, None),
    "round": (1, 2),
}


class Parser:
    """Parses one formula string into an expression tree."""

    def __init__(self, source: str, max_depth: Optional[int] = None):
        self.source = source
        self.tokens: List[Token] = tokenize(source)
        self.index = 0
        self.depth = 0
        self.max_depth = max_depth or settings.FORMULA_MAX_DEPTH

    # ------------------------------------------------------------------ #
    # Token helpers
    # ------------------------------------------------------------------ #
    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def _advance(self) -> Token:
        token = self.current
        if token.type is not TokenType.EOF:
            self.index += 1
        return token

    def _expect(self, token_type: TokenType) -> Token:
        token = self.current
        if token.type is not token_type:
            raise self._unexpected(token, expected=token_type.value)
        return self._advance()

    @staticmethod
    def _unexpected(token: Token, expected: Optional[str] = None) -> FormulaSyntaxError:
        if token.type is TokenType.EOF:
            message = "Unexpected end of formula"
        else:
            message = f"Unexpected token '{token.text}'"
        if expected:
            message += f", expected '{expected}'"
        return FormulaSyntaxError(message, token=token.text or None, position=token.position)

    def _enter(self, token: Token) -> None:
        self.depth += 1
        if self.depth > self.max_depth:
            raise FormulaSyntaxError(
                f"Formula nesting exceeds {self.max_depth} levels",
                token=token.text,
                position=token.position,
            )

    def _leave(self) -> None:
        self.depth -= 1

    # ------------------------------------------------------------------ #
    # Grammar
    # ------------------------------------------------------------------ #
    def parse(self) -> Node:
        if self.current.type is TokenType.EOF:
            raise FormulaSyntaxError("Formula is empty", position=0)
        node = self._expr()
        if self.current.type is not TokenType.EOF:
            raise self._unexpected(self.current)
        return node

    def _expr(self) -> Node:
        node = self._term()
        while self.current.type in (TokenType.PLUS, TokenType.MINUS):
            op = self._advance()
            node = BinaryOp(op.text, node, self._term(), op.position)
        return node

    def _term(self) -> Node:
        node = self._unary()
        while self.current.type in (TokenType.STAR, TokenType.SLASH):
            op = self._advance()
            node = BinaryOp(op.text, node, self._unary(), op.position)
        return node

    def _unary(self) -> Node:
        if self.current.type in (TokenType.MINUS, TokenType.PLUS):
            op = self._advance()
            self._enter(op)
            operand = self._unary()
            self._leave()
            if op.type is TokenType.PLUS:
                return operand
            return UnaryOp(op.text, operand, op.position)
        return self._primary()

    def _primary(self) -> Node:
        token = self.current

        if token.type is TokenType.NUMBER:
            self._advance()
            return Number(Fraction(token.text), token.position)

        if token.type is TokenType.IDENT:
            self._advance()
            if self.current.type is TokenType.LPAREN:
                return self._call(token)
            if token.text in FUNCTION_ARITY:
                raise FormulaSyntaxError(
                    f"Function '{token.text}' must be called with arguments",
                    token=token.text,
                    position=token.position,
                )
            return Variable(token.text, token.position)

        if token.type is TokenType.LPAREN:
            self._advance()
            self._enter(token)
            node = self._expr()
            self._leave()
            self._expect(TokenType.RPAREN)
            return node

        raise self._unexpected(token)

    def _call(self, name: Token) -> Node:
        if name.text not in FUNCTION_ARITY:
            raise FormulaSyntaxError(
                f"Unknown function '{name.text}'",
                token=name.text,
                position=name.position,
            )

        self._expect(TokenType.LPAREN)
        self._enter(name)
        args: List[Node] = []
        if self.current.type is not TokenType.RPAREN:
            args.append(self._expr())
            while self.current.type is TokenType.COMMA:
                self._advance()
                args.append(self._expr())
        self._leave()
        self._expect(TokenType.RPAREN)

        minimum, maximum = FUNCTION_ARITY[name.text]
        if len(args) < minimum or (maximum is not None and len(args) > maximum):
            raise FormulaSyntaxError(
                f"Function '{name.text}' takes {self._describe_arity(minimum, maximum)} "
                f"argument(s), got {len(args)}",
                token=name.text,
                position=name.position,
            )

        if name.text == "round" and len(args) == 2:
            digits = args[1]
            if not isinstance(digits, Number) or digits.value.denominator != 1:
                raise FormulaSyntaxError(
                    "round() digits must be a whole number literal",
                    token=name.text,
                    position=name.position,
                )
            if digits.value > settings.FORMULA_MAX_ROUND_DIGITS:
                raise FormulaSyntaxError(
                    f"round() digits must not exceed {settings.FORMULA_MAX_ROUND_DIGITS}",
                    token=name.text,
                    position=name.position,
                )

        return FunctionCall(name.text, tuple(args), name.position)

    @staticmethod
    def _describe_arity(minimum: int, maximum: Optional[int]) -> str:
        if maximum is None:
            return f"at least {minimum}"
        if minimum == maximum:
            return str(minimum)
        return f"{minimum} to {maximum}"


def parse(source: str) -> Node:
    """Parse a formula string into an expression tree."""
    if len(source) > settings.FORMULA_MAX_LENGTH:
        raise FormulaSyntaxError(
            f"Formula exceeds {settings.FORMULA_MAX_LENGTH} characters",
            position=settings.FORMULA_MAX_LENGTH,
        )
    return Parser(source).parse()
