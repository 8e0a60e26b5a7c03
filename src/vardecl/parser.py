"""
Declaration Recursive Descent Parser
====================================

This module implements the parser for a single variable declaration. It
drives the tokenizer one token at a time over the remaining input and
builds the AST defined in vardecl.ast.

Grammar (Simplified EBNF)
-------------------------
declaration     ::= DECLARATOR IDENTIFIER (':' IDENTIFIER)? '=' value
value           ::= operand (operator operand)*
operand         ::= signed_number | PARENTHESIS_GROUP
signed_number   ::= ('+' | '-')? NUMBER
operator        ::= '+' | '-' | '*' | '/'

A parenthesis group is parsed as a `value` of its own inner text. Line
breaks count as whitespace, so a declaration may span several lines.

Operator Grouping
-----------------
The operands and operators of a value are collected first and then
folded into a tree in two passes, so chains of any length are built in
linear time without deep recursion:

- '*' and '/' bind only the operands next to them. Each run of them is
  folded left to right into a product term: `8/4*2` becomes
  `mult(div(8, 4), 2)` and `2*3-4` becomes `sub(mult(2, 3), 4)`.
- '+' and '-' join the terms right to left. A term that is not a product
  extends the chain to the left, giving left-associative chains:
  `1-2+3-4` becomes `sub(sum(sub(1, 2), 3), 4)`. A product term instead
  takes the operation to its right as a subtree, so
  `1+2*3-4/5+6` becomes `sum(1, sub(mult(2, 3), sum(div(4, 5), 6)))`.

A parenthesis group is always a single operand of the fold and is never
split or regrouped.

Example Usage
-------------
>>> from vardecl.parser import parse
>>> ast = parse("const foo: number = (1 + 2) * 3")
>>> ast.name, ast.type_annotation
('foo', 'number')
"""

import logging
from dataclasses import replace
from typing import Optional

from vardecl.errors import (
    SourceLocation,
    LexicalError,
    UnexpectedTokenError,
    InvalidNumberError,
)
from vardecl.lexer import Token, TokenKind, Tokenizer
from vardecl.ast import (
    Declarator,
    Identifier,
    VariableDeclaration,
    Expression,
    NumericLiteral,
    BinaryOperation,
    BinaryOperator,
)


logger = logging.getLogger(__name__)


# Operator tokens accepted between two operands
OPERATOR_TOKENS: dict[TokenKind, BinaryOperator] = {
    TokenKind.PLUS_OPERATOR: BinaryOperator.SUM,
    TokenKind.MINUS_OPERATOR: BinaryOperator.SUB,
    TokenKind.MULTIPLICATION_OPERATOR: BinaryOperator.MULTIPLICATION,
    TokenKind.DIVISION_OPERATOR: BinaryOperator.DIVISION,
}

# Token kinds that can start a signed numeric literal
NUMBER_START_TOKENS = (
    TokenKind.NUMERIC_LITERAL,
    TokenKind.PLUS_OPERATOR,
    TokenKind.MINUS_OPERATOR,
)

DEFAULT_TOKENIZER = Tokenizer()


class Parser:
    """
    Recursive descent parser for one declaration.

    A parser instance handles one source string. There is no error
    recovery: the first problem raises and the parse is abandoned.

    Attributes:
        source: The declaration text
        filename: Source name used in error locations
        tokenizer: Tokenizer used to classify tokens (stateless, shareable)
    """

    def __init__(
        self,
        source: str,
        filename: str = "<input>",
        tokenizer: Optional[Tokenizer] = None,
    ):
        self.source = source
        self.filename = filename
        self.tokenizer = tokenizer or DEFAULT_TOKENIZER

    def parse(self) -> VariableDeclaration:
        """
        Parse the source into a VariableDeclaration.

        Raises:
            LexicalError: If the input contains an unrecognized token
            UnexpectedTokenError: If a token does not fit the grammar
            InvalidNumberError: If a sign is not followed by a number
        """
        end = len(self.source)
        token = self._next_token(self.source, end)

        if token.kind != TokenKind.DECLARATOR:
            raise self._unexpected(
                "Expected declarator.",
                "declarator",
                token,
                self.source,
                end,
                hint="start the declaration with 'const', 'let' or 'var'",
            )

        declarator = Declarator(token.text)
        identifier, rest = self._parse_identifier(token.remainder, end)
        value = self._parse_assignment(rest, end)

        declaration = VariableDeclaration(declarator, identifier, value)
        logger.debug("Parsed %s %s", declarator.value, identifier.name)
        return declaration

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _next_token(self, text: str, end: int) -> Token:
        """Tokenize `text`, attaching the source location to lexical errors."""
        try:
            return self.tokenizer.next_token(text)
        except LexicalError as e:
            location = self._location(text, end)
            raise LexicalError(
                e.text,
                location=location,
                source_line=self._source_line(location),
            ) from e

    def _location(self, text: str, end: int) -> SourceLocation:
        """
        Location of the first non-blank character of `text`.

        `text` is always a suffix of the source slice that ends at offset
        `end`; inside a parenthesis group `end` is the offset of its ')'.
        """
        offset = end - len(text.lstrip())
        line = self.source.count("\n", 0, offset) + 1
        line_start = self.source.rfind("\n", 0, offset) + 1
        return SourceLocation(self.filename, line, offset - line_start + 1)

    def _source_line(self, location: SourceLocation) -> str:
        """Text of the source line a location points into."""
        return self.source.split("\n")[location.line - 1].rstrip("\r")

    def _unexpected(
        self,
        message: str,
        expected: str,
        token: Token,
        text: str,
        end: int,
        hint: Optional[str] = None,
    ) -> UnexpectedTokenError:
        location = self._location(text, end)
        return UnexpectedTokenError(
            message,
            expected,
            found=token.kind,
            remainder=text,
            location=location,
            hint=hint,
            source_line=self._source_line(location),
        )

    # =========================================================================
    # Declaration Parsing
    # =========================================================================

    def _parse_identifier(self, text: str, end: int) -> tuple[Identifier, str]:
        """
        Parse `name` or `name: type`.

        Returns:
            The Identifier and the input remaining after it
        """
        token = self._next_token(text, end)

        if token.kind != TokenKind.IDENTIFIER:
            raise self._unexpected(
                f"Expected a variable name. Received '{text.strip()}' instead.",
                "variable name",
                token,
                text,
                end,
            )

        lookahead = self._next_token(token.remainder, end)
        if lookahead.kind != TokenKind.COLON:
            return Identifier(token.text), token.remainder

        annotation = self._next_token(lookahead.remainder, end)
        if annotation.kind != TokenKind.IDENTIFIER:
            raise self._unexpected(
                f"Expected a type annotation. Received '{lookahead.remainder.strip()}' instead.",
                "type annotation",
                annotation,
                lookahead.remainder,
                end,
            )

        return Identifier(token.text, annotation.text), annotation.remainder

    def _parse_assignment(self, text: str, end: int) -> Expression:
        """Parse `= value`."""
        token = self._next_token(text, end)

        if token.kind != TokenKind.EQUAL:
            raise self._unexpected(
                f"Expected '=' character. Received '{text.strip()}' instead.",
                "'='",
                token,
                text,
                end,
                hint="a declaration looks like 'const name = 1'",
            )

        return self._parse_value_expression(token.remainder, end)

    # =========================================================================
    # Value Expression Parsing
    # =========================================================================

    def _parse_value_expression(self, text: str, end: int) -> Expression:
        """
        Parse an operand followed by any number of `operator operand` pairs.

        The expression ends at END_OF_INPUT or when the token after an
        operand is the last thing in the input.
        """
        operand, rest = self._parse_operand(text, end)
        operands = [operand]
        operators: list[BinaryOperator] = []

        while True:
            lookahead = self._next_token(rest, end)

            if lookahead.kind == TokenKind.END_OF_INPUT or not lookahead.remainder:
                break

            operator = OPERATOR_TOKENS.get(lookahead.kind)
            if operator is None:
                raise self._unexpected(
                    f"Expected mathematical operator ('+', '-', '*', '/'). "
                    f"Received {lookahead.kind.name} from '{rest.strip()}'",
                    "operator",
                    lookahead,
                    rest,
                    end,
                )

            operand, rest = self._parse_operand(lookahead.remainder, end)
            operators.append(operator)
            operands.append(operand)

        return _build_sums(*_build_products(operands, operators))

    def _parse_operand(self, text: str, end: int) -> tuple[Expression, str]:
        """
        Parse a signed number or a parenthesis group.

        Returns:
            The operand and the input remaining after it
        """
        token = self._next_token(text, end)

        if token.kind == TokenKind.PARENTHESIS_GROUP:
            return self._parse_parenthesis_group(token, end), token.remainder

        if token.kind not in NUMBER_START_TOKENS:
            raise self._unexpected(
                f"Expected a NumericLiteral | '+' | '-'. "
                f"Received {token.kind.name} from '{text.strip()}' instead.",
                "numeric literal",
                token,
                text,
                end,
            )

        return self._parse_numeric_literal(token, end)

    def _parse_parenthesis_group(self, token: Token, end: int) -> Expression:
        """Parse the inner text of a group as a value of its own."""
        # The inner text ends right before the group's closing parenthesis
        inner_end = end - len(token.remainder) - 1
        inner = self._parse_value_expression(token.text, inner_end)

        if isinstance(inner, BinaryOperation):
            inner = replace(inner, parenthesized=True)

        return inner

    def _parse_numeric_literal(self, token: Token, end: int) -> tuple[NumericLiteral, str]:
        """
        Parse a number with an optional leading sign.

        Returns:
            The literal and the input remaining after it
        """
        if token.kind == TokenKind.NUMERIC_LITERAL:
            return NumericLiteral(float(token.text)), token.remainder

        number = self._next_token(token.remainder, end)
        if number.kind != TokenKind.NUMERIC_LITERAL:
            location = self._location(token.remainder, end)
            raise InvalidNumberError(
                token.remainder.strip(),
                location=location,
                source_line=self._source_line(location),
            )

        value = float(number.text)
        if token.kind == TokenKind.MINUS_OPERATOR:
            value = -value

        return NumericLiteral(value), number.remainder


# =============================================================================
# Operator Grouping
# =============================================================================

def _build_products(
    operands: list[Expression],
    operators: list[BinaryOperator],
) -> tuple[list[Expression], list[BinaryOperator]]:
    """
    Fold every run of '*' and '/' into a left-associative product term.

    Returns:
        The additive terms and the '+'/'-' operators between them
    """
    terms = [operands[0]]
    additive: list[BinaryOperator] = []

    for operator, operand in zip(operators, operands[1:]):
        if operator.is_multiplicative:
            logger.debug("Grouping %s into product term %d", operator.symbol, len(terms) - 1)
            terms[-1] = BinaryOperation(operator, terms[-1], operand)
        else:
            additive.append(operator)
            terms.append(operand)

    return terms, additive


def _build_sums(terms: list[Expression], operators: list[BinaryOperator]) -> Expression:
    """
    Join additive terms right to left.

    The tree is kept as its leftmost operand plus the (operator, right)
    pairs of its left spine, outermost first. A product term closes the
    innermost pair into a subtree before the next operator is added.
    """
    leftmost = terms[-1]
    spine: list[tuple[BinaryOperator, Expression]] = []

    for index in range(len(terms) - 2, -1, -1):
        operator = operators[index]
        if spine and _is_product(leftmost):
            inner_operator, inner_right = spine.pop()
            logger.debug(
                "Regrouping %s after product term %d under %s",
                inner_operator.symbol, index + 1, operator.symbol,
            )
            spine.append((operator, BinaryOperation(inner_operator, leftmost, inner_right)))
        else:
            spine.append((operator, leftmost))
        leftmost = terms[index]

    expression = leftmost
    for operator, right in reversed(spine):
        expression = BinaryOperation(operator, expression, right)
    return expression


def _is_product(expr: Expression) -> bool:
    return (
        isinstance(expr, BinaryOperation)
        and not expr.parenthesized
        and expr.operator.is_multiplicative
    )


# =============================================================================
# Convenience Functions
# =============================================================================

def parse(source: str, filename: str = "<input>") -> VariableDeclaration:
    """
    Parse one declaration into an AST.

    Args:
        source: Declaration text, e.g. "let x: number = 2 * (3 + 4)"
        filename: Source name used in error locations

    Returns:
        The VariableDeclaration root node

    Raises:
        ParseError: If the source is not a valid declaration
    """
    return Parser(source, filename).parse()
