"""
Declaration Parser Test Suite
=============================

Tests for the recursive descent parser, covering declarations, signed
literals, operator grouping, parenthesis groups and error reporting.

Test Organization
-----------------
- TestDeclarations: declarator, name, type annotation, whitespace
- TestSignedLiterals: unary '+' and '-'
- TestOperations: single operators and associativity
- TestPrecedence: '*' and '/' inside additive chains
- TestParenthesisGroups: grouping and the nested-group limitation
- TestExpressionEnd: trailing input and line breaks
- TestLongChains: long operator chains
- TestErrors: every failure kind and its location
"""

import logging

import pytest
from vardecl.parser import Parser, parse
from vardecl.lexer import TokenKind
from vardecl.ast import (
    BinaryOperation,
    BinaryOperator,
    Declarator,
    Identifier,
    NumericLiteral,
    VariableDeclaration,
)
from vardecl.errors import (
    VardeclError,
    ParseError,
    LexicalError,
    UnexpectedTokenError,
    InvalidNumberError,
)


# =============================================================================
# Helper Functions
# =============================================================================

def num(value) -> NumericLiteral:
    return NumericLiteral(float(value))


def add(left, right) -> BinaryOperation:
    return BinaryOperation(BinaryOperator.SUM, _wrap(left), _wrap(right))


def sub(left, right) -> BinaryOperation:
    return BinaryOperation(BinaryOperator.SUB, _wrap(left), _wrap(right))


def mul(left, right) -> BinaryOperation:
    return BinaryOperation(BinaryOperator.MULTIPLICATION, _wrap(left), _wrap(right))


def div(left, right) -> BinaryOperation:
    return BinaryOperation(BinaryOperator.DIVISION, _wrap(left), _wrap(right))


def _wrap(operand):
    if isinstance(operand, (int, float)):
        return num(operand)
    return operand


def value_of(source: str):
    """Parse a declaration and return only its value expression."""
    return parse(source).value


def evaluate(expr) -> float:
    """Evaluate a value expression (test helper only)."""
    if isinstance(expr, NumericLiteral):
        return expr.value
    left = evaluate(expr.left)
    right = evaluate(expr.right)
    return {
        BinaryOperator.SUM: lambda: left + right,
        BinaryOperator.SUB: lambda: left - right,
        BinaryOperator.MULTIPLICATION: lambda: left * right,
        BinaryOperator.DIVISION: lambda: left / right,
    }[expr.operator]()


# =============================================================================
# Declaration Tests
# =============================================================================

class TestDeclarations:
    """Declarator, identifier and optional type annotation."""

    @pytest.mark.parametrize("source,declarator,name,value", [
        ("const foo = 1", Declarator.CONST, "foo", 1),
        ("let bar = 3.1", Declarator.LET, "bar", 3.1),
        ("var baz=1", Declarator.VAR, "baz", 1),
        ("const   spaced   =   7", Declarator.CONST, "spaced", 7),
        ("let x =2", Declarator.LET, "x", 2),
        ("var y= .5", Declarator.VAR, "y", 0.5),
        ("  const padded = 4  ", Declarator.CONST, "padded", 4),
    ])
    def test_simple_declarations(self, source, declarator, name, value):
        ast = parse(source)
        assert ast.declarator == declarator
        assert ast.name == name
        assert ast.type_annotation is None
        assert ast.value == num(value)

    def test_full_tree(self):
        assert parse("const foo = 1") == VariableDeclaration(
            Declarator.CONST,
            Identifier("foo"),
            num(1),
        )

    def test_declarator_compares_to_keyword(self):
        assert parse("let x = 1").declarator == "let"

    def test_type_annotation(self):
        ast = parse("const foo: number = 1")
        assert ast.identifier == Identifier("foo", "number")
        assert ast.type_annotation == "number"
        assert ast.value == num(1)

    def test_type_annotation_is_not_validated(self):
        """Any identifier-shaped word is accepted verbatim."""
        ast = parse("let bar : Whatever = 2")
        assert ast.type_annotation == "Whatever"

    def test_type_annotation_without_spaces(self):
        ast = parse("var baz:string=3")
        assert ast.name == "baz"
        assert ast.type_annotation == "string"

    def test_parse_is_deterministic(self):
        source = "const x = (1 + 2) * 3 - 4 / 5 + 6"
        assert parse(source) == parse(source)

    def test_parser_instance(self):
        parser = Parser("let y = 2 * 3", filename="decl.txt")
        assert parser.parse().value == mul(2, 3)


# =============================================================================
# Signed Literal Tests
# =============================================================================

class TestSignedLiterals:
    """A leading sign belongs to the literal, not to an operation."""

    def test_negative_number(self):
        assert value_of("var x=-1") == num(-1)

    def test_explicit_positive_number(self):
        assert value_of("const foo = +3.2") == num(3.2)

    def test_negative_with_space(self):
        assert value_of("let x = - 4") == num(-4)

    def test_negative_left_operand(self):
        assert value_of("const x = -2 + 3") == add(-2, 3)

    def test_negative_right_operand(self):
        assert value_of("const x = 2 * -3") == mul(2, -3)

    def test_subtract_negative(self):
        assert value_of("const x = 1 - -2") == sub(1, -2)


# =============================================================================
# Operation Tests
# =============================================================================

class TestOperations:
    """Single operators and associativity."""

    def test_sum(self):
        assert value_of("const sum=2+3") == add(2, 3)

    def test_subtraction(self):
        assert value_of("const myVar =4-10") == sub(4, 10)

    def test_multiplication(self):
        assert value_of("const myVar =4*10") == mul(4, 10)

    def test_division(self):
        assert value_of("const half = 8 / 2") == div(8, 2)

    def test_sums_are_left_associative(self):
        assert value_of("const foo =1+2+3") == add(add(1, 2), 3)

    def test_sums_and_subtractions_are_left_associative(self):
        """1-2+3-4 groups as ((1-2)+3)-4."""
        value = value_of("const x=1-2+3-4")
        assert value == sub(add(sub(1, 2), 3), 4)
        assert evaluate(value) == -2

    def test_subtractions_are_left_associative(self):
        value = value_of("const x = 10 - 4 - 3")
        assert value == sub(sub(10, 4), 3)
        assert evaluate(value) == 3

    def test_products_are_left_associative(self):
        assert value_of("const x = 2*3*4") == mul(mul(2, 3), 4)

    def test_divisions_are_left_associative(self):
        value = value_of("const x = 8/4/2")
        assert value == div(div(8, 4), 2)
        assert evaluate(value) == 1

    def test_mixed_multiplicative_chain(self):
        value = value_of("const x = 8/4*2/2")
        assert value == div(mul(div(8, 4), 2), 2)
        assert evaluate(value) == 2


# =============================================================================
# Precedence Tests
# =============================================================================

class TestPrecedence:
    """'*' and '/' bind tighter than '+' and '-'."""

    def test_product_after_sum(self):
        assert value_of("const x = 1+2*3") == add(1, mul(2, 3))

    def test_product_before_sum(self):
        assert value_of("const x = 2*3+4") == add(mul(2, 3), 4)

    def test_quotient_before_difference(self):
        assert value_of("const x = 9/3-1") == sub(div(9, 3), 1)

    def test_mixed_chain(self):
        """Each product is an isolated node inside the additive chain."""
        assert value_of("const foo=1+2*3-4/5+6") == add(
            1,
            sub(
                mul(2, 3),
                add(div(4, 5), 6),
            ),
        )

    def test_product_in_middle_of_chain(self):
        value = value_of("const x = 1-2+3*4-5")
        assert value == add(sub(1, 2), sub(mul(3, 4), 5))
        assert evaluate(value) == 6

    def test_grouping_steps_are_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="vardecl.parser"):
            parse("const foo=1+2*3-4/5+6")
        messages = [record.getMessage() for record in caplog.records]
        assert "Grouping * into product term 1" in messages
        assert "Regrouping + after product term 2 under -" in messages
        assert "Regrouping - after product term 1 under +" in messages


# =============================================================================
# Parenthesis Group Tests
# =============================================================================

class TestParenthesisGroups:
    """One level of grouping."""

    def test_group_times_number(self):
        assert value_of("const x=(1+2)*3") == mul(add(1, 2), 3)

    def test_group_alone(self):
        value = value_of("const x=(1+2)")
        assert value == add(1, 2)
        assert value.parenthesized

    def test_group_with_single_number(self):
        assert value_of("const x = (5)") == num(5)

    def test_number_times_group(self):
        assert value_of("const x = 2*(3+4)") == mul(2, add(3, 4))

    def test_group_keeps_subtraction_intact(self):
        value = value_of("const x = 1-(2+3)")
        assert value == sub(1, add(2, 3))
        assert evaluate(value) == -4

    def test_group_times_group_minus_number(self):
        assert value_of("const foo=(1.1+2)*(3+4)-5.2") == sub(
            mul(add(1.1, 2), add(3, 4)),
            5.2,
        )

    def test_group_then_sum(self):
        assert value_of("const x = (2*3)+1") == add(mul(2, 3), 1)

    def test_nested_groups_are_not_supported(self):
        with pytest.raises(LexicalError):
            parse("const x = (1+(2*3))")


# =============================================================================
# Expression End Tests
# =============================================================================

class TestExpressionEnd:
    """An expression ends at end of input or at a final dangling token."""

    def test_trailing_whitespace(self):
        assert value_of("const x = 1 + 2   ") == add(1, 2)

    def test_dangling_final_operator_is_ignored(self):
        assert value_of("const x = 1 +") == num(1)

    def test_newline_is_whitespace(self):
        assert value_of("const x =\n 1 + 2") == add(1, 2)

    def test_declaration_split_across_lines(self):
        ast = parse("let\ny\n:\nnumber\n=\n2\n*\n3\n")
        assert ast.name == "y"
        assert ast.type_annotation == "number"
        assert ast.value == mul(2, 3)


# =============================================================================
# Long Chain Tests
# =============================================================================

def left_spine(expr):
    """Walk down the left operands, returning the operators seen and the leaf."""
    operators = []
    while isinstance(expr, BinaryOperation):
        operators.append(expr.operator)
        assert isinstance(expr.right, NumericLiteral)
        expr = expr.left
    return operators, expr


class TestLongChains:
    """Long operator chains build without deep recursion."""

    def test_long_sum(self):
        operators, leaf = left_spine(value_of("const x = " + "+".join(["1"] * 2000)))
        assert operators == [BinaryOperator.SUM] * 1999
        assert leaf == num(1)

    def test_long_product(self):
        operators, leaf = left_spine(value_of("const x = " + "*".join(["2"] * 1000)))
        assert operators == [BinaryOperator.MULTIPLICATION] * 999
        assert leaf == num(2)

    def test_long_alternating_sum(self):
        operators, leaf = left_spine(value_of("let x = " + " - 1 + ".join(["1"] * 1000)))
        assert operators[0] == BinaryOperator.SUM
        assert operators[-1] == BinaryOperator.SUB
        assert len(operators) == 1998
        assert leaf == num(1)

    def test_long_mixed_chain(self):
        source = "var x = " + " + ".join(["2 * 3 / (1 - 4)"] * 500)
        ast = parse(source)
        top = ast.value
        assert top.operator == BinaryOperator.SUM
        assert top.right.operator == BinaryOperator.SUM


# =============================================================================
# Error Tests
# =============================================================================

class TestErrors:
    """Every failure is fatal and carries its context."""

    def test_missing_declarator(self):
        with pytest.raises(UnexpectedTokenError, match="Expected declarator") as exc_info:
            parse("foo = 1")
        assert exc_info.value.found == TokenKind.IDENTIFIER
        assert exc_info.value.expected == "declarator"

    def test_empty_source(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse("")
        assert exc_info.value.found == TokenKind.END_OF_INPUT

    def test_missing_identifier(self):
        with pytest.raises(UnexpectedTokenError, match="Expected a variable name") as exc_info:
            parse("const = 1")
        assert exc_info.value.found == TokenKind.EQUAL

    def test_declarator_as_name(self):
        with pytest.raises(UnexpectedTokenError):
            parse("let var = 1")

    def test_missing_equal(self):
        with pytest.raises(UnexpectedTokenError, match="Expected '=' character") as exc_info:
            parse("const x 1")
        assert exc_info.value.found == TokenKind.NUMERIC_LITERAL
        assert exc_info.value.remainder == " 1"

    def test_missing_type_annotation(self):
        with pytest.raises(UnexpectedTokenError, match="type annotation") as exc_info:
            parse("const x: = 1")
        assert exc_info.value.found == TokenKind.EQUAL

    def test_sign_without_number(self):
        with pytest.raises(InvalidNumberError, match="Expected a float number"):
            parse("const x=+")

    def test_sign_followed_by_operator(self):
        with pytest.raises(InvalidNumberError):
            parse("const x = - * 2")

    def test_missing_value(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse("const x =")
        assert exc_info.value.found == TokenKind.END_OF_INPUT

    def test_value_starts_with_operator(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse("const x = * 2")
        assert exc_info.value.found == TokenKind.MULTIPLICATION_OPERATOR

    def test_missing_operator(self):
        with pytest.raises(UnexpectedTokenError, match="mathematical operator") as exc_info:
            parse("const x = 2 3 4")
        assert exc_info.value.found == TokenKind.NUMERIC_LITERAL

    def test_unknown_operator(self):
        with pytest.raises(LexicalError) as exc_info:
            parse("const x = 1 % 2")
        assert exc_info.value.text == "% 2"
        assert exc_info.value.location.column == 13

    def test_error_location_and_caret(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse("const x 1")
        error = exc_info.value
        assert error.location.line == 1
        assert error.location.column == 9
        lines = str(error).splitlines()
        assert lines[0].startswith("<input>:1:9: error: Expected '=' character.")
        assert lines[1] == "    const x 1"
        assert lines[2] == " " * 12 + "^"

    def test_error_location_inside_group(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse("const x=(1+*)")
        # Column of the '*' inside the group
        assert exc_info.value.location.column == 12

    def test_error_location_on_later_line(self):
        with pytest.raises(LexicalError) as exc_info:
            parse("const x =\n 1 %")
        error = exc_info.value
        assert error.location.line == 2
        assert error.location.column == 4
        lines = str(error).splitlines()
        assert lines[0].startswith("<input>:2:4: error:")
        assert lines[1] == "     1 %"
        assert lines[2] == " " * 7 + "^"

    def test_error_on_later_line_inside_group(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse("let y\n  = 2 * (1 + *)")
        error = exc_info.value
        assert error.location.line == 2
        assert error.location.column == 14
        assert error.source_line == "  = 2 * (1 + *)"

    def test_error_uses_filename(self):
        with pytest.raises(ParseError) as exc_info:
            parse("foo = 1", filename="decl.txt")
        assert str(exc_info.value).startswith("decl.txt:1:1: error:")

    @pytest.mark.parametrize("source", [
        "foo = 1",
        "const = 1",
        "const x 1",
        "const x=+",
        "const x = (1+(2*3))",
    ])
    def test_all_errors_share_base_class(self, source):
        with pytest.raises(VardeclError):
            parse(source)
