"""
Declaration Abstract Syntax Tree (AST) Definitions
==================================================

This module defines the AST node types produced by the declaration parser.

Node Hierarchy
--------------
ASTNode (base)
├── VariableDeclaration - root node: declarator, identifier, value
├── Identifier - declared name with optional type annotation
└── Expressions
    ├── NumericLiteral - float constant (sign already applied)
    └── BinaryOperation - +, -, *, / over two sub-expressions

Design Notes
------------
- All nodes are frozen dataclasses; a tree is immutable once built
- Children are owned by exactly one parent, there is no sharing
- Structural equality (==) compares declarator, names and tree shape
- to_dict() gives the JSON-ready shape consumed by external tooling
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Optional


# =============================================================================
# Enumerations
# =============================================================================

class Declarator(str, Enum):
    """Keyword introducing a variable binding."""
    CONST = "const"
    LET = "let"
    VAR = "var"

    def __str__(self) -> str:
        return self.value


class BinaryOperator(Enum):
    """Binary arithmetic operator types."""
    SUM = auto()              # +
    SUB = auto()              # -
    MULTIPLICATION = auto()   # *
    DIVISION = auto()         # /

    @property
    def symbol(self) -> str:
        return _OPERATOR_SYMBOLS[self]

    @property
    def node_type(self) -> str:
        """Name used for this operation in to_dict() output."""
        return _OPERATOR_NODE_TYPES[self]

    @property
    def is_multiplicative(self) -> bool:
        return self in (BinaryOperator.MULTIPLICATION, BinaryOperator.DIVISION)

    @property
    def is_additive(self) -> bool:
        return self in (BinaryOperator.SUM, BinaryOperator.SUB)


_OPERATOR_SYMBOLS = {
    BinaryOperator.SUM: "+",
    BinaryOperator.SUB: "-",
    BinaryOperator.MULTIPLICATION: "*",
    BinaryOperator.DIVISION: "/",
}

_OPERATOR_NODE_TYPES = {
    BinaryOperator.SUM: "SumOperation",
    BinaryOperator.SUB: "SubOperation",
    BinaryOperator.MULTIPLICATION: "MultiplicationOperation",
    BinaryOperator.DIVISION: "DivisionOperation",
}


# =============================================================================
# AST Node Base Classes
# =============================================================================

@dataclass(frozen=True)
class ASTNode:
    """Base class for all AST nodes."""

    def to_dict(self) -> dict[str, Any]:
        raise NotImplementedError


@dataclass(frozen=True)
class Expression(ASTNode):
    """
    Base class for value expressions.

    An expression is either a NumericLiteral or a BinaryOperation.
    """
    pass


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass(frozen=True)
class NumericLiteral(Expression):
    """
    Numeric literal expression.

    A leading '-' in the source is folded into the value, so `-1` is a
    literal and not a subtraction.

    Attributes:
        value: The literal value as a float
    """
    value: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {"type": "NumericLiteral", "value": self.value}


@dataclass(frozen=True)
class BinaryOperation(Expression):
    """
    Binary operation expression (left op right).

    Attributes:
        operator: The arithmetic operator
        left: Left operand expression
        right: Right operand expression
        parenthesized: True if the node is the content of a '( ... )' group.
            Not part of equality; the parser never regroups across it.
    """
    operator: BinaryOperator = BinaryOperator.SUM
    left: Expression = None
    right: Expression = None
    parenthesized: bool = field(default=False, compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.operator.node_type,
            "left": self.left.to_dict(),
            "right": self.right.to_dict(),
        }


# =============================================================================
# Declaration Nodes
# =============================================================================

@dataclass(frozen=True)
class Identifier(ASTNode):
    """
    Name being declared, with its optional type annotation.

    The annotation is kept verbatim; any identifier-shaped word is accepted.

    Attributes:
        name: Variable name
        type_annotation: Text after ':' or None
    """
    name: str = ""
    type_annotation: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name}
        if self.type_annotation is not None:
            result["typeAnnotation"] = self.type_annotation
        return result


@dataclass(frozen=True)
class VariableDeclaration(ASTNode):
    """
    Root of the AST: a single variable declaration.

    Represents declarations like:
        const x = 1
        let total: number = (1 + 2) * 3

    Attributes:
        declarator: const, let or var
        identifier: Declared name and optional annotation
        value: The value expression
    """
    declarator: Declarator = Declarator.CONST
    identifier: Identifier = field(default_factory=Identifier)
    value: Expression = None

    @property
    def name(self) -> str:
        return self.identifier.name

    @property
    def type_annotation(self) -> Optional[str]:
        return self.identifier.type_annotation

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "VariableDeclaration",
            "declarator": self.declarator.value,
            "identifier": self.identifier.to_dict(),
            "value": self.value.to_dict(),
        }


# =============================================================================
# AST Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Subclasses override visit_* methods for the node types they care about.

    Usage:
        class LiteralCounter(ASTVisitor):
            def __init__(self):
                self.count = 0

            def visit_NumericLiteral(self, node):
                self.count += 1

        counter = LiteralCounter()
        counter.visit(declaration)
    """

    def visit(self, node: ASTNode) -> Any:
        """Visit a node by dispatching to visit_<ClassName>."""
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> None:
        """Visit all child nodes."""
        for field_value in node.__dict__.values():
            if isinstance(field_value, ASTNode):
                self.visit(field_value)

    def visit_VariableDeclaration(self, node: VariableDeclaration): return self.generic_visit(node)
    def visit_Identifier(self, node: Identifier): return self.generic_visit(node)
    def visit_BinaryOperation(self, node: BinaryOperation): return self.generic_visit(node)
    def visit_NumericLiteral(self, node: NumericLiteral): return self.generic_visit(node)


# =============================================================================
# AST Printer (for debugging)
# =============================================================================

def format_number(value: float) -> str:
    """Render a literal value, dropping '.0' from integral floats."""
    if value.is_integer():
        return str(int(value))
    return repr(value)


class ASTPrinter(ASTVisitor):
    """
    Pretty printer for AST debugging.

    Usage:
        printer = ASTPrinter()
        print(printer.print(parse("const x = 1 + 2")))

    Output:
        VariableDeclaration: const x
          SumOperation (+)
            NumericLiteral 1
            NumericLiteral 2
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Print the AST and return as string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def visit_VariableDeclaration(self, node: VariableDeclaration):
        annotation = f": {node.type_annotation}" if node.type_annotation else ""
        self._emit(f"VariableDeclaration: {node.declarator.value} {node.name}{annotation}")
        self.indent_level += 1
        self.visit(node.value)
        self.indent_level -= 1

    def visit_BinaryOperation(self, node: BinaryOperation):
        self._emit(f"{node.operator.node_type} ({node.operator.symbol})")
        self.indent_level += 1
        self.visit(node.left)
        self.visit(node.right)
        self.indent_level -= 1

    def visit_NumericLiteral(self, node: NumericLiteral):
        self._emit(f"NumericLiteral {format_number(node.value)}")


def expression_str(expr: Expression) -> str:
    """Fully parenthesized one-line rendering, e.g. '((1 - 2) + 3)'."""
    if isinstance(expr, NumericLiteral):
        return format_number(expr.value)
    if isinstance(expr, BinaryOperation):
        return f"({expression_str(expr.left)} {expr.operator.symbol} {expression_str(expr.right)})"
    return f"<{type(expr).__name__}>"
