"""
vardecl - Variable Declaration Parser
=====================================

This package parses a single statement of a small variable-declaration
language into an abstract syntax tree:

    const|let|var NAME [: TYPE] = EXPRESSION

Expressions are numeric literals (with an optional sign), the binary
operators + - * /, and one level of parenthesis grouping.

Main Components
---------------
- **lexer**: ordered regular-expression tokenizer (Tokenizer, TokenKind)
- **parser**: recursive descent parser (Parser, parse)
- **ast**: immutable AST nodes, visitor and pretty printer
- **errors**: exception hierarchy with source locations

Quick Start
-----------
    >>> from vardecl import parse
    >>> ast = parse("let total: number = (1 + 2) * 3")
    >>> ast.declarator, ast.name, ast.type_annotation
    (<Declarator.LET: 'let'>, 'total', 'number')
    >>> ast.to_dict()["value"]["type"]
    'MultiplicationOperation'

Or use the command-line tool:
    $ vdparse "const x = 1 + 2 * 3"
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from vardecl.errors import (
    VardeclError,
    SourceLocation,
    ParseError,
    LexicalError,
    UnexpectedTokenError,
    InvalidNumberError,
)
from vardecl.lexer import Token, TokenKind, TokenRule, Tokenizer, TOKEN_RULES
from vardecl.ast import (
    ASTNode,
    Expression,
    NumericLiteral,
    BinaryOperation,
    BinaryOperator,
    Declarator,
    Identifier,
    VariableDeclaration,
    ASTVisitor,
    ASTPrinter,
    expression_str,
)
from vardecl.parser import Parser, parse

__all__ = [
    "__version__",
    # Errors
    "VardeclError",
    "SourceLocation",
    "ParseError",
    "LexicalError",
    "UnexpectedTokenError",
    "InvalidNumberError",
    # Tokenizer
    "Token",
    "TokenKind",
    "TokenRule",
    "Tokenizer",
    "TOKEN_RULES",
    # AST
    "ASTNode",
    "Expression",
    "NumericLiteral",
    "BinaryOperation",
    "BinaryOperator",
    "Declarator",
    "Identifier",
    "VariableDeclaration",
    "ASTVisitor",
    "ASTPrinter",
    "expression_str",
    # Parser
    "Parser",
    "parse",
]
