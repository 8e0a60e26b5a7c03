"""
Declaration Lexer (Tokenizer)
=============================

This module implements the tokenizer for the variable-declaration language.
It does not produce a token list up front: the parser asks for one token at
a time, handing over whatever input is still unconsumed.

Token Rules
-----------
Rules are tried in the order below and the first match wins. Order is
significant: declarator keywords are tried before the generic identifier
pattern, so `const`, `let` and `var` never come back as identifiers.

| #  | Kind                     | Pattern            |
|----|--------------------------|--------------------|
| 1  | DECLARATOR               | const, let, var    |
| 2  | IDENTIFIER               | [A-Za-z]+          |
| 3  | EQUAL                    | =                  |
| 4  | NUMERIC_LITERAL          | \\d*\\.?\\d+       |
| 5  | PLUS_OPERATOR            | +                  |
| 6  | MINUS_OPERATOR           | -                  |
| 7  | MULTIPLICATION_OPERATOR  | *                  |
| 8  | DIVISION_OPERATOR        | /                  |
| 9  | PARENTHESIS_GROUP        | ( ... )            |
| 10 | COLON                    | :                  |

Parenthesis Groups
------------------
A group is a single `( ... )` pair whose content holds no parentheses. The
token text is the inner content; the whole group, delimiters included, is
removed from the remainder. Nested groups such as `(1+(2*3))` do not match
any rule and fail as a lexical error.

Example Usage
-------------
>>> from vardecl.lexer import Tokenizer
>>> tokenizer = Tokenizer()
>>> tokenizer.next_token("const foo = 1")
Token(DECLARATOR, 'const', rest=' foo = 1')
>>> tokenizer.next_token("(1+2)*3")
Token(PARENTHESIS_GROUP, '1+2', rest='*3')
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum, auto

from vardecl.errors import LexicalError


logger = logging.getLogger(__name__)


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """Classification of a lexical token."""

    DECLARATOR = auto()                 # const, let, var
    IDENTIFIER = auto()                 # variable names and type annotations
    EQUAL = auto()                      # =
    COLON = auto()                      # :
    NUMERIC_LITERAL = auto()            # 1, 3.14, .5
    PLUS_OPERATOR = auto()              # +
    MINUS_OPERATOR = auto()             # -
    MULTIPLICATION_OPERATOR = auto()    # *
    DIVISION_OPERATOR = auto()          # /
    PARENTHESIS_GROUP = auto()          # ( ... ), no nesting
    END_OF_INPUT = auto()               # nothing left but whitespace


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token together with the input that follows it.

    Attributes:
        text: Token text (the inner content for parenthesis groups)
        kind: Classification of the token
        remainder: Unconsumed input after the token, not re-trimmed
    """
    text: str
    kind: TokenKind
    remainder: str

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, rest={self.remainder!r})"


# =============================================================================
# Token Rules
# =============================================================================

@dataclass(frozen=True)
class TokenRule:
    """
    One entry of the ordered rule table.

    The pattern's group 1 is the span consumed from the input. If the
    pattern has a second group, that group is the token text; otherwise
    the consumed span is.
    """
    kind: TokenKind
    pattern: re.Pattern

    def match(self, text: str):
        return self.pattern.match(text)


TOKEN_RULES: tuple[TokenRule, ...] = (
    TokenRule(TokenKind.DECLARATOR, re.compile(r"((?:const|let|var)\b)")),
    TokenRule(TokenKind.IDENTIFIER, re.compile(r"([A-Za-z]+)")),
    TokenRule(TokenKind.EQUAL, re.compile(r"(=)")),
    TokenRule(TokenKind.NUMERIC_LITERAL, re.compile(r"(\d*\.?\d+)")),
    TokenRule(TokenKind.PLUS_OPERATOR, re.compile(r"(\+)")),
    TokenRule(TokenKind.MINUS_OPERATOR, re.compile(r"(-)")),
    TokenRule(TokenKind.MULTIPLICATION_OPERATOR, re.compile(r"(\*)")),
    TokenRule(TokenKind.DIVISION_OPERATOR, re.compile(r"(/)")),
    TokenRule(TokenKind.PARENTHESIS_GROUP, re.compile(r"(\(([^()]+)\))")),
    TokenRule(TokenKind.COLON, re.compile(r"(:)")),
)


# =============================================================================
# Tokenizer
# =============================================================================

class Tokenizer:
    """
    Stateless tokenizer: classifies the next token of a remaining input slice.

    A single instance can be shared between parsers and threads since it
    keeps no fields that change across calls.
    """

    def __init__(self, rules: tuple[TokenRule, ...] = TOKEN_RULES):
        self.rules = rules

    def next_token(self, text: str) -> Token:
        """
        Extract the next token from `text`.

        Leading whitespace is skipped. An empty (or whitespace-only) input
        yields END_OF_INPUT with empty text and remainder.

        Raises:
            LexicalError: If no rule matches the start of the input
        """
        program = text.lstrip()

        if not program:
            return Token("", TokenKind.END_OF_INPUT, "")

        for rule in self.rules:
            match = rule.match(program)
            if match is None:
                continue

            consumed = match.group(1)
            token_text = match.group(2) if rule.pattern.groups >= 2 else consumed
            token = Token(token_text, rule.kind, program[len(consumed):])
            logger.debug("Token %s %r", token.kind.name, token.text)
            return token

        raise LexicalError(program)
