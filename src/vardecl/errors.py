"""
vardecl Error Hierarchy
=======================

This module defines the exception hierarchy for the declaration parser.
All exceptions inherit from VardeclError, allowing callers to catch every
library failure with a single except clause if desired.

Exception Hierarchy
-------------------
VardeclError (base)
└── ParseError - any failure to turn source text into an AST
    ├── LexicalError - no token rule matches the remaining input
    ├── UnexpectedTokenError - a different token kind than the grammar requires
    └── InvalidNumberError - a sign that is not followed by a numeric literal

Error Message Format
--------------------
Errors carry the location of the failure when it is known:

    <input>:1:9: error: Expected '=' character. Received '1' instead.
        const x 1
                ^
    hint: a declaration looks like 'const name = 1'

Parsing is fail-fast: the first error aborts the parse and no partial
result is produced.
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class VardeclError(Exception):
    """
    Base exception for all vardecl errors.

        try:
            ast = parse("const x = 1")
        except VardeclError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source text for error reporting.

    Attributes:
        filename: Name of the source (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Parse Errors
# =============================================================================

class ParseError(VardeclError):
    """
    Base exception for failures while tokenizing or parsing a declaration.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The source text the location points into (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            <input>:1:7: error: Expected a variable name. Received '= 1' instead.
                const = 1
                      ^
        """
        parts = []

        # Location prefix
        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class LexicalError(ParseError):
    """
    No token rule matches the remaining input.

    Raised by the tokenizer; the parser re-raises it with a location once
    it knows where in the source the unmatched text starts.

    Example:
        const x = 1 % 2     # '%' is not an operator of the language
    """

    def __init__(
        self,
        text: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.text = text
        super().__init__(
            f"Unrecognized token in string: '{text}'",
            location=location,
            source_line=source_line,
        )


class UnexpectedTokenError(ParseError):
    """
    The grammar required one token kind but another was found.

    Attributes:
        expected: Description of the construct the grammar required
        found: The TokenKind actually received (END_OF_INPUT when the input ran out)
        remainder: The remaining input at the point of failure
    """

    def __init__(
        self,
        message: str,
        expected: str,
        found=None,
        remainder: str = "",
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found
        self.remainder = remainder
        super().__init__(
            message,
            location=location,
            hint=hint,
            source_line=source_line,
        )


class InvalidNumberError(ParseError):
    """
    A '+' or '-' sign is not immediately followed by a numeric literal.

    Example:
        const x = +         # sign with nothing after it
    """

    def __init__(
        self,
        remainder: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.remainder = remainder
        super().__init__(
            f"Expected a float number. Received '{remainder}' instead.",
            location=location,
            source_line=source_line,
        )
