"""
vardecl Command-Line Interface
==============================

- **vdparse**: parse a declaration and print its AST

The tool is a Click-based CLI application that only wraps
vardecl.parse(); it adds no parsing behaviour of its own.
"""

__all__ = ["vdparse"]
