"""
structparse Parser Package

Recursive descent parser producing a `Struct` AST from the lexer's tokens.

Key Features:
- One method per grammar production
- Arbitrarily nested array types
- Byte spans on every AST node and every error
- Fail-fast diagnostics (no recovery, no partial AST)
"""

from .ast_nodes import (
    ASTNode, ASTVisitor, Struct, Field, Ty, Ident, Array, U64_MAX
)
from .parser import Parser, parse, parse_struct, parse_file
from .errors import StructParseError, StructParseErrorKind, IntErrorKind

__all__ = [
    # Core parser
    "Parser",
    "parse",
    "parse_struct",
    "parse_file",

    # AST nodes
    "ASTNode", "ASTVisitor",
    "Struct", "Field", "Ty", "Ident", "Array", "U64_MAX",

    # Error handling
    "StructParseError", "StructParseErrorKind", "IntErrorKind",
]
