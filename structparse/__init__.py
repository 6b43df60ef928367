"""
structparse

Parses a minimal struct-definition language (`struct Name { field: Type }`
with fixed-size array types `[Type; N]`) into an AST for downstream
tooling such as code generators and schema validators.

Architecture:
    structparse/
    ├── lexer/           # Byte-level tokenizer
    ├── parser/          # Recursive descent parser and AST
    ├── printer.py       # Canonical source, debug dump and dict output
    └── cli.py           # structparse-dump command

License: MIT
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenKind, Span, tokenize, TokenizeError, TokenizeErrorKind
from .parser import (
    Parser, parse, parse_struct, parse_file,
    Struct, Field, Ty, Ident, Array,
    StructParseError, StructParseErrorKind, IntErrorKind,
)
from .printer import render, dump, to_dict

__all__ = [
    # Entry points
    "parse",
    "parse_struct",
    "parse_file",
    "tokenize",

    # Core classes
    "Lexer",
    "Parser",
    "Token",
    "TokenKind",
    "Span",

    # AST
    "Struct",
    "Field",
    "Ty",
    "Ident",
    "Array",

    # Errors
    "TokenizeError",
    "TokenizeErrorKind",
    "StructParseError",
    "StructParseErrorKind",
    "IntErrorKind",

    # Output
    "render",
    "dump",
    "to_dict",

    # Version info
    "__version__",
    "__license__",
]
