"""
structparse Lexer Package

Implements the byte-level tokenizer for struct definitions.

Key Features:
- Single-pass state machine over UTF-8 bytes
- Byte-offset spans on every token
- `//` line comments and whitespace skipped
- Fail-fast lexical errors with rendered diagnostics
"""

from .tokens import Token, TokenKind, Span, SourceLocation
from .lexer import Lexer, tokenize, tokenize_file
from .errors import Diagnostic, TokenizeError, TokenizeErrorKind, render_snippet

__all__ = [
    "Lexer",
    "tokenize",
    "tokenize_file",
    "Token",
    "TokenKind",
    "Span",
    "SourceLocation",
    "Diagnostic",
    "TokenizeError",
    "TokenizeErrorKind",
    "render_snippet",
]
