"""
Token definitions for the structparse lexer.

This module defines the closed set of token kinds the struct grammar uses:
- The `struct` keyword
- Identifiers and decimal numeric literals
- Single-byte punctuation: { } [ ] : ; ,

Every token carries a half-open byte span into the UTF-8 encoded source,
so callers can map any token or error back to the exact input bytes.
"""

from enum import Enum, auto
from dataclasses import dataclass


class TokenKind(Enum):
    """
    Enumeration of all token kinds produced by the tokenizer.
    """

    # Keywords
    KW_STRUCT = auto()              # struct

    # Identifiers and literals
    IDENT = auto()                  # u8, field_name, _private
    NUM_LIT = auto()                # 10, 0, 18446744073709551615

    # Punctuation and delimiters
    LBRACE = auto()                 # {
    RBRACE = auto()                 # }
    LSQ_BRACKET = auto()            # [
    RSQ_BRACKET = auto()            # ]
    COLON = auto()                  # :
    SEMI = auto()                   # ;
    COMMA = auto()                  # ,


@dataclass(frozen=True)
class Span:
    """
    Half-open byte range [start, end) into the UTF-8 encoded source.

    Used for error attribution and for locating AST nodes in the input.
    """
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"

    def to(self, other: "Span") -> "Span":
        """Return the span covering both this span and `other`."""
        return Span(min(self.start, other.start), max(self.end, other.end))


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Line and column are 1-based; the column counts bytes, matching the
    byte offsets used by spans.
    """
    filename: str
    line: int
    column: int
    offset: int  # Byte offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    @classmethod
    def from_offset(cls, source: bytes, offset: int, filename: str = "<input>") -> "SourceLocation":
        """Compute the line/column of a byte offset in `source`."""
        offset = max(0, min(offset, len(source)))
        line = source.count(b"\n", 0, offset) + 1
        line_start = source.rfind(b"\n", 0, offset) + 1
        return cls(filename, line, offset - line_start + 1, offset)


@dataclass(frozen=True)
class Token:
    """
    A classified, span-located lexical unit.

    `lexeme` is the token's source text, decoded from the spanned bytes.
    Identifiers, numbers and punctuation are always ASCII.
    """
    kind: TokenKind
    span: Span
    lexeme: str

    def __str__(self) -> str:
        return f"{self.kind.name}({self.lexeme!r} @ {self.span})"


# Keywords recognised when an identifier-shaped token closes
KEYWORDS = {
    "struct": TokenKind.KW_STRUCT,
}

PUNCTUATION = {
    ord("{"): TokenKind.LBRACE,
    ord("}"): TokenKind.RBRACE,
    ord("["): TokenKind.LSQ_BRACKET,
    ord("]"): TokenKind.RSQ_BRACKET,
    ord(":"): TokenKind.COLON,
    ord(";"): TokenKind.SEMI,
    ord(","): TokenKind.COMMA,
}

# Human-readable spelling of each kind, used in diagnostics
TOKEN_DESCRIPTIONS = {
    TokenKind.KW_STRUCT: "'struct'",
    TokenKind.IDENT: "identifier",
    TokenKind.NUM_LIT: "number",
    TokenKind.LBRACE: "'{'",
    TokenKind.RBRACE: "'}'",
    TokenKind.LSQ_BRACKET: "'['",
    TokenKind.RSQ_BRACKET: "']'",
    TokenKind.COLON: "':'",
    TokenKind.SEMI: "';'",
    TokenKind.COMMA: "','",
}
