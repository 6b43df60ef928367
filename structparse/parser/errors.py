"""
Error handling for the structparse parser.

Every parse failure is a `StructParseError` carrying the byte span of the
offending input and a `StructParseErrorKind`. Parsing stops at the first
error; there is no recovery.
"""

from typing import Optional
from enum import Enum

from ..lexer.tokens import Token, TokenKind, Span, SourceLocation, TOKEN_DESCRIPTIONS
from ..lexer.errors import Diagnostic, TokenizeError, TokenizeErrorKind


class StructParseErrorKind(Enum):
    """Categories of parse failure."""
    TOKENIZE = "tokenize"
    UNEXPECTED_END = "unexpected end"
    UNEXPECTED_TOK = "unexpected token"
    NUM_PARSE = "number parse"


class IntErrorKind(Enum):
    """Why an array length literal failed to convert to a u64."""
    INVALID_DIGIT = "invalid digit found in string"
    POS_OVERFLOW = "number too large to fit in target type"


class StructParseError(Exception):
    """
    Exception raised when a struct definition fails to parse.

    Attributes:
        span: Byte range of the offending input
        kind: The error category
        token_kind: Kind of the unexpected token (UNEXPECTED_TOK only)
        tokenize_kind: Wrapped lexical error kind (TOKENIZE only)
        int_error: Numeric conversion failure (NUM_PARSE only)
        diagnostic: Rendered error description
    """

    def __init__(
        self,
        message: str,
        span: Span,
        kind: StructParseErrorKind,
        location: Optional[SourceLocation],
        token_kind: Optional[TokenKind] = None,
        tokenize_kind: Optional[TokenizeErrorKind] = None,
        int_error: Optional[IntErrorKind] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
    ):
        super().__init__(message)
        self.span = span
        self.kind = kind
        self.token_kind = token_kind
        self.tokenize_kind = tokenize_kind
        self.int_error = int_error
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
        )

    def __str__(self) -> str:
        return str(self.diagnostic)

    @classmethod
    def from_tokenize_error(cls, error: TokenizeError) -> "StructParseError":
        """Wrap a lexical failure, keeping its span and location."""
        return cls(
            message=error.diagnostic.message,
            span=error.span,
            kind=StructParseErrorKind.TOKENIZE,
            location=error.diagnostic.location,
            tokenize_kind=error.kind,
            code="P004",
            help_text=error.diagnostic.help_text,
        )


def _locate(source: Optional[bytes], offset: int, filename: str) -> Optional[SourceLocation]:
    if source is None:
        return None
    return SourceLocation.from_offset(source, offset, filename)


# Helper functions for creating common parser errors

def create_unexpected_token_error(expected: str, found: Token, source: Optional[bytes],
                                  filename: str = "<input>") -> StructParseError:
    """Create an error for a token of the wrong kind."""
    found_str = TOKEN_DESCRIPTIONS[found.kind]

    return StructParseError(
        message=f"Expected {expected}, found {found_str}",
        span=found.span,
        kind=StructParseErrorKind.UNEXPECTED_TOK,
        location=_locate(source, found.span.start, filename),
        token_kind=found.kind,
        code="P001",
        help_text=f"The parser expected to see {expected} at this position, but found {found_str} instead.",
    )


def create_unexpected_eof_error(expected: str, end: int, source: Optional[bytes],
                                filename: str = "<input>") -> StructParseError:
    """Create an error for input that ends mid-definition; `end` is where it stopped."""
    return StructParseError(
        message=f"Unexpected end of input, expected {expected}",
        span=Span(end, end),
        kind=StructParseErrorKind.UNEXPECTED_END,
        location=_locate(source, end, filename),
        code="P002",
        help_text=f"The input ended while the parser was expecting {expected}.",
    )


def create_invalid_length_error(literal: Token, reason: IntErrorKind, source: Optional[bytes],
                                filename: str = "<input>") -> StructParseError:
    """Create an error for an array length that is not a valid u64."""
    return StructParseError(
        message=f"Invalid array length {literal.lexeme!r}: {reason.value}",
        span=literal.span,
        kind=StructParseErrorKind.NUM_PARSE,
        location=_locate(source, literal.span.start, filename),
        int_error=reason,
        code="P003",
        help_text="Array lengths are unsigned decimal integers no larger than 18446744073709551615.",
    )
