"""
Error handling for the structparse lexer.

Provides error reporting with byte spans, source location information
and rendered diagnostics for command-line output.
"""

from typing import Optional
from dataclasses import dataclass
from enum import Enum

from .tokens import Span, SourceLocation


@dataclass
class Diagnostic:
    """
    Rendered description of an error (or warning).

    `location` is None when the error was raised without the source text
    at hand, in which case the `-->` line is left out.
    """
    message: str
    location: Optional[SourceLocation]
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        if self.code:
            severity_prefix += f"[{self.code}]"
        result = f"{severity_prefix}: {self.message}\n"
        if self.location is not None:
            result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        return result


class TokenizeErrorKind(Enum):
    """Categories of lexical failure."""
    UNEXPECTED_BYTE = "unexpected byte"


class TokenizeError(Exception):
    """
    Exception raised when the tokenizer meets a byte that cannot begin or
    continue any token. Tokenization stops at the first such byte.
    """

    def __init__(
        self,
        message: str,
        span: Span,
        kind: TokenizeErrorKind,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
    ):
        super().__init__(message)
        self.span = span
        self.kind = kind
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
        )

    def __str__(self) -> str:
        return str(self.diagnostic)


def render_snippet(source: bytes, span: Span) -> str:
    """
    Return the source line containing `span.start` with a caret underline
    beneath the spanned bytes (clipped to that line).
    """
    start = max(0, min(span.start, len(source)))
    line_start = source.rfind(b"\n", 0, start) + 1
    line_end = source.find(b"\n", start)
    if line_end == -1:
        line_end = len(source)
    line_text = source[line_start:line_end].decode("utf-8", errors="replace")

    width = max(1, min(span.end, line_end) - start)
    caret = " " * (start - line_start) + "^" * width
    return f"{line_text}\n{caret}"


def create_unexpected_byte_error(source: bytes, span: Span, filename: str = "<input>") -> TokenizeError:
    """
    Create an error for a lone '/' and the byte that followed it.

    The span starts at the slash. When input ended right after the slash
    the span covers the slash alone.
    """
    if len(span) > 1:
        found = source[span.end - 1:span.end]
        message = f"Unexpected byte {found!r} after '/'"
    else:
        message = "Unexpected end of input after '/'"

    return TokenizeError(
        message=message,
        span=span,
        kind=TokenizeErrorKind.UNEXPECTED_BYTE,
        location=SourceLocation.from_offset(source, span.start, filename),
        code="L001",
        help_text="Comments start with '//'; a single '/' is not valid here.",
    )
