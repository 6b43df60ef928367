"""
structparse Lexer - turns struct definition source into tokens

The scan is a single pass over the UTF-8 bytes of the input, driven by a
small state machine. Whitespace, any byte that cannot start a token and
`//` line comments produce no tokens.
"""

import logging
from enum import Enum, auto
from typing import List, Optional, Union

from .tokens import Token, TokenKind, Span, KEYWORDS, PUNCTUATION
from .errors import create_unexpected_byte_error


logger = logging.getLogger(__name__)


class _State(Enum):
    INIT = auto()           # between tokens
    IN_TOKEN = auto()       # accumulating an identifier or number
    SAW_SLASH = auto()      # saw '/', a second one must follow
    IN_COMMENT = auto()     # skipping to end of line


def _is_ident_start(b: int) -> bool:
    return (0x41 <= b <= 0x5A) or (0x61 <= b <= 0x7A) or b == 0x5F


def _is_digit(b: int) -> bool:
    return 0x30 <= b <= 0x39


def _is_ident_continue(b: int) -> bool:
    return _is_ident_start(b) or _is_digit(b)


class Lexer:
    """
    Struct-definition tokenizer.

    Each `tokenize()` call rescans the whole input; the first lexical error
    aborts the scan and no partial token list is returned.
    """

    def __init__(self, source: Union[str, bytes], filename: str = "<input>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source text, or its UTF-8 encoded bytes
            filename: Name of the source for error reporting
        """
        self.source = source.encode("utf-8") if isinstance(source, str) else bytes(source)
        self.filename = filename
        self.tokens: List[Token] = []

        self._state = _State.INIT
        self._token_start = 0
        self._token_kind: Optional[TokenKind] = None
        self._slash_pos = 0

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source.

        Returns:
            List of tokens in source order (no EOF marker)

        Raises:
            TokenizeError: On a '/' not followed by a second '/'
        """
        self.tokens = []
        self._state = _State.INIT

        for pos, b in enumerate(self.source):
            # A transition that does not consume `b` loops to re-examine it
            # under the new state.
            consumed = False
            while not consumed:
                consumed = self._step(pos, b)

        self._finish()

        logger.debug("%s: %d tokens from %d bytes", self.filename, len(self.tokens), len(self.source))
        return self.tokens

    def _step(self, pos: int, b: int) -> bool:
        """Feed one byte to the state machine; return whether it was consumed."""
        if self._state is _State.INIT:
            kind = PUNCTUATION.get(b)
            if kind is not None:
                self._emit(kind, pos, pos + 1)
            elif b == 0x2F:  # '/'
                self._state = _State.SAW_SLASH
                self._slash_pos = pos
            elif _is_ident_start(b):
                self._begin_token(pos, TokenKind.IDENT)
            elif _is_digit(b):
                self._begin_token(pos, TokenKind.NUM_LIT)
            # Anything else, whitespace included, is skipped
            return True

        if self._state is _State.IN_TOKEN:
            if _is_ident_continue(b):
                return True
            self._close_token(pos)
            return False

        if self._state is _State.SAW_SLASH:
            if b == 0x2F:
                self._state = _State.IN_COMMENT
                return True
            raise create_unexpected_byte_error(
                self.source, Span(self._slash_pos, pos + 1), self.filename
            )

        # IN_COMMENT
        if b == 0x0A:
            self._state = _State.INIT
        return True

    def _finish(self) -> None:
        """Handle end of input for whatever state the scan stopped in."""
        if self._state is _State.IN_TOKEN:
            self._close_token(len(self.source))
        elif self._state is _State.SAW_SLASH:
            raise create_unexpected_byte_error(
                self.source, Span(self._slash_pos, self._slash_pos + 1), self.filename
            )
        # A comment may run to end of input
        self._state = _State.INIT

    def _begin_token(self, pos: int, kind: TokenKind) -> None:
        self._state = _State.IN_TOKEN
        self._token_start = pos
        self._token_kind = kind

    def _close_token(self, end: int) -> None:
        """Emit the pending token; its kind was fixed by its first byte."""
        text = self.source[self._token_start:end].decode("ascii")
        kind = KEYWORDS.get(text, self._token_kind)
        self._emit(kind, self._token_start, end, text)
        self._state = _State.INIT
        self._token_kind = None

    def _emit(self, kind: TokenKind, start: int, end: int, text: Optional[str] = None) -> None:
        if text is None:
            text = self.source[start:end].decode("ascii")
        self.tokens.append(Token(kind, Span(start, end), text))


def tokenize(source: Union[str, bytes], filename: str = "<input>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source text or UTF-8 bytes
        filename: Filename for error reporting

    Returns:
        List of tokens

    Raises:
        TokenizeError: If lexing fails
    """
    return Lexer(source, filename).tokenize()


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        TokenizeError: If lexing fails
        IOError: If file cannot be read
    """
    with open(filepath, 'rb') as f:
        source = f.read()

    return tokenize(source, filepath)
