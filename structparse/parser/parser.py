"""
structparse Recursive Descent Parser

Grammar:

    struct   := 'struct' IDENT '{' fields '}'
    fields   := (field (',' field)*)? ','?
    field    := IDENT ':' type
    type     := IDENT | array
    array    := '[' type ';' INT ']'

Each production is one method. The first error raises immediately; there
is no recovery and no partial AST.
"""

import logging
import re
from typing import List, Optional, Tuple, Union

from ..lexer.tokens import Token, TokenKind, TOKEN_DESCRIPTIONS
from ..lexer.lexer import Lexer
from ..lexer.errors import TokenizeError
from .ast_nodes import Struct, Field, Ty, Ident, Array, U64_MAX
from .errors import (
    StructParseError, IntErrorKind, create_unexpected_token_error,
    create_unexpected_eof_error, create_invalid_length_error
)


logger = logging.getLogger(__name__)

_DECIMAL = re.compile(r'[0-9]+')


class Parser:
    """
    Struct definition parser.

    Consumes the token list produced by the lexer. `source` is the same
    input the tokens were produced from; it is used for line/column error
    locations, which are left out when it is not given. Without it, input
    is taken to end where the last token ends.
    """

    def __init__(self, tokens: List[Token], source: Optional[Union[str, bytes]] = None,
                 filename: str = "<input>"):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: List of tokens from the lexer
            source: The tokenized source, for error locations
            filename: Name of the source for error reporting
        """
        self.tokens = tokens
        if isinstance(source, str):
            source = source.encode("utf-8")
        self.source: Optional[bytes] = None if source is None else bytes(source)
        self.filename = filename
        self.current = 0

    def parse(self) -> Struct:
        """
        Parse the token stream into a Struct.

        Raises:
            StructParseError: On the first syntax error
        """
        self.current = 0
        struct = self._parse_struct()

        # Nothing may follow the closing brace
        if not self._is_at_end():
            raise self._unexpected("end of input", self._peek())

        logger.debug("parsed struct %s with %d field(s)", struct.name, len(struct.fields))
        return struct

    def _parse_struct(self) -> Struct:
        """struct := 'struct' IDENT '{' fields '}'"""
        start_token = self._consume(TokenKind.KW_STRUCT, "'struct'")
        name_token = self._consume(TokenKind.IDENT, "struct name")
        self._consume(TokenKind.LBRACE, "'{' after struct name")

        fields = self._parse_fields()

        end_token = self._consume(TokenKind.RBRACE, "'}'")

        return Struct(
            name=name_token.lexeme,
            fields=fields,
            span=start_token.span.to(end_token.span),
        )

    def _parse_fields(self) -> Tuple[Field, ...]:
        """
        fields := (field (',' field)*)? ','?

        Runs of commas after a field are tolerated. The list must start
        with a field or be empty; a leading comma is an error.
        """
        fields: List[Field] = []

        if self._check(TokenKind.RBRACE):
            return ()

        fields.append(self._parse_field())

        while self._match(TokenKind.COMMA):
            # Extra separators, including repeated trailing commas
            while self._match(TokenKind.COMMA):
                pass
            if self._check(TokenKind.RBRACE):
                break
            fields.append(self._parse_field())

        # Without a separator the only legal continuation is '}', which the
        # caller consumes.
        return tuple(fields)

    def _parse_field(self) -> Field:
        """field := IDENT ':' type"""
        name_token = self._consume(TokenKind.IDENT, "field name")
        self._consume(TokenKind.COLON, "':' after field name")
        ty = self._parse_type()

        return Field(
            name=name_token.lexeme,
            ty=ty,
            span=name_token.span.to(ty.span),
        )

    def _parse_type(self) -> Ty:
        """type := IDENT | array"""
        token = self._advance("type")

        if token.kind is TokenKind.IDENT:
            return Ident(token.lexeme, span=token.span)
        if token.kind is TokenKind.LSQ_BRACKET:
            return self._parse_array(token)

        raise self._unexpected("type", token)

    def _parse_array(self, open_token: Token) -> Array:
        """array := '[' type ';' INT ']' (the '[' is already consumed)"""
        element_type = self._parse_type()
        self._consume(TokenKind.SEMI, "';' after array element type")
        length_token = self._consume(TokenKind.NUM_LIT, "array length")
        length = self._parse_length(length_token)
        close_token = self._consume(TokenKind.RSQ_BRACKET, "']'")

        return Array(
            ty=element_type,
            len=length,
            span=open_token.span.to(close_token.span),
        )

    def _parse_length(self, token: Token) -> int:
        """Convert a numeric literal to an unsigned 64-bit value."""
        text = token.lexeme
        if not _DECIMAL.fullmatch(text):
            raise create_invalid_length_error(token, IntErrorKind.INVALID_DIGIT, self.source, self.filename)

        value = int(text)
        if value > U64_MAX:
            raise create_invalid_length_error(token, IntErrorKind.POS_OVERFLOW, self.source, self.filename)
        return value

    # Utility methods

    def _match(self, kind: TokenKind) -> bool:
        """Check if current token matches kind and consume if so."""
        if self._check(kind):
            self.current += 1
            return True
        return False

    def _check(self, kind: TokenKind) -> bool:
        """Check if current token matches kind without consuming."""
        if self._is_at_end():
            return False
        return self._peek().kind is kind

    def _is_at_end(self) -> bool:
        return self.current >= len(self.tokens)

    def _peek(self) -> Token:
        return self.tokens[self.current]

    def _end_offset(self) -> int:
        """Byte offset where the input stopped."""
        if self.source is not None:
            return len(self.source)
        return self.tokens[-1].span.end if self.tokens else 0

    def _advance(self, expected: str) -> Token:
        """Consume and return the current token of any kind."""
        if self._is_at_end():
            raise create_unexpected_eof_error(expected, self._end_offset(), self.source, self.filename)
        token = self.tokens[self.current]
        self.current += 1
        return token

    def _consume(self, kind: TokenKind, expected: Optional[str] = None) -> Token:
        """Consume a token of the given kind or raise."""
        expected = expected or TOKEN_DESCRIPTIONS[kind]
        token = self._advance(expected)
        if token.kind is not kind:
            raise self._unexpected(expected, token)
        return token

    def _unexpected(self, expected: str, token: Token) -> StructParseError:
        return create_unexpected_token_error(expected, token, self.source, self.filename)


def parse_struct(source: Union[str, bytes], filename: str = "<input>") -> Struct:
    """
    Parse a struct definition from source text.

    Args:
        source: Source text or its UTF-8 bytes
        filename: Filename for error reporting

    Returns:
        Struct AST

    Raises:
        StructParseError: If tokenizing or parsing fails
    """
    lexer = Lexer(source, filename)
    try:
        tokens = lexer.tokenize()
    except TokenizeError as e:
        raise StructParseError.from_tokenize_error(e) from e

    return Parser(tokens, lexer.source, filename).parse()


# The entry point downstream tooling calls
parse = parse_struct


def parse_file(filepath: str) -> Struct:
    """
    Convenience function to parse a source file.

    Raises:
        StructParseError: If parsing fails
        IOError: If file cannot be read
    """
    with open(filepath, 'rb') as f:
        source = f.read()

    return parse_struct(source, filepath)
