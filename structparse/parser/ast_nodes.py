"""
Abstract Syntax Tree node definitions for struct definitions.

A parsed definition is a `Struct` holding an ordered tuple of `Field`s,
each with a `Ty`. Types are either a named type (`Ident`) or a fixed-size
array (`Array`) whose element type is itself a `Ty`, so arrays nest to any
depth.

Nodes are immutable and hashable. Each records the byte span it was parsed
from, but spans take no part in equality: two parses of differently
formatted but equivalent source compare equal.

Constructors check the same rules the parser enforces (identifier names,
u64 lengths), so any node that can be built renders to source that parses
back to it.
"""

import re
from abc import ABC, abstractmethod
from typing import List, Optional, Any, Tuple, Union
from dataclasses import dataclass, field

from ..lexer.tokens import Span, KEYWORDS


U64_MAX = 2 ** 64 - 1

_IDENTIFIER = re.compile(r'[A-Za-z_][A-Za-z0-9_]*')


def _check_name(what: str, name: str) -> None:
    if not isinstance(name, str) or not _IDENTIFIER.fullmatch(name):
        raise ValueError(f"{what} {name!r} is not a valid identifier")
    if name in KEYWORDS:
        raise ValueError(f"{what} {name!r} is a reserved keyword")


class ASTVisitor(ABC):
    """
    Visitor interface for traversing AST nodes.

    `node.accept(visitor)` dispatches to the matching `visit_*` method.
    """

    @abstractmethod
    def visit_struct(self, node: 'Struct') -> Any:
        pass

    @abstractmethod
    def visit_field(self, node: 'Field') -> Any:
        pass

    @abstractmethod
    def visit_ident(self, node: 'Ident') -> Any:
        pass

    @abstractmethod
    def visit_array(self, node: 'Array') -> Any:
        pass


class ASTNode(ABC):
    """Base class for all AST nodes."""

    @abstractmethod
    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""


class Ty(ASTNode):
    """Base class for field types."""


@dataclass(frozen=True)
class Ident(Ty):
    """A type named by an identifier (e.g. 'u8', 'Point')."""
    name: str
    span: Optional[Span] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        _check_name("type name", self.name)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_ident(self)


@dataclass(frozen=True)
class Array(Ty):
    """Fixed-size array type: `[ty; len]`."""
    ty: Ty
    len: int
    span: Optional[Span] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if not 0 <= self.len <= U64_MAX:
            raise ValueError(f"array length {self.len} does not fit in an unsigned 64-bit integer")

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_array(self)

    @property
    def element_type(self) -> Ty:
        """Innermost non-array type of a (possibly nested) array."""
        ty: Ty = self
        while isinstance(ty, Array):
            ty = ty.ty
        return ty

    @property
    def dimensions(self) -> List[int]:
        """Lengths from the outermost array inwards: `[[u8; 4]; 3]` -> [3, 4]."""
        dims = []
        ty: Ty = self
        while isinstance(ty, Array):
            dims.append(ty.len)
            ty = ty.ty
        return dims


@dataclass(frozen=True)
class Field(ASTNode):
    """Struct field: `name: ty`."""
    name: str
    ty: Ty
    span: Optional[Span] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        _check_name("field name", self.name)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_field(self)


@dataclass(frozen=True)
class Struct(ASTNode):
    """
    Struct definition.

    `fields` keeps declaration order, which downstream consumers may rely
    on (e.g. for memory layout). Any iterable is accepted and stored as a
    tuple. Duplicate field names are not rejected.
    """
    name: str
    fields: Tuple[Field, ...] = ()
    span: Optional[Span] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        _check_name("struct name", self.name)
        object.__setattr__(self, "fields", tuple(self.fields))

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_struct(self)

    @classmethod
    def parse(cls, source: Union[str, bytes], filename: str = "<input>") -> 'Struct':
        """
        Parse a struct definition from source text.

        Raises:
            StructParseError: If the text failed to parse as a struct
        """
        from .parser import parse_struct

        return parse_struct(source, filename)

    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    def get_field(self, name: str) -> Optional[Field]:
        """Return the first field called `name`, if any."""
        for f in self.fields:
            if f.name == name:
                return f
        return None
