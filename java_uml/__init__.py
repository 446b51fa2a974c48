from .cir.model import (
    Field,
    ImportDecl,
    Method,
    Modifier,
    Parameter,
    ParseResult,
    Relationship,
    RelationshipKind,
    TypeDecl,
    TypeKind,
)
from .converter import JavaToUmletConverter
from .errors import ConversionError, EmptyInputError, NoTypesFoundError
from .registry import get_converter

__all__ = [
    "ConversionError",
    "EmptyInputError",
    "Field",
    "ImportDecl",
    "JavaToUmletConverter",
    "Method",
    "Modifier",
    "NoTypesFoundError",
    "Parameter",
    "ParseResult",
    "Relationship",
    "RelationshipKind",
    "TypeDecl",
    "TypeKind",
    "get_converter",
]
