from dataclasses import dataclass, field as dc_field
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Set

Visibility = Literal["public", "protected", "private", "package"]

VISIBILITY_SYMBOLS: Dict[str, str] = {
    "public": "+",
    "private": "-",
    "protected": "#",
    "package": "~",
}


class Modifier(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"
    STATIC = "static"
    FINAL = "final"
    ABSTRACT = "abstract"


class TypeKind(str, Enum):
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    ABSTRACT = "abstract"


class RelationshipKind(str, Enum):
    INHERITANCE = "inheritance"
    IMPLEMENTATION = "implementation"
    COMPOSITION = "composition"
    AGGREGATION = "aggregation"
    ASSOCIATION = "association"
    DEPENDENCY = "dependency"


# Kinds that compete for a single (source, target) slot.
OWNERSHIP_KINDS = frozenset({
    RelationshipKind.COMPOSITION,
    RelationshipKind.AGGREGATION,
    RelationshipKind.ASSOCIATION,
    RelationshipKind.DEPENDENCY,
})


def parse_modifiers(tokens) -> Set[Modifier]:
    """Keep only the tokens that name a known modifier."""
    mods: Set[Modifier] = set()
    for tok in tokens:
        if not tok:
            continue
        try:
            mods.add(Modifier(tok.strip()))
        except ValueError:
            continue
    return mods


def _ordered(mods: Set[Modifier]) -> List[str]:
    # set iteration order is not stable across processes
    return [m.value for m in Modifier if m in mods]


def _visibility(mods: Set[Modifier]) -> Visibility:
    if Modifier.PUBLIC in mods:
        return "public"
    if Modifier.PRIVATE in mods:
        return "private"
    if Modifier.PROTECTED in mods:
        return "protected"
    return "package"


@dataclass
class Parameter:
    name: str
    type_name: str            # raw type text (e.g. List<Item>)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type_name}


@dataclass
class Field:
    name: str
    type_name: str            # raw type text, generics/arrays kept
    modifiers: Set[Modifier] = dc_field(default_factory=set)

    @property
    def visibility(self) -> Visibility:
        return _visibility(self.modifiers)

    @property
    def visibility_symbol(self) -> str:
        return VISIBILITY_SYMBOLS[self.visibility]

    @property
    def is_static(self) -> bool:
        return Modifier.STATIC in self.modifiers

    @property
    def is_final(self) -> bool:
        return Modifier.FINAL in self.modifiers

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type_name,
            "modifiers": _ordered(self.modifiers),
            "visibility": self.visibility,
        }


@dataclass
class Method:
    name: str
    return_type: Optional[str]    # None for constructors
    modifiers: Set[Modifier] = dc_field(default_factory=set)
    parameters: List[Parameter] = dc_field(default_factory=list)
    is_constructor: bool = False
    is_abstract: bool = False

    @property
    def visibility(self) -> Visibility:
        return _visibility(self.modifiers)

    @property
    def visibility_symbol(self) -> str:
        return VISIBILITY_SYMBOLS[self.visibility]

    @property
    def is_static(self) -> bool:
        return Modifier.STATIC in self.modifiers

    @property
    def is_final(self) -> bool:
        return Modifier.FINAL in self.modifiers

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "return_type": self.return_type,
            "modifiers": _ordered(self.modifiers),
            "visibility": self.visibility,
            "parameters": [p.to_dict() for p in self.parameters],
            "is_constructor": self.is_constructor,
            "is_abstract": self.is_abstract,
        }


@dataclass
class TypeDecl:
    """
    One class / interface / enum found in the source.
    The is_* flags are derived on access so they follow any later change
    to kind or modifiers.
    """
    name: str
    kind: TypeKind = TypeKind.CLASS
    package: str = ""
    modifiers: Set[Modifier] = dc_field(default_factory=set)
    fields: List[Field] = dc_field(default_factory=list)
    methods: List[Method] = dc_field(default_factory=list)
    constructors: List[Method] = dc_field(default_factory=list)
    super_type: Optional[str] = None
    interfaces: List[str] = dc_field(default_factory=list)

    @property
    def is_interface(self) -> bool:
        return self.kind is TypeKind.INTERFACE

    @property
    def is_abstract(self) -> bool:
        return self.kind is TypeKind.ABSTRACT or Modifier.ABSTRACT in self.modifiers

    @property
    def is_enum(self) -> bool:
        return self.kind is TypeKind.ENUM

    @property
    def is_final(self) -> bool:
        return Modifier.FINAL in self.modifiers

    @property
    def visibility(self) -> Visibility:
        return _visibility(self.modifiers)

    @property
    def full_name(self) -> str:
        return f"{self.package}.{self.name}" if self.package else self.name

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "package": self.package,
            "modifiers": _ordered(self.modifiers),
            "is_interface": self.is_interface,
            "is_abstract": self.is_abstract,
            "is_enum": self.is_enum,
            "super_type": self.super_type,
            "interfaces": list(self.interfaces),
            "fields": [f.to_dict() for f in self.fields],
            "constructors": [c.to_dict() for c in self.constructors],
            "methods": [m.to_dict() for m in self.methods],
        }


@dataclass
class Relationship:
    source: str
    target: str
    kind: RelationshipKind
    details: Dict[str, Any] = dc_field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "target": self.target,
            "kind": self.kind.value,
            "details": dict(self.details),
        }


@dataclass
class ImportDecl:
    path: str
    is_static: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "is_static": self.is_static}


@dataclass
class ParseResult:
    package_name: str = ""
    imports: List[ImportDecl] = dc_field(default_factory=list)
    classes: List[TypeDecl] = dc_field(default_factory=list)
    relationships: List[Relationship] = dc_field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "package_name": self.package_name,
            "imports": [i.to_dict() for i in self.imports],
            "classes": [c.to_dict() for c in self.classes],
            "relationships": [r.to_dict() for r in self.relationships],
        }
