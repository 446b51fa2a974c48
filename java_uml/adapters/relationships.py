"""
Relationship inference between the types found by ``JavaAdapter``.

Inheritance and implementation come straight from the declarations. The
ownership family is decided by heuristics, strongest first, and each
(source, target) pair is claimed by the first heuristic that fires:

  1. composition             - ``new T(`` inside a constructor body
  2. aggregation (injected)  - ``T`` received as a constructor parameter
  3. aggregation (method)    - ``new T(`` inside a regular method body
  4. association             - field of type ``T`` with no other evidence
                               (off unless ``report_field_associations``)
  5. dependency              - ``T`` used as a method parameter type

Only field types outside ``BASIC_TYPES`` are candidates for 1-4.
"""
from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional

from ..cir.model import Method, Relationship, RelationshipKind, TypeDecl
from .preprocess import extract_base_type, extract_block_body, is_basic_type

logger = logging.getLogger(__name__)


class RelationshipAnalyzer:

    CONSTRUCTION_PATTERN = re.compile(r"new\s+([a-zA-Z_][a-zA-Z0-9_]*)\s*\(")

    # return type is mandatory here, which keeps most constructors out
    METHOD_HEADER_PATTERN = re.compile(
        r"\b(?:public|private|protected)?\s*(?:static\s+)?(?:final\s+|abstract\s+)?\s*"
        r"([a-zA-Z_][a-zA-Z0-9_<>\[\]]*|void)\s+([a-zA-Z_][a-zA-Z0-9_]*)\s*\([^)]*\)\s*\{"
    )

    def __init__(self, report_field_associations: bool = False) -> None:
        self.report_field_associations = report_field_associations

    # ---------------- Entry point ----------------

    def analyze(self, code: str, types: Iterable[TypeDecl]) -> List[Relationship]:
        relationships: List[Relationship] = []

        for type_decl in types:
            if type_decl.super_type:
                relationships.append(
                    Relationship(type_decl.name, type_decl.super_type, RelationshipKind.INHERITANCE)
                )

            for iface in type_decl.interfaces:
                relationships.append(
                    Relationship(type_decl.name, iface, RelationshipKind.IMPLEMENTATION)
                )

            body = self.find_class_body(code, type_decl.name)
            if body is None:
                logger.debug("No body found for %s on re-scan", type_decl.name)
                continue

            self._find_ownership(type_decl, body, relationships)
            self._find_dependencies(type_decl, relationships)

        logger.debug("Inferred %d relationships", len(relationships))
        return relationships

    # ---------------- Body lookup ----------------

    def find_class_body(self, code: str, class_name: str) -> Optional[str]:
        """
        Locate the first header declaring ``class_name`` in the full source
        and return its body. This is a fresh search: with two declarations of
        the same name it binds to the first one in the text.
        """
        pattern = re.compile(
            r"\b(?:class|interface|enum)\s+" + re.escape(class_name) + r"\b\s*(?:<[^>]*>)?[^{]*\{"
        )
        m = pattern.search(code)
        if not m:
            return None
        return extract_block_body(code, m.end() - 1)

    def extract_constructor_bodies(self, class_body: str, class_name: str) -> List[str]:
        pattern = re.compile(
            r"\b(?:public|private|protected)?\s*" + re.escape(class_name) + r"\s*\([^)]*\)\s*\{"
        )
        bodies: List[str] = []
        for m in pattern.finditer(class_body):
            body = extract_block_body(class_body, m.end() - 1, strict=True)
            if body:
                bodies.append(body)
        return bodies

    def extract_method_bodies(self, class_body: str, class_name: str) -> List[tuple[str, str]]:
        """(method name, body) for every non-constructor method header."""
        bodies: List[tuple[str, str]] = []
        for m in self.METHOD_HEADER_PATTERN.finditer(class_body):
            name = m.group(2)
            if name == class_name:
                continue
            body = extract_block_body(class_body, m.end() - 1, strict=True)
            if body:
                bodies.append((name, body))
        return bodies

    # ---------------- Ownership ----------------

    def _find_ownership(
        self,
        type_decl: TypeDecl,
        class_body: str,
        relationships: List[Relationship],
    ) -> None:
        # ordered set: base type -> first field declaring it
        ownable: Dict[str, str] = {}
        for f in type_decl.fields:
            base = extract_base_type(f.type_name)
            if not is_basic_type(base):
                ownable.setdefault(base, f.name)

        if not ownable:
            return

        src = type_decl.name

        for body in self.extract_constructor_bodies(class_body, src):
            for target in self._constructed_types(body):
                if target in ownable:
                    relationships.append(
                        Relationship(
                            src,
                            target,
                            RelationshipKind.COMPOSITION,
                            {"location": "constructor", "has_field": True},
                        )
                    )
                    del ownable[target]

        for ctor in self._all_constructors(type_decl):
            for p in ctor.parameters:
                target = extract_base_type(p.type_name)
                if target in ownable:
                    relationships.append(
                        Relationship(
                            src,
                            target,
                            RelationshipKind.AGGREGATION,
                            {"location": "constructor-parameter", "parameter": p.name, "has_field": True},
                        )
                    )
                    del ownable[target]

        for method_name, body in self.extract_method_bodies(class_body, src):
            for target in self._constructed_types(body):
                if target in ownable:
                    relationships.append(
                        Relationship(
                            src,
                            target,
                            RelationshipKind.AGGREGATION,
                            {"location": "method", "method": method_name, "has_field": True},
                        )
                    )
                    del ownable[target]

        if self.report_field_associations:
            for target, field_name in ownable.items():
                relationships.append(
                    Relationship(
                        src,
                        target,
                        RelationshipKind.ASSOCIATION,
                        {"location": "field", "field": field_name, "has_new_operator": False},
                    )
                )
            ownable.clear()

    def _constructed_types(self, body: str) -> List[str]:
        return [m.group(1) for m in self.CONSTRUCTION_PATTERN.finditer(body)]

    @staticmethod
    def _all_constructors(type_decl: TypeDecl) -> List[Method]:
        # tolerate a constructor that ended up among the methods
        return list(type_decl.constructors) + [m for m in type_decl.methods if m.is_constructor]

    # ---------------- Dependencies ----------------

    def _find_dependencies(self, type_decl: TypeDecl, relationships: List[Relationship]) -> None:
        src = type_decl.name
        for method in type_decl.methods:
            for p in method.parameters:
                target = extract_base_type(p.type_name)
                if is_basic_type(target):
                    continue
                if any(r.source == src and r.target == target for r in relationships):
                    continue
                relationships.append(
                    Relationship(
                        src,
                        target,
                        RelationshipKind.DEPENDENCY,
                        {"method": method.name, "parameter": p.name},
                    )
                )
