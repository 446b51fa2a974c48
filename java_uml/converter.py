from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .adapters.java_adapter import JavaAdapter
from .adapters.preprocess import preprocess_code, scan_imports, scan_package
from .adapters.relationships import RelationshipAnalyzer
from .cir.model import ParseResult
from .config import REPORT_FIELD_ASSOCIATIONS
from .errors import ConversionError, EmptyInputError, NoTypesFoundError
from .uml.umlet import UmletGenerator, group_relationships_by_kind

logger = logging.getLogger(__name__)


def _empty_summary() -> Dict[str, int]:
    return {"class_count": 0, "relationship_count": 0, "field_count": 0, "method_count": 0}


class JavaToUmletConverter:
    """
    Java source -> ParseResult -> UMLet text.

    ``parse`` raises ConversionError subclasses; ``convert`` / ``analyze``
    wrap the same work in a {"success": ...} envelope for UI and API callers.
    """

    def __init__(self, report_field_associations: Optional[bool] = None) -> None:
        if report_field_associations is None:
            report_field_associations = REPORT_FIELD_ASSOCIATIONS
        self.adapter = JavaAdapter()
        self.analyzer = RelationshipAnalyzer(report_field_associations=report_field_associations)
        self.generator = UmletGenerator()

    # ---------------- Core pipeline ----------------

    def parse(self, source: Optional[str]) -> ParseResult:
        if not source or not source.strip():
            logger.warning("Rejected empty input")
            raise EmptyInputError()

        code = preprocess_code(source)
        package_name = scan_package(code)
        imports = scan_imports(code)
        classes = self.adapter.extract_types(code, package_name)

        if not classes:
            logger.warning("No types found (package=%r, imports=%d)", package_name, len(imports))
            raise NoTypesFoundError(package_name, len(imports))

        relationships = self.analyzer.analyze(code, classes)
        logger.info("Parsed %d types, %d relationships", len(classes), len(relationships))

        return ParseResult(
            package_name=package_name,
            imports=imports,
            classes=classes,
            relationships=relationships,
        )

    # ---------------- Envelopes ----------------

    def convert(self, source: Optional[str], options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            result = self.parse(source)
        except ConversionError as e:
            return {
                "success": False,
                "error": str(e),
                "classes": [],
                "relationships": [],
                "uml_text": "",
                "relationship_text": "",
                "summary": _empty_summary(),
            }

        return {
            "success": True,
            "package_name": result.package_name,
            "imports": [i.to_dict() for i in result.imports],
            "classes": [c.to_dict() for c in result.classes],
            "relationships": [r.to_dict() for r in result.relationships],
            "uml_text": self.generator.generate_umlet(result.classes, result.relationships, options),
            "relationship_text": self.generator.generate_simple_relationship_text(result.relationships),
            "summary": self.summarize(result),
        }

    def analyze(self, source: Optional[str]) -> Dict[str, Any]:
        try:
            result = self.parse(source)
        except ConversionError as e:
            return {"success": False, "error": str(e), "classes": [], "relationships": []}

        return {
            "success": True,
            "classes": [c.to_dict() for c in result.classes],
            "relationships": [r.to_dict() for r in result.relationships],
        }

    def analyze_detailed(self, source: Optional[str]) -> Dict[str, Any]:
        try:
            result = self.parse(source)
        except ConversionError as e:
            return {"success": False, "error": str(e), "classes": [], "relationships": []}

        grouped = group_relationships_by_kind(result.relationships)
        return {
            "success": True,
            "classes": [c.to_dict() for c in result.classes],
            "relationships": [r.to_dict() for r in result.relationships],
            "debug": {
                "parsed_classes": [
                    {
                        "name": c.name,
                        "type": "interface" if c.is_interface else "enum" if c.is_enum else "class",
                        "field_count": len(c.fields),
                        "method_count": len(c.methods),
                        "super_class": c.super_type,
                        "interfaces": list(c.interfaces),
                    }
                    for c in result.classes
                ],
                "relationships_by_type": {
                    kind.value: [r.to_dict() for r in rels] for kind, rels in grouped.items()
                },
            },
        }

    # ---------------- Text helpers ----------------

    def generate_class_definitions(self, result: ParseResult) -> str:
        return "\n\n".join(self.generator.generate_class_text(c) for c in result.classes).strip()

    def generate_relationship_definitions(self, result: ParseResult) -> str:
        if not result.classes:
            return "No relationships (no classes found)"
        return self.generator.generate_relationships_human_readable(result.relationships).strip()

    @staticmethod
    def summarize(result: ParseResult) -> Dict[str, int]:
        return {
            "class_count": len(result.classes),
            "relationship_count": len(result.relationships),
            "field_count": sum(len(c.fields) for c in result.classes),
            "method_count": sum(len(c.methods) for c in result.classes),
        }
