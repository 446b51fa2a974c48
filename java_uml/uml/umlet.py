from __future__ import annotations

from html import escape
from typing import Any, Dict, List, Optional, Sequence

from ..cir.model import Field, Method, Relationship, RelationshipKind, TypeDecl
from ..config import (
    DEFAULT_BASE_X,
    DEFAULT_BASE_Y,
    DEFAULT_SPACING,
    UMLET_CLASS_WIDTH,
    UMLET_COLUMNS,
    UMLET_ROW_HEIGHT,
    UMLET_VERSION,
)

# UMLet line types, already XML-escaped
UMLET_ARROWS = {
    RelationshipKind.INHERITANCE: "-|&gt;",
    RelationshipKind.IMPLEMENTATION: "..|&gt;",
    RelationshipKind.COMPOSITION: "&lt;&lt;&lt;&lt;-",
    RelationshipKind.AGGREGATION: "&lt;&lt;&lt;-",
    RelationshipKind.ASSOCIATION: "-",
    RelationshipKind.DEPENDENCY: "..&gt;",
}

SIMPLE_ARROWS = {
    RelationshipKind.INHERITANCE: "──|▷",
    RelationshipKind.IMPLEMENTATION: "┅┅|▷",
    RelationshipKind.COMPOSITION: "◆───",
    RelationshipKind.AGGREGATION: "◇───",
    RelationshipKind.ASSOCIATION: "─────",
    RelationshipKind.DEPENDENCY: "┅┅▷",
}

KIND_LABELS = {
    RelationshipKind.INHERITANCE: "Inheritance",
    RelationshipKind.IMPLEMENTATION: "Implementation",
    RelationshipKind.COMPOSITION: "Composition",
    RelationshipKind.AGGREGATION: "Aggregation",
    RelationshipKind.ASSOCIATION: "Association",
    RelationshipKind.DEPENDENCY: "Dependency",
}


def group_relationships_by_kind(
    relationships: Sequence[Relationship],
) -> Dict[RelationshipKind, List[Relationship]]:
    grouped: Dict[RelationshipKind, List[Relationship]] = {kind: [] for kind in RelationshipKind}
    for rel in relationships:
        grouped[rel.kind].append(rel)
    return grouped


class UmletGenerator:
    """
    Renders extracted types and relationships as UMLet elements.
    Pure formatting; no analysis happens here.
    """

    # ---------------- Diagram ----------------

    def generate_umlet(
        self,
        classes: Sequence[TypeDecl],
        relationships: Sequence[Relationship],
        options: Optional[Dict[str, Any]] = None,
    ) -> str:
        options = options or {}
        spacing = options.get("spacing", DEFAULT_SPACING)
        base_x = options.get("base_x", DEFAULT_BASE_X)
        base_y = options.get("base_y", DEFAULT_BASE_Y)

        col_step = UMLET_CLASS_WIDTH + 2 * spacing
        row_step = UMLET_ROW_HEIGHT + 2 * spacing

        parts: List[str] = []
        for index, type_decl in enumerate(classes):
            x = base_x + (index % UMLET_COLUMNS) * col_step
            y = base_y + (index // UMLET_COLUMNS) * row_step
            parts.append(self.generate_class_diagram(type_decl, x, y))

        for rel in relationships:
            parts.append(self.generate_relationship_element(rel))

        return "\n".join(parts).strip()

    def generate_class_diagram(self, type_decl: TypeDecl, x: int = 100, y: int = 100) -> str:
        lines = [
            '<?xml version="1.0" encoding="UTF-8" standalone="no"?>',
            f'<diagram program="umlet" version="{UMLET_VERSION}">',
            "  <zoom_level>10</zoom_level>",
            "  <element>",
            "    <id>UMLClass</id>",
            "    <coordinates>",
            f"      <x>{x}</x>",
            f"      <y>{y}</y>",
            f"      <w>{UMLET_CLASS_WIDTH}</w>",
            f"      <h>{self.calculate_class_height(type_decl)}</h>",
            "    </coordinates>",
            f"    <panel_attributes>{escape(self.generate_class_content(type_decl), quote=False)}</panel_attributes>",
            "    <additional_attributes/>",
            "  </element>",
            "</diagram>",
        ]
        return "\n".join(lines)

    def generate_class_content(self, type_decl: TypeDecl) -> str:
        if type_decl.is_interface:
            content = f"<<interface>>\n{type_decl.name}"
        elif type_decl.is_abstract:
            content = f"/{type_decl.name}/"
        elif type_decl.is_enum:
            content = f"<<enum>>\n{type_decl.name}"
        else:
            content = type_decl.name

        if type_decl.fields:
            content += "\n--\n"
            for f in type_decl.fields:
                content += self.format_field(f) + "\n"

        if type_decl.methods or type_decl.constructors:
            content += "--\n"
            # constructors first
            for ctor in type_decl.constructors:
                content += self.format_method(ctor) + "\n"
            for method in type_decl.methods:
                content += self.format_method(method) + "\n"

        return content.strip()

    def format_field(self, f: Field) -> str:
        text = f"{f.visibility_symbol} {f.name}: {f.type_name}"
        if f.is_static:
            text = f"_{text}_"
        return text

    def format_method(self, method: Method) -> str:
        params = ", ".join(f"{p.name}: {p.type_name}" for p in method.parameters)
        text = f"{method.visibility_symbol} {method.name}({params})"
        if method.return_type and not method.is_constructor:
            text += f": {method.return_type}"
        if method.is_static:
            text = f"_{text}_"
        if method.is_abstract:
            text = f"/{text}/"
        return text

    def calculate_class_height(self, type_decl: TypeDecl) -> int:
        lines = 1
        if type_decl.fields:
            lines += 1 + len(type_decl.fields)
        if type_decl.methods:
            lines += 1 + len(type_decl.methods)
        return max(80, lines * 15 + 20)

    def generate_relationship_element(self, rel: Relationship) -> str:
        lines = [
            "  <element>",
            "    <id>Relation</id>",
            "    <coordinates>",
            "      <x>0</x>",
            "      <y>0</y>",
            "      <w>100</w>",
            "      <h>50</h>",
            "    </coordinates>",
            f"    <panel_attributes>lt={UMLET_ARROWS.get(rel.kind, '-')}</panel_attributes>",
            "    <additional_attributes>10.0;10.0;90.0;40.0</additional_attributes>",
            "  </element>",
        ]
        return "\n".join(lines)

    # ---------------- Plain text ----------------

    def generate_simple_relationship_text(self, relationships: Sequence[Relationship]) -> str:
        text = "=== Detected relationships ===\n\n"
        for kind, rels in group_relationships_by_kind(relationships).items():
            if not rels:
                continue
            text += f"[{KIND_LABELS[kind]}]\n"
            for rel in rels:
                text += f"  {rel.source} {SIMPLE_ARROWS[kind]} {rel.target}\n"
            text += "\n"
        return text

    def generate_class_text(self, type_decl: TypeDecl) -> str:
        """Copy-paste text for a single UMLet class element."""
        out: List[str] = []
        if type_decl.is_interface:
            out.append("<<interface>>")
        elif type_decl.is_enum:
            out.append("<<enumeration>>")

        out.append(f"/{type_decl.name}/" if type_decl.is_abstract else type_decl.name)
        out.append("--")

        if type_decl.fields:
            for f in type_decl.fields:
                line = f"{f.visibility_symbol} {f.name} : {f.type_name}"
                out.append(f"_{line}_" if f.is_static else line)
        else:
            out.append("")

        out.append("--")

        for ctor in type_decl.constructors:
            params = ", ".join(f"{p.name} : {p.type_name}" for p in ctor.parameters)
            out.append(f"{ctor.visibility_symbol} {ctor.name}({params})")

        for method in type_decl.methods:
            params = ", ".join(f"{p.name} : {p.type_name}" for p in method.parameters)
            line = f"{method.visibility_symbol} {method.name}({params}) : {method.return_type or 'void'}"
            if method.is_abstract:
                line = f"/{line}/"
            if method.is_static:
                line = f"_{line}_"
            out.append(line)

        return "\n".join(out).strip()

    def generate_relationships_human_readable(self, relationships: Sequence[Relationship]) -> str:
        if not relationships:
            return (
                "No relationships between classes were found.\n\n"
                "Things that produce relationships:\n"
                "- extends (inheritance)\n"
                "- implements (interface implementation)\n"
                "- new inside a constructor or method (composition / aggregation)\n"
                "- constructor parameters stored in fields (aggregation)\n"
                "- method parameter types (dependency)\n"
            )

        blocks: List[str] = []
        count = 0
        for kind, rels in group_relationships_by_kind(relationships).items():
            for rel in rels:
                count += 1
                block = f"{count}. {KIND_LABELS[kind]}:\n   {rel.source} {SIMPLE_ARROWS[kind]} {rel.target}\n"
                location = rel.details.get("location")
                if location:
                    block += f"   - location: {location}\n"
                if rel.details.get("method") and rel.details.get("parameter"):
                    block += f"   - method: {rel.details['method']}({rel.details['parameter']})\n"
                blocks.append(block)

        header = f"Relationship summary\nFound: {count}\n\n"
        return header + "\n".join(blocks)
