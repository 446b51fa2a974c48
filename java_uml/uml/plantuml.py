from __future__ import annotations

import re
from typing import Any, Dict, Iterator, List, Optional

from ..cir.model import VISIBILITY_SYMBOLS

# CIR edge type -> PlantUML arrow (source on the left)
RELATION_ARROWS = {
    "INHERITS": "--|>",
    "IMPLEMENTS": "..|>",
    "COMPOSES": "*--",
    "AGGREGATES": "o--",
    "ASSOCIATES": "-->",
    "DEPENDS_ON": "..>",
}

DEFAULT_PACKAGE = ""


class _CirView:
    """
    Read-only lookup over CIR debug JSON:
      {"nodes": [{"id", "kind", "attrs"}], "edges": [{"src", "dst", "type", "attrs"}]}

    Members are joined to their type through HAS_FIELD / HAS_METHOD edges and
    parameters to their method through PARAM_OF edges, in edge order.
    """

    def __init__(self, cir: Dict[str, Any]) -> None:
        self.nodes = {n["id"]: n for n in cir.get("nodes", [])}
        self.edges = list(cir.get("edges", []))

        self.types = {
            node_id: n.get("attrs", {})
            for node_id, n in self.nodes.items()
            if n.get("kind") == "TypeDecl"
        }
        self.members: Dict[str, Dict[str, List[str]]] = {
            type_id: {"HAS_FIELD": [], "HAS_METHOD": []} for type_id in self.types
        }
        self.params: Dict[str, List[Dict[str, Any]]] = {}

        for e in self.edges:
            src, dst, etype = e.get("src"), e.get("dst"), e.get("type")
            if etype in ("HAS_FIELD", "HAS_METHOD") and src in self.types and dst in self.nodes:
                self.members[src][etype].append(dst)
            elif etype == "PARAM_OF":
                param = self.nodes.get(src)
                if param and param.get("kind") == "Parameter" and dst:
                    self.params.setdefault(dst, []).append(param.get("attrs", {}))

    def attrs(self, node_id: str) -> Dict[str, Any]:
        return self.nodes[node_id].get("attrs", {})

    def fields(self, type_id: str) -> Iterator[Dict[str, Any]]:
        for node_id in self.members[type_id]["HAS_FIELD"]:
            yield self.attrs(node_id)

    def methods(self, type_id: str) -> Iterator[tuple[str, Dict[str, Any]]]:
        for node_id in self.members[type_id]["HAS_METHOD"]:
            yield node_id, self.attrs(node_id)

    def relation_lines(self) -> List[str]:
        """Arrows between declared types only; external targets are left out."""
        out: List[str] = []
        for e in self.edges:
            arrow = RELATION_ARROWS.get(e.get("type") or "")
            src, dst = e.get("src"), e.get("dst")
            if arrow is None or src not in self.types or dst not in self.types:
                continue
            line = f"{self.types[src].get('name', src)} {arrow} {self.types[dst].get('name', dst)}"
            if line not in out:
                out.append(line)
        return out


def _clean_type_for_display(raw_type: Optional[str]) -> str:
    """
    Nested generics collapse to ``<>`` and a qualified base name keeps
    only its last segment: ``com.example.Person`` -> ``Person``.
    """
    if not raw_type:
        return "void"

    shown = re.sub(r"<.*>", "<>", raw_type) if raw_type.count("<") > 1 else raw_type
    base, bracket, generic = shown.partition("<")
    return base.rsplit(".", 1)[-1] + bracket + generic


def _member_prefix(attrs: Dict[str, Any]) -> str:
    symbol = VISIBILITY_SYMBOLS.get(attrs.get("visibility", "package"), "~")
    modifiers = attrs.get("modifiers") or ()
    tags = []
    if "static" in modifiers:
        tags.append("{static}")
    if "abstract" in modifiers or attrs.get("is_abstract"):
        tags.append("{abstract}")
    return " ".join([symbol, *tags])


def _type_header(attrs: Dict[str, Any]) -> str:
    name = attrs.get("name", "UnknownType")
    if attrs.get("is_interface"):
        keyword = "interface"
    elif attrs.get("is_enum"):
        keyword = "enum"
    elif attrs.get("is_abstract"):
        keyword = "abstract class"
    else:
        keyword = "class"
    return f"{keyword} {name}"


def _field_line(attrs: Dict[str, Any]) -> str:
    shown_type = _clean_type_for_display(attrs.get("type") or "Object")
    return f"  {_member_prefix(attrs)} {attrs.get('name', 'field')} : {shown_type}"


def _method_line(attrs: Dict[str, Any], params: List[Dict[str, Any]]) -> str:
    args = ", ".join(
        f"{p.get('name', 'p')}: {_clean_type_for_display(p.get('type') or 'Object')}" for p in params
    )
    line = f"  {_member_prefix(attrs)} {attrs.get('name', 'method')}({args})"
    if attrs.get("is_constructor"):
        return line
    return f"{line} : {_clean_type_for_display(attrs.get('return_type'))}"


def generate_class_diagram(cir: Dict[str, Any]) -> str:
    """CIR JSON -> PlantUML class diagram with members and relations."""
    view = _CirView(cir)
    out = ["@startuml", "skinparam classAttributeIconSize 0", "set namespaceSeparator none"]

    for type_id, attrs in view.types.items():
        out.append(f"{_type_header(attrs)} {{")
        out.extend(_field_line(f) for f in view.fields(type_id))
        out.extend(_method_line(m, view.params.get(method_id, [])) for method_id, m in view.methods(type_id))
        out.append("}")

    out.extend(view.relation_lines())
    out.append("@enduml")
    return "\n".join(out)


def generate_package_diagram(cir: Dict[str, Any]) -> str:
    """
    CIR JSON -> PlantUML diagram with types grouped by package.
    Types without a package sit at top level; arrows stay at class level.
    """
    view = _CirView(cir)

    by_package: Dict[str, List[str]] = {}
    for attrs in view.types.values():
        by_package.setdefault(attrs.get("package") or DEFAULT_PACKAGE, []).append(_type_header(attrs))

    out = ["@startuml", "set namespaceSeparator none"]
    for package, headers in by_package.items():
        if package == DEFAULT_PACKAGE:
            out.extend(headers)
            continue
        out.append(f'package "{package}" {{')
        out.extend(f"  {h}" for h in headers)
        out.append("}")

    out.extend(view.relation_lines())
    out.append("@enduml")
    return "\n".join(out)
