import networkx as nx  # type: ignore
from typing import Any, Dict

from .model import ParseResult, RelationshipKind

EDGE_TYPES = {
    RelationshipKind.INHERITANCE: "INHERITS",
    RelationshipKind.IMPLEMENTATION: "IMPLEMENTS",
    RelationshipKind.COMPOSITION: "COMPOSES",
    RelationshipKind.AGGREGATION: "AGGREGATES",
    RelationshipKind.ASSOCIATION: "ASSOCIATES",
    RelationshipKind.DEPENDENCY: "DEPENDS_ON",
}


class CIRGraph:
    """
    Typed multi-graph view of one parse result.
    Nodes: TypeDecl, Field, Method, Parameter, ExternalType
    Edges: HAS_FIELD, HAS_METHOD, PARAM_OF, plus one edge per relationship
           (INHERITS, IMPLEMENTS, COMPOSES, AGGREGATES, ASSOCIATES, DEPENDS_ON)
    """
    def __init__(self) -> None:
        self.g = nx.MultiDiGraph()

    def add_node(self, node_id: str, kind: str, payload: Any) -> None:
        self.g.add_node(node_id, kind=kind, payload=payload)

    def add_edge(self, src: str, dst: str, etype: str, **attrs: Any) -> None:
        self.g.add_edge(src, dst, etype=etype, attrs=attrs)

    @classmethod
    def from_parse_result(cls, result: ParseResult) -> "CIRGraph":
        graph = cls()
        # first declaration wins for duplicated short names
        type_ids: Dict[str, str] = {}

        for t in result.classes:
            type_id = f"type:{t.full_name}"
            if t.name not in type_ids:
                type_ids[t.name] = type_id
            graph.add_node(type_id, "TypeDecl", t.to_dict() | {"fields": [], "constructors": [], "methods": []})

            for f in t.fields:
                field_id = f"field:{t.full_name}:{f.name}"
                graph.add_node(field_id, "Field", f.to_dict())
                graph.add_edge(type_id, field_id, "HAS_FIELD")

            # overloads share a name, so ids carry the position
            members = [("ctor", c) for c in t.constructors] + [("method", m) for m in t.methods]
            for index, (prefix, m) in enumerate(members):
                method_id = f"{prefix}:{t.full_name}:{m.name}:{index}"
                payload = m.to_dict()
                payload.pop("parameters")
                graph.add_node(method_id, "Method", payload)
                graph.add_edge(type_id, method_id, "HAS_METHOD")

                for p in m.parameters:
                    p_id = f"param:{method_id}:{p.name}"
                    graph.add_node(p_id, "Parameter", p.to_dict())
                    graph.add_edge(p_id, method_id, "PARAM_OF")

        for rel in result.relationships:
            src_id = type_ids.get(rel.source, f"type:{rel.source}")
            dst_id = type_ids.get(rel.target)
            if dst_id is None:
                dst_id = f"external:{rel.target}"
                if dst_id not in graph.g:
                    graph.add_node(dst_id, "ExternalType", {"name": rel.target})
            graph.add_edge(src_id, dst_id, EDGE_TYPES[rel.kind], **rel.details)

        return graph

    def to_debug_json(self) -> Dict[str, Any]:
        """JSON-ready {nodes, edges} view used by the API and the PlantUML renderer."""
        nodes = [
            {"id": node_id, "kind": kind, "attrs": dict(payload or {})}
            for node_id, kind, payload in self._node_rows()
        ]
        edges = [
            {"src": src, "dst": dst, "type": data.get("etype"), "attrs": dict(data.get("attrs") or {})}
            for src, dst, data in self.g.edges(data=True)
        ]
        return {"nodes": nodes, "edges": edges}

    def _node_rows(self):
        for node_id, data in self.g.nodes(data=True):
            payload = data.get("payload")
            yield node_id, data.get("kind"), payload if isinstance(payload, dict) else None
