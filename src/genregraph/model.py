from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, TypedDict

from .exceptions import DatasetError


class NodeData(TypedDict, total=False):
    id: str
    label: str
    degree: int
    description: str


class LinkData(TypedDict):
    source: str
    target: str
    ty: str


class Document(TypedDict, total=False):
    dump_date: str
    nodes: List[NodeData]
    links: List[LinkData]
    max_degree: int


class RelationshipType(Enum):
    DERIVATIVE = "Derivative"
    SUBGENRE = "Subgenre"
    FUSION_GENRE = "FusionGenre"


@dataclass(frozen=True)
class GraphNode:
    id: str
    label: str
    degree: int
    description: Optional[str] = None


@dataclass(frozen=True)
class GraphEdge:
    source: str
    target: str
    relationship: RelationshipType


@dataclass(frozen=True)
class GraphDataset:
    """Nodes keyed by id, edges in document order, and the source's max degree.

    Edge endpoints are not checked against ``nodes`` and ``max_degree`` is taken
    as given.
    """

    nodes: Dict[str, GraphNode] = field(default_factory=dict)
    edges: Tuple[GraphEdge, ...] = ()
    max_degree: int = 0
    dump_date: Optional[str] = None

    @classmethod
    def empty(cls) -> "GraphDataset":
        return cls()


def _require(obj: Mapping[str, Any], key: str, kind: type, path: str) -> Any:
    if not isinstance(obj, Mapping):
        raise DatasetError(path, f"expected an object, got {type(obj).__name__}")
    if key not in obj:
        raise DatasetError(f"{path}.{key}", "missing field")
    value = obj[key]
    # bool is an int subclass; a degree of `true` is still malformed
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise DatasetError(f"{path}.{key}", f"expected {kind.__name__}, got {type(value).__name__}")
    return value


def _parse_node(raw: Mapping[str, Any], path: str) -> GraphNode:
    node_id = _require(raw, "id", str, path)
    label = _require(raw, "label", str, path)
    degree = _require(raw, "degree", int, path)
    if degree < 0:
        raise DatasetError(f"{path}.degree", f"must be non-negative, got {degree}")
    description = raw.get("description")
    if description is not None and not isinstance(description, str):
        raise DatasetError(f"{path}.description", "expected str")
    return GraphNode(id=node_id, label=label, degree=degree, description=description)


def _parse_link(raw: Mapping[str, Any], path: str) -> GraphEdge:
    source = _require(raw, "source", str, path)
    target = _require(raw, "target", str, path)
    ty = _require(raw, "ty", str, path)
    try:
        relationship = RelationshipType(ty)
    except ValueError:
        raise DatasetError(f"{path}.ty", f"unknown relationship type {ty!r}") from None
    return GraphEdge(source=source, target=target, relationship=relationship)


def dataset_from_document(doc: Mapping[str, Any]) -> GraphDataset:
    """Parse a ``{nodes, links, max_degree}`` document into a GraphDataset.

    Raises DatasetError on a missing or wrong-typed field. Extra fields are ignored.
    """
    raw_nodes = _require(doc, "nodes", list, "$")
    raw_links = _require(doc, "links", list, "$")
    max_degree = _require(doc, "max_degree", int, "$")

    nodes: Dict[str, GraphNode] = {}
    for i, raw in enumerate(raw_nodes):
        node = _parse_node(raw, f"nodes[{i}]")
        nodes[node.id] = node
    edges = tuple(_parse_link(raw, f"links[{i}]") for i, raw in enumerate(raw_links))

    dump_date = doc.get("dump_date")
    return GraphDataset(
        nodes=nodes,
        edges=edges,
        max_degree=max_degree,
        dump_date=dump_date if isinstance(dump_date, str) else None,
    )
