"""Graph model — converts a parse tree into graphs, nodes and edges.

The root pair must be ``graph [...]``. Well-known keys (``id``, ``label``,
``directed``, ``node``, ``edge``, ``source``, ``target``) become fields;
every other pair is kept, in source order, as an attribute. Edges are not
checked against the node list.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import networkx as nx

from gml_parser.errors import GraphError
from gml_parser.syntax.types import Document, Number, Object, Pair, StringLiteral, Value

logger = logging.getLogger(__name__)


class _HasAttributes:
    attrs: list[Pair]

    def get_attribute(self, name: str) -> Value | None:
        """Return the first remaining attribute named ``name``."""
        for pair in self.attrs:
            if pair.key.text == name:
                return pair.value
        return None

    def take_attribute(self, name: str) -> Value | None:
        """Remove and return the first remaining attribute named ``name``."""
        pair = _take(self.attrs, name)
        return pair.value if pair is not None else None

    def attributes(self) -> dict[str, Any]:
        """Remaining attributes as plain Python values; the first of a repeated key wins."""
        result: dict[str, Any] = {}
        for pair in self.attrs:
            result.setdefault(pair.key.text, pair.value.to_python())
        return result


@dataclass
class Node(_HasAttributes):
    id: int
    label: str | None = None
    attrs: list[Pair] = field(default_factory=list)

    @classmethod
    def from_gml(cls, obj: Object) -> Node:
        attrs = list(obj.pairs)
        node_id = _take_int(attrs, "id", "node id")
        if node_id is None:
            raise GraphError("Unable to parse id from node")
        return cls(id=node_id, label=_take_str(attrs, "label", "node label"), attrs=attrs)


@dataclass
class Edge(_HasAttributes):
    source: int
    target: int
    label: str | None = None
    attrs: list[Pair] = field(default_factory=list)

    @classmethod
    def from_gml(cls, obj: Object) -> Edge:
        attrs = list(obj.pairs)
        source = _take_int(attrs, "source", "edge source")
        if source is None:
            raise GraphError("Unable to parse source from edge")
        target = _take_int(attrs, "target", "edge target")
        if target is None:
            raise GraphError("Unable to parse target from edge")
        return cls(
            source=source,
            target=target,
            label=_take_str(attrs, "label", "edge label"),
            attrs=attrs,
        )


@dataclass
class Graph(_HasAttributes):
    """A graph read from a ``graph [...]`` block."""

    directed: bool | None = None
    id: int | None = None
    label: str | None = None
    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    attrs: list[Pair] = field(default_factory=list)

    @classmethod
    def from_document(cls, document: Document) -> Graph:
        return cls.from_object(document.to_object())

    @classmethod
    def from_object(cls, root: Object) -> Graph:
        """Build a Graph from a block whose first ``graph`` pair is the graph.

        Only one graph per document is read.
        """
        value = root.get("graph")
        if value is None:
            raise GraphError("Unable to parse graph from GML object")
        if not isinstance(value, Object):
            raise GraphError(f"Failed to parse graph: {value!r}. Expected block but found invalid type.")
        graph = cls._from_block(value)
        logger.debug(f"Built graph with {len(graph.nodes)} nodes and {len(graph.edges)} edges")
        return graph

    @classmethod
    def _from_block(cls, obj: Object) -> Graph:
        attrs = list(obj.pairs)
        graph_id = _take_int(attrs, "id", "graph id")
        directed = _take_int(attrs, "directed", "graph directed")
        label = _take_str(attrs, "label", "graph label")
        nodes = [Node.from_gml(block) for block in _take_blocks(attrs, "node")]
        edges = [Edge.from_gml(block) for block in _take_blocks(attrs, "edge")]
        return cls(
            directed=None if directed is None else directed == 1,
            id=graph_id,
            label=label,
            nodes=nodes,
            edges=edges,
            attrs=attrs,
        )

    def to_networkx(self) -> nx.MultiDiGraph | nx.MultiGraph:
        """Build a networkx multigraph; directed only when ``directed 1`` was given."""
        g: nx.MultiDiGraph | nx.MultiGraph = nx.MultiDiGraph() if self.directed else nx.MultiGraph()
        g.graph.update(self.attributes())
        if self.id is not None:
            g.graph["id"] = self.id
        if self.label is not None:
            g.graph["label"] = self.label
        g.add_nodes_from((node.id, _with_label(node)) for node in self.nodes)
        g.add_edges_from((edge.source, edge.target, _with_label(edge)) for edge in self.edges)
        return g


def _with_label(item: Node | Edge) -> dict[str, Any]:
    data = item.attributes()
    if item.label is not None:
        data["label"] = item.label
    return data


def _take(attrs: list[Pair], name: str) -> Pair | None:
    for i, pair in enumerate(attrs):
        if pair.key.text == name:
            return attrs.pop(i)
    return None


def _take_int(attrs: list[Pair], name: str, what: str) -> int | None:
    pair = _take(attrs, name)
    if pair is None:
        return None
    value = pair.value
    if not isinstance(value, Number) or not value.is_integer:
        raise GraphError(f"Failed to parse {what}: {value!r}. Expected int but found invalid type.")
    return value.value


def _take_str(attrs: list[Pair], name: str, what: str) -> str | None:
    pair = _take(attrs, name)
    if pair is None:
        return None
    if not isinstance(pair.value, StringLiteral):
        raise GraphError(f"Failed to parse {what}: {pair.value!r}. Expected str but found invalid type.")
    return pair.value.text


def _take_blocks(attrs: list[Pair], name: str) -> list[Object]:
    blocks: list[Object] = []
    while True:
        pair = _take(attrs, name)
        if pair is None:
            return blocks
        if not isinstance(pair.value, Object):
            raise GraphError(f"Failed to parse {name}: {pair.value!r}. Expected block but found invalid type.")
        blocks.append(pair.value)
