"""Tests for gml_parser.ir.graph — Graph/Node/Edge construction and networkx export."""

from pathlib import Path

import networkx as nx
import pytest

from gml_parser import Graph, GraphError, Number, Object, StringLiteral, parse, parse_graph

EXAMPLES_DIR = Path(__file__).parent.parent / "examples"


def _read(name: str) -> str:
    return (EXAMPLES_DIR / name).read_text(encoding="utf-8")


class TestExamples:
    def test_empty(self):
        graph = parse_graph(_read("empty.gml"))
        assert graph.nodes == []
        assert graph.edges == []
        assert graph.id is None
        assert graph.directed is None

    def test_single(self):
        graph = parse_graph(_read("single.gml"))
        assert graph.get_attribute("k") == StringLiteral("test")

    def test_simple(self):
        graph = parse_graph(_read("simple.gml"))
        assert graph.directed is True
        assert [n.id for n in graph.nodes] == [0, 1]
        assert (graph.edges[0].source, graph.edges[0].target) == (0, 1)
        assert graph.edges[0].label is None

    def test_wikipedia(self):
        graph = parse_graph(_read("wikipedia.gml"))
        assert graph.id == 42
        assert graph.directed is True
        assert graph.label == "Hello, I am a graph"
        assert len(graph.nodes) == 3
        assert len(graph.edges) == 3
        assert graph.get_attribute("comment") == StringLiteral("This is a sample graph")
        assert graph.nodes[0].get_attribute("thisIsASampleAttribute") == Number("42")

    def test_synoptic(self):
        graph = parse_graph(_read("synoptic.gml"))
        assert len(graph.nodes) == 7
        assert graph.nodes[0].id == 0
        assert graph.nodes[0].label == "a"
        assert graph.nodes[6].id == 6
        assert graph.nodes[6].label == "INITIAL"
        assert len(graph.edges) == 8
        assert graph.edges[0].label == "P: 1.00"
        assert graph.edges[0].source == 6
        assert graph.edges[0].target == 0


class TestConversion:
    def test_nodes_and_edges_interleaved(self):
        src = (
            "graph [\n"
            "  node [\n    id 1\n  ]\n"
            "  edge [\n    source 1\n    target 2\n  ]\n"
            "  node [\n    id 2\n  ]\n"
            "]"
        )
        graph = parse_graph(src)
        assert [n.id for n in graph.nodes] == [1, 2]
        assert len(graph.edges) == 1

    def test_remaining_attributes_keep_source_order(self):
        graph = parse_graph("graph [\n  z 1\n  id 3\n  a 'x'\n  m [\n    k 1\n  ]\n]")
        assert [pair.key.text for pair in graph.attrs] == ["z", "a", "m"]
        assert graph.attributes() == {"z": 1, "a": "x", "m": [("k", 1)]}

    def test_take_attribute_removes(self):
        graph = parse_graph("graph [\n  note 'a'\n  note 'b'\n]")
        assert graph.take_attribute("note") == StringLiteral("a")
        assert graph.get_attribute("note") == StringLiteral("b")
        assert graph.take_attribute("note") == StringLiteral("b")
        assert graph.take_attribute("note") is None

    def test_directed_zero(self):
        assert parse_graph("graph [\n  directed 0\n]").directed is False

    def test_negative_ids(self):
        graph = parse_graph("graph [\n  node [\n    id -1\n  ]\n]")
        assert graph.nodes[0].id == -1

    def test_dangling_edge_is_not_checked(self):
        graph = parse_graph("graph [\n  edge [\n    source 7\n    target 8\n  ]\n]")
        assert (graph.edges[0].source, graph.edges[0].target) == (7, 8)

    def test_from_object(self):
        root = Object(parse("graph [\n  id 5\n]").to_object().pairs)
        assert Graph.from_object(root).id == 5


class TestConversionErrors:
    @pytest.mark.parametrize(
        "src,match",
        [
            ("digraph [\n  id 1\n]", "Unable to parse graph"),
            ("graph 1", "Expected block"),
            ("graph [\n  id 'x'\n]", "graph id"),
            ("graph [\n  id 1.5\n]", "graph id"),
            ("graph [\n  label 3\n]", "graph label"),
            ("graph [\n  node 3\n]", "Expected block"),
            ("graph [\n  node [\n    label 'x'\n  ]\n]", "id from node"),
            ("graph [\n  node [\n    id 'one'\n  ]\n]", "node id"),
            ("graph [\n  edge [\n    target 1\n  ]\n]", "source from edge"),
            ("graph [\n  edge [\n    source 1\n  ]\n]", "target from edge"),
            ("graph [\n  edge [\n    source 1\n    target 2\n    label 4\n  ]\n]", "edge label"),
        ],
    )
    def test_invalid_graphs(self, src, match):
        with pytest.raises(GraphError, match=match):
            parse_graph(src)


class TestNetworkx:
    def test_directed_export(self):
        g = parse_graph(_read("wikipedia.gml")).to_networkx()
        assert isinstance(g, nx.MultiDiGraph)
        assert g.number_of_nodes() == 3
        assert g.number_of_edges() == 3
        assert g.graph["id"] == 42
        assert g.graph["label"] == "Hello, I am a graph"
        assert g.graph["comment"] == "This is a sample graph"
        assert g.nodes[1]["label"] == "node 1"
        assert g.nodes[1]["thisIsASampleAttribute"] == 42
        assert g.has_edge(3, 1)
        assert not nx.is_directed_acyclic_graph(g)

    def test_undirected_by_default(self):
        g = parse_graph("graph [\n  edge [\n    source 1\n    target 2\n  ]\n]").to_networkx()
        assert isinstance(g, nx.MultiGraph)
        assert not g.is_directed()
        assert g.has_edge(2, 1)

    def test_parallel_edges_kept(self):
        src = "graph [\n  directed 1\n" + "  edge [\n    source 1\n    target 2\n  ]\n" * 2 + "]"
        g = parse_graph(src).to_networkx()
        assert g.number_of_edges(1, 2) == 2

    def test_edge_attribute_named_key(self):
        src = "graph [\n  edge [\n    source 1\n    target 2\n    key 'k'\n    weight 0.5\n  ]\n]"
        g = parse_graph(src).to_networkx()
        data = list(g.edges(data=True))[0][2]
        assert data["key"] == "k"
        assert data["weight"] == 0.5
        assert "label" not in data

    def test_unlabeled_node_has_no_label_key(self):
        g = parse_graph("graph [\n  node [\n    id 1\n  ]\n  node [\n    id 2\n    label 'b'\n  ]\n]").to_networkx()
        assert "label" not in g.nodes[1]
        assert g.nodes[2]["label"] == "b"

    def test_synoptic_topology(self):
        g = parse_graph(_read("synoptic.gml")).to_networkx()
        assert nx.is_directed_acyclic_graph(g)
        assert list(nx.topological_sort(g))[0] == 6
