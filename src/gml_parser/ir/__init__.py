"""Graph model built from parse trees."""

from gml_parser.ir.graph import Edge, Graph, Node

__all__ = [
    "Edge",
    "Graph",
    "Node",
]
