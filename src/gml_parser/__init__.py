"""gml-parser: Graph Modelling Language text to parse trees and graphs."""

from gml_parser.config import ParseConfig
from gml_parser.errors import (
    EncodingError,
    GMLError,
    GMLSyntaxError,
    GraphError,
    LexicalError,
    StructuralError,
)
from gml_parser.ir.graph import Edge, Graph, Node
from gml_parser.parsers import GmlParser, parse, parse_rule
from gml_parser.syntax.types import Document, Identifier, Number, Object, Pair, Span, StringLiteral
from gml_parser.types import ErrorKind, QuoteStyle, Rule, ValueKind


def parse_graph(src: str, config: ParseConfig | None = None) -> Graph:
    """Parse GML text and build the Graph described by its ``graph`` block.

    Args:
        src: GML source string.
        config: Parser limits; defaults to ``ParseConfig()``.

    Returns:
        The Graph with its nodes, edges and remaining attributes.

    Raises:
        GMLSyntaxError: If the input is not well-formed GML.
        GraphError: If the document does not describe a graph.
    """
    return Graph.from_document(parse(src, config))


__all__ = [
    "Document",
    "Edge",
    "EncodingError",
    "ErrorKind",
    "GMLError",
    "GMLSyntaxError",
    "GmlParser",
    "Graph",
    "GraphError",
    "Identifier",
    "LexicalError",
    "Node",
    "Number",
    "Object",
    "Pair",
    "ParseConfig",
    "QuoteStyle",
    "Rule",
    "Span",
    "StringLiteral",
    "StructuralError",
    "ValueKind",
    "parse",
    "parse_graph",
    "parse_rule",
]
