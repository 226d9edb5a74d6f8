"""CLI entry point for gml-parser."""

import json
import logging
import sys

import click

from gml_parser.config import DEFAULT_MAX_DEPTH, ParseConfig
from gml_parser.errors import GMLSyntaxError, GraphError
from gml_parser.ir.graph import Graph
from gml_parser.parsers import parse


def _encodable(text: str) -> str:
    # Lone surrogates cannot be written as UTF-8; JSON accepts them as backslash escapes.
    return text.encode("utf-8", "backslashreplace").decode("utf-8")


def _graph_summary(graph: Graph) -> str:
    kind = "directed graph" if graph.directed else "graph"
    name = f" {graph.id}" if graph.id is not None else ""
    label = f" {graph.label!r}" if graph.label is not None else ""
    return f"{kind}{name}{label}: {len(graph.nodes)} nodes, {len(graph.edges)} edges\n"


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--graph", "-g", "as_graph", is_flag=True, help="Read the document as a graph and print a summary")
@click.option("--max-depth", "max_depth", type=int, default=DEFAULT_MAX_DEPTH, help="Maximum block nesting depth")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--verbose", "-v", "verbose", is_flag=True, help="Log debug output to stderr")
def main(input: str | None, as_graph: bool, max_depth: int, output: str | None, verbose: bool) -> None:
    """Parse a GML (Graph Modelling Language) document."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if input:
        try:
            with open(input, encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    try:
        document = parse(text, ParseConfig(max_depth=max_depth))
    except GMLSyntaxError as e:
        click.echo(f"parse error:\n{e}", err=True)
        sys.exit(1)

    if as_graph:
        try:
            rendered = _graph_summary(Graph.from_document(document))
        except GraphError as e:
            click.echo(f"graph error: {e}", err=True)
            sys.exit(1)
    else:
        rendered = json.dumps(document.to_python(), indent=2, ensure_ascii=False) + "\n"
    rendered = _encodable(rendered)

    if output:
        try:
            with open(output, "w", encoding="utf-8") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered, nl=False)


if __name__ == "__main__":
    main()
