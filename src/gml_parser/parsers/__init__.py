"""Parser entry points: GML text to parse tree."""

from __future__ import annotations

import logging

from gml_parser.config import ParseConfig
from gml_parser.errors import GMLSyntaxError
from gml_parser.parsers.gml import GmlParser, TreeNode
from gml_parser.syntax.types import Document
from gml_parser.types import Rule

logger = logging.getLogger(__name__)


def parse(src: str, config: ParseConfig | None = None) -> Document:
    """Parse GML text into a Document.

    Args:
        src: Decoded GML text.
        config: Parser limits; defaults to ``ParseConfig()``.

    Returns:
        The Document holding the single top-level pair.

    Raises:
        GMLSyntaxError: ``LexicalError``, ``StructuralError`` or
            ``EncodingError`` positioned at the furthest failure.
    """
    try:
        document = GmlParser(config).parse(src)
    except GMLSyntaxError as e:
        logger.debug(f"GML parse failed at {e.line}:{e.column}: {e.message}")
        raise
    logger.debug(f"Parsed GML document '{document.key}' ({len(src)} chars)")
    return document


def parse_rule(src: str, rule: Rule, config: ParseConfig | None = None) -> TreeNode:
    """Parse all of ``src`` as a single grammar rule (identifier, string, ...)."""
    return GmlParser(config).parse_rule(src, rule)


__all__ = ["GmlParser", "parse", "parse_rule"]
