"""Centralized configuration for gml-parser."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_MAX_DEPTH = 128


@dataclass
class ParseConfig:
    """Configuration for a parse run."""

    # Maximum number of nested blocks below the top-level pair.
    max_depth: int = DEFAULT_MAX_DEPTH
