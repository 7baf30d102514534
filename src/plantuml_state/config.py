"""Centralized configuration for plantuml-state."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_MAX_DEPTH = 24


@dataclass
class ParserConfig:
    """Configuration for the parsing pipeline.

    ``max_depth`` bounds the nesting of ``{ ... }`` blocks; deeper input
    fails with NestingDepthError.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
