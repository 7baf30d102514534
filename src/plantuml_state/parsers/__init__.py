"""Parser entry points."""

from __future__ import annotations

from plantuml_state.config import ParserConfig
from plantuml_state.parsers.lark_parser import get_parser, parse_tree
from plantuml_state.parsers.state import StateDiagramBuilder, StateDiagramParser, build_state_diagram
from plantuml_state.syntax.types import StateDiagram

__all__ = [
    "StateDiagramBuilder",
    "StateDiagramParser",
    "build_state_diagram",
    "get_parser",
    "parse_state_diagram",
    "parse_tree",
]


def parse_state_diagram(text: str, config: ParserConfig | None = None) -> StateDiagram:
    """Parse PlantUML state-diagram text into an AST.

    Performs no I/O and keeps no state between calls.

    Raises:
        ParseError: If the text does not conform to the grammar.
        NestingDepthError: If blocks nest deeper than ``config.max_depth``.
    """
    return StateDiagramParser(config).parse(text)
