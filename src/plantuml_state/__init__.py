"""plantuml-state: PlantUML state-diagram text to a typed syntax tree."""

from plantuml_state.config import ParserConfig
from plantuml_state.errors import (
    GrammarConsistencyError,
    NestingDepthError,
    ParseError,
    StateDiagramError,
)
from plantuml_state.parsers import parse_state_diagram
from plantuml_state.syntax import (
    Attributes,
    Directive,
    Element,
    StateBlock,
    StateData,
    StateDeclaration,
    StateDiagram,
    StateNote,
    Transition,
)
from plantuml_state.types import DirectiveKind, Position

__all__ = [
    "Attributes",
    "Directive",
    "DirectiveKind",
    "Element",
    "GrammarConsistencyError",
    "NestingDepthError",
    "ParseError",
    "ParserConfig",
    "Position",
    "StateBlock",
    "StateData",
    "StateDeclaration",
    "StateDiagram",
    "StateDiagramError",
    "StateNote",
    "Transition",
    "parse_state_diagram",
]
