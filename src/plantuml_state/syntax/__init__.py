"""Typed AST for PlantUML state diagrams."""

from plantuml_state.syntax.types import (
    ELEMENT_TYPES,
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

__all__ = [
    "ELEMENT_TYPES",
    "Attributes",
    "Directive",
    "Element",
    "StateBlock",
    "StateData",
    "StateDeclaration",
    "StateDiagram",
    "StateNote",
    "Transition",
]
