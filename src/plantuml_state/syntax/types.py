"""AST data structures for PlantUML state-diagram syntax.

These types represent the parsed form of the input DSL. All of them are frozen
dataclasses; child sequences are tuples, so a parsed tree is a plain value that
compares structurally and can be shared freely.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from plantuml_state.types import DirectiveKind


@dataclass(frozen=True)
class Directive:
    kind: DirectiveKind
    text: str | None = None  # only for Entry / Exit

    @classmethod
    def new(cls, kind: DirectiveKind, text: str | None = None) -> Directive:
        if kind.carries_text != (text is not None):
            raise ValueError(f"{kind.name} directive {'requires' if kind.carries_text else 'takes no'} text")
        return cls(kind=kind, text=text)


@dataclass(frozen=True)
class Attributes:
    color: str
    line_style: str | None = None
    text_style: str | None = None


@dataclass(frozen=True)
class StateBlock:
    elements: tuple[Element, ...] = ()


@dataclass(frozen=True)
class StateDeclaration:
    id: str
    name: str = ""
    attributes: Attributes | None = None
    state_block: StateBlock | None = None


@dataclass(frozen=True)
class Transition:
    from_state: str
    to_state: str
    event: str | None = None


@dataclass(frozen=True)
class StateNote:
    identifier: str
    content: str


@dataclass(frozen=True)
class StateData:
    name: str
    type_name: str


@dataclass(frozen=True)
class StateDiagram:
    elements: tuple[Element, ...] = ()

    def depth(self) -> int:
        """Deepest brace nesting below this diagram (0 when flat)."""
        return _depth(self.elements)


Element = Union[Directive, StateDiagram, StateDeclaration, Transition, StateNote, StateData]

ELEMENT_TYPES: tuple[type, ...] = (Directive, StateDiagram, StateDeclaration, Transition, StateNote, StateData)


def _depth(elements: tuple[Element, ...]) -> int:
    deepest = 0
    pending = [(elements, 0)]
    while pending:
        items, depth = pending.pop()
        deepest = max(deepest, depth)
        for el in items:
            if isinstance(el, StateDeclaration) and el.state_block is not None:
                pending.append((el.state_block.elements, depth + 1))
            elif isinstance(el, StateDiagram):
                pending.append((el.elements, depth + 1))
    return deepest
