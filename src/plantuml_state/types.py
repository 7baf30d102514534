"""Shared type definitions for plantuml-state.

Enums and small value types used across the parsers and dumpers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class DirectiveKind(Enum):
    StartUml = auto()  # @startuml
    EndUml = auto()  # @enduml
    SkinParam = auto()  # skinparam ...
    Style = auto()  # style ...
    Scale = auto()  # scale ...
    Hide = auto()  # hide ...
    Entry = auto()  # entry / text
    Exit = auto()  # exit / text

    @property
    def carries_text(self) -> bool:
        return self in (DirectiveKind.Entry, DirectiveKind.Exit)


@dataclass(frozen=True)
class Position:
    """A location in the source text. ``line`` and ``column`` are 1-based."""

    offset: int
    line: int
    column: int

    @classmethod
    def at(cls, text: str, offset: int) -> Position:
        line = text.count("\n", 0, offset) + 1
        line_start = text.rfind("\n", 0, offset) + 1
        return cls(offset=offset, line=line, column=offset - line_start + 1)

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"
