"""Exceptions raised by plantuml-state."""

from __future__ import annotations

from plantuml_state.types import Position


class StateDiagramError(ValueError):
    """Base exception for all plantuml-state errors."""

    pass


class ParseError(StateDiagramError):
    """Raised when the input does not match the grammar.

    Attributes:
        position: Furthest location the parser reached.
        expected: Tokens or rules that would have allowed progress there.
        rule_stack: Rules active at that location, outermost first.
        found: The offending input (a short excerpt or ``"end of input"``).
    """

    def __init__(
        self,
        position: Position,
        expected: tuple[str, ...] = (),
        rule_stack: tuple[str, ...] = (),
        found: str = "",
        message: str | None = None,
    ) -> None:
        self.position = position
        self.expected = expected
        self.rule_stack = rule_stack
        self.found = found
        super().__init__(message or self._describe())

    def _describe(self) -> str:
        if len(self.expected) == 1:
            msg = f"expected {self.expected[0]}"
        elif self.expected:
            msg = "expected one of " + ", ".join(self.expected)
        else:
            msg = "unexpected input"
        if self.found:
            msg += f", found {self.found}"
        msg += f" at {self.position}"
        if self.rule_stack:
            msg += f" ({' > '.join(self.rule_stack)})"
        return msg


class NestingDepthError(ParseError):
    """Raised when block nesting exceeds the configured limit."""

    def __init__(self, position: Position, max_depth: int, rule_stack: tuple[str, ...] = ()) -> None:
        self.max_depth = max_depth
        super().__init__(
            position,
            rule_stack=rule_stack,
            message=f"nesting deeper than {max_depth} levels at {position}",
        )


class GrammarConsistencyError(AssertionError):
    """Raised when the AST builder meets a parse-tree node it cannot interpret.

    It signals a mismatch between the grammar and the builder, never a
    property of the input, and is not a StateDiagramError.
    """

    def __init__(self, rule: str, child: str) -> None:
        self.rule = rule
        self.child = child
        super().__init__(f"unexpected {child!r} inside {rule!r}")
