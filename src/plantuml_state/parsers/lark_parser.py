"""Lark setup for the state-diagram grammar.

Builds the LALR parser once, parses text to a lark ``Tree`` and turns lark's
``UnexpectedInput`` exceptions into ParseError with a position, the expected
terminals and the trail of grammar rules that were open at the failure.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from functools import lru_cache

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from plantuml_state.errors import NestingDepthError, ParseError
from plantuml_state.grammar import GRAMMAR, NESTING_RULES
from plantuml_state.types import Position

logger = logging.getLogger(__name__)


class LarkParserConfig:
    """Lark options for the state-diagram grammar."""

    START = "state_diagram"
    PARSER = "lalr"
    LEXER = "contextual"
    PROPAGATE_POSITIONS = True


@lru_cache(maxsize=1)
def get_parser() -> Lark:
    """Build the lark parser once per process."""
    return Lark(
        GRAMMAR,
        start=LarkParserConfig.START,
        parser=LarkParserConfig.PARSER,
        lexer=LarkParserConfig.LEXER,
        propagate_positions=LarkParserConfig.PROPAGATE_POSITIONS,
    )


def parse_tree(text: str, max_depth: int | None = None) -> Tree:
    """Parse ``text`` into a lark tree rooted at ``state_diagram``.

    Raises:
        ParseError: If the text does not match the grammar.
        NestingDepthError: If more than ``max_depth`` blocks are open at once.
    """
    parser = get_parser()
    try:
        tree = parser.parse(text)
    except UnexpectedInput as e:
        err = syntax_error(parser, text, e)
        logger.debug("syntax error: %s", err)
        raise err from e
    if max_depth is not None:
        check_nesting(tree, text, max_depth)
    return tree


# ─── Error translation ───────────────────────────────────────────────────────

_TERMINAL_LABELS = {
    "$END": "end of input",
    "_NL": "newline",
    "IDENT": "identifier",
    "STRING": "string",
    "COLOR": "color",
    "ARROW": "arrow",
    "EVENT": "event",
    "DIRECTIVE_ARGS": "directive arguments",
    "PARAM_BLOCK": "parameter block",
    "ACTION_TEXT": "action text",
}

# Stack entries that tell which kind of element is being matched.
_ELEMENT_OPENERS = {
    "STARTUML": "directive",
    "ENDUML": "directive",
    "SKINPARAM": "directive",
    "STYLE": "directive",
    "SCALE": "directive",
    "HIDE": "directive",
    "ENTRY": "directive",
    "EXIT": "directive",
    "directive_keyword": "directive",
    "action_keyword": "directive",
    "STATE": "state_declaration",
    "NOTE": "state_note",
    "PSEUDO_STATE": "transition",
    "from_state": "transition",
    "COLON": "state_data",
}


def describe_terminal(parser: Lark, name: str) -> str:
    """Human-readable name for a terminal: its literal text, or a label."""
    if name in _TERMINAL_LABELS:
        return _TERMINAL_LABELS[name]
    pattern = parser.get_terminal(name).pattern
    if pattern.type == "str":
        return f'"{pattern.value}"'
    return name.lower()


def syntax_error(parser: Lark, text: str, exc: UnexpectedInput) -> ParseError:
    """Translate a lark ``UnexpectedInput`` into ParseError."""
    if isinstance(exc, UnexpectedEOF) or (isinstance(exc, UnexpectedToken) and exc.token.type == "$END"):
        offset = len(text)
    elif isinstance(exc, UnexpectedToken):
        offset = exc.token.start_pos
    else:
        offset = exc.pos_in_stream
    if isinstance(exc, UnexpectedCharacters):
        names: Iterable[str] = exc.allowed or ()
    else:
        names = getattr(exc, "expected", None) or ()
    interactive = getattr(exc, "interactive_parser", None)
    trail = rule_trail(interactive.parser_state.value_stack) if interactive is not None else ("state_diagram",)
    return ParseError(
        Position.at(text, offset),
        expected=tuple(sorted({describe_terminal(parser, n) for n in names})),
        rule_stack=trail,
        found=_excerpt(text, offset),
    )


def rule_trail(value_stack: Iterable[Tree | Token]) -> tuple[str, ...]:
    """Rules open at the top of an LALR value stack, outermost first.

    Every ``{`` still on the stack is an unclosed block; the entries after
    the innermost one show which element was being matched.
    """
    trail = ["state_diagram"]
    current: str | None = None
    for item in value_stack:
        name = item.data if isinstance(item, Tree) else item.type
        if name == "LBRACE":
            if current == "state_declaration":
                trail += ["element", "state_declaration", "state_block"]
            else:
                trail += ["element", "nested_diagram"]
            current = None
        elif name == "element" or name.startswith("_"):
            current = None
        elif current is None:
            current = _ELEMENT_OPENERS.get(name, "")
        elif current == "":
            current = _ELEMENT_OPENERS.get(name, current)
    if current is not None:
        trail.append("element")
        if current:
            trail.append(current)
    return tuple(trail)


def _excerpt(text: str, pos: int) -> str:
    if pos >= len(text):
        return "end of input"
    if text[pos].isspace():
        return repr(text[pos])
    return repr(text[pos:].split(None, 1)[0][:20])


# ─── Nesting limit ───────────────────────────────────────────────────────────


def check_nesting(tree: Tree, text: str, max_depth: int) -> None:
    """Raise NestingDepthError at the first block nested past ``max_depth``.

    Walks the tree with an explicit stack, in source order.
    """
    pending = [(tree, 0, (tree.data,))]
    while pending:
        node, depth, trail = pending.pop()
        if depth > max_depth:
            offset = 0 if node.meta.empty else node.meta.start_pos
            raise NestingDepthError(Position.at(text, offset), max_depth, trail)
        for child in reversed(node.children):
            if isinstance(child, Tree):
                pending.append((child, depth + (child.data in NESTING_RULES), trail + (child.data,)))
