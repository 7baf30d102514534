"""State diagram parser — lark parse tree to typed AST.

``StateDiagramBuilder`` is a lark Transformer with one method per grammar
rule. Keyword and punctuation tokens are filtered out by lark; the remaining
children arrive in the order the grammar declares them. It is the
non-recursive transformer, so block nesting is bounded only by
``ParserConfig.max_depth`` and never by the interpreter's recursion limit.
"""

from __future__ import annotations

import logging

from lark import Token, Tree, v_args
from lark.exceptions import VisitError
from lark.visitors import Transformer_NonRecursive

from plantuml_state.config import ParserConfig
from plantuml_state.errors import GrammarConsistencyError
from plantuml_state.parsers.lark_parser import parse_tree
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
from plantuml_state.types import DirectiveKind

logger = logging.getLogger(__name__)

_DIRECTIVE_KEYWORDS: dict[str, DirectiveKind] = {
    "STARTUML": DirectiveKind.StartUml,
    "ENDUML": DirectiveKind.EndUml,
    "SKINPARAM": DirectiveKind.SkinParam,
    "STYLE": DirectiveKind.Style,
    "SCALE": DirectiveKind.Scale,
    "HIDE": DirectiveKind.Hide,
}

_ACTION_KEYWORDS: dict[str, DirectiveKind] = {
    "ENTRY": DirectiveKind.Entry,
    "EXIT": DirectiveKind.Exit,
}


# ─── Leaf helpers ────────────────────────────────────────────────────────────


def _unquote(token: Token) -> str:
    """Text of a STRING token without its surrounding quotes."""
    return token[1:-1]


def _event_text(token: Token) -> str:
    """Strip whitespace, one leading colon, then whitespace again."""
    raw = token.lstrip()
    if raw.startswith(":"):
        raw = raw[1:]
    return raw.strip()


def _action_text(token: Token) -> str:
    raw = token.strip()
    if raw.startswith("/"):
        raw = raw[1:]
    return raw.strip()


def _keyword(rule: str, token: Token, table: dict[str, DirectiveKind]) -> DirectiveKind:
    kind = table.get(token.type)
    if kind is None:
        raise GrammarConsistencyError(rule, token.type)
    return kind


def _elements(rule: str, children: tuple[object, ...]) -> tuple[Element, ...]:
    for child in children:
        if not isinstance(child, ELEMENT_TYPES):
            raise GrammarConsistencyError(rule, type(child).__name__)
    return children


# ─── Transformer ─────────────────────────────────────────────────────────────


@v_args(inline=True)
class StateDiagramBuilder(Transformer_NonRecursive):
    """Lark parse tree → state-diagram AST."""

    def __default__(self, data, children, meta):
        raise GrammarConsistencyError("<tree>", data)

    def state_diagram(self, *children):
        return StateDiagram(elements=_elements("state_diagram", children))

    def nested_diagram(self, *children):
        return StateDiagram(elements=_elements("nested_diagram", children))

    def state_block(self, *children):
        return StateBlock(elements=_elements("state_block", children))

    def element(self, inner):
        return inner

    # ─── Directives ──────────────────────────────────────────────────────

    def directive_keyword(self, token):
        return _keyword("directive_keyword", token, _DIRECTIVE_KEYWORDS)

    def action_keyword(self, token):
        return _keyword("action_keyword", token, _ACTION_KEYWORDS)

    def directive(self, kind, *rest):
        text = "" if kind.carries_text else None
        for token in rest:
            if token.type == "ACTION_TEXT":
                text = _action_text(token)
            elif token.type not in ("DIRECTIVE_ARGS", "PARAM_BLOCK"):
                raise GrammarConsistencyError("directive", token.type)
        return Directive.new(kind, text)

    # ─── States ──────────────────────────────────────────────────────────

    def state_declaration(self, *children):
        identifier: str | None = None
        name = ""
        attributes = None
        state_block = None
        for child in children:
            if isinstance(child, Attributes):
                attributes = child
            elif isinstance(child, StateBlock):
                state_block = child
            elif isinstance(child, Token) and child.type == "IDENT":
                identifier = str(child)
            elif isinstance(child, Token) and child.type == "STRING":
                name = _unquote(child)
            else:
                raise GrammarConsistencyError("state_declaration", repr(child))

        # A quoted name with no alias doubles as the identifier.
        if identifier is None:
            identifier = name

        return StateDeclaration(id=identifier, name=name, attributes=attributes, state_block=state_block)

    def attributes(self, color):
        return Attributes(color=str(color))

    def state_note(self, identifier, content):
        return StateNote(identifier=identifier, content=_unquote(content))

    def note_target(self, token):
        return str(token)

    def state_data(self, name, type_name):
        return StateData(name=str(name), type_name=_unquote(type_name))

    # ─── Transitions ─────────────────────────────────────────────────────

    def transition(self, from_state, arrow, to_state, event=None):
        # every arrow style means the same transition
        return Transition(from_state=from_state, to_state=to_state, event=event)

    def from_state(self, token):
        return str(token)

    def to_state(self, token):
        return str(token)

    def event(self, token):
        return _event_text(token)


def build_state_diagram(tree: Tree) -> StateDiagram:
    """Convert a ``state_diagram`` parse tree into the typed AST."""
    if tree.data != "state_diagram":
        raise GrammarConsistencyError("<root>", str(tree.data))
    try:
        return StateDiagramBuilder().transform(tree)
    except VisitError as e:
        raise e.orig_exc from e


class StateDiagramParser:
    """PlantUML state diagram parser."""

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig()

    def parse(self, src: str) -> StateDiagram:
        tree = parse_tree(src, max_depth=self.config.max_depth)
        diagram = build_state_diagram(tree)
        logger.debug("parsed %d top-level elements, depth %d", len(diagram.elements), diagram.depth())
        return diagram
