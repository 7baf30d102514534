"""Tests for plantuml_state.parsers — state-diagram text to AST."""

import sys

import pytest

from plantuml_state import ParserConfig, parse_state_diagram
from plantuml_state.config import DEFAULT_MAX_DEPTH
from plantuml_state.errors import NestingDepthError, ParseError
from plantuml_state.syntax.types import (
    Attributes,
    Directive,
    StateBlock,
    StateData,
    StateDeclaration,
    StateDiagram,
    StateNote,
    Transition,
)
from plantuml_state.types import DirectiveKind


def only(src: str):
    diagram = parse_state_diagram(src)
    assert len(diagram.elements) == 1
    return diagram.elements[0]


# ─── Reference scenarios ─────────────────────────────────────────────────────


def test_start_and_end_directives():
    diagram = parse_state_diagram("@startuml\n@enduml")
    assert diagram == StateDiagram(
        elements=(Directive(DirectiveKind.StartUml), Directive(DirectiveKind.EndUml)),
    )


def test_state_with_display_name_and_alias():
    assert only('state "Idle" as S1') == StateDeclaration(id="S1", name="Idle", attributes=None, state_block=None)


def test_transition_with_event():
    assert only("S1 --> S2 : go") == Transition(from_state="S1", to_state="S2", event="go")


def test_transition_without_event():
    assert only("S1 --> S2") == Transition(from_state="S1", to_state="S2", event=None)


def test_nested_state_block():
    decl = only("state S1 { state S2 }")
    assert decl.id == "S1"
    assert decl.state_block == StateBlock(elements=(StateDeclaration(id="S2"),))


def test_note():
    assert only('note n1 : "hello"') == StateNote(identifier="n1", content="hello")


# ─── State declarations ──────────────────────────────────────────────────────


def test_quoted_name_only_doubles_as_id():
    decl = only('state "Waiting for input"')
    assert decl.id == decl.name == "Waiting for input"


def test_identifier_only_has_empty_name():
    assert only("state S1") == StateDeclaration(id="S1", name="")


def test_identifier_with_quoted_alias():
    assert only('state S1 as "Long Name"') == StateDeclaration(id="S1", name="Long Name")


def test_state_color_attribute():
    decl = only("state S1 #FF0000")
    assert decl.attributes == Attributes(color="#FF0000")
    assert decl.attributes.line_style is None
    assert decl.attributes.text_style is None


def test_state_with_attributes_and_block():
    decl = only("state Busy #pink {\n  Busy --> Idle\n}")
    assert decl.attributes.color == "#pink"
    assert decl.state_block.elements == (Transition(from_state="Busy", to_state="Idle"),)


def test_string_keeps_inner_whitespace_and_escapes():
    decl = only('state "  spaced \\"quoted\\"  " as S')
    assert decl.name == '  spaced \\"quoted\\"  '


def test_keyword_prefix_is_an_identifier():
    assert only("state_a --> b") == Transition(from_state="state_a", to_state="b")


# ─── Transitions ─────────────────────────────────────────────────────────────


@pytest.mark.parametrize("arrow", ["->", "-->", "--->", "-down->", "-l->", "-[#red]->", "-[dotted]-->"])
def test_arrow_variants_are_interchangeable(arrow):
    assert only(f"A {arrow} B : e") == Transition(from_state="A", to_state="B", event="e")


def test_arrow_without_spaces():
    assert only("A-->B") == Transition(from_state="A", to_state="B")


@pytest.mark.parametrize(
    "src, event",
    [
        ("S1 --> S2 :   spaced out   ", "spaced out"),
        ("S1 --> S2 :: double", ": double"),
        ("S1 --> S2 :", ""),
        ("S1 --> S2 : don't panic", "don't panic"),
    ],
)
def test_event_trimming(src, event):
    assert only(src).event == event


def test_event_stops_at_end_of_line():
    diagram = parse_state_diagram("S1 --> S2 : go\nS2 --> S3")
    assert [t.event for t in diagram.elements] == ["go", None]


def test_event_stops_at_closing_brace():
    decl = only("state A { S1 --> S2 : go }")
    assert decl.state_block.elements == (Transition(from_state="S1", to_state="S2", event="go"),)


def test_pseudo_states():
    diagram = parse_state_diagram("[*] --> Idle\nIdle --> [*]")
    assert diagram.elements == (
        Transition(from_state="[*]", to_state="Idle"),
        Transition(from_state="Idle", to_state="[*]"),
    )


def test_event_never_has_leading_colon_or_padding():
    diagram = parse_state_diagram("a --> b : x \nb --> c :y\nc --> d\n")
    for t in diagram.elements:
        if t.event is not None:
            assert t.event == t.event.strip()
            assert not t.event.startswith(":")


# ─── Notes, data, directives ─────────────────────────────────────────────────


def test_note_with_position():
    assert only('note left of Paused : "frozen"') == StateNote(identifier="Paused", content="frozen")


def test_note_named_like_a_position():
    assert only('note left : "x"') == StateNote(identifier="left", content="x")


def test_state_data():
    assert only('Player.score : "int"') == StateData(name="Player.score", type_name="int")


@pytest.mark.parametrize(
    "src, kind",
    [
        ("@startuml diagram_name", DirectiveKind.StartUml),
        ("skinparam backgroundColor #EEEEEE", DirectiveKind.SkinParam),
        ("skinparam state {\n  BackgroundColor Pink\n}", DirectiveKind.SkinParam),
        ("style default", DirectiveKind.Style),
        ("scale 600 width", DirectiveKind.Scale),
        ("hide empty description", DirectiveKind.Hide),
    ],
)
def test_keyword_directives(src, kind):
    assert only(src) == Directive(kind)


def test_entry_and_exit_capture_text():
    diagram = parse_state_diagram("entry / open_door()\nexit close_door()")
    assert diagram.elements == (
        Directive(DirectiveKind.Entry, "open_door()"),
        Directive(DirectiveKind.Exit, "close_door()"),
    )


def test_keyword_starts_a_directive():
    assert only("hide --> shown") == Directive(DirectiveKind.Hide)


def test_keywords_are_identifiers_after_state():
    assert only("state hide") == StateDeclaration(id="hide")


# ─── Whitespace, comments, nesting ───────────────────────────────────────────


def test_empty_and_comment_only_input():
    assert parse_state_diagram("") == StateDiagram()
    assert parse_state_diagram("  \n' just a comment\n// another\n/' block\n comment '/\n") == StateDiagram()


def test_comments_between_elements():
    diagram = parse_state_diagram("' header\nS1 --> S2 // trailing\n/' multi\nline '/ S2 --> S3\n")
    assert len(diagram.elements) == 2


def test_nested_diagram_element():
    assert only("{ S1 --> S2 }") == StateDiagram(elements=(Transition(from_state="S1", to_state="S2"),))


@pytest.mark.parametrize("depth", [1, 2, 3, 5])
def test_block_depth_matches_brace_depth(depth):
    src = "".join(f"state S{i} {{ " for i in range(depth)) + "}" * depth
    assert parse_state_diagram(src).depth() == depth


def test_element_order_is_source_order():
    diagram = parse_state_diagram('state A\nA --> B\nnote A : "n"\nA : "t"\n@enduml')
    assert [type(e) for e in diagram.elements] == [StateDeclaration, Transition, StateNote, StateData, Directive]


def test_parse_is_deterministic():
    src = 'state "Idle" as S1 #blue {\n  S1 --> S2 : go\n}\nnote S1 : "hi"\n'
    assert parse_state_diagram(src) == parse_state_diagram(src)


# ─── Errors ──────────────────────────────────────────────────────────────────


def test_unterminated_block_is_an_error():
    with pytest.raises(ParseError) as exc:
        parse_state_diagram("state S1 { state S2")
    err = exc.value
    assert '"}"' in err.expected
    assert err.found == "end of input"
    assert err.position.offset == len("state S1 { state S2")
    assert err.rule_stack[:4] == ("state_diagram", "element", "state_declaration", "state_block")


def test_missing_arrow_is_an_error():
    with pytest.raises(ParseError) as exc:
        parse_state_diagram("S1 S2")
    err = exc.value
    assert "arrow" in err.expected
    assert err.rule_stack == ("state_diagram", "element")
    assert (err.position.line, err.position.column) == (1, 4)
    assert "line 1, column 4" in str(err)


def test_unterminated_string_is_an_error():
    with pytest.raises(ParseError) as exc:
        parse_state_diagram('note n1 : "hello')
    assert exc.value.expected == ("string",)


def test_error_position_on_later_line():
    with pytest.raises(ParseError) as exc:
        parse_state_diagram("@startuml\nS1 --> S2\n  ???\n@enduml")
    assert exc.value.position.line == 3
    assert exc.value.position.column == 3


def test_parse_error_is_a_value_error():
    with pytest.raises(ValueError):
        parse_state_diagram("-->")


def test_nesting_limit():
    src = "state A { state B { state C { } } }"
    assert parse_state_diagram(src, ParserConfig(max_depth=3)).depth() == 3
    with pytest.raises(NestingDepthError) as exc:
        parse_state_diagram(src, ParserConfig(max_depth=2))
    assert exc.value.max_depth == 2


def test_nesting_limit_counts_bare_blocks():
    with pytest.raises(NestingDepthError):
        parse_state_diagram("{ { { } } }", ParserConfig(max_depth=2))


def nested(depth):
    """``depth`` state blocks, one opening brace per line."""
    opening = "".join(f"state S{i} {{\n" for i in range(depth))
    return opening + "}\n" * depth


@pytest.mark.parametrize(
    "depth,ok",
    [
        (DEFAULT_MAX_DEPTH - 1, True),
        (DEFAULT_MAX_DEPTH, True),
        (DEFAULT_MAX_DEPTH + 1, False),
    ],
)
def test_default_nesting_limit(depth, ok):
    if ok:
        assert parse_state_diagram(nested(depth)).depth() == depth
    else:
        with pytest.raises(NestingDepthError) as exc:
            parse_state_diagram(nested(depth))
        assert exc.value.max_depth == DEFAULT_MAX_DEPTH
        assert exc.value.position.line == DEFAULT_MAX_DEPTH + 1


def test_nesting_past_the_recursion_limit():
    depth = sys.getrecursionlimit() + 100
    diagram = parse_state_diagram(nested(depth), ParserConfig(max_depth=depth))
    assert diagram.depth() == depth


def test_nesting_error_reports_the_configured_limit():
    depth = sys.getrecursionlimit() + 100
    with pytest.raises(NestingDepthError) as exc:
        parse_state_diagram(nested(depth), ParserConfig(max_depth=200))
    err = exc.value
    assert err.max_depth == 200
    assert "nesting deeper than 200 levels at line 201" in str(err)
    assert err.rule_stack[-2:] == ("state_declaration", "state_block")
