"""Debug views of a parsed diagram: plain dicts for JSON, and a text outline."""

from __future__ import annotations

from typing import Any

from plantuml_state.syntax.types import (
    Directive,
    Element,
    StateDeclaration,
    StateDiagram,
    StateData,
    StateNote,
    Transition,
)


def to_dict(node: StateDiagram | Element) -> dict[str, Any]:
    """Convert an AST node to JSON-ready dicts, tagging each with its type."""
    if isinstance(node, StateDiagram):
        return {"type": "StateDiagram", "elements": [to_dict(e) for e in node.elements]}
    if isinstance(node, Directive):
        out: dict[str, Any] = {"type": "Directive", "kind": node.kind.name}
        if node.text is not None:
            out["text"] = node.text
        return out
    if isinstance(node, StateDeclaration):
        out = {"type": "StateDeclaration", "id": node.id, "name": node.name}
        if node.attributes is not None:
            out["attributes"] = {
                "color": node.attributes.color,
                "line_style": node.attributes.line_style,
                "text_style": node.attributes.text_style,
            }
        if node.state_block is not None:
            out["state_block"] = [to_dict(e) for e in node.state_block.elements]
        return out
    if isinstance(node, Transition):
        return {"type": "Transition", "from_state": node.from_state, "to_state": node.to_state, "event": node.event}
    if isinstance(node, StateNote):
        return {"type": "StateNote", "identifier": node.identifier, "content": node.content}
    if isinstance(node, StateData):
        return {"type": "StateData", "name": node.name, "type_name": node.type_name}
    raise TypeError(f"not a state-diagram node: {node!r}")


def _line(el: Element) -> str:
    if isinstance(el, Directive):
        return el.kind.name if el.text is None else f"{el.kind.name}: {el.text}"
    if isinstance(el, StateDeclaration):
        label = f"state {el.id}"
        if el.name and el.name != el.id:
            label += f" ({el.name!r})"
        if el.attributes is not None:
            label += f" {el.attributes.color}"
        return label
    if isinstance(el, Transition):
        label = f"{el.from_state} --> {el.to_state}"
        return label if el.event is None else f"{label} : {el.event}"
    if isinstance(el, StateNote):
        return f"note {el.identifier}: {el.content!r}"
    if isinstance(el, StateData):
        return f"{el.name}: {el.type_name}"
    if isinstance(el, StateDiagram):
        return "diagram"
    raise TypeError(f"not a state-diagram element: {el!r}")


def _outline(elements: tuple[Element, ...], indent: int, out: list[str]) -> None:
    for el in elements:
        out.append("  " * indent + _line(el))
        if isinstance(el, StateDeclaration) and el.state_block is not None:
            _outline(el.state_block.elements, indent + 1, out)
        elif isinstance(el, StateDiagram):
            _outline(el.elements, indent + 1, out)


def format_tree(diagram: StateDiagram) -> str:
    """Render the diagram as an indented outline, one element per line."""
    out: list[str] = []
    _outline(diagram.elements, 0, out)
    return "\n".join(out) + ("\n" if out else "")
