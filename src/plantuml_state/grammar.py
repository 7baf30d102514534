"""Lark grammar for PlantUML state-diagram syntax.

The grammar is LALR(1) and is lexed with lark's contextual lexer, so a
terminal is only tried where the parser can accept it. Strategy:
  - newlines are significant (``_NL``); spaces, tabs and comments
    (``'``, ``//`` and ``/' '/``) are ignored
  - elements may follow each other on one line; a block's ``}`` closes the
    last element, which is what makes ``state A { A --> B : go }`` work
  - rest-of-line terminals (DIRECTIVE_ARGS, ACTION_TEXT, EVENT) stop at a
    newline or a closing brace and carry priority 2 so they win over the
    identifiers and keywords that could start the next element
  - keywords are plain string terminals; lark retypes a matching IDENT only
    in states that accept the keyword, so ``state_a`` stays an identifier
  - after ``state Name`` an opening brace always starts the state's block
    (shift over reduce), never a nested diagram

Inline string literals and ``_``-prefixed names never reach the AST builder.
"""

GRAMMAR = r"""
state_diagram: _body

_body: (element | _NL)*

element: directive
       | state_data
       | state_declaration
       | transition
       | state_note
       | nested_diagram

directive: directive_keyword DIRECTIVE_ARGS? PARAM_BLOCK?
         | action_keyword ACTION_TEXT?
directive_keyword: STARTUML | ENDUML | SKINPARAM | STYLE | SCALE | HIDE
action_keyword: ENTRY | EXIT

state_declaration: "state" (STRING ("as" IDENT)? | IDENT ("as" STRING)?) attributes? state_block?
state_block: "{" _body "}"
nested_diagram: "{" _body "}"

transition: from_state ARROW to_state event?
from_state: PSEUDO_STATE | IDENT
to_state: PSEUDO_STATE | IDENT
event: EVENT

state_note: "note" (_note_position "of")? note_target ":" STRING
_note_position: "left" | "right" | "top" | "bottom"
!note_target: IDENT | "left" | "right" | "top" | "bottom"

state_data: IDENT ":" STRING

attributes: COLOR

STARTUML: "@startuml"
ENDUML: "@enduml"
SKINPARAM: "skinparam"
STYLE: "style"
SCALE: "scale"
HIDE: "hide"
ENTRY: "entry"
EXIT: "exit"
PSEUDO_STATE: "[*]"

IDENT: /[A-Za-z_][A-Za-z0-9_.]*/
STRING: /"(?:[^"\\\r\n]|\\.)*"/
COLOR: /#[A-Za-z0-9_]+/
ARROW: /-+(?:\[[^\]\r\n]*\])?(?:(?:up|down|left|right|[udlr])-*)?-*>/
EVENT: /:[^\r\n}]*/

DIRECTIVE_ARGS.2: /[^\s{}][^\r\n{}]*/
PARAM_BLOCK.2: /\{[^}]*\}/
ACTION_TEXT.2: /[^\s}][^\r\n}]*/

_NL: /\r?\n/
WS_INLINE: /[ \t]+/
COMMENT: /'[^\n]*/ | /\/\/[^\n]*/
BLOCK_COMMENT: /\/'[\s\S]*?'\//

%ignore WS_INLINE
%ignore COMMENT
%ignore BLOCK_COMMENT
"""

# Rules whose nesting is bounded by ParserConfig.max_depth.
NESTING_RULES = ("state_block", "nested_diagram")
