"""CLI entry point for plantuml-state."""

import json
import logging
import sys

import click

from plantuml_state.config import DEFAULT_MAX_DEPTH, ParserConfig
from plantuml_state.dump import format_tree, to_dict
from plantuml_state.errors import ParseError
from plantuml_state.parsers import parse_state_diagram


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice(["tree", "json"]),
    default="tree",
    help="Print an indented outline or the AST as JSON",
)
@click.option("--max-depth", "-m", "max_depth", type=click.IntRange(min=1), default=DEFAULT_MAX_DEPTH, help="Deepest allowed block nesting")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--verbose", "-v", is_flag=True, help="Log parser diagnostics to stderr")
def main(input: str | None, fmt: str, max_depth: int, output: str | None, verbose: bool) -> None:
    """Parse a PlantUML state diagram and print its syntax tree."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if input:
        try:
            with open(input, encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    try:
        diagram = parse_state_diagram(text, ParserConfig(max_depth=max_depth))
    except ParseError as e:
        click.echo(f"parse error:\n{e}", err=True)
        sys.exit(1)

    if fmt == "json":
        rendered = json.dumps(to_dict(diagram), indent=2) + "\n"
    else:
        rendered = format_tree(diagram)

    if output:
        try:
            with open(output, "w", encoding="utf-8") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered, nl=False)


if __name__ == "__main__":
    main()
