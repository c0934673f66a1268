"""JUN CLI — inspect, validate and normalize JUN documents."""

import json
import logging

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from jun import __version__
from jun.errors import JUNError

console = Console()


def _dialect_option(func):
    return click.option(
        "--dialect",
        "-d",
        default=None,
        help="Dialect name (poc, jun-1.0, jun-1.1). Defaults to $JUN_DIALECT or jun-1.1.",
    )(func)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log field-level decoding details")
def main(verbose: bool):
    """JUN — JSON UI Notation tools.

    Decode declarative UI documents, check them against a dialect, and
    re-encode them in canonical form.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# ── Show ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("document_path", type=click.Path(exists=True, dir_okay=False))
@_dialect_option
def show(document_path: str, dialect: str | None):
    """Decode a document and print its component tree."""
    from jun.codec.dialects import get_dialect
    from jun.loader import load_from_path

    try:
        resolved = get_dialect(dialect)
        root = load_from_path(document_path, resolved)
    except JUNError as e:
        _fail(e)

    console.print(f"\n[bold blue]JUN[/] — {escape(document_path)} ({resolved.name})\n")
    console.print(_build_tree(root))


# ── Validate ─────────────────────────────────────────────────────────


@main.command()
@click.argument("document_path", type=click.Path(exists=True, dir_okay=False))
@_dialect_option
def validate(document_path: str, dialect: str | None):
    """Check that a document decodes under a dialect (pass/fail)."""
    from jun.schema.validator import validate_file

    try:
        result = validate_file(document_path, dialect)
    except JUNError as e:
        _fail(e)

    if result.passed:
        console.print(f"  [green]v[/] {escape(document_path)}: {escape(result.summary())}")
        return
    console.print(f"  [red]x[/] {escape(document_path)}: {escape(result.summary())}")
    raise SystemExit(1)


# ── Normalize ────────────────────────────────────────────────────────


@main.command()
@click.argument("document_path", type=click.Path(exists=True, dir_okay=False))
@_dialect_option
@click.option("--output", "-o", default=None, help="Write the result here instead of stdout")
@click.option("--indent", default=2, show_default=True, help="JSON indentation")
def normalize(document_path: str, dialect: str | None, output: str | None, indent: int):
    """Decode then re-encode a document.

    Legacy field names are rewritten to their current names, type names are
    made canonical and every node gets an id.
    """
    from jun.loader import dump_to_string, load_from_path

    try:
        root = load_from_path(document_path, dialect)
        text = dump_to_string(root, dialect, indent=indent)
    except JUNError as e:
        _fail(e)

    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        console.print(f"[green]Normalized document written to:[/] {escape(output)}")
    else:
        click.echo(text)


# ── Schema ───────────────────────────────────────────────────────────


@main.command(name="schema")
@_dialect_option
def dump_schema(dialect: str | None):
    """Print the JSON Schema for a dialect."""
    from jun.schema.json_schema import get_schema

    try:
        schema = get_schema(dialect)
    except JUNError as e:
        _fail(e)
    click.echo(json.dumps(schema, indent=2))


# ── Dialects ─────────────────────────────────────────────────────────


@main.command()
def dialects():
    """List the registered dialects."""
    from jun.codec.dialects import available_dialects, get_dialect

    default = get_dialect(None).name
    table = Table(title="JUN dialects")
    table.add_column("Name", style="cyan")
    table.add_column("Version")
    table.add_column("Unknown types")
    table.add_column("Variants", justify="right")
    table.add_column("Description")

    for d in available_dialects():
        name = f"{d.name} [dim](default)[/]" if d.name == default else d.name
        table.add_row(
            name,
            d.version,
            "[red]error[/]" if d.strict else "[yellow]fallback[/]",
            str(len(d.schemas)),
            d.description,
        )

    console.print(table)


# ── Helpers ──────────────────────────────────────────────────────────


def _fail(error: JUNError):
    console.print(f"[red]Error:[/] {escape(str(error))}")
    raise SystemExit(1)


def _describe(node) -> str:
    from dataclasses import asdict

    fields = {k: v for k, v in asdict(node.payload).items() if v is not None}
    fields.update(node.common.set_fields())
    detail = ", ".join(f"{k}={v!r}" for k, v in fields.items())
    label = f"[bold]{node.variant.qualified_name}[/]"
    if detail:
        label += f" [dim]{escape(detail)}[/]"
    return label


def _build_tree(root) -> Tree:
    tree = Tree(_describe(root))
    stack = [(root, tree)]
    while stack:
        node, branch = stack.pop()
        for child in node.children or ():
            stack.append((child, branch.add(_describe(child))))
    return tree


if __name__ == "__main__":
    main()
