"""
Investigator CLI - Structural introspection of Python objects

Loads a class (or module-level object) from an import target and reports on
its runtime type:
1. Declared method, constructor and field counts
2. Direct protocols, superclass and the inheritance chain
3. Reflective invocation of its methods
"""

import logging
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from investigator import __version__
from investigator.config import get_settings
from investigator.errors import InvestigationError
from investigator.introspector import Introspector
from investigator.loader import coerce_argument, load_target, resolve_type_name
from investigator.report import build_report
from investigator.schemas import TypeReport

app = typer.Typer(
    name="investigator",
    help="Structural introspection of Python objects",
    add_completion=False,
)

console = Console()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable debug logging"),
):
    """Configure logging before any command runs."""
    settings = get_settings()
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _load(target: str, init_args: Optional[List[str]]) -> Introspector:
    introspector = Introspector()
    introspector.load(load_target(target, init_args))
    return introspector


def _print_report(report: TypeReport) -> None:
    console.print(Panel.fit(
        f"[bold cyan]{escape(report.type_name)}[/bold cyan]\n\n"
        f"Chain: [yellow]{escape(report.inheritance_chain)}[/yellow]\n"
        f"Parent: [yellow]{escape(report.parent_class or '-')}[/yellow]"
        f"{' (abstract)' if report.parent_is_abstract else ''}\n"
        f"Interfaces: [yellow]{escape(', '.join(report.interfaces) or '-')}[/yellow]",
        border_style="cyan"
    ))

    counts = Table(title="Declared members")
    counts.add_column("Query", style="bold")
    counts.add_column("Count", justify="right", style="cyan")
    counts.add_row("Methods", str(report.total_methods))
    counts.add_row("Constructors", str(report.total_constructors))
    counts.add_row("Fields", str(report.total_fields))
    counts.add_row("Constant fields", str(report.constant_fields))
    counts.add_row("Static methods", str(report.static_methods))
    console.print(counts)

    if report.members:
        members = Table(title=f"Members of {escape(report.simple_name)}")
        members.add_column("Name")
        members.add_column("Kind")
        members.add_column("Visibility")
        members.add_column("Flags")
        members.add_column("Params", justify="right")
        for m in report.members:
            flags = [flag for flag, on in (
                ("static", m.is_static), ("final", m.is_final), ("abstract", m.is_abstract)
            ) if on]
            params = "" if m.parameter_count is None else str(m.parameter_count)
            members.add_row(escape(m.name), m.kind, m.visibility, ", ".join(flags), params)
        console.print(members)

    console.print(f"\n[bold]All fields (incl. ancestors):[/bold] {escape(', '.join(report.all_field_names) or '-')}")


@app.command()
def inspect(
    target: str = typer.Argument(..., help="Import target, e.g. 'collections:OrderedDict'"),
    init_args: Optional[List[str]] = typer.Argument(None, help="Constructor arguments"),
    as_json: bool = typer.Option(False, "--json", "-j", help="Print the report as JSON"),
    delimiter: Optional[str] = typer.Option(None, "--delimiter", "-d", help="Inheritance chain delimiter"),
):
    """
    Report on the runtime type of a loaded object.

    Example:
        investigator inspect fractions:Fraction 3 4
    """
    delimiter = delimiter if delimiter is not None else get_settings().chain_delimiter
    try:
        report = build_report(_load(target, init_args), delimiter)
    except InvestigationError as e:
        console.print(f"[red]❌ Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(report.model_dump_json(indent=2))
    else:
        _print_report(report)


@app.command()
def chain(
    target: str = typer.Argument(..., help="Import target, e.g. 'collections:OrderedDict'"),
    init_args: Optional[List[str]] = typer.Argument(None, help="Constructor arguments"),
    delimiter: Optional[str] = typer.Option(None, "--delimiter", "-d", help="Inheritance chain delimiter"),
):
    """Print the inheritance chain from object down to the target's class."""
    delimiter = delimiter if delimiter is not None else get_settings().chain_delimiter
    try:
        introspector = _load(target, init_args)
    except InvestigationError as e:
        console.print(f"[red]❌ Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    typer.echo(introspector.inheritance_chain(delimiter))


@app.command()
def invoke(
    target: str = typer.Argument(..., help="Import target, e.g. 'fractions:Fraction'"),
    method: str = typer.Argument(..., help="Method declared on the target's class"),
    args: Optional[List[str]] = typer.Argument(None, help="Method arguments"),
    init_args: Optional[List[str]] = typer.Option(None, "--init", "-i", help="Constructor argument (repeatable)"),
    elevate: bool = typer.Option(False, "--elevate", "-e", help="Invoke regardless of visibility"),
    types: Optional[List[str]] = typer.Option(
        None,
        "--type",
        "-t",
        help="Parameter type for --elevate, e.g. 'int' or 'decimal:Decimal' (repeatable)",
    ),
):
    """
    Invoke a declared method on a freshly loaded instance.

    Without --elevate the method must be public, take no parameters and
    return an int. With --elevate the method is matched by name and --type
    list and may be private.

    Example:
        investigator invoke mypkg.shapes:Square __side_squared --elevate -i 3
    """
    values = [coerce_argument(a) for a in (args or [])]
    try:
        introspector = _load(target, init_args)
        if elevate:
            parameter_types = [resolve_type_name(t) for t in (types or [])]
            result = introspector.elevate_method_and_invoke(method, parameter_types, *values)
        else:
            result = introspector.invoke_method_that_returns_int(method, *values)
    except InvestigationError as e:
        console.print(f"[red]❌ Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    typer.echo(repr(result))


@app.command()
def version():
    """Show the version of investigator."""
    console.print(f"[bold cyan]Investigator[/bold cyan] v{__version__}")
    console.print("Structural introspection of Python objects")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
