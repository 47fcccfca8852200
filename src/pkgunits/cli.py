"""Command-line interface for grouping Go packages into units."""

import json
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .golist import parse_go_list
from .models import ROLE_PRIORITY, UnitInvariantError
from .units import iter_units, select_packages

console = Console()


def _load_descriptors(input_file):
    """Read and decode go list output, exiting with a message on failure."""
    text = input_file.read()
    try:
        return parse_go_list(text)
    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)


@click.group()
@click.version_option(package_name="pkgunits")
def main():
    """Group `go list -json -test` package output into logical units."""
    pass


@main.command()
@click.argument("input_file", type=click.File("r"), default="-")
@click.option("--format", "fmt", type=click.Choice(["table", "json"]), default="table")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def units(input_file, fmt, verbose):
    """Show the units formed by a package list.

    INPUT_FILE holds the output of `go list -json -test` (default: stdin).

    \b
    Example:
        go list -json -test ./... | pkgunits units
        pkgunits units packages.json --format json
    """
    descriptors = _load_descriptors(input_file)

    try:
        unit_list = list(iter_units(descriptors, verbose=verbose))
    except UnitInvariantError as e:
        console.print(f"[red]Invariant violation: {escape(str(e))}[/red]")
        sys.exit(1)

    if fmt == "json":
        click.echo(json.dumps([u.to_dict() for u in unit_list], indent=2))
        return

    if not unit_list:
        console.print("[yellow]No units found[/yellow]")
        return

    table = Table(title=f"Units ({len(unit_list)})")
    table.add_column("Package", style="cyan")
    for role in ROLE_PRIORITY:
        table.add_column(role.label)

    for unit in unit_list:
        cells = []
        for role in ROLE_PRIORITY:
            descriptor = unit.get(role)
            cells.append(escape(descriptor.id) if descriptor is not None else "[dim]-[/dim]")
        table.add_row(unit.non_nil().pkg_path, *cells)

    console.print(table)


@main.command("select")
@click.argument("input_file", type=click.File("r"), default="-")
@click.option("--format", "fmt", type=click.Choice(["text", "json"]), default="text")
def select_cmd(input_file, fmt):
    """List the packages an analysis pass should load.

    Test variants are preferred to their base package; external test
    packages are listed too; test binaries are left out.
    """
    descriptors = _load_descriptors(input_file)

    try:
        selected = select_packages(descriptors)
    except UnitInvariantError as e:
        console.print(f"[red]Invariant violation: {escape(str(e))}[/red]")
        sys.exit(1)

    if fmt == "json":
        click.echo(json.dumps([d.to_dict() for d in selected], indent=2))
    else:
        for descriptor in selected:
            click.echo(descriptor.id)


if __name__ == "__main__":
    main()
