"""Command-line interface for proteus code generation."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from proteus.protobuf import (
    GoGoPlugin,
    MappingError,
    TransformError,
    Transformer,
    TypeMappings,
    render,
)
from proteus.report import Report
from proteus.rpc import Generator
from proteus.scanner import ParseError, parse

if TYPE_CHECKING:
    from proteus.protobuf import Package

PROTO_FILE = "generated.proto"
SERVER_FILE = "server.proteus.go"

input_option = click.option(
    "--input",
    "-i",
    "input_files",
    required=True,
    multiple=True,
    help="Declaration file of a Go package. Can be used more than once.",
)
mappings_option = click.option(
    "--mappings", "-m", "mappings_file", default=None, help="JSON file with custom type mappings"
)
verbose_option = click.option(
    "--verbose", is_flag=True, default=False, help="Print all warnings and info messages."
)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=False)],
        force=True,
    )


def _load_mappings(mappings_file: str | None) -> TypeMappings | None:
    if mappings_file is None:
        return None
    with open(mappings_file, encoding="utf-8") as f:
        return TypeMappings.from_dict(json.load(f))


def _transform_all(input_files: tuple[str, ...], mappings_file: str | None) -> list[Package]:
    """Load and transform every input, exiting on the first hard failure."""
    try:
        transformer = Transformer(_load_mappings(mappings_file), plugins=[GoGoPlugin()])
        packages = []
        for input_file in input_files:
            with open(input_file, encoding="utf-8") as f:
                source = parse(f.read())
            packages.append(transformer.transform(source, Report()))
    except (OSError, json.JSONDecodeError, ParseError, MappingError, TransformError) as e:
        print(f"Error: {e}")
        sys.exit(1)
    return packages


def _output_path(output_path: str, pkg: Package, filename: str) -> Path:
    folder = Path(output_path) / pkg.path
    folder.mkdir(parents=True, exist_ok=True)
    return folder / filename


@click.group()
def cli() -> None:
    """Proteus protobuf and gRPC server generator."""


@cli.command()
@input_option
@click.option("--output", "-o", "output_path", required=True, help="Output folder")
@mappings_option
@verbose_option
def proto(
    input_files: tuple[str, ...], output_path: str, mappings_file: str | None, verbose: bool
) -> None:
    """Generate .proto files from Go declarations."""
    _setup_logging(verbose)
    for pkg in _transform_all(input_files, mappings_file):
        _output_path(output_path, pkg, PROTO_FILE).write_text(render(pkg), encoding="utf-8")


@cli.command()
@input_option
@click.option("--output", "-o", "output_path", required=True, help="Output folder")
@click.option("--go-package", default=None, help="Package clause of the generated Go files")
@mappings_option
@verbose_option
def rpc(
    input_files: tuple[str, ...],
    output_path: str,
    go_package: str | None,
    mappings_file: str | None,
    verbose: bool,
) -> None:
    """Generate the gRPC server implementation of Go declarations."""
    _setup_logging(verbose)
    generator = Generator()
    for pkg in _transform_all(input_files, mappings_file):
        source = generator.generate(pkg, go_package=go_package)
        _output_path(output_path, pkg, SERVER_FILE).write_text(source, encoding="utf-8")


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="Declaration file")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@mappings_option
def info(input_file: str, output_json: bool, mappings_file: str | None) -> None:
    """Display the protobuf package generated from a declaration file."""
    _setup_logging(False)
    (pkg,) = _transform_all((input_file,), mappings_file)

    if output_json:
        print(json.dumps(pkg.to_dict(), indent=2))
    else:
        _output_plain(pkg)


def _output_plain(pkg: Package) -> None:
    """Output package info using rich text formatting."""
    console = Console()

    console.print(f"[bold cyan]Package[/bold cyan] {pkg.name}")
    console.print()

    console.print("[bold cyan]Messages[/bold cyan]")
    msg_table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    msg_table.add_column("Name", style="white")
    msg_table.add_column("Fields", style="yellow", justify="right")
    msg_table.add_column("Reserved", style="dim")

    for msg in pkg.messages:
        reserved = ", ".join(str(p) for p in msg.reserved)
        msg_table.add_row(msg.name, str(len(msg.fields)), reserved)

    console.print(msg_table)
    console.print()

    if pkg.enums:
        console.print("[bold cyan]Enums[/bold cyan]")
        enum_table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
        enum_table.add_column("Name", style="white")
        enum_table.add_column("Values", style="dim")
        for enum in pkg.enums:
            enum_table.add_row(enum.name, ", ".join(v.name for v in enum.values))
        console.print(enum_table)
        console.print()

    console.print(f"[bold cyan]Service[/bold cyan] {pkg.service_name}")
    rpc_table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    rpc_table.add_column("RPC", style="white")
    rpc_table.add_column("Input", style="green")
    rpc_table.add_column("Output", style="green")
    rpc_table.add_column("Error", style="dim")

    for r in pkg.rpcs:
        rpc_table.add_row(r.name, r.input.name, r.output.name, "yes" if r.has_error else "")

    console.print(rpc_table)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
