"""Scan command - show what a generation run would declare, without writing."""

import json

import click
from rich.table import Table

from convex_typegen.indexer.exceptions import PreconditionError
from convex_typegen.pipeline.ui import console, print_header, print_warning
from convex_typegen.runner import scan_project
from convex_typegen.utils.error_handler import handle_exceptions
from convex_typegen.utils.exit_codes import ExitCodes

from ._common import config_options, resolve_config


@click.command("scan")
@handle_exceptions
@config_options
@click.option("--json", "as_json", is_flag=True, help="Print the scan result as JSON")
def scan(root, output, convex_dir, import_path, as_json):
    """List discovered tables and functions.

    Runs the same discovery as `generate` but writes nothing. Useful for
    checking why a function is missing from the generated module.

    \b
    Examples:
      convex-typegen scan
      convex-typegen scan --json | jq '.functions[].name'
    """
    config = resolve_config(root, output, convex_dir, import_path)

    if not config.convex_dir.is_dir():
        print_warning(f"Convex directory not found: {config.convex_dir}")
        raise SystemExit(ExitCodes.SKIPPED)

    try:
        result = scan_project(config)
    except PreconditionError as e:
        print_warning(str(e))
        raise SystemExit(ExitCodes.SKIPPED)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    print_header("TABLES")
    console.print(", ".join(result.table_names), highlight=False)

    print_header("FUNCTIONS")
    table = Table(show_header=True, header_style="bold")
    table.add_column("Name", style="path")
    table.add_column("Type")
    table.add_column("Export")
    table.add_column("Args", style="dim")
    table.add_column("Returns", style="dim")
    for func in result.functions:
        table.add_row(
            func.name,
            f"[{func.kind.value}]{func.kind.value}[/{func.kind.value}]",
            "default" if func.is_default_export else func.export_name,
            "yes" if func.has_args else "-",
            func.return_type_hint or "-",
        )
    console.print(table)

    for warning in result.warnings:
        print_warning(warning)
