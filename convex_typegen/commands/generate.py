"""Generate command - one-shot generation of the Convex types module."""

import click

from convex_typegen.indexer.exceptions import OutputWriteError
from convex_typegen.pipeline.ui import console, print_error, print_status_panel
from convex_typegen.runner import SKIPPED, WRITTEN, generate_types
from convex_typegen.utils.error_handler import handle_exceptions
from convex_typegen.utils.exit_codes import ExitCodes

from ._common import config_options, resolve_config

SKIP_HINTS = {
    "marker_missing": 'Run "npx convex dev" to create the Convex data model, then retry.',
    "no_tables": "Declare at least one table in the schema file.",
}


@click.command("generate")
@handle_exceptions
@config_options
@click.option("--no-hooks", is_flag=True, help="Emit types only, without accessor hooks")
@click.option("--quiet", "-q", is_flag=True, help="Suppress the status panel")
def generate(root, output, convex_dir, import_path, no_hooks, quiet):
    """Generate TypeScript types and React hooks for a Convex project.

    Reads the Convex schema and every query/mutation/action module below
    the Convex directory and writes one TypeScript module with document
    and id types, argument types, accessor hooks and return types.

    \b
    Examples:
      convex-typegen generate
      convex-typegen generate --out src/convex.gen.ts
      convex-typegen generate --convex-dir backend/convex --no-hooks

    \b
    Exit Codes:
      0 = Types written or already up to date
      3 = Skipped: Convex data model or schema tables missing
      4 = Output file could not be written
    """
    config = resolve_config(root, output, convex_dir, import_path, emit_hooks=False if no_hooks else None)

    try:
        outcome = generate_types(config)
    except OutputWriteError as e:
        print_error(str(e))
        raise SystemExit(ExitCodes.WRITE_FAILED)

    if outcome.status == SKIPPED:
        if not quiet:
            print_status_panel(
                "SKIPPED",
                "Types were not generated; existing output left untouched.",
                SKIP_HINTS.get(outcome.reason, ""),
                level="warning",
            )
        raise SystemExit(ExitCodes.SKIPPED)

    if quiet:
        return

    scan = outcome.scan
    detail = (
        f"{len(scan.tables)} tables, {len(scan.functions)} functions, "
        f"{scan.files_scanned} files scanned"
    )
    if outcome.status == WRITTEN:
        print_status_panel("WRITTEN", f"Generated {outcome.output_path}", detail, level="success")
    else:
        print_status_panel("UNCHANGED", f"{outcome.output_path} is already up to date", detail, level="info")
    for warning in scan.warnings:
        console.print(f"[warning]WARNING:[/warning] {warning}", highlight=False)
