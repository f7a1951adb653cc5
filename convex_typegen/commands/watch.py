"""Watch command - keep the generated types in sync while developing."""

import click

from convex_typegen.pipeline.ui import console, print_error, print_success
from convex_typegen.utils.error_handler import handle_exceptions
from convex_typegen.utils.exit_codes import ExitCodes
from convex_typegen.watch import watch_and_regenerate

from ._common import config_options, resolve_config


@click.command("watch")
@handle_exceptions
@config_options
@click.option("--no-hooks", is_flag=True, help="Emit types only, without accessor hooks")
@click.option("--debounce", type=int, default=None, help="Milliseconds to group file changes (default: 300)")
def watch(root, output, convex_dir, import_path, no_hooks, debounce):
    """Regenerate the types module whenever Convex sources change.

    Generates once on start, then watches the Convex directory. Changes
    arriving while a run is in progress are folded into a single
    follow-up run. Failed runs are logged and watching continues.

    \b
    Examples:
      convex-typegen watch
      convex-typegen watch --debounce 1000
    """
    config = resolve_config(
        root,
        output,
        convex_dir,
        import_path,
        emit_hooks=False if no_hooks else None,
        debounce_ms=debounce,
    )

    if not config.convex_dir.is_dir():
        print_error(f"Convex directory not found: {config.convex_dir}")
        raise SystemExit(ExitCodes.SKIPPED)

    console.print(f"Watching [path]{config.convex_dir}[/path] (Ctrl+C to stop)", highlight=False)
    try:
        watch_and_regenerate(config)
    except KeyboardInterrupt:
        print_success("Stopped watching.")
