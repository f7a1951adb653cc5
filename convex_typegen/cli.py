"""convex-typegen CLI - main entry point and command registration hub."""
# ruff: noqa: E402 - Intentional lazy loading: commands imported after cli group definition

import click

from convex_typegen import __version__


@click.group()
@click.version_option(version=__version__, prog_name="convex-typegen")
@click.help_option("-h", "--help")
def cli():
    """convex-typegen - TypeScript types and React hooks for Convex projects

    \b
    QUICK START:
      convex-typegen generate        # Write ./src/types/convex.ts once
      convex-typegen watch           # Regenerate on every change
      convex-typegen scan --json     # Inspect discovered tables and functions

    \b
    Settings come from convex-typegen.json in the project root,
    CONVEX_TYPEGEN_<SECTION>_<KEY> environment variables, and flags.
    For detailed options: convex-typegen <command> --help"""
    pass


from convex_typegen.commands.generate import generate
from convex_typegen.commands.scan import scan
from convex_typegen.commands.watch import watch

cli.add_command(generate)
cli.add_command(scan)
cli.add_command(watch)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == "__main__":
    main()
