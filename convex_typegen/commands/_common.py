"""Options shared by every command that resolves a GenerationConfig."""

import click

from convex_typegen.config_runtime import GenerationConfig, load_generation_config

_CONFIG_OPTIONS = [
    click.option("--root", default=".", type=click.Path(file_okay=False), help="Project root (default: .)"),
    click.option("--out", "output", default=None, help="Generated types file, relative to --root"),
    click.option("--convex-dir", default=None, help="Convex source directory, relative to --root"),
    click.option("--import-path", default=None, help="Module alias of the Convex directory (default: convex)"),
]


def config_options(func):
    """Attach the project/path options that override convex-typegen.json."""
    for option in reversed(_CONFIG_OPTIONS):
        func = option(func)
    return func


def resolve_config(
    root: str,
    output: str | None,
    convex_dir: str | None,
    import_path: str | None,
    emit_hooks: bool | None = None,
    debounce_ms: int | None = None,
) -> GenerationConfig:
    """Build the run configuration; command-line values win over file and env."""
    return load_generation_config(
        root,
        overrides={
            "paths": {"output": output, "convex_dir": convex_dir},
            "generation": {"import_path": import_path, "emit_hooks": emit_hooks},
            "watch": {"debounce_ms": debounce_ms},
        },
    )
