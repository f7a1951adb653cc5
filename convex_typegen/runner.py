"""Generation runner: marker check, scan, render, write.

``generate_types`` is the pipeline boundary. Missing prerequisites end the
run with a warning and a ``skipped`` outcome, leaving any previous output
untouched; only OutputWriteError propagates to the caller.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from convex_typegen.codegen import render_types_file, write_output
from convex_typegen.config_runtime import GenerationConfig
from convex_typegen.indexer import scan
from convex_typegen.indexer.exceptions import PreconditionError
from convex_typegen.models import ScanResult
from convex_typegen.utils.logging import logger

WRITTEN = "written"
UNCHANGED = "unchanged"
SKIPPED = "skipped"


@dataclass(frozen=True)
class GenerationOutcome:
    """Result of one generation run."""

    status: str
    output_path: Path
    reason: str | None = None
    scan: ScanResult | None = None

    @property
    def produced_output(self) -> bool:
        return self.status in (WRITTEN, UNCHANGED)


def check_marker(config: GenerationConfig) -> None:
    """Raise PreconditionError unless the generation marker exists."""
    if not config.marker_path.exists():
        raise PreconditionError(
            f"Convex data model not found at {config.marker_path}. Run \"npx convex dev\" first.",
            reason="marker_missing",
        )


def scan_project(config: GenerationConfig) -> ScanResult:
    """Scan the configured Convex directory; requires at least one table."""
    result = scan(
        config.convex_dir,
        schema_file=config.schema_file,
        import_path=config.import_path,
        extensions=config.extensions,
    )
    if not result.tables:
        raise PreconditionError(
            "No table names found. Check your Convex schema.",
            reason="no_tables",
        )
    return result


def generate_types(
    config: GenerationConfig,
    clock: Callable[[], datetime] | None = None,
) -> GenerationOutcome:
    """Run one full generation.

    Args:
        config: Resolved configuration
        clock: Returns the generation timestamp (defaults to UTC now)

    Returns:
        GenerationOutcome with status written, unchanged or skipped

    Raises:
        OutputWriteError: If the output cannot be written
    """
    try:
        check_marker(config)
        result = scan_project(config)
    except PreconditionError as e:
        logger.warning(str(e))
        return GenerationOutcome(SKIPPED, config.output_path, reason=e.reason)

    generated_at = (clock or (lambda: datetime.now(timezone.utc)))()
    content = render_types_file(
        result,
        import_path=config.import_path,
        emit_hooks=config.emit_hooks,
        generated_at=generated_at,
    )

    if write_output(config.output_path, content):
        logger.info(f"Generated Convex types and hooks at {config.output_path}")
        status = WRITTEN
    else:
        logger.info(f"Convex types at {config.output_path} already up to date")
        status = UNCHANGED
    return GenerationOutcome(status, config.output_path, scan=result)
