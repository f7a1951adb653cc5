"""Writer for the generated types module.

Writes are skipped when the file on disk differs only in its timestamp
line, so a file watcher on the output tree is not re-triggered by a
regeneration that changed nothing.
"""

from pathlib import Path

from convex_typegen.indexer.exceptions import OutputWriteError
from convex_typegen.utils.constants import TIMESTAMP_PREFIX
from convex_typegen.utils.logging import logger


def strip_timestamp(content: str) -> str:
    """Content with the generation-timestamp line removed."""
    return "\n".join(
        line for line in content.splitlines() if not line.startswith(TIMESTAMP_PREFIX)
    )


def write_output(output_path: Path, content: str) -> bool:
    """Write ``content`` to ``output_path``, creating parent directories.

    Args:
        output_path: Destination file
        content: Full module text

    Returns:
        True if the file was written, False if it was already up to date

    Raises:
        OutputWriteError: If the directory or file cannot be written
    """
    output_path = Path(output_path)

    if output_path.is_file():
        try:
            existing = output_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            existing = None
        if existing is not None and strip_timestamp(existing) == strip_timestamp(content):
            logger.debug(f"{output_path} is up to date")
            return False

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(f"Could not write {output_path}: {e}", str(output_path)) from e

    return True
