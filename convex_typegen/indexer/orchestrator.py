"""Scan orchestrator - one pure pass over a Convex source tree.

``scan`` reads the schema file and every function candidate, and returns a
ScanResult. It writes nothing and keeps no state between calls, so two
scans of an unchanged tree return equal results.
"""

from pathlib import Path

from convex_typegen.models import FunctionDescriptor, ScanResult
from convex_typegen.utils.logging import logger

from .config import (
    DEFAULT_RETURN_TYPE_RULES,
    DEFAULT_SCHEMA_FILE,
    DEFAULT_SOURCE_EXTENSIONS,
    ReturnTypeRule,
)
from .core import FileWalker
from .extractors import FunctionExtractor, TableExtractor


def read_schema(schema_path: Path, warnings: list[str]) -> str | None:
    """Schema text, or None when it is missing or unreadable."""
    if not schema_path.exists():
        return None
    try:
        return schema_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        message = f"Could not read schema file {schema_path}: {e}"
        logger.warning(message)
        warnings.append(message)
        return None


def scan(
    root_path: Path,
    schema_file: str = DEFAULT_SCHEMA_FILE,
    import_path: str = "convex",
    extensions: tuple[str, ...] = DEFAULT_SOURCE_EXTENSIONS,
    return_type_rules: tuple[ReturnTypeRule, ...] = DEFAULT_RETURN_TYPE_RULES,
) -> ScanResult:
    """Discover tables and functions below ``root_path``.

    Args:
        root_path: Convex source root
        schema_file: Schema descriptor file name (relative to root_path)
        import_path: Module alias used by schema imports
        extensions: File extensions that may declare functions
        return_type_rules: Ordered return-type heuristics

    Returns:
        ScanResult with tables and functions in discovery order
    """
    root_path = Path(root_path)
    result = ScanResult(root=str(root_path))

    table_extractor = TableExtractor(root_path, import_path=import_path)
    schema_content = read_schema(root_path / schema_file, result.warnings)
    result.tables = table_extractor.collect(schema_content, schema_file)
    result.warnings.extend(table_extractor.warnings)

    walker = FileWalker(root_path, schema_file=schema_file, extensions=extensions)
    function_extractor = FunctionExtractor(root_path, return_type_rules=return_type_rules)
    seen: set[tuple[str, str]] = set()
    functions: list[FunctionDescriptor] = []
    for source in walker.walk():
        for func in function_extractor.extract(source.relative_path, source.content):
            if func.identity in seen:
                continue
            seen.add(func.identity)
            functions.append(func)

    result.functions = functions
    result.files_scanned = walker.stats["candidate_files"]
    result.warnings.extend(walker.warnings)

    logger.info(f"Found tables: {', '.join(result.table_names) or '(none)'}")
    logger.info(f"Found functions: {', '.join(f.name for f in functions) or '(none)'}")
    return result
