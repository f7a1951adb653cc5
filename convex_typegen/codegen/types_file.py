"""Renderer for the generated TypeScript types module.

``render_types_file`` is pure: the timestamp is passed in, so rendering the
same ScanResult twice yields identical text apart from that one line.
"""

from datetime import datetime

from convex_typegen.models import FunctionDescriptor, FunctionKind, ScanResult
from convex_typegen.naming import (
    accessor_name,
    api_reference,
    args_type_name,
    document_type_name,
    id_type_name,
    return_type_name,
)
from convex_typegen.utils.constants import TIMESTAMP_PREFIX
from convex_typegen.utils.logging import logger
from convex_typegen.validators import synthesize_args_type

BANNER = """/**
 * @generated by convex-typegen. DO NOT EDIT.
 * WARNING: This file is auto-generated and will be overwritten on the next build.
 * To modify types, update your Convex schema and functions instead.
 */"""

BASE_TYPES = ("DataModel", "Doc", "Id", "TableNames")

MAPPED_TYPES = """// Create mapped types for all tables
type DocTypes = {
  [K in TableNames]: Doc<K>;
};

type IdTypes = {
  [K in TableNames]: Id<K>;
};"""

POPULATED_TYPES = """// Common return types for populated documents
export type ArticleWithAuthor = Omit<Article, 'author'> & {
  author: User | null;
};

export type UserWithProfile = User & {
  // Add any additional populated fields here
};"""

POPULATED_HELPERS = """// Generic types for populated documents
export type WithPopulatedField<T, K extends keyof T, P> = Omit<T, K> & {
  [key in K]: P;
};

// Example: Article with populated author
export type ArticleWithPopulatedAuthor = WithPopulatedField<Article, 'author', User | null>;"""

FOOTER = """// Export the mapped types for advanced usage
export type AllDocTypes = DocTypes;
export type AllIdTypes = IdTypes;

// Helper type to get the document type for any table
export type GetDocType<T extends TableNames> = DocTypes[T];

// Helper type to get the ID type for any table
export type GetIdType<T extends TableNames> = IdTypes[T];"""


def _unique(functions: list[FunctionDescriptor], name_for) -> list[FunctionDescriptor]:
    """Drop functions whose generated identifier was already taken."""
    taken: dict[str, str] = {}
    unique = []
    for func in functions:
        name = name_for(func)
        if name in taken:
            logger.warning(f"Skipping {name} for {func.name}: already generated for {taken[name]}")
            continue
        taken[name] = func.name
        unique.append(func)
    return unique


def render_imports(scan: ScanResult, import_path: str, emit_hooks: bool) -> str:
    lines = [
        "import type {",
        *(f"  {name}," for name in BASE_TYPES),
        f'}} from "@{import_path}/_generated/dataModel";',
    ]
    if emit_hooks and scan.functions:
        hooks = [kind.react_hook for kind in FunctionKind if any(f.kind is kind for f in scan.functions)]
        lines.append(f'import {{ api }} from "@{import_path}/_generated/api";')
        lines.append(f'import {{ {", ".join(hooks)} }} from "convex/react";')
    lines.append("")
    lines.append("// Export the base types")
    lines.append("export type {")
    lines.extend(f"  {name}," for name in BASE_TYPES)
    lines.append("};")
    return "\n".join(lines)


def render_table_types(scan: ScanResult) -> str:
    docs = [f'export type {document_type_name(t)} = DocTypes["{t}"];' for t in scan.table_names]
    ids = [f'export type {id_type_name(t)} = IdTypes["{t}"];' for t in scan.table_names]
    return "\n".join([
        "// Automatically generated document type exports",
        *docs,
        "",
        "// Automatically generated ID type exports",
        *ids,
    ])


def render_args_types(functions: list[FunctionDescriptor]) -> str:
    with_args = _unique([f for f in functions if f.has_args], args_type_name)
    lines = ["// Function argument types"]
    lines.extend(
        f"export type {args_type_name(func)} = {synthesize_args_type(func.raw_args)};"
        for func in with_args
    )
    return "\n".join(lines)


def render_accessor(func: FunctionDescriptor) -> str:
    """One ``export const useX = ...`` line.

    Only queries take arguments; mutation and action hooks return a
    callable that receives them at call time.
    """
    hook = accessor_name(func)
    target = api_reference(func)
    if func.kind is FunctionKind.QUERY and func.has_args:
        return (
            f'export const {hook} = (args: {args_type_name(func)} | "skip") => '
            f"{func.kind.react_hook}({target}, args);"
        )
    return f"export const {hook} = () => {func.kind.react_hook}({target});"


def render_accessors(functions: list[FunctionDescriptor]) -> str:
    lines = ["// Pre-configured hooks for queries, mutations and actions"]
    lines.extend(render_accessor(func) for func in _unique(functions, accessor_name))
    return "\n".join(lines)


def render_return_types(functions: list[FunctionDescriptor]) -> str:
    hinted = _unique([f for f in functions if f.return_type_hint], return_type_name)
    lines = ["// Function return types"]
    lines.extend(f"export type {return_type_name(f)} = {f.return_type_hint};" for f in hinted)
    return "\n".join(lines)


def render_types_file(
    scan: ScanResult,
    import_path: str,
    emit_hooks: bool,
    generated_at: datetime,
) -> str:
    """Assemble the full generated module.

    Args:
        scan: Tables and functions to declare
        import_path: Module alias of the Convex directory (``convex`` -> ``@convex/...``)
        emit_hooks: Whether accessor declarations are generated
        generated_at: Timestamp recorded in the trailing comment

    Returns:
        Module text, ending with a newline
    """
    sections = [
        BANNER,
        render_imports(scan, import_path, emit_hooks),
        MAPPED_TYPES,
        render_table_types(scan),
        render_args_types(scan.functions),
    ]
    if emit_hooks:
        sections.append(render_accessors(scan.functions))
    sections.extend([
        POPULATED_TYPES,
        render_return_types(scan.functions),
        POPULATED_HELPERS,
        FOOTER,
        f"{TIMESTAMP_PREFIX}{generated_at.isoformat()}",
    ])
    return "\n\n".join(sections) + "\n"
