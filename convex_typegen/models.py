"""Descriptors produced by a scan.

Descriptors are built fresh on every scan and never mutated afterwards:
- TableDescriptor: a table named by the schema file (or its directory)
- FunctionDescriptor: a query/mutation/action found in a source file
- ScanResult: everything one scan discovered, plus advisory warnings
"""

from dataclasses import dataclass, field
from enum import Enum


class FunctionKind(str, Enum):
    """Convex function flavour, keyed by the constructor that builds it."""

    QUERY = "query"
    MUTATION = "mutation"
    ACTION = "action"

    @property
    def accessor_suffix(self) -> str:
        """Suffix appended to accessor names (queries get none)."""
        if self is FunctionKind.QUERY:
            return ""
        return self.value.capitalize()

    @property
    def react_hook(self) -> str:
        """convex/react hook that invokes this kind of function."""
        return {
            FunctionKind.QUERY: "useQuery",
            FunctionKind.MUTATION: "useMutation",
            FunctionKind.ACTION: "useAction",
        }[self]


@dataclass(frozen=True)
class TableDescriptor:
    """A table discovered in the schema file."""

    name: str


@dataclass(frozen=True)
class FunctionDescriptor:
    """A remote function declared in a source file.

    ``name`` is the slash-joined relative path without extension, with the
    export identifier appended for named exports (``users/users/getById``).
    """

    name: str
    relative_path: str
    kind: FunctionKind
    is_default_export: bool
    export_name: str | None = None
    raw_args: str | None = None
    return_type_hint: str | None = None

    @property
    def identity(self) -> tuple[str, str]:
        """Uniqueness key: (relative path, export identifier or 'default')."""
        return (self.relative_path, self.export_name or "default")

    @property
    def module_path(self) -> str:
        """Slash-joined module path without extension or export name."""
        if self.is_default_export:
            return self.name
        return self.name.rsplit("/", 1)[0]

    @property
    def short_name(self) -> str:
        """Last segment of the function name (file name or export name)."""
        return self.name.rsplit("/", 1)[-1]

    @property
    def has_args(self) -> bool:
        return bool(self.raw_args and self.raw_args.strip())


@dataclass
class ScanResult:
    """Outcome of one pure scan over a Convex source tree."""

    root: str
    tables: list[TableDescriptor] = field(default_factory=list)
    functions: list[FunctionDescriptor] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    files_scanned: int = 0

    @property
    def table_names(self) -> list[str]:
        return [table.name for table in self.tables]

    def to_dict(self) -> dict:
        """JSON-friendly view used by ``convex-typegen scan --json``."""
        return {
            "root": self.root,
            "tables": self.table_names,
            "functions": [
                {
                    "name": func.name,
                    "path": func.relative_path,
                    "type": func.kind.value,
                    "is_default_export": func.is_default_export,
                    "args": func.raw_args,
                    "return_type": func.return_type_hint,
                }
                for func in self.functions
            ],
            "warnings": list(self.warnings),
            "files_scanned": self.files_scanned,
        }
