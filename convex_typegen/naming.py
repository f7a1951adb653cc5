"""Deterministic naming for generated declarations.

Pure string functions, no I/O. Table ``articles`` becomes document type
``Article`` and id type ``ArticleId``; function ``users/getCurrent``
becomes accessor ``useGetCurrent`` and args type ``GetCurrentArgs``.

Known limitation: ``singularize`` strips one trailing ``s`` blindly, so an
already-singular table such as ``news`` yields ``New``. Rename the table
or accept the alias until a pluralization rule is agreed.
"""

import re

from .models import FunctionDescriptor

_SEPARATED_SEGMENT = re.compile(r"[-_]([A-Za-z0-9])")


def singularize(table_name: str) -> str:
    """Strip a single trailing ``s`` (``articles`` -> ``article``)."""
    if table_name.endswith("s"):
        return table_name[:-1]
    return table_name


def pascal_case(identifier: str, convert_separators: bool = False) -> str:
    """Uppercase the first character.

    With ``convert_separators`` (used for file-derived names) ``-``/``_``
    followed by a character is collapsed into an uppercase character:
    ``get-all_items`` -> ``GetAllItems``.
    """
    if convert_separators:
        identifier = _SEPARATED_SEGMENT.sub(lambda m: m.group(1).upper(), identifier)
    return identifier[:1].upper() + identifier[1:]


def document_type_name(table_name: str) -> str:
    return pascal_case(singularize(table_name))


def id_type_name(table_name: str) -> str:
    return f"{document_type_name(table_name)}Id"


def function_type_stem(func: FunctionDescriptor) -> str:
    """Base name shared by a function's Args and Return aliases.

    Default exports are named after their file, named exports after the
    export identifier; only file names get separator conversion.
    """
    return pascal_case(func.short_name, convert_separators=func.is_default_export)


def args_type_name(func: FunctionDescriptor) -> str:
    return f"{function_type_stem(func)}Args"


def return_type_name(func: FunctionDescriptor) -> str:
    return f"{function_type_stem(func)}Return"


def accessor_name(func: FunctionDescriptor) -> str:
    """Name of the generated hook for ``func``.

    Two rules coexist and are kept apart on purpose: default exports take
    the file name (``users/getCurrent.ts`` -> ``useGetCurrent``), named
    exports take the export identifier (``export const byEmail`` ->
    ``useByEmail``). Both append the kind suffix (``Mutation``/``Action``,
    nothing for queries).
    """
    return f"use{function_type_stem(func)}{func.kind.accessor_suffix}"


def api_reference(func: FunctionDescriptor) -> str:
    """Dotted ``api`` path of the function (``api.users.getCurrent.default``)."""
    module = func.module_path.replace("/", ".")
    export = "default" if func.is_default_export else func.export_name
    return f"api.{module}.{export}"
