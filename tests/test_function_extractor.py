"""Unit tests for FunctionExtractor.

Tests use real Convex function-file shapes: default exports, named
exports, table-only files, and args blocks that must not be confused with
nested objects or table definitions.
"""

from pathlib import Path

from convex_typegen.indexer.config import ReturnTypeRule
from convex_typegen.indexer.extractors import FunctionExtractor
from convex_typegen.indexer.extractors.functions import find_args_block, is_table_only
from convex_typegen.models import FunctionKind


def extract(relative_path: str, content: str, **kwargs):
    return FunctionExtractor(root_path=Path("."), **kwargs).extract(relative_path, content)


class TestClassification:
    """Which declarations become FunctionDescriptor."""

    def test_default_export_query(self):
        content = 'export default query({\n  handler: async (ctx) => null,\n});\n'
        [func] = extract("users/getCurrent.ts", content)
        assert func.name == "users/getCurrent"
        assert func.kind is FunctionKind.QUERY
        assert func.is_default_export
        assert func.export_name is None
        assert func.raw_args is None

    def test_windows_separators_normalized(self):
        [func] = extract("users\\getCurrent.ts", "export default query({ handler: () => null });")
        assert func.name == "users/getCurrent"
        assert func.relative_path == "users/getCurrent.ts"

    def test_named_exports_in_order(self):
        content = """
export const send = mutation({ handler: async () => {} });
export const list = query({ handler: async () => [] });
export const sync = action({ handler: async () => {} });
"""
        functions = extract("messages.ts", content)
        assert [(f.name, f.kind) for f in functions] == [
            ("messages/send", FunctionKind.MUTATION),
            ("messages/list", FunctionKind.QUERY),
            ("messages/sync", FunctionKind.ACTION),
        ]
        assert all(not f.is_default_export for f in functions)

    def test_default_and_named_exports_together(self):
        content = """
export const byEmail = query({ handler: async () => null });
export default mutation({ handler: async () => {} });
"""
        functions = extract("users/users.ts", content)
        assert [f.name for f in functions] == ["users/users", "users/users/byEmail"]
        assert functions[0].is_default_export

    def test_table_aliases_skipped(self):
        content = """
export const usersTable = query({ handler: async () => null });
export const get = query({ handler: async () => null });
"""
        assert [f.export_name for f in extract("users.ts", content)] == ["get"]

    def test_table_only_file_contributes_nothing(self):
        content = """
import { defineTable } from "convex/server";
export default defineTable({ name: v.string() });
"""
        assert is_table_only(content)
        assert extract("users/users.ts", content) == []

    def test_table_file_with_named_functions_is_scanned(self):
        content = """
export default defineTable({ name: v.string() });
export const get = query({ args: { id: v.id("users") }, handler: async () => null });
"""
        assert not is_table_only(content)
        [func] = extract("users/users.ts", content)
        assert func.export_name == "get"
        assert func.raw_args == 'id: v.id("users")'

    def test_plain_module_has_no_functions(self):
        assert extract("lib/format.ts", "export function format(x: string) { return x; }") == []


class TestArgsBlock:
    """Locating the args block that belongs to a function's call."""

    def test_multiline_args_captured_verbatim(self):
        content = """
export default mutation({
  args: {
    title: v.string(),
    tags: v.array(v.string()),
  },
  handler: async (ctx, args) => {},
});
"""
        [func] = extract("articles/create.ts", content)
        assert func.raw_args == "title: v.string(),\n    tags: v.array(v.string()),"

    def test_each_named_export_gets_its_own_args(self):
        content = """
export const first = query({ args: { a: v.string() }, handler: async () => null });
export const second = query({ handler: async () => null });
export const third = query({ args: { c: v.number() }, handler: async () => null });
"""
        functions = extract("things.ts", content)
        assert [f.raw_args for f in functions] == ["a: v.string()", None, "c: v.number()"]

    def test_nested_args_key_ignored(self):
        content = """
export default query({
  handler: async (ctx) => {
    const options = { args: { nested: true } };
    return options;
  },
});
"""
        [func] = extract("weird.ts", content)
        assert func.raw_args is None

    def test_args_inside_table_definition_ignored(self):
        content = 'export const x = query({ handler: defineTable({ args: { a: v.string() } }) });'
        excluded = [(content.index("defineTable("), len(content))]
        span = (content.index("query(") + len("query"), len(content) - 2)
        assert find_args_block(content, span, excluded) is None

    def test_empty_args_block(self):
        [func] = extract("list.ts", "export default query({ args: {}, handler: async () => [] });")
        assert func.raw_args == ""
        assert not func.has_args


class TestReturnTypes:
    """The ordered return-type rule table."""

    def test_default_export_name_rules(self):
        content = "export default query({ handler: async () => null });"
        assert extract("articles/getAllArticles.ts", content)[0].return_type_hint == "ArticleWithAuthor[]"
        assert extract("users/getCurrent.ts", content)[0].return_type_hint == "User | null"
        assert extract("users/getAll.ts", content)[0].return_type_hint == "User[]"

    def test_default_export_mutation_rules(self):
        content = "export default mutation({ handler: async () => {} });"
        assert extract("articles/create.ts", content)[0].return_type_hint == 'Id<"articles">'
        assert extract("articles/update.ts", content)[0].return_type_hint == "void"
        assert extract("articles/archive.ts", content)[0].return_type_hint is None

    def test_named_export_rules(self):
        content = "export const getCurrent = query({ handler: async () => null });"
        assert extract("organizations.ts", content)[0].return_type_hint == "Organization | null"

    def test_content_rules(self):
        content = """
export const recent = query({
  handler: async (ctx) => {
    const articles = await ctx.db.query("articles").take(10);
    return articles;
  },
});
"""
        assert extract("feed.ts", content)[0].return_type_hint == "Article[]"

    def test_first_matching_rule_wins(self):
        content = "export default query({ handler: async () => null });"
        # "getAllArticles" also contains "getAll" and "get"
        assert extract("getAllArticles.ts", content)[0].return_type_hint == "ArticleWithAuthor[]"

    def test_custom_rule_table(self):
        rules = (ReturnTypeRule("action", "sync", "SyncReport"),)
        content = "export const syncAll = action({ handler: async () => {} });"
        [func] = extract("jobs.ts", content, return_type_rules=rules)
        assert func.return_type_hint == "SyncReport"

    def test_no_match_gives_no_hint(self):
        content = "export const ping = query({ handler: async () => 'pong' });"
        assert extract("health.ts", content)[0].return_type_hint is None
