"""Tests for FileWalker and the scan orchestrator over real directory trees."""

import errno
import os
from pathlib import Path

from convex_typegen.indexer import FileWalker, scan


class TestFileWalker:
    def test_skips_reserved_directories_and_schema(self, tmp_path, make_tree):
        make_tree(tmp_path, {
            "schema.ts": "export default defineSchema({});",
            "_generated/server.ts": "export const query = null;",
            "migrations/0001.ts": "export default mutation({});",
            ".hidden/x.ts": "export default query({});",
            "node_modules/pkg/index.ts": "",
            "users/getCurrent.ts": "export default query({});",
            "users/schema.ts": "export default defineTable({});",
            "users/types.d.ts": "export type X = {};",
            "users/notes.md": "# notes",
            "crons.ts": "export default cronJobs();",
        })
        walker = FileWalker(tmp_path)
        paths = [source.relative_path for source in walker.walk()]
        assert paths == ["crons.ts", "users/getCurrent.ts"]
        assert walker.warnings == []

    def test_stable_order_files_before_subdirectories(self, tmp_path, make_tree):
        make_tree(tmp_path, {
            "b/z.ts": "",
            "b/a.ts": "",
            "a/nested/deep.ts": "",
            "a/top.ts": "",
            "root.ts": "",
        })
        paths = [source.relative_path for source in FileWalker(tmp_path).walk()]
        assert paths == ["root.ts", "a/top.ts", "a/nested/deep.ts", "b/a.ts", "b/z.ts"]
        assert paths == [source.relative_path for source in FileWalker(tmp_path).walk()]

    def test_unreadable_file_skipped_with_warning(self, tmp_path, make_tree):
        make_tree(tmp_path, {"good.ts": "export default query({});"})
        (tmp_path / "bad.ts").write_bytes(b"\xff\xfe\x00broken")
        walker = FileWalker(tmp_path)
        paths = [source.relative_path for source in walker.walk()]
        assert paths == ["good.ts"]
        assert len(walker.warnings) == 1
        assert "bad.ts" in walker.warnings[0]
        assert walker.stats["unreadable"] == 1

    def test_unreadable_directory_skipped_with_warning(self, tmp_path, make_tree, monkeypatch):
        make_tree(tmp_path, {"a/x.ts": "", "b/y.ts": ""})
        real_scandir = os.scandir

        def scandir(path="."):
            if Path(path).name == "a":
                raise PermissionError(errno.EACCES, "Permission denied", str(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", scandir)
        walker = FileWalker(tmp_path)
        paths = [source.relative_path for source in walker.walk()]
        assert paths == ["b/y.ts"]
        assert len(walker.warnings) == 1
        assert "Permission denied" in walker.warnings[0]
        assert str(tmp_path / "a") in walker.warnings[0]
        assert walker.stats["unreadable"] == 1

    def test_custom_extensions(self, tmp_path, make_tree):
        make_tree(tmp_path, {"a.ts": "", "b.js": "", "c.tsx": ""})
        walker = FileWalker(tmp_path, extensions=(".ts", ".js"))
        assert [source.relative_path for source in walker.walk()] == ["a.ts", "b.js"]


class TestScan:
    def test_discovery_order(self, convex_dir):
        result = scan(convex_dir)
        assert result.table_names == ["users", "articles"]
        assert [f.name for f in result.functions] == [
            "articles/create",
            "articles/queries/list",
            "articles/queries/byAuthor",
            "users/getCurrent",
        ]
        assert result.files_scanned == 3
        assert result.warnings == []

    def test_scan_is_repeatable(self, convex_dir):
        assert scan(convex_dir).to_dict() == scan(convex_dir).to_dict()

    def test_to_dict_shape(self, convex_dir):
        data = scan(convex_dir).to_dict()
        get_current = data["functions"][-1]
        assert get_current == {
            "name": "users/getCurrent",
            "path": "users/getCurrent.ts",
            "type": "query",
            "is_default_export": True,
            "args": 'id: v.optional(v.id("users"))',
            "return_type": "User | null",
        }

    def test_missing_schema_uses_directories(self, convex_dir):
        (convex_dir / "schema.ts").unlink()
        assert scan(convex_dir).table_names == ["articles", "users"]
