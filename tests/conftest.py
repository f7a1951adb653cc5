"""Pytest configuration and fixtures."""
import os
from pathlib import Path

import pytest

from convex_typegen.config_runtime import load_generation_config

SCHEMA_TS = """import { defineSchema, defineTable } from "convex/server";
import { v } from "convex/values";

export default defineSchema({
  users: defineTable({
    name: v.string(),
    email: v.string(),
  }).index("by_email", ["email"]),
  articles: defineTable({
    title: v.string(),
    author: v.id("users"),
  }),
});
"""

GET_CURRENT_TS = """import { query } from "../_generated/server";
import { v } from "convex/values";

export default query({
  args: { id: v.optional(v.id("users")) },
  handler: async (ctx, args) => {
    const identity = await ctx.auth.getUserIdentity();
    return identity ? await ctx.db.get(args.id) : null;
  },
});
"""

CREATE_ARTICLE_TS = """import { mutation } from "../_generated/server";
import { v } from "convex/values";

export default mutation({
  args: {
    title: v.string(),
    tags: v.array(
      v.string()
    ),
  },
  handler: async (ctx, args) => {
    return await ctx.db.insert("articles", args);
  },
});
"""

ARTICLE_QUERIES_TS = """import { query } from "../_generated/server";
import { v } from "convex/values";

export const list = query({
  args: {},
  handler: async (ctx) => {
    const articles = await ctx.db.query("articles").collect();
    return articles;
  },
});

export const byAuthor = query({
  args: {
    author: v.id("users"),
    status: v.union(v.literal("draft"), v.literal("published")),
  },
  handler: async (ctx, args) => {
    return await ctx.db.query("articles").collect();
  },
});
"""

PROJECT_FILES = {
    "convex/schema.ts": SCHEMA_TS,
    "convex/_generated/dataModel.d.ts": "export type DataModel = {};\n",
    "convex/_generated/api.d.ts": "export declare const api: any;\n",
    "convex/users/getCurrent.ts": GET_CURRENT_TS,
    "convex/articles/create.ts": CREATE_ARTICLE_TS,
    "convex/articles/queries.ts": ARTICLE_QUERIES_TS,
}


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create ``files`` (relative path -> content) below ``root``."""
    for relative_path, content in files.items():
        path = root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep CONVEX_TYPEGEN_* variables of the developer's shell out of tests."""
    for name in list(os.environ):
        if name.startswith("CONVEX_TYPEGEN_"):
            monkeypatch.delenv(name)


@pytest.fixture
def convex_project(tmp_path):
    """Minimal Convex project: two tables, three function files, generation marker present."""
    return write_tree(tmp_path, PROJECT_FILES)


@pytest.fixture
def convex_dir(convex_project):
    return convex_project / "convex"


@pytest.fixture
def generation_config(convex_project):
    return load_generation_config(str(convex_project))


@pytest.fixture
def make_tree():
    """Expose ``write_tree`` to tests that build their own trees."""
    return write_tree
