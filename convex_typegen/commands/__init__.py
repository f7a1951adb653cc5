"""Click commands for the convex-typegen CLI."""
