"""convex-typegen - typed accessor generation for Convex projects."""

__version__ = "0.3.0"
