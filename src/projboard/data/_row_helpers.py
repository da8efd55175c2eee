"""Shared row-to-model conversion helpers for store modules."""

from __future__ import annotations


def row_str(row: dict[str, object], key: str, default: str = "") -> str:
    """Extract a string value from a database row dict."""
    v = row.get(key, default)
    return str(v) if v else default


def row_float(row: dict[str, object], key: str) -> float:
    """Extract a float value from a database row dict."""
    v = row.get(key, 0)
    if isinstance(v, bool):
        return float(v)
    if isinstance(v, int | float):
        return float(v)
    if isinstance(v, str):
        try:
            return float(v)
        except ValueError:
            return 0.0
    return 0.0
