"""Benchmark contexts.

Values are restricted to strings, integers and flat lists of them so the
same context renders identically in Breeze and Jinja2.
"""

from __future__ import annotations

from typing import Any


def build_small_context() -> dict[str, Any]:
    """Small context: a dozen scalars and a short list."""
    return {
        "title": "Benchmark",
        "heading": "Small page",
        "user": "Ada",
        "user_id": 42,
        "items": [f"Item {i}" for i in range(5)],
        "show_footer": True,
        "footer": "Rendered by a benchmark",
    }


def build_medium_context() -> dict[str, Any]:
    """Medium context: ~100 variables and several loops."""
    context: dict[str, Any] = {
        "title": "Medium page",
        "categories": [f"Category {i}" for i in range(10)],
        "item_names": [f"Item {i}" for i in range(100)],
        "show_items": True,
        "highlight": True,
        "highlight_label": "featured",
        "vars": [f"value_{i}" for i in range(20)],
    }
    for i in range(80):
        context[f"var_{i}"] = f"value_{i}"
    return context


def build_large_context() -> dict[str, Any]:
    """Large context: one loop over 1000 rows."""
    return {"rows": [f"Row {i}" for i in range(1000)]}


SMALL_CONTEXT = build_small_context()
MEDIUM_CONTEXT = build_medium_context()
LARGE_CONTEXT = build_large_context()
