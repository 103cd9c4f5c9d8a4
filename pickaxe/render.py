"""
pickaxe/render.py

Bordered text rendering of result tables.

    +----+------+
    | id | name |
    +----+------+
    | 1  | Ann  |
    | 22 | Bob  |
    +----+------+

Column widths depend on every cell, so a table is always fully materialized
before the first line is produced.
"""

from __future__ import annotations

from typing import Any, Sequence

from .results import ResultTable


def stringify(value: Any) -> str:
    """Display text of one cell."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def measure(table: ResultTable) -> list[int]:
    """
    Compute the width of every column.

    Each column is two characters wider than its longest text, header included.

    Args:
        table: Completed result table.

    Returns:
        One width per column.
    """
    widths = [len(str(c)) + 2 for c in table.columns]
    for row in table.rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(stringify(cell)) + 2)
    return widths


def border(widths: Sequence[int]) -> str:
    return "".join("+" + "-" * w for w in widths) + "+"


def values_line(widths: Sequence[int], texts: Sequence[str]) -> str:
    """Left-aligned cells, one leading space, padded to the column width."""
    parts = []
    for w, text in zip(widths, texts):
        parts.append("| " + text + " " * (w - 1 - len(text)))
    return "".join(parts) + "|"


def render_lines(table: ResultTable) -> list[str]:
    """
    Render a table as a list of lines (no trailing newlines).

    Order: border, header, border, one line per row, border.
    """
    widths = measure(table)
    edge = border(widths)
    lines = [edge, values_line(widths, [str(c) for c in table.columns]), edge]
    for row in table.rows:
        lines.append(values_line(widths, [stringify(v) for v in row]))
    lines.append(edge)
    return lines


def render_table(table: ResultTable) -> str:
    return "\n".join(render_lines(table))
