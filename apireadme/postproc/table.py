"""Markdown table rendering for the API catalog."""

from __future__ import annotations

from typing import List, Sequence

from ..models import Catalog, DocumentedEntry

TYPES_HEADER = ("Category", "Type Name", "Description")
FUNCTIONS_HEADER = ("Category", "Function", "Description")

_MIN_DELIMITER_WIDTH = 3


def render_table(header: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Render an aligned Markdown table, or an empty string when there are no rows."""
    if not rows:
        return ""
    table = [list(header), *(list(row) for row in rows)]
    widths = [_MIN_DELIMITER_WIDTH] * len(header)
    for row in table:
        for index, cell in enumerate(row):
            widths[index] = max(widths[index], len(cell))

    lines = [_render_row(table[0], widths), _render_row(["-" * width for width in widths], widths)]
    lines.extend(_render_row(row, widths) for row in table[1:])
    return "\n".join(lines)


def _render_row(cells: Sequence[str], widths: Sequence[int]) -> str:
    padded = [cell.ljust(width) for cell, width in zip(cells, widths)]
    return "| " + " | ".join(padded) + " |"


def _rows(entries: Sequence[DocumentedEntry]) -> List[Sequence[str]]:
    return [entry.as_row() for entry in entries]


def render_catalog(catalog: Catalog) -> str:
    """Render the types table then the functions table, omitting empty ones."""
    tables = [
        render_table(TYPES_HEADER, _rows(catalog.sorted_types())),
        render_table(FUNCTIONS_HEADER, _rows(catalog.sorted_functions())),
    ]
    return "\n\n".join(table for table in tables if table)


__all__ = ["FUNCTIONS_HEADER", "TYPES_HEADER", "render_catalog", "render_table"]
