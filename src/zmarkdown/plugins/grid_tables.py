#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/plugins/grid_tables.py
"""Grid tables.

Tables drawn with ``+``, ``-`` and ``|`` whose cells may span several source
lines. A separator made of ``=`` ends the header rows::

    +-------+-----------------+
    | Name  | Description     |
    +=======+=================+
    | grid  | Cells can span  |
    |       | several lines   |
    +-------+-----------------+

Column boundaries are read from the first separator line; every line of the
table must put its ``+`` or ``|`` characters at these positions, otherwise the
block is not a grid table. Cell text is parsed as inline markdown and the
table produces the same nodes as a pipe table.

"""

from __future__ import annotations

import re
from typing import Any, Match, Optional

from zmarkdown.parsers.markdown import MarkdownParser

GRID_TABLE_PATTERN = r"^ {0,3}\+(?:[-=:]+\+)+[ \t]*$"

_SEPARATOR = re.compile(r"^\+(?:[-=:]+\+)+$")


def _boundaries(separator: str) -> list[int]:
    return [index for index, char in enumerate(separator) if char == "+"]


def _alignments(separator: str, bounds: list[int]) -> list[Optional[str]]:
    aligns: list[Optional[str]] = []
    for left, right in zip(bounds, bounds[1:]):
        segment = separator[left + 1 : right]
        if segment.startswith(":") and segment.endswith(":"):
            aligns.append("center")
        elif segment.endswith(":"):
            aligns.append("right")
        elif segment.startswith(":"):
            aligns.append("left")
        else:
            aligns.append(None)
    return aligns


def _cells(lines: list[str], bounds: list[int], aligns: list[Optional[str]], head: bool) -> list[dict[str, Any]]:
    cells = []
    for column, (left, right) in enumerate(zip(bounds, bounds[1:])):
        parts = [line[left + 1 : right].strip() for line in lines]
        text = "\n".join(part for part in parts if part)
        cells.append({"type": "table_cell", "text": text, "attrs": {"align": aligns[column], "head": head}})
    return cells


def parse_grid_table(block: Any, m: Match[str], state: Any) -> Optional[int]:
    pos = state.cursor
    lines: list[str] = []
    while pos < state.cursor_max:
        line = state.get_line(pos)
        stripped = line.strip()
        if not stripped or stripped[0] not in "+|":
            break
        lines.append(stripped)
        pos += len(line)

    if len(lines) < 3 or not _SEPARATOR.match(lines[0]) or not _SEPARATOR.match(lines[-1]):
        return None

    bounds = _boundaries(lines[0])
    width = bounds[-1] + 1
    for line in lines:
        if len(line) != width or any(line[index] not in "+|" for index in bounds):
            return None

    aligns = _alignments(lines[0], bounds)
    rows: list[list[str]] = []
    current: list[str] = []
    header_count = 0
    for line in lines[1:]:
        if not _SEPARATOR.match(line):
            current.append(line)
            continue
        if current:
            rows.append(current)
            current = []
        if "=" in line:
            if header_count:
                return None
            header_count = len(rows)
            if ":" in line:
                aligns = _alignments(line, bounds)

    head_rows = [_cells(row, bounds, aligns, head=True) for row in rows[:header_count]]
    body_rows = [_cells(row, bounds, aligns, head=False) for row in rows[header_count:]]

    children: list[dict[str, Any]] = []
    if head_rows:
        if len(head_rows) > 1:
            # Several header rows collapse into one header row, cell by cell
            merged = head_rows[0]
            for row in head_rows[1:]:
                for cell, extra in zip(merged, row):
                    cell["text"] = "\n".join(part for part in (cell["text"], extra["text"]) if part)
            head_rows = [merged]
        children.append({"type": "table_head", "children": head_rows[0]})
    children.append({"type": "table_body", "children": [{"type": "table_row", "children": row} for row in body_rows]})
    state.append_token({"type": "table", "children": children})
    return pos


def grid_tables(md: Any) -> None:
    """Mistune plugin registering the grid table rule."""
    md.block.register("grid_table", GRID_TABLE_PATTERN, parse_grid_table, before="thematic_break")


def parser_plugin(parser: MarkdownParser, options: Any) -> None:
    """Enable grid tables."""
    parser.use(grid_tables)
