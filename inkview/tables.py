"""Pipe-table preprocessing: rewrite Markdown tables as literal HTML."""

from __future__ import annotations

import html
import re
from enum import Enum

_SEPARATOR_CELL_RE = re.compile(r"^:?-+:?$")
_FENCE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})")


class ColumnAlignment(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


def parse_row(line: str) -> list[str] | None:
    """Split a `| a | b |` line into stripped cells, or None if it is not a row."""
    trimmed = line.strip()
    if not trimmed.startswith("|"):
        return None
    # Segments before the first pipe and after the last one are not cells.
    cells = [cell.strip() for cell in trimmed.split("|")[1:-1]]
    return cells or None


def parse_separator(line: str) -> list[ColumnAlignment] | None:
    """Return per-column alignments for a `|---|:-:|` line, or None."""
    cells = parse_row(line)
    if cells is None:
        return None

    alignments: list[ColumnAlignment] = []
    for cell in cells:
        if not _SEPARATOR_CELL_RE.match(cell):
            return None
        if cell.startswith(":") and cell.endswith(":"):
            alignments.append(ColumnAlignment.CENTER)
        elif cell.endswith(":"):
            alignments.append(ColumnAlignment.RIGHT)
        else:
            alignments.append(ColumnAlignment.LEFT)
    return alignments


def render_row(cells: list[str], alignments: list[ColumnAlignment], header: bool = False) -> str:
    """Render one `<tr>`; header cells stay left-aligned, body cells follow `alignments`."""
    tag = "th" if header else "td"
    # Short rows are padded so every row spans the declared columns.
    padded = list(cells) + [""] * (len(alignments) - len(cells))
    parts = ["<tr>"]
    for index, cell in enumerate(padded):
        if header or index >= len(alignments):
            alignment = ColumnAlignment.LEFT
        else:
            alignment = alignments[index]
        style = "" if alignment is ColumnAlignment.LEFT else f' style="text-align: {alignment.value};"'
        parts.append(f"<{tag}{style}>{html.escape(cell)}</{tag}>")
    parts.append("</tr>")
    return "".join(parts)


def _render_table(header: list[str], alignments: list[ColumnAlignment], body: list[list[str]]) -> str:
    lines = ["<table>", "<thead>", render_row(header, alignments, header=True), "</thead>", "<tbody>"]
    lines.extend(render_row(row, alignments) for row in body)
    lines.extend(["</tbody>", "</table>"])
    return "\n".join(lines)


def preprocess(markdown: str) -> str:
    """Replace every pipe table in `markdown` with HTML, leaving other lines untouched."""
    lines = markdown.split("\n")
    result: list[str] = []
    fence: str | None = None
    i = 0

    while i < len(lines):
        line = lines[i]

        fence_match = _FENCE_RE.match(line)
        if fence is not None:
            # Inside a fenced code block until a matching closing fence.
            if fence_match and fence_match.group(1)[0] == fence[0] and len(fence_match.group(1)) >= len(fence):
                if not line.strip().lstrip(fence[0]):
                    fence = None
            result.append(line)
            i += 1
            continue
        if fence_match:
            fence = fence_match.group(1)
            result.append(line)
            i += 1
            continue

        header = parse_row(line)
        alignments = parse_separator(lines[i + 1]) if header is not None and i + 1 < len(lines) else None
        if header is None or alignments is None:
            result.append(line)
            i += 1
            continue

        i += 2
        body: list[list[str]] = []
        while i < len(lines):
            row = parse_row(lines[i])
            if row is None:
                break
            body.append(row)
            i += 1
        result.append(_render_table(header, alignments, body))

    return "\n".join(result)
