"""Formatting utilities for CLI output.

Plain-text tables for humans, a versioned JSON envelope for tools.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

# Bump on breaking changes to the JSON payloads
SCHEMA_VERSION = 1

MAX_LINES = 100


def json_envelope(command: str, data: Any) -> dict[str, Any]:
    """Wrap a command's payload with its name, schema version and timestamp."""
    return {
        "schema_version": SCHEMA_VERSION,
        "command": command,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "data": data,
    }


def print_json(command: str, data: Any, output: str | None = None) -> None:
    """Emit the envelope on stdout, or write it to ``output`` and say so."""
    text = json.dumps(json_envelope(command, data), indent=2, default=str)
    if not output:
        print(text)
        return

    Path(output).write_text(text, encoding="utf-8")
    print(f"Wrote {command} output to {output} ({len(text.encode()) / 1024:.1f}KB)")


def print_table(headers: list[str], rows: list[list[str]], indent: int = 2) -> list[str]:
    """Lay out rows under ``headers`` with padded columns.

    Purely numeric cells are right-aligned. Returns the lines without
    printing them.
    """
    if not rows:
        return []

    columns = len(headers)
    widths = [max([len(headers[i])] + [len(row[i]) for row in rows if i < len(row)]) for i in range(columns)]
    prefix = " " * indent

    def fmt(cells: list[str], numeric_right: bool) -> str:
        padded = []
        for i, cell in enumerate(cells[:columns]):
            if numeric_right and cell.isdigit():
                padded.append(cell.rjust(widths[i]))
            else:
                padded.append(cell.ljust(widths[i]))
        return prefix + "  ".join(padded)

    lines = [fmt(headers, numeric_right=False), prefix + "  ".join("─" * w for w in widths)]
    lines.extend(fmt(row, numeric_right=True) for row in rows)
    return lines


def print_lines(lines: list[str], max_lines: int = MAX_LINES) -> None:
    """Print up to ``max_lines`` lines, noting how many were cut."""
    for line in lines[:max_lines]:
        print(line)
    hidden = len(lines) - max_lines
    if hidden > 0:
        print(f"\n  # ... {hidden} more lines")
