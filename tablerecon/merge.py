"""
Single-table view over a CompareOutput.

All four outcome tables are stacked, the L__/R__ pair of each key column is
collapsed into one column, and optional numeric delta columns are appended.
"""

from __future__ import annotations

from typing import Dict, List, NamedTuple, Sequence

from .models import CompareOutput, Table
from .normalize import cell
from .rules import LEFT_PREFIX, RIGHT_PREFIX


class DeltaColumn(NamedTuple):
    label: str
    left: str
    right: str


def _as_number(value: str) -> float:
    try:
        return float(value)
    except ValueError:
        return 0.0


def format_number(value: float) -> str:
    # past 1e15 floats stop holding every integer; keep exponent form there
    if value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


def merged_view(
    output: CompareOutput,
    key_columns: Sequence[str],
    deltas: Sequence[DeltaColumn] = (),
) -> Table:
    source_headers = output.result.headers
    rows: List[List[str]] = [
        *output.result.rows,
        *output.left_only.rows,
        *output.right_only.rows,
        *output.duplicates.rows,
    ]

    keys = set(key_columns)
    headers: List[str] = []
    collapsed = set()
    for header in source_headers:
        for prefix in (LEFT_PREFIX, RIGHT_PREFIX):
            if header.startswith(prefix) and header[len(prefix):] in keys:
                name = header[len(prefix):]
                if name not in collapsed:
                    collapsed.add(name)
                    headers.append(name)
                break
        else:
            headers.append(header)

    merged_rows: List[List[str]] = []
    for row in rows:
        # first occurrence of a header wins
        values: Dict[str, str] = {}
        for idx, header in enumerate(source_headers):
            values.setdefault(header, cell(row, idx))

        merged: List[str] = []
        for header in headers:
            if header in collapsed:
                merged.append(
                    values.get(f"{LEFT_PREFIX}{header}")
                    or values.get(f"{RIGHT_PREFIX}{header}")
                    or ""
                )
            else:
                merged.append(values.get(header, ""))

        for delta in deltas:
            left_value = _as_number(values.get(f"{LEFT_PREFIX}{delta.left}", ""))
            right_value = _as_number(values.get(f"{RIGHT_PREFIX}{delta.right}", ""))
            merged.append(format_number(left_value - right_value))

        merged_rows.append(merged)

    headers.extend(delta.label for delta in deltas)
    return Table(headers=headers, rows=merged_rows)
