"""
Multi-column keys on top of the single-key operations.

The key cells are joined into one extra column, the single-key operation
runs on that column, and the helper column is removed from what comes back.
"""

from __future__ import annotations

import math
from functools import cmp_to_key
from typing import List, Optional, Sequence, Tuple

from .compare import compare
from .models import CompareInput, CompareOptions, CompareOutput, SplitInput, SplitOutput, SplitPart, Table
from .normalize import cell, find_column, normalize_key
from .rules import COMPOSITE_KEY_SEPARATOR, LEFT_PREFIX, RIGHT_PREFIX
from .split import split

# split always trims its key and never folds case
SPLIT_KEY_OPTIONS = CompareOptions(trim=True, case_insensitive=False)


def combine_key_values(row: Sequence[str], key_indices: Sequence[int], options: CompareOptions) -> str:
    # normalization applies to the joined string, not to each part
    combined = COMPOSITE_KEY_SEPARATOR.join(cell(row, idx) for idx in key_indices)
    return normalize_key(combined, options)


def composite_column_name(keys: Sequence[str], *header_lists: Sequence[str]) -> str:
    """
    Name for the helper column: the joined key names, suffixed with "#N"
    until no given header list already holds it.
    """
    taken = set()
    for headers in header_lists:
        taken.update(headers)
    base = COMPOSITE_KEY_SEPARATOR.join(keys)
    name = base
    counter = 1
    while name in taken:
        name = f"{base}#{counter}"
        counter += 1
    return name


def with_composite_key(
    table: Table,
    keys: Sequence[str],
    options: CompareOptions,
    side: Optional[str] = None,
    name: Optional[str] = None,
) -> Tuple[Table, str]:
    indices = [find_column(table.headers, key, side=side) for key in keys]
    if name is None:
        name = composite_column_name(keys, table.headers)
    rows = [list(row) + [combine_key_values(row, indices, options)] for row in table.rows]
    return Table(headers=list(table.headers) + [name], rows=rows), name


def drop_column(table: Table, name: str) -> Table:
    if name not in table.headers:
        return table
    idx = table.headers.index(name)
    return Table(
        headers=table.headers[:idx] + table.headers[idx + 1:],
        rows=[row[:idx] + row[idx + 1:] for row in table.rows],
    )


def _parse_number(value: str) -> Optional[float]:
    # nan, inf and digit separators order as text
    if "_" in value:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _compare_key_values(a: str, b: str) -> int:
    a_num = _parse_number(a)
    b_num = _parse_number(b)
    if a_num is not None and b_num is not None:
        return (a_num > b_num) - (a_num < b_num)
    return (a > b) - (a < b)


def sort_by_key_columns(table: Table, keys: Sequence[str], options: CompareOptions) -> Table:
    """
    Stable sort of rows by the given key columns.

    Unknown key names are ignored. A pair of values that both parse as numbers
    is ordered numerically; anything else falls back to string order.
    """
    indices = [table.headers.index(key) for key in keys if key in table.headers]
    if not indices:
        return table

    def compare_rows(a: List[str], b: List[str]) -> int:
        for idx in indices:
            result = _compare_key_values(
                normalize_key(cell(a, idx), options),
                normalize_key(cell(b, idx), options),
            )
            if result:
                return result
        return 0

    return Table(headers=list(table.headers), rows=sorted(table.rows, key=cmp_to_key(compare_rows)))


def compare_on_keys(
    left: Table,
    right: Table,
    keys: Sequence[str],
    options: CompareOptions,
    sort_by_keys: bool = False,
) -> CompareOutput:
    if sort_by_keys:
        left = sort_by_key_columns(left, keys, options)
        right = sort_by_key_columns(right, keys, options)

    if len(keys) == 1:
        return compare(CompareInput(
            left_headers=left.headers,
            left_rows=left.rows,
            right_headers=right.headers,
            right_rows=right.rows,
            key=keys[0],
            options=options,
        ))

    name = composite_column_name(keys, left.headers, right.headers)
    left, _ = with_composite_key(left, keys, options, side="left", name=name)
    right, _ = with_composite_key(right, keys, options, side="right", name=name)

    output = compare(CompareInput(
        left_headers=left.headers,
        left_rows=left.rows,
        right_headers=right.headers,
        right_rows=right.rows,
        key=name,
        options=options,
    ))

    def strip(table: Table) -> Table:
        return drop_column(drop_column(table, f"{LEFT_PREFIX}{name}"), f"{RIGHT_PREFIX}{name}")

    return CompareOutput(
        result=strip(output.result),
        left_only=strip(output.left_only),
        right_only=strip(output.right_only),
        duplicates=strip(output.duplicates),
        log=[
            (label, COMPOSITE_KEY_SEPARATOR.join(keys) if label == "key_column" else value)
            for label, value in output.log
        ],
    )


def split_on_keys(table: Table, keys: Sequence[str]) -> SplitOutput:
    if len(keys) == 1:
        return split(SplitInput(headers=table.headers, rows=table.rows, key=keys[0]))

    table, name = with_composite_key(table, keys, SPLIT_KEY_OPTIONS)
    output = split(SplitInput(headers=table.headers, rows=table.rows, key=name))
    return SplitOutput(parts=[
        SplitPart(key_value=part.key_value, table=drop_column(part.table, name))
        for part in output.parts
    ])
