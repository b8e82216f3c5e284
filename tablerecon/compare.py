"""
Left/right reconciliation on a single key column.

Every row is classified as a match, left-only, right-only or a duplicate-keyed
row. Output rows keep first-seen input order within each table; duplicate
groups are emitted for the left side first, then for the right side.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Set, Tuple

from .models import CompareInput, CompareOptions, CompareOutput, Table
from .normalize import cell, find_column, fit_row, normalize_key
from .rules import (
    DIFF_SEPARATOR,
    DUP_FLAG_CLEAR,
    DUP_FLAG_SET,
    LEFT_PREFIX,
    RIGHT_PREFIX,
    STATUS_BOTH,
    STATUS_COLUMNS,
    STATUS_LEFT_ONLY,
    STATUS_RIGHT_ONLY,
)

logger = logging.getLogger(__name__)


def group_rows(rows: List[List[str]], key_index: int, options: CompareOptions) -> Dict[str, List[int]]:
    """
    Map each normalized key to the indices of the rows carrying it.

    A row too short to have a cell at `key_index` is left out entirely.
    """
    groups: Dict[str, List[int]] = {}
    for idx, row in enumerate(rows):
        if key_index >= len(row):
            continue
        groups.setdefault(normalize_key(row[key_index], options), []).append(idx)
    return groups


def result_headers(left_headers: List[str], right_headers: List[str]) -> List[str]:
    headers = [f"{LEFT_PREFIX}{h}" for h in left_headers]
    headers.extend(f"{RIGHT_PREFIX}{h}" for h in right_headers)
    headers.extend(STATUS_COLUMNS)
    return headers


def diff_columns(
    left_headers: List[str],
    right_headers: List[str],
    left_row: List[str],
    right_row: List[str],
) -> List[str]:
    """
    Names of left headers whose value differs from the same-named right column.

    Headers missing on the right are never reported. With repeated header
    names only the first occurrence on each side is compared.
    """
    right_positions: Dict[str, int] = {}
    for idx, name in enumerate(right_headers):
        right_positions.setdefault(name, idx)

    diffs: List[str] = []
    seen: Set[str] = set()
    for idx, name in enumerate(left_headers):
        if name in seen:
            continue
        seen.add(name)
        right_idx = right_positions.get(name)
        if right_idx is None:
            continue
        if cell(left_row, idx) != cell(right_row, right_idx):
            diffs.append(name)
    return diffs


def compare(request: CompareInput) -> CompareOutput:
    left_width = len(request.left_headers)
    right_width = len(request.right_headers)

    left_key_idx = find_column(request.left_headers, request.key, side="left")
    right_key_idx = find_column(request.right_headers, request.key, side="right")

    left_map = group_rows(request.left_rows, left_key_idx, request.options)
    right_map = group_rows(request.right_rows, right_key_idx, request.options)

    def left_slots(idx: int) -> List[str]:
        return fit_row(request.left_rows[idx], left_width)

    def right_slots(idx: int) -> List[str]:
        return fit_row(request.right_rows[idx], right_width)

    empty_left = [""] * left_width
    empty_right = [""] * right_width

    result_rows: List[List[str]] = []
    left_only_rows: List[List[str]] = []
    right_only_rows: List[List[str]] = []
    duplicate_rows: List[List[str]] = []

    processed: Set[str] = set()

    # --- Duplicates: a key repeated on the left wins over the right side ---
    for key, indices in left_map.items():
        if len(indices) > 1:
            for idx in indices:
                duplicate_rows.append(
                    left_slots(idx) + empty_right + [STATUS_LEFT_ONLY, "", DUP_FLAG_SET]
                )
            processed.add(key)

    for key, indices in right_map.items():
        if len(indices) > 1 and key not in processed:
            for idx in indices:
                duplicate_rows.append(
                    empty_left + right_slots(idx) + [STATUS_RIGHT_ONLY, "", DUP_FLAG_SET]
                )
            processed.add(key)

    # --- Matches and left-only ---
    dropped: List[Tuple[str, str]] = []

    for key, left_indices in left_map.items():
        if key in processed:
            if len(left_indices) == 1:
                dropped.append(("left", key))
            continue

        right_indices = right_map.get(key)
        if right_indices is None:
            for idx in left_indices:
                left_only_rows.append(
                    left_slots(idx) + empty_right + [STATUS_LEFT_ONLY, "", DUP_FLAG_CLEAR]
                )
            continue

        # both groups are singletons here: anything larger was consumed above
        left_row = request.left_rows[left_indices[0]]
        right_row = request.right_rows[right_indices[0]]
        diffs = diff_columns(request.left_headers, request.right_headers, left_row, right_row)
        result_rows.append(
            left_slots(left_indices[0])
            + right_slots(right_indices[0])
            + [STATUS_BOTH, DIFF_SEPARATOR.join(diffs), DUP_FLAG_CLEAR]
        )

    # --- Right-only ---
    for key, right_indices in right_map.items():
        if key in processed:
            if len(right_indices) == 1:
                dropped.append(("right", key))
            continue
        if key in left_map:
            continue
        for idx in right_indices:
            right_only_rows.append(
                empty_left + right_slots(idx) + [STATUS_RIGHT_ONLY, "", DUP_FLAG_CLEAR]
            )

    if dropped:
        logger.warning(
            "Dropped %d single-row key group(s) whose counterpart side is duplicated: %s",
            len(dropped),
            ", ".join(f"{side}:{key!r}" for side, key in dropped),
        )

    logger.info(
        "compare key=%r matched=%d left_only=%d right_only=%d duplicates=%d",
        request.key,
        len(result_rows),
        len(left_only_rows),
        len(right_only_rows),
        len(duplicate_rows),
    )

    headers = result_headers(request.left_headers, request.right_headers)

    return CompareOutput(
        result=Table(headers=list(headers), rows=result_rows),
        left_only=Table(headers=list(headers), rows=left_only_rows),
        right_only=Table(headers=list(headers), rows=right_only_rows),
        duplicates=Table(headers=list(headers), rows=duplicate_rows),
        log=[
            ("left_rows", str(len(request.left_rows))),
            ("right_rows", str(len(request.right_rows))),
            ("key_column", request.key),
            ("trim", _flag(request.options.trim)),
            ("case_insensitive", _flag(request.options.case_insensitive)),
        ],
    )


def _flag(value: bool) -> str:
    return "true" if value else "false"
