from __future__ import annotations

import logging
from typing import Dict, List

from .models import SplitInput, SplitOutput, SplitPart, Table
from .normalize import cell, find_column
from .rules import EMPTY_KEY_VALUE

logger = logging.getLogger(__name__)


def split_key_value(raw: str) -> str:
    value = raw.strip()
    return value if value else EMPTY_KEY_VALUE


def split(request: SplitInput) -> SplitOutput:
    """
    Partition rows into one table per distinct (trimmed) key value.

    Rows are kept untouched; only the grouping value is trimmed. Parts are
    ordered by plain code point comparison of their key value, so "EMPTY"
    sorts ahead of lowercase values.
    """
    key_idx = find_column(request.headers, request.key)

    groups: Dict[str, List[List[str]]] = {}
    for row in request.rows:
        groups.setdefault(split_key_value(cell(row, key_idx)), []).append(row)

    parts = [
        SplitPart(key_value=value, table=Table(headers=list(request.headers), rows=rows))
        for value, rows in sorted(groups.items(), key=lambda item: item[0])
    ]

    logger.info("split key=%r rows=%d parts=%d", request.key, len(request.rows), len(parts))
    return SplitOutput(parts=parts)
