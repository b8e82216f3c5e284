"""
Key normalization and row access helpers shared by compare and split.

Responsibilities:
- key normalization (trim, then lowercase) per CompareOptions
- header lookup by name (first occurrence wins)
- reading cells past the end of a short row as ""
- fitting a row to a fixed column width
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .errors import KeyColumnNotFound
from .models import CompareOptions


def normalize_key(raw: str, options: CompareOptions) -> str:
    """
    Map a raw key cell to the value used for grouping.

    Trim is applied before case folding. Nothing else is touched:
    inner whitespace stays as is and lowercasing is not locale aware.
    """
    value = raw
    if options.trim:
        value = value.strip()
    if options.case_insensitive:
        value = value.lower()
    return value


def find_column(headers: Sequence[str], name: str, side: Optional[str] = None) -> int:
    try:
        return list(headers).index(name)
    except ValueError:
        raise KeyColumnNotFound(name, side) from None


def cell(row: Sequence[str], index: int) -> str:
    if index < len(row):
        return row[index]
    return ""


def fit_row(row: Sequence[str], width: int) -> List[str]:
    """Pad with "" or truncate so the row spans exactly `width` slots."""
    fitted = list(row[:width])
    if len(fitted) < width:
        fitted.extend([""] * (width - len(fitted)))
    return fitted
