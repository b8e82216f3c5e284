from __future__ import annotations

from typing import Optional


class ReconcileError(Exception):
    """Base class for request failures. Both kinds are terminal for the call."""

    kind = "reconcile_error"


class MalformedInput(ReconcileError):
    kind = "malformed_input"


class KeyColumnNotFound(ReconcileError):
    kind = "key_column_not_found"

    def __init__(self, column: str, side: Optional[str] = None):
        self.column = column
        self.side = side
        where = f" in {side} headers" if side else " in headers"
        super().__init__(f"Key column {column!r} not found{where}")
