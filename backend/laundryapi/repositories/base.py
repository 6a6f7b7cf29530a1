"""Shared result type for write statements."""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import CursorResult


@dataclass(frozen=True)
class WriteResult:
    """
    Outcome of an INSERT, UPDATE or DELETE.

    Attributes:
        last_insert_id: Primary key of the inserted row (INSERT only)
        rows_affected:  Rows matched by the statement. On SQLite an UPDATE
                        that rewrites identical values still counts the row.
    """

    last_insert_id: Optional[int]
    rows_affected: int

    @classmethod
    def from_insert(cls, result: CursorResult) -> "WriteResult":
        pk = result.inserted_primary_key
        return cls(last_insert_id=pk[0] if pk else None, rows_affected=result.rowcount)

    @classmethod
    def from_change(cls, result: CursorResult) -> "WriteResult":
        return cls(last_insert_id=None, rows_affected=result.rowcount)
