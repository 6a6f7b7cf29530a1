"""
Laundry API Backend: Data Access Layer
========================================

What:  One module per entity, each function a single parameter-bound
       statement against the store.
Why:   Keeps SQL in one place and out of the business rules.

Contract shared by every module:
    - Reads return raw rows (RowMapping) or None; lists return a list.
    - Writes return a WriteResult(last_insert_id, rows_affected).
    - Errors raised by the store (IntegrityError, OperationalError, ...)
      propagate unmodified. Services decide what they mean.
    - Statements are SQLAlchemy Core constructs; values are always bound
      parameters, never interpolated.
"""

from laundryapi.repositories.base import WriteResult

__all__ = ["WriteResult"]
