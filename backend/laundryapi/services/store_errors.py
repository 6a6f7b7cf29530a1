"""
Laundry API Backend: Store Error Classification
=================================================

What:  Turns raw SQLAlchemy/driver errors into facts services can act on.
Why:   The repositories pass store errors through unchanged; deciding that
       an IntegrityError means "username taken" or "customer missing" is a
       business decision made in the services.
How:   SQLite reports constraint failures as sqlite3.IntegrityError. Since
       Python 3.11 the exception carries the extended result code in
       `sqlite_errorcode`; older drivers only expose the message text, so
       the message is checked as a fallback.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from laundryapi.exceptions import StoreError

logger = logging.getLogger(__name__)

# SQLite extended result codes
SQLITE_CONSTRAINT_FOREIGNKEY = 787
SQLITE_CONSTRAINT_PRIMARYKEY = 1555
SQLITE_CONSTRAINT_UNIQUE = 2067


def _driver_error(exc: BaseException) -> BaseException:
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return exc.orig
    return exc


def is_unique_violation(exc: BaseException) -> bool:
    orig = _driver_error(exc)
    code = getattr(orig, "sqlite_errorcode", None)
    if code in (SQLITE_CONSTRAINT_UNIQUE, SQLITE_CONSTRAINT_PRIMARYKEY):
        return True
    return "UNIQUE constraint failed" in str(orig)


def is_foreign_key_violation(exc: BaseException) -> bool:
    orig = _driver_error(exc)
    if getattr(orig, "sqlite_errorcode", None) == SQLITE_CONSTRAINT_FOREIGNKEY:
        return True
    return "FOREIGN KEY constraint failed" in str(orig)


def as_store_error(
    exc: SQLAlchemyError,
    operation: str,
    context: Optional[Dict[str, Any]] = None,
) -> StoreError:
    """
    Wrap an unclassified store failure.

    The client receives the driver's message in the 500 body;
    the operation name and context go to the server log only.
    """
    message = str(_driver_error(exc))
    ctx = dict(context or {})
    ctx["operation"] = operation
    ctx["error_type"] = type(exc).__name__
    logger.error("Store error during %s: %s", operation, message, exc_info=True)
    return StoreError(message=message, context=ctx)


async def commit_or_raise(
    db: AsyncSession,
    operation: str,
    context: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Commit the request's writes before the response is built.

    A failed commit (e.g. "database is locked") becomes a StoreError, so
    the caller gets the 500 instead of a success body for unsaved data.
    """
    try:
        await db.commit()
    except SQLAlchemyError as e:
        raise as_store_error(e, operation, context) from e
