"""Helpers shared by the repository modules."""
import re

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from services.exceptions import AlreadyExistsError

# PostgreSQL: 'DETAIL:  Key (email)=(a@example.com) already exists.'
_PG_UNIQUE_DETAIL = re.compile(r"Key \((?P<field>[^)]+)\)=\(.*\) already exists")
# SQLite: 'UNIQUE constraint failed: users.email'
_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: \w+\.(?P<field>\w+)")


def unique_violation_field(error: IntegrityError) -> str | None:
    """
    Return the column named by a unique-constraint violation.

    Returns "Field" when the error is a unique violation whose column cannot be
    parsed, and None when the error is some other integrity failure.
    """
    message = str(error.orig)
    for pattern in (_PG_UNIQUE_DETAIL, _SQLITE_UNIQUE):
        match = pattern.search(message)
        if match:
            return match.group("field")
    if "duplicate key" in message or "UNIQUE constraint" in message:
        return "Field"
    return None


async def flush(db: AsyncSession) -> None:
    """
    Flush pending changes, translating unique violations into AlreadyExistsError.

    Other integrity errors propagate unchanged.
    """
    try:
        await db.flush()
    except IntegrityError as e:
        field = unique_violation_field(e)
        if field is None:
            raise
        raise AlreadyExistsError(field) from e
