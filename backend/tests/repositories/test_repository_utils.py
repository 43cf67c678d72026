"""Tests for translating database integrity errors."""
import pytest
from sqlalchemy.exc import IntegrityError

from repositories.utils import unique_violation_field


def _integrity_error(message: str) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, Exception(message))


@pytest.mark.parametrize(
    ("message", "expected"),
    [
        (
            'duplicate key value violates unique constraint "ix_users_email"\n'
            "DETAIL:  Key (email)=(a@example.com) already exists.",
            "email",
        ),
        ("UNIQUE constraint failed: users.email", "email"),
        ('duplicate key value violates unique constraint "uq_x"', "Field"),
        ("FOREIGN KEY constraint failed", None),
        ('null value in column "title" violates not-null constraint', None),
    ],
)
def test__unique_violation_field(message: str, expected: str | None) -> None:
    """Unique violations name their column; other integrity errors do not match."""
    assert unique_violation_field(_integrity_error(message)) == expected
