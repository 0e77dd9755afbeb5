"""Classification of database constraint violations.

Routes report uniqueness and foreign key failures with different status
codes, so IntegrityError needs to be told apart by cause. SQLite exposes
the extended result code name, Postgres drivers expose SQLSTATE.
"""

from __future__ import annotations

from typing import Literal

from sqlalchemy.exc import IntegrityError

ConstraintKind = Literal["unique", "foreign_key"]

_SQLITE_CODES: dict[str, ConstraintKind] = {
    "SQLITE_CONSTRAINT_UNIQUE": "unique",
    "SQLITE_CONSTRAINT_PRIMARYKEY": "unique",
    "SQLITE_CONSTRAINT_FOREIGNKEY": "foreign_key",
}

_SQLSTATE_CODES: dict[str, ConstraintKind] = {
    "23505": "unique",
    "23503": "foreign_key",
}


def classify_integrity_error(error: IntegrityError) -> ConstraintKind | None:
    """Work out which kind of constraint an IntegrityError violated.

    Args:
        error: Error raised by SQLAlchemy on flush/commit.

    Returns:
        "unique", "foreign_key", or None for anything else (NOT NULL, CHECK).
    """
    orig = error.orig

    errorname = getattr(orig, "sqlite_errorname", None)
    if errorname in _SQLITE_CODES:
        return _SQLITE_CODES[errorname]

    # psycopg2 uses pgcode, psycopg 3 uses sqlstate
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate in _SQLSTATE_CODES:
        return _SQLSTATE_CODES[sqlstate]

    message = str(orig).upper()
    if "UNIQUE CONSTRAINT" in message:
        return "unique"
    if "FOREIGN KEY CONSTRAINT" in message:
        return "foreign_key"

    return None
