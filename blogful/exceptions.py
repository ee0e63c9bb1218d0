"""
Error types raised by the data-access layer.

Only storage rejections are wrapped. Connection failures from psycopg
propagate unchanged, and a missing row is reported as None or a zero
row count rather than an exception.
"""

import psycopg


class BlogfulError(Exception):
    """Base class for blogful errors."""


class ConstraintViolation(BlogfulError):
    """
    A write rejected by a schema rule (NOT NULL, CHECK, type mismatch).

    The message is the database's own diagnostic text, e.g.
    'null value in column "title" of relation "blogful_articles"
    violates not-null constraint'.
    """

    def __init__(
        self,
        message: str,
        *,
        sqlstate: str | None = None,
        constraint_name: str | None = None,
        column_name: str | None = None,
        table_name: str | None = None,
    ):
        super().__init__(message)
        self.sqlstate = sqlstate
        self.constraint_name = constraint_name
        self.column_name = column_name
        self.table_name = table_name

    @classmethod
    def from_psycopg(cls, exc: psycopg.Error) -> "ConstraintViolation":
        """Build from a psycopg IntegrityError or DataError, keeping its diagnostics."""
        diag = exc.diag
        return cls(
            str(exc),
            sqlstate=exc.sqlstate,
            constraint_name=diag.constraint_name,
            column_name=diag.column_name,
            table_name=diag.table_name,
        )
