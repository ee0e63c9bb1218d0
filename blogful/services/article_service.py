"""
CRUD operations for blogful_articles.

Every function takes a caller-owned psycopg AsyncConnection and issues a
single statement on it. Missing rows come back as None or a zero row
count. Integrity, data and datatype-mismatch errors raised by PostgreSQL
are re-raised as ConstraintViolation with the server's message intact;
anything else, connection failures included, propagates untouched.

Writes end with conn.commit(), and a rejected write with conn.rollback().
Both act on the whole connection-level transaction: any uncommitted work
the caller left on the connection is committed or discarded with it, and
calling a write inside `async with conn.transaction()` raises
psycopg.ProgrammingError. Give these functions a connection with no
pending work of its own.
"""

import logging
from collections.abc import Mapping
from typing import Any

import psycopg
from psycopg import AsyncConnection, sql
from psycopg.rows import dict_row
from pydantic import BaseModel

from blogful.core.constants import ARTICLE_COLUMNS, ARTICLES_TABLE
from blogful.db.mappers import article_write_fields, row_to_model, rows_to_models
from blogful.exceptions import ConstraintViolation
from blogful.schemas.article import Article

logger = logging.getLogger(__name__)

_TABLE = sql.Identifier(ARTICLES_TABLE)
_COLUMNS = sql.SQL(", ").join(map(sql.Identifier, ARTICLE_COLUMNS))

ArticleFields = Mapping[str, Any] | BaseModel

# Statement errors meaning "the database refused these values"
_REJECTIONS = (
    psycopg.errors.IntegrityError,
    psycopg.errors.DataError,
    psycopg.errors.DatatypeMismatch,
)


async def _rejected(conn: AsyncConnection, exc: psycopg.Error) -> ConstraintViolation:
    # The failed statement aborted the transaction; clear it so the
    # connection can keep serving the caller.
    await conn.rollback()
    logger.warning(f"{ARTICLES_TABLE} write rejected ({exc.sqlstate}): {exc}")
    return ConstraintViolation.from_psycopg(exc)


async def get_all_articles(conn: AsyncConnection) -> list[Article]:
    """
    Every article, ordered by id.

    Returns:
        List of Article, empty when the table is empty
    """
    query = sql.SQL("SELECT {columns} FROM {table} ORDER BY id").format(
        columns=_COLUMNS, table=_TABLE
    )
    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(query)
        return rows_to_models(Article, await cur.fetchall())


async def insert_article(conn: AsyncConnection, fields: ArticleFields) -> Article:
    """
    Insert an article and return it as stored, including its new id.

    Only the fields supplied are sent, so a missing title reaches
    PostgreSQL as NULL and is rejected there.

    Args:
        conn: psycopg3 async connection
        fields: Mapping or ArticleCreate with title, date_published and optional content

    Returns:
        The persisted Article

    Raises:
        ConstraintViolation: a NOT NULL or type rule rejected the row
        ValueError: fields contains an unknown column
    """
    data = article_write_fields(fields)

    if data:
        query = sql.SQL("INSERT INTO {table} ({fields}) VALUES ({values}) RETURNING {columns}").format(
            table=_TABLE,
            fields=sql.SQL(", ").join(map(sql.Identifier, data)),
            values=sql.SQL(", ").join(sql.Placeholder() * len(data)),
            columns=_COLUMNS,
        )
    else:
        query = sql.SQL("INSERT INTO {table} DEFAULT VALUES RETURNING {columns}").format(
            table=_TABLE, columns=_COLUMNS
        )

    async with conn.cursor(row_factory=dict_row) as cur:
        try:
            await cur.execute(query, tuple(data.values()))
            row = await cur.fetchone()
        except _REJECTIONS as e:
            raise await _rejected(conn, e) from e
        await conn.commit()

    article = row_to_model(Article, row)
    logger.info(f"Inserted article {article.id}")
    return article


async def get_by_id(conn: AsyncConnection, article_id: int) -> Article | None:
    """
    Look up one article.

    Returns:
        The Article, or None when no row has article_id
    """
    query = sql.SQL("SELECT {columns} FROM {table} WHERE id = %s").format(
        columns=_COLUMNS, table=_TABLE
    )
    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(query, (article_id,))
        return row_to_model(Article, await cur.fetchone())


async def delete_article(conn: AsyncConnection, article_id: int) -> int:
    """
    Hard-delete one article.

    Returns:
        Number of rows deleted (0 when article_id does not exist)
    """
    query = sql.SQL("DELETE FROM {table} WHERE id = %s").format(table=_TABLE)
    async with conn.cursor() as cur:
        await cur.execute(query, (article_id,))
        await conn.commit()
        deleted = cur.rowcount

    logger.info(f"Deleted {deleted} article(s) with id {article_id}")
    return deleted


async def update_article(conn: AsyncConnection, article_id: int, fields: ArticleFields) -> int:
    """
    Overwrite the supplied fields of one article.

    Columns absent from fields keep their stored values. An id inside
    fields is ignored; ids never change.

    Args:
        conn: psycopg3 async connection
        article_id: Row to update
        fields: Mapping, ArticleUpdate or Article

    Returns:
        Number of rows updated (0 when article_id does not exist)

    Raises:
        ConstraintViolation: the new values break a column rule
        ValueError: nothing to update, or an unknown column
    """
    data = article_write_fields(fields)
    if not data:
        raise ValueError("Empty update: no writable article fields supplied")

    query = sql.SQL("UPDATE {table} SET {assignments} WHERE id = %s").format(
        table=_TABLE,
        assignments=sql.SQL(", ").join(
            sql.SQL("{} = %s").format(sql.Identifier(column)) for column in data
        ),
    )

    async with conn.cursor() as cur:
        try:
            await cur.execute(query, (*data.values(), article_id))
        except _REJECTIONS as e:
            raise await _rejected(conn, e) from e
        await conn.commit()
        updated = cur.rowcount

    logger.info(f"Updated {updated} article(s) with id {article_id}")
    return updated


class ArticlesService:
    """Namespace for the article operations: ArticlesService.get_by_id(db, 3)."""

    get_all_articles = staticmethod(get_all_articles)
    insert_article = staticmethod(insert_article)
    get_by_id = staticmethod(get_by_id)
    delete_article = staticmethod(delete_article)
    update_article = staticmethod(update_article)
