"""Row <-> record conversion for the query and service layers."""

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel

from blogful.core.constants import ARTICLE_WRITABLE_COLUMNS

ModelT = TypeVar("ModelT", bound=BaseModel)


def row_to_model(model: type[ModelT], row: Mapping[str, Any] | None) -> ModelT | None:
    """Validate a dict row into `model`, passing None through."""
    if row is None:
        return None
    return model.model_validate(dict(row))


def rows_to_models(model: type[ModelT], rows: Iterable[Mapping[str, Any]]) -> list[ModelT]:
    return [model.model_validate(dict(row)) for row in rows]


def article_write_fields(fields: Mapping[str, Any] | BaseModel) -> dict[str, Any]:
    """
    Reduce an insert/update payload to the columns a caller may write.

    Pydantic models contribute only explicitly set fields. The id column is
    dropped because it belongs to the database. Unknown keys raise ValueError
    so that no caller-supplied name reaches the SQL text unchecked.

    Args:
        fields: Mapping or ArticleCreate/ArticleUpdate/Article instance

    Returns:
        Dict of column name -> value, in ARTICLE_WRITABLE_COLUMNS order
    """
    if isinstance(fields, BaseModel):
        data = fields.model_dump(exclude_unset=True)
    else:
        data = dict(fields)

    data.pop("id", None)

    unknown = sorted(set(data) - set(ARTICLE_WRITABLE_COLUMNS))
    if unknown:
        raise ValueError(f"Unknown article field(s): {', '.join(unknown)}")

    return {column: data[column] for column in ARTICLE_WRITABLE_COLUMNS if column in data}


def like_pattern(term: str) -> str:
    """
    Build an ILIKE pattern matching `term` as a literal substring.

    Backslash, % and _ are escaped (backslash is PostgreSQL's default LIKE
    escape character).
    """
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
