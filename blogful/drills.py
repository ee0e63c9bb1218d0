"""
Console drills: run one query or article read and print the records.

Usage:
    python -m blogful.drills search-items b
    python -m blogful.drills popular-videos 30
    python -m blogful.drills article 3

Each record is printed as one JSON object per line.
"""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from psycopg import AsyncConnection
from pydantic import BaseModel

from blogful.config import get_settings
from blogful.db import queries
from blogful.db.raw import close_pool, get_conn, init_pool
from blogful.services import article_service

logger = logging.getLogger(__name__)

Drill = Callable[[AsyncConnection, argparse.Namespace], Awaitable[Any]]

# command -> (help, positional argument name and type or None, drill)
COMMANDS: dict[str, tuple[str, tuple[str, type] | None, Drill]] = {
    "items": ("all shopping list rows", None, lambda c, a: queries.get_all_items(c)),
    "search-items": (
        "shopping list items whose name contains TERM",
        ("term", str),
        lambda c, a: queries.search_items_by_name(c, a.term),
    ),
    "paginate-items": (
        "one page of shopping list names",
        ("page", int),
        lambda c, a: queries.paginate_items(c, a.page),
    ),
    "items-added-after": (
        "items added within the last DAYS days",
        ("days", int),
        lambda c, a: queries.items_added_after(c, a.days),
    ),
    "category-totals": (
        "total price per category",
        None,
        lambda c, a: queries.total_cost_per_category(c),
    ),
    "product": (
        "first product named NAME",
        ("name", str),
        lambda c, a: queries.get_product_by_name(c, a.name),
    ),
    "search-products": (
        "products whose name contains TERM",
        ("term", str),
        lambda c, a: queries.search_products_by_name(c, a.term),
    ),
    "paginate-products": (
        "one page of products",
        ("page", int),
        lambda c, a: queries.paginate_products(c, a.page),
    ),
    "products-with-images": (
        "products that have an image",
        None,
        lambda c, a: queries.get_products_with_images(c),
    ),
    "popular-videos": (
        "views per video and region over the last DAYS days",
        ("days", int),
        lambda c, a: queries.most_popular_videos_for_days(c, a.days),
    ),
    "articles": ("all articles", None, lambda c, a: article_service.get_all_articles(c)),
    "article": (
        "one article by id",
        ("id", int),
        lambda c, a: article_service.get_by_id(c, a.id),
    ),
}


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("psycopg.pool").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="blogful.drills", description=__doc__.splitlines()[1])
    parser.add_argument("--database-url", help="overrides DB_URL")
    subparsers = parser.add_subparsers(dest="command", required=True)
    for name, (help_text, argument, _) in COMMANDS.items():
        sub = subparsers.add_parser(name, help=help_text)
        if argument:
            arg_name, arg_type = argument
            sub.add_argument(arg_name, type=arg_type)
    return parser


def to_jsonable(record: Any) -> Any:
    if isinstance(record, BaseModel):
        return record.model_dump(mode="json")
    return record


def format_result(result: Any) -> list[str]:
    """Render a drill result as JSON lines; None becomes an empty list."""
    if result is None:
        return []
    records = result if isinstance(result, list) else [result]
    return [json.dumps(to_jsonable(record), default=str) for record in records]


async def run(args: argparse.Namespace) -> list[str]:
    _, _, drill = COMMANDS[args.command]
    await init_pool(args.database_url)
    try:
        async with get_conn() as conn:
            result = await drill(conn, args)
    finally:
        await close_pool()
    return format_result(result)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(get_settings().log_level)

    lines = asyncio.run(run(args))
    if not lines:
        logger.info(f"{args.command}: no rows")
    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
