"""
Parameterized read queries over the shopping list, product and video view tables.
All queries use proper parameterization to prevent SQL injection.
"""

import logging

from psycopg import AsyncConnection
from psycopg.rows import dict_row

from blogful.config import get_settings
from blogful.db.mappers import like_pattern, row_to_model, rows_to_models
from blogful.schemas.listing import (
    CategoryTotal,
    Product,
    ProductWithImage,
    RecentItem,
    ShoppingItem,
    ShoppingItemName,
    VideoViews,
)

logger = logging.getLogger(__name__)


def page_offset(page_number: int, page_size: int) -> int:
    """
    Row offset of a 1-indexed page.

    Raises:
        ValueError: page_number below 1 or page_size below 1
    """
    if page_number < 1:
        raise ValueError(f"page_number must be >= 1, got {page_number}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    return page_size * (page_number - 1)


def _check_days(days: int) -> int:
    # bool is an int subclass; reject it along with floats and strings
    if isinstance(days, bool) or not isinstance(days, int):
        raise TypeError(f"days must be an int, got {type(days).__name__}")
    return days


# =============================================================================
# Shopping list
# =============================================================================


async def get_all_items(conn: AsyncConnection) -> list[dict]:
    """Every shopping list row, all columns."""
    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute("SELECT * FROM shopping_list")
        return await cur.fetchall()


async def search_items_by_name(conn: AsyncConnection, search_term: str) -> list[ShoppingItem]:
    """
    Shopping list items whose name contains search_term, ignoring case.

    Args:
        conn: psycopg3 async connection
        search_term: Literal substring to look for

    Returns:
        List of ShoppingItem
    """
    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(
            "SELECT name, price, category FROM shopping_list WHERE name ILIKE %s",
            (like_pattern(search_term),),
        )
        return rows_to_models(ShoppingItem, await cur.fetchall())


async def paginate_items(
    conn: AsyncConnection,
    page_number: int,
    page_size: int | None = None,
) -> list[ShoppingItemName]:
    """
    One page of shopping list item names, ordered by name.

    Args:
        conn: psycopg3 async connection
        page_number: 1-indexed page
        page_size: Defaults to settings.items_per_page

    Returns:
        At most page_size ShoppingItemName records
    """
    limit = page_size if page_size is not None else get_settings().items_per_page
    offset = page_offset(page_number, limit)

    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(
            "SELECT name FROM shopping_list ORDER BY name LIMIT %s OFFSET %s",
            (limit, offset),
        )
        return rows_to_models(ShoppingItemName, await cur.fetchall())


async def items_added_after(conn: AsyncConnection, days_ago: int) -> list[RecentItem]:
    """
    Items added within the last days_ago days.

    The day count is bound as a parameter of make_interval(), never
    interpolated into the SQL text.
    """
    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(
            """
            SELECT name, date_added
            FROM shopping_list
            WHERE date_added > now() - make_interval(days => %s::int)
        """,
            (_check_days(days_ago),),
        )
        return rows_to_models(RecentItem, await cur.fetchall())


async def total_cost_per_category(conn: AsyncConnection) -> list[CategoryTotal]:
    """Sum of item prices per category."""
    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(
            """
            SELECT category, SUM(price) AS total
            FROM shopping_list
            GROUP BY category
            ORDER BY category
        """
        )
        return rows_to_models(CategoryTotal, await cur.fetchall())


# =============================================================================
# Products
# =============================================================================


async def get_product_by_name(conn: AsyncConnection, name: str) -> Product | None:
    """First product whose name equals name exactly, or None."""
    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(
            """
            SELECT product_id, name, price, category
            FROM amazong_products
            WHERE name = %s
            LIMIT 1
        """,
            (name,),
        )
        return row_to_model(Product, await cur.fetchone())


async def search_products_by_name(conn: AsyncConnection, search_term: str) -> list[Product]:
    """Products whose name contains search_term, ignoring case."""
    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(
            """
            SELECT product_id, name, price, category
            FROM amazong_products
            WHERE name ILIKE %s
        """,
            (like_pattern(search_term),),
        )
        return rows_to_models(Product, await cur.fetchall())


async def paginate_products(
    conn: AsyncConnection,
    page_number: int,
    page_size: int | None = None,
) -> list[Product]:
    """
    One page of products, ordered by product_id.

    Args:
        conn: psycopg3 async connection
        page_number: 1-indexed page
        page_size: Defaults to settings.products_per_page
    """
    limit = page_size if page_size is not None else get_settings().products_per_page
    offset = page_offset(page_number, limit)

    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(
            """
            SELECT product_id, name, price, category
            FROM amazong_products
            ORDER BY product_id
            LIMIT %s OFFSET %s
        """,
            (limit, offset),
        )
        return rows_to_models(Product, await cur.fetchall())


async def get_products_with_images(conn: AsyncConnection) -> list[ProductWithImage]:
    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(
            """
            SELECT product_id, name, price, category, image
            FROM amazong_products
            WHERE image IS NOT NULL
        """
        )
        return rows_to_models(ProductWithImage, await cur.fetchall())


# =============================================================================
# Video views
# =============================================================================


async def most_popular_videos_for_days(conn: AsyncConnection, days: int) -> list[VideoViews]:
    """
    View counts per (video_name, region) over the last days days.

    Results are ordered by region ascending, then views descending. Rows
    tied on both keys come back in whatever order PostgreSQL produces.

    Args:
        conn: psycopg3 async connection
        days: Window size in days, bound as a query parameter

    Returns:
        List of VideoViews
    """
    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(
            """
            SELECT video_name, region, COUNT(date_viewed) AS views
            FROM whopipe_video_views
            WHERE date_viewed > now() - make_interval(days => %s::int)
            GROUP BY video_name, region
            ORDER BY region ASC, views DESC
        """,
            (_check_days(days),),
        )
        return rows_to_models(VideoViews, await cur.fetchall())
