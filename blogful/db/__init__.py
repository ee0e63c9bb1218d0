"""Database utilities using psycopg3 for parameterized queries."""

from blogful.db.queries import (
    get_all_items,
    get_product_by_name,
    get_products_with_images,
    items_added_after,
    most_popular_videos_for_days,
    paginate_items,
    paginate_products,
    search_items_by_name,
    search_products_by_name,
    total_cost_per_category,
)
from blogful.db.raw import close_pool, get_conn, init_pool

__all__ = [
    "init_pool",
    "close_pool",
    "get_conn",
    "get_all_items",
    "search_items_by_name",
    "paginate_items",
    "items_added_after",
    "total_cost_per_category",
    "get_product_by_name",
    "search_products_by_name",
    "paginate_products",
    "get_products_with_images",
    "most_popular_videos_for_days",
]
