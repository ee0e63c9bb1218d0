"""
Application-wide constants.

Centralizes table and column names shared by the query and service layers.
"""

# =============================================================================
# Tables
# =============================================================================

ARTICLES_TABLE = "blogful_articles"

# =============================================================================
# Articles
# =============================================================================

# Column order used for every article read and RETURNING clause
ARTICLE_COLUMNS = ("id", "title", "content", "date_published")

# Columns a caller may write; id is assigned by the database
ARTICLE_WRITABLE_COLUMNS = ("title", "content", "date_published")

# =============================================================================
# Pagination
# =============================================================================

DEFAULT_ITEMS_PER_PAGE = 6
DEFAULT_PRODUCTS_PER_PAGE = 10
