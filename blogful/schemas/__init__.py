from blogful.schemas.article import Article, ArticleCreate, ArticleUpdate
from blogful.schemas.listing import (
    CategoryTotal,
    Product,
    ProductWithImage,
    RecentItem,
    ShoppingItem,
    ShoppingItemName,
    VideoViews,
)

__all__ = [
    "Article",
    "ArticleCreate",
    "ArticleUpdate",
    "ShoppingItem",
    "ShoppingItemName",
    "RecentItem",
    "CategoryTotal",
    "Product",
    "ProductWithImage",
    "VideoViews",
]
