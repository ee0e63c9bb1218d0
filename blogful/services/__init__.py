from blogful.services.article_service import (
    ArticlesService,
    delete_article,
    get_all_articles,
    get_by_id,
    insert_article,
    update_article,
)

__all__ = [
    "ArticlesService",
    "get_all_articles",
    "insert_article",
    "get_by_id",
    "delete_article",
    "update_article",
]
