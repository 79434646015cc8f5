from .article_service import ArticleService, to_response

__all__ = [
    "ArticleService",
    "to_response",
]
