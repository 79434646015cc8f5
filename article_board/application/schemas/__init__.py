from .article import ArticleCreate, ArticlePage, ArticleResponse, ArticleUpdate

__all__ = [
    "ArticleCreate",
    "ArticlePage",
    "ArticleResponse",
    "ArticleUpdate",
]
