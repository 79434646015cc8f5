from .article import Article, Audit, utc_now
from .paging import PagingResult

__all__ = [
    "Article",
    "Audit",
    "PagingResult",
    "utc_now",
]
