"""Application service (use case) for Article operations."""

from article_board.application.interfaces import ArticleRepository
from article_board.application.schemas import (
    ArticleCreate,
    ArticlePage,
    ArticleResponse,
    ArticleUpdate,
)
from article_board.domain.entities import Article, Audit, utc_now
from article_board.domain.exceptions import EntityNotFoundError


def to_response(article: Article) -> ArticleResponse:
    """Flatten an Article and its audit fields into the response schema."""
    return ArticleResponse(
        id=article.id,
        title=article.title,
        content=article.content,
        is_pinned=article.is_pinned,
        created_by=article.audit.created_by,
        created=article.audit.created,
        modified_by=article.audit.modified_by,
        modified=article.audit.modified,
    )


class ArticleService:
    """Orchestrates article business logic. Depends on the repository port (DI)."""

    def __init__(self, repository: ArticleRepository):
        self._repository = repository

    async def get_article(self, article_id: int) -> Article:
        article = await self._repository.get_article_by_id(article_id)
        if article is None:
            raise EntityNotFoundError("Article", article_id)
        return article

    async def list_articles(self) -> list[Article]:
        return await self._repository.get_articles()

    async def list_page(self, page_index: int = 0, page_size: int = 10) -> ArticlePage:
        page = await self._repository.get_all(page_index, page_size)
        return ArticlePage(
            items=[to_response(a) for a in page.items],
            total_records=page.total_records,
            page_index=page_index,
            page_size=page_size,
        )

    async def create_article(self, data: ArticleCreate) -> Article:
        article = Article(
            title=data.title,
            content=data.content,
            is_pinned=data.is_pinned,
            audit=Audit(created_by=data.created_by),
        )
        return await self._repository.add_article(article)

    async def update_article(self, article_id: int, data: ArticleUpdate) -> Article:
        article = await self.get_article(article_id)
        article.update(
            title=data.title,
            content=data.content,
            is_pinned=data.is_pinned,
            modified_by=data.modified_by,
            modified=utc_now(),
        )
        return await self._repository.edit_article(article)

    async def delete_article(self, article_id: int) -> None:
        await self._repository.delete_article(article_id)
