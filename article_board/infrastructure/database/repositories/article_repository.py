"""Concrete repository implementation backed by SQLAlchemy."""

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from article_board.application.interfaces import ArticleRepository
from article_board.domain.entities import Article, Audit, PagingResult
from article_board.infrastructure.database.models import ArticleModel


class SQLAlchemyArticleRepository(ArticleRepository):
    """Implements the ArticleRepository port using SQLAlchemy async sessions.

    Every write commits on its own; there are no multi-statement transactions
    and no retries. Driver and SQLAlchemy errors reach the caller unchanged.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ArticleModel) -> Article:
        """Map ORM model → domain entity."""
        return Article(
            id=model.id,
            title=model.title,
            content=model.content or "",
            is_pinned=bool(model.is_pinned),
            audit=Audit(
                created_by=model.created_by,
                created=model.created,
                modified_by=model.modified_by,
                modified=model.modified,
            ),
        )

    def _to_model(self, entity: Article) -> ArticleModel:
        """Map domain entity → ORM model (for creation). Id is left to the store."""
        model = ArticleModel(
            title=entity.title,
            content=entity.content,
            is_pinned=entity.is_pinned,
            created_by=entity.audit.created_by,
            modified_by=entity.audit.modified_by,
            modified=entity.audit.modified,
        )
        if entity.audit.created is not None:
            model.created = entity.audit.created
        return model

    async def add_article(self, article: Article) -> Article:
        model = self._to_model(article)
        self._session.add(model)
        await self._session.flush()
        # Read generated fields before commit expires them.
        article.id = model.id
        article.audit.created = model.created
        await self._session.commit()
        return article

    async def get_articles(self) -> list[Article]:
        stmt = select(ArticleModel).order_by(ArticleModel.id.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def get_article_by_id(self, article_id: int) -> Article | None:
        result = await self._session.execute(
            select(ArticleModel).where(ArticleModel.id == article_id)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def edit_article(self, article: Article) -> Article:
        # Whole-row overwrite in one statement; Created keeps its insert value.
        stmt = (
            update(ArticleModel)
            .where(ArticleModel.id == article.id)
            .values(
                {
                    ArticleModel.title: article.title,
                    ArticleModel.content: article.content,
                    ArticleModel.is_pinned: article.is_pinned,
                    ArticleModel.created_by: article.audit.created_by,
                    ArticleModel.modified_by: article.audit.modified_by,
                    ArticleModel.modified: article.audit.modified,
                }
            )
        )
        result = await self._session.execute(stmt)
        if result.rowcount != 1:
            await self._session.rollback()
            raise StaleDataError(
                f"UPDATE statement on table '{ArticleModel.__tablename__}' expected to "
                f"update 1 row(s); {result.rowcount} were matched."
            )
        await self._session.commit()
        return article

    async def delete_article(self, article_id: int) -> None:
        result = await self._session.execute(
            select(ArticleModel).where(ArticleModel.id == article_id)
        )
        model = result.scalar_one_or_none()
        if model is None:
            return
        await self._session.delete(model)
        await self._session.commit()

    async def get_all(self, page_index: int, page_size: int) -> PagingResult[Article]:
        if page_index < 0:
            raise ValueError(f"page_index must be >= 0, got {page_index}")
        if page_size < 0:
            raise ValueError(f"page_size must be >= 0, got {page_size}")

        total = await self._session.execute(
            select(func.count()).select_from(ArticleModel)
        )
        total_records = total.scalar_one()

        stmt = (
            select(ArticleModel)
            .order_by(ArticleModel.id.desc())
            .offset(page_index * page_size)
            .limit(page_size)
        )
        result = await self._session.execute(stmt)
        return PagingResult(
            items=[self._to_entity(row) for row in result.scalars().all()],
            total_records=total_records,
        )
