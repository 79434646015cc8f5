"""Abstract repository interfaces (ports) — define the contract, not the implementation."""

from abc import ABC, abstractmethod

from article_board.domain.entities import Article, PagingResult


class ArticleRepository(ABC):
    """Port for article persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def add_article(self, article: Article) -> Article:
        """Persist a new article and return it with the store-generated fields filled in."""
        ...

    @abstractmethod
    async def get_articles(self) -> list[Article]:
        """Retrieve every article, newest (highest id) first."""
        ...

    @abstractmethod
    async def get_article_by_id(self, article_id: int) -> Article | None:
        """Retrieve a single article by its ID, or None."""
        ...

    @abstractmethod
    async def edit_article(self, article: Article) -> Article:
        """Overwrite the stored row for ``article.id`` with the given state."""
        ...

    @abstractmethod
    async def delete_article(self, article_id: int) -> None:
        """Delete an article. Deleting a missing id is a no-op."""
        ...

    @abstractmethod
    async def get_all(self, page_index: int, page_size: int) -> PagingResult[Article]:
        """Retrieve one zero-based page of articles plus the total row count."""
        ...
