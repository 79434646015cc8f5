"""Integration tests for SQLAlchemyArticleRepository against an on-disk SQLite database."""

from datetime import datetime

import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from article_board.domain.entities import Article, Audit, utc_now
from article_board.infrastructure.bootstrap import SQLITE_DIALECT
from article_board.infrastructure.database import (
    create_engine_for,
    create_session_factory,
    session_scope,
)
from article_board.infrastructure.database.repositories import SQLAlchemyArticleRepository


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    engine = create_engine_for(f"sqlite:///{tmp_path / 'board.db'}")
    async with engine.begin() as conn:
        await conn.execute(text(SQLITE_DIALECT.create_table_sql))
    yield create_session_factory(engine)
    await engine.dispose()


@pytest_asyncio.fixture
async def repository(session_factory):
    async with session_scope(session_factory) as session:
        yield SQLAlchemyArticleRepository(session)


async def _add(repository: SQLAlchemyArticleRepository, title: str, content: str = "C") -> Article:
    return await repository.add_article(Article(title=title, content=content))


@pytest.mark.asyncio
async def test_add_assigns_id_and_created(repository):
    before = utc_now()
    article = await repository.add_article(Article(title="T1", content="C1"))

    assert article.id is not None and article.id > 0
    assert isinstance(article.audit.created, datetime)
    assert article.audit.created >= before


@pytest.mark.asyncio
async def test_add_works_with_a_default_session_factory(tmp_path):
    """A plain async_sessionmaker expires attributes on commit."""
    engine = create_engine_for(f"sqlite:///{tmp_path / 'default.db'}")
    try:
        async with engine.begin() as conn:
            await conn.execute(text(SQLITE_DIALECT.create_table_sql))

        async with async_sessionmaker(engine)() as session:
            repository = SQLAlchemyArticleRepository(session)
            article = await repository.add_article(Article(title="T1", content="C1"))

            assert article.id == 1
            assert isinstance(article.audit.created, datetime)
            assert [a.title for a in await repository.get_articles()] == ["T1"]
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_add_keeps_caller_supplied_audit(repository, session_factory):
    created = datetime(2024, 1, 2, 3, 4, 5)
    article = await repository.add_article(
        Article(title="T", content="C", is_pinned=True, audit=Audit(created_by="alice", created=created))
    )

    async with session_scope(session_factory) as session:
        stored = await SQLAlchemyArticleRepository(session).get_article_by_id(article.id)

    assert stored.is_pinned is True
    assert stored.audit.created_by == "alice"
    assert stored.audit.created == created


@pytest.mark.asyncio
async def test_example_scenario(repository):
    first = await _add(repository, "T1", "C1")
    second = await _add(repository, "T2", "C2")
    assert (first.id, second.id) == (1, 2)

    articles = await repository.get_articles()
    assert [a.id for a in articles] == [2, 1]
    assert [a.title for a in articles] == ["T2", "T1"]

    page = await repository.get_all(0, 1)
    assert [a.id for a in page.items] == [2]
    assert page.total_records == 2


@pytest.mark.asyncio
async def test_get_articles_is_strictly_descending(repository):
    for i in range(6):
        await _add(repository, f"Post {i}")

    ids = [a.id for a in await repository.get_articles()]

    assert ids == sorted(ids, reverse=True)
    assert len(set(ids)) == len(ids)


@pytest.mark.asyncio
async def test_duplicate_titles_are_allowed(repository):
    await _add(repository, "Same")
    await _add(repository, "Same")
    assert len(await repository.get_articles()) == 2


@pytest.mark.asyncio
async def test_get_article_by_id(repository):
    created = await _add(repository, "Find me", "Body")

    found = await repository.get_article_by_id(created.id)
    assert found is not None
    assert found.title == "Find me"
    assert found.content == "Body"
    assert found.is_pinned is False

    assert await repository.get_article_by_id(9999) is None


@pytest.mark.asyncio
async def test_edit_overwrites_whole_row_but_not_created(repository, session_factory):
    created = await repository.add_article(
        Article(title="Old", content="Old body", audit=Audit(created_by="alice"))
    )
    original_created = created.audit.created

    modified = utc_now()
    replacement = Article(
        id=created.id,
        title="New",
        content="New body",
        is_pinned=True,
        audit=Audit(modified_by="bob", modified=modified),
    )
    echoed = await repository.edit_article(replacement)
    assert echoed is replacement

    async with session_scope(session_factory) as session:
        stored = await SQLAlchemyArticleRepository(session).get_article_by_id(created.id)

    assert stored.title == "New"
    assert stored.content == "New body"
    assert stored.is_pinned is True
    # Fields the caller left empty are overwritten too.
    assert stored.audit.created_by is None
    assert stored.audit.modified_by == "bob"
    assert stored.audit.modified == modified
    assert stored.audit.created == original_created


@pytest.mark.asyncio
async def test_edit_missing_article_raises_store_error(repository):
    with pytest.raises(StaleDataError):
        await repository.edit_article(Article(id=404, title="Ghost", content="Boo"))


@pytest.mark.asyncio
async def test_delete_article(repository):
    keep = await _add(repository, "Keep")
    drop = await _add(repository, "Drop")

    await repository.delete_article(drop.id)

    assert await repository.get_article_by_id(drop.id) is None
    assert [a.id for a in await repository.get_articles()] == [keep.id]


@pytest.mark.asyncio
async def test_delete_missing_article_is_a_no_op(repository):
    await _add(repository, "Only")
    before = await repository.get_articles()

    await repository.delete_article(12345)

    after = await repository.get_articles()
    assert [a.id for a in after] == [a.id for a in before]


@pytest.mark.asyncio
@pytest.mark.parametrize("page_size", [1, 3, 4, 7, 10])
async def test_get_all_matches_skip_take_of_full_list(repository, page_size):
    for i in range(7):
        await _add(repository, f"Post {i}")
    full = [a.id for a in await repository.get_articles()]

    for page_index in range(0, 9 // page_size + 2):
        page = await repository.get_all(page_index, page_size)
        start = page_index * page_size
        assert [a.id for a in page.items] == full[start : start + page_size]
        assert len(page.items) <= page_size
        assert page.total_records == 7


@pytest.mark.asyncio
async def test_get_all_has_no_page_size_cap(repository):
    for i in range(3):
        await _add(repository, f"Post {i}")

    page = await repository.get_all(0, 10_000)

    assert len(page.items) == 3
    assert page.total_records == 3


@pytest.mark.asyncio
async def test_get_all_on_empty_table(repository):
    page = await repository.get_all(0, 10)
    assert page.items == []
    assert page.total_records == 0


@pytest.mark.asyncio
async def test_get_all_rejects_negative_arguments(repository):
    with pytest.raises(ValueError):
        await repository.get_all(-1, 10)
    with pytest.raises(ValueError):
        await repository.get_all(0, -5)
