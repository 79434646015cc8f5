"""Idempotent bootstrap of the Articles table.

For one target database: create the table when the catalog does not list
it, then seed the two default posts when it holds no rows. Running it again
changes nothing. Failures are logged and reported in the returned
``TableBuildResult``; they never stop the caller from moving on to the next
target.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import text

from article_board.config import Settings
from article_board.domain.exceptions import ConfigurationError
from article_board.infrastructure.bootstrap.dialects import ArticlesTableDialect
from article_board.infrastructure.database.session import (
    DEFAULT_ODBC_DRIVER,
    create_engine_for,
    describe_target,
)

logger = logging.getLogger(__name__)


@dataclass
class TableBuildResult:
    """Outcome of bootstrapping the Articles table on one target."""

    target: str
    table_created: bool = False
    rows_inserted: int = 0
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


def resolve_connection_string(settings: Settings, connection_string: str | None = None) -> str:
    """Explicit connection string if given, else DEFAULT_CONNECTION from settings."""
    if connection_string and connection_string.strip():
        return connection_string.strip()
    if settings.default_connection.strip():
        return settings.default_connection.strip()
    raise ConfigurationError(
        "default_connection",
        "DEFAULT_CONNECTION is not configured and no connection string was supplied.",
    )


class ArticlesTableBuilder:
    """Runs the check / create / count / seed steps with one backend dialect."""

    dialect: ArticlesTableDialect
    odbc_driver: str = DEFAULT_ODBC_DRIVER

    async def ensure_articles_table(self, connection_string: str, result: TableBuildResult) -> None:
        """Bring one database up to date; raises on any store error."""
        engine = create_engine_for(connection_string, odbc_driver=self.odbc_driver)
        try:
            async with engine.begin() as conn:
                exists = await conn.execute(text(self.dialect.table_exists_sql))
                if exists.scalar_one() == 0:
                    await conn.execute(text(self.dialect.create_table_sql))
                    result.table_created = True
                    logger.info("[%s] Articles table created.", result.target)

                count = await conn.execute(text(self.dialect.count_rows_sql))
                if count.scalar_one() == 0:
                    inserted = await conn.execute(text(self.dialect.insert_seed_sql))
                    result.rows_inserted = inserted.rowcount
                    logger.info(
                        "[%s] Inserted default articles: %d rows.",
                        result.target,
                        inserted.rowcount,
                    )
        finally:
            await engine.dispose()

    async def process(self, connection_string: str, label: str) -> TableBuildResult:
        """Bootstrap one target, logging and recording any failure instead of raising."""
        result = TableBuildResult(target=describe_target(connection_string))
        try:
            await self.ensure_articles_table(connection_string, result)
        except Exception as exc:
            logger.exception("[%s] Error processing %s", result.target, label)
            result.error = f"{type(exc).__name__}: {exc}"
            return result

        logger.info("Articles table processed (%s): %s", label, result.target)
        return result
