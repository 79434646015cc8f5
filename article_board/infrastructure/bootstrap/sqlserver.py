"""SQL Server bootstrap: the master database and every tenant listed in dbo.Tenants."""

import logging

from sqlalchemy import text

from article_board.config import Settings
from article_board.infrastructure.bootstrap.dialects import SQLSERVER_DIALECT
from article_board.infrastructure.bootstrap.table_builder import (
    ArticlesTableBuilder,
    TableBuildResult,
    resolve_connection_string,
)
from article_board.infrastructure.database.session import (
    DEFAULT_ODBC_DRIVER,
    create_engine_for,
    describe_target,
)

logger = logging.getLogger(__name__)


class SqlServerArticlesTableBuilder(ArticlesTableBuilder):
    """Bootstraps Articles on the master database or on each tenant database."""

    dialect = SQLSERVER_DIALECT
    tenants_query = "SELECT ConnectionString FROM dbo.Tenants"

    def __init__(
        self,
        master_connection_string: str,
        odbc_driver: str = DEFAULT_ODBC_DRIVER,
    ):
        self._master_connection_string = master_connection_string
        self.odbc_driver = odbc_driver

    async def build_master_database(self) -> TableBuildResult:
        return await self.process(self._master_connection_string, "master DB")

    async def build_tenant_databases(self) -> list[TableBuildResult]:
        """Bootstrap every tenant in directory order, continuing past failures."""
        try:
            tenant_connection_strings = await self.get_tenant_connection_strings()
        except Exception:
            logger.exception(
                "Could not read tenant directory from %s",
                describe_target(self._master_connection_string),
            )
            return []

        results: list[TableBuildResult] = []
        for connection_string in tenant_connection_strings:
            results.append(await self.process(connection_string, "tenant DB"))

        failed = sum(1 for r in results if not r.succeeded)
        logger.info(
            "Tenant bootstrap finished: %d tenant(s), %d failed",
            len(results),
            failed,
        )
        return results

    async def get_tenant_connection_strings(self) -> list[str]:
        """Read non-empty tenant connection strings from the master directory table."""
        engine = create_engine_for(self._master_connection_string, odbc_driver=self.odbc_driver)
        try:
            async with engine.connect() as conn:
                rows = await conn.execute(text(self.tenants_query))
                return [
                    value.strip()
                    for (value,) in rows.all()
                    if value is not None and value.strip()
                ]
        finally:
            await engine.dispose()


async def run_sqlserver_bootstrap(
    settings: Settings,
    for_master: bool,
    connection_string: str | None = None,
) -> list[TableBuildResult]:
    """Startup entry point. Raises ConfigurationError when no connection string resolves."""
    master = resolve_connection_string(settings, connection_string)
    builder = SqlServerArticlesTableBuilder(master, odbc_driver=settings.odbc_driver)
    if for_master:
        return [await builder.build_master_database()]
    return await builder.build_tenant_databases()
