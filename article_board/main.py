"""Composition root: runs the Articles table bootstrap once at process start.

Usage:
    python -m article_board                       # provider/connection from .env
    python -m article_board --provider sqlite --connection sqlite:///board.db
    python -m article_board --provider sqlserver --tenants
"""

import argparse
import asyncio
import logging
import sys

from article_board.config import Settings, get_settings
from article_board.domain.exceptions import ConfigurationError
from article_board.infrastructure.bootstrap import (
    TableBuildResult,
    run_sqlite_bootstrap,
    run_sqlserver_bootstrap,
)
from article_board.infrastructure.logging.log_config import setup_logging

logger = logging.getLogger(__name__)


async def bootstrap(
    settings: Settings,
    connection_string: str | None = None,
) -> list[TableBuildResult]:
    """Run the bootstrap that matches ``settings.database_provider``."""
    if settings.database_provider == "sqlite":
        if settings.multi_tenant:
            logger.warning("MULTI_TENANT is ignored for SQLite; bootstrapping a single database")
        return [await run_sqlite_bootstrap(settings, connection_string)]
    if settings.database_provider == "sqlserver":
        return await run_sqlserver_bootstrap(
            settings,
            for_master=not settings.multi_tenant,
            connection_string=connection_string,
        )
    raise ConfigurationError(
        "database_provider",
        f"Unsupported database provider: {settings.database_provider!r}",
    )


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="article-board-bootstrap",
        description="Create and seed the Articles table.",
    )
    parser.add_argument("--provider", choices=("sqlite", "sqlserver"))
    parser.add_argument(
        "--tenants",
        action="store_true",
        help="SQL Server only: bootstrap every database listed in dbo.Tenants",
    )
    parser.add_argument("--connection", help="Overrides DEFAULT_CONNECTION")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = get_settings()
    overrides: dict = {}
    if args.provider:
        overrides["database_provider"] = args.provider
    if args.tenants:
        overrides["multi_tenant"] = True
    if overrides:
        settings = settings.model_copy(update=overrides)

    setup_logging(settings)

    try:
        results = asyncio.run(bootstrap(settings, args.connection))
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return 2

    failed = [r for r in results if not r.succeeded]
    for result in failed:
        logger.error("Bootstrap failed for %s: %s", result.target, result.error)
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
