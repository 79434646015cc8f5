"""Unit tests for the Articles column descriptor, DDL rendering and ORM mapping."""

import pytest
from sqlalchemy import String

from article_board.infrastructure.bootstrap import SEED_ARTICLES, SQLITE_DIALECT, SQLSERVER_DIALECT
from article_board.infrastructure.database import ArticleModel
from article_board.infrastructure.database.schema import (
    ARTICLE_COLUMNS,
    ColumnSpec,
    ColumnType,
)


def test_orm_model_matches_column_descriptor():
    table = ArticleModel.__table__
    assert table.name == "Articles"
    assert [c.name for c in table.columns] == [spec.name for spec in ARTICLE_COLUMNS]

    for spec in ARTICLE_COLUMNS:
        column = table.c[spec.name]
        assert column.nullable == spec.nullable, spec.name
        assert column.primary_key == spec.primary_key, spec.name
        if spec.type is ColumnType.STRING:
            assert isinstance(column.type, String)
            assert column.type.length == spec.max_length, spec.name


def test_bounded_string_column_requires_max_length():
    with pytest.raises(ValueError):
        ColumnSpec("Title", ColumnType.STRING)


def test_sqlserver_create_table_sql():
    sql = SQLSERVER_DIALECT.create_table_sql

    assert sql.startswith("CREATE TABLE [dbo].[Articles]")
    assert "[Id] INT NOT NULL PRIMARY KEY IDENTITY(1, 1)" in sql
    assert "[Title] NVARCHAR(255) NOT NULL" in sql
    assert "[Content] NVARCHAR(MAX) NULL" in sql
    assert "[IsPinned] BIT NULL DEFAULT(0)" in sql
    assert "[CreatedBy] NVARCHAR(255) NULL" in sql
    assert "[Created] DATETIME NULL DEFAULT(GETUTCDATE())" in sql
    assert "[ModifiedBy] NVARCHAR(255) NULL" in sql
    assert "[Modified] DATETIME NULL" in sql


def test_sqlite_create_table_sql():
    sql = SQLITE_DIALECT.create_table_sql

    assert sql.startswith("CREATE TABLE Articles")
    assert "Id INTEGER PRIMARY KEY AUTOINCREMENT" in sql
    assert "Title TEXT NOT NULL" in sql
    assert "Content TEXT NULL" in sql
    assert "IsPinned BOOLEAN NULL DEFAULT 0" in sql
    assert "Created DATETIME NULL DEFAULT CURRENT_TIMESTAMP" in sql


def test_table_exists_queries_use_backend_catalogs():
    assert "INFORMATION_SCHEMA.TABLES" in SQLSERVER_DIALECT.table_exists_sql
    assert "TABLE_NAME = 'Articles'" in SQLSERVER_DIALECT.table_exists_sql
    assert "sqlite_master" in SQLITE_DIALECT.table_exists_sql
    assert "type = 'table'" in SQLITE_DIALECT.table_exists_sql


def test_seed_sql_per_backend():
    assert [seed.is_pinned for seed in SEED_ARTICLES] == [True, False]

    sqlserver = SQLSERVER_DIALECT.insert_seed_sql
    assert "INSERT INTO [dbo].[Articles] (Title, Content, IsPinned, CreatedBy)" in sqlserver
    assert "(N'Welcome to the Board', N'This is the first announcement.', 1, N'(System)')" in sqlserver
    assert "(N'Sample Post', N'Feel free to write articles here.', 0, N'(System)')" in sqlserver

    sqlite = SQLITE_DIALECT.insert_seed_sql
    assert "('Welcome to the Board', 'This is the first announcement.', 1, 'admin')" in sqlite
    assert "('Sample Post', 'Feel free to write articles here.', 0, 'user1')" in sqlite


def test_literals_escape_quotes():
    assert SQLSERVER_DIALECT._literal("O'Brien") == "N'O''Brien'"
    assert SQLITE_DIALECT._literal("O'Brien") == "'O''Brien'"
