"""Declarative base for the ORM models."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Registry shared by ArticleModel; the Articles DDL itself comes from the table builders."""
