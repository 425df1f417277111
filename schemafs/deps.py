# schemafs/deps.py
from __future__ import annotations
from functools import lru_cache
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url

from schemafs.settings import Settings
from schemafs.core.catalog import CatalogIntrospector, default_schema_name
from schemafs.core.categorizer import Categorizer
from schemafs.core.db_executor import SqlExecutor
from schemafs.core.errors import ConfigurationError
from schemafs.core.gemini_client import GeminiClient
from schemafs.core.language_model import LanguageModel, UnavailableModel
from schemafs.core.organizer import PathOrganizer
from schemafs.core.query_gateway import QueryGateway
from schemafs.core.sql_writer import SqlWriter
from schemafs.core.tools import ToolExecuter
from schemafs.core.tree_cache import TreeCache
from schemafs.core.tree_service import TreeService


@lru_cache(maxsize=1)
def settings() -> Settings:
    return Settings()


@lru_cache(maxsize=1)
def engine() -> Engine:
    s = settings()
    if not s.DB_URL:
        raise ConfigurationError("DB_URL is not set")
    # Pre-ping keeps connections healthy over time
    return create_engine(s.DB_URL, pool_pre_ping=True)


# Backends where the URL database and the catalog schema are the same thing
DATABASE_IS_SCHEMA = {"mysql", "mariadb"}


def default_database() -> Optional[str]:
    s = settings()
    if s.DB_DATABASE:
        return s.DB_DATABASE
    if not s.DB_URL:
        return None
    url = make_url(s.DB_URL)
    if url.get_backend_name() in DATABASE_IS_SCHEMA and url.database:
        return url.database
    # e.g. PostgreSQL: the URL names a database, tables live in a schema ("public")
    return default_schema_name(engine())


@lru_cache(maxsize=1)
def language_model() -> LanguageModel:
    s = settings()
    if not s.GEMINI_API_KEY:
        return UnavailableModel()
    return GeminiClient(
        api_key=s.GEMINI_API_KEY,
        model=s.GEMINI_MODEL,
        fallback_model=s.GEMINI_FALLBACK_MODEL,
    )


@lru_cache(maxsize=1)
def tree_service() -> TreeService:
    model = language_model()
    return TreeService(
        introspector=CatalogIntrospector(engine(), default_database()),
        categorizer=Categorizer(model),
        organizer=PathOrganizer(model),
        cache=TreeCache(settings().SCHEMA_CACHE_FILE),
    )


@lru_cache(maxsize=1)
def executor() -> SqlExecutor:
    return SqlExecutor(engine())


@lru_cache(maxsize=1)
def gateway() -> QueryGateway:
    s = settings()
    return QueryGateway(executor(), allow_writes=s.ALLOW_NON_SELECT_QUERIES, dialect=s.SQL_DIALECT)


@lru_cache(maxsize=1)
def sql_writer() -> SqlWriter:
    return SqlWriter(language_model(), dialect=settings().SQL_DIALECT)


def tool_executer() -> ToolExecuter:
    return ToolExecuter(
        trees=tree_service,
        gateway=gateway,
        writer=sql_writer,
        model=language_model,
        allow_writes=settings().ALLOW_NON_SELECT_QUERIES,
    )
