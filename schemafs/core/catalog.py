# schemafs/core/catalog.py
from __future__ import annotations
import logging
from typing import Dict, List, Optional, Set

from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from schemafs.core.errors import ConfigurationError, ExecutionError
from schemafs.core.models import CatalogSnapshot, Column, ForeignKey, Table

logger = logging.getLogger(__name__)


def _column_keys(insp, table: str, schema: str) -> Dict[str, str]:
    """Map column name -> key kind, strongest first (primary > unique > index)."""
    keys: Dict[str, str] = {}
    pk = insp.get_pk_constraint(table, schema=schema) or {}
    for c in pk.get("constrained_columns") or []:
        keys[c] = "primary"

    single_unique: Set[str] = set()
    for uc in insp.get_unique_constraints(table, schema=schema):
        cols = uc.get("column_names") or []
        if len(cols) == 1:
            single_unique.add(cols[0])
    indexed: Set[str] = set()
    for ix in insp.get_indexes(table, schema=schema):
        cols = [c for c in (ix.get("column_names") or []) if c]
        if ix.get("unique") and len(cols) == 1:
            single_unique.add(cols[0])
        elif cols:
            # only the leading column is individually searchable
            indexed.add(cols[0])

    for c in single_unique:
        keys.setdefault(c, "unique")
    for c in indexed:
        keys.setdefault(c, "index")
    return keys


def _table_comment(insp, table: str, schema: str) -> str:
    try:
        return (insp.get_table_comment(table, schema=schema) or {}).get("text") or ""
    except NotImplementedError:
        # e.g. SQLite has no table comments
        return ""


def _columns(insp, table: str, schema: str, keys: Dict[str, str]) -> List[Column]:
    return [
        Column(name=c["name"], data_type=str(c["type"]), key=keys.get(c["name"], "none"))
        for c in insp.get_columns(table, schema=schema)
    ]


def default_schema_name(engine: Engine) -> Optional[str]:
    """The schema the connection lands in (e.g. "public" on PostgreSQL, "main" on SQLite)."""
    try:
        return inspect(engine).default_schema_name
    except SQLAlchemyError as e:
        raise ExecutionError(f"Catalog unavailable: {getattr(e, 'orig', None) or e}") from e


class CatalogIntrospector:
    """Reads tables, views, columns and foreign keys from the database catalog."""

    def __init__(self, engine: Engine, default_database: Optional[str] = None):
        self.engine = engine
        self.default_database = default_database

    def introspect(self, database: Optional[str] = None) -> CatalogSnapshot:
        db = database or self.default_database
        if not db:
            raise ConfigurationError("No database configured")
        try:
            return self._introspect(db)
        except SQLAlchemyError as e:
            logger.error("Catalog introspection of %s failed: %s", db, e)
            raise ExecutionError(f"Catalog query failed: {getattr(e, 'orig', None) or e}") from e

    def _introspect(self, db: str) -> CatalogSnapshot:
        insp = inspect(self.engine)
        table_names = insp.get_table_names(schema=db)
        view_names = insp.get_view_names(schema=db)
        logger.info("Introspecting %d tables and %d views in %s", len(table_names), len(view_names), db)

        tables: List[Table] = []
        fks: List[ForeignKey] = []
        for name in table_names:
            keys = _column_keys(insp, name, db)
            tables.append(Table(
                name=name,
                comment=_table_comment(insp, name, db),
                columns=_columns(insp, name, db, keys),
            ))

            for fk in insp.get_foreign_keys(name, schema=db):
                for col, ref_col in zip(fk.get("constrained_columns") or [], fk.get("referred_columns") or []):
                    fks.append(ForeignKey(
                        table=name,
                        column=col,
                        referenced_table=fk["referred_table"],
                        referenced_column=ref_col,
                    ))

        # views carry no keys or constraints of their own
        for name in view_names:
            tables.append(Table(
                name=name,
                comment=_table_comment(insp, name, db),
                columns=_columns(insp, name, db, {}),
            ))

        return CatalogSnapshot(database=db if tables else None, tables=tables, foreign_keys=fks)
