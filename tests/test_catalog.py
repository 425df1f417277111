from types import SimpleNamespace

import pytest
from sqlalchemy import text

from schemafs import deps
from schemafs.core.catalog import CatalogIntrospector, default_schema_name
from schemafs.core.errors import ConfigurationError, ExecutionError


def test_introspect_tables_and_columns(introspector):
    snap = introspector.introspect()

    assert snap.database == "main"
    by_name = {t.name: t for t in snap.tables}
    assert set(by_name) == {"patients", "visits"}
    assert [c.name for c in by_name["patients"].columns] == ["id", "name"]
    assert [c.name for c in by_name["visits"].columns] == ["id", "patient_id", "date"]
    assert by_name["patients"].columns[0].key == "primary"
    assert by_name["patients"].columns[1].key == "none"
    assert by_name["patients"].comment == ""


def test_introspect_foreign_keys(introspector):
    snap = introspector.introspect()
    assert len(snap.foreign_keys) == 1
    fk = snap.foreign_keys[0]
    assert (fk.table, fk.column, fk.referenced_table, fk.referenced_column) == (
        "visits", "patient_id", "patients", "id",
    )


def test_explicit_database_overrides_default(engine):
    snap = CatalogIntrospector(engine, default_database="nope").introspect("main")
    assert snap.database == "main"
    assert len(snap.tables) == 2


def test_missing_database_is_configuration_error(engine):
    with pytest.raises(ConfigurationError):
        CatalogIntrospector(engine).introspect()


def test_views_are_listed_without_keys(engine):
    with engine.begin() as conn:
        conn.execute(text("CREATE VIEW active_patients AS SELECT id, name FROM patients WHERE id > 0"))

    snap = CatalogIntrospector(engine, "main").introspect()
    by_name = {t.name: t for t in snap.tables}
    assert set(by_name) == {"patients", "visits", "active_patients"}
    view = by_name["active_patients"]
    assert [c.name for c in view.columns] == ["id", "name"]
    assert {c.key for c in view.columns} == {"none"}
    assert all(fk.table != "active_patients" for fk in snap.foreign_keys)


def test_catalog_failure_is_execution_error(engine):
    with pytest.raises(ExecutionError):
        CatalogIntrospector(engine, "nosuchdb").introspect()


def test_default_schema_name(engine):
    assert default_schema_name(engine) == "main"


def test_default_database_uses_url_database_on_mysql(engine, monkeypatch):
    monkeypatch.setattr(deps, "settings", lambda: SimpleNamespace(
        DB_DATABASE=None, DB_URL="mysql+pymysql://u:p@db/clinic",
    ))
    monkeypatch.setattr(deps, "engine", lambda: engine)
    assert deps.default_database() == "clinic"


def test_default_database_uses_default_schema_elsewhere(engine, monkeypatch):
    monkeypatch.setattr(deps, "settings", lambda: SimpleNamespace(
        DB_DATABASE=None, DB_URL="postgresql+psycopg2://u:p@db/clinic",
    ))
    monkeypatch.setattr(deps, "engine", lambda: engine)
    assert deps.default_database() == "main"


def test_explicit_database_setting_wins(monkeypatch):
    monkeypatch.setattr(deps, "settings", lambda: SimpleNamespace(
        DB_DATABASE="reporting", DB_URL="postgresql+psycopg2://u:p@db/clinic",
    ))
    assert deps.default_database() == "reporting"
