import json
from typing import Dict, List

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.pool import StaticPool

from schemafs.core.catalog import CatalogIntrospector
from schemafs.core.categorizer import Categorizer
from schemafs.core.language_model import UnavailableModel
from schemafs.core.organizer import PathOrganizer
from schemafs.core.tree_cache import TreeCache
from schemafs.core.tree_service import TreeService


class FakeModel:
    """Answers by prompt kind: 'categor' (classifier), 'organ' (organizer), 'sql' (writer)."""

    available = True

    def __init__(self, responses: Dict[str, str]):
        self.responses = responses
        self.calls: List[str] = []

    def complete(self, system: str, prompt: str) -> str:
        lowered = system.lower()
        if "category" in lowered:
            kind = "categor"
        elif "information architect" in lowered:
            kind = "organ"
        else:
            kind = "sql"
        self.calls.append(kind)
        answer = self.responses.get(kind)
        if isinstance(answer, Exception):
            raise answer
        return answer or ""


CATEGORIES = json.dumps([
    {"table": "patients", "category": "people", "description": "Registered patients"},
    {"table": "visits", "category": "care", "description": "Patient visits"},
    {"table": "ghosts", "category": "nowhere", "description": "Not a real table"},
])

ORGANIZED = json.dumps({
    "name": "/",
    "type": "directory",
    "path": "/bogus",
    "children": [
        {
            "name": "People",
            "type": "directory",
            "children": [
                {"name": "Patients", "type": "file", "tableName": "patients", "description": "Patient master"},
            ],
        },
        {"name": "Visits", "type": "file", "tableName": "visits"},
    ],
})


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    with eng.begin() as conn:
        conn.execute(text("CREATE TABLE patients (id INTEGER PRIMARY KEY, name TEXT)"))
        conn.execute(text(
            "CREATE TABLE visits (id INTEGER PRIMARY KEY, "
            "patient_id INTEGER REFERENCES patients(id), date TEXT)"
        ))
        conn.execute(text("INSERT INTO patients (id, name) VALUES (1, 'Ada'), (2, 'Grace')"))
        conn.execute(text("INSERT INTO visits (id, patient_id, date) VALUES (1, 1, '2024-01-02')"))
    yield eng
    eng.dispose()


@pytest.fixture
def introspector(engine):
    return CatalogIntrospector(engine, default_database="main")


@pytest.fixture
def fake_model():
    return FakeModel({"categor": CATEGORIES, "organ": ORGANIZED})


@pytest.fixture
def cache(tmp_path):
    return TreeCache(tmp_path / "schema-cache.json")


def make_service(introspector, model, cache) -> TreeService:
    return TreeService(
        introspector=introspector,
        categorizer=Categorizer(model),
        organizer=PathOrganizer(model),
        cache=cache,
    )


@pytest.fixture
def offline_service(introspector, cache):
    return make_service(introspector, UnavailableModel(), cache)


@pytest.fixture
def llm_service(introspector, fake_model, cache):
    return make_service(introspector, fake_model, cache)
