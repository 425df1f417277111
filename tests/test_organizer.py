import json

import pytest

from schemafs.core.errors import ClassificationError, OrganizationError
from schemafs.core.language_model import UnavailableModel
from schemafs.core.models import DirectoryNode, FileNode, Table
from schemafs.core.organizer import PathOrganizer, assign_paths, parse_tree, table_summaries

from conftest import ORGANIZED, FakeModel


def _paths(node, out=None):
    out = [] if out is None else out
    out.append(node.path)
    for child in getattr(node, "children", []):
        _paths(child, out)
    return out


def test_paths_are_assigned_top_down_and_root_is_slash():
    root = parse_tree(json.loads(ORGANIZED))
    assert _paths(root) == ["/", "/People", "/People/Patients", "/Visits"]
    assert isinstance(root.children[0].children[0], FileNode)
    assert root.children[0].children[0].table_name == "patients"


def test_assign_paths_is_idempotent():
    root = parse_tree(json.loads(ORGANIZED))
    first = _paths(root)
    root.children[0].path = "/somewhere/else"
    assert _paths(assign_paths(root)) == first
    assert _paths(assign_paths(root)) == first


def test_missing_type_is_inferred_from_shape():
    root = parse_tree({"name": "/", "children": [
        {"name": "Stuff", "children": [{"name": "T", "tableName": "t"}]},
    ]})
    assert isinstance(root.children[0], DirectoryNode)
    assert isinstance(root.children[0].children[0], FileNode)
    assert root.children[0].children[0].path == "/Stuff/T"


@pytest.mark.parametrize("raw", [
    {"name": "/", "children": [{"name": "x", "type": "file", "children": []}]},
    {"name": "/", "children": [{"name": "x", "type": "directory", "tableName": "t"}]},
    {"name": "/", "children": [{"name": "x", "type": "symlink"}]},
    {"name": "/", "children": [{"name": "x", "type": "directory"}]},
    {"name": "/", "children": [{"name": "x"}]},
    {"name": "/", "children": [{"type": "file", "tableName": "t"}]},
    {"name": "/", "children": ["not a node"]},
    {"name": "/", "children": "nope"},
    {"name": "t", "type": "file", "tableName": "t"},
])
def test_unknown_or_contradictory_shapes_are_rejected(raw):
    with pytest.raises(OrganizationError):
        parse_tree(raw)


def test_organize_uses_model_response():
    model = FakeModel({"organ": "Here you go:\n" + ORGANIZED + "\nEnjoy"})
    root = PathOrganizer(model).organize([Table(name="patients"), Table(name="visits")])
    assert root.path == "/"
    assert [c.name for c in root.children] == ["People", "Visits"]


def test_organize_tolerates_unknown_and_missing_tables():
    # "visits" is not in the input and "patients" is not in the tree; both are accepted.
    model = FakeModel({"organ": json.dumps({"name": "/", "type": "directory", "children": [
        {"name": "V", "type": "file", "tableName": "visits"},
    ]})})
    root = PathOrganizer(model).organize([Table(name="patients")])
    assert root.children[0].table_name == "visits"


def test_organize_without_json_object_fails():
    with pytest.raises(OrganizationError):
        PathOrganizer(FakeModel({"organ": "[1, 2, 3]"})).organize([])


def test_organize_model_failure_becomes_organization_error():
    with pytest.raises(OrganizationError):
        PathOrganizer(FakeModel({"organ": ClassificationError("quota")})).organize([])


def test_unavailable_model():
    organizer = PathOrganizer(UnavailableModel())
    assert organizer.available is False
    with pytest.raises(OrganizationError):
        organizer.organize([Table(name="t")])


def test_summaries_prefer_description_over_comment():
    text = table_summaries([
        Table(name="a", comment="c", description="d"),
        Table(name="b", comment="c"),
        Table(name="e"),
    ])
    assert text.splitlines() == ["a: d", "b: c", "e: "]
