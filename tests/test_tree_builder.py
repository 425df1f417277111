from schemafs.core.categorizer import Categorizer
from schemafs.core.language_model import UnavailableModel
from schemafs.core.organizer import PathOrganizer
from schemafs.core.tree_builder import build_virtual_tree

from conftest import CATEGORIES, FakeModel


def test_without_model_everything_is_other_and_no_root(introspector):
    model = UnavailableModel()
    tree = build_virtual_tree(introspector, Categorizer(model), PathOrganizer(model))

    assert tree.database == "main"
    assert set(tree.tables) == {"patients", "visits"}
    assert list(tree.categories) == ["other"]
    assert [t.name for t in tree.categories["other"]] == ["patients", "visits"]
    assert tree.root is None


def test_with_model_categories_and_root(introspector, fake_model):
    tree = build_virtual_tree(introspector, Categorizer(fake_model), PathOrganizer(fake_model))

    assert {k: [t.name for t in v] for k, v in tree.categories.items()} == {
        "people": ["patients"],
        "care": ["visits"],
    }
    assert tree.tables["patients"].description == "Registered patients"
    assert tree.root is not None and tree.root.path == "/"
    assert fake_model.calls == ["categor", "organ"]


def test_one_entry_per_catalog_table(introspector, fake_model):
    tree = build_virtual_tree(introspector, Categorizer(fake_model), PathOrganizer(fake_model))
    snapshot = introspector.introspect()
    assert sorted(tree.tables) == sorted(t.name for t in snapshot.tables)
    assert all(name == t.name for name, t in tree.tables.items())


def test_organizer_failure_leaves_root_absent(introspector):
    model = FakeModel({"categor": CATEGORIES, "organ": "no structure today"})
    tree = build_virtual_tree(introspector, Categorizer(model), PathOrganizer(model))
    assert tree.root is None
    assert set(tree.categories) == {"people", "care"}


def test_classifier_failure_still_organizes(introspector):
    model = FakeModel({"categor": "garbage", "organ": '{"name": "/", "children": []}'})
    tree = build_virtual_tree(introspector, Categorizer(model), PathOrganizer(model))
    assert list(tree.categories) == ["other"]
    assert tree.root is not None and tree.root.children == []
