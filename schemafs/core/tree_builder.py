# schemafs/core/tree_builder.py
from __future__ import annotations
import logging
from typing import Dict, List, Optional

from schemafs.core.catalog import CatalogIntrospector
from schemafs.core.categorizer import DEFAULT_CATEGORY, Categorizer
from schemafs.core.errors import OrganizationError
from schemafs.core.models import Table, VirtualTree
from schemafs.core.organizer import PathOrganizer

logger = logging.getLogger(__name__)


def bucket_by_category(tables: List[Table]) -> Dict[str, List[Table]]:
    categories: Dict[str, List[Table]] = {}
    for t in tables:
        categories.setdefault(t.category or DEFAULT_CATEGORY, []).append(t)
    return categories


def try_organize(organizer: PathOrganizer, tables: List[Table]):
    if not organizer.available:
        return None
    try:
        logger.info("Using LLM to build path structure for %d tables...", len(tables))
        return organizer.organize(tables)
    except OrganizationError as e:
        logger.warning("Failed to build path structure: %s", e)
        return None


def build_virtual_tree(
    introspector: CatalogIntrospector,
    categorizer: Categorizer,
    organizer: PathOrganizer,
    database: Optional[str] = None,
) -> VirtualTree:
    """introspect -> categorize -> bucket -> organize. Never caches."""
    snapshot = introspector.introspect(database)
    db = snapshot.database or database or introspector.default_database or "database"

    tables: Dict[str, Table] = {}
    for t in snapshot.tables:
        tables[t.name] = t
    if snapshot.foreign_keys:
        logger.debug("Catalog reports %d foreign keys", len(snapshot.foreign_keys))

    table_list = categorizer.categorize(list(tables.values()))
    categories = bucket_by_category(table_list)
    root = try_organize(organizer, table_list)

    logger.info(
        "Virtual tree built for %s: %d tables, %d categories, root=%s",
        db, len(tables), len(categories), "yes" if root else "no",
    )
    return VirtualTree(database=db, categories=categories, tables=tables, root=root)
