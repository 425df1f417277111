# schemafs/core/tree_service.py
from __future__ import annotations
import logging
import threading
from typing import List, Optional

from schemafs.core.catalog import CatalogIntrospector
from schemafs.core.categorizer import Categorizer
from schemafs.core.errors import OrganizationError
from schemafs.core.models import DirectoryNode, FileNode, VirtualTree
from schemafs.core.organizer import PathOrganizer
from schemafs.core.tree_builder import build_virtual_tree
from schemafs.core.tree_cache import TreeCache

logger = logging.getLogger(__name__)


def unresolved_references(tree: VirtualTree) -> List[str]:
    """tableName values of file nodes that name no table. Reported, never fatal."""
    if tree.root is None:
        return []
    out: List[str] = []
    stack: List[DirectoryNode] = [tree.root]
    while stack:
        node = stack.pop()
        for child in node.children:
            if isinstance(child, DirectoryNode):
                stack.append(child)
            elif isinstance(child, FileNode) and child.table_name not in tree.tables:
                out.append(child.table_name)
    return sorted(set(out))


class TreeService:
    """
    Owns the process-wide VirtualTree.

    The first caller of get_or_build() loads the cache or builds from the
    catalog; concurrent callers block on the same lock and reuse that result
    instead of starting their own build.
    """

    def __init__(
        self,
        introspector: CatalogIntrospector,
        categorizer: Categorizer,
        organizer: PathOrganizer,
        cache: TreeCache,
        database: Optional[str] = None,
    ):
        self.introspector = introspector
        self.categorizer = categorizer
        self.organizer = organizer
        self.cache = cache
        self.database = database
        self._tree: Optional[VirtualTree] = None
        # organizer already ran (or failed) for the current tree
        self._organize_attempted = False
        self._lock = threading.Lock()

    @property
    def current(self) -> Optional[VirtualTree]:
        return self._tree

    def _settled(self, tree: Optional[VirtualTree]) -> bool:
        if tree is None:
            return False
        return tree.root is not None or self._organize_attempted or not self.organizer.available

    def get_or_build(self) -> VirtualTree:
        tree = self._tree
        if self._settled(tree):
            return tree
        with self._lock:
            if self._tree is None:
                self._tree = self._load_or_build()
            if not self._settled(self._tree):
                self._repair(self._tree)
            return self._tree

    def refresh(self) -> VirtualTree:
        """Rebuild from the live catalog and replace both the tree and the cache."""
        with self._lock:
            logger.info("Refreshing virtual tree from database...")
            tree = build_virtual_tree(self.introspector, self.categorizer, self.organizer, self.database)
            self._report(tree)
            self.cache.save(tree)
            self._tree = tree
            self._organize_attempted = True
            return tree

    def _load_or_build(self) -> VirtualTree:
        tree = self.cache.load()
        if tree is not None:
            self._organize_attempted = False
            return tree
        logger.info("Building virtual tree from database...")
        tree = build_virtual_tree(self.introspector, self.categorizer, self.organizer, self.database)
        self._report(tree)
        self.cache.save(tree)
        self._organize_attempted = True
        return tree

    def _repair(self, tree: VirtualTree) -> None:
        logger.info("Virtual tree is missing path structure. Generating it now...")
        self._organize_attempted = True
        try:
            tree.root = self.organizer.organize(list(tree.tables.values()))
        except OrganizationError as e:
            logger.error("Failed to generate path structure: %s", e)
            return
        logger.info("Path structure generated successfully.")
        self._report(tree)
        self.cache.save(tree)

    @staticmethod
    def _report(tree: VirtualTree) -> None:
        missing = unresolved_references(tree)
        if missing:
            logger.warning("Path tree references %d unknown tables: %s", len(missing), ", ".join(missing))
