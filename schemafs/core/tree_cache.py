# schemafs/core/tree_cache.py
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from schemafs.core.models import VirtualTree

logger = logging.getLogger(__name__)


class TreeCache:
    """Single JSON file holding the last built tree. No TTL: trusted until refreshed."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> Optional[VirtualTree]:
        if not self.path.is_file():
            logger.info("No schema cache at %s", self.path)
            return None
        try:
            tree = VirtualTree.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError, ValidationError) as e:
            logger.error("Failed to load schema from cache %s, rebuilding: %s", self.path, e)
            return None
        logger.info("Schema loaded from cache %s with %d tables", self.path, len(tree.tables))
        return tree

    def save(self, tree: VirtualTree) -> bool:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            if self.path.parent and not self.path.parent.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(tree.to_json(), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as e:
            logger.error("Failed to save schema to cache %s: %s", self.path, e)
            return False
        logger.info("Schema saved to cache file: %s", self.path)
        return True
