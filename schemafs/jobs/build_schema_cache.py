# schemafs/jobs/build_schema_cache.py
"""
Rebuilds the schema tree from the live catalog (categorize + organize with
Gemini when configured) and writes it to SCHEMA_CACHE_FILE, without starting
the server.

    python -m schemafs.jobs.build_schema_cache [--database NAME] [--cache PATH]
"""
from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional

from schemafs.core.catalog import CatalogIntrospector
from schemafs.core.categorizer import Categorizer
from schemafs.core.errors import SchemaFSError
from schemafs.core.organizer import PathOrganizer
from schemafs.core.tree_cache import TreeCache
from schemafs.core.tree_service import TreeService
from schemafs.deps import default_database, engine, language_model, settings

logger = logging.getLogger("schemafs.jobs.build_schema_cache")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--database", help="database/schema to introspect (default: DB_DATABASE)")
    parser.add_argument("--cache", help="cache file to write (default: SCHEMA_CACHE_FILE)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

    s = settings()
    model = language_model()
    service = TreeService(
        introspector=CatalogIntrospector(engine(), default_database()),
        categorizer=Categorizer(model),
        organizer=PathOrganizer(model),
        cache=TreeCache(args.cache or s.SCHEMA_CACHE_FILE),
        database=args.database,
    )
    try:
        tree = service.refresh()
    except SchemaFSError as e:
        logger.error("Schema build failed: %s", e)
        return 1

    print(f"Wrote {service.cache.path}: {len(tree.tables)} tables, "
          f"{len(tree.categories)} categories, root={'yes' if tree.root else 'no'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
