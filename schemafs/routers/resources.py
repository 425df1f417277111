# schemafs/routers/resources.py
from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Query

from schemafs.core.tree_service import TreeService, unresolved_references
from schemafs.deps import tree_service

logger = logging.getLogger(__name__)
router = APIRouter(tags=["resources"])

SCHEMA_URI = "schema://tree"


@router.get("/resources", summary="List readable resources")
def list_resources() -> Dict[str, Any]:
    return {
        "resources": [
            {
                "uri": SCHEMA_URI,
                "name": "Database Schema Virtual Tree",
                "mimeType": "application/json",
                "description": "The virtual tree structure of the database, categorized by semantics.",
            }
        ]
    }


@router.get("/resources/read", summary="Read a resource by URI")
def read_resource(uri: str = Query(...), trees: TreeService = Depends(tree_service)) -> Dict[str, Any]:
    if uri != SCHEMA_URI:
        raise HTTPException(status_code=404, detail=f"Unknown resource: {uri}")
    tree = trees.get_or_build()
    logger.info("Schema resource returned: %d tables, %d categories", len(tree.tables), len(tree.categories))
    return {"contents": [{"uri": SCHEMA_URI, "mimeType": "application/json", "text": tree.to_json()}]}


@router.post("/schema/refresh", summary="Rebuild the schema tree from the live catalog")
def refresh_schema(trees: TreeService = Depends(tree_service)) -> Dict[str, Any]:
    tree = trees.refresh()
    return {
        "database": tree.database,
        "tables": len(tree.tables),
        "categories": sorted(tree.categories),
        "hasRoot": tree.root is not None,
        "unresolved": unresolved_references(tree),
    }
