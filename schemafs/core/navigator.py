# schemafs/core/navigator.py
from __future__ import annotations
from typing import Any, Dict, List, Optional, Union

from schemafs.core.errors import NotInitialized, PathNotFound, TableNotFound
from schemafs.core.models import DirectoryNode, FileNode, VirtualTree

Node = Union[DirectoryNode, FileNode]


def _entry(tree: VirtualTree, node: Node) -> Dict[str, Any]:
    if isinstance(node, DirectoryNode):
        return {"name": node.name, "type": "directory", "path": node.path}
    description: Optional[str] = node.description
    if not description:
        table = tree.tables.get(node.table_name)
        description = table.description if table else None
    out: Dict[str, Any] = {"name": node.name, "type": "file", "path": node.path, "tableName": node.table_name}
    if description:
        out["description"] = description
    return out


def resolve(tree: VirtualTree, path: str) -> Node:
    if tree.root is None:
        raise NotInitialized()
    node: Node = tree.root
    clean = (path or "").strip().strip("/")
    if not clean:
        return node
    for part in clean.split("/"):
        if not isinstance(node, DirectoryNode):
            raise PathNotFound(path)
        found = next((c for c in node.children if c.name == part), None)
        if found is None:
            raise PathNotFound(path, f"Path segment '{part}' not found in '{node.path}'")
        node = found
    return node


def list_path(tree: VirtualTree, path: str = "/") -> List[Dict[str, Any]]:
    """One level of the tree at `path`; a file path yields a single entry for that file."""
    node = resolve(tree, path)
    if isinstance(node, DirectoryNode):
        return [_entry(tree, c) for c in node.children]
    return [_entry(tree, node)]


def describe_table(tree: VirtualTree, table_name: str) -> List[Dict[str, str]]:
    table = tree.tables.get(table_name)
    if table is None:
        raise TableNotFound(table_name)
    return [{"name": c.name, "type": "column", "dataType": c.data_type} for c in table.columns]
