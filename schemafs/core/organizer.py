# schemafs/core/organizer.py
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Union

from schemafs.core.errors import ClassificationError, OrganizationError
from schemafs.core.json_extract import extract_json
from schemafs.core.language_model import LanguageModel
from schemafs.core.models import DirectoryNode, FileNode, Table
from schemafs.prompts.versioned.v1.organizer import ORGANIZER_PROMPT, ORGANIZER_SYSTEM

logger = logging.getLogger(__name__)

ROOT_PATH = "/"
MAX_DEPTH = 32


def table_summaries(tables: List[Table]) -> str:
    return "\n".join(f"{t.name}: {t.description or t.comment or ''}" for t in tables)


def _optional_str(raw: Dict[str, Any], key: str) -> Optional[str]:
    v = raw.get(key)
    if isinstance(v, str) and v.strip():
        return v.strip()
    return None


def parse_node(raw: Any, depth: int = 0, is_root: bool = False) -> Union[DirectoryNode, FileNode]:
    """
    Validate one organizer node and its subtree.

    The node kind is inferred from its shape (children list vs tableName) and the
    declared "type", when present, has to agree with it. Anything else is rejected.
    Paths embedded in the response are dropped; see assign_paths().
    """
    if depth > MAX_DEPTH:
        raise OrganizationError(f"Tree deeper than {MAX_DEPTH} levels")
    if not isinstance(raw, dict):
        raise OrganizationError(f"Expected a node object, got {type(raw).__name__}")

    name = _optional_str(raw, "name") or (ROOT_PATH if is_root else None)
    if name is None:
        raise OrganizationError(f"Node without a name: {raw!r:.120}")

    declared = raw.get("type")
    if declared not in (None, "directory", "file"):
        raise OrganizationError(f"Unknown node type {declared!r} for '{name}'")

    children = raw.get("children")
    table_name = _optional_str(raw, "tableName")
    if children is not None and not isinstance(children, list):
        raise OrganizationError(f"'children' of '{name}' is not a list")

    if table_name and children is None:
        shape = "file"
    elif children is not None and not table_name:
        shape = "directory"
    elif children is None:
        raise OrganizationError(f"Node '{name}' has neither children nor a tableName")
    else:
        raise OrganizationError(f"Node '{name}' has both children and a tableName")

    if declared is not None and declared != shape:
        raise OrganizationError(f"Node '{name}' declared as {declared} but shaped like a {shape}")

    if shape == "file":
        return FileNode(name=name, table_name=table_name, description=_optional_str(raw, "description"))
    return DirectoryNode(
        name=name,
        children=[parse_node(c, depth + 1) for c in children],
    )


def assign_paths(root: DirectoryNode) -> DirectoryNode:
    """Recompute every path top-down from "/"; running it twice gives the same result."""
    root.path = ROOT_PATH

    def _walk(node: DirectoryNode) -> None:
        for child in node.children:
            child.path = f"{node.path.rstrip('/')}/{child.name}"
            if isinstance(child, DirectoryNode):
                _walk(child)

    _walk(root)
    return root


def parse_tree(raw: Any) -> DirectoryNode:
    root = parse_node(raw, is_root=True)
    if not isinstance(root, DirectoryNode):
        raise OrganizationError("Root node must be a directory")
    return assign_paths(root)


class PathOrganizer:
    def __init__(self, model: LanguageModel):
        self.model = model

    @property
    def available(self) -> bool:
        return self.model.available

    def organize(self, tables: List[Table]) -> DirectoryNode:
        """
        Ask the model to arrange `tables` into a browsable hierarchy.

        File nodes are not checked against `tables`: a table may be missing from
        the tree and a tableName may point at no table. Raises OrganizationError.
        """
        prompt = ORGANIZER_PROMPT.format(TABLE_SUMMARIES=table_summaries(tables))
        try:
            response = self.model.complete(ORGANIZER_SYSTEM, prompt)
        except ClassificationError as e:
            raise OrganizationError(str(e)) from e

        raw = extract_json(response, dict)
        if raw is None:
            raise OrganizationError("Organizer response did not contain a JSON object")
        return parse_tree(raw)
