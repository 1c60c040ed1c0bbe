"""Serialization of project trees and their JSON snapshot store.

A snapshot is a recursive record mirroring the tree:

    {"id": "root", "name": "new-project", "type": "folder", "children": [
        {"id": "3f9c0a1b2d4e", "name": "main.py", "type": "file", "content": ""}
    ]}

Files carry "content" and folders carry "children". The key "kind" is accepted as an
alias of "type" when loading.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Set

from pathforge.exceptions import SnapshotError
from pathforge.project_tree.project_node import DEFAULT_PROJECT_NAME, ROOT_ID, ProjectNode
from pathforge.types import NodeKind, PathType

logger = logging.getLogger(__name__)


def default_tree(name: str = DEFAULT_PROJECT_NAME) -> ProjectNode:
    """Return a fresh tree holding only an empty root folder."""
    return ProjectNode(name, node_id=ROOT_ID, kind=NodeKind.FOLDER)


def tree_to_dict(node: ProjectNode) -> Dict[str, Any]:
    """Serialize a node and its subtree into plain JSON-compatible data.

    Example:
        >>> root = default_tree("demo")
        >>> _ = ProjectNode("a.txt", node_id="f1", kind=NodeKind.FILE, parent=root, content="hi")
        >>> tree_to_dict(root)["type"]
        'folder'
        >>> tree_to_dict(root)["children"]
        [{'id': 'f1', 'name': 'a.txt', 'type': 'file', 'content': 'hi'}]
    """
    data: Dict[str, Any] = {"id": node.node_id, "name": node.name, "type": node.kind.value}
    if node.is_file:
        data["content"] = node.content if node.content is not None else ""
    else:
        data["children"] = [tree_to_dict(child) for child in node.children]
    return data


def _node_from_dict(data: Any, parent: Optional[ProjectNode], seen_ids: Set[str]) -> ProjectNode:
    if not isinstance(data, dict):
        raise SnapshotError(f"Snapshot node must be an object, got {type(data).__name__}")

    node_id = data.get("id")
    name = data.get("name")
    if not isinstance(node_id, str) or not node_id:
        raise SnapshotError("Snapshot node is missing an id")
    if not isinstance(name, str) or not name:
        raise SnapshotError(f"Snapshot node '{node_id}' is missing a name")
    if node_id in seen_ids:
        raise SnapshotError(f"Duplicate node id '{node_id}' in snapshot")
    seen_ids.add(node_id)

    raw_kind = data.get("type", data.get("kind"))
    try:
        kind = NodeKind(raw_kind)
    except ValueError:
        raise SnapshotError(f"Snapshot node '{node_id}' has unknown type {raw_kind!r}")

    if kind is NodeKind.FILE:
        if data.get("children"):
            raise SnapshotError(f"Snapshot file '{name}' cannot have children")
        content = data.get("content")
        if content is not None and not isinstance(content, str):
            raise SnapshotError(f"Snapshot file '{name}' has non-text content")
        return ProjectNode(name, node_id=node_id, kind=kind, parent=parent, content=content)

    children = data.get("children") or []
    if not isinstance(children, list):
        raise SnapshotError(f"Snapshot folder '{name}' has malformed children")
    node = ProjectNode(name, node_id=node_id, kind=kind, parent=parent)
    for child in children:
        _node_from_dict(child, node, seen_ids)
    return node


def tree_from_dict(data: Any) -> ProjectNode:
    """Rebuild a tree from snapshot data.

    Args:
        data: Result of tree_to_dict() or of parsing a stored snapshot.

    Returns:
        The root node of the rebuilt tree.

    Raises:
        SnapshotError: If the data does not describe a valid project tree.
    """
    root = _node_from_dict(data, None, set())
    if root.node_id != ROOT_ID or not root.is_folder:
        raise SnapshotError(f"Snapshot root must be a folder with id '{ROOT_ID}'")
    return root


class SnapshotStore:
    """JSON file holding the latest snapshot of a project tree.

    Attributes:
        path (Path): Location of the snapshot file.

    Example:
        >>> store = SnapshotStore(".pathforge.json")  # doctest: +SKIP
        >>> root = store.load() or default_tree()  # doctest: +SKIP
        >>> store.save(root)  # doctest: +SKIP
    """

    def __init__(self, path: PathType) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> Optional[ProjectNode]:
        """Read the stored tree.

        Returns:
            The stored tree, or None if no snapshot has been saved yet.

        Raises:
            SnapshotError: If the file cannot be read or holds an invalid snapshot.
        """
        if not self.exists():
            logger.debug("No snapshot at %s", self.path)
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise SnapshotError(f"Snapshot {self.path} is not valid JSON: {e}")
        except OSError as e:
            raise SnapshotError(f"Cannot read snapshot {self.path}: {e}")
        root = tree_from_dict(data)
        logger.debug("Loaded snapshot %s", self.path)
        return root

    def save(self, root: ProjectNode) -> None:
        """Write the tree, replacing the previous snapshot atomically.

        Raises:
            SnapshotError: If the snapshot cannot be written.
        """
        payload = json.dumps(tree_to_dict(root), ensure_ascii=False, indent=2)
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                os.unlink(tmp_name)
                raise
        except OSError as e:
            raise SnapshotError(f"Cannot write snapshot {self.path}: {e}")
        logger.debug("Saved snapshot %s", self.path)
