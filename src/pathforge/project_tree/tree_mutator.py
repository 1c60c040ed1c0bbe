"""Structural edits on an indexed project tree.

Every operation validates its target first and only then touches the tree, so an
invalid request is a no-op that leaves every node as it was.
"""

import logging
from typing import Optional

from pathforge.project_tree.project_node import MAX_DEPTH, ProjectNode
from pathforge.project_tree.tree_index import TreeIndex
from pathforge.types import NodeKind

logger = logging.getLogger(__name__)

DEFAULT_NAMES = {
    NodeKind.FOLDER: "new-folder",
    NodeKind.FILE: "new-file.txt",
}


def add_child(index: TreeIndex, parent_id: str, kind: NodeKind) -> Optional[ProjectNode]:
    """Add a node with the default name for its kind under a folder.

    Sibling names stay unique: if the parent already holds a node with the default
    name and the same kind, that node is returned instead of a new one.

    Args:
        index: Index of the tree to edit.
        parent_id: Id of the folder that receives the node.
        kind: Kind of node to add.

    Returns:
        The added (or already present) node, or None if parent_id is not a folder or
        the default name is taken by a node of the other kind.

    Example:
        >>> root = ProjectNode("demo", node_id="root", kind=NodeKind.FOLDER)
        >>> index = TreeIndex(root)
        >>> add_child(index, "root", NodeKind.FILE).name
        'new-file.txt'
        >>> add_child(index, "missing", NodeKind.FOLDER) is None
        True
    """
    kind = NodeKind(kind)
    parent = index.get_folder(parent_id)
    if parent is None:
        logger.info("Cannot add %s: '%s' is not a folder in the tree", kind.value, parent_id)
        return None
    if parent.depth >= MAX_DEPTH:
        logger.info("Cannot add %s under '%s': the tree is at most %d levels deep", kind.value, parent.name, MAX_DEPTH)
        return None

    name = DEFAULT_NAMES[kind]
    existing = parent.child_named(name)
    if existing is not None:
        if existing.kind is kind:
            return existing
        logger.info(
            "Cannot add %s '%s' under '%s': a %s has that name",
            kind.value,
            name,
            parent.name,
            existing.kind.value,
        )
        return None

    return index.create_node(name, kind, parent)


def delete_node(index: TreeIndex, node_id: str) -> bool:
    """Detach a node and its whole subtree from the tree.

    Args:
        index: Index of the tree to edit.
        node_id: Id of the node to remove.

    Returns:
        True if the node was removed; False for the root or an unknown id.
    """
    node = index.get(node_id)
    if node is None:
        logger.info("Cannot delete '%s': no such node", node_id)
        return False
    if node.is_project_root:
        logger.info("Refusing to delete the project root")
        return False

    removed = index.unregister(node)
    node.parent = None
    logger.debug("Deleted '%s' and %d descendant(s)", node.name, removed - 1)
    return True


def set_content(index: TreeIndex, node_id: str, content: str) -> bool:
    """Replace a file's content verbatim.

    Args:
        index: Index of the tree to edit.
        node_id: Id of the file to update.
        content: New content. Stored as given, without trimming.

    Returns:
        True if a file was updated; False if node_id is not a file.
    """
    node = index.get_file(node_id)
    if node is None:
        logger.info("Cannot set content: '%s' is not a file in the tree", node_id)
        return False
    node.content = content
    return True
