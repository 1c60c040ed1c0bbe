"""Id generation and O(1) lookup over a project tree."""

import logging
import uuid
from typing import Callable, Dict, Iterator, Optional

from anytree import PreOrderIter

from pathforge.exceptions import TreeStructureError
from pathforge.project_tree.project_node import ROOT_ID, ProjectNode
from pathforge.types import NodeKind

logger = logging.getLogger(__name__)


def generate_id() -> str:
    """Return a short random identifier for a new node."""
    return uuid.uuid4().hex[:12]


class TreeIndex:
    """Map from node id to node for a single project tree.

    The index owns id allocation for new nodes and keeps lookups constant time, so
    mutations never search the tree to find their target. Parent tracking comes from
    the anytree parent pointer of each indexed node.

    Attributes:
        root (ProjectNode): Root node of the indexed tree.

    Example:
        >>> root = ProjectNode("demo", node_id="root", kind=NodeKind.FOLDER)
        >>> index = TreeIndex(root)
        >>> src = index.create_node("src", NodeKind.FOLDER, root)
        >>> index.get(src.node_id) is src
        True
        >>> index.parent_of(src.node_id) is root
        True
    """

    def __init__(self, root: ProjectNode, id_factory: Callable[[], str] = generate_id) -> None:
        """Index every node below and including root.

        Args:
            root: Root of the tree. Its id must be "root" and it must be a folder.
            id_factory: Callable producing candidate ids. Defaults to generate_id.

        Raises:
            TreeStructureError: If the root is malformed or two nodes share an id.
        """
        if root.node_id != ROOT_ID or not root.is_folder:
            raise TreeStructureError(f"Tree root must be a folder with id '{ROOT_ID}'")
        self.root = root
        self._id_factory = id_factory
        self._nodes: Dict[str, ProjectNode] = {}
        self.register(root)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[ProjectNode]:
        return iter(self._nodes.values())

    def new_id(self) -> str:
        """Allocate an id not used by any indexed node."""
        while True:
            candidate = self._id_factory()
            if candidate not in self._nodes and candidate != ROOT_ID:
                return candidate

    def get(self, node_id: Optional[str]) -> Optional[ProjectNode]:
        """Return the node with this id, or None if it is not in the tree."""
        if node_id is None:
            return None
        return self._nodes.get(node_id)

    def get_folder(self, node_id: Optional[str]) -> Optional[ProjectNode]:
        node = self.get(node_id)
        return node if node is not None and node.is_folder else None

    def get_file(self, node_id: Optional[str]) -> Optional[ProjectNode]:
        node = self.get(node_id)
        return node if node is not None and node.is_file else None

    def parent_of(self, node_id: str) -> Optional[ProjectNode]:
        node = self.get(node_id)
        return node.parent if node is not None else None

    def create_node(self, name: str, kind: NodeKind, parent: ProjectNode) -> ProjectNode:
        """Create, attach and index a new node under parent.

        Sibling uniqueness is the caller's responsibility; this method only allocates
        the id and wires the node in.

        Args:
            name: Sanitized node name.
            kind: Kind of the new node.
            parent: Folder that will own the node.

        Returns:
            The newly created node.

        Raises:
            TreeStructureError: If parent is a file or is not part of this tree.
        """
        if parent.node_id not in self._nodes:
            raise TreeStructureError(f"Parent '{parent.name}' is not part of this tree")
        node = ProjectNode(name, node_id=self.new_id(), kind=kind, parent=parent)
        self._nodes[node.node_id] = node
        logger.debug("Created %s '%s' (%s) under '%s'", kind.value, name, node.node_id, parent.name)
        return node

    def register(self, node: ProjectNode) -> None:
        """Index node and all of its descendants.

        Raises:
            TreeStructureError: If any id in the subtree is already indexed.
        """
        for descendant in PreOrderIter(node):
            if descendant.node_id in self._nodes:
                raise TreeStructureError(f"Duplicate node id '{descendant.node_id}'")
            self._nodes[descendant.node_id] = descendant

    def unregister(self, node: ProjectNode) -> int:
        """Drop node and all of its descendants from the index.

        Returns:
            The number of ids removed.
        """
        removed = 0
        for descendant in PreOrderIter(node):
            if self._nodes.pop(descendant.node_id, None) is not None:
                removed += 1
        return removed
