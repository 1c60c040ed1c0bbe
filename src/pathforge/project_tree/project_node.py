"""Node representation for folders and files in the project tree."""

from typing import Optional

from anytree import Node

from pathforge.exceptions import TreeStructureError
from pathforge.types import NodeKind

ROOT_ID = "root"
DEFAULT_PROJECT_NAME = "new-project"

# Deepest level a node may sit at below the root. Snapshots nest two JSON levels per
# tree level, so this keeps saving and loading well inside the interpreter recursion limit.
MAX_DEPTH = 200


class ProjectNode(Node):  # type: ignore
    """Node class representing a folder or file in the project tree.

    Extends anytree.Node with an immutable id, a kind tag and, for files, text content.
    Children are kept in insertion order by anytree. File nodes refuse children.

    Attributes:
        name (str): Display name, unique among its siblings.
        node_id (str): Opaque identifier assigned at creation.
        kind (NodeKind): FOLDER or FILE, fixed at creation.
        content (Optional[str]): File text; always None for folders.
        parent (Optional[ProjectNode]): The parent node in the tree.
        children (tuple[ProjectNode]): The child nodes (inherited from anytree.Node).

    Example:
        >>> root = ProjectNode("demo", node_id="root", kind=NodeKind.FOLDER)
        >>> readme = ProjectNode("README.md", node_id="a1", kind=NodeKind.FILE, parent=root)
        >>> readme.is_file
        True
        >>> readme.content
        ''
        >>> [child.name for child in root.children]
        ['README.md']
    """

    def __init__(
        self,
        name: str,
        node_id: str,
        kind: NodeKind,
        parent: Optional["ProjectNode"] = None,
        content: Optional[str] = None,
    ) -> None:
        """Initialize a ProjectNode.

        Args:
            name: The sanitized name of the folder or file.
            node_id: Unique identifier of the node.
            kind: Whether the node is a folder or a file.
            parent: The parent node. Defaults to None.
            content: Initial file content. Ignored for folders; files default to "".
        """
        self._node_id = node_id
        self._kind = NodeKind(kind)
        self.content = (content if content is not None else "") if self._kind is NodeKind.FILE else None
        super().__init__(name, parent)

    @property
    def node_id(self) -> str:
        return self._node_id

    @property
    def kind(self) -> NodeKind:
        return self._kind

    @property
    def is_folder(self) -> bool:
        return self._kind is NodeKind.FOLDER

    @property
    def is_file(self) -> bool:
        return self._kind is NodeKind.FILE

    @property
    def is_project_root(self) -> bool:
        return self._node_id == ROOT_ID

    def child_named(self, name: str) -> Optional["ProjectNode"]:
        """Return the direct child with exactly this name, if any."""
        for child in self.children:
            if child.name == name:
                return child
        return None

    def relative_path(self) -> str:
        """Slash-joined names from below the root down to this node.

        Example:
            >>> root = ProjectNode("demo", node_id="root", kind=NodeKind.FOLDER)
            >>> src = ProjectNode("src", node_id="b1", kind=NodeKind.FOLDER, parent=root)
            >>> ProjectNode("app.py", node_id="b2", kind=NodeKind.FILE, parent=src).relative_path()
            'src/app.py'
        """
        return "/".join(node.name for node in self.path[1:])

    def _pre_attach(self, parent: "ProjectNode") -> None:
        if parent.is_file:
            raise TreeStructureError(f"Cannot attach '{self.name}' under file '{parent.name}'")
