"""Read-only filtering and text listing of a project tree."""

from typing import Iterator, List, Set, Tuple

from pathforge.project_tree.project_node import ProjectNode


def matches(node: ProjectNode, query: str) -> bool:
    """Decide whether a node is visible under a search query.

    Folders are always shown as containers. A file is shown when the query is empty
    or occurs in its name, ignoring case.

    Example:
        >>> from pathforge.types import NodeKind
        >>> node = ProjectNode("UserService.js", node_id="x", kind=NodeKind.FILE)
        >>> matches(node, "service"), matches(node, "api"), matches(node, "")
        (True, False, True)
    """
    if node.is_folder or not query:
        return True
    return query.lower() in node.name.lower()


def iter_visible(root: ProjectNode, query: str = "") -> Iterator[Tuple[int, ProjectNode]]:
    """Yield (depth, node) for every visible node below root, depth first.

    Children keep their insertion order. The root itself is not yielded; its direct
    children have depth 0.
    """

    def walk(node: ProjectNode, depth: int) -> Iterator[Tuple[int, ProjectNode]]:
        for child in node.children:
            if not matches(child, query):
                continue
            yield depth, child
            if child.is_folder:
                yield from walk(child, depth + 1)

    yield from walk(root, 0)


def stream_tree_representation(root: ProjectNode, query: str = "", show_ids: bool = False) -> Iterator[str]:
    """Generate a tree(1)-style listing one line at a time.

    Args:
        root: Root of the tree to list.
        query: Optional file-name filter, see matches().
        show_ids: Append each node's id in brackets.

    Yields:
        Lines of the listing, starting with the root name.

    Example:
        >>> from pathforge.types import NodeKind
        >>> root = ProjectNode("demo", node_id="root", kind=NodeKind.FOLDER)
        >>> src = ProjectNode("src", node_id="s", kind=NodeKind.FOLDER, parent=root)
        >>> _ = ProjectNode("main.py", node_id="m", kind=NodeKind.FILE, parent=src)
        >>> _ = ProjectNode("README.md", node_id="r", kind=NodeKind.FILE, parent=root)
        >>> for line in stream_tree_representation(root):
        ...     print(line)
        demo/
        ├── src/
        │   └── main.py
        └── README.md
    """

    def label(node: ProjectNode) -> str:
        suffix = "/" if node.is_folder else ""
        node_id = f" [{node.node_id}]" if show_ids else ""
        return f"{node.name}{suffix}{node_id}"

    visible = list(iter_visible(root, query))

    # Walking backwards, a node is the last of its siblings when no later node shares
    # its depth before the walk climbs above it.
    last_flags: List[bool] = []
    later_depths: Set[int] = set()
    for depth, _ in reversed(visible):
        last_flags.append(depth not in later_depths)
        later_depths = {d for d in later_depths if d < depth}
        later_depths.add(depth)
    last_flags.reverse()

    yield label(root)
    indents: List[str] = []
    for (depth, node), is_last in zip(visible, last_flags):
        del indents[depth:]
        connector = "└── " if is_last else "├── "
        yield f"{''.join(indents)}{connector}{label(node)}"
        indents.append("    " if is_last else "│   ")


def format_tree(root: ProjectNode, query: str = "", show_ids: bool = False) -> str:
    """Return the complete listing produced by stream_tree_representation()."""
    return "\n".join(stream_tree_representation(root, query, show_ids))
