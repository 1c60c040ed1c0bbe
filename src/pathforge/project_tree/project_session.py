"""Session state for editing one project tree.

The session bundles the single current tree with the state that travels with it:
the id index, the active edit target, the set of expanded folders shown to the user,
and an optional snapshot store that receives the tree after every change.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Set, Union

from pathforge.exceptions import MergeConflictError
from pathforge.project_tree import tree_mutator
from pathforge.project_tree.path_merger import MergeResult, iter_merge_paths, merge_path
from pathforge.project_tree.project_node import ROOT_ID, ProjectNode
from pathforge.project_tree.tree_index import TreeIndex
from pathforge.project_tree.tree_search import format_tree
from pathforge.storage.snapshot import SnapshotStore, default_tree, tree_to_dict
from pathforge.types import ConflictAction, NodeKind

logger = logging.getLogger(__name__)


class ProjectSession:
    """Editable project tree with its edit target, expanded folders and storage.

    All mutating methods either change the tree and save it, or leave everything as it
    was and report failure through their return value.

    Attributes:
        index (TreeIndex): Id index of the current tree.
        active_file_id (Optional[str]): Id of the file open for editing, if any.
        expanded (Set[str]): Ids of folders shown expanded; always includes the root.
        store (Optional[SnapshotStore]): Where snapshots are saved, if anywhere.
        conflict_action (ConflictAction): Kind-conflict policy used by path merges.

    Example:
        >>> session = ProjectSession()
        >>> _ = session.quick_path("src/api/user.js")
        >>> _ = session.bulk_paths("src/api/\\nsrc/index.js\\n\\nREADME.md")
        >>> print(session.format_tree())
        new-project/
        ├── src/
        │   ├── api/
        │   │   └── user.js
        │   └── index.js
        └── README.md
    """

    def __init__(
        self,
        root: Optional[ProjectNode] = None,
        store: Optional[SnapshotStore] = None,
        conflict_action: ConflictAction = ConflictAction.CONTINUE,
    ) -> None:
        """Start a session on a tree.

        Args:
            root: Tree to edit. Defaults to an empty "new-project" tree.
            store: Snapshot store saved to after each mutation. Defaults to None.
            conflict_action: Policy for kind conflicts during merges.
        """
        self.index = TreeIndex(root if root is not None else default_tree())
        self.store = store
        self.conflict_action = conflict_action
        self.active_file_id: Optional[str] = None
        self.expanded: Set[str] = {ROOT_ID}

    @classmethod
    def load(
        cls, store: SnapshotStore, conflict_action: ConflictAction = ConflictAction.CONTINUE
    ) -> "ProjectSession":
        """Open the tree saved in store, or the default tree if nothing is saved.

        Raises:
            SnapshotError: If a stored snapshot exists but cannot be read.
        """
        return cls(store.load(), store=store, conflict_action=conflict_action)

    @property
    def root(self) -> ProjectNode:
        return self.index.root

    @property
    def active_file(self) -> Optional[ProjectNode]:
        return self.index.get_file(self.active_file_id)

    def find(self, node_id: str) -> Optional[ProjectNode]:
        return self.index.get(node_id)

    def snapshot(self) -> Dict[str, Any]:
        """Return the serialized tree; later edits do not affect it."""
        return tree_to_dict(self.root)

    def quick_path(self, path: str) -> MergeResult:
        """Merge one path and expand every folder it walks through.

        Raises:
            MergeConflictError: If the session uses ConflictAction.RAISE and the path
                conflicts with an existing node. The tree is unchanged.
        """
        result = merge_path(path, self.index, self.conflict_action)
        self.expanded.update(result.expanded_ids)
        if result.changed:
            self._save()
        return result

    def bulk_paths(self, lines: Union[str, Iterable[str]]) -> List[MergeResult]:
        """Merge newline-separated paths in input order into the same tree.

        Blank lines are skipped. With ConflictAction.RAISE the first conflicting line
        raises; the lines before it stay merged and are saved.
        """
        results: List[MergeResult] = []
        try:
            for result in iter_merge_paths(lines, self.index, self.conflict_action):
                results.append(result)
        except MergeConflictError:
            self._apply_merges(results)
            raise
        self._apply_merges(results)
        return results

    def add_child(self, parent_id: str, kind: NodeKind) -> Optional[ProjectNode]:
        """Add a default-named folder or file; a new file becomes the active edit target."""
        before = len(self.index)
        node = tree_mutator.add_child(self.index, parent_id, kind)
        if node is None:
            return None
        self.expanded.add(parent_id)
        if node.is_file:
            self.active_file_id = node.node_id
        if len(self.index) != before:
            self._save()
        return node

    def delete(self, node_id: str) -> bool:
        """Delete a node and its subtree, clearing state that referred to it."""
        node = self.index.get(node_id)
        removed_ids = {descendant.node_id for descendant in node.descendants} if node is not None else set()
        if not tree_mutator.delete_node(self.index, node_id):
            return False
        removed_ids.add(node_id)
        if self.active_file_id in removed_ids:
            self.active_file_id = None
        self.expanded -= removed_ids
        self._save()
        return True

    def set_content(self, node_id: str, content: str) -> bool:
        if not tree_mutator.set_content(self.index, node_id, content):
            return False
        self._save()
        return True

    def edit_active(self, content: str) -> bool:
        """Replace the content of the active edit target, if there is one."""
        if self.active_file_id is None:
            return False
        return self.set_content(self.active_file_id, content)

    def open_file(self, node_id: str) -> bool:
        if self.index.get_file(node_id) is None:
            return False
        self.active_file_id = node_id
        return True

    def close_file(self) -> None:
        self.active_file_id = None

    def toggle_folder(self, node_id: str) -> bool:
        """Flip a folder between expanded and collapsed.

        Returns:
            True if the folder is expanded afterwards.
        """
        if self.index.get_folder(node_id) is None:
            return False
        if node_id in self.expanded and node_id != ROOT_ID:
            self.expanded.discard(node_id)
            return False
        self.expanded.add(node_id)
        return True

    def reset(self) -> None:
        """Replace the tree with the default empty project."""
        self.index = TreeIndex(default_tree())
        self.active_file_id = None
        self.expanded = {ROOT_ID}
        logger.info("Project reset")
        self._save()

    def format_tree(self, query: str = "", show_ids: bool = False) -> str:
        return format_tree(self.root, query, show_ids)

    def _apply_merges(self, results: List[MergeResult]) -> None:
        for result in results:
            self.expanded.update(result.expanded_ids)
        if any(result.changed for result in results):
            self._save()

    def _save(self) -> None:
        if self.store is not None:
            self.store.save(self.root)
