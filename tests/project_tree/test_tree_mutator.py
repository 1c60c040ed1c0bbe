"""Unit tests for structural tree edits."""

from pathforge.project_tree.path_merger import merge_path, merge_paths
from pathforge.project_tree.project_node import MAX_DEPTH
from pathforge.project_tree.tree_mutator import add_child, delete_node, set_content
from pathforge.storage.snapshot import tree_to_dict
from pathforge.types import NodeKind


class TestAddChild:
    """Adding default-named nodes."""

    def test_add_folder_and_file(self, index):
        folder = add_child(index, "root", NodeKind.FOLDER)
        file = add_child(index, folder.node_id, NodeKind.FILE)

        assert folder.name == "new-folder"
        assert folder.is_folder
        assert file.name == "new-file.txt"
        assert file.is_file
        assert file.content == ""
        assert file.parent is folder
        assert index.get(file.node_id) is file

    def test_unknown_parent_is_noop(self, index):
        before = tree_to_dict(index.root)
        assert add_child(index, "missing", NodeKind.FOLDER) is None
        assert tree_to_dict(index.root) == before

    def test_file_parent_is_noop(self, index):
        readme = merge_path("README.md", index).node
        before = tree_to_dict(index.root)
        assert add_child(index, readme.node_id, NodeKind.FILE) is None
        assert tree_to_dict(index.root) == before

    def test_existing_default_name_is_reused(self, index):
        first = add_child(index, "root", NodeKind.FILE)
        second = add_child(index, "root", NodeKind.FILE)
        assert second is first
        assert [child.name for child in index.root.children] == ["new-file.txt"]

    def test_default_name_taken_by_other_kind(self, index):
        merge_path("new-file.txt/", index)
        assert add_child(index, "root", NodeKind.FILE) is None
        assert len(index) == 2

    def test_depth_limit(self, index):
        deepest = merge_path("d/" * MAX_DEPTH, index).node
        assert add_child(index, deepest.node_id, NodeKind.FOLDER) is None
        assert add_child(index, deepest.node_id, NodeKind.FILE) is None
        assert deepest.children == ()

        node = add_child(index, deepest.parent.node_id, NodeKind.FILE)
        assert node.depth == MAX_DEPTH


class TestDeleteNode:
    """Removing nodes and subtrees."""

    def test_delete_folder_removes_descendants(self, index):
        merge_paths(["src/api/user.js", "src/api/post.js", "src/index.js", "README.md"], index)
        src = index.root.child_named("src")
        removed_ids = [node.node_id for node in src.descendants] + [src.node_id]

        assert delete_node(index, src.node_id)

        assert [child.name for child in index.root.children] == ["README.md"]
        for node_id in removed_ids:
            assert index.get(node_id) is None
        assert src.parent is None
        assert len(index) == 2

    def test_delete_file(self, index):
        merge_paths(["a/b.txt", "a/c.txt"], index)
        a = index.root.child_named("a")
        assert delete_node(index, a.child_named("b.txt").node_id)
        assert [child.name for child in a.children] == ["c.txt"]

    def test_delete_root_rejected(self, index):
        merge_path("src/", index)
        before = tree_to_dict(index.root)
        assert not delete_node(index, "root")
        assert tree_to_dict(index.root) == before

    def test_delete_unknown_id(self, index):
        assert not delete_node(index, "missing")

    def test_delete_twice(self, index):
        node = merge_path("tmp/", index).node
        assert delete_node(index, node.node_id)
        assert not delete_node(index, node.node_id)

    def test_name_can_be_merged_again_after_delete(self, index):
        node = merge_path("docs/", index).node
        delete_node(index, node.node_id)
        again = merge_path("docs/", index).node
        assert again is not node
        assert again.node_id != node.node_id


class TestSetContent:
    """Editing file content."""

    def test_content_is_stored_verbatim(self, index):
        node = merge_path("src/main.py", index).node
        content = "  def main():\n\tpass\n\n"
        assert set_content(index, node.node_id, content)
        assert node.content == content

    def test_empty_content(self, index):
        node = merge_path("a.txt", index).node
        set_content(index, node.node_id, "x")
        assert set_content(index, node.node_id, "")
        assert node.content == ""

    def test_folder_is_noop(self, index):
        merge_paths(["src/main.py", "docs/"], index)
        before = tree_to_dict(index.root)
        folder = index.root.child_named("docs")

        assert not set_content(index, folder.node_id, "text")

        assert tree_to_dict(index.root) == before
        assert folder.content is None

    def test_unknown_id_is_noop(self, index):
        assert not set_content(index, "missing", "text")
