"""Unit tests for zip archive export."""

import io
import zipfile

import pytest

from pathforge.archive.zip_exporter import ZipArchiveExporter, iter_files
from pathforge.exceptions import ArchiveExportError
from pathforge.exclusion_rules.git_rules import GitIgnoreExclusionRules
from pathforge.project_tree.path_merger import merge_paths
from pathforge.project_tree.tree_mutator import set_content
from pathforge.storage.snapshot import tree_to_dict
from pathforge.types import NodeKind


@pytest.fixture
def project(index):
    merge_paths(
        [
            "src/api/user.js",
            "src/index.js",
            "src/empty/",
            "logs/app.log",
            "README.md",
            "notes/todo.txt",
        ],
        index,
    )
    root = index.root
    set_content(index, root.child_named("README.md").node_id, "# Demo\n")
    set_content(index, root.child_named("src").child_named("index.js").node_id, "console.log('hi');\n")
    return root


def read_archive(data):
    """Return ({file path: content}, {directory paths}) from archive bytes."""
    files, directories = {}, set()
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        for info in zf.infolist():
            if info.is_dir():
                directories.add(info.filename.rstrip("/"))
            else:
                files[info.filename] = zf.read(info).decode("utf-8")
    return files, directories


def test_archive_name(project):
    assert ZipArchiveExporter().archive_name(project) == "new-project.zip"


def test_round_trip(project):
    files, directories = read_archive(ZipArchiveExporter().export(project))

    assert files == dict(iter_files(project))
    assert directories == {node.relative_path() for node in project.descendants if node.is_folder}


def test_root_is_not_an_entry(project):
    with zipfile.ZipFile(io.BytesIO(ZipArchiveExporter().export(project))) as zf:
        names = zf.namelist()
    assert not any(name.startswith("new-project") for name in names)
    assert names[0] == "src/"


def test_entries_in_depth_first_order(project):
    entries = [(path, kind.value) for path, kind, _ in ZipArchiveExporter().iter_entries(project)]
    assert entries == [
        ("src", "folder"),
        ("src/api", "folder"),
        ("src/api/user.js", "file"),
        ("src/index.js", "file"),
        ("src/empty", "folder"),
        ("logs", "folder"),
        ("logs/app.log", "file"),
        ("README.md", "file"),
        ("notes", "folder"),
        ("notes/todo.txt", "file"),
    ]


def test_empty_content_and_empty_folders(project):
    files, directories = read_archive(ZipArchiveExporter().export(project))
    assert files["src/api/user.js"] == ""
    assert "src/empty" in directories


def test_empty_tree(index):
    data = ZipArchiveExporter().export(index.root)
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        assert zf.namelist() == []


def test_non_ascii_names_and_content(index):
    merge_paths(["מסמכים/קובץ.txt"], index)
    node = index.root.children[0].children[0]
    set_content(index, node.node_id, "שלום ✓")
    files, directories = read_archive(ZipArchiveExporter().export(index.root))
    assert files == {"מסמכים/קובץ.txt": "שלום ✓"}
    assert directories == {"מסמכים"}


def test_export_does_not_mutate(project):
    before = tree_to_dict(project)
    ZipArchiveExporter().export(project)
    assert tree_to_dict(project) == before


def test_exclusion_rules(project):
    rules = GitIgnoreExclusionRules()
    rules.add_rule("*.log")
    rules.add_rule("notes/")
    files, directories = read_archive(ZipArchiveExporter(rules).export(project))

    assert "logs/app.log" not in files
    assert "logs" in directories
    assert not any(path.startswith("notes") for path in files)
    assert "notes" not in directories
    assert "README.md" in files


def test_stored_compression(project):
    data = ZipArchiveExporter(compression=zipfile.ZIP_STORED).export(project)
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        assert all(info.compress_type == zipfile.ZIP_STORED for info in zf.infolist())


def test_write_to_file(project, tmp_path):
    target = ZipArchiveExporter().write(project, tmp_path / "out.zip")
    assert target == tmp_path / "out.zip"
    assert zipfile.is_zipfile(target)


def test_write_to_directory(project, tmp_path):
    target = ZipArchiveExporter().write(project, tmp_path)
    assert target == tmp_path / "new-project.zip"
    files, _ = read_archive(target.read_bytes())
    assert files["README.md"] == "# Demo\n"


def test_write_failure(project, tmp_path):
    with pytest.raises(ArchiveExportError):
        ZipArchiveExporter().write(project, tmp_path / "missing" / "out.zip")


def test_iter_files(project):
    assert dict(iter_files(project)) == {
        "src/api/user.js": "",
        "src/index.js": "console.log('hi');\n",
        "logs/app.log": "",
        "README.md": "# Demo\n",
        "notes/todo.txt": "",
    }


def test_iter_entries_folder_content_is_empty(project):
    for _, kind, content in ZipArchiveExporter().iter_entries(project):
        if kind is NodeKind.FOLDER:
            assert content == ""
