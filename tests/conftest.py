"""Test configuration and fixtures for pathforge."""

import itertools

import pytest

from pathforge.project_tree.project_session import ProjectSession
from pathforge.project_tree.tree_index import TreeIndex
from pathforge.storage.snapshot import SnapshotStore, default_tree


@pytest.fixture
def index():
    """Index over an empty default tree, with predictable ids n1, n2, ..."""
    counter = itertools.count(1)
    return TreeIndex(default_tree(), id_factory=lambda: f"n{next(counter)}")


@pytest.fixture
def store(tmp_path):
    return SnapshotStore(tmp_path / "state.json")


@pytest.fixture
def session(store):
    """Session on an empty tree that saves to a temporary state file."""
    return ProjectSession(store=store)
