"""Unit tests for path segment sanitizing."""

import pytest

from pathforge.project_tree.name_sanitizer import sanitize


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("src", "src"),
        ("  src  ", "src"),
        ("user.js", "user.js"),
        ('a<b>c:d"e', "abcde"),
        ("what?*.txt", "what.txt"),
        ("back\\slash", "backslash"),
        ("pipe|name", "pipename"),
        ("tab\there", "tabhere"),
        ("my folder", "my folder"),
        ("Ünïcödé.md", "Ünïcödé.md"),
        (".gitignore", ".gitignore"),
        ("", ""),
        ("   ", ""),
        ("<>:|?*", ""),
        (".", ""),
        ("..", ""),
        (" ?. ", ""),
    ],
)
def test_sanitize(raw, expected):
    assert sanitize(raw) == expected


def test_sanitize_is_idempotent():
    raw = ' <weird> name?.txt '
    assert sanitize(sanitize(raw)) == sanitize(raw)
