"""Project layout forging utilities.

This package turns slash-delimited path strings into an editable in-memory
tree of folders and files and exports that tree as a zip archive.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("pathforge")
except PackageNotFoundError:
    __version__ = "unknown"
