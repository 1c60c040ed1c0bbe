from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class NodeKind(str, Enum):
    """Variant tag of a node in the project tree.

    The value doubles as the ``type`` field of the persisted snapshot.

    Attributes:
        FOLDER: A container node with ordered children
        FILE: A leaf node carrying free-form text content
    """

    FOLDER = "folder"
    FILE = "file"


class ConflictAction(str, Enum):
    """Action to take when a path segment names an existing sibling of the other kind.

    Values:
        CONTINUE: Treat the segment as satisfied by the existing node and keep merging (default behavior)
        RAISE: Reject the whole path before any node is created and raise MergeConflictError
    """

    CONTINUE = "continue"
    RAISE = "raise"
