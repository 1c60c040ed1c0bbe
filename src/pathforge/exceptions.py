class MergeConflictError(Exception):
    """
    Exception raised when a path segment conflicts with an existing sibling of the other kind.

    Only raised when merging with ConflictAction.RAISE. The tree is left untouched: the
    whole path is rejected before any node is created.

    Attributes:
        path (str): The raw path string that was being merged.
        segment (str): The sanitized segment that conflicted.
        existing_kind (str): Kind of the node already present under that name.

    Example:
        >>> error = MergeConflictError("api/users.py", "api", "file")
        >>> str(error)
        "Segment 'api' of path 'api/users.py' conflicts with an existing file"
    """

    def __init__(self, path: str, segment: str, existing_kind: str) -> None:
        """
        Initialize the exception with the conflicting path details.

        Args:
            path (str): The raw path string that was being merged.
            segment (str): The sanitized segment that conflicted.
            existing_kind (str): Kind of the existing node ("file" or "folder").
        """
        self.path = path
        self.segment = segment
        self.existing_kind = existing_kind
        super().__init__(f"Segment '{segment}' of path '{path}' conflicts with an existing {existing_kind}")


class SnapshotError(Exception):
    """
    Exception raised when a persisted tree snapshot cannot be read or is malformed.

    Example:
        >>> error = SnapshotError("Snapshot root must be a folder")
        >>> str(error)
        'Snapshot root must be a folder'
    """

    pass


class TreeStructureError(Exception):
    """
    Exception raised when code attempts to break the tree's structural invariants.

    This is a guard against programming errors, such as attaching a child to a file
    node. User-facing operations never trigger it; they degrade to no-ops instead.
    """

    pass


class ArchiveExportError(Exception):
    """
    Exception raised when the archive cannot be generated or written.

    Attributes:
        destination (str): Where the archive was being written, if anywhere.

    Example:
        >>> error = ArchiveExportError("disk full", "/tmp/out.zip")
        >>> str(error)
        'Failed to export archive to /tmp/out.zip: disk full'
    """

    def __init__(self, reason: str, destination: str = "") -> None:
        """
        Initialize the exception with the failure reason.

        Args:
            reason (str): Description of the underlying failure.
            destination (str, optional): Target file path. Defaults to "".
        """
        self.destination = destination
        target = f" to {destination}" if destination else ""
        super().__init__(f"Failed to export archive{target}: {reason}")
