from abc import ABC, abstractmethod


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for archive exclusion rules.

    Exporters ask the rules about each entry before writing it. Paths are relative to
    the project root, use forward slashes, and carry a trailing slash for folders so
    that directory-only patterns can tell the two kinds apart.

    Example:
        >>> class NoLogs(BaseExclusionRules):
        ...     def exclude(self, path: str) -> bool:
        ...         return path.endswith(".log")
        >>> NoLogs().exclude("logs/app.log")
        True
        >>> NoLogs().exclude("logs/")
        False
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine if an entry should be left out of the export.

        Args:
            path (str): Project-relative path of the entry; folders end with "/".

        Returns:
            bool: True if the entry should be excluded, False if it should be included.
        """
        pass
