"""Zip archive export of a project tree.

The export walks the tree depth first, starting at the root's children. The root
itself never becomes an entry: it stands for the archive as a whole and lends the
archive its file name. Folders become directory entries and files become entries
holding their UTF-8 encoded content, so extracting the archive reproduces the tree.
"""

import io
import logging
import time
import zipfile
from pathlib import Path
from typing import Iterator, Optional, Tuple

from pathforge.exceptions import ArchiveExportError
from pathforge.exclusion_rules.base_rules import BaseExclusionRules
from pathforge.project_tree.project_node import ProjectNode
from pathforge.types import NodeKind, PathType

logger = logging.getLogger(__name__)

ARCHIVE_EXTENSION = ".zip"

_DIRECTORY_MODE = 0o40755
_FILE_MODE = 0o100644
_MSDOS_DIRECTORY_FLAG = 0x10


class ZipArchiveExporter:
    """Serialize project trees into zip archives.

    Attributes:
        exclusion_rules (Optional[BaseExclusionRules]): Rules deciding which entries are
            left out. An excluded folder drops its whole subtree.
        compression (int): zipfile compression method for file entries.

    Example:
        >>> from pathforge.storage.snapshot import default_tree
        >>> root = default_tree("demo")
        >>> src = ProjectNode("src", node_id="s", kind=NodeKind.FOLDER, parent=root)
        >>> _ = ProjectNode("main.py", node_id="m", kind=NodeKind.FILE, parent=src, content="print()")
        >>> exporter = ZipArchiveExporter()
        >>> exporter.archive_name(root)
        'demo.zip'
        >>> zipfile.ZipFile(io.BytesIO(exporter.export(root))).namelist()
        ['src/', 'src/main.py']
    """

    def __init__(
        self,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        compression: int = zipfile.ZIP_DEFLATED,
    ) -> None:
        self.exclusion_rules = exclusion_rules
        self.compression = compression

    def archive_name(self, root: ProjectNode) -> str:
        """Return the download file name, "<root name>.zip"."""
        return f"{root.name}{ARCHIVE_EXTENSION}"

    def iter_entries(self, root: ProjectNode) -> Iterator[Tuple[str, NodeKind, str]]:
        """Yield (relative_path, kind, content) for each entry, in export order.

        Folder paths carry no trailing slash here and their content is always "".
        Entries removed by the exclusion rules are skipped.
        """

        def walk(node: ProjectNode, prefix: str) -> Iterator[Tuple[str, NodeKind, str]]:
            for child in node.children:
                path = f"{prefix}{child.name}"
                if child.is_file:
                    if self._excluded(path):
                        continue
                    yield path, NodeKind.FILE, child.content or ""
                else:
                    if self._excluded(path + "/"):
                        continue
                    yield path, NodeKind.FOLDER, ""
                    yield from walk(child, path + "/")

        yield from walk(root, "")

    def export(self, root: ProjectNode) -> bytes:
        """Build the archive in memory.

        Args:
            root: Root of the tree to export.

        Returns:
            The bytes of a complete zip archive.

        Raises:
            ArchiveExportError: If the archive cannot be generated.
        """
        buffer = io.BytesIO()
        date_time = time.localtime()[:6]
        count = 0
        try:
            with zipfile.ZipFile(buffer, "w", compression=self.compression) as zf:
                for path, kind, content in self.iter_entries(root):
                    if kind is NodeKind.FOLDER:
                        info = zipfile.ZipInfo(path + "/", date_time=date_time)
                        info.external_attr = (_DIRECTORY_MODE << 16) | _MSDOS_DIRECTORY_FLAG
                        zf.writestr(info, b"")
                    else:
                        info = zipfile.ZipInfo(path, date_time=date_time)
                        info.external_attr = _FILE_MODE << 16
                        info.compress_type = self.compression
                        zf.writestr(info, content.encode("utf-8"))
                    count += 1
        except (zipfile.BadZipFile, ValueError) as e:
            raise ArchiveExportError(str(e))

        logger.info("Exported %d entries from '%s'", count, root.name)
        return buffer.getvalue()

    def write(self, root: ProjectNode, destination: PathType) -> Path:
        """Export the tree and write the archive to disk.

        Args:
            root: Root of the tree to export.
            destination: Target file, or an existing directory to receive
                "<root name>.zip".

        Returns:
            The path the archive was written to.

        Raises:
            ArchiveExportError: If the archive cannot be generated or written.
        """
        target = Path(destination)
        if target.is_dir():
            target = target / self.archive_name(root)
        data = self.export(root)
        try:
            target.write_bytes(data)
        except OSError as e:
            raise ArchiveExportError(str(e), str(target))
        return target

    def _excluded(self, path: str) -> bool:
        return self.exclusion_rules is not None and self.exclusion_rules.exclude(path)


def iter_files(root: ProjectNode) -> Iterator[Tuple[str, str]]:
    """Yield (relative_path, content) for every file below root.

    Example:
        >>> from pathforge.storage.snapshot import default_tree
        >>> root = default_tree()
        >>> docs = ProjectNode("docs", node_id="d", kind=NodeKind.FOLDER, parent=root)
        >>> _ = ProjectNode("index.md", node_id="i", kind=NodeKind.FILE, parent=docs, content="# Hi")
        >>> list(iter_files(root))
        [('docs/index.md', '# Hi')]
    """
    for node in root.descendants:
        if node.is_file:
            yield node.relative_path(), node.content or ""
