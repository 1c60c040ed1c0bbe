"""Merging of slash-delimited path strings into a project tree.

Each path is split into sanitized segments and walked from the root. Segments that
already exist are reused; only the missing ones are created, so merging a path twice
leaves the tree unchanged the second time. The last segment becomes a file only when
it contains a dot and the path does not end with a slash.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from pathforge.exceptions import MergeConflictError
from pathforge.project_tree.name_sanitizer import sanitize
from pathforge.project_tree.project_node import MAX_DEPTH, ProjectNode
from pathforge.project_tree.tree_index import TreeIndex
from pathforge.types import ConflictAction, NodeKind

logger = logging.getLogger(__name__)


@dataclass
class SegmentConflict:
    """A segment that matched an existing sibling of the other kind."""

    segment: str
    requested_kind: NodeKind
    existing: ProjectNode


@dataclass
class MergeResult:
    """Outcome of merging one path.

    Attributes:
        path: The raw path that was merged.
        node: The last node the path resolved to, or None when no segment survived sanitizing.
        created: Nodes created by this merge, in creation order.
        expanded_ids: Ids of the folders walked through or created, in walk order.
        conflicts: Kind conflicts that were resolved by reusing the existing node.
        rejected: True when the path was refused as a whole and nothing was merged.
    """

    path: str
    node: Optional[ProjectNode] = None
    created: List[ProjectNode] = field(default_factory=list)
    expanded_ids: List[str] = field(default_factory=list)
    conflicts: List[SegmentConflict] = field(default_factory=list)
    rejected: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.created)


def parse_path(path: str) -> List[Tuple[str, NodeKind]]:
    """Split a raw path into sanitized segments with the kind each one implies.

    Args:
        path: Raw user input such as "src/api/user.js" or "docs/".

    Returns:
        A list of (name, kind) pairs. Empty segments are dropped.

    Example:
        >>> [(name, kind.value) for name, kind in parse_path(" src//api/user.js ")]
        [('src', 'folder'), ('api', 'folder'), ('user.js', 'file')]
        >>> [(name, kind.value) for name, kind in parse_path("docs/v1.0/")]
        [('docs', 'folder'), ('v1.0', 'folder')]
    """
    path = path.strip()
    segments = [name for name in (sanitize(part) for part in path.split("/")) if name]
    trailing_slash = path.endswith("/")

    parsed = []
    for position, name in enumerate(segments):
        is_last = position == len(segments) - 1
        is_file = is_last and not trailing_slash and "." in name
        parsed.append((name, NodeKind.FILE if is_file else NodeKind.FOLDER))
    return parsed


def _check_conflicts(path: str, segments: List[Tuple[str, NodeKind]], root: ProjectNode) -> None:
    # Only existing nodes can conflict, so the walk stops at the first missing segment
    current = root
    for name, kind in segments:
        existing = current.child_named(name)
        if existing is None:
            return
        if existing.kind is not kind:
            raise MergeConflictError(path, name, existing.kind.value)
        current = existing


def merge_path(
    path: str,
    index: TreeIndex,
    conflict_action: ConflictAction = ConflictAction.CONTINUE,
) -> MergeResult:
    """Merge a single path into the indexed tree, creating only the missing segments.

    When a segment names an existing sibling of the other kind, the existing node is
    never converted. With ConflictAction.CONTINUE the segment counts as satisfied: an
    existing folder is descended into, while an existing file leaves the walk in the
    current folder for the remaining segments. With ConflictAction.RAISE the path is
    rejected before anything is created.

    A path with more than MAX_DEPTH segments is refused whole: nothing is created and
    the result is marked rejected.

    Args:
        path: Raw path string.
        index: Index of the tree to merge into; new nodes are registered with it.
        conflict_action: Policy for kind conflicts. Defaults to CONTINUE.

    Returns:
        A MergeResult describing what was created and walked.

    Raises:
        MergeConflictError: If conflict_action is RAISE and a segment conflicts.

    Example:
        >>> root = ProjectNode("demo", node_id="root", kind=NodeKind.FOLDER)
        >>> index = TreeIndex(root)
        >>> len(merge_path("a/b/c.txt", index).created)
        3
        >>> len(merge_path("a/b/d.txt", index).created)
        1
        >>> merge_path("a/b/c.txt", index).changed
        False
    """
    segments = parse_path(path)
    result = MergeResult(path=path)
    if not segments:
        logger.debug("Ignoring path with no usable segments: %r", path)
        return result
    if len(segments) > MAX_DEPTH:
        logger.warning("Ignoring path with %d segments; at most %d are allowed", len(segments), MAX_DEPTH)
        result.rejected = True
        return result

    if conflict_action is ConflictAction.RAISE:
        _check_conflicts(path, segments, index.root)

    current = index.root
    for name, kind in segments:
        node = current.child_named(name)
        if node is None:
            node = index.create_node(name, kind, current)
            result.created.append(node)
        elif node.kind is not kind:
            logger.warning(
                "Path %r wants %s '%s' but a %s with that name exists; reusing it",
                path,
                kind.value,
                name,
                node.kind.value,
            )
            result.conflicts.append(SegmentConflict(name, kind, node))

        result.node = node
        if node.is_folder:
            if node.node_id not in result.expanded_ids:
                result.expanded_ids.append(node.node_id)
            current = node

    logger.debug("Merged %r: %d node(s) created", path, len(result.created))
    return result


def iter_merge_paths(
    lines: Union[str, Iterable[str]],
    index: TreeIndex,
    conflict_action: ConflictAction = ConflictAction.CONTINUE,
) -> Iterator[MergeResult]:
    """Merge paths one line at a time, yielding each result as soon as it is merged.

    Blank lines are skipped. Each line is an independent merge: with
    ConflictAction.RAISE the first conflicting line raises, and the lines before it
    stay merged.

    Args:
        lines: Newline-separated text or an iterable of path strings.
        index: Index of the tree to merge into.
        conflict_action: Policy for kind conflicts. Defaults to CONTINUE.

    Yields:
        One MergeResult per non-blank line.

    Raises:
        MergeConflictError: If conflict_action is RAISE and a line conflicts.
    """
    if isinstance(lines, str):
        lines = lines.splitlines()
    for line in lines:
        line = line.strip()
        if line:
            yield merge_path(line, index, conflict_action)


def merge_paths(
    lines: Union[str, Iterable[str]],
    index: TreeIndex,
    conflict_action: ConflictAction = ConflictAction.CONTINUE,
) -> List[MergeResult]:
    """Merge many paths, in order, into the same growing tree.

    Returns:
        One MergeResult per non-blank line, see iter_merge_paths().
    """
    return list(iter_merge_paths(lines, index, conflict_action))
