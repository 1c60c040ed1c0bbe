"""Command-line interface for pathforge.

This module loads the project tree from its state file, applies the operations
requested on the command line, prints the resulting tree, and optionally exports it
as a zip archive.

Operations run in a fixed order: reset, bulk paths, quick paths, additions, content
update, deletions, listing, export. Every change is saved to the state file as soon
as it is made.

Exit Codes:
    0: Successful completion
    1: Runtime error during execution
    2: Command-line syntax error
    3: Path rejected by --strict because of a kind conflict
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe

Example:
    # Build a layout and export it
    $ pathforge -p src/main.py -p docs/ -o .
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from pathforge.archive.zip_exporter import ZipArchiveExporter
from pathforge.cli.argparser import create_parser, validate_args
from pathforge.exceptions import MergeConflictError
from pathforge.exclusion_rules.git_rules import GitIgnoreExclusionRules
from pathforge.project_tree.project_session import ProjectSession
from pathforge.storage.snapshot import SnapshotStore
from pathforge.types import ConflictAction, NodeKind

logger = logging.getLogger("pathforge")

_LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr at a level chosen by the number of -v flags."""
    level = _LOG_LEVELS[min(verbosity, len(_LOG_LEVELS) - 1)]
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)


def read_text(source: str, keep_newlines: bool = False) -> str:
    """Read a whole text file, or standard input when source is '-'.

    Args:
        source: Path of the file to read, or '-' for standard input.
        keep_newlines: Return line endings exactly as stored instead of translating
            them to '\\n'. File content is read this way so it is kept verbatim.
    """
    if source == "-":
        if keep_newlines:
            return sys.stdin.buffer.read().decode("utf-8")
        return sys.stdin.read()
    with open(source, "r", encoding="utf-8", newline="" if keep_newlines else None) as f:
        return f.read()


def confirm(prompt: str) -> bool:
    try:
        answer = input(prompt)
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def apply_operations(session: ProjectSession, args: argparse.Namespace) -> None:
    """Run the tree operations requested on the command line against the session."""
    if args.reset:
        if args.yes or confirm(f"Reset project '{session.root.name}'? [y/N] "):
            session.reset()
        else:
            print("Reset cancelled.", file=sys.stderr)

    if args.bulk:
        results = session.bulk_paths(read_text(args.bulk))
        logger.info("Merged %d path(s) from %s", len(results), args.bulk)

    for path in args.paths:
        session.quick_path(path)

    for kind, parent_ids in ((NodeKind.FOLDER, args.add_folder), (NodeKind.FILE, args.add_file)):
        for parent_id in parent_ids:
            node = session.add_child(parent_id, kind)
            if node is None:
                print(f"Warning: Cannot add a {kind.value} under '{parent_id}'", file=sys.stderr)
            else:
                print(f"Added {kind.value} {node.relative_path()} [{node.node_id}]")

    if args.set_content is not None:
        if not session.set_content(args.set_content, read_text(args.content_file, keep_newlines=True)):
            print(f"Warning: '{args.set_content}' is not a file", file=sys.stderr)

    for node_id in args.delete:
        if not session.delete(node_id):
            print(f"Warning: Cannot delete '{node_id}'", file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for the pathforge command-line interface.

    Args:
        argv: Arguments to parse instead of sys.argv[1:]. Defaults to None.

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error
        3: Path rejected by --strict because of a kind conflict
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe
    """
    try:
        exclusion_rules = GitIgnoreExclusionRules()

        # argparse exits with 2 on syntax errors, 0 for --version
        parser = create_parser(exclusion_rules)
        args = parser.parse_args(argv)

        validate_args(args)
        configure_logging(args.verbose)

        conflict_action = ConflictAction.RAISE if args.strict else ConflictAction.CONTINUE
        session = ProjectSession.load(SnapshotStore(args.state), conflict_action)

        apply_operations(session, args)

        if not args.no_tree:
            print(session.format_tree(args.search, args.show_ids))

        if args.output:
            exporter = ZipArchiveExporter(exclusion_rules)
            target = exporter.write(session.root, args.output)
            print(f"Wrote {target}", file=sys.stderr)

    except MergeConflictError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(3)
    except KeyboardInterrupt:
        sys.exit(130)
    except BrokenPipeError:
        sys.exit(141)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
