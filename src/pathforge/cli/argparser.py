"""Command-line argument parsing for pathforge.

This module defines the command-line interface for pathforge,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, Union

from pathforge import __version__
from pathforge.exclusion_rules.git_rules import GitIgnoreExclusionRules

DEFAULT_STATE_FILE = ".pathforge.json"


def create_exclusion_action(exclusion_rules: GitIgnoreExclusionRules) -> Type[argparse.Action]:
    """Create a custom action class that feeds export exclusions into a rules object.

    The action updates the rules as arguments are parsed, so -e/--exclude files and
    -i/--ignore patterns keep the order in which they appear on the command line.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        A custom action class for use with argparse.
    """

    class ExclusionRulesAction(argparse.Action):
        def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
            super().__init__(option_strings, dest, **kwargs)

        def __call__(
            self,
            parser: argparse.ArgumentParser,
            namespace: argparse.Namespace,
            values: Union[str, Sequence[Any], None],
            option_string: Optional[str] = None,
        ) -> None:
            if values is None:
                return
            if option_string in ("-e", "--exclude"):
                exclusion_rules.load_rules(Path(str(values)))
            else:  # -i/--ignore
                exclusion_rules.add_rule(str(values))

            items = getattr(namespace, self.dest, None) or []
            items.append(values)
            setattr(namespace, self.dest, items)

    return ExclusionRulesAction


def create_parser(exclusion_rules: GitIgnoreExclusionRules) -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        An ArgumentParser instance configured with pathforge's options.
    """
    description = """
    pathforge: build a project's folder and file layout from typed paths.

    Paths are merged into a tree kept in a JSON state file. Existing folders are
    reused, so the same path can be given any number of times. The last segment of a
    path becomes a file when it contains a dot and the path does not end with "/".
    The tree can be edited node by node and exported as a zip archive named after the
    project root.
    """

    epilog = """
    Examples:
      # Add a single path
      pathforge -p src/api/user.js

      # Add many paths, one per line
      pathforge -b paths.txt
      cat paths.txt | pathforge -b -

      # List the tree with node ids, showing only files matching "user"
      pathforge --show-ids -q user

      # Add a folder under the root, delete a node, set a file's content
      pathforge --add-folder root
      pathforge -d 3f9c0a1b2d4e
      pathforge --set-content 3f9c0a1b2d4e --content-file main.py

      # Export the project, leaving out log files
      pathforge -o . -i "*.log"

      # Start over
      pathforge --reset -y
    """

    parser = argparse.ArgumentParser(
        prog="pathforge",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"pathforge {__version__}", help="Show the version and exit"
    )

    ExclusionAction = create_exclusion_action(exclusion_rules)

    parser.add_argument(
        "-s",
        "--state",
        type=Path,
        metavar="FILE",
        default=Path(DEFAULT_STATE_FILE),
        help=f"JSON file holding the project tree (default: {DEFAULT_STATE_FILE}).",
    )
    parser.add_argument(
        "-p",
        "--path",
        dest="paths",
        metavar="PATH",
        action="append",
        default=[],
        help="Path to merge into the tree (can be specified multiple times).",
    )
    parser.add_argument(
        "-b",
        "--bulk",
        metavar="FILE",
        help="File of newline-separated paths to merge in order. Use '-' to read standard input.",
    )
    parser.add_argument(
        "--add-folder",
        metavar="ID",
        action="append",
        default=[],
        help="Add a 'new-folder' under the folder with this id (can be specified multiple times).",
    )
    parser.add_argument(
        "--add-file",
        metavar="ID",
        action="append",
        default=[],
        help="Add a 'new-file.txt' under the folder with this id (can be specified multiple times).",
    )
    parser.add_argument(
        "-d",
        "--delete",
        metavar="ID",
        action="append",
        default=[],
        help="Delete the node with this id and everything below it (can be specified multiple times).",
    )
    parser.add_argument(
        "--set-content",
        metavar="ID",
        help="Replace the content of the file with this id; requires --content-file.",
    )
    parser.add_argument(
        "--content-file",
        metavar="FILE",
        help="File holding the new content for --set-content. Use '-' to read standard input.",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Replace the whole tree with an empty 'new-project' tree.",
    )
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Do not ask for confirmation before --reset.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help=(
            "Reject a path whose segment names an existing node of the other kind (e.g. 'api/x' when a file "
            "'api' exists). By default the existing node is reused and a warning is logged."
        ),
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="PATH",
        help="Export the tree as a zip archive to this file, or into this directory as '<project>.zip'.",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        type=Path,
        metavar="FILE",
        action=ExclusionAction,
        help="File of gitignore-style patterns to leave out of the export (can be specified multiple times).",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        type=str,
        metavar="PATTERN",
        action=ExclusionAction,
        help="Gitignore-style pattern to leave out of the export (can be specified multiple times).",
    )
    parser.add_argument(
        "-q",
        "--search",
        metavar="QUERY",
        default="",
        help="Only list files whose name contains QUERY (case-insensitive). Folders are always listed.",
    )
    parser.add_argument(
        "--show-ids",
        action="store_true",
        help="Show node ids in the tree listing.",
    )
    parser.add_argument(
        "-T",
        "--no-tree",
        action="store_true",
        help="Do not print the tree listing.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log output (-v for info, -vv for debug).",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.set_content is not None and args.content_file is None:
        raise ValueError("--set-content requires --content-file to be specified")
    if args.content_file is not None and args.set_content is None:
        raise ValueError("--content-file requires --set-content to be specified")
    if args.bulk == "-" and args.content_file == "-":
        raise ValueError("--bulk and --content-file cannot both read standard input")
