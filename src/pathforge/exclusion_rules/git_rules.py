"""Implementation of exclusion rules using .gitignore pattern syntax."""

from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern  # type: ignore

from pathforge.types import PathType

from .base_rules import BaseExclusionRules


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Exclusion rules written in .gitignore pattern syntax.

    Patterns are matched with the pathspec library exactly as Git matches them:
    globs, directory-only patterns ending in "/", negation with "!", "**" and comment
    lines are all supported. Patterns can come from files (load_rules) or be added one
    at a time (add_rule); later patterns override earlier ones.

    Attributes:
        spec (PathSpec): Compiled matcher for every pattern added so far.

    Example:
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule("*.log")
        >>> rules.add_rule("build/")
        >>> rules.exclude("logs/app.log")
        True
        >>> rules.exclude("build/")
        True
        >>> rules.exclude("src/main.py")
        False
    """

    def __init__(self, rules_files: Optional[Union[PathType, Sequence[PathType]]] = None):
        """Initialize the rules, optionally loading patterns from files.

        Args:
            rules_files: Path(s) to file(s) containing .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self._patterns: List[str] = []
        self.spec = PathSpec.from_lines(GitWildMatchPattern, self._patterns)

        if rules_files is not None:
            self.load_rules(rules_files)

    def exclude(self, path: str) -> bool:
        return self.spec.match_file(path)

    @property
    def patterns(self) -> List[str]:
        return list(self._patterns)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Append the patterns found in one or more .gitignore-style files.

        Args:
            rules_files: Path(s) to file(s) containing .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")

            with open(path, "r", encoding="utf-8") as f:
                self._patterns.extend(f.read().splitlines())

        self._compile()

    def add_rule(self, rule: str) -> None:
        """Append a single .gitignore pattern such as "*.pyc" or "!keep.pyc"."""
        self._patterns.append(rule)
        self._compile()

    def _compile(self) -> None:
        self.spec = PathSpec.from_lines(GitWildMatchPattern, self._patterns)
