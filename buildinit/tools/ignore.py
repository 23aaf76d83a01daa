import os
from abc import ABC, abstractmethod
from fnmatch import fnmatch
from pathlib import Path
from typing import List, Optional, Type

from docker.utils.build import PatternMatcher

from buildinit.loggers import logger

STANDARD_IGNORE_PATTERNS = [".*", "vendor", "node_modules", "**/.*", "**/vendor", "**/node_modules"]
IGNORE_FILE = ".buildinitignore"


class Ignore(ABC):
    """Base for Ignores, implements core logic. Children have to implement _is_ignored"""

    def __init__(self, root: str):
        self.root = root

    def is_ignored(self, path: str) -> bool:
        if os.path.isabs(path):
            path = os.path.relpath(path, self.root)
        return self._is_ignored(Path(path).as_posix())

    @abstractmethod
    def _is_ignored(self, path: str) -> bool:
        pass


class BuildInitIgnore(Ignore):
    """Uses a .buildinitignore file, in .dockerignore syntax, to determine ignored paths."""

    def __init__(self, root: str):
        super().__init__(root)
        self.pm = self._parse()

    def _parse(self) -> PatternMatcher:
        patterns = []
        ignore_file = os.path.join(self.root, IGNORE_FILE)
        if os.path.isfile(ignore_file):
            with open(ignore_file, "r") as f:
                patterns = [l.strip() for l in f.readlines() if l.strip() and not l.startswith("#")]
        else:
            logger.info(f"No {IGNORE_FILE} found in {self.root}, not applying any filters")
        return PatternMatcher(patterns)

    def _is_ignored(self, path: str) -> bool:
        return self.pm.matches(path)


class StandardIgnore(Ignore):
    """Skips hidden and vendored directories. Extra patterns can be fed in from the config."""

    def __init__(self, root: str, patterns: Optional[List[str]] = None):
        super().__init__(root)
        self.patterns = STANDARD_IGNORE_PATTERNS + (patterns or [])

    def _is_ignored(self, path: str) -> bool:
        if path == ".":
            return False
        name = os.path.basename(path)
        for pattern in self.patterns:
            if fnmatch(path, pattern) or fnmatch(name, pattern):
                return True
        return False


class IgnoreGroup(Ignore):
    """Groups multiple Ignores and checks a path against them. A file is ignored if any
    Ignore considers it ignored."""

    def __init__(self, root: str, ignores: List[Type[Ignore]], extra_patterns: Optional[List[str]] = None):
        super().__init__(root)
        self.ignores = [
            ignore(root, extra_patterns) if ignore is StandardIgnore else ignore(root) for ignore in ignores
        ]

    def _is_ignored(self, path: str) -> bool:
        for ignore in self.ignores:
            if ignore.is_ignored(path):
                return True
        return False
