"""
Review framework.

A Review receives enter/exit events for every node of a route tree and
records ReviewIssues. Reviews are stateful per file: start_file() and
end_file() bracket each traversal.
"""

import fnmatch
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from routeaudit.tree.nodes import TreeNode, RootNode


# `*` also crosses directories, so config/routes/admin/users.rb and
# config/routes_api.rb are route files too.
ROUTE_FILES = ("config/routes*.rb", "routes.rb")


class Severity(Enum):
    """Review issue severity levels."""
    ERROR = "error"         # File could not be reviewed
    WARNING = "warning"     # Routes that should be restricted
    INFO = "info"


@dataclass
class ReviewIssue:
    """A single issue found in a route file."""
    severity: Severity
    code: str               # e.g., "E000", "R001"
    message: str
    file: str
    line: int
    column: int = 0
    review: str = ""        # Name of the review that raised it
    url: str = ""           # Where the practice is explained

    def __str__(self):
        prefix = {
            Severity.ERROR: "[ERROR]",
            Severity.WARNING: "[WARNING]",
            Severity.INFO: "[INFO]",
        }[self.severity]

        loc = f"{self.file}:{self.line}"
        if self.column:
            loc += f":{self.column}"

        msg = f"{prefix} {self.code} {loc}: {self.message}"
        if self.url:
            msg += f"\n    -> {self.url}"
        return msg

    def to_dict(self):
        return {
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
            "file": self.file,
            "line": self.line,
            "column": self.column,
            "review": self.review,
            "url": self.url,
        }


def matches_file(filename: str, patterns: Tuple[str, ...]) -> bool:
    """
    Whether a route file name matches any glob pattern.

    Patterns match whole trailing path components, so "routes.rb" matches
    "app/routes.rb" but not "app/myroutes.rb". `*` matches across "/".
    """
    path = filename.replace("\\", "/")
    return any(
        fnmatch.fnmatchcase(path, pattern) or fnmatch.fnmatchcase(path, "*/" + pattern)
        for pattern in patterns
    )


class Review:
    """Base class for reviews."""

    code: str = "R000"
    severity: Severity = Severity.WARNING
    url: str = ""
    interesting_files: Tuple[str, ...] = ROUTE_FILES

    def __init__(self, interesting_files: Optional[Tuple[str, ...]] = None):
        if interesting_files is not None:
            self.interesting_files = tuple(interesting_files)
        self.issues: List[ReviewIssue] = []
        self.filename = "<unknown>"

    @property
    def name(self) -> str:
        return type(self).__name__

    def is_interesting_file(self, filename: str) -> bool:
        return not self.interesting_files or matches_file(filename, self.interesting_files)

    def start_file(self, root: RootNode) -> None:
        self.filename = root.filename
        self.issues = []

    def end_file(self, root: RootNode) -> None:
        pass

    def enter(self, node: TreeNode) -> None:
        pass

    def exit(self, node: TreeNode) -> None:
        pass

    def add_error(self, message: str, node: Optional[TreeNode] = None) -> ReviewIssue:
        issue = ReviewIssue(
            severity=self.severity,
            code=self.code,
            message=message,
            file=self.filename,
            line=node.line if node is not None else 0,
            column=node.column if node is not None else 0,
            review=self.name,
            url=self.url,
        )
        self.issues.append(issue)
        return issue
