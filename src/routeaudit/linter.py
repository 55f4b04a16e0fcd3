"""
Route Linter

Runs reviews over route trees:

    linter = RouteLinter.from_config(config, inventory)
    issues = linter.lint_file(Path("build/routes.json"))
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from routeaudit.config import AuditConfig
from routeaudit.tree.nodes import RootNode
from routeaudit.tree.serde import TreeFormatError, load_tree
from routeaudit.tree.walker import Event, walk
from routeaudit.review.base import Review, ReviewIssue, Severity
from routeaudit.review.inventory import ControllerInventory
from routeaudit.review.restrict_routes import RestrictAutoGeneratedRoutesReview

logger = logging.getLogger(__name__)

UNKNOWN_FILE = "<unknown>"


class RouteLinter:
    """
    Main linter class that runs reviews against route trees.
    """

    def __init__(self, reviews: List[Review]):
        self.reviews = reviews

    @classmethod
    def from_config(cls, config: AuditConfig, inventory: ControllerInventory) -> "RouteLinter":
        return cls([
            RestrictAutoGeneratedRoutesReview(
                inventory,
                api_only=config.api_only,
                interesting_files=tuple(config.route_file_patterns),
            ),
        ])

    def lint_file(self, file_path: Path) -> List[ReviewIssue]:
        """Lint a tree document and return all issues."""
        try:
            tree = load_tree(file_path)
        except (OSError, TreeFormatError) as e:
            return [ReviewIssue(
                severity=Severity.ERROR,
                code="E000",
                message=f"Cannot load route tree: {e}",
                file=str(file_path),
                line=0,
            )]
        # Documents without a filename are reviewed unconditionally
        check_files = tree.filename != UNKNOWN_FILE
        if not check_files:
            tree.filename = str(file_path)
        return self.lint_tree(tree, check_files=check_files)

    def lint_tree(self, root: RootNode, check_files: bool = True) -> List[ReviewIssue]:
        """Lint a tree and return all issues."""
        reviews = [r for r in self.reviews
                   if not check_files or root.filename == UNKNOWN_FILE
                   or r.is_interesting_file(root.filename)]
        if not reviews:
            logger.debug("%s: no review is interested", root.filename)
            return []

        for review in reviews:
            review.start_file(root)

        for event, node in walk(root):
            for review in reviews:
                if event is Event.ENTER:
                    review.enter(node)
                else:
                    review.exit(node)

        issues = []
        for review in reviews:
            review.end_file(root)
            issues.extend(review.issues)

        logger.info("%s: %d issues", root.filename, len(issues))
        return sorted(issues, key=lambda i: (i.file, i.line, i.column))


def lint_directory(linter: RouteLinter, dir_path: Path, suffix: str = ".json",
                   recursive: bool = True) -> Dict[str, List[ReviewIssue]]:
    """Lint all tree documents in a directory."""
    results = {}

    pattern = f"*{suffix}"
    glob_method = dir_path.rglob if recursive else dir_path.glob

    for file_path in sorted(glob_method(pattern)):
        if not file_path.is_file():
            continue

        issues = linter.lint_file(file_path)
        if issues:
            results[str(file_path)] = issues

    return results


def lint_paths(linter: RouteLinter, paths: List[Path], suffix: str = ".json",
               recursive: bool = False) -> List[ReviewIssue]:
    """Lint files and directories; missing paths raise FileNotFoundError."""
    all_issues: List[ReviewIssue] = []
    for path in paths:
        if path.is_file():
            all_issues.extend(linter.lint_file(path))
        elif path.is_dir():
            for issues in lint_directory(linter, path, suffix, recursive).values():
                all_issues.extend(issues)
        else:
            raise FileNotFoundError(f"{path} not found")
    return all_issues


def lint_file(file_path: Path, inventory: ControllerInventory,
              config: Optional[AuditConfig] = None) -> List[ReviewIssue]:
    """Convenience function to lint a file."""
    linter = RouteLinter.from_config(config or AuditConfig.from_dict({}), inventory)
    return linter.lint_file(file_path)
