"""
CLI entry point for routeaudit.

Usage:
    routeaudit check <tree.json|dir>... --inventory controllers.yaml
                                       Review route trees against controllers
    routeaudit tree <tree.json>        Load a route tree and show a summary
    routeaudit init-config [path]      Write a default configuration file
"""

import argparse
import json
import logging
import sys
from collections import defaultdict
from pathlib import Path

from . import __version__


def cmd_check(args):
    """Review route trees against the controller inventory."""
    from .config import AuditConfig
    from .linter import RouteLinter, lint_paths
    from .review.base import Severity
    from .review.inventory import InventoryError, load_inventory

    config = AuditConfig(Path(args.config) if args.config else None)
    if args.api_only:
        config.api_only = True
    if args.inventory:
        config.inventory_path = Path(args.inventory)

    if config.inventory_path is None:
        print("Error: no inventory given (--inventory or inventory_path in config)", file=sys.stderr)
        return 2

    try:
        inventory = load_inventory(config.inventory_path)
    except InventoryError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    linter = RouteLinter.from_config(config, inventory)
    try:
        issues = lint_paths(linter, [Path(p) for p in args.paths],
                            suffix=config.tree_suffix, recursive=args.recursive)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps([i.to_dict() for i in issues], indent=2))
    else:
        for issue in issues:
            print(issue)

        counts = defaultdict(int)
        for i in issues:
            counts[i.severity] += 1

        print(f"\nSummary: {len(issues)} issues found")
        for sev in Severity:
            if counts[sev]:
                print(f"  {sev.value}: {counts[sev]}")

    return 1 if issues else 0


def cmd_tree(args):
    """Load a route tree and show a summary."""
    from .tree import BlockNode, TreeFormatError, count_tree_nodes, load_tree

    try:
        tree = load_tree(args.file)
    except (OSError, TreeFormatError) as e:
        print(f"Load error: {e}", file=sys.stderr)
        return 1

    print(f"Loaded: {args.file} ({tree.filename})")
    print(f"Top-level statements: {len(tree.children)}")
    print(f"Nodes: {count_tree_nodes(tree)}")

    if args.list:
        for child in tree.children[:20]:
            kind = "block" if isinstance(child, BlockNode) else "call"
            print(f"  - L{child.line} {kind}: {child!r}")
        if len(tree.children) > 20:
            print(f"  ... and {len(tree.children) - 20} more")

    return 0


def cmd_init_config(args):
    """Write a default configuration file."""
    from .config import write_default_config

    path = write_default_config(Path(args.path) if args.path else None)
    print(f"Wrote {path}")
    return 0


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Audit Rails routes against controller actions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    routeaudit check build/routes.json --inventory build/controllers.yaml
    routeaudit check build/trees -r --inventory build/controllers.yaml --json
    routeaudit tree build/routes.json -l
"""
    )
    parser.add_argument('--version', action='version', version=f'routeaudit {__version__}')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # check
    check_p = subparsers.add_parser('check', help='Review route trees')
    check_p.add_argument('paths', nargs='+', help='Tree documents or directories')
    check_p.add_argument('--inventory', '-i', help='Controller inventory (YAML or JSON)')
    check_p.add_argument('--config', '-c', help='Configuration file')
    check_p.add_argument('--api-only', action='store_true', help='Rails app is API only')
    check_p.add_argument('--recursive', '-r', action='store_true', help='Recurse into directories')
    check_p.add_argument('--json', action='store_true', help='Output as JSON')
    check_p.set_defaults(func=cmd_check)

    # tree
    tree_p = subparsers.add_parser('tree', help='Summarize a route tree')
    tree_p.add_argument('file', help='Tree document')
    tree_p.add_argument('-l', '--list', action='store_true', help='List top-level statements')
    tree_p.set_defaults(func=cmd_tree)

    # init-config
    init_p = subparsers.add_parser('init-config', help='Write a default config file')
    init_p.add_argument('path', nargs='?', help='Where to write (default ~/.routeaudit/config.yaml)')
    init_p.set_defaults(func=cmd_init_config)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
