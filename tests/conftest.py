"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from routeaudit.tree.nodes import RootNode, CallNode, BlockNode, ValueNode, ArrayNode, HashNode
from routeaudit.review.inventory import ControllerInventory


ALL_ACTIONS = ["index", "show", "new", "create", "edit", "update", "destroy"]


# =============================================================================
# PATH FIXTURES
# =============================================================================

@pytest.fixture
def fixtures_dir():
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def routes_dir(fixtures_dir):
    """Path to route tree fixtures."""
    return fixtures_dir / "routes"


@pytest.fixture
def inventory_path(fixtures_dir):
    """Path to the controller inventory fixture."""
    return fixtures_dir / "inventory" / "controllers.yaml"


@pytest.fixture
def users_inventory():
    """UsersController implementing only index and show."""
    return ControllerInventory({"UsersController": ["index", "show"]})


# =============================================================================
# TREE BUILDERS
# =============================================================================

def sym(value: str) -> ValueNode:
    return ValueNode(value=value, value_type="symbol")


def string(value: str) -> ValueNode:
    return ValueNode(value=value, value_type="string")


def arr(*values: str) -> ArrayNode:
    return ArrayNode(items=[sym(v) for v in values])


def opts(**pairs) -> HashNode:
    """Hash argument; plain str values become symbols, except_ maps to except."""
    built = []
    for key, value in pairs.items():
        key = key.rstrip("_")
        if isinstance(value, str):
            value = sym(value)
        elif isinstance(value, (list, tuple)):
            value = arr(*value)
        built.append((key, value))
    return HashNode(pairs=built)


def call(message: str, *args, receiver: str = None, line: int = 0) -> CallNode:
    arguments = [sym(a) if isinstance(a, str) else a for a in args]
    return CallNode(message=message, receiver=receiver, arguments=arguments, line=line)


def block(head: CallNode, *body, line: int = 0) -> BlockNode:
    return BlockNode(call=head, body=list(body), line=line or head.line)


def routes(*children, filename: str = "config/routes.rb") -> RootNode:
    return RootNode(children=list(children), filename=filename)
