"""
Depth-first enter/exit event stream over a route tree.

A block's call is visited before its body, so for

    resources :posts do
      resources :comments
    end

the events are: enter(block) enter(call posts) ... exit(call posts)
enter(call comments) ... exit(call comments) exit(block).
"""

from enum import Enum
from typing import Iterator, Tuple

from routeaudit.tree.nodes import TreeNode, child_nodes


class Event(Enum):
    ENTER = "enter"
    EXIT = "exit"


def walk(node: TreeNode) -> Iterator[Tuple[Event, TreeNode]]:
    """Yield (Event, node) pairs in document order, depth first."""
    yield Event.ENTER, node
    for child in child_nodes(node):
        yield from walk(child)
    yield Event.EXIT, node
