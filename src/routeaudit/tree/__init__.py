"""
routeaudit.tree - Route File Syntax Tree

Node model, JSON serde, and traversal for pre-parsed routing files.
"""

from routeaudit.tree.nodes import (
    NodeType,
    TreeNode,
    RootNode,
    CallNode,
    BlockNode,
    ValueNode,
    ArrayNode,
    HashNode,
    child_nodes,
)
from routeaudit.tree.serde import (
    TreeFormatError,
    serialize_tree,
    deserialize_tree,
    load_tree,
    count_tree_nodes,
)
from routeaudit.tree.walker import Event, walk

__all__ = [
    # Nodes
    "NodeType",
    "TreeNode",
    "RootNode",
    "CallNode",
    "BlockNode",
    "ValueNode",
    "ArrayNode",
    "HashNode",
    "child_nodes",
    # Serde
    "TreeFormatError",
    "serialize_tree",
    "deserialize_tree",
    "load_tree",
    "count_tree_nodes",
    # Traversal
    "Event",
    "walk",
]
