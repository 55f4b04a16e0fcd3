"""
Tree Serialization - JSON <-> syntax tree conversion.

The route-file parser lives outside this package; it hands trees over as
JSON documents in the shape produced by serialize_tree():

    {"_type": "root", "filename": "config/routes.rb", "children": [
        {"_type": "block", "line": 2, "column": 2,
         "call": {"_type": "call", "message": "namespace", "receiver": null,
                  "arguments": [{"_type": "value", "value": "admin",
                                 "value_type": "symbol"}]},
         "body": [...]}
    ]}

Usage:
    from routeaudit.tree.serde import load_tree, serialize_tree, count_tree_nodes
"""

import json
from pathlib import Path
from typing import Dict, Any, Union, List

from routeaudit.tree.nodes import (
    TreeNode,
    RootNode,
    CallNode,
    BlockNode,
    ValueNode,
    ArrayNode,
    HashNode,
)


VALUE_TYPES = {'symbol', 'string', 'identifier', 'const', 'number', 'bool', 'nil'}


class TreeFormatError(ValueError):
    """A tree document does not match the expected node shapes."""
    def __init__(self, message: str, path: str = "$"):
        self.path = path
        self.message = message
        super().__init__(f"Malformed tree at {path}: {message}")


def serialize_tree(tree: RootNode) -> bytes:
    """
    Serialize a tree to JSON bytes.

    Args:
        tree: Root node of a route file

    Returns:
        UTF-8 encoded JSON bytes
    """
    return json.dumps(tree.to_dict(), separators=(',', ':')).encode('utf-8')


def deserialize_tree(data: Union[bytes, str, Dict[str, Any]]) -> RootNode:
    """
    Build a tree from JSON bytes, a JSON string, or an already decoded dict.

    Raises:
        TreeFormatError: if the document is not valid JSON or not a route tree
    """
    if isinstance(data, (bytes, str)):
        try:
            if isinstance(data, bytes):
                data = data.decode('utf-8')
            data = json.loads(data)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise TreeFormatError(f"invalid JSON ({e})")
        except RecursionError:
            raise TreeFormatError("document nested too deeply")

    try:
        node = _build(data, "$")
    except RecursionError:
        raise TreeFormatError("document nested too deeply")
    if not isinstance(node, RootNode):
        raise TreeFormatError(f"expected a 'root' node, got '{data.get('_type')}'")
    return node


def load_tree(path: Union[str, Path]) -> RootNode:
    """Load a tree document from disk."""
    return deserialize_tree(Path(path).read_bytes())


def count_tree_nodes(tree: Union[TreeNode, Dict[str, Any]]) -> int:
    """
    Count nodes in a tree or a decoded tree document.

    Hash pairs are not nodes themselves; their values are.
    """
    if isinstance(tree, TreeNode):
        tree = tree.to_dict()

    count = 1
    for key in ('children', 'arguments', 'items', 'body'):
        for item in tree.get(key) or []:
            if isinstance(item, dict):
                count += count_tree_nodes(item)
    if isinstance(tree.get('call'), dict):
        count += count_tree_nodes(tree['call'])
    for pair in tree.get('pairs') or []:
        if isinstance(pair, dict) and isinstance(pair.get('value'), dict):
            count += count_tree_nodes(pair['value'])
    return count


# ============================================================================
# DOCUMENT -> NODES
# ============================================================================

def _position(data: Dict[str, Any]) -> Dict[str, int]:
    try:
        return {'line': int(data.get('line') or 0), 'column': int(data.get('column') or 0)}
    except (TypeError, ValueError):
        raise TreeFormatError("line/column must be integers")


def _require(data: Dict[str, Any], key: str, path: str):
    if key not in data:
        raise TreeFormatError(f"missing field '{key}'", path)
    return data[key]


def _build_list(items, path: str) -> List[TreeNode]:
    if not isinstance(items, list):
        raise TreeFormatError(f"expected a list, got {type(items).__name__}", path)
    return [_build(item, f"{path}[{i}]") for i, item in enumerate(items)]


def _build(data: Any, path: str) -> TreeNode:
    if not isinstance(data, dict):
        raise TreeFormatError(f"expected an object, got {type(data).__name__}", path)

    node_type = data.get('_type')

    if node_type == 'root':
        return RootNode(
            filename=str(data.get('filename') or "<unknown>"),
            children=_build_list(data.get('children', []), f"{path}.children"),
            **_position(data)
        )

    elif node_type == 'call':
        message = _require(data, 'message', path)
        receiver = data.get('receiver')
        return CallNode(
            message=str(message),
            receiver=str(receiver) if receiver is not None else None,
            arguments=_build_list(data.get('arguments', []), f"{path}.arguments"),
            **_position(data)
        )

    elif node_type == 'block':
        call = data.get('call')
        return BlockNode(
            call=_build(call, f"{path}.call") if call is not None else None,
            body=_build_list(data.get('body', []), f"{path}.body"),
            **_position(data)
        )

    elif node_type == 'value':
        value = _require(data, 'value', path)
        value_type = data.get('value_type', 'symbol')
        if value_type not in VALUE_TYPES:
            raise TreeFormatError(f"unknown value_type '{value_type}'", path)
        return ValueNode(
            value='' if value is None else str(value),
            value_type=value_type,
            **_position(data)
        )

    elif node_type == 'array':
        return ArrayNode(
            items=_build_list(data.get('items', []), f"{path}.items"),
            **_position(data)
        )

    elif node_type == 'hash':
        pairs = data.get('pairs', [])
        if not isinstance(pairs, list):
            raise TreeFormatError("expected a list of pairs", f"{path}.pairs")
        built = []
        for i, pair in enumerate(pairs):
            pair_path = f"{path}.pairs[{i}]"
            if not isinstance(pair, dict):
                raise TreeFormatError("expected a {key, value} object", pair_path)
            key = str(_require(pair, 'key', pair_path)).lstrip(':').rstrip(':')
            built.append((key, _build(_require(pair, 'value', pair_path), f"{pair_path}.value")))
        return HashNode(pairs=built, **_position(data))

    raise TreeFormatError(f"unknown node type '{node_type}'", path)
