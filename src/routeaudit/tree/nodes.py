"""
Route File Syntax Tree

Node types for a pre-parsed routing file (config/routes.rb).
The tree is produced by an external parser and loaded through
routeaudit.tree.serde; nothing here reads Ruby source text.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union, Dict, Any, Tuple
from enum import Enum, auto


class NodeType(Enum):
    """Types of syntax tree nodes."""
    ROOT = auto()    # Top-level container (one per route file)
    CALL = auto()    # resources :users, only: [:show]   /   map.resources :users
    BLOCK = auto()   # namespace :admin do ... end
    VALUE = auto()   # :users, 'api', Admin::User, 42
    ARRAY = auto()   # [:show, :index]
    HASH = auto()    # only: [:show], module: 'api'


@dataclass
class TreeNode:
    """Base class for tree nodes."""
    node_type: NodeType = None  # Set by subclasses in __post_init__
    line: int = 0
    column: int = 0


@dataclass
class ValueNode(TreeNode):
    """A literal (symbol, string, constant, identifier, number, bool, nil)."""
    value: str = ""
    value_type: str = "symbol"  # 'symbol', 'string', 'identifier', 'const', 'number', 'bool', 'nil'

    def __post_init__(self):
        self.node_type = NodeType.VALUE

    def __repr__(self):
        return f"Value({self.value!r}, {self.value_type})"

    def __str__(self):
        return self.value

    def to_ruby(self) -> str:
        """Render the literal back to Ruby syntax."""
        if self.value_type == 'symbol':
            return f":{self.value}"
        if self.value_type == 'string':
            return f"'{self.value}'"
        return self.value

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_type': 'value',
            'value': self.value,
            'value_type': self.value_type,
            'line': self.line,
            'column': self.column,
        }


@dataclass
class ArrayNode(TreeNode):
    """An array literal: [:show, :index]"""
    items: List[TreeNode] = field(default_factory=list)

    def __post_init__(self):
        self.node_type = NodeType.ARRAY

    def __repr__(self):
        return f"Array({self.items})"

    def __str__(self):
        return "[" + ", ".join(str(i) for i in self.items) + "]"

    def to_ruby(self) -> str:
        return "[" + ", ".join(_to_ruby(i) for i in self.items) + "]"

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_type': 'array',
            'items': [i.to_dict() for i in self.items],
            'line': self.line,
            'column': self.column,
        }


@dataclass
class HashNode(TreeNode):
    """
    A trailing hash argument: only: [:show], module: 'api'

    Keys are stored without label/symbol decoration ("only", not "only:").
    """
    pairs: List[Tuple[str, TreeNode]] = field(default_factory=list)

    def __post_init__(self):
        self.node_type = NodeType.HASH

    def __repr__(self):
        return f"Hash({[k for k, _ in self.pairs]})"

    def __str__(self):
        return "{" + ", ".join(f"{k}: {v}" for k, v in self.pairs) + "}"

    @property
    def keys(self) -> List[str]:
        return [k for k, _ in self.pairs]

    def has_key(self, key: str) -> bool:
        return any(k == key for k, _ in self.pairs)

    def get(self, key: str) -> Optional[TreeNode]:
        """Value node for key, or None. Later duplicates win, as in Ruby."""
        found = None
        for k, v in self.pairs:
            if k == key:
                found = v
        return found

    def to_ruby(self) -> str:
        return ", ".join(f"{k}: {_to_ruby(v)}" for k, v in self.pairs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_type': 'hash',
            'pairs': [{'key': k, 'value': v.to_dict()} for k, v in self.pairs],
            'line': self.line,
            'column': self.column,
        }


@dataclass
class CallNode(TreeNode):
    """
    A method call without a block.

    receiver is None for a plain call (`resources :users`) and holds the
    receiver's source text for a qualified call (`map.resources :users`).
    """
    message: str = ""
    receiver: Optional[str] = None
    arguments: List[TreeNode] = field(default_factory=list)

    def __post_init__(self):
        self.node_type = NodeType.CALL

    def __repr__(self):
        target = f"{self.receiver}.{self.message}" if self.receiver else self.message
        return f"Call({target}, {len(self.arguments)} args)"

    @property
    def is_qualified(self) -> bool:
        return self.receiver is not None

    def argument(self, index: int) -> Optional[TreeNode]:
        """Positional argument by index (negative indexes allowed), or None."""
        try:
            return self.arguments[index]
        except IndexError:
            return None

    def to_ruby(self) -> str:
        target = f"{self.receiver}.{self.message}" if self.receiver else self.message
        if not self.arguments:
            return target
        return f"{target} " + ", ".join(_to_ruby(a) for a in self.arguments)

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_type': 'call',
            'message': self.message,
            'receiver': self.receiver,
            'arguments': [a.to_dict() for a in self.arguments],
            'line': self.line,
            'column': self.column,
        }


@dataclass
class BlockNode(TreeNode):
    """
    A call with a do...end (or brace) block: namespace :admin do ... end

    call is usually a CallNode; producers may emit another node for call
    shapes this tree does not model, and such blocks never open a scope.
    """
    call: Optional[TreeNode] = None
    body: List[TreeNode] = field(default_factory=list)

    def __post_init__(self):
        self.node_type = NodeType.BLOCK

    def __repr__(self):
        return f"Block({self.call!r}, {len(self.body)} statements)"

    @property
    def message(self) -> str:
        return self.call.message if isinstance(self.call, CallNode) else ""

    def to_ruby(self, indent: int = 0) -> str:
        ind = '  ' * indent
        lines = [f"{ind}{_to_ruby(self.call)} do"]
        for stmt in self.body:
            if isinstance(stmt, BlockNode):
                lines.append(stmt.to_ruby(indent + 1))
            else:
                lines.append(f"{ind}  {_to_ruby(stmt)}")
        lines.append(f"{ind}end")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_type': 'block',
            'call': self.call.to_dict() if self.call is not None else None,
            'body': [s.to_dict() for s in self.body],
            'line': self.line,
            'column': self.column,
        }


@dataclass
class RootNode(TreeNode):
    """Root of the tree, holds the top-level statements of one route file."""
    children: List[Union[CallNode, BlockNode]] = field(default_factory=list)
    filename: str = "<unknown>"

    def __post_init__(self):
        self.node_type = NodeType.ROOT

    def __repr__(self):
        return f"Root({self.filename}, {len(self.children)} children)"

    def get_calls(self, message: str = None) -> List[CallNode]:
        """All top-level calls (including the calls of blocks), optionally by message."""
        calls = []
        for child in self.children:
            call = child.call if isinstance(child, BlockNode) else child
            if isinstance(call, CallNode) and (message is None or call.message == message):
                calls.append(call)
        return calls

    def to_ruby(self) -> str:
        lines = []
        for child in self.children:
            if isinstance(child, BlockNode):
                lines.append(child.to_ruby())
            else:
                lines.append(_to_ruby(child))
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_type': 'root',
            'filename': self.filename,
            'children': [c.to_dict() for c in self.children],
            'line': self.line,
            'column': self.column,
        }


def _to_ruby(node) -> str:
    if node is None:
        return ""
    if hasattr(node, 'to_ruby'):
        return node.to_ruby()
    return str(node)


def child_nodes(node: TreeNode) -> List[TreeNode]:
    """Direct children of a node, in document order."""
    if isinstance(node, RootNode):
        return list(node.children)
    if isinstance(node, BlockNode):
        return ([node.call] if node.call is not None else []) + list(node.body)
    if isinstance(node, CallNode):
        return list(node.arguments)
    if isinstance(node, ArrayNode):
        return list(node.items)
    if isinstance(node, HashNode):
        return [v for _, v in node.pairs]
    return []
