"""
Route declarations - typed views over tree calls.

The review never inspects hash nodes directly; everything it needs from a
call's arguments goes through RouteOptions.from_call().
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from routeaudit.tree.nodes import TreeNode, CallNode, BlockNode, ValueNode, ArrayNode, HashNode


# Receiver of the pre-Rails-3 `ActionController::Routing::Routes.draw do |map|`
# routes. map.* blocks use the old conventions and are not tracked.
LEGACY_MAPPING_RECEIVER = "map"

TEXT_VALUE_TYPES = ('symbol', 'string', 'identifier', 'const')


class RouteMethod(Enum):
    """Routing DSL methods the review understands."""
    RESOURCES = "resources"
    RESOURCE = "resource"
    NAMESPACE = "namespace"
    SCOPE = "scope"

    @classmethod
    def from_message(cls, message: str) -> Optional["RouteMethod"]:
        try:
            return cls(message)
        except ValueError:
            return None

    @property
    def is_declaration(self) -> bool:
        return self in (RouteMethod.RESOURCES, RouteMethod.RESOURCE)


def value_text(node: Optional[TreeNode]) -> Optional[str]:
    """Text of a symbol/string/constant literal, None for anything else."""
    if isinstance(node, ValueNode) and node.value_type in TEXT_VALUE_TYPES:
        return node.value
    return None


def value_list(node: Optional[TreeNode]) -> Optional[Tuple[str, ...]]:
    """
    Coerce a literal or array literal to a tuple of names.

    :show -> ('show',), [:show, :index] -> ('show', 'index').
    Returns None when the node is neither.
    """
    text = value_text(node)
    if text is not None:
        return (text,)
    if isinstance(node, ArrayNode):
        return tuple(t for t in (value_text(i) for i in node.items) if t is not None)
    return None


def is_legacy_mapping_receiver(call: CallNode) -> bool:
    return call.receiver == LEGACY_MAPPING_RECEIVER


def opens_scope(block: BlockNode) -> bool:
    """
    Whether a block may push routing scope.

    Only blocks around a plain call, or around a qualified call on something
    other than the legacy `map` object, take part in scope tracking.
    """
    call = block.call
    if not isinstance(call, CallNode):
        return False
    return not call.is_qualified or not is_legacy_mapping_receiver(call)


@dataclass(frozen=True)
class RouteOptions:
    """Options recognised on a routing call."""
    controller: Optional[str] = None
    module: Optional[str] = None
    only: Optional[Tuple[str, ...]] = None
    except_: Optional[Tuple[str, ...]] = None
    only_none: bool = False     # only: :none
    except_all: bool = False    # except: :all

    @property
    def has_only(self) -> bool:
        return self.only_none or self.only is not None

    @property
    def has_except(self) -> bool:
        return self.except_all or self.except_ is not None

    @classmethod
    def from_call(cls, call: CallNode) -> "RouteOptions":
        """
        Read options from a call's arguments.

        controller/only/except come from a hash in the second argument
        position; module comes from a hash in the last position, so that
        `scope module: 'admin'` is recognised too. Values of the wrong shape
        are ignored.
        """
        module = None
        last = call.argument(-1)
        if isinstance(last, HashNode):
            module = value_text(last.get('module'))

        second = call.argument(1) if len(call.arguments) > 1 else None
        if not isinstance(second, HashNode):
            return cls(module=module)

        only_node = second.get('only')
        except_node = second.get('except')

        return cls(
            controller=value_text(second.get('controller')),
            module=module,
            only=value_list(only_node),
            except_=value_list(except_node),
            only_none=_is_sentinel(only_node, 'none'),
            except_all=_is_sentinel(except_node, 'all'),
        )


def _is_sentinel(node: Optional[TreeNode], word: str) -> bool:
    return isinstance(node, ValueNode) and value_text(node) == word


@dataclass(frozen=True)
class RouteDeclaration:
    """A resources/resource call, as the review sees it."""
    kind: RouteMethod
    subject: str
    options: RouteOptions
    is_block_form: bool = False
    line: int = 0
    column: int = 0

    @property
    def is_plural(self) -> bool:
        return self.kind is RouteMethod.RESOURCES

    @classmethod
    def from_call(cls, call: CallNode, is_block_form: bool = False) -> Optional["RouteDeclaration"]:
        """Declaration for a resources/resource call, None for any other call."""
        kind = RouteMethod.from_message(call.message)
        if kind is None or not kind.is_declaration:
            return None
        return cls(
            kind=kind,
            subject=subject_name(call),
            options=RouteOptions.from_call(call),
            is_block_form=is_block_form,
            line=call.line,
            column=call.column,
        )


def subject_name(call: CallNode) -> str:
    """First positional argument as text; '' when absent."""
    first = call.argument(0)
    if first is None or isinstance(first, HashNode):
        return ""
    text = value_text(first)
    return text if text is not None else str(first)
