"""
Nested routing scope bookkeeping.

Two stacks, pushed and popped by a review as it enters and leaves
scope-introducing constructs:
- namespaces:   namespace :admin / scope module: 'api' / resources ..., module: 'v1'
- controllers:  subjects of enclosing resources / resource declarations
"""

from dataclasses import dataclass, field
from typing import List, Optional


class ScopeError(RuntimeError):
    """Unbalanced push/pop. Raised for traversal bugs, never for route content."""


@dataclass
class ScopeContext:
    """Active namespaces and resource controllers, outermost first."""
    namespaces: List[str] = field(default_factory=list)
    controllers: List[str] = field(default_factory=list)

    def enter_namespace(self, name: str) -> None:
        self.namespaces.append(name)

    def exit_namespace(self) -> str:
        if not self.namespaces:
            raise ScopeError("exit_namespace() without a matching enter_namespace()")
        return self.namespaces.pop()

    def enter_controller(self, segment: str) -> None:
        self.controllers.append(segment)

    def exit_controller(self) -> str:
        if not self.controllers:
            raise ScopeError("exit_controller() without a matching enter_controller()")
        return self.controllers.pop()

    def namespace_prefix(self) -> str:
        return "/".join(self.namespaces)

    def controller_path(self) -> str:
        return "/".join(self.controllers)

    def innermost_controller(self) -> Optional[str]:
        return self.controllers[-1] if self.controllers else None

    def is_balanced(self) -> bool:
        return not self.namespaces and not self.controllers

    def reset(self) -> None:
        self.namespaces.clear()
        self.controllers.clear()
