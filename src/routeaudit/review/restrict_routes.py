"""
Restrict auto-generated routes.

Review a route file to make sure every auto-generated route has a
corresponding action in its controller.

Review process:
  check every resources and resource call,
  compare the routes it generates with the actions its controller defines,
  and if a route is generated for an action the controller lacks,
  suggest an only:/except: restriction.

Controllers that are not in the inventory are skipped.
"""

import logging
from typing import Optional

from routeaudit.tree.nodes import TreeNode, RootNode, CallNode, BlockNode
from routeaudit.review.base import Review
from routeaudit.review.scope import ScopeContext, ScopeError
from routeaudit.review.declarations import (
    RouteMethod,
    RouteOptions,
    RouteDeclaration,
    opens_scope,
    subject_name,
)
from routeaudit.review.conventions import resolve_actions
from routeaudit.review.naming import resolve_controller_name
from routeaudit.review.inventory import ControllerInventory, cross_check
from routeaudit.review.diagnostics import Diagnostic, build_diagnostic

logger = logging.getLogger(__name__)


class RestrictAutoGeneratedRoutesReview(Review):
    """Flag resources/resource routes whose controller lacks generated actions."""

    code = "R001"
    url = "https://rails-bestpractices.com/posts/2011/08/19/restrict-auto-generated-routes/"

    def __init__(self, inventory: ControllerInventory, api_only: bool = False, interesting_files=None):
        super().__init__(interesting_files)
        self.inventory = inventory
        self.api_only = api_only
        self.scope = ScopeContext()
        self._block_call: Optional[TreeNode] = None

    def start_file(self, root: RootNode) -> None:
        super().start_file(root)
        self.scope.reset()
        self._block_call = None

    def end_file(self, root: RootNode) -> None:
        if not self.scope.is_balanced():
            raise ScopeError(
                f"{root.filename}: scope not balanced after traversal "
                f"(namespaces={self.scope.namespaces}, controllers={self.scope.controllers})"
            )

    # ------------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------------

    def enter(self, node: TreeNode) -> None:
        if isinstance(node, BlockNode):
            self._enter_block(node)
        elif isinstance(node, CallNode):
            self._enter_call(node)

    def exit(self, node: TreeNode) -> None:
        if isinstance(node, BlockNode):
            self._exit_block(node)
        elif isinstance(node, CallNode):
            self._exit_call(node)

    def _enter_call(self, call: CallNode) -> None:
        is_block_form = call is self._block_call
        self._block_call = None

        declaration = RouteDeclaration.from_call(call, is_block_form=is_block_form)
        if declaration is None:
            return

        # module: on resources scopes the controller lookup of this call only
        if declaration.kind is RouteMethod.RESOURCES and declaration.options.module:
            self.scope.enter_namespace(declaration.options.module)
        self.check(declaration, call)
        self.scope.enter_controller(declaration.subject)

    def _exit_call(self, call: CallNode) -> None:
        kind = RouteMethod.from_message(call.message)
        if kind is None or not kind.is_declaration:
            return
        self.scope.exit_controller()
        if kind is RouteMethod.RESOURCES and RouteOptions.from_call(call).module:
            self.scope.exit_namespace()

    def _enter_block(self, block: BlockNode) -> None:
        self._block_call = block.call
        if not opens_scope(block):
            return

        method = RouteMethod.from_message(block.message)
        if method is RouteMethod.NAMESPACE:
            self.scope.enter_namespace(subject_name(block.call))
        elif method is RouteMethod.RESOURCES or method is RouteMethod.RESOURCE:
            self.scope.enter_controller(subject_name(block.call))
        elif method is RouteMethod.SCOPE:
            module = RouteOptions.from_call(block.call).module
            if module:
                self.scope.enter_namespace(module)

    def _exit_block(self, block: BlockNode) -> None:
        if not opens_scope(block):
            return

        method = RouteMethod.from_message(block.message)
        if method is RouteMethod.NAMESPACE:
            self.scope.exit_namespace()
        elif method is RouteMethod.RESOURCES or method is RouteMethod.RESOURCE:
            self.scope.exit_controller()
        elif method is RouteMethod.SCOPE:
            if RouteOptions.from_call(block.call).module:
                self.scope.exit_namespace()

    # ------------------------------------------------------------------------
    # Check
    # ------------------------------------------------------------------------

    def check(self, declaration: RouteDeclaration, node: TreeNode) -> Optional[Diagnostic]:
        """Compare one declaration with its controller; record an issue on mismatch."""
        actions = resolve_actions(declaration.kind, declaration.options, self.api_only)
        controller = resolve_controller_name(
            declaration.subject,
            declaration.options.controller,
            self.scope.namespaces,
        )

        finding = cross_check(controller, actions, self.inventory)
        if finding is None:
            return None

        diagnostic = build_diagnostic(self.scope, declaration.subject, finding.actions, finding.implemented)
        logger.debug(
            "%s:%d %s %s -> %s missing %s",
            self.filename, declaration.line, declaration.kind.value,
            "block" if declaration.is_block_form else "inline",
            controller, list(finding.missing),
        )
        self.add_error(diagnostic.message, node)
        return diagnostic
