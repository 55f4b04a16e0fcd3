"""
routeaudit.review - Route Reviews

Reviews walk a route tree and report routes that do not match the
application's controllers.
"""

from .base import Review, ReviewIssue, Severity, ROUTE_FILES
from .scope import ScopeContext, ScopeError
from .declarations import RouteMethod, RouteOptions, RouteDeclaration, is_legacy_mapping_receiver
from .conventions import resolve_actions, resource_actions, resources_actions
from .naming import resolve_controller_name
from .inventory import ControllerInventory, InventoryError, Finding, cross_check, load_inventory
from .diagnostics import Diagnostic, suggest_restriction, route_path
from .restrict_routes import RestrictAutoGeneratedRoutesReview

__all__ = [
    # Framework
    "Review",
    "ReviewIssue",
    "Severity",
    "ROUTE_FILES",
    # Scope
    "ScopeContext",
    "ScopeError",
    # Declarations
    "RouteMethod",
    "RouteOptions",
    "RouteDeclaration",
    "is_legacy_mapping_receiver",
    # Conventions
    "resolve_actions",
    "resource_actions",
    "resources_actions",
    "resolve_controller_name",
    # Inventory
    "ControllerInventory",
    "InventoryError",
    "Finding",
    "cross_check",
    "load_inventory",
    # Diagnostics
    "Diagnostic",
    "suggest_restriction",
    "route_path",
    # Reviews
    "RestrictAutoGeneratedRoutesReview",
]
