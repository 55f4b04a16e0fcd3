"""
routeaudit - Rails Route Auditor

Checks that routes generated by resources/resource declarations have
matching controller actions.
"""

__version__ = "0.1.0"
__author__ = "routeaudit contributors"

from routeaudit.tree import load_tree, deserialize_tree
from routeaudit.linter import RouteLinter
