"""
Diagnostic text for over-permissive routes.
"""

from dataclasses import dataclass
from typing import AbstractSet, Sequence, Tuple

from routeaudit.review.scope import ScopeContext


ONLY = "only"
EXCEPT = "except"

# More implemented actions than this and an except: list reads better.
MAX_ONLY_ACTIONS = 3


@dataclass(frozen=True)
class Diagnostic:
    """A suggested restriction for one declaration."""
    route_path: str
    clause: str                 # ONLY or EXCEPT
    actions: Tuple[str, ...]

    @property
    def suggestion(self) -> str:
        symbols = ", ".join(f":{a}" for a in self.actions)
        return f"{self.clause}: [{symbols}]"

    @property
    def message(self) -> str:
        return f"restrict auto-generated routes {self.route_path} ({self.suggestion})"

    def __str__(self):
        return self.message


def suggest_restriction(actions: Sequence[str], implemented: AbstractSet[str]) -> Tuple[str, Tuple[str, ...]]:
    """
    Pick the restriction clause for a declaration.

    Returns (ONLY, present actions) or, when more than MAX_ONLY_ACTIONS are
    present, (EXCEPT, missing actions). Both keep the order of `actions`.
    """
    present = tuple(a for a in actions if a in implemented)
    if len(present) > MAX_ONLY_ACTIONS:
        return EXCEPT, tuple(a for a in actions if a not in implemented)
    return ONLY, present


def route_path(scope: ScopeContext, subject: str) -> str:
    """
    Human readable route for a declaration under the current scope.

    The subject is left out when it is already the innermost controller,
    i.e. when the declaration is the one that opened that scope.
    """
    segments = [scope.namespace_prefix(), scope.controller_path()]
    if scope.innermost_controller() != subject:
        segments.append(subject)
    return "/".join(s for s in segments if s.strip())


def build_diagnostic(scope: ScopeContext, subject: str, actions: Sequence[str],
                     implemented: AbstractSet[str]) -> Diagnostic:
    clause, listed = suggest_restriction(actions, implemented)
    return Diagnostic(route_path=route_path(scope, subject), clause=clause, actions=listed)
