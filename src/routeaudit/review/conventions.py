"""
Conventional actions generated by resources/resource declarations.
"""

from typing import List, Iterable

from routeaudit.review.declarations import RouteMethod, RouteOptions


RESOURCE_ACTIONS = ("show", "new", "create", "edit", "update", "destroy")
API_RESOURCE_ACTIONS = ("show", "create", "update", "destroy")
COLLECTION_ACTIONS = ("index",)


def resource_actions(api_only: bool = False) -> List[str]:
    """Actions generated by a singular `resource`."""
    return list(API_RESOURCE_ACTIONS if api_only else RESOURCE_ACTIONS)


def resources_actions(api_only: bool = False) -> List[str]:
    """Actions generated by a plural `resources`."""
    return resource_actions(api_only) + list(COLLECTION_ACTIONS)


def default_actions(kind: RouteMethod, api_only: bool = False) -> List[str]:
    if kind is RouteMethod.RESOURCES:
        return resources_actions(api_only)
    if kind is RouteMethod.RESOURCE:
        return resource_actions(api_only)
    raise ValueError(f"{kind.value} does not generate actions")


def _unique(names: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for name in names:
        if name not in seen:
            seen.add(name)
            result.append(name)
    return result


def resolve_actions(kind: RouteMethod, options: RouteOptions, api_only: bool = False) -> List[str]:
    """
    Actions a declaration actually generates.

    only: wins over except:. `only: :none` and `except: :all` generate nothing.
    """
    base = default_actions(kind, api_only)

    if options.has_only:
        if options.only_none:
            return []
        return _unique(options.only)

    if options.has_except:
        if options.except_all:
            return []
        excluded = set(options.except_)
        return [action for action in base if action not in excluded]

    return base
