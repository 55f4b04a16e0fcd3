"""
Controller inventory and the route/controller cross-check.

The inventory maps fully qualified controller names to the public action
methods they define. Building it from controller sources is someone else's
job; here it is loaded from a YAML (or JSON) document:

    controllers:
      UsersController: [index, show]
      Admin::UsersController:
        - index
        - destroy
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

import yaml

logger = logging.getLogger(__name__)


class InventoryError(ValueError):
    """An inventory document could not be read."""


class ControllerInventory:
    """Read-only controller -> methods lookup."""

    def __init__(self, controllers: Optional[Mapping[str, Iterable[str]]] = None):
        self._controllers: Dict[str, FrozenSet[str]] = {
            str(name): frozenset(str(m) for m in methods)
            for name, methods in (controllers or {}).items()
        }

    def __len__(self) -> int:
        return len(self._controllers)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._controllers))

    def __contains__(self, name: str) -> bool:
        return self.has_controller(name)

    def __repr__(self):
        return f"ControllerInventory({len(self)} controllers)"

    def has_controller(self, name: str) -> bool:
        return name in self._controllers

    def methods_of(self, name: str) -> FrozenSet[str]:
        """Methods of a controller; empty for unknown controllers."""
        return self._controllers.get(name, frozenset())

    def has_method(self, name: str, method: str) -> bool:
        return method in self.methods_of(name)

    def to_dict(self) -> Dict[str, List[str]]:
        return {name: sorted(self._controllers[name]) for name in self}


def load_inventory(path: Union[str, Path]) -> ControllerInventory:
    """
    Load an inventory from a YAML or JSON file.

    Accepts either a top-level `controllers:` mapping or a bare mapping.

    Raises:
        InventoryError: unreadable file or wrong document shape
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise InventoryError(f"Cannot read inventory {path}: {e}") from e

    if isinstance(data, dict) and 'controllers' in data:
        data = data['controllers'] or {}
    if not isinstance(data, dict):
        raise InventoryError(f"Inventory {path} must be a mapping of controller -> methods")

    controllers = {}
    for name, methods in data.items():
        if methods is None:
            methods = []
        if not isinstance(methods, list):
            raise InventoryError(f"Inventory {path}: methods of {name} must be a list")
        controllers[name] = methods

    inventory = ControllerInventory(controllers)
    logger.info("Loaded %d controllers from %s", len(inventory), path)
    return inventory


@dataclass(frozen=True)
class Finding:
    """Routes generated for a controller that lacks some of the actions."""
    controller: str
    actions: Tuple[str, ...]
    implemented: FrozenSet[str]

    @property
    def missing(self) -> Tuple[str, ...]:
        return tuple(a for a in self.actions if a not in self.implemented)


def cross_check(controller: str, actions: Iterable[str],
                inventory: ControllerInventory) -> Optional[Finding]:
    """
    Compare generated actions against the controller's methods.

    Controllers missing from the inventory cannot be compared and yield
    no finding.
    """
    if not inventory.has_controller(controller):
        logger.debug("%s not in inventory, skipping", controller)
        return None

    actions = tuple(actions)
    implemented = inventory.methods_of(controller)
    if all(action in implemented for action in actions):
        return None
    return Finding(controller=controller, actions=actions, implemented=implemented)
