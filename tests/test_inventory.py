"""
Tests for the controller inventory and cross-check.
"""

import pytest
from routeaudit.review.inventory import (
    ControllerInventory,
    Finding,
    InventoryError,
    cross_check,
    load_inventory,
)

from conftest import ALL_ACTIONS


class TestControllerInventory:
    """Test inventory lookups."""

    def test_lookup(self, users_inventory):
        assert users_inventory.has_controller("UsersController")
        assert "UsersController" in users_inventory
        assert not users_inventory.has_controller("PostsController")
        assert users_inventory.methods_of("UsersController") == frozenset({"index", "show"})
        assert users_inventory.has_method("UsersController", "show")
        assert not users_inventory.has_method("UsersController", "destroy")

    def test_unknown_controller_has_no_methods(self, users_inventory):
        assert users_inventory.methods_of("PostsController") == frozenset()

    def test_iteration_sorted(self):
        inventory = ControllerInventory({"b": [], "a": ["x"]})
        assert list(inventory) == ["a", "b"]
        assert len(inventory) == 2
        assert inventory.to_dict() == {"a": ["x"], "b": []}


class TestLoadInventory:
    """Test inventory documents."""

    def test_yaml_fixture(self, inventory_path):
        inventory = load_inventory(inventory_path)
        assert len(inventory) == 4
        assert inventory.methods_of("Admin::UsersController") == frozenset({"index", "destroy"})

    def test_bare_mapping_json(self, tmp_path):
        """JSON documents without a controllers: key load too."""
        path = tmp_path / "controllers.json"
        path.write_text('{"UsersController": ["index"], "EmptyController": null}', encoding="utf-8")
        inventory = load_inventory(path)
        assert inventory.methods_of("UsersController") == frozenset({"index"})
        assert inventory.methods_of("EmptyController") == frozenset()
        assert inventory.has_controller("EmptyController")

    def test_missing_file(self, tmp_path):
        with pytest.raises(InventoryError):
            load_inventory(tmp_path / "nope.yaml")

    def test_wrong_shape(self, tmp_path):
        path = tmp_path / "controllers.yaml"
        path.write_text("- UsersController\n", encoding="utf-8")
        with pytest.raises(InventoryError):
            load_inventory(path)

    def test_methods_not_a_list(self, tmp_path):
        path = tmp_path / "controllers.yaml"
        path.write_text("controllers:\n  UsersController: index\n", encoding="utf-8")
        with pytest.raises(InventoryError):
            load_inventory(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "controllers.yaml"
        path.write_text("controllers: [unclosed\n", encoding="utf-8")
        with pytest.raises(InventoryError):
            load_inventory(path)

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "controllers.yaml"
        path.write_bytes(b"controllers:\n  UsersController: [ind\xff\xfeex]\n")
        with pytest.raises(InventoryError, match="Cannot read inventory"):
            load_inventory(path)


class TestCrossCheck:
    """Test comparing generated actions with implemented ones."""

    def test_unknown_controller_skipped(self, users_inventory):
        assert cross_check("PostsController", ALL_ACTIONS, users_inventory) is None

    def test_all_implemented(self):
        inventory = ControllerInventory({"UsersController": ALL_ACTIONS})
        assert cross_check("UsersController", ALL_ACTIONS, inventory) is None

    def test_no_actions(self, users_inventory):
        assert cross_check("UsersController", [], users_inventory) is None

    def test_finding(self, users_inventory):
        finding = cross_check("UsersController", ["show", "new", "index"], users_inventory)
        assert isinstance(finding, Finding)
        assert finding.controller == "UsersController"
        assert finding.actions == ("show", "new", "index")
        assert finding.implemented == frozenset({"index", "show"})
        assert finding.missing == ("new",)
