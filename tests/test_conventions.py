"""
Tests for route declarations and their conventional actions.
"""

import pytest
from routeaudit.tree.nodes import ValueNode, BlockNode, CallNode
from routeaudit.review.declarations import (
    RouteMethod,
    RouteOptions,
    RouteDeclaration,
    is_legacy_mapping_receiver,
    opens_scope,
    subject_name,
)
from routeaudit.review.conventions import (
    default_actions,
    resolve_actions,
    resource_actions,
    resources_actions,
)

from conftest import ALL_ACTIONS, sym, string, arr, opts, call, block


def actions_for(c, api_only=False):
    declaration = RouteDeclaration.from_call(c)
    return resolve_actions(declaration.kind, declaration.options, api_only)


class TestRouteMethod:
    """Test the closed set of routing methods."""

    def test_known_messages(self):
        assert RouteMethod.from_message("resources") is RouteMethod.RESOURCES
        assert RouteMethod.from_message("resource") is RouteMethod.RESOURCE
        assert RouteMethod.from_message("namespace") is RouteMethod.NAMESPACE
        assert RouteMethod.from_message("scope") is RouteMethod.SCOPE

    def test_unknown_message(self):
        """Unrecognised messages map to None."""
        assert RouteMethod.from_message("get") is None
        assert RouteMethod.from_message("concern") is None

    def test_declarations(self):
        assert RouteMethod.RESOURCES.is_declaration
        assert RouteMethod.RESOURCE.is_declaration
        assert not RouteMethod.NAMESPACE.is_declaration
        assert not RouteMethod.SCOPE.is_declaration


class TestRouteOptions:
    """Test option extraction at the tree boundary."""

    def test_no_options(self):
        options = RouteOptions.from_call(call("resources", "users"))
        assert options == RouteOptions()
        assert not options.has_only
        assert not options.has_except

    def test_all_options(self):
        options = RouteOptions.from_call(call(
            "resources", "users",
            opts(controller=string("admin/people"), module=string("api"), only=["show"]),
        ))
        assert options.controller == "admin/people"
        assert options.module == "api"
        assert options.only == ("show",)
        assert options.except_ is None

    def test_scalar_only(self):
        """A single symbol is a one-element list."""
        options = RouteOptions.from_call(call("resource", "profile", opts(only="show")))
        assert options.only == ("show",)
        assert not options.only_none

    def test_sentinels(self):
        assert RouteOptions.from_call(call("resources", "users", opts(only="none"))).only_none
        assert RouteOptions.from_call(call("resources", "users", opts(except_="all"))).except_all

    def test_sentinel_inside_array_is_an_action(self):
        """[:none] is a list holding an action named none, not the sentinel."""
        options = RouteOptions.from_call(call("resources", "users", opts(only=["none"])))
        assert not options.only_none
        assert options.only == ("none",)

    def test_module_from_only_argument(self):
        """scope module: 'admin' carries the hash as its first argument."""
        options = RouteOptions.from_call(call("scope", opts(module=string("admin"))))
        assert options.module == "admin"
        assert options.controller is None

    def test_non_hash_second_argument(self):
        """A second argument that is not a hash means no options."""
        options = RouteOptions.from_call(call("resources", "users", "posts"))
        assert options == RouteOptions()

    def test_malformed_values_ignored(self):
        """Values of the wrong shape are treated as absent."""
        number = ValueNode(value="5", value_type="number")
        options = RouteOptions.from_call(call(
            "resources", "users",
            opts(only=number, controller=number, except_=["destroy"]),
        ))
        assert options.only is None
        assert options.controller is None
        assert options.except_ == ("destroy",)


class TestRouteDeclaration:
    """Test declarations built from calls."""

    def test_resources(self):
        d = RouteDeclaration.from_call(call("resources", "users", line=3))
        assert d.kind is RouteMethod.RESOURCES
        assert d.is_plural
        assert d.subject == "users"
        assert d.line == 3
        assert not d.is_block_form

    def test_string_subject(self):
        d = RouteDeclaration.from_call(call("resource", string("profile")), is_block_form=True)
        assert d.kind is RouteMethod.RESOURCE
        assert d.subject == "profile"
        assert d.is_block_form

    def test_other_calls(self):
        """Only resources/resource calls are declarations."""
        assert RouteDeclaration.from_call(call("namespace", "admin")) is None
        assert RouteDeclaration.from_call(call("get", string("/about"))) is None

    def test_subject_name_without_arguments(self):
        assert subject_name(call("scope", opts(module=string("admin")))) == ""
        assert subject_name(call("resources")) == ""


class TestLegacyReceiver:
    """Test the map.* exclusion."""

    def test_map_receiver(self):
        assert is_legacy_mapping_receiver(call("resources", "users", receiver="map"))
        assert not is_legacy_mapping_receiver(call("resources", "users", receiver="admin"))
        assert not is_legacy_mapping_receiver(call("resources", "users"))

    def test_opens_scope(self):
        assert opens_scope(block(call("namespace", "admin")))
        assert opens_scope(block(call("resources", "users", receiver="admin")))
        assert not opens_scope(block(call("namespace", "admin", receiver="map")))

    def test_block_without_call(self):
        """Blocks around shapes the tree does not model never open a scope."""
        assert not opens_scope(BlockNode(call=None))
        assert not opens_scope(BlockNode(call=sym("users")))


class TestDefaultActions:
    """Test conventional action sets."""

    def test_resources(self):
        assert set(resources_actions()) == set(ALL_ACTIONS)
        assert resources_actions() == ["show", "new", "create", "edit", "update", "destroy", "index"]

    def test_resources_api_only(self):
        assert resources_actions(api_only=True) == ["show", "create", "update", "destroy", "index"]

    def test_resource_never_has_index(self):
        assert "index" not in resource_actions()
        assert "index" not in resource_actions(api_only=True)
        assert resource_actions() == ["show", "new", "create", "edit", "update", "destroy"]

    def test_plural_superset_of_singular(self):
        for api_only in (False, True):
            assert set(resources_actions(api_only)) == set(resource_actions(api_only)) | {"index"}

    def test_non_declaration(self):
        with pytest.raises(ValueError):
            default_actions(RouteMethod.NAMESPACE)


class TestResolveActions:
    """Test only/except filtering."""

    def test_no_options(self):
        assert set(actions_for(call("resources", "users"))) == set(ALL_ACTIONS)
        assert set(actions_for(call("resources", "users"), api_only=True)) == {
            "index", "show", "create", "update", "destroy"}

    @pytest.mark.parametrize("message", ["resources", "resource"])
    def test_only(self, message):
        """only: [:show] is {show} for both kinds."""
        assert actions_for(call(message, "users", opts(only=["show"]))) == ["show"]

    def test_only_keeps_listed_order_without_duplicates(self):
        c = call("resources", "users", opts(only=["show", "index", "show"]))
        assert actions_for(c) == ["show", "index"]

    def test_only_may_name_non_default_actions(self):
        """An explicit only: list is taken as written."""
        assert actions_for(call("resource", "profile", opts(only=["index"]))) == ["index"]

    def test_except(self):
        c = call("resources", "users", opts(except_=["destroy"]))
        assert actions_for(c) == ["show", "new", "create", "edit", "update", "index"]

    def test_except_resource(self):
        c = call("resource", "profile", opts(except_=["new", "edit"]))
        assert actions_for(c) == ["show", "create", "update", "destroy"]

    def test_only_none(self):
        assert actions_for(call("resources", "users", opts(only="none"))) == []

    def test_except_all(self):
        assert actions_for(call("resources", "users", opts(except_="all"))) == []

    def test_only_wins_over_except(self):
        c = call("resources", "users", opts(only=["show"], except_=["show"]))
        assert actions_for(c) == ["show"]

    def test_malformed_only_falls_back_to_except(self):
        c = call("resources", "users", opts(only=ValueNode(value="1", value_type="number"),
                                             except_=["index"]))
        assert "index" not in actions_for(c)
        assert len(actions_for(c)) == 6

    def test_except_string_value(self):
        c = CallNode(message="resources", arguments=[sym("users"), opts(except_=string("destroy"))])
        assert "destroy" not in actions_for(c)

    def test_empty_only_list(self):
        assert actions_for(call("resources", "users", opts(only=arr()))) == []
