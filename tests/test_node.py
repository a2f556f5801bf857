# tests/test_node.py
"""
Tests for the node object model: capabilities and navigation caches.
"""

import pytest

from axauto.capabilities import ActionInvoker, CallResult
from axauto.config import AXConfig
from axauto.exceptions import ActionError, AttributeReadError
from axauto.interfaces import AXError
from axauto.node import Node

from conftest import el


@pytest.fixture
def root(control_center, backend):
    return Node(control_center, backend)


@pytest.fixture
def button(backend):
    return Node(el("AXButton", "Sound", actions=("AXPress", "AXShowMenu"), RoleDescription="button"), backend)


class TestCapabilities:
    """Tests for discovered attributes and actions."""

    def test_attribute_matches_direct_call(self, button, backend):
        """Should return exactly what a direct copy-attribute-value call returns."""
        status, direct = backend.copy_attribute_value(button.handle, "AXRoleDescription")
        assert status == AXError.SUCCESS
        assert button.roleDescription == direct == "button"

    def test_aliases(self, button):
        """Should expose snake_case and native names for each capability."""
        assert button.role_description == "button"
        assert button.AXRole == "AXButton"
        assert button.show_menu is button.showMenu
        assert button.AXPress is button.press

    def test_attributes_are_live(self, button):
        """Should re-read the element on every access."""
        assert button.description == "Sound"
        button.handle.attributes["AXDescription"] = "Volume"
        assert button.description == "Volume"

    def test_reads_go_to_the_backend_each_time(self, button, backend):
        """Should not cache attribute values."""
        button.description
        button.description
        assert backend.calls["copy_attribute_value:AXDescription"] == 2

    def test_children_attribute_not_bound(self, button):
        """Should keep children as a navigation member."""
        assert "children" not in button.attributes
        assert "AXChildren" not in button.attribute_names
        assert button.children == []

    def test_names(self, button):
        """Should list native names in enumeration order."""
        assert button.attribute_names == ["AXRole", "AXDescription", "AXRoleDescription"]
        assert button.action_names == ["AXPress", "AXShowMenu"]
        assert list(button.actions) == ["press", "showMenu"]

    def test_dir_lists_capabilities(self, button):
        """Should include capability names in dir()."""
        names = dir(button)
        assert "roleDescription" in names
        assert "press" in names
        assert "cached_children" in names

    def test_unknown_capability(self, button):
        """Should raise AttributeError for names the element does not expose."""
        with pytest.raises(AttributeError):
            button.title
        assert not hasattr(button, "increment")

    def test_get_with_default(self, button):
        """Should fall back to the default for missing or empty values."""
        assert button.get("description") == "Sound"
        assert button.get("title", "none") == "none"
        assert button.get("press", "not an attribute") == "not an attribute"

    def test_no_value_reads_as_none(self, backend):
        """Should treat an attribute without a value as None."""
        node = Node(el("AXTextField", None, Value=None), backend)
        assert node.value is None
        assert node.read_attribute("value").empty

    def test_failed_read_returns_none(self, button, backend):
        """Should report a failed read as None and keep the status."""
        backend.fail(button.handle, "AXDescription")
        assert button.description is None

        result = button.read_attribute("description")
        assert result.failed
        assert result.status == AXError.CANNOT_COMPLETE

    def test_failed_read_raises_when_strict(self, button, backend):
        """Should raise AttributeReadError in strict mode."""
        backend.fail(button.handle, "AXDescription")
        with AXConfig.override(strict_reads=True):
            with pytest.raises(AttributeReadError) as exc_info:
                button.description
        assert exc_info.value.attribute == "AXDescription"
        assert exc_info.value.status == AXError.CANNOT_COMPLETE

    def test_read_undiscovered_native_name(self, button):
        """Should read native names that were not enumerated."""
        result = button.read_attribute("AXTitle")
        assert result == CallResult("AXTitle", int(AXError.ATTRIBUTE_UNSUPPORTED), None)

    def test_enumeration_failure_leaves_no_capabilities(self, backend):
        """Should build an empty capability set when enumeration fails."""
        class Broken(type(backend)):
            def copy_attribute_names(self, handle):
                return AXError.INVALID_UI_ELEMENT, None

            def copy_action_names(self, handle):
                return AXError.INVALID_UI_ELEMENT, None

        node = Node(el("AXButton"), Broken())
        assert dict(node.attributes) == {}
        assert dict(node.actions) == {}
        assert node.get("role") is None


class TestActions:
    """Tests for action invocation."""

    def test_invoke(self, button, backend):
        """Should perform the native action and report success."""
        assert isinstance(button.press, ActionInvoker)
        result = button.press()
        assert result.ok
        assert backend.performed == [(button.handle, "AXPress")]

    def test_perform_by_name(self, button, backend):
        """Should perform by accessor or native name."""
        assert button.perform("showMenu").ok
        assert button.perform("AXPress").ok
        assert [name for _, name in backend.performed] == ["AXShowMenu", "AXPress"]

    def test_perform_unknown(self, button):
        """Should raise ActionError for an action the element lacks."""
        with pytest.raises(ActionError) as exc_info:
            button.perform("AXIncrement")
        assert exc_info.value.status == AXError.ACTION_UNSUPPORTED

    def test_failure_reported(self, button, backend):
        """Should return the failing status by default."""
        backend.fail(button.handle, "AXPress", AXError.CANNOT_COMPLETE)
        result = button.press()
        assert not result.ok
        assert result.status == AXError.CANNOT_COMPLETE
        assert backend.performed == []

    def test_failure_raises_when_strict(self, button, backend):
        """Should raise ActionError in strict mode."""
        backend.fail(button.handle, "AXPress")
        with AXConfig.override(strict_actions=True):
            with pytest.raises(ActionError):
                button.press()


class TestChildren:
    """Tests for cached and uncached child navigation."""

    def test_cached_children_is_stable(self, root):
        """Should return the identical list and nodes on every access."""
        first = root.cached_children
        assert root.cached_children is first
        assert root.cached_children[0] is first[0]

    def test_uncached_children_are_new(self, root):
        """Should allocate fresh nodes on every access."""
        a = root.children
        b = root.children
        assert a is not b
        assert a[0] is not b[0]
        assert a == b

    def test_cached_children_queries_once(self, root, backend):
        """Should query the element only on first access."""
        root.cached_children
        root.cached_children
        assert backend.calls["copy_attribute_value:AXChildren"] == 1

    def test_cache_goes_stale(self, root, control_center):
        """Should keep returning the old children after the tree changes."""
        before = root.cached_children
        control_center.children.append(el("AXWindow", "Second"))

        assert len(root.cached_children) == 2
        assert root.cached_children is before

    def test_uncached_access_refreshes_cache(self, root, control_center):
        """Should replace the cache when the uncached accessor runs."""
        root.cached_children
        control_center.children.append(el("AXWindow", "Second"))

        fresh = root.children
        assert len(fresh) == 3
        assert root.cached_children is fresh

    def test_invalidate(self, root, control_center):
        """Should re-query after invalidate()."""
        before = root.cached_children
        control_center.children.pop()
        root.invalidate()

        after = root.cached_children
        assert after is not before
        assert [n.role for n in after] == ["AXMenuBar"]

    def test_leaf_cache_is_loaded_empty(self, backend):
        """Should remember that a leaf has no children."""
        leaf = Node(el("AXButton", "OK"), backend)
        assert leaf.cached_children == []
        assert leaf.cached_first_child is None
        assert leaf.cached_children == []
        assert leaf.cached_first_child is None
        assert backend.calls["copy_attribute_value:AXChildren"] == 2

    def test_first_child(self, root):
        """Should return the first child, cached or fresh."""
        cached = root.cached_first_child
        assert cached.role == "AXMenuBar"
        assert root.cached_first_child is cached

        fresh = root.first_child
        assert fresh is not cached
        assert fresh == cached
        assert root.cached_first_child is fresh

    def test_failed_children_read(self, root, backend, control_center):
        """Should return no children on failure, or raise in strict mode."""
        backend.fail(control_center, "AXChildren")
        assert root.children == []

        with AXConfig.override(strict_reads=True):
            with pytest.raises(AttributeReadError):
                root.children

    def test_children_share_backend(self, root, backend):
        """Should wrap children with the parent's backend."""
        assert all(child.backend is backend for child in root.cached_children)


class TestIdentity:
    """Tests for node equality and representation."""

    def test_equal_when_same_element(self, control_center, backend):
        """Should compare equal when wrapping the same element."""
        assert Node(control_center, backend) == Node(control_center, backend)
        assert len({Node(control_center, backend), Node(control_center, backend)}) == 1

    def test_not_equal_for_different_elements(self, root):
        """Should distinguish different elements."""
        menubar, window = root.cached_children
        assert menubar != window

    def test_repr(self, button, backend):
        """Should show role and description."""
        assert repr(button) == "<Node role='AXButton' description='Sound'>"
        assert repr(Node(el("AXGroup"), backend)) == "<Node role='AXGroup'>"
