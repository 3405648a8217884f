"""Unit tests for navigation path primitives."""
from __future__ import annotations

import pytest

from metanav.errors import SegmentMismatch
from metanav.path import ROOT_SEGMENT, NavigationPath, PathSegment, is_prefix_of


def test_empty_path_is_root_only():
    """Test an empty path holds only the root."""
    assert NavigationPath().segments == (ROOT_SEGMENT,)
    assert NavigationPath(()).segments == (ROOT_SEGMENT,)
    assert len(NavigationPath()) == 1


def test_build_prepends_root():
    """Test build puts the root sentinel first."""
    path = NavigationPath.build("login", "loginform")
    assert path.identifiers() == ("", "login", "loginform")
    assert path.first() == ROOT_SEGMENT
    assert path.last().path == "loginform"


def test_structural_equality():
    """Test paths compare by value."""
    a = NavigationPath.build("folders", {"path": "folder", "name": "docs"})
    b = NavigationPath.build(PathSegment("folders"), PathSegment("folder", params={"name": "docs"}))
    assert a == b
    assert a != NavigationPath.build("folders", {"path": "folder", "name": "pics"})


def test_paths_are_hashable():
    """Test equal paths hash equal."""
    a = NavigationPath.build("folders", {"path": "folder", "name": "docs"})
    b = NavigationPath.build("folders", PathSegment("folder", params={"name": "docs"}))
    assert hash(a) == hash(b)
    assert len({a, b, NavigationPath()}) == 2


def test_coerce_mapping_lifts_up_link_and_title():
    """Test mapping keys for the up link become segment fields."""
    seg = PathSegment.coerce({"path": "profile", "upLink": "people", "upTitle": "People", "username": "max"})
    assert seg.path == "profile"
    assert seg.up_link == "people"
    assert seg.up_title == "People"
    assert dict(seg.params) == {"username": "max"}


def test_coerce_rejects_unknown_types():
    """Test unsupported segment values raise TypeError."""
    with pytest.raises(TypeError):
        PathSegment.coerce(42)


def test_params_are_read_only():
    """Test segment params cannot be mutated."""
    seg = PathSegment("profile", params={"username": "max"})
    with pytest.raises(TypeError):
        seg.params["username"] = "chris"  # type: ignore[index]


def test_append_returns_new_path():
    """Test append leaves the original path untouched."""
    base = NavigationPath.build("a")
    longer = base.append("b")
    assert base.identifiers() == ("", "a")
    assert longer.identifiers() == ("", "a", "b")


def test_up_never_drops_root():
    """Test up stops at the root."""
    root = NavigationPath()
    assert root.up() is root
    assert NavigationPath.build("a", "b").up() == NavigationPath.build("a")


def test_truncate():
    """Test truncating to a depth."""
    path = NavigationPath.build("a", "b", "c")
    assert path.truncate(2) == NavigationPath.build("a")
    assert path.truncate(0) == NavigationPath()
    assert path.truncate(10) is path


def test_is_prefix_of_is_strict():
    """Test prefix checks exclude equal paths."""
    root_a = NavigationPath.build("a")
    root_a_b = NavigationPath.build("a", "b")
    assert is_prefix_of(root_a, root_a_b)
    assert root_a.is_prefix_of(root_a_b)
    assert not is_prefix_of(root_a_b, root_a)
    assert not is_prefix_of(root_a, NavigationPath.build("a"))
    assert not is_prefix_of(NavigationPath.build("c"), root_a_b)


def test_is_prefix_of_compares_params():
    """Test prefix checks compare segment params."""
    old = NavigationPath.build({"path": "folder", "name": "docs"})
    new = NavigationPath.build({"path": "folder", "name": "pics"}, "settings")
    assert not is_prefix_of(old, new)


def test_require_returns_params_in_order():
    """Test require returns params in the requested order."""
    seg = PathSegment("device", params={"name": "laptop", "kind": "desktop"})
    assert seg.require("kind", "name") == ("desktop", "laptop")


def test_require_raises_segment_mismatch():
    """Test require raises SegmentMismatch for missing params."""
    seg = PathSegment("device")
    with pytest.raises(SegmentMismatch) as excinfo:
        seg.require("name")
    assert excinfo.value.missing == ("name",)
    assert excinfo.value.path == "device"
