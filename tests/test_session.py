"""Integration tests: demo screens driven through a navigation session."""
from __future__ import annotations

import pytest

from metanav import actions as A
from metanav.reconcile import DirectiveKind
from metanav.screens import TAB_ROOTS
from metanav.session import NavigationSession
from metanav.tabs import DebugOverrides, Tab


@pytest.fixture
def session():
    return NavigationSession(TAB_ROOTS, app_state={})


def test_session_initial_stacks(session):
    """Test every tab starts with its root screen."""
    assert session.active_tab is Tab.MORE
    assert session.navigator().breadcrumbs() == "More"
    assert session.navigator(Tab.STARTUP).breadcrumbs() == "Welcome"
    assert session.top(Tab.STARTUP).hide_chrome is True


def test_missing_root_is_rejected():
    """Test a tab without a root resolver is rejected."""
    roots = dict(TAB_ROOTS)
    del roots[Tab.CHAT]
    with pytest.raises(ValueError, match="CHAT"):
        NavigationSession(roots)


def test_append_pushes_on_active_tab_only(session):
    """Test appends only touch the active tab."""
    directives = session.dispatch(A.route_append("login"))

    assert set(directives) == {Tab.MORE}
    assert directives[Tab.MORE].kind is DirectiveKind.PUSH
    # Login defaults its child to the login form; only that top screen is pushed.
    assert session.top().screen == "login_form"
    assert session.navigator().depth() == 2
    assert session.navigator(Tab.STARTUP).depth() == 1


def test_login_continuation_carries_username(session):
    """Test the login continuation passes the username on."""
    session.dispatch(A.route_append({"path": "login", "username": "max"}))
    assert session.top().props["username"] == "max"


def test_needs_login_routes_startup_tab(session):
    """Test needs_login routes the startup tab."""
    session.dispatch(A.switch_tab(Tab.CHAT))
    directives = session.dispatch(A.needs_login())

    assert session.active_tab is Tab.MORE
    assert directives[Tab.STARTUP].kind is DirectiveKind.PUSH
    assert directives[Tab.MORE].kind is DirectiveKind.NONE
    assert Tab.CHAT not in directives
    assert session.navigator(Tab.STARTUP).breadcrumbs() == "Welcome > Login form"


def test_navigate_up_pops_to_matching_screen(session):
    """Test navigate_up pops to the parent screen."""
    session.dispatch(A.route_append("register"))
    session.dispatch(A.route_append({"path": "device", "name": "laptop"}))
    assert session.navigator().breadcrumbs() == "More > register > Name device laptop"

    directives = session.dispatch(A.navigate_up())

    assert directives[Tab.MORE].kind is DirectiveKind.POP_TO
    assert session.navigator().breadcrumbs() == "More > register"


def test_invalid_segment_stops_at_parent(session):
    """Test a segment missing params keeps the parent on top."""
    session.dispatch(A.switch_tab(Tab.PEOPLE))
    session.dispatch(A.route_append("profile"))

    # "profile" without a username is a terminal leaf; People stays on top.
    assert session.top().screen == "people"


def test_global_route_reachable_from_any_tab(session):
    """Test global routes resolve from any tab."""
    session.dispatch(A.switch_tab(Tab.FOLDERS))
    session.dispatch(A.route_append({"path": "folder", "name": "docs"}))
    directives = session.dispatch(A.route_append("settings"))

    assert directives[Tab.FOLDERS].kind is DirectiveKind.PUSH
    assert session.navigator().breadcrumbs() == "Folders > docs > Settings"


def test_nested_folders_use_continuation(session):
    """Test nested folders resolve through a continuation."""
    session.dispatch(A.switch_tab(Tab.FOLDERS))
    session.dispatch(
        A.navigate_to([{"path": "folder", "name": "docs"}, {"path": "folder", "name": "2024"}])
    )
    assert session.top().title == "docs/2024"
    # Forward jumps push only the new top screen.
    assert session.navigator().breadcrumbs() == "Folders > docs/2024"


def test_switching_tabs_preserves_histories(session):
    """Test each tab keeps its own history."""
    session.dispatch(A.route_append("login"))
    session.dispatch(A.switch_tab(Tab.CHAT))
    session.dispatch(A.switch_tab(Tab.MORE))

    assert session.navigator().breadcrumbs() == "More > Login form"


def test_app_state_change_rerenders_in_place(session):
    """Test app state changes re-render the active tab."""
    session.dispatch(A.switch_tab(Tab.DEVICES))
    directives = session.set_app_state({"devices": {"items": ["phone", "laptop"]}})

    assert directives[Tab.DEVICES].kind is DirectiveKind.RESET
    assert session.navigator().breadcrumbs() == "Devices (2)"
    assert session.navigator().depth() == 1


def test_login_succeeded_switches_to_primary_tab(session):
    """Test login success focuses the primary tab."""
    session.dispatch(A.login_succeeded())
    assert session.active_tab is Tab.FOLDERS

    skipping = NavigationSession(TAB_ROOTS, overrides=DebugOverrides(skip_login_route_to_root=True))
    skipping.dispatch(A.login_succeeded())
    assert skipping.active_tab is Tab.MORE


def test_subscribe_and_unsubscribe(session):
    """Test listeners are called until unsubscribed."""
    seen = []
    unsubscribe = session.subscribe(lambda state, directives: seen.append((state.active_tab, dict(directives))))

    session.dispatch(A.switch_tab(Tab.CHAT))
    unsubscribe()
    session.dispatch(A.switch_tab(Tab.PEOPLE))

    assert len(seen) == 1
    tab, directives = seen[0]
    assert tab is Tab.CHAT
    assert directives[Tab.CHAT].kind is DirectiveKind.NONE
