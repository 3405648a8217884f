"""Tab-scoped router state.

Every tab owns an independent single-history router. Most actions go to
the active tab's history; tab switches and login outcomes change focus
instead.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from . import actions as A
from .path import NavigationPath
from .router import RouterState, create_router_state, router_reducer

logger = logging.getLogger(__name__)


class Tab(str, Enum):
    STARTUP = "tabs:startup"
    FOLDERS = "tabs:folders"
    CHAT = "tabs:chat"
    PEOPLE = "tabs:people"
    DEVICES = "tabs:devices"
    MORE = "tabs:more"

    @classmethod
    def parse(cls, value: Any) -> Tab | None:
        """Tab for an enum member, its value or its name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        text = str(value or "").strip()
        for tab in cls:
            if text == tab.value or text.lower() == tab.name.lower():
                return tab
        return None

    @property
    def label(self) -> str:
        return self.name.capitalize()


STARTUP_TAB = Tab.STARTUP
PRIMARY_TAB = Tab.FOLDERS
MORE_TAB = Tab.MORE
DEFAULT_ACTIVE_TAB = MORE_TAB


@dataclass(frozen=True)
class DebugOverrides:
    """Local-debug knobs injected when the tabbed state is created.

    Attributes:
        active_tab: Tab focused at startup instead of DEFAULT_ACTIVE_TAB
        router_path: Initial path of every tab instead of the root
        skip_login_route_to_root: Keep focus where it is on LOGIN_SUCCEEDED
    """

    active_tab: Tab | None = None
    router_path: NavigationPath | None = None
    skip_login_route_to_root: bool = False


@dataclass(frozen=True)
class TabbedRouterState:
    tabs: Mapping[Tab, RouterState]
    active_tab: Tab = DEFAULT_ACTIVE_TAB
    overrides: DebugOverrides = field(default_factory=DebugOverrides, compare=False)

    def __post_init__(self) -> None:
        keys = set(self.tabs)
        missing = [t.name for t in Tab if t not in keys]
        unknown = [repr(k) for k in keys if not isinstance(k, Tab)]
        if missing or unknown:
            raise ValueError(
                f"Tabbed router state must cover every tab (missing={missing}, unknown={unknown})"
            )
        if not isinstance(self.active_tab, Tab):
            raise ValueError(f"Unknown active tab: {self.active_tab!r}")
        if not isinstance(self.tabs, MappingProxyType):
            object.__setattr__(self, "tabs", MappingProxyType(dict(self.tabs)))

    def router(self, tab: Tab | None = None) -> RouterState:
        return self.tabs[self.active_tab if tab is None else tab]

    def with_tab(self, tab: Tab, router: RouterState) -> TabbedRouterState:
        """Replace one tab's history; other entries keep their identity."""
        if self.tabs[tab] is router:
            return self
        tabs = dict(self.tabs)
        tabs[tab] = router
        return TabbedRouterState(tabs=tabs, active_tab=self.active_tab, overrides=self.overrides)

    def with_active(self, tab: Tab) -> TabbedRouterState:
        if tab is self.active_tab:
            return self
        return TabbedRouterState(tabs=self.tabs, active_tab=tab, overrides=self.overrides)


def create_tabbed_router_state(overrides: DebugOverrides | None = None) -> TabbedRouterState:
    overrides = overrides or DebugOverrides()
    empty = create_router_state(overrides.router_path)
    return TabbedRouterState(
        tabs={tab: empty for tab in Tab},
        active_tab=overrides.active_tab or DEFAULT_ACTIVE_TAB,
        overrides=overrides,
    )


def tabbed_router_reducer(state: TabbedRouterState | None, action: A.Action) -> TabbedRouterState:
    if state is None:
        state = create_tabbed_router_state()

    kind = action.type
    if kind == A.SWITCH_TAB:
        tab = Tab.parse(action.payload)
        if tab is None:
            logger.warning("Ignoring switch to unknown tab %r", action.payload)
            return state
        return state.with_active(tab)

    if kind == A.LOGIN_SUCCEEDED:
        if state.overrides.skip_login_route_to_root:
            return state
        return state.with_active(PRIMARY_TAB)

    if kind == A.LOGOUT_SUCCEEDED:
        return state.with_active(STARTUP_TAB)

    if kind in (A.NEEDS_LOGIN, A.NEEDS_REGISTRATION):
        # TODO: focus STARTUP_TAB once the login screens move off the "more" tab.
        startup = router_reducer(state.router(STARTUP_TAB), action)
        return state.with_active(MORE_TAB).with_tab(STARTUP_TAB, startup)

    active = state.active_tab
    return state.with_tab(active, router_reducer(state.router(active), action))


def get_current_uri(state: TabbedRouterState) -> NavigationPath:
    return state.router().uri


def get_current_tab(state: TabbedRouterState) -> Tab:
    return state.active_tab
