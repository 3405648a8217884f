"""Navigation session wiring the tabbed router to one host per tab."""
from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from .actions import Action
from .navigator import Navigator
from .reconcile import Directive, HostNavigator, MetaNavigator
from .resolution import resolve
from .routes import ResolverRef, ScreenDescriptor
from .tabs import (
    DebugOverrides,
    Tab,
    TabbedRouterState,
    create_tabbed_router_state,
    tabbed_router_reducer,
)

logger = logging.getLogger(__name__)

Listener = Callable[[TabbedRouterState, dict[Tab, Directive]], None]


class NavigationSession:
    """Tabbed router state plus one reconciled host navigator per tab.

    Every ``dispatch`` runs the reducer, then reconciles each tab whose
    path changed and the active tab (whose screens may depend on app
    state even when its path did not move).

    Args:
        roots: Root resolver for each tab
        app_state: Global application state handed to resolvers
        state: Initial tabbed state (built from ``overrides`` when omitted)
        overrides: Local-debug overrides for the initial state
        global_routes: Fallback routing table (defaults to GLOBAL_ROUTES)
        host_factory: Builds a host navigator from an initial route stack
    """

    def __init__(
        self,
        roots: Mapping[Tab, ResolverRef],
        *,
        app_state: Any = None,
        state: TabbedRouterState | None = None,
        overrides: DebugOverrides | None = None,
        global_routes: Mapping[str, ResolverRef] | None = None,
        host_factory: Callable[[tuple[ScreenDescriptor, ...]], HostNavigator] = Navigator,
    ):
        missing = [t.name for t in Tab if t not in roots]
        if missing:
            raise ValueError(f"No root resolver for tabs: {', '.join(missing)}")

        self.app_state = app_state
        self.state = state if state is not None else create_tabbed_router_state(overrides)
        self._listeners: list[Listener] = []
        self._navigators: dict[Tab, MetaNavigator] = {}
        for tab in Tab:
            path = self.state.router(tab).uri
            initial = resolve(app_state, roots[tab], path, global_routes).stack
            self._navigators[tab] = MetaNavigator(
                host_factory(initial),
                roots[tab],
                path=path,
                stack=initial,
                global_routes=global_routes,
            )

    @property
    def active_tab(self) -> Tab:
        return self.state.active_tab

    def navigator(self, tab: Tab | None = None) -> HostNavigator:
        return self._navigators[tab or self.active_tab].host

    def top(self, tab: Tab | None = None) -> ScreenDescriptor:
        return self._navigators[tab or self.active_tab].top(self.app_state)

    def dispatch(self, action: Action) -> dict[Tab, Directive]:
        """Reduce ``action`` and reconcile the affected hosts."""
        previous = self.state
        self.state = tabbed_router_reducer(previous, action)
        if self.state.active_tab is not previous.active_tab:
            logger.debug("Active tab %s -> %s", previous.active_tab.name, self.state.active_tab.name)
        return self._reconcile()

    def set_app_state(self, app_state: Any) -> dict[Tab, Directive]:
        """State-change notification for data the resolvers read."""
        self.app_state = app_state
        return self._reconcile()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(state, directives)`` after every reconciliation.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _reconcile(self) -> dict[Tab, Directive]:
        directives: dict[Tab, Directive] = {}
        for tab, meta in self._navigators.items():
            uri = self.state.router(tab).uri
            if tab is self.active_tab or uri != meta.path:
                directives[tab] = meta.update(self.app_state, uri)
        for listener in list(self._listeners):
            listener(self.state, directives)
        return directives
