"""Single-history router state and its reducer.

One ``RouterState`` is the navigation history of one independent
context (a tab). It is replaced, never mutated, on every transition.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from . import actions as A
from .path import NavigationPath, PathSegment


# Segment identifiers the startup screen routes on.
LOGIN_ROUTE = "login"
REGISTER_ROUTE = "register"


@dataclass(frozen=True)
class RouterState:
    """Current path plus the paths visited before it (oldest first)."""

    uri: NavigationPath = field(default_factory=NavigationPath)
    history: tuple[NavigationPath, ...] = ()

    def current(self) -> PathSegment:
        return self.uri.last()

    def depth(self) -> int:
        return len(self.uri)

    def go(self, uri: NavigationPath) -> RouterState:
        """Move to ``uri``, remembering the current path."""
        if uri == self.uri:
            return self
        return RouterState(uri=uri, history=(*self.history, self.uri))


def create_router_state(
    uri: NavigationPath | Iterable[Any] | None = None,
    history: Iterable[NavigationPath] = (),
) -> RouterState:
    """Router state for ``uri`` (segments below the root, or a full path)."""
    path = NavigationPath() if uri is None else NavigationPath.coerce(uri)
    return RouterState(uri=path, history=tuple(history))


def router_reducer(state: RouterState | None, action: A.Action) -> RouterState:
    """Apply ``action`` to one history. Unknown actions return ``state`` unchanged."""
    if state is None:
        state = create_router_state()

    kind = action.type
    if kind == A.NAVIGATE_TO:
        payload = action.payload
        if payload is None:
            return state
        return state.go(NavigationPath.coerce(payload))

    if kind == A.ROUTE_APPEND:
        if action.payload is None:
            return state
        return state.go(state.uri.append(action.payload))

    if kind == A.NAVIGATE_UP:
        return state.go(state.uri.up())

    if kind == A.NAVIGATE_BACK:
        if not state.history:
            return state
        return RouterState(uri=state.history[-1], history=state.history[:-1])

    if kind == A.NEEDS_LOGIN:
        return state.go(NavigationPath.build(LOGIN_ROUTE))

    if kind == A.NEEDS_REGISTRATION:
        return state.go(NavigationPath.build(REGISTER_ROUTE))

    return state
