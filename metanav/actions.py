"""Action tags and creators consumed by the router reducers."""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .path import NavigationPath, PathSegment

# Tabbed router
SWITCH_TAB = "tabbedRouter:switchTab"

# Single-history router
NAVIGATE_TO = "router:navigateTo"
ROUTE_APPEND = "router:routeAppend"
NAVIGATE_UP = "router:navigateUp"
NAVIGATE_BACK = "router:navigateBack"

# Login outcomes that move tab focus
LOGIN_SUCCEEDED = "login:loginDone"
LOGOUT_SUCCEEDED = "login:logoutDone"
NEEDS_LOGIN = "login:needsLogin"
NEEDS_REGISTRATION = "login:needsRegistering"

ALL_TYPES = (
    SWITCH_TAB,
    NAVIGATE_TO,
    ROUTE_APPEND,
    NAVIGATE_UP,
    NAVIGATE_BACK,
    LOGIN_SUCCEEDED,
    LOGOUT_SUCCEEDED,
    NEEDS_LOGIN,
    NEEDS_REGISTRATION,
)

# Short names accepted by Action.from_dict (action scripts).
_ALIASES = {
    "switch_tab": SWITCH_TAB,
    "navigate_to": NAVIGATE_TO,
    "route_append": ROUTE_APPEND,
    "navigate_up": NAVIGATE_UP,
    "navigate_back": NAVIGATE_BACK,
    "login_succeeded": LOGIN_SUCCEEDED,
    "logout_succeeded": LOGOUT_SUCCEEDED,
    "needs_login": NEEDS_LOGIN,
    "needs_registration": NEEDS_REGISTRATION,
}


@dataclass(frozen=True)
class Action:
    type: str
    payload: Any = None
    error: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Action:
        """Build an action from ``{"type": ..., "payload": ...}``.

        ``type`` may be a full tag or its snake_case short name. Path
        payloads are coerced into segments / paths.
        """
        raw_type = str(data.get("type", "")).strip()
        action_type = _ALIASES.get(raw_type, raw_type)
        payload = data.get("payload")
        if action_type == NAVIGATE_TO and payload is not None:
            payload = NavigationPath.coerce(payload)
        elif action_type == ROUTE_APPEND and payload is not None:
            payload = PathSegment.coerce(payload)
        return cls(type=action_type, payload=payload, error=bool(data.get("error", False)))


def switch_tab(tab: Any) -> Action:
    return Action(SWITCH_TAB, tab)


def navigate_to(path: NavigationPath | Iterable[Any]) -> Action:
    """Replace the active tab's path.

    ``path`` is either a full NavigationPath or the segments below the
    root; ``navigate_to([])`` goes back to the root.
    """
    return Action(NAVIGATE_TO, NavigationPath.coerce(path))


def route_append(segment: PathSegment | str | Mapping[str, Any]) -> Action:
    return Action(ROUTE_APPEND, PathSegment.coerce(segment))


def navigate_up() -> Action:
    return Action(NAVIGATE_UP)


def navigate_back() -> Action:
    return Action(NAVIGATE_BACK)


def login_succeeded() -> Action:
    return Action(LOGIN_SUCCEEDED)


def logout_succeeded() -> Action:
    return Action(LOGOUT_SUCCEEDED)


def needs_login() -> Action:
    return Action(NEEDS_LOGIN)


def needs_registration() -> Action:
    return Action(NEEDS_REGISTRATION)
