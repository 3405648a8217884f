"""metanav: declarative route resolution and host stack reconciliation.

A navigation path is resolved through per-screen resolvers into a
declarative stack of screen descriptors; the reconciler turns each path
change into a single push, pop-to or reset on the host navigator.
"""
from .actions import Action
from .navigator import Navigator
from .path import NavigationPath, PathSegment, is_prefix_of
from .reconcile import Directive, DirectiveKind, MetaNavigator, plan_directive
from .resolution import Resolution, resolve
from .router import RouterState, create_router_state, router_reducer
from .routes import (
    GLOBAL_ROUTES,
    SCREENS,
    ResolverResult,
    RouteResolver,
    RouteTable,
    ScreenDescriptor,
    register_screen,
)
from .session import NavigationSession
from .tabs import (
    DebugOverrides,
    Tab,
    TabbedRouterState,
    create_tabbed_router_state,
    tabbed_router_reducer,
)

__all__ = [
    "Action",
    "DebugOverrides",
    "Directive",
    "DirectiveKind",
    "GLOBAL_ROUTES",
    "MetaNavigator",
    "NavigationPath",
    "NavigationSession",
    "Navigator",
    "PathSegment",
    "Resolution",
    "ResolverResult",
    "RouteResolver",
    "RouteTable",
    "RouterState",
    "SCREENS",
    "ScreenDescriptor",
    "Tab",
    "TabbedRouterState",
    "create_router_state",
    "create_tabbed_router_state",
    "is_prefix_of",
    "plan_directive",
    "register_screen",
    "resolve",
    "router_reducer",
    "tabbed_router_reducer",
]
