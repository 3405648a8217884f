"""Route resolver protocol and screen registry.

Each routable screen-class contributes one ``RouteResolver``: a tagged
resolve function registered in ``SCREENS`` at import time. Resolution
dispatches on the tag, so a routing table may reference a screen either
by resolver or by tag.

Resolve functions have the shape::

    def resolve(state, current, next_, path, **context) -> ResolverResult
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping, MutableMapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Union

from .path import NavigationPath, PathSegment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScreenDescriptor:
    """What to mount for one resolved segment.

    Descriptors are rebuilt on every resolution pass, so equality has to
    be structural: resolvers should reference module-level ``map_state``
    functions rather than fresh lambdas.
    """

    screen: str | None = None
    title: str | None = None
    map_state: Callable[[Any], Any] | None = None
    props: Mapping[str, Any] = field(default_factory=dict)
    up_link: str | None = None
    up_title: str | None = None
    hide_chrome: bool = False
    scene_config: str | None = None
    save_key: str | None = None
    left_button_title: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.props, MappingProxyType):
            object.__setattr__(self, "props", MappingProxyType(dict(self.props)))

    def __hash__(self) -> int:
        return hash(
            (
                self.screen,
                self.title,
                self.map_state,
                frozenset(self.props.items()),
                self.up_link,
                self.up_title,
                self.hide_chrome,
                self.scene_config,
                self.save_key,
                self.left_button_title,
            )
        )

    def project(self, state: Any) -> Any:
        """Slice of global state handed to the mounted screen."""
        if self.map_state is None:
            return state
        return self.map_state(state)

    def same_route(self, other: ScreenDescriptor) -> bool:
        """Host-history match key: screen tag and title."""
        return self.screen == other.screen and self.title == other.title

    def with_up(self, segment: PathSegment) -> ScreenDescriptor:
        return replace(self, up_link=segment.up_link, up_title=segment.up_title)

    @property
    def label(self) -> str:
        return self.title or self.screen or "?"


ResolveFn = Callable[..., "ResolverResult"]
ResolverRef = Union["RouteResolver", str, ResolveFn]


@dataclass(frozen=True)
class RouteResolver:
    """Resolver variant for one screen-class.

    Args:
        screen: Screen tag, also the identity backfilled into descriptors
            selected through a routing table
        fn: Resolve function
        context: Keyword arguments accumulated by parent resolvers
    """

    screen: str
    fn: ResolveFn = field(compare=False, repr=False)
    context: Mapping[str, Any] = field(default_factory=dict)

    def __call__(
        self,
        state: Any,
        current: PathSegment,
        next_: PathSegment,
        path: NavigationPath,
    ) -> ResolverResult:
        return self.fn(state, current, next_, path, **self.context)

    def __hash__(self) -> int:
        return hash((self.screen, frozenset(self.context.items())))

    def bind(self, **context: Any) -> RouteResolver:
        """Continuation closed over ``context`` (merged with any existing)."""
        return replace(self, context={**self.context, **context})


@dataclass(frozen=True)
class ResolverResult:
    """Output of one resolver invocation.

    ``sub_routes`` is consulted only when ``parse_next_route`` is absent.
    """

    component_at_top: ScreenDescriptor = field(default_factory=ScreenDescriptor)
    parse_next_route: ResolverRef | None = None
    sub_routes: Mapping[str, ResolverRef] = field(default_factory=dict)


class RouteTable(MutableMapping):
    """Path identifier -> resolver reference."""

    def __init__(self, routes: Mapping[str, ResolverRef] | None = None):
        self._routes: dict[str, ResolverRef] = dict(routes or {})

    def __getitem__(self, key: str) -> ResolverRef:
        return self._routes[key]

    def __setitem__(self, key: str, value: ResolverRef) -> None:
        self._routes[key] = value

    def __delitem__(self, key: str) -> None:
        del self._routes[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        return f"RouteTable({sorted(self._routes)!r})"

    def register(self, path_id: str, ref: ResolverRef) -> None:
        self._routes[path_id] = ref


# Screen registry - maps screen tags to resolvers.
# Populated by @register_screen as screen modules are imported.
SCREENS: dict[str, RouteResolver] = {}

# Process-wide routing table consulted after a resolver's own sub-routes.
GLOBAL_ROUTES = RouteTable()


def register_screen(
    screen: str,
    *,
    route: str | None = None,
    table: RouteTable | None = None,
):
    """Decorator to register a resolve function as a screen-class.

    Usage:
        @register_screen("chat", route="chat")
        def resolve_chat(state, current, next_, path) -> ResolverResult:
            ...

    The decorated name is bound to the resulting ``RouteResolver``.
    """

    def decorator(fn: ResolveFn) -> RouteResolver:
        resolver = RouteResolver(screen=screen, fn=fn)
        SCREENS[screen] = resolver
        if route is not None:
            (GLOBAL_ROUTES if table is None else table).register(route, resolver)
        return resolver

    return decorator


def as_resolver(ref: ResolverRef | None) -> RouteResolver | None:
    """Turn a resolver reference into a resolver.

    A tag missing from ``SCREENS`` yields ``None`` so the caller ends
    resolution at a terminal leaf.
    """
    if ref is None or isinstance(ref, RouteResolver):
        return ref
    if isinstance(ref, str):
        resolver = SCREENS.get(ref)
        if resolver is None:
            logger.warning("Unknown screen tag '%s'; treating as terminal leaf", ref)
        return resolver
    if callable(ref):
        return RouteResolver(screen=getattr(ref, "__name__", "anonymous"), fn=ref)
    raise TypeError(f"Not a resolver reference: {ref!r}")


def lookup_route(
    path_id: str,
    sub_routes: Mapping[str, ResolverRef],
    global_routes: Mapping[str, ResolverRef],
) -> RouteResolver | None:
    """Find the resolver for ``path_id``.

    The resolver's own sub-routes win over the global table. Empty
    identifiers never match.
    """
    if not path_id:
        return None
    if path_id in sub_routes:
        return as_resolver(sub_routes[path_id])
    if path_id in global_routes:
        return as_resolver(global_routes[path_id])
    return None
