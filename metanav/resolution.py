"""Path-to-stack resolution.

Walks a navigation path through the resolver chain and produces the
declarative stack: one screen descriptor per resolved segment, root
first. Resolution is pure and may be run on both the previous and the
next path within one update.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from .errors import SegmentMismatch
from .path import EMPTY_SEGMENT, NavigationPath, PathSegment
from .routes import (
    GLOBAL_ROUTES,
    ResolverRef,
    ResolverResult,
    RouteResolver,
    ScreenDescriptor,
    as_resolver,
    lookup_route,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Result of one resolution pass."""

    top: ScreenDescriptor
    stack: tuple[ScreenDescriptor, ...]

    def __len__(self) -> int:
        return len(self.stack)


def _resolve_inline(state, current, next_, path) -> ResolverResult:
    return ResolverResult(component_at_top=current.descriptor or ScreenDescriptor())


# Renders a segment's prebuilt descriptor; never registered in SCREENS.
INLINE_RESOLVER = RouteResolver(screen="inline", fn=_resolve_inline)

# Upper bound on stack depth; stops continuation chains that never end.
MAX_DEPTH = 64


def resolve(
    state: Any,
    root: ResolverRef,
    path: NavigationPath,
    global_routes: Mapping[str, ResolverRef] | None = None,
) -> Resolution:
    """Resolve ``path`` into a declarative stack.

    Args:
        state: Global application state handed to every resolver
        root: Resolver for the root segment
        path: Path to resolve
        global_routes: Fallback routing table (defaults to GLOBAL_ROUTES)

    Returns:
        Resolution whose ``top`` is the last descriptor appended
    """
    if global_routes is None:
        global_routes = GLOBAL_ROUTES

    segments = path.segments
    current: PathSegment = segments[0] if segments else EMPTY_SEGMENT
    next_: PathSegment = segments[1] if len(segments) > 1 else EMPTY_SEGMENT
    rest = segments[2:]

    root_resolver = as_resolver(root)
    active: RouteResolver | None = root_resolver
    # The root counts as selected through a table for identity backfill.
    implicit_screen: str | None = active.screen if active is not None else None
    stack: list[ScreenDescriptor] = []

    while active is not None:
        if len(stack) >= MAX_DEPTH:
            logger.warning("Resolution exceeded %d levels; truncating stack", MAX_DEPTH)
            break
        try:
            result = active(state, current, next_, path)
        except SegmentMismatch as exc:
            logger.debug("Stopping resolution at depth %d: %s", len(stack), exc)
            break

        descriptor = result.component_at_top.with_up(current)
        if descriptor.screen is None and implicit_screen is not None:
            descriptor = replace(descriptor, screen=implicit_screen)
        stack.append(descriptor)

        implicit_screen = None
        if result.parse_next_route is not None:
            active = as_resolver(result.parse_next_route)
        else:
            active = lookup_route(next_.path, result.sub_routes, global_routes)
            if active is not None:
                implicit_screen = active.screen
            elif next_.descriptor is not None:
                active = INLINE_RESOLVER
            elif not next_.is_empty:
                logger.debug(
                    "No route for segment '%s' under '%s'; terminal leaf",
                    next_.path,
                    descriptor.label,
                )

        current = next_
        next_ = rest[0] if rest else EMPTY_SEGMENT
        rest = rest[1:]

    if not stack:
        # Root resolver failed its own segment; keep a placeholder so top exists.
        stack.append(ScreenDescriptor(screen=root_resolver.screen if root_resolver else None))

    return Resolution(top=stack[-1], stack=tuple(stack))
