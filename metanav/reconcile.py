"""Stack reconciliation.

Compares the previously committed path with the next one and drives the
host navigation stack with exactly one directive:

- PUSH: the old path is a strict prefix of the new one. Only the new top
  screen is pushed, keeping the host's transition history intact.
- POP_TO: the new path is a strict prefix of the old one. The host pops
  back to its most recent entry with the same screen tag and title.
- RESET: anything else. The host stack is replaced with the freshly
  resolved declarative stack.

Reconciliation reads the host stack as shared mutable state; callers must
serialize updates (the reconciler refuses to be re-entered).
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from .errors import ReconcileInProgress
from .path import NavigationPath, is_prefix_of
from .resolution import resolve
from .routes import ResolverRef, ScreenDescriptor

logger = logging.getLogger(__name__)


class HostNavigator(Protocol):
    """Host navigation primitive the reconciler drives."""

    def push_route(self, route: ScreenDescriptor) -> None: ...

    def pop_to_route(self, route: ScreenDescriptor) -> None: ...

    def reset_route_stack(self, routes: Sequence[ScreenDescriptor]) -> None: ...

    def get_current_routes(self) -> Sequence[ScreenDescriptor]: ...


class DirectiveKind(str, Enum):
    PUSH = "push"
    POP_TO = "pop_to"
    RESET = "reset"
    NONE = "none"


@dataclass(frozen=True)
class Directive:
    """One host instruction.

    Attributes:
        kind: What the host should do
        route: Screen to push, or the host entry to pop to
        stack: Replacement stack for RESET
        declared: Declarative stack of the new path (becomes "previous")
    """

    kind: DirectiveKind
    route: ScreenDescriptor | None = None
    stack: tuple[ScreenDescriptor, ...] = ()
    declared: tuple[ScreenDescriptor, ...] = field(default=(), compare=False, repr=False)

    def describe(self) -> str:
        if self.kind is DirectiveKind.PUSH:
            return f"push {self.route.label}"
        if self.kind is DirectiveKind.POP_TO:
            return f"pop to {self.route.label}"
        if self.kind is DirectiveKind.RESET:
            return "reset [" + ", ".join(r.label for r in self.stack) + "]"
        return "none"


def plan_directive(
    old_path: NavigationPath,
    new_path: NavigationPath,
    *,
    state: Any,
    root: ResolverRef,
    current_routes: Sequence[ScreenDescriptor],
    previous_stack: Sequence[ScreenDescriptor] | None = None,
    global_routes: Mapping[str, ResolverRef] | None = None,
) -> Directive:
    """Decide the single host directive for ``old_path`` -> ``new_path``.

    Args:
        old_path: Path the host stack was last reconciled to
        new_path: Path to display next
        state: Global state handed to resolvers
        root: Root resolver
        current_routes: Host's imperative history, oldest first
        previous_stack: Declarative stack rendered for ``old_path``; the
            host history stands in for it when omitted
        global_routes: Fallback routing table
    """
    resolution = resolve(state, root, new_path, global_routes)
    declared = resolution.stack

    if is_prefix_of(old_path, new_path):
        return Directive(DirectiveKind.PUSH, route=resolution.top, declared=declared)

    if is_prefix_of(new_path, old_path):
        target = resolution.top
        for route in reversed(current_routes):
            if route.same_route(target):
                return Directive(DirectiveKind.POP_TO, route=route, declared=declared)
        logger.warning(
            "No host route matches '%s'; host history diverged, resetting stack",
            target.label,
        )
        return Directive(DirectiveKind.RESET, stack=declared, declared=declared)

    if old_path == new_path:
        previous = tuple(current_routes if previous_stack is None else previous_stack)
        if previous == declared:
            return Directive(DirectiveKind.NONE, declared=declared)

    return Directive(DirectiveKind.RESET, stack=declared, declared=declared)


def apply_directive(host: HostNavigator, directive: Directive) -> None:
    if directive.kind is DirectiveKind.PUSH:
        host.push_route(directive.route)
    elif directive.kind is DirectiveKind.POP_TO:
        host.pop_to_route(directive.route)
    elif directive.kind is DirectiveKind.RESET:
        host.reset_route_stack(list(directive.stack))


class MetaNavigator:
    """Keeps one host navigator in step with a navigation path.

    Args:
        host: Host navigation primitive
        root: Root resolver for this navigation context
        path: Path the host stack was initialized from
        stack: Declarative stack the host was initialized with
        global_routes: Fallback routing table (defaults to GLOBAL_ROUTES)
    """

    def __init__(
        self,
        host: HostNavigator,
        root: ResolverRef,
        *,
        path: NavigationPath | None = None,
        stack: Sequence[ScreenDescriptor] | None = None,
        global_routes: Mapping[str, ResolverRef] | None = None,
    ):
        self.host = host
        self.root = root
        self.path = path if path is not None else NavigationPath()
        self.stack: tuple[ScreenDescriptor, ...] | None = tuple(stack) if stack is not None else None
        self.global_routes = global_routes
        self._busy = False

    def top(self, state: Any) -> ScreenDescriptor:
        return resolve(state, self.root, self.path, self.global_routes).top

    def update(self, state: Any, new_path: NavigationPath) -> Directive:
        """Reconcile the host with ``new_path`` and commit it as previous.

        Raises:
            ReconcileInProgress: if called while an update is being applied
        """
        if self._busy:
            raise ReconcileInProgress("Reconciliation re-entered during an update")
        self._busy = True
        try:
            directive = plan_directive(
                self.path,
                new_path,
                state=state,
                root=self.root,
                current_routes=self.host.get_current_routes(),
                previous_stack=self.stack,
                global_routes=self.global_routes,
            )
            apply_directive(self.host, directive)
            self.path = new_path
            self.stack = directive.declared
        finally:
            self._busy = False

        if directive.kind is not DirectiveKind.NONE:
            logger.debug("Reconciled %s -> %s", "/".join(new_path.identifiers()), directive.describe())
        return directive
