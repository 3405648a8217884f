"""In-memory host navigation stack."""
from __future__ import annotations

from collections.abc import Iterable

from .routes import ScreenDescriptor


class Navigator:
    """Imperative, stack-based navigation with breadcrumbs.

    Plays the part of the host navigation primitive driven by the
    reconciler:
    - push_route: forward navigation pushes one screen
    - pop_to_route: pops back to a screen already on the stack
    - reset_route_stack: replaces the whole stack
    """

    def __init__(self, initial_route_stack: Iterable[ScreenDescriptor] = ()):
        """Initialize with an optional initial route stack."""
        self.stack: list[ScreenDescriptor] = list(initial_route_stack)

    def push_route(self, route: ScreenDescriptor) -> None:
        """Navigate to a new screen by pushing onto the stack.

        Args:
            route: Descriptor of the screen to mount
        """
        self.stack.append(route)

    def pop_to_route(self, route: ScreenDescriptor) -> None:
        """Pop every screen above ``route``.

        Matches by identity first (entries handed out by
        get_current_routes), then by equality, most recent first.

        Raises:
            LookupError: if ``route`` is not on the stack
        """
        index = self._index_of(route)
        if index is None:
            raise LookupError(f"Route '{route.label}' is not on the navigation stack")
        del self.stack[index + 1 :]

    def reset_route_stack(self, routes: Iterable[ScreenDescriptor]) -> None:
        """Replace the whole stack."""
        self.stack = list(routes)

    def get_current_routes(self) -> tuple[ScreenDescriptor, ...]:
        """Previously pushed routes, oldest first."""
        return tuple(self.stack)

    def pop(self) -> ScreenDescriptor | None:
        """Go back to the previous screen.

        Returns:
            The screen that was popped, or None if at root
        """
        if len(self.stack) > 1:
            return self.stack.pop()
        return None

    def current(self) -> ScreenDescriptor | None:
        return self.stack[-1] if self.stack else None

    def depth(self) -> int:
        return len(self.stack)

    def breadcrumbs(self) -> str:
        """Breadcrumb string like "Keybase > Login > Login form"."""
        return " > ".join(route.label for route in self.stack)

    def _index_of(self, route: ScreenDescriptor) -> int | None:
        for i in range(len(self.stack) - 1, -1, -1):
            if self.stack[i] is route:
                return i
        for i in range(len(self.stack) - 1, -1, -1):
            if self.stack[i] == route:
                return i
        return None
