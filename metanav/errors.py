"""Exception hierarchy for the router core.

Only programming errors escape the core. An unresolvable segment, a
pop-to-match miss or an unknown action never raises.
"""
from __future__ import annotations


class RouterError(Exception):
    """Base for all metanav-specific errors."""


class SegmentMismatch(RouterError):
    """A resolver could not destructure the parameters it expects.

    Raised from inside a resolve function. Resolution catches it and
    treats the segment as a terminal leaf.
    """

    def __init__(self, path: str, missing: tuple[str, ...] = ()):
        self.path = path
        self.missing = missing
        detail = f" (missing: {', '.join(missing)})" if missing else ""
        super().__init__(f"Segment '{path}' does not match its resolver{detail}")


class ReconcileInProgress(RouterError):
    """Reconciliation was re-entered while a directive was being applied."""
