"""Navigation path primitives.

A navigation path is an immutable, root-first sequence of segments. The
router never edits a path in place; every transition produces a new one.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .errors import SegmentMismatch

if TYPE_CHECKING:
    from .routes import ScreenDescriptor


_UP_LINK_KEYS = ("up_link", "upLink")
_UP_TITLE_KEYS = ("up_title", "upTitle")


@dataclass(frozen=True)
class PathSegment:
    """One hop of navigation intent.

    Attributes:
        path: Identifier used for routing-table lookup
        up_link: Where the "back" affordance one level up points
        up_title: Label for that affordance
        params: Free-form parameters for this level
        descriptor: Prebuilt screen rendered as-is when ``path`` matches
            no routing table entry
    """

    path: str = ""
    up_link: str | None = None
    up_title: str | None = None
    params: Mapping[str, Any] = field(default_factory=dict)
    descriptor: ScreenDescriptor | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.params, MappingProxyType):
            object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    @classmethod
    def coerce(cls, value: PathSegment | str | Mapping[str, Any] | None) -> PathSegment:
        """Build a segment from a segment, an identifier or a mapping.

        Mapping keys ``path``, ``up_link``/``upLink`` and
        ``up_title``/``upTitle`` are lifted out; everything else becomes a
        parameter.
        """
        if value is None:
            return EMPTY_SEGMENT
        if isinstance(value, PathSegment):
            return value
        if isinstance(value, str):
            return cls(path=value)
        if isinstance(value, Mapping):
            params = dict(value)
            path = params.pop("path", "") or ""
            up_link = _pop_first(params, _UP_LINK_KEYS)
            up_title = _pop_first(params, _UP_TITLE_KEYS)
            descriptor = params.pop("descriptor", None)
            return cls(
                path=str(path),
                up_link=up_link,
                up_title=up_title,
                params=params,
                descriptor=descriptor,
            )
        raise TypeError(f"Cannot build a path segment from {type(value).__name__}")

    def get(self, name: str, default: Any = None) -> Any:
        return self.params.get(name, default)

    def require(self, *names: str) -> tuple[Any, ...]:
        """Return the named parameters, or raise SegmentMismatch if any is absent."""
        missing = tuple(n for n in names if n not in self.params)
        if missing:
            raise SegmentMismatch(self.path, missing)
        return tuple(self.params[n] for n in names)

    def __hash__(self) -> int:
        return hash((self.path, self.up_link, self.up_title, frozenset(self.params.items()), self.descriptor))

    @property
    def is_empty(self) -> bool:
        return not self.path and not self.params and self.descriptor is None


def _pop_first(params: dict[str, Any], keys: tuple[str, ...]) -> Any:
    found = None
    for key in keys:
        if key in params:
            value = params.pop(key)
            if found is None:
                found = value
    return found


EMPTY_SEGMENT = PathSegment()
# The root resolver always consumes this sentinel.
ROOT_SEGMENT = EMPTY_SEGMENT


@dataclass(frozen=True)
class NavigationPath:
    """Ordered, root-first sequence of path segments.

    Equality is structural. An empty construction yields the root-only
    path so a path is never empty at resolution time.
    """

    segments: tuple[PathSegment, ...] = (ROOT_SEGMENT,)

    def __post_init__(self) -> None:
        segments = tuple(PathSegment.coerce(s) for s in self.segments)
        object.__setattr__(self, "segments", segments or (ROOT_SEGMENT,))

    @classmethod
    def build(cls, *segments: PathSegment | str | Mapping[str, Any]) -> NavigationPath:
        """Root sentinel followed by ``segments``.

        Example:
            NavigationPath.build("login", {"path": "loginform", "user": "max"})
        """
        return cls((ROOT_SEGMENT, *segments))

    @classmethod
    def coerce(cls, value: NavigationPath | PathSegment | str | Mapping[str, Any] | Iterable[Any]) -> NavigationPath:
        """Path from a full path, a single segment, or the segments below the root."""
        if isinstance(value, NavigationPath):
            return value
        if isinstance(value, (str, Mapping, PathSegment)):
            return cls.build(value)
        return cls.build(*value)

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[PathSegment]:
        return iter(self.segments)

    def __getitem__(self, index: int) -> PathSegment:
        return self.segments[index]

    def first(self) -> PathSegment:
        return self.segments[0]

    def last(self) -> PathSegment:
        return self.segments[-1]

    def rest(self) -> tuple[PathSegment, ...]:
        return self.segments[1:]

    def append(self, segment: PathSegment | str | Mapping[str, Any]) -> NavigationPath:
        return NavigationPath((*self.segments, PathSegment.coerce(segment)))

    def extend(self, segments: Iterable[PathSegment | str | Mapping[str, Any]]) -> NavigationPath:
        return NavigationPath((*self.segments, *(PathSegment.coerce(s) for s in segments)))

    def up(self) -> NavigationPath:
        """Drop the last segment. The root is never dropped."""
        if len(self.segments) <= 1:
            return self
        return NavigationPath(self.segments[:-1])

    def truncate(self, depth: int) -> NavigationPath:
        """Keep the first ``depth`` segments (at least the root)."""
        depth = max(1, depth)
        if depth >= len(self.segments):
            return self
        return NavigationPath(self.segments[:depth])

    def is_prefix_of(self, other: NavigationPath) -> bool:
        return is_prefix_of(self, other)

    def identifiers(self) -> tuple[str, ...]:
        return tuple(s.path for s in self.segments)


def is_prefix_of(a: NavigationPath, b: NavigationPath) -> bool:
    """True when ``a`` is a strict, order-preserving prefix of ``b``."""
    return len(a) < len(b) and b.segments[: len(a)] == a.segments
