from __future__ import annotations

import os
import sys
from types import SimpleNamespace

import pytest


def _ensure_project_root_on_path() -> None:
    # When running via the venv's pytest entrypoint, the CWD is not guaranteed to
    # be on sys.path. Ensure the repository root (containing `metanav/`) is importable.
    project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    if project_root not in sys.path:
        sys.path.insert(0, project_root)


_ensure_project_root_on_path()

from metanav.routes import (  # noqa: E402
    GLOBAL_ROUTES,
    SCREENS,
    ResolverResult,
    RouteResolver,
    RouteTable,
    ScreenDescriptor,
)


def _screen(screen: str, title: str, **sub_routes):
    def fn(state, current, next_, path):
        return ResolverResult(
            component_at_top=ScreenDescriptor(title=title),
            sub_routes=sub_routes,
        )

    return RouteResolver(screen=screen, fn=fn)


@pytest.fixture
def tree():
    """Small routing tree: root -> {a -> {b}, c}."""
    b = _screen("b", "B")
    a = _screen("a", "A", b=b)
    c = _screen("c", "C")
    root = _screen("root", "Root", a=a, c=c)
    return SimpleNamespace(root=root, a=a, b=b, c=c)


@pytest.fixture
def no_global_routes():
    return RouteTable()


@pytest.fixture
def isolated_registry():
    """Snapshot SCREENS and GLOBAL_ROUTES and restore them afterwards."""
    screens = SCREENS.copy()
    routes = dict(GLOBAL_ROUTES)
    try:
        yield
    finally:
        SCREENS.clear()
        SCREENS.update(screens)
        GLOBAL_ROUTES.clear()
        GLOBAL_ROUTES.update(routes)


@pytest.fixture(autouse=True)
def _restore_metanav_logger():
    """setup_logging() reconfigures the package logger; undo it between tests."""
    import logging

    logger = logging.getLogger("metanav")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    try:
        yield
    finally:
        for handler in list(logger.handlers):
            if handler not in handlers:
                logger.removeHandler(handler)
                handler.close()
        logger.setLevel(level)
        logger.propagate = propagate
