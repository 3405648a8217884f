"""Screen-classes of the demo app.

Importing this package registers every screen with the router.
"""
from __future__ import annotations

from ..tabs import Tab
from . import home, startup

# Root resolver (by screen tag) of each tab.
TAB_ROOTS = {
    Tab.STARTUP: "welcome",
    Tab.FOLDERS: "folders",
    Tab.CHAT: "chat",
    Tab.PEOPLE: "people",
    Tab.DEVICES: "devices",
    Tab.MORE: "more",
}

__all__ = ["TAB_ROOTS", "home", "startup"]
