"""Root screens of the main tabs and the screens below them."""
from __future__ import annotations

from ..routes import ResolverResult, ScreenDescriptor, register_screen


def _folders_state(state):
    return (state or {}).get("folders", {})


def _people_state(state):
    return (state or {}).get("people", {})


def _devices_state(state):
    return (state or {}).get("devices", {})


@register_screen("folders")
def folders(state, current, next_, path) -> ResolverResult:
    return ResolverResult(
        component_at_top=ScreenDescriptor(title="Folders", map_state=_folders_state),
        sub_routes={"folder": folder},
    )


@register_screen("folder")
def folder(state, current, next_, path, parents=()) -> ResolverResult:
    (name,) = current.require("name")
    trail = (*parents, name)
    descriptor = ScreenDescriptor(
        screen="folder",
        title="/".join(trail),
        map_state=_folders_state,
        props={"name": name},
    )
    if next_.path == "folder":
        # Nested folders resolve through a continuation that remembers the trail.
        return ResolverResult(component_at_top=descriptor, parse_next_route=folder.bind(parents=trail))
    return ResolverResult(component_at_top=descriptor)


@register_screen("chat")
def chat(state, current, next_, path) -> ResolverResult:
    return ResolverResult(component_at_top=ScreenDescriptor(screen="chat", title="Chat"))


@register_screen("people")
def people(state, current, next_, path) -> ResolverResult:
    return ResolverResult(
        component_at_top=ScreenDescriptor(title="People", map_state=_people_state),
        sub_routes={"profile": "profile"},
    )


@register_screen("profile")
def profile(state, current, next_, path) -> ResolverResult:
    (username,) = current.require("username")
    return ResolverResult(
        component_at_top=ScreenDescriptor(
            title=username,
            map_state=_people_state,
            props={"username": username},
            scene_config="FloatFromBottom",
        )
    )


@register_screen("devices")
def devices(state, current, next_, path) -> ResolverResult:
    count = len(_devices_state(state).get("items", ()))
    title = f"Devices ({count})" if count else "Devices"
    return ResolverResult(
        component_at_top=ScreenDescriptor(title=title, map_state=_devices_state),
        sub_routes={"codepage": "code_page"},
    )


@register_screen("code_page")
def code_page(state, current, next_, path) -> ResolverResult:
    return ResolverResult(
        component_at_top=ScreenDescriptor(title="Code page", props={"mode": current.get("mode", "text")})
    )


@register_screen("more")
def more(state, current, next_, path) -> ResolverResult:
    return ResolverResult(
        component_at_top=ScreenDescriptor(title="More"),
        sub_routes={"login": "login", "register": "register"},
    )


@register_screen("settings", route="settings")
def settings(state, current, next_, path) -> ResolverResult:
    return ResolverResult(component_at_top=ScreenDescriptor(title="Settings"))
