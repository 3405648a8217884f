"""Startup tab: welcome, login and registration screens."""
from __future__ import annotations

from ..routes import ResolverResult, ScreenDescriptor, register_screen


def _login_state(state):
    return (state or {}).get("login", {})


def _register_state(state):
    return (state or {}).get("register", {})


@register_screen("welcome")
def welcome(state, current, next_, path) -> ResolverResult:
    return ResolverResult(
        component_at_top=ScreenDescriptor(title="Welcome", hide_chrome=True),
        sub_routes={
            "login": "login",
            "signup": "signup",
            "register": "register",
        },
    )


@register_screen("login")
def login(state, current, next_, path) -> ResolverResult:
    routes = {"loginform": login_form}
    # Default the next screen to the login form.
    next_route = routes.get(next_.path, login_form)
    return ResolverResult(
        component_at_top=ScreenDescriptor(
            screen="login",
            title="Login",
            save_key="Login",
            left_button_title="¯\\_(ツ)_/¯",
            map_state=_login_state,
        ),
        parse_next_route=next_route.bind(username=current.get("username")),
    )


@register_screen("login_form")
def login_form(state, current, next_, path, username=None) -> ResolverResult:
    props = {"username": username} if username else {}
    return ResolverResult(
        component_at_top=ScreenDescriptor(
            screen="login_form",
            title="Login form",
            map_state=_login_state,
            props=props,
        )
    )


@register_screen("signup")
def signup(state, current, next_, path) -> ResolverResult:
    return ResolverResult(component_at_top=ScreenDescriptor(title="Sign up"))


@register_screen("register")
def register(state, current, next_, path) -> ResolverResult:
    # Identity comes from the routing table entry.
    return ResolverResult(
        component_at_top=ScreenDescriptor(map_state=_register_state),
        sub_routes={"device": "register_device"},
    )


@register_screen("register_device")
def register_device(state, current, next_, path) -> ResolverResult:
    (name,) = current.require("name")
    return ResolverResult(
        component_at_top=ScreenDescriptor(title=f"Name device {name}", props={"name": name})
    )
