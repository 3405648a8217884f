from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .actions import Action
from .logging import setup_logging
from .reconcile import DirectiveKind
from .routes import GLOBAL_ROUTES, SCREENS, as_resolver
from .screens import TAB_ROOTS
from .session import NavigationSession
from .settings import load_settings

app = typer.Typer(
    add_completion=False,
    help="metanav: declarative route resolution and stack reconciliation",
    rich_markup_mode="rich",
)
console = Console()

_KIND_STYLE = {
    DirectiveKind.PUSH: "green",
    DirectiveKind.POP_TO: "yellow",
    DirectiveKind.RESET: "red",
    DirectiveKind.NONE: "dim",
}


def _load_script(path: Path) -> tuple[Any, list[Action]]:
    """Read an action script.

    Either a list of actions, or a mapping with optional ``state`` (the
    global app state handed to resolvers) and ``actions``.
    """
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or []
    if isinstance(data, dict):
        app_state = data.get("state")
        raw_actions = data.get("actions") or []
    else:
        app_state = None
        raw_actions = data
    if not isinstance(raw_actions, list):
        raise typer.BadParameter("actions must be a list", param_hint="SCRIPT")

    actions: list[Action] = []
    for i, item in enumerate(raw_actions, start=1):
        if isinstance(item, str):
            item = {"type": item}
        if not isinstance(item, dict) or not item.get("type"):
            raise typer.BadParameter(f"step {i}: expected a mapping with a 'type'", param_hint="SCRIPT")
        actions.append(Action.from_dict(item))
    return app_state, actions


def _trace_rows(session: NavigationSession, actions: list[Action]) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for step, action in enumerate(actions, start=1):
        directives = session.dispatch(action)
        active = session.active_tab
        directive = directives.get(active)
        rows.append(
            {
                "step": step,
                "action": action.type,
                "tab": active.name.lower(),
                "directive": directive.kind.value if directive else DirectiveKind.NONE.value,
                "detail": directive.describe() if directive else "none",
                "breadcrumbs": session.navigator().breadcrumbs(),
                "background": {
                    tab.name.lower(): d.describe()
                    for tab, d in directives.items()
                    if tab is not active and d.kind is not DirectiveKind.NONE
                },
            }
        )
    return rows


@app.command("trace", help="Replay an action script and show each host directive")
def trace(
    script: Path = typer.Argument(..., exists=True, dir_okay=False, help="YAML action script"),
    json_out: bool = typer.Option(False, "--json", help="Output the trace as JSON"),
):
    """Replay SCRIPT against the demo screens, one directive per action."""
    settings = load_settings()
    setup_logging(settings)

    app_state, actions = _load_script(script)
    session = NavigationSession(TAB_ROOTS, app_state=app_state, overrides=settings.debug_overrides())
    rows = _trace_rows(session, actions)

    if json_out:
        print(json.dumps(rows, ensure_ascii=False, indent=2))
        return

    table = Table(title=f"Trace · {script.name}", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Action", style="cyan")
    table.add_column("Tab")
    table.add_column("Directive")
    table.add_column("Stack")
    for row in rows:
        style = _KIND_STYLE[DirectiveKind(row["directive"])]
        table.add_row(
            str(row["step"]),
            row["action"],
            row["tab"],
            f"[{style}]{row['detail']}[/{style}]",
            row["breadcrumbs"],
        )
    console.print(table)


@app.command("routes", help="List registered screens and global routes")
def routes():
    """Show the screen registry and the process-wide routing table."""
    table = Table(title="Screens")
    table.add_column("Screen", style="cyan")
    table.add_column("Resolver")
    table.add_column("Tab root")
    roots = {as_resolver(ref).screen: tab for tab, ref in TAB_ROOTS.items()}
    for tag in sorted(SCREENS):
        resolver = SCREENS[tag]
        tab = roots.get(tag)
        table.add_row(tag, f"{resolver.fn.__module__}.{resolver.fn.__name__}", tab.name.lower() if tab else "")
    console.print(table)

    lines = [
        f"[bold]{path_id}[/bold] → {as_resolver(ref).screen}"
        for path_id, ref in sorted(GLOBAL_ROUTES.items())
    ]
    console.print(Panel.fit("\n".join(lines) or "[dim](empty)[/dim]", title="Global routes"))
