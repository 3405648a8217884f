from __future__ import annotations

import pytest
from pydantic import ValidationError

from metanav.path import NavigationPath
from metanav.settings import Settings, load_settings
from metanav.tabs import Tab


@pytest.fixture(autouse=True)
def _clean_env(tmp_path, monkeypatch):
    # Keep a developer's .env / shell overrides out of these tests.
    monkeypatch.chdir(tmp_path)
    for key in (
        "METANAV_OVERRIDE_ACTIVE_TAB",
        "METANAV_OVERRIDE_ROUTER_PATH",
        "METANAV_SKIP_LOGIN_ROUTE_TO_ROOT",
        "METANAV_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)


def test_defaults_have_no_overrides():
    """Test default settings carry no debug overrides."""
    overrides = load_settings().debug_overrides()
    assert overrides.active_tab is None
    assert overrides.router_path is None
    assert overrides.skip_login_route_to_root is False


def test_overrides_from_environment(monkeypatch):
    """Test debug overrides come from the environment."""
    monkeypatch.setenv("METANAV_OVERRIDE_ACTIVE_TAB", "devices")
    monkeypatch.setenv("METANAV_OVERRIDE_ROUTER_PATH", "codepage, settings")
    monkeypatch.setenv("METANAV_SKIP_LOGIN_ROUTE_TO_ROOT", "true")

    overrides = Settings().debug_overrides()

    assert overrides.active_tab is Tab.DEVICES
    assert overrides.router_path == NavigationPath.build("codepage", "settings")
    assert overrides.skip_login_route_to_root is True


def test_overrides_from_dotenv(tmp_path):
    """Test debug overrides come from .env."""
    (tmp_path / ".env").write_text("METANAV_OVERRIDE_ACTIVE_TAB=tabs:chat\n", encoding="utf-8")
    assert load_settings().debug_overrides().active_tab is Tab.CHAT


def test_unknown_override_tab_is_rejected(monkeypatch):
    """Test an unknown override tab fails validation."""
    monkeypatch.setenv("METANAV_OVERRIDE_ACTIVE_TAB", "inbox")
    with pytest.raises(ValidationError):
        Settings()
