import pytest

from config import get_settings_module


@pytest.mark.parametrize(
    "env, expected",
    [
        ("prod", "config.production"),
        ("Testing", "config.testing"),
        ("dev", "config.development"),
        ("staging", "config.development"),
    ],
)
def test_app_env_selects_bundled_module(monkeypatch, env, expected):
    monkeypatch.delenv("ATTENDANCE_SETTINGS_MODULE", raising=False)
    monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == expected


def test_explicit_module_wins_over_app_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("ATTENDANCE_SETTINGS_MODULE", "config.testing")

    assert get_settings_module() == "config.testing"
