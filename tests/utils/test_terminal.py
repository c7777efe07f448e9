"""Tests for terminal capability helpers."""

import sys
from types import SimpleNamespace

import pytest

from mediamerge.utils.terminal import supports_color


@pytest.fixture(autouse=True)
def clear_terminal_cache():
    """Clear the cached capability check before each test."""
    supports_color.cache_clear()
    yield
    supports_color.cache_clear()


def _fake_stdout(*, isatty: bool) -> SimpleNamespace:
    return SimpleNamespace(encoding="UTF-8", isatty=lambda: isatty)


def test_supports_color_false_when_not_tty(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pipes and files never get colors."""
    monkeypatch.setattr(sys, "stdout", _fake_stdout(isatty=False))
    monkeypatch.setattr(sys, "platform", "linux")

    assert not supports_color()


def test_supports_color_true_on_linux_tty(monkeypatch: pytest.MonkeyPatch) -> None:
    """A POSIX terminal supports colors."""
    monkeypatch.setattr(sys, "stdout", _fake_stdout(isatty=True))
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.delenv("NO_COLOR", raising=False)

    assert supports_color()


def test_supports_color_honours_no_color(monkeypatch: pytest.MonkeyPatch) -> None:
    """NO_COLOR disables colors even on a terminal."""
    monkeypatch.setattr(sys, "stdout", _fake_stdout(isatty=True))
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setenv("NO_COLOR", "1")

    assert not supports_color()


def test_supports_color_windows_terminal(monkeypatch: pytest.MonkeyPatch) -> None:
    """Windows Terminal sessions support colors."""
    monkeypatch.setattr(sys, "stdout", _fake_stdout(isatty=True))
    monkeypatch.setattr(sys, "platform", "win32")
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setenv("WT_SESSION", "1")

    assert supports_color()
