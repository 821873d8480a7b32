"""Pytest fixtures shared across all tests."""

from __future__ import annotations

import time

import pytest

from sanitext.core.options import SanitizeOptions


@pytest.fixture
def all_on() -> SanitizeOptions:
    return SanitizeOptions()


@pytest.fixture
def all_off() -> SanitizeOptions:
    return SanitizeOptions(
        remove_zero_width=False,
        remove_bidi=False,
        normalize_spaces=False,
        collapse_blank_lines=False,
        expand_latin_abbrev=False,
    )


@pytest.fixture
def messy_markup() -> str:
    """A fragment with every kind of problem character the sanitizer handles."""
    return (
        "<p>Intro\u200b text \u2014 with\u00a0spaces</p>"
        "<p>\u202aembedded\u202c and e.g. caf\u00e9 \u2013 dash</p>"
        "<p><br></p><p></p>"
        "<ul><li>one</li><li>two\u2212three</li></ul>"
    )


@pytest.fixture(scope="session")
def qapp():
    """A QCoreApplication so QTimer-based debouncing can fire."""
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def wait_until(qapp):
    """Pump the Qt event loop until *predicate()* is true or *timeout* elapses."""

    def _wait(predicate, timeout: float = 2.0) -> bool:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            qapp.processEvents()
            if predicate():
                return True
            time.sleep(0.005)
        qapp.processEvents()
        return predicate()

    return _wait


@pytest.fixture
def pump(qapp):
    """Pump the Qt event loop for a fixed number of seconds."""

    def _pump(seconds: float) -> None:
        deadline = time.monotonic() + seconds
        while time.monotonic() < deadline:
            qapp.processEvents()
            time.sleep(0.005)

    return _pump
