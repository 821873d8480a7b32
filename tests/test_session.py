"""Tests for debounced highlighting and the editor session."""

from __future__ import annotations

import pytest

from sanitext.core.highlight import MARKER_CLASS, is_marker
from sanitext.core.models import OverlayState
from sanitext.core.options import SanitizeOptions
from sanitext.core.pipeline import sanitize_markup
from sanitext.ui.scheduler import DEFAULT_DELAY_MS, DebouncedTask
from sanitext.ui.session import EditorSession

pytestmark = pytest.mark.usefixtures("qapp")


# ---------------------------------------------------------------------------
# DebouncedTask
# ---------------------------------------------------------------------------


class TestDebouncedTask:
    def test_default_delay(self):
        task = DebouncedTask(lambda: None)
        assert task.delay_ms == DEFAULT_DELAY_MS

    def test_fires_once_after_burst(self, wait_until, pump):
        calls = []
        task = DebouncedTask(lambda: calls.append(1), delay_ms=30)
        for _ in range(5):
            task.schedule()
        assert task.pending
        assert wait_until(lambda: calls)
        pump(0.1)
        assert calls == [1]
        assert not task.pending

    def test_reschedule_restarts_window(self, pump, wait_until):
        calls = []
        task = DebouncedTask(lambda: calls.append(1), delay_ms=80)
        task.schedule()
        pump(0.04)
        task.schedule()
        pump(0.05)
        # 90 ms after the first request, but only 50 ms after the second
        assert calls == []
        assert wait_until(lambda: calls)

    def test_cancel(self, pump):
        calls = []
        task = DebouncedTask(lambda: calls.append(1), delay_ms=20)
        task.schedule()
        assert task.cancel() is True
        assert task.cancel() is False
        pump(0.08)
        assert calls == []

    def test_flush_runs_synchronously(self):
        calls = []
        task = DebouncedTask(lambda: calls.append(1), delay_ms=10_000)
        assert task.flush() is False
        task.schedule()
        assert task.flush() is True
        assert calls == [1]
        assert not task.pending


# ---------------------------------------------------------------------------
# EditorSession
# ---------------------------------------------------------------------------


class TestEditorSessionOverlay:
    def test_empty_session_starts_idle(self):
        session = EditorSession()
        assert session.state is OverlayState.IDLE
        assert session.marker_count == 0

    def test_initial_markup_is_highlighted(self, wait_until):
        session = EditorSession("<p>a\u200bb</p>", delay_ms=20)
        assert session.state is OverlayState.PENDING
        assert session.marker_count == 0
        assert wait_until(lambda: session.state is OverlayState.IDLE)
        assert session.marker_count == 1
        assert session.render_count == 1

    def test_render_now(self):
        session = EditorSession("<p>a\u200bb</p>")
        assert session.render_now() == 1
        assert session.state is OverlayState.IDLE
        assert MARKER_CLASS in session.markup()

    def test_render_clears_before_marking(self):
        session = EditorSession("<p>a\u200bb \u2014 c</p>")
        session.render_now()
        session.render_now()
        assert session.marker_count == 2
        assert all(
            not marker.find(is_marker) for marker in session.tree.find_all(is_marker)
        )

    def test_edit_schedules_debounced_render(self, wait_until):
        session = EditorSession(delay_ms=20)
        session.set_markup("<p>x\u200by</p>")
        assert session.state is OverlayState.PENDING
        assert session.marker_count == 0
        assert wait_until(lambda: session.state is OverlayState.IDLE)
        assert session.marker_count == 1

    def test_burst_of_edits_renders_once(self, wait_until, pump):
        session = EditorSession(delay_ms=30)
        for i in range(10):
            session.set_markup(f"<p>edit {i} \u00e9</p>")
        assert wait_until(lambda: session.render_count > 0)
        pump(0.1)
        assert session.render_count == 1
        assert "edit 9" in session.markup()

    def test_flag_toggle_reschedules_with_latest_options(self, wait_until):
        session = EditorSession("<p>a\u00a0b</p>", delay_ms=20)
        session.set_option("normalize_spaces", True)
        session.set_option("normalize_spaces", False)
        assert wait_until(lambda: session.render_count == 1)
        marker = session.tree.find(is_marker)
        assert marker["title"] == "Non-ASCII character"
        assert session.options.normalize_spaces is False

    def test_cancel_pending(self, pump):
        session = EditorSession("<p>\u00e9</p>", delay_ms=20)
        session.schedule_highlight()
        assert session.cancel_pending() is True
        assert session.state is OverlayState.IDLE
        pump(0.06)
        assert session.render_count == 0

    def test_clear(self):
        session = EditorSession("<p>\u00e9</p>")
        session.render_now()
        assert session.clear() == 1
        assert session.markup() == "<p>\u00e9</p>"

    def test_findings(self):
        session = EditorSession("<p>a\u200b</p>")
        assert [f.codepoint for f in session.findings()] == ["U+200B"]


class TestEditorSessionSignals:
    def test_signals_emitted(self):
        session = EditorSession("<p>\u00e9</p>")
        session.cancel_pending()
        rendered, states, options = [], [], []
        session.signals.highlights_rendered.connect(rendered.append)
        session.signals.state_changed.connect(states.append)
        session.signals.options_changed.connect(options.append)

        session.set_option("removeBidi", False)
        session.render_now()

        assert rendered == [1]
        assert states == ["pending", "rendering", "idle"]
        assert options == [SanitizeOptions(remove_bidi=False)]


class TestEditorSessionSanitize:
    def test_markers_never_reach_output(self):
        markup = "<p>Intro\u200b text \u2014 e.g. here</p><p><br></p>"
        session = EditorSession(markup, options=SanitizeOptions(remove_zero_width=False))
        session.render_now()
        assert session.marker_count > 0

        result = session.sanitize()
        assert MARKER_CLASS not in result
        assert result == sanitize_markup(markup, session.options)
        # the live tree keeps its overlay
        assert session.marker_count > 0

    def test_extract_clean_markup(self):
        session = EditorSession("<p>a\u200bb</p>")
        session.render_now()
        assert session.extract_clean_markup() == "<p>a\u200bb</p>"

    def test_sanitized_signal(self):
        session = EditorSession("<p>A \u2014 B</p>")
        received = []
        session.signals.sanitized.connect(received.append)
        assert session.sanitize() == "<p>A; B</p>"
        assert received == ["<p>A; B</p>"]
