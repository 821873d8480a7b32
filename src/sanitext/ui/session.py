"""EditorSession: owns the live document tree and its highlight overlay.

State machine per edit cycle::

    IDLE --edit / flag toggle--> PENDING --timer fires--> RENDERING --> IDLE

Every edit or flag toggle restarts the debounce timer. A session created with
non-empty markup schedules its first pass right away. A render pass always
clears existing markers before classifying again, so markers never
accumulate. Sanitizing works on a marker-free copy of the tree, so the
overlay never leaks into sanitized output.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup

from sanitext.core.highlight import (
    clear_highlights,
    collect_findings,
    count_markers,
    extract_clean_markup,
    highlight_chars,
)
from sanitext.core.models import Finding, OverlayState
from sanitext.core.options import SanitizeOptions
from sanitext.core.pipeline import sanitize_markup
from sanitext.core.tree import parse_fragment, serialize
from sanitext.ui.scheduler import DEFAULT_DELAY_MS, DebouncedTask
from sanitext.ui.signals import SessionSignals

_log = logging.getLogger(__name__)


class EditorSession:
    """Mediates between the editing surface and the core passes."""

    def __init__(
        self,
        markup: str = "",
        options: SanitizeOptions | None = None,
        signals: SessionSignals | None = None,
        delay_ms: int = DEFAULT_DELAY_MS,
    ) -> None:
        self._tree: BeautifulSoup = parse_fragment(markup)
        self._options = options or SanitizeOptions()
        self._signals = signals or SessionSignals()
        self._state = OverlayState.IDLE
        self._task = DebouncedTask(self._render, delay_ms=delay_ms)
        self.render_count = 0
        if markup:
            self.schedule_highlight()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def tree(self) -> BeautifulSoup:
        return self._tree

    @property
    def options(self) -> SanitizeOptions:
        return self._options

    @property
    def signals(self) -> SessionSignals:
        return self._signals

    @property
    def state(self) -> OverlayState:
        return self._state

    @property
    def marker_count(self) -> int:
        return count_markers(self._tree)

    def markup(self) -> str:
        """The live markup, markers included (what the editor displays)."""
        return serialize(self._tree)

    # ------------------------------------------------------------------
    # Events from the editing surface
    # ------------------------------------------------------------------

    def set_markup(self, markup: str) -> None:
        """Replace the live document (a document-change event)."""
        self._tree = parse_fragment(markup)
        self.notify_changed()

    def notify_changed(self) -> None:
        """Signal that the live tree was edited in place."""
        self._signals.document_changed.emit()
        self.schedule_highlight()

    def set_option(self, name: str, value: bool) -> None:
        self.set_options(self._options.with_flag(name, value))

    def set_options(self, options: SanitizeOptions) -> None:
        self._options = options
        self._signals.options_changed.emit(options)
        self.schedule_highlight()

    # ------------------------------------------------------------------
    # Overlay
    # ------------------------------------------------------------------

    def schedule_highlight(self) -> None:
        """Arm (or re-arm) the debounced render pass."""
        self._task.schedule()
        self._set_state(OverlayState.PENDING)

    def cancel_pending(self) -> bool:
        dropped = self._task.cancel()
        if dropped:
            self._set_state(OverlayState.IDLE)
        return dropped

    def render_now(self) -> int:
        """Run the render pass immediately, superseding any pending one."""
        self._task.cancel()
        return self._render()

    def _render(self) -> int:
        # Options are read here, at fire time, not when the request was made
        self._set_state(OverlayState.RENDERING)
        removed = clear_highlights(self._tree)
        inserted = highlight_chars(self._tree, self._options)
        self.render_count += 1
        self._set_state(OverlayState.IDLE)
        _log.debug("Render pass: %d marker(s) cleared, %d inserted", removed, inserted)
        self._signals.highlights_rendered.emit(inserted)
        return inserted

    def clear(self) -> int:
        """Remove every marker from the live tree."""
        self.cancel_pending()
        return clear_highlights(self._tree)

    def findings(self) -> list[Finding]:
        return collect_findings(self._tree, self._options)

    def _set_state(self, state: OverlayState) -> None:
        if state is self._state:
            return
        self._state = state
        self._signals.state_changed.emit(state.value)

    # ------------------------------------------------------------------
    # Sanitize
    # ------------------------------------------------------------------

    def extract_clean_markup(self) -> str:
        return extract_clean_markup(self._tree)

    def sanitize(self) -> str:
        """Strip markers, then run the full pipeline with the current options."""
        result = sanitize_markup(self.extract_clean_markup(), self._options)
        self._signals.sanitized.emit(result)
        self._signals.status_message.emit(f"Sanitized: {len(result)} characters")
        return result
