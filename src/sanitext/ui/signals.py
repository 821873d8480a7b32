"""SessionSignals: Qt signal bus for one editing session.

The editing surface (toolbar, option checkboxes, preview pane) listens to
these signals instead of calling into the session directly, so that each
side can be tested in isolation.
"""

from __future__ import annotations

from PySide6.QtCore import QObject, Signal


class SessionSignals(QObject):
    # Emitted after the live tree was replaced or edited
    document_changed = Signal()

    # Emitted with the new SanitizeOptions snapshot after a flag toggle
    options_changed = Signal(object)

    # Overlay state transitions (OverlayState value)
    state_changed = Signal(str)

    # Emitted after a render pass with the number of markers inserted
    highlights_rendered = Signal(int)

    # Emitted with the sanitized markup after an explicit sanitize request
    sanitized = Signal(str)

    # Status bar messages
    status_message = Signal(str)
