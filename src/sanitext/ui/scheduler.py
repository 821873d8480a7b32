"""DebouncedTask: cancel-and-replace scheduling on the Qt event loop."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QObject, QTimer, Slot

#: Quiet period before a highlight pass runs
DEFAULT_DELAY_MS = 120


class DebouncedTask(QObject):
    """Hold at most one pending run of *callback*.

    Every ``schedule()`` restarts the single-shot timer, so only the last
    request within the delay window fires; earlier requests are superseded,
    never queued. Timers only fire while a Qt event loop is running.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        delay_ms: int = DEFAULT_DELAY_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._callback = callback
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(delay_ms)
        self._timer.timeout.connect(self._on_timeout)

    @property
    def delay_ms(self) -> int:
        return self._timer.interval()

    @property
    def pending(self) -> bool:
        return self._timer.isActive()

    def schedule(self) -> None:
        """(Re)arm the timer. QTimer.start() on an active timer restarts it."""
        self._timer.start()

    def cancel(self) -> bool:
        """Drop the pending run, if any. Returns True if one was dropped."""
        was_pending = self._timer.isActive()
        self._timer.stop()
        return was_pending

    def flush(self) -> bool:
        """Run the pending callback now instead of waiting for the timer."""
        if not self.cancel():
            return False
        self._callback()
        return True

    @Slot()
    def _on_timeout(self) -> None:
        self._callback()
