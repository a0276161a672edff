"""Background refresh loop for the node dashboard."""

from __future__ import annotations

import logging
import threading

from nodeboard.monitor.renderer import ConsoleRenderer

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_HZ = 30.0


class RefreshScheduler:
    """Redraws the dashboard every *interval* seconds until stopped.

    Cancellation is cooperative: ``stop()`` sets an event that the loop
    checks between iterations, then joins the thread.  The loop always
    finishes with a single ``erase()`` so the dashboard leaves no rows
    behind.

    Parameters
    ----------
    renderer:
        The renderer to drive.
    interval:
        Seconds between refreshes.  Defaults to 1/30.
    """

    def __init__(
        self,
        renderer: ConsoleRenderer,
        interval: float = 1.0 / DEFAULT_REFRESH_HZ,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._renderer = renderer
        self._interval = interval
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("RefreshScheduler has already been started")
        self._thread = threading.Thread(
            target=self._run, name="nodeboard-refresh", daemon=True
        )
        self._thread.start()
        logger.debug("Refresh loop started at %.1f Hz", 1.0 / self._interval)

    def stop(self, timeout: float | None = None) -> None:
        """Signal the loop to exit and wait for its final erase."""
        self._stop_event.set()
        if self._thread is None:
            return
        self._thread.join(timeout)
        if self._thread.is_alive():
            logger.warning("Refresh loop did not exit within %.2fs", timeout)
        else:
            logger.debug("Refresh loop stopped")

    def _run(self) -> None:
        try:
            while not self._stop_event.wait(self._interval):
                self._renderer.refresh()
        finally:
            self._renderer.erase()
