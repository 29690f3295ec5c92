"""Fixed-delay gate in front of every outbound provider call."""

from __future__ import annotations

import threading
import time
from typing import Callable

from src.common.logging import get_logger
from src.common.metrics import RATE_LIMIT_WAIT

from .errors import CancellationError

logger = get_logger(__name__)

Clock = Callable[[], float]
# wait(cancel_event, seconds) -> True when cancelled during the wait
Waiter = Callable[[threading.Event, float], bool]


def _event_wait(cancel_event: threading.Event, seconds: float) -> bool:
    return cancel_event.wait(seconds)


class RateGate:
    """Make every caller wait ``interval`` seconds before it may proceed.

    This is not a token bucket: a lone caller always waits the full interval,
    however long ago the previous call was. The gate only remembers when the
    last caller was released, so callers arriving together are released one
    ``interval`` apart instead of all at once.

    Cancellation is per call: setting the event passed to :meth:`acquire`
    wakes that caller, which raises :class:`CancellationError`. Other callers
    of the shared gate are not affected.
    """

    def __init__(
        self,
        interval: float = 2.0,
        *,
        clock: Clock = time.monotonic,
        wait: Waiter = _event_wait,
    ) -> None:
        if interval < 0:
            raise ValueError("interval must not be negative")
        self.interval = interval
        self._clock = clock
        self._wait = wait
        self._lock = threading.Lock()
        self._last_release: float | None = None

    def acquire(self, cancel_event: threading.Event | None = None) -> None:
        event = cancel_event if cancel_event is not None else threading.Event()
        if event.is_set():
            raise CancellationError("Espera cancelada antes da requisição")
        with self._lock:
            now = self._clock()
            previous = self._last_release
            release_at = now + self.interval
            if previous is not None:
                release_at = max(release_at, previous + self.interval)
            self._last_release = release_at
        delay = release_at - now
        logger.debug("rate_gate.wait", seconds=delay)
        if self._wait(event, delay):
            with self._lock:
                # give the slot back unless a later caller already queued behind it
                if self._last_release == release_at:
                    self._last_release = previous
            logger.warning("rate_gate.cancelled", seconds=delay)
            raise CancellationError("Espera interrompida antes da requisição")
        RATE_LIMIT_WAIT.observe(delay)
