"""Live world clock with an explicit start/stop lifecycle."""

import logging
import threading
from collections.abc import Callable
from datetime import UTC, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .exceptions import InvalidInputError

logger = logging.getLogger(__name__)

CLOCK_FORMAT = "%I:%M:%S %p"


def resolve_zone(name: str, field: str = "time_zone") -> ZoneInfo:
    """Look up an IANA time zone, raising a field-level error if unknown."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidInputError({field: f"Unknown time zone '{name}'"}) from e


def render_times(zones: list[str], now: datetime | None = None) -> dict[str, str]:
    """Local wall-clock time in each zone, formatted like ``09:05:03 PM``."""
    instant = now or datetime.now(UTC)
    return {
        zone: instant.astimezone(resolve_zone(zone)).strftime(CLOCK_FORMAT)
        for zone in zones
    }


class LiveClock:
    """
    Calls ``on_tick`` with the current time in each zone every ``interval`` seconds.

    The clock does nothing until ``start()``; ``stop()`` ends the background
    thread and waits for it. It can also be used as a context manager::

        with LiveClock(["UTC", "Asia/Tokyo"], print):
            ...
    """

    def __init__(
        self,
        zones: list[str],
        on_tick: Callable[[dict[str, str]], None],
        interval: float = 1.0,
        now: Callable[[], datetime] | None = None,
    ):
        """Initialize the clock; zones are validated immediately."""
        if interval <= 0:
            raise InvalidInputError({"interval": "Interval must be positive."})
        for idx, zone in enumerate(zones):
            resolve_zone(zone, field=f"zones.{idx}")

        self.zones = list(zones)
        self.on_tick = on_tick
        self.interval = interval
        self._now = now or (lambda: datetime.now(UTC))
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        """True while the ticking thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def tick(self) -> dict[str, str]:
        """Render the current times once and hand them to ``on_tick``."""
        times = render_times(self.zones, self._now())
        self.on_tick(times)
        return times

    def _run(self):
        # Tick immediately, then once per interval until stopped
        while True:
            self.tick()
            if self._stop_event.wait(self.interval):
                break

    def start(self):
        """Start ticking in a background thread."""
        if self.running:
            raise RuntimeError("LiveClock is already running")
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="live-clock", daemon=True
        )
        self._thread.start()
        logger.debug(f"Live clock started for {', '.join(self.zones)}")

    def stop(self, timeout: float | None = None):
        """Stop ticking and wait for the background thread to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
            logger.debug("Live clock stopped")

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
