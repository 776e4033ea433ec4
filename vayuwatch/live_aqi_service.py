"""
Live AQI service module for VayuWatch.

This module contains the LiveAQIService class, the orchestrator of the
simulated "live" feed. It owns the current snapshot of the geographic tree,
rebuilds it from the baseline on a periodic timer (simulate, then aggregate)
and answers the lookup queries the dashboard makes against the current
snapshot.

Each refresh produces a brand new tree and swaps it in with a single
assignment, so readers always see either the old or the new snapshot, never
a partially updated one.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

from .aggregator import (
    NationalStats,
    aggregate_states,
    get_all_cities,
    get_city_by_id,
    get_national_stats,
    get_state_by_id,
    get_top_polluted_cities,
)
from .config import DEFAULT_REFRESH_INTERVAL_MS, Settings
from .geography import City, State, load_baseline
from .variation_simulator import VariationSimulator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LiveAQISnapshot:
    """
    One complete, immutable view of the live data.

    Attributes:
        states: The full geographic forest
        last_updated: When the snapshot was produced
        is_simulated: True while readings come from the variation simulator
    """

    states: tuple[State, ...]
    last_updated: datetime
    is_simulated: bool = True


class LiveAQIService:
    """
    Orchestrates periodic regeneration of the live AQI tree.

    Every refresh perturbs the static baseline (never the previous tick) with
    the VariationSimulator, recomputes state AQI values with the aggregator
    and replaces the current snapshot. The timer runs on a daemon thread
    started with start() and cancelled with stop(); the service can also be
    used as a context manager.
    """

    LOG_FILE_NAME = "refresh_log.log"

    def __init__(
        self,
        baseline: Iterable[State],
        simulator: Optional[VariationSimulator] = None,
        refresh_interval_ms: Optional[int] = None,
        log_dir: Optional[Union[str, Path]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the service with the baseline as the first snapshot.

        Args:
            baseline: Static forest every refresh starts from
            simulator: Variation simulator, defaults to an unseeded one
            refresh_interval_ms: Timer interval, defaults to 3 minutes
            log_dir: Directory for the persistent refresh log, defaults to ./logs
            clock: Callable returning the current time, defaults to datetime.now
        """
        self._baseline = tuple(baseline)
        self.simulator = simulator if simulator is not None else VariationSimulator()
        self.refresh_interval_ms = refresh_interval_ms or DEFAULT_REFRESH_INTERVAL_MS
        self.log_dir = Path(log_dir) if log_dir is not None else Path("logs")
        self._clock = clock or datetime.now

        self._lock = threading.Lock()
        self._snapshot = LiveAQISnapshot(states=self._baseline, last_updated=self._clock())
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "LiveAQIService":
        """
        Builds a service from runtime settings.

        Loads the baseline (the packaged dataset unless a path is configured)
        and seeds the simulator when a seed is configured.
        """
        settings = settings or Settings.from_env()
        baseline = load_baseline(settings.baseline_path)
        return cls(
            baseline.states,
            simulator=VariationSimulator(rng=settings.seed),
            refresh_interval_ms=settings.refresh_interval_ms,
            log_dir=settings.log_dir,
        )

    @property
    def log_file(self) -> Path:
        return self.log_dir / self.LOG_FILE_NAME

    @property
    def snapshot(self) -> LiveAQISnapshot:
        """The current snapshot."""
        with self._lock:
            return self._snapshot

    @property
    def states(self) -> tuple[State, ...]:
        return self.snapshot.states

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def refresh(self, enable_persistent_logging: bool = False) -> LiveAQISnapshot:
        """
        Regenerates the whole tree from the baseline and swaps it in.

        Args:
            enable_persistent_logging: If True, append a line describing this
                                       refresh to the refresh log file

        Returns:
            The new snapshot
        """
        now = self._clock()
        states = aggregate_states(self.simulator.simulate_states(self._baseline, now))
        snapshot = LiveAQISnapshot(states=states, last_updated=now)

        with self._lock:
            self._snapshot = snapshot

        stats = get_national_stats(states)
        logger.debug(
            "Refreshed %d states, national average AQI %d (%s)",
            stats.total_states,
            stats.average_aqi,
            stats.category.value,
        )

        if enable_persistent_logging:
            self._log_refresh(snapshot, stats)

        return snapshot

    def start(self, enable_persistent_logging: bool = False) -> None:
        """
        Refreshes immediately, then every refresh_interval_ms on a daemon thread.

        Calling start() on a running service has no effect.
        """
        if self.is_running:
            return

        self.refresh(enable_persistent_logging)
        # Fresh event per run; a thread left over from a timed-out stop() stays cancelled
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run,
            args=(self._stop_event, enable_persistent_logging),
            name="vayuwatch-live-aqi",
            daemon=True,
        )
        self._thread.start()
        logger.info("Live AQI refresh started, interval %d ms", self.refresh_interval_ms)

    def stop(self, timeout: Optional[float] = None) -> None:
        """
        Cancels the refresh timer and waits for the thread to exit.

        If the thread is still inside a refresh when the timeout expires it
        finishes that refresh and then exits; it never ticks again.
        """
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning("Live AQI refresh thread still finishing a refresh after stop")
            self._thread = None
            logger.info("Live AQI refresh stopped")

    def _run(self, stop_event: threading.Event, enable_persistent_logging: bool) -> None:
        interval_seconds = self.refresh_interval_ms / 1000
        while not stop_event.wait(interval_seconds):
            try:
                self.refresh(enable_persistent_logging)
            except Exception:
                # Keep the timer alive; the previous snapshot stays current
                logger.exception("Live AQI refresh failed")

    def __enter__(self) -> "LiveAQIService":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def _ensure_log_file_exists(self) -> None:
        """Create log directory and the log file header if needed."""
        self.log_dir.mkdir(parents=True, exist_ok=True)

        if not self.log_file.exists():
            with open(self.log_file, 'w', encoding='utf-8') as f:
                f.write("# VayuWatch Live AQI Refresh Log\n")
                f.write("# Format: [TIMESTAMP] AVG | CATEGORY | STATES | CITIES | WORST | BEST\n")
                f.write("# " + "=" * 80 + "\n\n")

    def _log_refresh(self, snapshot: LiveAQISnapshot, stats: NationalStats) -> None:
        """
        Append one human-readable line describing a refresh to the log file.

        Failures are logged and never interrupt the refresh.
        """
        worst = f"{stats.worst_city.name} ({stats.worst_city.aqi})" if stats.worst_city else "None"
        best = f"{stats.best_city.name} ({stats.best_city.aqi})" if stats.best_city else "None"

        try:
            self._ensure_log_file_exists()
            with open(self.log_file, 'a', encoding='utf-8') as f:
                timestamp_str = snapshot.last_updated.strftime("%Y-%m-%d %H:%M:%S")
                f.write(
                    f"[{timestamp_str}] AVG {stats.average_aqi:3d} | "
                    f"{stats.category.value:12s} | "
                    f"States: {stats.total_states} | "
                    f"Cities: {stats.total_cities} | "
                    f"Worst: {worst} | "
                    f"Best: {best}\n"
                )
        except OSError as e:
            logger.warning("Could not write refresh log %s: %s", self.log_file, e)

    # Lookups against the current snapshot

    def get_all_cities(self) -> list[City]:
        return get_all_cities(self.states)

    def get_city_by_id(self, city_id: str) -> Optional[City]:
        return get_city_by_id(self.states, city_id)

    def get_state_by_id(self, state_id: str) -> Optional[State]:
        return get_state_by_id(self.states, state_id)

    def get_top_polluted_cities(self, limit: int = 10) -> list[City]:
        return get_top_polluted_cities(self.states, limit)

    def get_national_stats(self) -> NationalStats:
        return get_national_stats(self.states)
