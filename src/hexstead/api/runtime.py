"""Runtime primitives backing the Hexstead HTTP API."""

from __future__ import annotations

import asyncio
import logging

from hexstead import savegame
from hexstead.config import Settings, get_settings
from hexstead.domain.simulation import Simulation
from hexstead.domain.tick import TickReport
from hexstead.factory import create_simulation, create_store
from hexstead.interfaces import KeyValueStore

logger = logging.getLogger(__name__)


class SimulationRunner:
    """Background loop that ticks the simulation and autosaves it.

    Ticks and command handlers both run on the event loop thread, so a
    command never observes a half-applied tick. Only the blob writes are
    pushed to a worker thread.
    """

    MIN_INTERVAL_SECONDS = 0.01

    def __init__(
        self,
        simulation: Simulation,
        store: KeyValueStore,
        *,
        tick_interval_seconds: float = 0.1,
        autosave_interval_seconds: float = 10.0,
    ) -> None:
        self.simulation = simulation
        self._store = store
        self._interval = max(tick_interval_seconds, self.MIN_INTERVAL_SECONDS)
        self._autosave_interval = autosave_interval_seconds
        self._task: asyncio.Task[None] | None = None
        self._stop_event = asyncio.Event()
        self._save_lock = asyncio.Lock()
        self._last_save: float | None = None
        self.ticks_run = 0

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._stop_event = asyncio.Event()
        loop = asyncio.get_running_loop()
        self._last_save = loop.time()
        self._task = loop.create_task(self._run_loop(), name="hexstead-tick-loop")

    async def stop(self) -> None:
        task = self._task
        if task is None:
            return
        self._stop_event.set()
        await task
        self._task = None

    def advance(self, ticks: int = 1) -> list[TickReport]:
        """Run ``ticks`` ticks immediately, outside the timed loop."""

        reports = []
        for _ in range(max(ticks, 0)):
            reports.append(self._tick())
        return reports

    async def save(self) -> None:
        """Snapshot on the loop thread, then write the blobs off-thread."""

        snapshot = self.simulation.snapshot()
        async with self._save_lock:
            await asyncio.to_thread(savegame.save_game, self._store, snapshot)
        logger.debug("saved game at time %.1f", snapshot.state.game_time)

    async def _run_loop(self) -> None:
        try:
            while not self._stop_event.is_set():
                try:
                    await asyncio.wait_for(self._stop_event.wait(), timeout=self._interval)
                    break
                except TimeoutError:
                    pass
                await self._run_cycle()
        finally:
            self._task = None

    async def _run_cycle(self) -> None:
        try:
            self._tick()
        except Exception:
            logger.exception("tick failed")

        loop = asyncio.get_running_loop()
        now = loop.time()
        if self._last_save is None or now - self._last_save >= self._autosave_interval:
            self._last_save = now
            try:
                await self.save()
            except Exception:
                logger.exception("autosave failed")

    def _tick(self) -> TickReport:
        report = self.simulation.tick()
        if report.advanced:
            self.ticks_run += 1
        for building, level in report.completed:
            logger.info("construction finished: %s level %d", building, level)
        if report.game_over:
            logger.warning("game over at time %.1f", report.game_time)
        return report


class ApiState:
    """Aggregated services shared by the FastAPI layer."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        store: KeyValueStore | None = None,
        simulation: Simulation | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.store = store if store is not None else create_store(self.settings)
        self.simulation = (
            simulation
            if simulation is not None
            else create_simulation(self.store, self.settings)
        )
        self.runner = SimulationRunner(
            self.simulation,
            self.store,
            tick_interval_seconds=self.settings.tick_interval_seconds,
            autosave_interval_seconds=self.settings.autosave_interval_seconds,
        )

    async def startup(self) -> None:
        if self.settings.autostart:
            self.runner.start()

    async def shutdown(self) -> None:
        await self.runner.stop()
        try:
            await self.runner.save()
        except Exception:
            logger.exception("final save failed")


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()
