import asyncio
import logging
from typing import Dict, List
from engine.engine import Engine
from engine.model import Outcome
from engine.radio import RadioMessage

logger = logging.getLogger(__name__)

class TickRunner:
    """Async driver that ticks the engine on a wall-clock cadence.

    Commands and ticks share one lock, so a command always lands entirely
    between two ticks.
    """

    def __init__(self, engine: Engine, tick_seconds: float = 1.0, time_compression: float = 1.0):
        self.engine = engine
        self.tick_seconds = tick_seconds
        self.time_compression = time_compression
        self.sleep_s = tick_seconds / max(0.1, time_compression)
        self._task: asyncio.Task | None = None
        self._lock = asyncio.Lock()

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self):
        """Start the tick loop."""
        if self.active:
            return
        self._task = asyncio.create_task(self._loop())
        logger.info("[TickRunner] Clock running, %.3fs per game minute", self.sleep_s)

    async def stop(self):
        """Stop the tick loop gracefully."""
        if not self._task:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("[TickRunner] Clock stopped")

    async def _loop(self):
        """Tick once per interval until the mission is over."""
        while True:
            await asyncio.sleep(self.sleep_s)
            async with self._lock:
                try:
                    msgs = self.engine.tick()
                except Exception:
                    logger.exception("[TickRunner] Tick failed at clock %d, loop stopped", self.engine.state.clock)
                    raise
                over = self.engine.state.mission_end
            if msgs:
                logger.debug("[TickRunner] Tick produced %d messages", len(msgs))
            if over:
                logger.info("[TickRunner] Mission over, clock halted")
                return

    async def command(self, text: str) -> List[RadioMessage]:
        """Run a command between ticks."""
        async with self._lock:
            return self.engine.process_command(text)

    async def advance(self, count: int = 1) -> List[RadioMessage]:
        """Tick by hand, count times."""
        msgs: List[RadioMessage] = []
        async with self._lock:
            for _ in range(count):
                msgs += self.engine.tick()
        return msgs

    async def end(self) -> Outcome:
        async with self._lock:
            return self.engine.end_mission()

    async def snapshot(self) -> Dict:
        """Get current state (thread-safe)."""
        async with self._lock:
            return self.engine.snapshot()

    def set_time_compression(self, time_compression: float):
        """Update time compression factor (1.0 = real-time, higher = faster)."""
        self.time_compression = max(0.1, min(1000.0, time_compression))
        self.sleep_s = self.tick_seconds / self.time_compression
        logger.info("[TickRunner] Time compression set to %sx (sleep: %.4fs)", self.time_compression, self.sleep_s)
