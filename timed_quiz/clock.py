import asyncio
import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

TickCallback = Callable[[], None]


class Clock:
    """A whole-second countdown advanced one step per logical tick."""

    def __init__(self, seconds: int):
        self.seconds = seconds
        self.remaining = seconds
        self.armed = False

    def start(self) -> None:
        self.remaining = self.seconds
        self.armed = True

    def stop(self) -> None:
        self.armed = False

    def reset(self) -> None:
        """Re-anchor to the starting value without changing armed state."""
        self.remaining = self.seconds

    def tick(self) -> bool:
        """Count down one second. Returns True when this tick reaches zero."""
        if not self.armed or self.remaining <= 0:
            return False
        self.remaining -= 1
        return self.remaining == 0

    @property
    def expired(self) -> bool:
        return self.remaining == 0


class Ticker:
    """Source of one-second ticks. Subclasses decide where ticks come from."""

    def __init__(self):
        self._callbacks: List[TickCallback] = []

    def on_tick(self, callback: TickCallback) -> None:
        self._callbacks.append(callback)

    def start(self) -> None:
        raise NotImplementedError

    def stop(self) -> None:
        raise NotImplementedError

    @property
    def running(self) -> bool:
        raise NotImplementedError

    def _fire(self) -> None:
        for callback in list(self._callbacks):
            callback()


class ManualTicker(Ticker):
    """Ticks only when told to. Used by tests and by callers with their own loop."""

    def __init__(self):
        super().__init__()
        self._running = False

    def start(self) -> None:
        self._running = True

    def stop(self) -> None:
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def advance(self, seconds: int = 1) -> None:
        """Deliver `seconds` ticks, stopping early if the ticker is stopped."""
        for _ in range(seconds):
            if not self._running:
                return
            self._fire()


class AsyncioTicker(Ticker):
    """Fires once per interval from a task on the running event loop."""

    def __init__(self, interval: float = 1.0):
        super().__init__()
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    def stop(self) -> None:
        if self._task:
            self._task.cancel()
            self._task = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _run(self):
        try:
            while True:
                await asyncio.sleep(self.interval)
                self._fire()
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.exception("❌ Tick callback failed, stopping ticker")
            self._task = None
