from __future__ import annotations

from dataclasses import dataclass
import logging
import time
from typing import Callable, Protocol

LOGGER = logging.getLogger(__name__)

FrameCallback = Callable[[], None]


class FrameScheduler(Protocol):
    def request_frame(self, callback: FrameCallback) -> None:
        """Invoke ``callback`` once, at or before the next display refresh."""
        ...


class ManualFrameScheduler:
    """Queues frame callbacks until the host (or a test) calls :meth:`flush`."""

    def __init__(self) -> None:
        self._pending: list[FrameCallback] = []
        self.frames = 0

    @property
    def pending(self) -> int:
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> None:
        self._pending.append(callback)

    def flush(self) -> int:
        """Run callbacks queued before this call; ones requested meanwhile wait for the next flush."""
        batch, self._pending = self._pending, []
        for callback in batch:
            callback()
        if batch:
            self.frames += 1
        return len(batch)


@dataclass
class FrameRateController:
    """Frame cadence for :class:`LoopFrameScheduler`."""

    target_fps: int = 60

    def __post_init__(self) -> None:
        if self.target_fps <= 0:
            raise ValueError("target_fps must be > 0")

    @property
    def target_dt(self) -> float:
        return 1.0 / float(self.target_fps)

    def compute_sleep(self, loop_started_at: float, loop_finished_at: float) -> float:
        elapsed = max(0.0, loop_finished_at - loop_started_at)
        return max(0.0, self.target_dt - elapsed)


class LoopFrameScheduler:
    """Runs frame callbacks on the caller thread at ``target_fps``."""

    def __init__(
        self,
        target_fps: int = 60,
        *,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._controller = FrameRateController(target_fps=target_fps)
        self._clock = clock
        self._sleep = sleep
        self._pending: list[FrameCallback] = []
        self._running = False
        self._last_error: Exception | None = None
        self.frames = 0

    def request_frame(self, callback: FrameCallback) -> None:
        self._pending.append(callback)

    @property
    def last_error(self) -> Exception | None:
        return self._last_error

    def stop(self) -> None:
        self._running = False

    def run(self, max_frames: int | None = None) -> int:
        """Pump frames until no callback is pending, ``stop`` is called or ``max_frames`` ran."""
        if max_frames is not None and max_frames < 0:
            raise ValueError("max_frames must be >= 0")
        self._running = True
        ran = 0
        try:
            while self._running and self._pending:
                if max_frames is not None and ran >= max_frames:
                    break
                started = self._clock()
                batch, self._pending = self._pending, []
                try:
                    for callback in batch:
                        callback()
                except Exception as exc:  # noqa: BLE001
                    self._last_error = exc
                    LOGGER.exception("frame callback failed: %s", exc)
                    break
                ran += 1
                self.frames += 1
                delay = self._controller.compute_sleep(started, self._clock())
                if delay > 0 and self._pending:
                    self._sleep(delay)
        finally:
            self._running = False
        return ran
