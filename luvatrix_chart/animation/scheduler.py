"""Frame-driven animation queue.

One task per owner. The scheduler keeps at most one outstanding frame request;
each frame advances every task from the clock, renders it, and drops finished
or orphaned tasks. Iteration runs over a snapshot so callbacks may add or
cancel tasks while a frame is in progress.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
import math
import time
from typing import Any, Callable

from luvatrix_chart.animation.easing import EasingFn, linear
from luvatrix_chart.animation.frames import FrameScheduler, ManualFrameScheduler
from luvatrix_chart.animation.interpolate import interpolate
from luvatrix_chart.defaults import DEFAULT_FRAME_MS

LOGGER = logging.getLogger(__name__)

Clock = Callable[[], float]


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass(eq=False)
class AnimationTask:
    duration: float = 1000.0
    easing: EasingFn = linear
    num_steps: int = 0
    frame_ms: float = DEFAULT_FRAME_MS
    render: Callable[[float], None] | None = None
    on_progress: Callable[["AnimationTask"], None] | None = None
    on_complete: Callable[["AnimationTask"], None] | None = None
    start_model: dict[str, Any] = field(default_factory=dict)
    target_model: dict[str, Any] = field(default_factory=dict)
    view_model: dict[str, Any] = field(default_factory=dict)
    owner: Any = None
    current_step: int = 0
    start_time: float = 0.0

    def __post_init__(self) -> None:
        if self.duration < 0:
            raise ValueError("duration must be >= 0")
        if self.frame_ms <= 0:
            raise ValueError("frame_ms must be > 0")
        if self.num_steps <= 0:
            self.num_steps = max(1, int(math.ceil(self.duration / self.frame_ms)))

    @property
    def progress(self) -> float:
        return self.easing(self.current_step / self.num_steps)

    @property
    def done(self) -> bool:
        return self.current_step >= self.num_steps


class SchedulerState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"


class AnimationScheduler:
    def __init__(self, frame_scheduler: FrameScheduler | None = None, clock: Clock | None = None) -> None:
        self.frame_scheduler = frame_scheduler or ManualFrameScheduler()
        self.clock = clock or monotonic_ms
        self.state = SchedulerState.IDLE
        self._tasks: list[AnimationTask] = []

    @property
    def tasks(self) -> tuple[AnimationTask, ...]:
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def task_for(self, owner: Any) -> AnimationTask | None:
        for task in self._tasks:
            if task.owner is owner:
                return task
        return None

    def add_animation(self, owner: Any, task: AnimationTask, lazy: bool = False) -> AnimationTask:
        task.owner = owner
        task.start_time = self.clock()
        task.current_step = 0
        if not lazy:
            _set_animating(owner, True)
        for idx, existing in enumerate(self._tasks):
            if existing.owner is owner:
                self._tasks[idx] = task
                break
        else:
            self._tasks.append(task)
        self.request_frame()
        return task

    def cancel_animation(self, owner: Any) -> bool:
        for idx, task in enumerate(self._tasks):
            if task.owner is owner:
                del self._tasks[idx]
                _set_animating(owner, False)
                return True
        return False

    def request_frame(self) -> None:
        if self.state is SchedulerState.PENDING or not self._tasks:
            return
        self.state = SchedulerState.PENDING
        self.frame_scheduler.request_frame(self._on_frame)

    def _on_frame(self) -> None:
        self.state = SchedulerState.IDLE
        self.advance()
        if self._tasks:
            self.request_frame()

    def advance(self) -> None:
        now = self.clock()
        for task in list(self._tasks):
            if not self._is_live(task):
                continue
            owner = task.owner
            if getattr(owner, "destroyed", False):
                LOGGER.warning("dropping animation for destroyed owner %r", owner)
                self._remove(task)
                continue

            if task.duration <= 0:
                step = task.num_steps
            else:
                step = int(math.floor((now - task.start_time) / task.duration * task.num_steps)) + 1
            task.current_step = max(task.current_step, min(step, task.num_steps))

            self._render(task)
            if task.on_progress is not None:
                task.on_progress(task)
            if task.done:
                if task.on_complete is not None:
                    task.on_complete(task)
                if self._is_live(task):
                    self._remove(task)
                    _set_animating(owner, False)

    def _render(self, task: AnimationTask) -> None:
        progress = task.progress
        if task.render is not None:
            task.render(progress)
            return
        render = getattr(task.owner, "render", None)
        if callable(render):
            render(progress)
            return
        interpolate(task.start_model, task.view_model, task.target_model, progress)

    def _is_live(self, task: AnimationTask) -> bool:
        return any(t is task for t in self._tasks)

    def _remove(self, task: AnimationTask) -> None:
        self._tasks = [t for t in self._tasks if t is not task]


def _set_animating(owner: Any, value: bool) -> None:
    if hasattr(owner, "animating"):
        owner.animating = value
