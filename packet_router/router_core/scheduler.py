"""
Scheduler
=========

Cooperative task scheduling on a simulated millisecond clock.

The game has three asynchronous triggers: a self-rescheduling frame
callback and two periodic spawn timers. All of them run here, one at a
time and to completion, in due-time order. Every scheduled task returns a
TaskHandle that acts as its cancellation token.

The clock only moves when advance() is called, so a headless session is
fully deterministic and a windowed one simply feeds it wall-clock deltas.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Callable, List, Optional, Tuple


class TaskHandle:
    """
    Cancellation token for a scheduled task.

    Once cancelled, a task never fires again.
    """

    def __init__(self, name: str, interval_ms: Optional[float] = None):
        self._name = name
        self._interval_ms = interval_ms
        self._cancelled = False
        self._fire_count = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def is_periodic(self) -> bool:
        return self._interval_ms is not None

    @property
    def interval_ms(self) -> Optional[float]:
        return self._interval_ms

    @property
    def fire_count(self) -> int:
        """Number of times the task callback has run."""
        return self._fire_count

    def cancel(self) -> None:
        self._cancelled = True

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else "active"
        return f"TaskHandle({self._name}, {state}, fired={self._fire_count})"


class TaskGroup:
    """
    The set of tasks belonging to one run of the game.

    Usable as a context manager: every task in the group is cancelled on
    exit, whatever the exit path.
    """

    def __init__(self):
        self._handles: List[TaskHandle] = []

    def add(self, handle: TaskHandle) -> TaskHandle:
        self._handles.append(handle)
        return handle

    def replace(self, old: Optional[TaskHandle], new: TaskHandle) -> TaskHandle:
        """Swap a finished one-shot handle for its successor."""
        if old is not None and old in self._handles:
            self._handles.remove(old)
        return self.add(new)

    @property
    def handles(self) -> Tuple[TaskHandle, ...]:
        return tuple(self._handles)

    @property
    def active(self) -> bool:
        """True if any task in the group can still fire."""
        return any(not h.cancelled for h in self._handles)

    def cancel_all(self) -> None:
        for handle in self._handles:
            handle.cancel()

    def __enter__(self) -> "TaskGroup":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cancel_all()


class Scheduler:
    """
    Simulated-time task runner.

    - call_later(): one-shot task (the frame callback reschedules itself
      with this, like an animation-frame request)
    - call_every(): periodic task, first firing one interval from now
    """

    def __init__(self, frame_interval_ms: float = 1000.0 / 60.0):
        """
        Initialize scheduler.

        Args:
            frame_interval_ms: Delay used by request_frame().
        """
        if frame_interval_ms <= 0:
            raise ValueError(f"frame_interval_ms must be positive, got {frame_interval_ms}")

        self._frame_interval_ms = frame_interval_ms
        self._now_ms: float = 0.0
        self._queue: List[Tuple[float, int, TaskHandle, Callable[[], None]]] = []
        self._sequence = itertools.count()

    @property
    def now_ms(self) -> float:
        """Current simulated time in milliseconds."""
        return self._now_ms

    @property
    def frame_interval_ms(self) -> float:
        return self._frame_interval_ms

    @property
    def pending_count(self) -> int:
        """Number of queued tasks that can still fire."""
        return sum(1 for _, _, handle, _ in self._queue if not handle.cancelled)

    def _push(self, due_ms: float, handle: TaskHandle, callback: Callable[[], None]) -> None:
        heapq.heappush(self._queue, (due_ms, next(self._sequence), handle, callback))

    def call_later(
        self,
        delay_ms: float,
        callback: Callable[[], None],
        name: str = "task"
    ) -> TaskHandle:
        """
        Schedule a one-shot callback.

        Args:
            delay_ms: Delay from the current simulated time.
            callback: Function to run.
            name: Label for debugging.

        Returns:
            Handle that cancels the task.
        """
        handle = TaskHandle(name)
        self._push(self._now_ms + max(0.0, delay_ms), handle, callback)
        return handle

    def request_frame(self, callback: Callable[[], None], name: str = "frame") -> TaskHandle:
        """Schedule a callback for the next frame."""
        return self.call_later(self._frame_interval_ms, callback, name)

    def call_every(
        self,
        interval_ms: float,
        callback: Callable[[], None],
        name: str = "timer"
    ) -> TaskHandle:
        """
        Schedule a periodic callback.

        Args:
            interval_ms: Period in milliseconds.
            callback: Function to run each period.
            name: Label for debugging.

        Returns:
            Handle that cancels the timer.
        """
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        handle = TaskHandle(name, interval_ms)
        self._push(self._now_ms + interval_ms, handle, callback)
        return handle

    def advance(self, elapsed_ms: float) -> int:
        """
        Move the clock forward, running every task that comes due.

        Tasks run in due-time order, ties broken by scheduling order. Tasks
        scheduled by a callback run in the same call if they fall due
        within the window.

        Args:
            elapsed_ms: Time to advance.

        Returns:
            Number of callbacks run.
        """
        if elapsed_ms < 0:
            raise ValueError(f"elapsed_ms must be non-negative, got {elapsed_ms}")

        target = self._now_ms + elapsed_ms
        ran = 0

        while self._queue and self._queue[0][0] <= target:
            due_ms, _, handle, callback = heapq.heappop(self._queue)
            if handle.cancelled:
                continue

            self._now_ms = due_ms
            if handle.is_periodic:
                # Re-arm before running so the callback may cancel it
                self._push(due_ms + handle.interval_ms, handle, callback)

            handle._fire_count += 1
            callback()
            ran += 1

        self._now_ms = target
        self._discard_cancelled()
        return ran

    def run_frames(self, count: int) -> int:
        """Advance by a whole number of frame intervals, one at a time."""
        ran = 0
        for _ in range(count):
            ran += self.advance(self._frame_interval_ms)
        return ran

    def _discard_cancelled(self) -> None:
        if any(handle.cancelled for _, _, handle, _ in self._queue):
            self._queue = [entry for entry in self._queue if not entry[2].cancelled]
            heapq.heapify(self._queue)

    def clear(self) -> None:
        """Drop every queued task and reset the clock."""
        for _, _, handle, _ in self._queue:
            handle.cancel()
        self._queue = []
        self._now_ms = 0.0
