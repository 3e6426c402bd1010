import heapq

from .task_scheduler import TaskScheduler, TaskHandle
from ...utils.logger.logger import Logger


class ManualScheduler(TaskScheduler):
    """
    Virtual-clock scheduler: time only moves when `advance()` is called.

    Due callbacks run in (due time, submission order). Callbacks queued while
    advancing run in the same call if they fall due before its end.
    """

    def __init__(self):
        self._now_ms = 0.0
        self._queue = []
        self._running = False

    def now_ms(self) -> float:
        return self._now_ms

    def call_later(self, delay_ms, callback) -> TaskHandle:
        if delay_ms < 0:
            raise ValueError("delay_ms must be non-negative")
        handle = TaskHandle(self._now_ms + delay_ms, callback)
        heapq.heappush(self._queue, (handle.due_ms, handle.handle_id, handle))
        return handle

    def cancel(self, handle: TaskHandle):
        if handle is not None:
            handle.token.cancel()

    def pending_count(self) -> int:
        """Number of queued callbacks that have not been cancelled."""
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)

    def next_due_ms(self):
        """Due time of the earliest live callback, or None when idle."""
        self._discard_cancelled_head()
        return self._queue[0][0] if self._queue else None

    def advance(self, delta_ms) -> int:
        """
        Move the clock forward by `delta_ms`, running every callback that falls due.

        Returns:
            The number of callbacks run.
        """
        if delta_ms < 0:
            raise ValueError("delta_ms must be non-negative")
        if self._running:
            raise RuntimeError("advance() called from inside a scheduled callback")

        target = self._now_ms + delta_ms
        ran = 0
        self._running = True
        try:
            while True:
                self._discard_cancelled_head()
                if not self._queue or self._queue[0][0] > target:
                    break
                due_ms, _, handle = heapq.heappop(self._queue)
                self._now_ms = due_ms
                handle.token.cancel()
                handle.callback()
                ran += 1
        finally:
            self._running = False
        self._now_ms = target
        return ran

    def run_pending(self) -> int:
        """Run callbacks that are already due without moving the clock."""
        return self.advance(0)

    def run_until_idle(self, max_ms=600_000) -> int:
        """Advance until nothing is queued or `max_ms` of virtual time has passed."""
        ran = 0
        deadline = self._now_ms + max_ms
        while True:
            next_due = self.next_due_ms()
            if next_due is None or next_due > deadline:
                break
            ran += self.advance(next_due - self._now_ms)
        if self.next_due_ms() is not None:
            Logger.log(f"run_until_idle stopped at {self._now_ms}ms with work pending",
                       Logger.LogPriority.WARNING)
        return ran

    def _discard_cancelled_head(self):
        while self._queue and self._queue[0][2].cancelled:
            heapq.heappop(self._queue)
