from .task_scheduler import CancellationToken
from ...utils.logger.logger import Logger


class PeriodicTask:
    """
    Calls `callback()` every `interval_ms` on a TaskScheduler until cancelled.

    Each `start()` issues a fresh cancellation token; a callback queued under
    an older token never fires, even if the backend failed to drop it.
    """

    def __init__(self, scheduler, interval_ms, callback, name="task"):
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self.scheduler = scheduler
        self.interval_ms = interval_ms
        self.callback = callback
        self.name = name
        self._token = None
        self._handle = None

    @property
    def active(self) -> bool:
        return self._token is not None and not self._token.cancelled

    def start(self):
        """Schedule the first run one interval from now; no-op if already active."""
        if self.active:
            return
        Logger.log(f"start periodic task '{self.name}' every {self.interval_ms}ms")
        self._token = CancellationToken()
        self._schedule(self._token)

    def cancel(self):
        """Stop the task and drop its pending callback."""
        if self._token is None:
            return
        was_active = not self._token.cancelled
        self._token.cancel()
        if self._handle is not None:
            self.scheduler.cancel(self._handle)
            self._handle = None
        if was_active:
            Logger.log(f"cancelled periodic task '{self.name}'")

    def rebind(self, scheduler):
        """Move the task to another scheduler, keeping it running if it was."""
        was_active = self.active
        self.cancel()
        self.scheduler = scheduler
        if was_active:
            self.start()

    def _schedule(self, token):
        self._handle = self.scheduler.call_later(self.interval_ms, lambda: self._run(token))

    def _run(self, token):
        if token.cancelled:
            return
        try:
            self.callback()
        except Exception as ex:
            Logger.log(f"periodic task '{self.name}' failed: {ex}", Logger.LogPriority.ERROR)
            token.cancel()
            raise
        # The callback may have cancelled this task
        if not token.cancelled:
            self._schedule(token)
