import itertools


class CancellationToken:
    """Flag shared between a task and the callbacks it has queued."""

    def __init__(self):
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class TaskHandle:
    """Identifies one queued callback so it can be cancelled."""

    _ids = itertools.count(1)

    def __init__(self, due_ms, callback):
        self.handle_id = next(self._ids)
        self.due_ms = due_ms
        self.callback = callback
        self.token = CancellationToken()
        # Backend-specific id, e.g. the string returned by Tk's after()
        self.backend_id = None

    @property
    def cancelled(self):
        return self.token.cancelled

    def __repr__(self):
        return f"TaskHandle(id={self.handle_id}, due_ms={self.due_ms}, cancelled={self.cancelled})"


class TaskScheduler:
    """
    Interface for the single-threaded loop every timer callback runs on.
    Callbacks never run concurrently; each runs to completion before the next.
    """

    def call_later(self, delay_ms, callback) -> TaskHandle:
        """Queue `callback()` to run once after `delay_ms` milliseconds."""
        raise NotImplementedError()

    def cancel(self, handle: TaskHandle):
        """Cancel a queued callback; cancelling twice or after it ran is a no-op."""
        raise NotImplementedError()

    def now_ms(self) -> float:
        """Current loop time in milliseconds."""
        raise NotImplementedError()
