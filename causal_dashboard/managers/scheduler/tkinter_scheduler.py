import time

from .task_scheduler import TaskScheduler, TaskHandle


class TkinterScheduler(TaskScheduler):
    """
    Runs callbacks on the Tk event loop via `after()`.
    Tk is single-threaded, so callbacks never interleave mid-way.
    """

    def __init__(self, widget):
        """
        Args:
            widget: Any Tk widget; usually the root window.
        """
        self.widget = widget

    def now_ms(self) -> float:
        return time.monotonic() * 1000.0

    def call_later(self, delay_ms, callback) -> TaskHandle:
        handle = TaskHandle(self.now_ms() + delay_ms, callback)

        def _run():
            if handle.cancelled:
                return
            handle.token.cancel()
            callback()

        handle.backend_id = self.widget.after(int(delay_ms), _run)
        return handle

    def cancel(self, handle: TaskHandle):
        if handle is None or handle.cancelled:
            return
        handle.token.cancel()
        if handle.backend_id is not None:
            self.widget.after_cancel(handle.backend_id)
