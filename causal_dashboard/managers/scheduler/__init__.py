from .task_scheduler import TaskScheduler, TaskHandle, CancellationToken
from .manual_scheduler import ManualScheduler
from .tkinter_scheduler import TkinterScheduler
from .periodic_task import PeriodicTask

__all__ = [
    "TaskScheduler",
    "TaskHandle",
    "CancellationToken",
    "ManualScheduler",
    "TkinterScheduler",
    "PeriodicTask",
]
