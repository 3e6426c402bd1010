import os
import tempfile
import threading
from datetime import datetime
from enum import Enum

from .local_file_strategy import LocalFileStrategy


class Logger:
    """
    Process-global logger used by every dashboard component.
    Implements a static class pattern: call the class methods directly,
    never instantiate it.
    """

    class LogPriority(Enum):
        DEBUG = 1
        INFO = 2
        WARNING = 3
        ERROR = 4
        CRITICAL = 5

    DEFAULT_FILE_NAME = "causal_dashboard_logs.txt"

    is_logging_enabled = True
    log_storage_strategy = None
    min_priority = LogPriority.DEBUG
    # Re-entrant: flush/enable/disable log through cls.log while holding it
    _lock = threading.RLock()

    # INITIALIZE LOGGER
    @classmethod
    def initialize(cls, file_location=None):
        """
        Installs the default file storage strategy if none is set yet.

        Parameters:
        file_location (str): Log file path. Defaults to a file in the system temp directory.
        """
        with cls._lock:
            if cls.log_storage_strategy is None:
                if not file_location:
                    file_location = os.path.join(tempfile.gettempdir(), cls.DEFAULT_FILE_NAME)
                cls.set_log_storage_strategy(LocalFileStrategy(file_location))
                cls.log(f"Logger initialized with file storage at {file_location}.")

    # LOG WITH MESSAGE AND PRIORITY
    @classmethod
    def log(cls, message, priority=LogPriority.DEBUG):
        """
        Logs a message with a given priority through the current storage strategy.

        Parameters:
        message (str): The log message to be stored.
        priority (LogPriority): The priority level of the log (default is DEBUG).
        """
        with cls._lock:
            if not cls.is_logging_enabled or cls.log_storage_strategy is None:
                return
            if priority.value < cls.min_priority.value:
                return
            cls.log_storage_strategy.store_log(
                str(message), priority.name, datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            )

    # SET LOG STORAGE STRATEGY
    @classmethod
    def set_log_storage_strategy(cls, log_storage_strategy):
        """Replace the storage strategy (None turns storage off)."""
        with cls._lock:
            cls.log_storage_strategy = log_storage_strategy

    # SET MINIMUM PRIORITY
    @classmethod
    def set_min_priority(cls, priority):
        """
        Drop every message below `priority`.

        Parameters:
        priority (LogPriority | str): Threshold, either the enum member or its name.
        """
        if isinstance(priority, str):
            try:
                priority = cls.LogPriority[priority.upper()]
            except KeyError:
                raise ValueError(f"Unknown log priority: {priority}")
        with cls._lock:
            cls.min_priority = priority

    # FLUSH LOGS
    @classmethod
    def flush_logs(cls):
        """Clear stored logs through the storage strategy."""
        with cls._lock:
            if cls.is_logging_enabled and cls.log_storage_strategy:
                cls.log_storage_strategy.flush_logs()

    # DISABLE LOGGING
    @classmethod
    def disable_logging(cls):
        with cls._lock:
            cls.log("Logging disabled")
            cls.is_logging_enabled = False

    # ENABLE LOGGING
    @classmethod
    def enable_logging(cls):
        with cls._lock:
            cls.is_logging_enabled = True
            cls.log("Logging enabled")
