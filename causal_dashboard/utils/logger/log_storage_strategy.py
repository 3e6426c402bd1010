class LogStorageStrategy:
    """
    Base class for log storage strategies.
    Subclasses decide where log lines go and what flushing means.
    """

    # STORE LOG WITH MESSAGE PRIORITY AND TIMESTAMP
    def store_log(self, message, priority, timestamp):
        """
        Stores a log message with the given priority and timestamp.

        Parameters:
        message (str): The log message to be stored.
        priority (str): Name of the priority level.
        timestamp (str): The timestamp of the log message.

        Raises:
        NotImplementedError: If this method is not overridden in a subclass.
        """
        raise NotImplementedError()

    # FLUSHES ALL STORED LOGS
    def flush_logs(self):
        """
        Discards all stored logs.

        Raises:
        NotImplementedError: If this method is not overridden in a subclass.
        """
        raise NotImplementedError()


class MemoryLogStrategy(LogStorageStrategy):
    """Keeps log lines in a list; used by the headless view and tests."""

    def __init__(self):
        self.records = []

    def store_log(self, message, priority, timestamp):
        self.records.append((timestamp, priority, message))

    def flush_logs(self):
        self.records.clear()

    def messages(self, priority=None):
        """Return stored messages, optionally only those with `priority` (a name)."""
        return [m for _, p, m in self.records if priority is None or p == priority]
