import os
from datetime import datetime

from .log_storage_strategy import LogStorageStrategy


class LocalFileStrategy(LogStorageStrategy):
    """
    Appends log lines to a local text file.
    """

    # INITIALIZE LOG STORAGE STRATEGY
    def __init__(self, file_location):
        """
        Args:
            file_location (str): Path of the log file, relative paths resolve against the cwd.
        """
        self.file_location = self.resolve_file_path(file_location)
        self.initialize_log_file()

    # RESOLVE FILE PATH TO ABSOLUTE AND CREATE DIRECTORIES IF NEEDED
    def resolve_file_path(self, file_location):
        if not os.path.isabs(file_location):
            file_location = os.path.join(os.getcwd(), file_location)

        dir_name = os.path.dirname(file_location)
        if dir_name:
            os.makedirs(dir_name, exist_ok=True)

        return file_location

    # START EACH SESSION WITH A FRESH FILE
    def initialize_log_file(self):
        with open(self.file_location, 'w', encoding='utf-8') as log_file:
            log_file.write(f"LOG INITIALIZATION: {datetime.now()}\n")

    # STORE A LOG ENTRY IN THE FILE
    def store_log(self, message, priority, timestamp):
        """
        Args:
            message (str): The log message.
            priority (str): The priority level of the log.
            timestamp (str): The timestamp of the log entry.
        """
        with open(self.file_location, 'a', encoding='utf-8') as log_file:
            log_file.write(f"[{timestamp}] [{priority}] {message}\n")

    # CLEAR ALL LOG ENTRIES FROM THE FILE
    def flush_logs(self):
        with open(self.file_location, 'w', encoding='utf-8') as log_file:
            log_file.write(f"LOG FLUSHED: {datetime.now()}\n")
