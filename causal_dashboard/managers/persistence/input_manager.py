import os

from ...utils.logger.logger import Logger
from ...config.feature_flags import FeatureFlags
from ...models.exceptions import (
    SnapshotReadError,
    SnapshotValidationError,
    UnsupportedFileTypeError,
)
from .snapshot_parser import JsonSnapshotStrategy
from .snapshot_validator import validate_snapshot_fields


class InputDataInterpreter:
    """Pick a snapshot parsing strategy from the file extension."""

    STRATEGIES = {
        ".json": JsonSnapshotStrategy,
    }

    def get_data_processing_strategy(self, file_path):
        Logger.log(f"start get_data_processing_strategy({file_path})")
        file_extension = os.path.splitext(file_path)[1].lower()
        strategy_class = self.STRATEGIES.get(file_extension)
        if strategy_class is None:
            Logger.log(f"unsupported file type: {file_extension}", Logger.LogPriority.ERROR)
            raise UnsupportedFileTypeError(f"Unsupported file type: {file_extension}")
        Logger.log(f"end get_data_processing_strategy: {strategy_class.__name__}")
        return strategy_class()


class InputManager:
    """Read, parse and check snapshot payloads before they reach the state."""

    def __init__(self):
        Logger.log("start InputManager__init__")
        self.data_interpreter = InputDataInterpreter()
        self.default_strategy = JsonSnapshotStrategy()
        Logger.log("end InputManager__init__")

    def read_file(self, file_path):
        """
        Return the raw bytes of a snapshot file.

        Raises:
            UnsupportedFileTypeError: For anything but a .json file.
            SnapshotReadError: If the file cannot be read.
        """
        Logger.log(f"start read_file({file_path})")
        self.data_interpreter.get_data_processing_strategy(file_path)
        try:
            with open(file_path, 'rb') as f:
                data = f.read()
        except OSError as ex:
            Logger.log(f"Error reading snapshot file {file_path}: {ex}", Logger.LogPriority.ERROR)
            raise SnapshotReadError(f"Unable to read snapshot file {file_path}: {ex}")
        Logger.log(f"File details - Name: {os.path.basename(file_path)}, Size: {len(data)} bytes")
        Logger.log("end read_file")
        return data

    def parse(self, data, strategy=None):
        """
        Parse raw snapshot bytes into a payload mapping and check its fields.

        Permissive by default: schema problems are logged and the payload is
        returned anyway. With FeatureFlags.STRICT_SNAPSHOT_IMPORT they raise.

        Raises:
            SnapshotParseError: If the data is not well-formed.
            SnapshotValidationError: Strict mode only, on any schema problem.
        """
        Logger.log("start InputManager.parse()")
        strategy = strategy or self.default_strategy
        payload = strategy.process(data)

        report = validate_snapshot_fields(payload)
        if not report.ok:
            if FeatureFlags.STRICT_SNAPSHOT_IMPORT:
                Logger.log(f"snapshot rejected: {report.summary()}", Logger.LogPriority.ERROR)
                raise SnapshotValidationError(report)
            Logger.log(f"snapshot accepted with schema problems: {report.summary()}",
                       Logger.LogPriority.WARNING)
        Logger.log("end InputManager.parse()")
        return payload

    def load_file(self, file_path):
        """Read and parse a snapshot file with the strategy its extension selects."""
        strategy = self.data_interpreter.get_data_processing_strategy(file_path)
        return self.parse(self.read_file(file_path), strategy)
