class StateTransitionError(Exception):
    """Invalid simulation state transition."""
    def __init__(self, message="Invalid state transition attempted."):
        super().__init__(message)


class NodeNotFoundError(Exception):
    """Node ID not found in the knowledge graph."""
    def __init__(self, message="Node ID not found in knowledge graph."):
        super().__init__(message)


class SnapshotParseError(Exception):
    """Snapshot payload is not well-formed structured data."""
    def __init__(self, message="Snapshot is not valid JSON."):
        super().__init__(message)


class SnapshotReadError(Exception):
    """Snapshot file could not be read."""
    def __init__(self, message="Unable to read snapshot file."):
        super().__init__(message)


class UnsupportedFileTypeError(Exception):
    """Unsupported snapshot file type."""
    def __init__(self, message="File type not supported."):
        super().__init__(message)


class SnapshotValidationError(Exception):
    """Snapshot fields failed schema validation (strict import only)."""
    def __init__(self, report=None, message=None):
        self.report = report
        if message is None:
            message = "Snapshot failed validation."
            if report is not None and report.issues:
                message = f"Snapshot failed validation: {report.summary()}"
        super().__init__(message)


class InvalidConfigError(Exception):
    """Dashboard configuration failed validation."""
    def __init__(self, message="Invalid dashboard configuration."):
        super().__init__(message)
