from .snapshot_serializer import (
    MODEL_METRICS,
    SNAPSHOT_FIELDS,
    build_export_payload,
    serialize_snapshot,
    snapshot_filename,
)
from .snapshot_parser import SnapshotDataStrategy, JsonSnapshotStrategy
from .snapshot_validator import ValidationIssue, ValidationReport, validate_snapshot_fields
from .snapshot_merger import merge_snapshot, present_fields
from .input_manager import InputManager, InputDataInterpreter
