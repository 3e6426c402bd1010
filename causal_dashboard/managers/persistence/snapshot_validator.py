"""
Schema checks for the recognized snapshot fields.

The validator never raises on bad data; it returns a ValidationReport listing
every problem as (field, index, message). The import path decides what a
non-empty report means: a warning in permissive mode, a rejection in strict
mode.
"""

import math
from dataclasses import dataclass, field
from numbers import Real
from typing import List, Optional

from ...models.simulation_state import NODE_TYPES, PARAMETER_STRENGTHS


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    index: Optional[int]
    message: str

    def __str__(self):
        where = self.field if self.index is None else f"{self.field}[{self.index}]"
        return f"{where}: {self.message}"


@dataclass
class ValidationReport:
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues

    def add(self, field_name, index, message):
        self.issues.append(ValidationIssue(field_name, index, message))

    def failed_fields(self) -> List[str]:
        seen = []
        for issue in self.issues:
            if issue.field not in seen:
                seen.append(issue.field)
        return seen

    def summary(self, limit=5) -> str:
        shown = "; ".join(str(issue) for issue in self.issues[:limit])
        extra = len(self.issues) - limit
        return shown + (f"; ... {extra} more" if extra > 0 else "")


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def _check_unit_interval(report, field_name, index, record, key):
    value = record.get(key)
    if not _is_number(value):
        report.add(field_name, index, f"'{key}' must be a finite number")
    elif not 0.0 <= value <= 1.0:
        report.add(field_name, index, f"'{key}' must be in [0, 1], got {value}")


def _check_string(report, field_name, index, record, key):
    if not isinstance(record.get(key), str):
        report.add(field_name, index, f"'{key}' must be a string")


def _records(report, field_name, value):
    """Yield (index, record) for dict records; report everything else."""
    if not isinstance(value, list):
        report.add(field_name, None, "must be a list")
        return
    for index, record in enumerate(value):
        if not isinstance(record, dict):
            report.add(field_name, index, "must be an object")
            continue
        yield index, record


def _validate_latent_variables(report, value):
    for index, record in _records(report, "latentVariables", value):
        _check_string(report, "latentVariables", index, record, "id")
        _check_string(report, "latentVariables", index, record, "name")
        _check_unit_interval(report, "latentVariables", index, record, "value")
        _check_unit_interval(report, "latentVariables", index, record, "genetic_influence")


def _validate_graph_nodes(report, value):
    records = list(_records(report, "graphNodes", value))
    known_ids = {record["id"] for _, record in records if isinstance(record.get("id"), str)}
    for index, record in records:
        _check_string(report, "graphNodes", index, record, "id")
        _check_string(report, "graphNodes", index, record, "name")
        for key in ("x", "y"):
            if not _is_number(record.get(key)):
                report.add("graphNodes", index, f"'{key}' must be a finite number")
        if record.get("type") not in NODE_TYPES:
            report.add("graphNodes", index, f"'type' must be one of {list(NODE_TYPES)}")
        connections = record.get("connections")
        if not isinstance(connections, list):
            report.add("graphNodes", index, "'connections' must be a list")
            continue
        for target in connections:
            if not isinstance(target, str) or target not in known_ids:
                report.add("graphNodes", index, f"connection to unknown node '{target}'")


def _validate_ode_parameters(report, value):
    for index, record in _records(report, "odeParameters", value):
        _check_string(report, "odeParameters", index, record, "param")
        _check_unit_interval(report, "odeParameters", index, record, "value")
        if record.get("strength") not in PARAMETER_STRENGTHS:
            report.add("odeParameters", index,
                       f"'strength' must be one of {list(PARAMETER_STRENGTHS)}")


def _validate_phenotype_data(report, value):
    previous_time = None
    for index, record in _records(report, "phenotypeData", value):
        time = record.get("time")
        if not isinstance(time, int) or isinstance(time, bool) or time < 0:
            report.add("phenotypeData", index, "'time' must be an integer >= 0")
        else:
            if previous_time is not None and time <= previous_time:
                report.add("phenotypeData", index, "'time' must be strictly increasing")
            previous_time = time
        for key in ("migration", "differentiation", "predicted"):
            if not _is_number(record.get(key)):
                report.add("phenotypeData", index, f"'{key}' must be a finite number")


_FIELD_VALIDATORS = {
    "latentVariables": _validate_latent_variables,
    "graphNodes": _validate_graph_nodes,
    "odeParameters": _validate_ode_parameters,
    "phenotypeData": _validate_phenotype_data,
}


def validate_snapshot_fields(payload: dict) -> ValidationReport:
    """Check every recognized field present (and not null) in `payload`."""
    report = ValidationReport()
    for field_name, validator in _FIELD_VALIDATORS.items():
        value = payload.get(field_name)
        if value is not None:
            validator(report, value)
    return report
