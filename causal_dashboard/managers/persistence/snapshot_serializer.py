"""
Export side of snapshot persistence.

Export format (JSON object):
    timestamp        ISO-8601 UTC string, millisecond precision, 'Z' suffix
    latentVariables  [{id, name, value, genetic_influence}]
    graphNodes       [{id, name, x, y, type, connections}]
    odeParameters    [{param, value, strength}]
    phenotypeData    [{time, migration, differentiation, predicted}]
    currentTimeStep  int
    modelMetrics     {r2Score, mse, sparsity, mutualInformation}
"""

import copy
import json
from datetime import datetime, timezone

from ...utils.logger.logger import Logger

# Placeholder constants standing in for what a trained model would report.
# Nothing in the dashboard computes them.
MODEL_METRICS = {
    "r2Score": 0.89,
    "mse": 0.12,
    "sparsity": 0.87,
    "mutualInformation": 0.76,
}

SNAPSHOT_FIELDS = ("latentVariables", "graphNodes", "odeParameters", "phenotypeData")


def _utc_now():
    return datetime.now(timezone.utc)


def iso_timestamp(moment: datetime) -> str:
    """Render `moment` like JavaScript's Date.toISOString()."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def build_export_payload(state, now: datetime = None) -> dict:
    """Assemble the export document for `state` (not serialized yet)."""
    now = now or _utc_now()
    payload = {"timestamp": iso_timestamp(now)}
    for key, records in state.persisted_slices().items():
        payload[key] = copy.deepcopy(records)
    payload["currentTimeStep"] = state.time_step
    payload["modelMetrics"] = dict(MODEL_METRICS)
    return payload


def serialize_snapshot(state, now: datetime = None) -> bytes:
    """Export `state` as pretty-printed UTF-8 JSON bytes."""
    Logger.log(f"start serialize_snapshot(time_step={state.time_step})")
    payload = build_export_payload(state, now)
    data = json.dumps(payload, indent=2, ensure_ascii=False, allow_nan=False).encode("utf-8")
    Logger.log(f"end serialize_snapshot: {len(data)} bytes")
    return data


def snapshot_filename(now: datetime = None) -> str:
    """Download name: causal-inference-<epoch milliseconds>.json"""
    now = now or _utc_now()
    return f"causal-inference-{int(now.timestamp() * 1000)}.json"
