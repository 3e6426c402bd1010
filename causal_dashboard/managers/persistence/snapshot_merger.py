import copy

from ...utils.logger.logger import Logger
from .snapshot_serializer import SNAPSHOT_FIELDS

# Wire name -> SimulationState attribute
FIELD_TO_SLICE = {
    "latentVariables": "latent_variables",
    "graphNodes": "graph_nodes",
    "odeParameters": "ode_parameters",
    "phenotypeData": "phenotype_series",
}


def present_fields(payload: dict) -> list:
    """Recognized fields the payload carries; a null value counts as absent."""
    return [name for name in SNAPSHOT_FIELDS if payload.get(name) is not None]


def merge_snapshot(state, payload: dict) -> list:
    """
    Replace each present slice of `state` wholesale with the payload's value.

    No per-item merge and no shape checks: whatever the payload holds is stored.
    Absent fields and all other keys (timestamp, currentTimeStep, modelMetrics)
    leave the state untouched.

    Returns:
        The wire names of the replaced fields.
    """
    replaced = present_fields(payload)
    for name in replaced:
        setattr(state, FIELD_TO_SLICE[name], copy.deepcopy(payload[name]))
    Logger.log(f"merge_snapshot replaced {replaced}")
    return replaced
