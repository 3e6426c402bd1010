from .simulation_state import (
    LatentVariable,
    GraphNode,
    OdeParameter,
    PhenotypePoint,
    Particle,
    SimulationState,
    NODE_TYPES,
    PARAMETER_STRENGTHS,
    default_latent_variables,
    default_graph_nodes,
    default_ode_parameters,
    clamp,
)
from .exceptions import (
    StateTransitionError,
    NodeNotFoundError,
    SnapshotParseError,
    SnapshotReadError,
    SnapshotValidationError,
    UnsupportedFileTypeError,
    InvalidConfigError,
)
