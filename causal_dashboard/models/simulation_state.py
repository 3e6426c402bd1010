"""
Simulation state representation.

The four persisted slices (latent variables, graph nodes, ODE parameters,
phenotype series) are JSON-shaped records that mirror the export format
key for key. Imported payloads are stored as-is, so a record may not match
its TypedDict when the import was permissive.

Particles are internal decorative state and are never persisted.
"""

import copy
from dataclasses import dataclass, field
from typing import List, Optional, TypedDict


class LatentVariable(TypedDict):
    id: str
    name: str
    value: float
    genetic_influence: float


class GraphNode(TypedDict):
    id: str
    name: str
    x: float
    y: float
    type: str
    connections: List[str]


class OdeParameter(TypedDict):
    param: str
    value: float
    strength: str


class PhenotypePoint(TypedDict):
    time: int
    migration: float
    differentiation: float
    predicted: float


NODE_TYPES = ("gene", "protein")
PARAMETER_STRENGTHS = ("weak", "moderate", "strong")


DEFAULT_LATENT_VARIABLES: List[LatentVariable] = [
    {"id": "z1", "name": "Transcription Factor Activity", "value": 0.75, "genetic_influence": 0.82},
    {"id": "z2", "name": "Metabolic Flux", "value": 0.45, "genetic_influence": 0.63},
    {"id": "z3", "name": "Cell Cycle Regulation", "value": 0.60, "genetic_influence": 0.71},
    {"id": "z4", "name": "Stress Response", "value": 0.30, "genetic_influence": 0.45},
]

DEFAULT_GRAPH_NODES: List[GraphNode] = [
    {"id": "g1", "name": "TP53", "x": 150, "y": 100, "type": "gene", "connections": ["g2", "g4"]},
    {"id": "g2", "name": "MYC", "x": 250, "y": 80, "type": "gene", "connections": ["g3", "g5"]},
    {"id": "g3", "name": "MAPK1", "x": 350, "y": 120, "type": "protein", "connections": ["g4"]},
    {"id": "g4", "name": "CDKN1A", "x": 200, "y": 200, "type": "gene", "connections": ["g5"]},
    {"id": "g5", "name": "AKT1", "x": 300, "y": 180, "type": "protein", "connections": ["g1"]},
]

# Strengths are assigned by hand, not derived from value
DEFAULT_ODE_PARAMETERS: List[OdeParameter] = [
    {"param": "k1 (z1→z2)", "value": 0.42, "strength": "moderate"},
    {"param": "k2 (z2→z3)", "value": 0.78, "strength": "strong"},
    {"param": "k3 (z3→z4)", "value": 0.21, "strength": "weak"},
    {"param": "k4 (z1→z4)", "value": 0.65, "strength": "moderate"},
]


def default_latent_variables() -> List[LatentVariable]:
    return copy.deepcopy(DEFAULT_LATENT_VARIABLES)


def default_graph_nodes() -> List[GraphNode]:
    return copy.deepcopy(DEFAULT_GRAPH_NODES)


def default_ode_parameters() -> List[OdeParameter]:
    return copy.deepcopy(DEFAULT_ODE_PARAMETERS)


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp `value` into [low, high]."""
    return max(low, min(high, value))


@dataclass
class Particle:
    """
    One decorative background particle.

    Attributes:
        id: Index within the field.
        x, y: Position in [0, field_size).
        size: Drawing radius.
        velocity_x, velocity_y: Displacement per motion tick.
        opacity: Drawing opacity in [0, 1].
    """
    id: int
    x: float
    y: float
    size: float
    velocity_x: float
    velocity_y: float
    opacity: float


@dataclass
class SimulationState:
    """
    Canonical dashboard state owned by the StateStore.

    Attributes:
        time_step: Stepper position in [0, max_time_step].
        running: True while the tick task is scheduled.
        latent_variables: Stepper output, one record per latent variable.
        graph_nodes: Knowledge graph (genes/proteins).
        ode_parameters: Displayed coupling parameters.
        phenotype_series: Synthetic phenotype time series.
        particles: Background particle field.
        selected_node_id: Graph node picked by the user, if any.
        status_message: Transient import status, '' when cleared.
    """
    time_step: int = 0
    running: bool = False
    latent_variables: List[LatentVariable] = field(default_factory=default_latent_variables)
    graph_nodes: List[GraphNode] = field(default_factory=default_graph_nodes)
    ode_parameters: List[OdeParameter] = field(default_factory=default_ode_parameters)
    phenotype_series: List[PhenotypePoint] = field(default_factory=list)
    particles: List[Particle] = field(default_factory=list)
    selected_node_id: Optional[str] = None
    status_message: str = ""

    def copy(self) -> "SimulationState":
        """Deep copy; the copy shares nothing mutable with this state."""
        return copy.deepcopy(self)

    def persisted_slices(self) -> dict:
        """The four slices that travel through export/import, keyed by wire name."""
        return {
            "latentVariables": self.latent_variables,
            "graphNodes": self.graph_nodes,
            "odeParameters": self.ode_parameters,
            "phenotypeData": self.phenotype_series,
        }
