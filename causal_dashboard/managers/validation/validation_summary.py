"""
Numbers shown on the validation panel.

None of these come from a model. The p-values and knockout effects are
uniform random draws and the metrics are fixed constants; every summary
carries `placeholder=True` so callers can label them as such.

    p_value          = 0.001 * U[0, 1)          one per latent variable
    knockout effect  = 0.3 + 0.5 * U[0, 1)      first `knockout_count` graph nodes
"""

import numpy as np
from dataclasses import dataclass, field
from typing import List, Optional

from ...config.dashboard_config import ValidationConfig
from ..persistence.snapshot_serializer import MODEL_METRICS


@dataclass(frozen=True)
class MendelianRandomizationResult:
    latent_id: str
    name: str
    p_value: float
    verdict: str = "Causal"


@dataclass(frozen=True)
class KnockoutSuggestion:
    node_id: str
    name: str
    predicted_effect: float
    priority: str = "High Priority"


@dataclass(frozen=True)
class ValidationSummary:
    mendelian_randomization: List[MendelianRandomizationResult]
    knockouts: List[KnockoutSuggestion]
    model_metrics: dict = field(default_factory=lambda: dict(MODEL_METRICS))
    placeholder: bool = True


def build_validation_summary(state, config: ValidationConfig = None,
                             rng: Optional[np.random.Generator] = None) -> ValidationSummary:
    """Draw the placeholder numbers for the latent variables and graph nodes in `state`."""
    config = config or ValidationConfig()
    rng = rng if rng is not None else np.random.default_rng(config.seed)

    latents = [lv for lv in state.latent_variables if isinstance(lv, dict)] \
        if isinstance(state.latent_variables, list) else []
    nodes = [node for node in state.graph_nodes if isinstance(node, dict)] \
        if isinstance(state.graph_nodes, list) else []
    nodes = nodes[:config.knockout_count]

    p_values = 0.001 * rng.random(len(latents))
    effects = 0.3 + 0.5 * rng.random(len(nodes))

    return ValidationSummary(
        mendelian_randomization=[
            MendelianRandomizationResult(
                latent_id=str(lv.get("id")),
                name=str(lv.get("name", lv.get("id"))),
                p_value=float(p),
            )
            for lv, p in zip(latents, p_values)
        ],
        knockouts=[
            KnockoutSuggestion(
                node_id=str(node.get("id")),
                name=str(node.get("name", node.get("id"))),
                predicted_effect=float(effect),
            )
            for node, effect in zip(nodes, effects)
        ],
    )
