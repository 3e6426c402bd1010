"""
Synthetic phenotype time series shown on the dynamics panel.

    migration       = 0.5 + 0.3 sin(0.3 t) + noise * U[0, 1)
    differentiation = 0.2 + 0.05 t        + noise * U[0, 1)
    predicted       = 0.5 + 0.3 sin(0.3 t)

`predicted` is the noise-free curve the migration series scatters around.
"""

import numpy as np
from typing import List, Optional

from ...models.simulation_state import PhenotypePoint


def generate_phenotype_series(n_points: int = 21, noise: float = 0.1,
                              rng: Optional[np.random.Generator] = None) -> List[PhenotypePoint]:
    """
    Build the series for t = 0 .. n_points - 1.

    Args:
        n_points: Number of points (21 covers time steps 0..20).
        noise: Amplitude of the uniform noise on the observed curves.
        rng: NumPy generator; a fresh unseeded one when omitted.
    """
    if n_points < 1:
        raise ValueError("n_points must be >= 1")
    rng = rng if rng is not None else np.random.default_rng()

    t = np.arange(n_points)
    predicted = 0.5 + 0.3 * np.sin(0.3 * t)
    migration = predicted + noise * rng.random(n_points)
    differentiation = 0.2 + 0.05 * t + noise * rng.random(n_points)

    return [
        {
            "time": int(t[i]),
            "migration": float(migration[i]),
            "differentiation": float(differentiation[i]),
            "predicted": float(predicted[i]),
        }
        for i in range(n_points)
    ]


def visible_window(series: list, time_step: int, minimum: int = 5) -> list:
    """Points revealed so far: the first max(minimum, time_step + 1)."""
    return list(series[:max(minimum, time_step + 1)])
