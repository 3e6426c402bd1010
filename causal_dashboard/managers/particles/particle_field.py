"""
Decorative background particle field.

Particles drift with constant velocity on a torus: a particle leaving one
edge re-enters from the opposite edge instead of bouncing.

Links between particles are derived on demand from current positions and are
never stored. The derivation is a pairwise scan over all unordered pairs
(O(n^2), no spatial index), which is fine at the default 30 particles.
"""

import numpy as np
from dataclasses import dataclass
from typing import List, Optional

from ...config.dashboard_config import ParticleConfig, TimingConfig
from ...config.feature_flags import FeatureFlags
from ...models.simulation_state import Particle
from ...utils.logger.logger import Logger
from ..scheduler.periodic_task import PeriodicTask


@dataclass(frozen=True)
class ParticleLink:
    """Line drawn between two nearby particles."""
    source: int
    target: int
    distance: float
    opacity: float


def wrap(position: float, velocity: float, size: float = 100.0) -> float:
    """Toroidal update: (position + velocity + size) mod size."""
    wrapped = (position + velocity + size) % size
    # Float rounding can land exactly on `size` for tiny negative sums
    return 0.0 if wrapped >= size else wrapped


def create_particles(config: ParticleConfig,
                     rng: Optional[np.random.Generator] = None) -> List[Particle]:
    """Build `config.count` particles with independently randomized attributes."""
    rng = rng if rng is not None else np.random.default_rng(config.seed)
    n = config.count
    xs = rng.uniform(0.0, config.field_size, n)
    ys = rng.uniform(0.0, config.field_size, n)
    sizes = rng.uniform(config.min_size, config.max_size, n)
    vxs = rng.uniform(-config.max_speed, config.max_speed, n)
    vys = rng.uniform(-config.max_speed, config.max_speed, n)
    opacities = rng.uniform(config.min_opacity, config.max_opacity, n)
    return [
        Particle(
            id=i,
            x=float(xs[i]),
            y=float(ys[i]),
            size=float(sizes[i]),
            velocity_x=float(vxs[i]),
            velocity_y=float(vys[i]),
            opacity=float(opacities[i]),
        )
        for i in range(n)
    ]


def derive_links(particles: List[Particle], link_distance: float = 15.0,
                 link_opacity: float = 0.15) -> List[ParticleLink]:
    """
    Links for every unordered pair closer than `link_distance`.

    Distances are plain Euclidean in the field's coordinates; they do not
    wrap around the torus edges.
    """
    n = len(particles)
    if n < 2:
        return []
    positions = np.array([[p.x, p.y] for p in particles], dtype=np.float64)
    deltas = positions[:, None, :] - positions[None, :, :]
    distances = np.sqrt((deltas ** 2).sum(axis=-1))
    rows, cols = np.triu_indices(n, k=1)
    close = distances[rows, cols] < link_distance
    return [
        ParticleLink(
            source=particles[i].id,
            target=particles[j].id,
            distance=float(distances[i, j]),
            opacity=link_opacity,
        )
        for i, j in zip(rows[close], cols[close])
    ]


class ParticleField:
    """Own the motion task that drifts the particles stored in the StateStore."""

    def __init__(self, store, scheduler, config: ParticleConfig = None,
                 timing: TimingConfig = None):
        Logger.log("start ParticleField__init__")
        self.store = store
        self.config = config or ParticleConfig()
        timing = timing or TimingConfig()
        self.rng = np.random.default_rng(self.config.seed)
        self.motion_task = PeriodicTask(scheduler, timing.motion_interval_ms, self.tick,
                                        name="motion")
        self._check_scale(self.config.count)
        Logger.log("end ParticleField__init__")

    def initialize(self):
        """Replace the stored particles with a freshly randomized field."""
        Logger.log(f"start ParticleField.initialize(): {self.config.count} particles")
        particles = create_particles(self.config, self.rng)

        def _install(state):
            state.particles = particles

        self.store.mutate(_install)
        Logger.log("end ParticleField.initialize()")

    def start(self):
        self.motion_task.start()

    def stop(self):
        self.motion_task.cancel()

    def rebind(self, scheduler):
        self.motion_task.rebind(scheduler)

    def tick(self):
        """Move every particle one step with toroidal wrap."""
        size = self.config.field_size

        def _move(state):
            for particle in state.particles:
                particle.x = wrap(particle.x, particle.velocity_x, size)
                particle.y = wrap(particle.y, particle.velocity_y, size)

        self.store.mutate(_move)

    def links(self, particles: List[Particle] = None) -> List[ParticleLink]:
        """Links for `particles`, or for the particles currently in the store."""
        if particles is None:
            particles = self.store.get_snapshot().particles
        self._check_scale(len(particles))
        return derive_links(particles, self.config.link_distance, self.config.link_opacity)

    def _check_scale(self, count):
        if FeatureFlags.WARN_ON_LARGE_PARTICLE_FIELD and count > self.config.large_field_threshold:
            Logger.log(
                f"particle field has {count} particles (> {self.config.large_field_threshold}); "
                f"link derivation is a pairwise scan without a spatial index",
                Logger.LogPriority.WARNING,
            )
