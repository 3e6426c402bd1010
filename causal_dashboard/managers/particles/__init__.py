from .particle_field import ParticleField, ParticleLink, create_particles, derive_links, wrap

__all__ = ["ParticleField", "ParticleLink", "create_particles", "derive_links", "wrap"]
