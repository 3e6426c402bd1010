"""
Causal dashboard configuration module.

Contains feature flags and the YAML-backed dashboard configuration.
"""

from .feature_flags import FeatureFlags
from .dashboard_config import (
    DashboardConfig,
    TimingConfig,
    StepperConfig,
    ParticleConfig,
    PhenotypeConfig,
    ValidationConfig,
    LoggingConfig,
    config_from_dict,
    load_config,
)

__all__ = [
    "FeatureFlags",
    "DashboardConfig",
    "TimingConfig",
    "StepperConfig",
    "ParticleConfig",
    "PhenotypeConfig",
    "ValidationConfig",
    "LoggingConfig",
    "config_from_dict",
    "load_config",
]
