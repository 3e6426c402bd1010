"""
Configuration loading and validation for the causal dashboard.

Loads an optional YAML config and validates every section. Missing
sections and keys fall back to the dashboard defaults.
"""

import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..models.exceptions import InvalidConfigError


@dataclass(frozen=True)
class TimingConfig:
    """Periods of the scheduled tasks, in milliseconds."""
    tick_interval_ms: int = 300
    motion_interval_ms: int = 50
    status_clear_ms: int = 3000

    def validate(self) -> tuple[bool, Optional[str]]:
        if self.tick_interval_ms <= 0:
            return False, "tick_interval_ms must be positive"
        if self.motion_interval_ms <= 0:
            return False, "motion_interval_ms must be positive"
        if self.status_clear_ms < 0:
            return False, "status_clear_ms must be non-negative"
        return True, None


@dataclass(frozen=True)
class StepperConfig:
    """Latent-variable stepping function: value += amplitude * sin(frequency * t + i)."""
    max_time_step: int = 20
    amplitude: float = 0.05
    frequency: float = 0.5

    def validate(self) -> tuple[bool, Optional[str]]:
        if self.max_time_step < 1:
            return False, "max_time_step must be >= 1"
        if self.amplitude < 0:
            return False, "amplitude must be non-negative"
        return True, None


@dataclass(frozen=True)
class ParticleConfig:
    """Background particle field."""
    count: int = 30
    field_size: float = 100.0
    max_speed: float = 0.05
    min_size: float = 2.0
    max_size: float = 5.0
    min_opacity: float = 0.2
    max_opacity: float = 0.6
    link_distance: float = 15.0
    link_opacity: float = 0.15
    large_field_threshold: int = 200
    seed: Optional[int] = None

    def validate(self) -> tuple[bool, Optional[str]]:
        if self.count < 0:
            return False, "count must be non-negative"
        if self.field_size <= 0:
            return False, "field_size must be positive"
        if self.max_speed < 0:
            return False, "max_speed must be non-negative"
        if not 0 < self.min_size <= self.max_size:
            return False, "sizes must satisfy 0 < min_size <= max_size"
        if not 0.0 <= self.min_opacity <= self.max_opacity <= 1.0:
            return False, "opacities must satisfy 0 <= min_opacity <= max_opacity <= 1"
        if self.link_distance < 0:
            return False, "link_distance must be non-negative"
        if not 0.0 <= self.link_opacity <= 1.0:
            return False, "link_opacity must be in [0, 1]"
        if self.large_field_threshold < 1:
            return False, "large_field_threshold must be >= 1"
        return True, None


@dataclass(frozen=True)
class PhenotypeConfig:
    """Synthetic phenotype series generated at startup."""
    n_points: int = 21
    noise: float = 0.1
    seed: Optional[int] = None

    def validate(self) -> tuple[bool, Optional[str]]:
        if self.n_points < 1:
            return False, "n_points must be >= 1"
        if self.noise < 0:
            return False, "noise must be non-negative"
        return True, None


@dataclass(frozen=True)
class ValidationConfig:
    """Placeholder validation-stage numbers."""
    knockout_count: int = 3
    seed: Optional[int] = None

    def validate(self) -> tuple[bool, Optional[str]]:
        if self.knockout_count < 0:
            return False, "knockout_count must be non-negative"
        return True, None


@dataclass(frozen=True)
class LoggingConfig:
    """Logger setup."""
    enabled: bool = True
    file_location: Optional[str] = None
    min_priority: str = "DEBUG"

    def validate(self) -> tuple[bool, Optional[str]]:
        if self.min_priority.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            return False, f"Unknown min_priority: {self.min_priority}"
        return True, None


@dataclass(frozen=True)
class DashboardConfig:
    """Complete dashboard configuration."""
    timing: TimingConfig = field(default_factory=TimingConfig)
    stepper: StepperConfig = field(default_factory=StepperConfig)
    particles: ParticleConfig = field(default_factory=ParticleConfig)
    phenotype: PhenotypeConfig = field(default_factory=PhenotypeConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    SECTIONS = ("timing", "stepper", "particles", "phenotype", "validation", "logging")

    def validate(self) -> tuple[bool, Optional[str]]:
        for section_name in self.SECTIONS:
            is_valid, error = getattr(self, section_name).validate()
            if not is_valid:
                return False, f"{section_name}: {error}"
        return True, None


_SECTION_TYPES = {
    "timing": TimingConfig,
    "stepper": StepperConfig,
    "particles": ParticleConfig,
    "phenotype": PhenotypeConfig,
    "validation": ValidationConfig,
    "logging": LoggingConfig,
}


def config_from_dict(raw: Optional[dict]) -> DashboardConfig:
    """
    Build and validate a DashboardConfig from a parsed mapping.

    Raises:
        InvalidConfigError: On unknown sections/keys or failed validation.
    """
    raw = raw or {}
    if not isinstance(raw, dict):
        raise InvalidConfigError("Config root must be a mapping")

    unknown = set(raw) - set(_SECTION_TYPES)
    if unknown:
        raise InvalidConfigError(f"Unknown config sections: {sorted(unknown)}")

    sections = {}
    for name, section_type in _SECTION_TYPES.items():
        section_raw = raw.get(name) or {}
        if not isinstance(section_raw, dict):
            raise InvalidConfigError(f"{name}: section must be a mapping")
        try:
            sections[name] = section_type(**section_raw)
        except TypeError as ex:
            raise InvalidConfigError(f"{name}: {ex}")

    config = DashboardConfig(**sections)
    is_valid, error = config.validate()
    if not is_valid:
        raise InvalidConfigError(f"Invalid configuration: {error}")
    return config


def load_config(path) -> DashboardConfig:
    """
    Load and validate configuration from a YAML file.

    Args:
        path: Path to the YAML config file.

    Raises:
        InvalidConfigError: If the config is invalid.
        FileNotFoundError: If the file doesn't exist.
    """
    with open(Path(path), 'r', encoding='utf-8') as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as ex:
            raise InvalidConfigError(f"Config is not valid YAML: {ex}")
    return config_from_dict(raw)
