"""
Tests for dashboard configuration and feature flags.
"""

import pytest

from causal_dashboard.config.dashboard_config import (
    DashboardConfig,
    ParticleConfig,
    TimingConfig,
    config_from_dict,
    load_config,
)
from causal_dashboard.config.feature_flags import FeatureFlags
from causal_dashboard.models.exceptions import InvalidConfigError


class TestSectionValidation:

    def test_defaults_valid(self):
        is_valid, err = DashboardConfig().validate()
        assert is_valid
        assert err is None

    def test_default_timing(self):
        timing = DashboardConfig().timing
        assert (timing.tick_interval_ms, timing.motion_interval_ms, timing.status_clear_ms) == (300, 50, 3000)

    def test_zero_tick_rejected(self):
        is_valid, err = TimingConfig(tick_interval_ms=0).validate()
        assert not is_valid
        assert "tick_interval_ms" in err

    def test_inverted_sizes_rejected(self):
        is_valid, err = ParticleConfig(min_size=6.0, max_size=5.0).validate()
        assert not is_valid
        assert "min_size" in err

    def test_opacity_above_one_rejected(self):
        is_valid, _ = ParticleConfig(max_opacity=1.5).validate()
        assert not is_valid

    def test_section_name_in_message(self):
        config = DashboardConfig(particles=ParticleConfig(count=-1))
        is_valid, err = config.validate()
        assert not is_valid
        assert err.startswith("particles:")


class TestConfigFromDict:

    def test_partial_sections(self):
        config = config_from_dict({"stepper": {"max_time_step": 10}})
        assert config.stepper.max_time_step == 10
        assert config.stepper.amplitude == 0.05
        assert config.particles.count == 30

    def test_none_means_defaults(self):
        assert config_from_dict(None) == DashboardConfig()

    @pytest.mark.parametrize("raw", [
        {"network": {}},
        {"timing": {"tick_ms": 5}},
        {"timing": [1, 2]},
        {"logging": {"min_priority": "LOUD"}},
        ["timing"],
    ])
    def test_invalid(self, raw):
        with pytest.raises(InvalidConfigError):
            config_from_dict(raw)


class TestLoadConfig:

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "dashboard.yaml"
        path.write_text(
            "timing:\n"
            "  status_clear_ms: 1000\n"
            "particles:\n"
            "  count: 12\n"
            "  seed: 4\n",
            encoding="utf-8",
        )
        config = load_config(path)
        assert config.timing.status_clear_ms == 1000
        assert config.particles.count == 12
        assert config.particles.seed == 4

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == DashboardConfig()

    def test_bad_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("timing: [unclosed\n", encoding="utf-8")
        with pytest.raises(InvalidConfigError):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "absent.yaml")


class TestFeatureFlags:

    def test_defaults(self):
        assert FeatureFlags.STRICT_SNAPSHOT_IMPORT is False
        assert FeatureFlags.WARN_ON_LARGE_PARTICLE_FIELD is True
        assert FeatureFlags.validate()

    def test_toggle_and_legacy_mode(self):
        FeatureFlags.enable_strict_import()
        assert FeatureFlags.STRICT_SNAPSHOT_IMPORT is True
        FeatureFlags.disable_strict_import()
        assert FeatureFlags.STRICT_SNAPSHOT_IMPORT is False
        FeatureFlags.enable_strict_import()
        FeatureFlags.legacy_mode()
        assert FeatureFlags.STRICT_SNAPSHOT_IMPORT is False

    def test_non_bool_flag_rejected(self):
        FeatureFlags.STRICT_SNAPSHOT_IMPORT = "yes"
        with pytest.raises(ValueError):
            FeatureFlags.validate()
