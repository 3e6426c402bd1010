"""
Pytest configuration for causal dashboard tests.

Puts the project root on sys.path, routes logs to memory, and restores the
feature flags after every test.
"""

import os
import sys

import pytest

# Add project root to sys.path for imports
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from causal_dashboard.config.dashboard_config import config_from_dict
from causal_dashboard.config.feature_flags import FeatureFlags
from causal_dashboard.controllers.system_controller import SystemController
from causal_dashboard.managers.scheduler.manual_scheduler import ManualScheduler
from causal_dashboard.managers.state.state_store import StateStore
from causal_dashboard.utils.logger.logger import Logger
from causal_dashboard.utils.logger.log_storage_strategy import MemoryLogStrategy


@pytest.fixture(autouse=True)
def memory_log():
    """Every test logs into a fresh in-memory store with default flags."""
    storage = MemoryLogStrategy()
    Logger.set_log_storage_strategy(storage)
    Logger.enable_logging()
    Logger.set_min_priority("DEBUG")
    FeatureFlags.legacy_mode()
    storage.flush_logs()
    yield storage
    FeatureFlags.legacy_mode()
    Logger.set_log_storage_strategy(None)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def store():
    return StateStore()


@pytest.fixture
def seeded_config():
    return config_from_dict({
        "particles": {"seed": 7},
        "phenotype": {"seed": 3},
        "validation": {"seed": 11},
    })


@pytest.fixture
def controller(seeded_config):
    controller = SystemController(seeded_config)
    yield controller
    controller.shutdown()
