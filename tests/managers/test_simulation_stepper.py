"""
Tests for the latent-variable stepper.
"""

import math

import pytest

from causal_dashboard.config.dashboard_config import StepperConfig
from causal_dashboard.managers.simulation.simulation_stepper import SimulationStepper, StepperMode
from causal_dashboard.models.exceptions import StateTransitionError
from causal_dashboard.models.simulation_state import DEFAULT_LATENT_VARIABLES

TICK = 300


@pytest.fixture
def stepper(store, scheduler):
    return SimulationStepper(store, scheduler)


class TestStepping:

    def test_first_tick_uses_time_step_zero(self, stepper, store, scheduler):
        stepper.start()
        scheduler.advance(TICK)
        snapshot = store.get_snapshot()
        assert snapshot.time_step == 1
        for i, lv in enumerate(snapshot.latent_variables):
            expected = DEFAULT_LATENT_VARIABLES[i]["value"] + 0.05 * math.sin(i)
            assert lv["value"] == pytest.approx(expected)

    def test_update_depends_on_previous_value(self, stepper, store, scheduler):
        stepper.start()
        scheduler.advance(2 * TICK)
        value = DEFAULT_LATENT_VARIABLES[1]["value"]
        for t in range(2):
            value = min(1.0, max(0.0, value + 0.05 * math.sin(0.5 * t + 1)))
        assert store.get_snapshot().latent_variables[1]["value"] == pytest.approx(value)

    def test_no_tick_before_interval(self, stepper, store, scheduler):
        stepper.start()
        scheduler.advance(TICK - 1)
        assert store.get_snapshot().time_step == 0

    def test_values_stay_in_unit_interval(self, stepper, store, scheduler):
        def _extremes(state):
            state.latent_variables[0]["value"] = 1.0
            state.latent_variables[1]["value"] = 0.0
            state.latent_variables[2]["value"] = 1.5

        store.mutate(_extremes)
        stepper.start()
        for _ in range(25):
            scheduler.advance(TICK)
            for lv in store.get_snapshot().latent_variables:
                assert 0.0 <= lv["value"] <= 1.0


class TestCompletion:

    def test_time_step_never_exceeds_maximum(self, stepper, store, scheduler):
        stepper.start()
        for _ in range(40):
            scheduler.advance(TICK)
            assert 0 <= store.get_snapshot().time_step <= 20
        assert stepper.mode is StepperMode.COMPLETE
        assert scheduler.pending_count() == 0

    def test_completes_on_the_tick_after_reaching_maximum(self, stepper, store, scheduler):
        stepper.start()
        scheduler.advance(20 * TICK)
        snapshot = store.get_snapshot()
        assert snapshot.time_step == 20
        assert snapshot.running is True
        values = [lv["value"] for lv in snapshot.latent_variables]

        assert stepper.tick() is StepperMode.COMPLETE
        snapshot = store.get_snapshot()
        assert snapshot.running is False
        assert snapshot.time_step == 20
        assert [lv["value"] for lv in snapshot.latent_variables] == values

    def test_start_after_completion_rejected(self, stepper, scheduler):
        stepper.start()
        scheduler.advance(21 * TICK)
        with pytest.raises(StateTransitionError):
            stepper.start()

    def test_custom_maximum(self, store, scheduler):
        stepper = SimulationStepper(store, scheduler, StepperConfig(max_time_step=3))
        stepper.start()
        scheduler.advance(10 * TICK)
        assert store.get_snapshot().time_step == 3
        assert stepper.mode is StepperMode.COMPLETE


class TestTransitions:

    def test_pause_cancels_pending_tick(self, stepper, store, scheduler):
        stepper.start()
        scheduler.advance(TICK)
        stepper.pause()
        scheduler.advance(10 * TICK)
        snapshot = store.get_snapshot()
        assert snapshot.time_step == 1
        assert snapshot.running is False
        assert stepper.mode is StepperMode.IDLE
        assert scheduler.pending_count() == 0

    def test_start_while_running_is_noop(self, stepper, store, scheduler):
        stepper.start()
        stepper.start()
        scheduler.advance(TICK)
        assert store.get_snapshot().time_step == 1

    def test_pause_when_idle_is_noop(self, stepper, store):
        revision = store.revision
        stepper.pause()
        assert store.revision == revision

    def test_reset_law(self, stepper, store, scheduler):
        stepper.start()
        scheduler.advance(7 * TICK)
        stepper.reset()
        snapshot = store.get_snapshot()
        assert snapshot.time_step == 0
        assert snapshot.running is False
        assert snapshot.latent_variables == DEFAULT_LATENT_VARIABLES
        scheduler.advance(5 * TICK)
        assert store.get_snapshot().time_step == 0

    def test_resume_after_pause(self, stepper, store, scheduler):
        stepper.start()
        scheduler.advance(2 * TICK)
        stepper.pause()
        stepper.start()
        scheduler.advance(TICK)
        assert store.get_snapshot().time_step == 3


class TestTickFaults:

    def test_non_numeric_value_stops_the_task(self, stepper, store, scheduler, memory_log):
        store.mutate(lambda state: state.latent_variables[0].update(value="high"))
        stepper.start()
        with pytest.raises(TypeError):
            scheduler.advance(TICK)
        assert not stepper.tick_task.active
        assert store.get_snapshot().time_step == 0
        assert memory_log.messages("ERROR")
        assert store.get_snapshot().running is False
        assert stepper.mode is StepperMode.IDLE

    def test_restart_after_fault(self, stepper, store, scheduler):
        store.mutate(lambda state: state.latent_variables[0].update(value="high"))
        stepper.start()
        with pytest.raises(TypeError):
            scheduler.advance(TICK)
        store.mutate(lambda state: state.latent_variables[0].update(value=0.5))
        stepper.start()
        assert stepper.mode is StepperMode.RUNNING
        scheduler.advance(TICK)
        assert store.get_snapshot().time_step == 1
