"""
Discrete stepper for the latent-variable trajectories.

Stands in for a Neural ODE integrator with a closed-form update applied once
per tick while running:

    value_i <- clamp(value_i + amplitude * sin(frequency * t + i), 0, 1)

where t is the time step before the tick's increment. The update depends on
the previous value, so a trajectory cannot be recomputed from t alone.

Modes are derived from the store, never kept separately:
    IDLE      not running, time_step < max_time_step
    RUNNING   running
    COMPLETE  not running, time_step == max_time_step
"""

import math
from enum import Enum, auto

from ...config.dashboard_config import StepperConfig, TimingConfig
from ...models.simulation_state import clamp, default_latent_variables
from ...models.exceptions import StateTransitionError
from ...utils.logger.logger import Logger
from ..scheduler.periodic_task import PeriodicTask


class StepperMode(Enum):
    """Current stepper mode."""
    IDLE = auto()
    RUNNING = auto()
    COMPLETE = auto()


class SimulationStepper:
    """Advance time_step and latent values on a fixed cadence through the StateStore."""

    def __init__(self, store, scheduler, config: StepperConfig = None,
                 timing: TimingConfig = None):
        """
        Args:
            store: StateStore holding the simulation state.
            scheduler: TaskScheduler the tick task runs on.
            config: Stepping function parameters.
            timing: Provides the tick interval.
        """
        Logger.log("start SimulationStepper__init__")
        self.store = store
        self.config = config or StepperConfig()
        timing = timing or TimingConfig()
        self.tick_task = PeriodicTask(scheduler, timing.tick_interval_ms, self.tick, name="tick")
        Logger.log("end SimulationStepper__init__")

    @property
    def mode(self) -> StepperMode:
        snapshot = self.store.get_snapshot()
        return self.mode_of(snapshot.running, snapshot.time_step)

    def mode_of(self, running, time_step) -> StepperMode:
        if running:
            return StepperMode.RUNNING
        if time_step >= self.config.max_time_step:
            return StepperMode.COMPLETE
        return StepperMode.IDLE

    def start(self):
        """IDLE -> RUNNING. No-op when already running."""
        Logger.log("start SimulationStepper.start()")
        snapshot = self.store.get_snapshot()
        if snapshot.running:
            Logger.log("stepper already running")
            return
        if snapshot.time_step >= self.config.max_time_step:
            Logger.log("StateTransitionError: simulation complete, reset before starting",
                       Logger.LogPriority.ERROR)
            raise StateTransitionError("Simulation is complete; reset before starting again.")

        def _start(state):
            state.running = True

        self.store.mutate(_start)
        self.tick_task.start()
        Logger.log("end SimulationStepper.start()")

    def pause(self):
        """RUNNING -> IDLE. Drops the pending tick so none fires after pausing."""
        Logger.log("start SimulationStepper.pause()")
        self.tick_task.cancel()
        if not self.store.get_snapshot().running:
            Logger.log("stepper not running")
            return

        def _pause(state):
            state.running = False

        self.store.mutate(_pause)
        Logger.log("end SimulationStepper.pause()")

    def reset(self):
        """Any mode -> IDLE with time_step 0 and the default latent variables."""
        Logger.log("start SimulationStepper.reset()")
        self.tick_task.cancel()

        def _reset(state):
            state.time_step = 0
            state.running = False
            state.latent_variables = default_latent_variables()

        self.store.mutate(_reset)
        Logger.log("end SimulationStepper.reset()")

    def tick(self):
        """
        Advance one step, or complete when time_step already reached the maximum.

        A failing update (e.g. a non-numeric latent value) leaves the values
        untouched, stops the run so the mode returns to IDLE, and is re-raised.

        Returns:
            The mode after the tick.
        """
        def _tick(state):
            if state.time_step >= self.config.max_time_step:
                state.running = False
                return StepperMode.COMPLETE
            t = state.time_step
            for i, variable in enumerate(state.latent_variables):
                variable["value"] = self.next_value(variable["value"], t, i)
            state.time_step = t + 1
            return self.mode_of(state.running, state.time_step)

        try:
            mode = self.store.mutate(_tick)
        except Exception as ex:
            Logger.log(f"tick failed at time step {self.store.get_snapshot().time_step}: {ex}",
                       Logger.LogPriority.ERROR)
            self.tick_task.cancel()

            def _halt(state):
                state.running = False

            self.store.mutate(_halt)
            raise
        if mode is StepperMode.COMPLETE:
            self.tick_task.cancel()
            Logger.log(f"simulation complete at time step {self.config.max_time_step}",
                       Logger.LogPriority.INFO)
        return mode

    def next_value(self, value, t, index) -> float:
        """One application of the closed-form update to a single latent value."""
        step = self.config.amplitude * math.sin(self.config.frequency * t + index)
        return clamp(value + step, 0.0, 1.0)

    def stop(self):
        """Teardown: cancel the tick task without touching state."""
        self.tick_task.cancel()

    def rebind(self, scheduler):
        self.tick_task.rebind(scheduler)
