from ...managers.view.view_strategy import ViewStrategy
from ...managers.scheduler.manual_scheduler import ManualScheduler
from ...managers.simulation.simulation_stepper import StepperMode
from ...utils.logger.logger import Logger


class HeadlessView(ViewStrategy):
    """
    Runs the dashboard without a display on a virtual clock.

    `start_view()` plays one full run from the current state to COMPLETE and
    records the time step and latent values seen after every tick.
    """

    def __init__(self, controller):
        Logger.log("start HeadlessView __init__(self, controller)")
        super().__init__(controller)
        self.scheduler = ManualScheduler()
        self.frames = []
        self._unsubscribe = None
        Logger.log("end HeadlessView __init__(self, controller)")

    def start_view(self):
        Logger.log("start start_view(self)")
        self.controller.attach_scheduler(self.scheduler)
        self._unsubscribe = self.controller.subscribe(self._record)

        if self.controller.stepper.mode is StepperMode.COMPLETE:
            self.controller.reset_simulation()
        self.controller.start_simulation()

        interval = self.controller.config.timing.tick_interval_ms
        # One tick per step plus the tick that observes completion
        for _ in range(self.controller.config.stepper.max_time_step + 1):
            self.scheduler.advance(interval)
            if self.controller.stepper.mode is StepperMode.COMPLETE:
                break

        snapshot = self.controller.get_snapshot()
        Logger.log(f"headless run finished at time step {snapshot.time_step}", Logger.LogPriority.INFO)
        self.stop_view()
        Logger.log("end start_view(self)")

    def stop_view(self):
        Logger.log("start stop_view(self)")
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.controller.shutdown()
        Logger.log("end stop_view(self)")

    def _record(self, snapshot):
        if self.frames and self.frames[-1]["time_step"] == snapshot.time_step:
            return
        self.frames.append({
            "time_step": snapshot.time_step,
            "latent_values": [lv.get("value") for lv in snapshot.latent_variables if isinstance(lv, dict)],
        })
