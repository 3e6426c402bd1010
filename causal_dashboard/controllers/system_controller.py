import numpy as np

from ..config.dashboard_config import DashboardConfig
from ..managers.state.state_store import StateStore
from ..managers.scheduler.manual_scheduler import ManualScheduler
from ..managers.simulation.simulation_stepper import SimulationStepper
from ..managers.simulation.phenotype_series import generate_phenotype_series, visible_window
from ..managers.particles.particle_field import ParticleField
from ..managers.persistence.input_manager import InputManager
from ..managers.persistence.snapshot_merger import merge_snapshot
from ..managers.persistence.snapshot_serializer import serialize_snapshot
from ..managers.persistence.export.export_manager import ExportManager
from ..managers.validation.graph_queries import find_node, node_detail
from ..managers.validation.validation_summary import build_validation_summary
from ..managers.view.view_manager import ViewManager
from ..models.exceptions import (
    NodeNotFoundError,
    SnapshotParseError,
    SnapshotReadError,
    SnapshotValidationError,
    UnsupportedFileTypeError,
)
from ..utils.logger.logger import Logger
from ..utils.logger.local_file_strategy import LocalFileStrategy
from ..utils.logger.log_storage_strategy import MemoryLogStrategy


class SystemController:
    """Coordinates state, simulation, particles, persistence, view and logging layers."""

    STATUS_UPLOADING = "Uploading..."
    STATUS_UPLOAD_OK = "✓ Data uploaded successfully!"
    STATUS_INVALID_JSON = "✗ Error: Invalid JSON file"
    STATUS_READ_ERROR = "✗ Error reading file"
    STATUS_INVALID_FIELDS = "✗ Error: Invalid snapshot fields"

    def __init__(self, config: DashboardConfig = None, scheduler=None):
        """
        Args:
            config: Dashboard configuration; defaults throughout when omitted.
            scheduler: TaskScheduler for every timed task. A ManualScheduler
                until a view attaches its own loop.
        """
        self.config = config or DashboardConfig()
        self._apply_logging_config()
        Logger.log("start SystemController__init__(self)")

        self.scheduler = scheduler or ManualScheduler()
        self.store = StateStore()
        self.input_manager = InputManager()
        self.export_manager = ExportManager()
        self.view_manager = ViewManager(self)
        self.stepper = SimulationStepper(self.store, self.scheduler,
                                         self.config.stepper, self.config.timing)
        self.particle_field = ParticleField(self.store, self.scheduler,
                                            self.config.particles, self.config.timing)
        self._validation_rng = np.random.default_rng(self.config.validation.seed)
        self._status_handle = None
        self._pending_imports = []

        phenotype = self.config.phenotype
        series = generate_phenotype_series(phenotype.n_points, phenotype.noise,
                                           np.random.default_rng(phenotype.seed))

        def _install_series(state):
            state.phenotype_series = series

        self.store.mutate(_install_series)
        self.particle_field.initialize()
        self.particle_field.start()

        Logger.log("end SystemController__init__(self)")

    # SIMULATION CONTROL
    def start_simulation(self):
        """Start stepping; raises StateTransitionError once the run is complete."""
        Logger.log("start start_simulation(self)")
        self.stepper.start()
        Logger.log("end start_simulation(self)")

    def pause_simulation(self):
        Logger.log("start pause_simulation(self)")
        self.stepper.pause()
        Logger.log("end pause_simulation(self)")

    def toggle_simulation(self):
        """Pause when running, start otherwise. Returns the new running flag."""
        Logger.log("start toggle_simulation(self)")
        if self.store.get_snapshot().running:
            self.stepper.pause()
        else:
            self.stepper.start()
        running = self.store.get_snapshot().running
        Logger.log(f"end toggle_simulation(self): running={running}")
        return running

    def reset_simulation(self):
        Logger.log("start reset_simulation(self)")
        self.stepper.reset()
        Logger.log("end reset_simulation(self)")

    # KNOWLEDGE GRAPH SELECTION
    def select_node(self, node_id):
        """
        Select a graph node, or clear the selection with None.

        Raises:
            NodeNotFoundError: If no graph node has `node_id`.
        """
        Logger.log(f"start select_node(self, {node_id})")
        if node_id is not None and find_node(self.store.get_snapshot().graph_nodes, node_id) is None:
            Logger.log(f"NodeNotFoundError: {node_id}", Logger.LogPriority.ERROR)
            raise NodeNotFoundError(f"Node '{node_id}' not found in knowledge graph.")

        def _select(state):
            state.selected_node_id = node_id

        self.store.mutate(_select)
        Logger.log(f"end select_node(self, {node_id})")

    def get_selected_node(self):
        """Detail of the selected node, or None when nothing is selected."""
        snapshot = self.store.get_snapshot()
        if snapshot.selected_node_id is None:
            return None
        return node_detail(snapshot.graph_nodes, snapshot.selected_node_id)

    # IMPORT
    def import_snapshot(self, data) -> bool:
        """
        Merge a snapshot document into the state.

        Parse and validation failures never propagate: they are logged and
        reported through the status message, and the state is left untouched.

        Returns:
            True if the snapshot was merged.
        """
        Logger.log(f"start import_snapshot(self, <{len(data)} bytes>)")
        try:
            payload = self.input_manager.parse(data)
        except SnapshotParseError as ex:
            Logger.log(f"import rejected: {ex}", Logger.LogPriority.ERROR)
            self._set_status(self.STATUS_INVALID_JSON)
            return False
        except SnapshotValidationError as ex:
            Logger.log(f"import rejected: {ex}", Logger.LogPriority.ERROR)
            self._set_status(self.STATUS_INVALID_FIELDS)
            return False

        def _merge(state):
            replaced = merge_snapshot(state, payload)
            if state.selected_node_id is not None and find_node(state.graph_nodes, state.selected_node_id) is None:
                state.selected_node_id = None
            return replaced

        replaced = self.store.mutate(_merge)
        self._set_status(self.STATUS_UPLOAD_OK)
        Logger.log(f"end import_snapshot(self): replaced {replaced}")
        return True

    def import_snapshot_file(self, file_path):
        """
        Show "Uploading..." and schedule one read of `file_path` on the loop.

        Returns:
            The TaskHandle of the scheduled read.
        """
        Logger.log(f"start import_snapshot_file(self, {file_path})")
        self._set_status(self.STATUS_UPLOADING)
        handle = None

        def _read():
            if handle in self._pending_imports:
                self._pending_imports.remove(handle)
            self._read_and_import(file_path)

        handle = self.scheduler.call_later(0, _read)
        self._pending_imports.append(handle)
        Logger.log(f"end import_snapshot_file(self, {file_path})")
        return handle

    def _read_and_import(self, file_path):
        try:
            data = self.input_manager.read_file(file_path)
        except (SnapshotReadError, UnsupportedFileTypeError) as ex:
            Logger.log(f"import of {file_path} failed: {ex}", Logger.LogPriority.ERROR)
            self._set_status(self.STATUS_READ_ERROR)
            return False
        return self.import_snapshot(data)

    # EXPORT
    def export_snapshot(self) -> bytes:
        """The current state as a snapshot document."""
        Logger.log("start export_snapshot(self)")
        data = serialize_snapshot(self.store.get_snapshot())
        Logger.log("end export_snapshot(self)")
        return data

    def export_data(self, export_request):
        """
        Run an `export_request <data|none> <image|none> <folder>` request.

        Returns:
            The folder the export was written to.
        """
        Logger.log(f"start export_data(self, {export_request})")
        folder = self.export_manager.handle_export_request(self.store.get_snapshot(), export_request)
        Logger.log(f"end export_data(self, export_request): {folder}")
        return folder

    # READ SIDE
    def get_snapshot(self):
        return self.store.get_snapshot()

    def subscribe(self, listener):
        """Register `listener(snapshot)`; returns the unsubscribe callable."""
        return self.store.subscribe(listener)

    def get_particle_links(self):
        return self.particle_field.links()

    def get_visible_phenotype_window(self):
        snapshot = self.store.get_snapshot()
        return visible_window(snapshot.phenotype_series, snapshot.time_step)

    def get_validation_summary(self):
        return build_validation_summary(self.store.get_snapshot(), self.config.validation,
                                        self._validation_rng)

    # SCHEDULING
    def attach_scheduler(self, scheduler):
        """Move every timed task onto `scheduler`, keeping running tasks running."""
        Logger.log(f"start attach_scheduler(self, {scheduler})")
        status_pending = self._status_handle is not None
        self._cancel_status_clear()
        for handle in self._pending_imports:
            self.scheduler.cancel(handle)
        if self._pending_imports:
            Logger.log(f"dropped {len(self._pending_imports)} pending import(s) on scheduler change",
                       Logger.LogPriority.WARNING)
            self._pending_imports = []

        self.scheduler = scheduler
        self.stepper.rebind(scheduler)
        self.particle_field.rebind(scheduler)
        if status_pending:
            self._schedule_status_clear()
        Logger.log("end attach_scheduler(self, scheduler)")

    def shutdown(self):
        """Cancel the tick, motion, status-clear and pending import timers."""
        Logger.log("start shutdown(self)")
        self.stepper.stop()
        self.particle_field.stop()
        self._cancel_status_clear()
        for handle in self._pending_imports:
            self.scheduler.cancel(handle)
        self._pending_imports = []
        Logger.log("end shutdown(self)")

    # STATUS MESSAGES
    def _set_status(self, message):
        """Show `message`; it clears itself after status_clear_ms."""
        self._cancel_status_clear()

        def _status(state):
            state.status_message = message

        self.store.mutate(_status)
        self._schedule_status_clear()

    def _schedule_status_clear(self):
        def _clear():
            self._status_handle = None

            def _empty(state):
                state.status_message = ""

            self.store.mutate(_empty)

        self._status_handle = self.scheduler.call_later(self.config.timing.status_clear_ms, _clear)

    def _cancel_status_clear(self):
        if self._status_handle is not None:
            self.scheduler.cancel(self._status_handle)
            self._status_handle = None

    # VIEW AND LOGGING
    def initiate_view(self, view_strategy):
        """Submit a view request ("tkinter" or "headless") to the view manager."""
        Logger.log(f"start initiate_view(self, {view_strategy})")
        view = self.view_manager.initiate_view_strategy(view_strategy, self)
        Logger.log(f"end initiate_view(self, view_strategy)")
        return view

    def configure_logger(self, enabled, **kwargs):
        """
        Enable/disable logging and optionally change where logs go.

        Keyword Args:
            storage_strategy: "file" (requires file_location) or "memory".
            file_location: Log file path for the file strategy.
            min_priority: Lowest priority name that is stored.
        """
        Logger.log(f"start configure_logger(self, {enabled}, {kwargs})")
        if enabled:
            Logger.enable_logging()
        else:
            Logger.disable_logging()

        storage_strategy = kwargs.get("storage_strategy")
        if storage_strategy == "file":
            file_location = kwargs.get("file_location")
            if not file_location:
                raise ValueError("file_location must be provided for 'file' storage strategy.")
            Logger.set_log_storage_strategy(LocalFileStrategy(file_location))
            Logger.log(f"Logger set to file storage at {file_location}.")
        elif storage_strategy == "memory":
            Logger.set_log_storage_strategy(MemoryLogStrategy())
            Logger.log("Logger set to memory storage.")
        elif storage_strategy is not None:
            raise ValueError(f"Unknown storage strategy: {storage_strategy}")

        if kwargs.get("min_priority") is not None:
            Logger.set_min_priority(kwargs["min_priority"])
        Logger.log("end configure_logger(self, **kwargs)")

    def _apply_logging_config(self):
        logging_config = self.config.logging
        if not logging_config.enabled:
            Logger.disable_logging()
            return
        Logger.initialize(logging_config.file_location)
        Logger.set_min_priority(logging_config.min_priority)
