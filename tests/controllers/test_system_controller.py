"""
Tests for the SystemController action API.
"""

import json
import os

import pytest

from causal_dashboard.config.feature_flags import FeatureFlags
from causal_dashboard.controllers.system_controller import SystemController
from causal_dashboard.managers.scheduler.manual_scheduler import ManualScheduler
from causal_dashboard.managers.simulation.simulation_stepper import StepperMode
from causal_dashboard.models.exceptions import NodeNotFoundError, StateTransitionError
from causal_dashboard.models.simulation_state import DEFAULT_LATENT_VARIABLES
from causal_dashboard.utils.logger.logger import Logger
from causal_dashboard.utils.logger.log_storage_strategy import MemoryLogStrategy

SLICES = ("latent_variables", "graph_nodes", "ode_parameters", "phenotype_series")


def _slices(snapshot):
    return {name: getattr(snapshot, name) for name in SLICES}


class TestConstruction:

    def test_initial_state(self, controller):
        snapshot = controller.get_snapshot()
        assert len(snapshot.phenotype_series) == 21
        assert len(snapshot.particles) == 30
        assert snapshot.time_step == 0
        assert controller.particle_field.motion_task.active

    def test_seeded_controllers_agree(self, seeded_config):
        a = SystemController(seeded_config)
        b = SystemController(seeded_config)
        try:
            assert a.get_snapshot().phenotype_series == b.get_snapshot().phenotype_series
            assert a.get_snapshot().particles == b.get_snapshot().particles
        finally:
            a.shutdown()
            b.shutdown()


class TestSimulationControl:

    def test_start_pause(self, controller):
        controller.start_simulation()
        controller.scheduler.advance(600)
        controller.pause_simulation()
        controller.scheduler.advance(3000)
        assert controller.get_snapshot().time_step == 2

    def test_toggle(self, controller):
        assert controller.toggle_simulation() is True
        assert controller.toggle_simulation() is False

    def test_reset(self, controller):
        controller.start_simulation()
        controller.scheduler.advance(900)
        controller.reset_simulation()
        snapshot = controller.get_snapshot()
        assert (snapshot.time_step, snapshot.running) == (0, False)
        assert snapshot.latent_variables == DEFAULT_LATENT_VARIABLES

    def test_full_run_then_start_rejected(self, controller):
        controller.start_simulation()
        controller.scheduler.advance(21 * 300)
        assert controller.stepper.mode is StepperMode.COMPLETE
        with pytest.raises(StateTransitionError):
            controller.start_simulation()


class TestSelection:

    def test_select_and_clear(self, controller):
        controller.select_node("g2")
        assert controller.get_selected_node() == {
            "id": "g2", "name": "MYC", "type": "gene", "connection_count": 2,
        }
        controller.select_node(None)
        assert controller.get_selected_node() is None

    def test_unknown_node(self, controller):
        with pytest.raises(NodeNotFoundError):
            controller.select_node("g42")
        assert controller.get_snapshot().selected_node_id is None

    def test_import_drops_stale_selection(self, controller):
        controller.select_node("g5")
        graph = [{"id": "n1", "name": "A", "x": 0, "y": 0, "type": "gene", "connections": []}]
        assert controller.import_snapshot(json.dumps({"graphNodes": graph}).encode())
        assert controller.get_snapshot().selected_node_id is None


class TestImport:

    def test_round_trip(self, controller):
        controller.start_simulation()
        controller.scheduler.advance(1500)
        controller.pause_simulation()
        exported = controller.export_snapshot()
        expected = _slices(controller.get_snapshot())

        controller.reset_simulation()
        assert controller.import_snapshot(exported)
        assert _slices(controller.get_snapshot()) == expected

    def test_partial_replace(self, controller):
        before = controller.get_snapshot()
        latents = [{"id": "z9", "name": "New", "value": 0.1, "genetic_influence": 0.2}]
        assert controller.import_snapshot(json.dumps({"latentVariables": latents}).encode())
        after = controller.get_snapshot()
        assert after.latent_variables == latents
        for name in ("graph_nodes", "ode_parameters", "phenotype_series"):
            assert getattr(after, name) == getattr(before, name)

    def test_metadata_fields_ignored(self, controller):
        payload = {"currentTimeStep": 15, "modelMetrics": {"mse": 9}, "timestamp": "x"}
        assert controller.import_snapshot(json.dumps(payload).encode())
        assert controller.get_snapshot().time_step == 0

    def test_malformed_input(self, controller, memory_log):
        before = _slices(controller.get_snapshot())
        assert controller.import_snapshot(b"{not json") is False
        snapshot = controller.get_snapshot()
        assert snapshot.status_message == SystemController.STATUS_INVALID_JSON
        assert _slices(snapshot) == before
        assert memory_log.messages("ERROR")

    def test_non_finite_numbers_rejected(self, controller):
        before = _slices(controller.get_snapshot())
        data = (b'{"latentVariables": [{"id": "z1", "name": "A", "value": NaN,'
                b' "genetic_influence": Infinity}]}')
        assert controller.import_snapshot(data) is False
        snapshot = controller.get_snapshot()
        assert snapshot.status_message == SystemController.STATUS_INVALID_JSON
        assert _slices(snapshot) == before
        assert b"NaN" not in controller.export_snapshot()

    def test_permissive_accepts_shape_problems(self, controller):
        payload = {"latentVariables": [{"id": "z1", "value": 4.0}]}
        assert controller.import_snapshot(json.dumps(payload).encode())
        assert controller.get_snapshot().status_message == SystemController.STATUS_UPLOAD_OK

    def test_strict_rejects_shape_problems(self, controller):
        FeatureFlags.enable_strict_import()
        before = _slices(controller.get_snapshot())
        payload = {"latentVariables": [{"id": "z1", "value": 4.0}], "odeParameters": []}
        assert controller.import_snapshot(json.dumps(payload).encode()) is False
        snapshot = controller.get_snapshot()
        assert snapshot.status_message == SystemController.STATUS_INVALID_FIELDS
        assert _slices(snapshot) == before

    def test_file_import_is_scheduled(self, controller, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_bytes(json.dumps({"odeParameters": []}).encode())
        controller.import_snapshot_file(str(path))
        snapshot = controller.get_snapshot()
        assert snapshot.status_message == SystemController.STATUS_UPLOADING
        assert len(snapshot.ode_parameters) == 4

        controller.scheduler.run_pending()
        snapshot = controller.get_snapshot()
        assert snapshot.ode_parameters == []
        assert snapshot.status_message == SystemController.STATUS_UPLOAD_OK

    def test_file_read_error(self, controller, tmp_path):
        controller.import_snapshot_file(str(tmp_path / "missing.json"))
        controller.scheduler.run_pending()
        assert controller.get_snapshot().status_message == SystemController.STATUS_READ_ERROR

    def test_overlapping_imports_last_write_wins(self, controller, tmp_path):
        first = tmp_path / "first.json"
        second = tmp_path / "second.json"
        first.write_bytes(json.dumps({"odeParameters": [{"param": "a", "value": 0.1, "strength": "weak"}]}).encode())
        second.write_bytes(json.dumps({"odeParameters": [{"param": "b", "value": 0.2, "strength": "weak"}]}).encode())
        controller.import_snapshot_file(str(first))
        controller.import_snapshot_file(str(second))
        controller.scheduler.run_pending()
        assert controller.get_snapshot().ode_parameters[0]["param"] == "b"


class TestStatusMessages:

    def test_status_clears_after_timeout(self, controller):
        controller.import_snapshot(b"{}")
        controller.scheduler.advance(2999)
        assert controller.get_snapshot().status_message == SystemController.STATUS_UPLOAD_OK
        controller.scheduler.advance(1)
        assert controller.get_snapshot().status_message == ""

    def test_newer_status_cancels_older_clear(self, controller):
        controller.import_snapshot(b"{}")
        controller.scheduler.advance(2000)
        controller.import_snapshot(b"[]")
        controller.scheduler.advance(1000)
        assert controller.get_snapshot().status_message == SystemController.STATUS_INVALID_JSON
        controller.scheduler.advance(2000)
        assert controller.get_snapshot().status_message == ""


class TestExport:

    def test_export_snapshot(self, controller):
        payload = json.loads(controller.export_snapshot())
        assert payload["currentTimeStep"] == 0
        assert len(payload["phenotypeData"]) == 21
        assert payload["timestamp"].endswith("Z")

    def test_export_data(self, controller, tmp_path):
        root = controller.export_data(
            f"export_request excel_data_export_strategy png_image_export_strategy {tmp_path}")
        assert os.listdir(os.path.join(root, "image_export")) == ["knowledge_graph.png"]
        [workbook] = os.listdir(os.path.join(root, "data_export"))
        assert workbook.endswith(".xlsx")


class TestReadSide:

    def test_visible_window_grows(self, controller):
        assert len(controller.get_visible_phenotype_window()) == 5
        controller.start_simulation()
        controller.scheduler.advance(10 * 300)
        assert len(controller.get_visible_phenotype_window()) == 11

    def test_particle_links_match_field(self, controller):
        links = controller.get_particle_links()
        assert all(link.distance < 15.0 for link in links)
        assert all(link.source < link.target for link in links)

    def test_validation_summary(self, controller):
        summary = controller.get_validation_summary()
        assert summary.placeholder
        assert len(summary.knockouts) == 3

    def test_subscribe(self, controller):
        seen = []
        unsubscribe = controller.subscribe(seen.append)
        controller.scheduler.advance(50)
        unsubscribe()
        controller.scheduler.advance(50)
        assert len(seen) == 1


class TestScheduling:

    def test_shutdown_leaves_no_pending_timers(self, controller, tmp_path):
        controller.start_simulation()
        controller.import_snapshot(b"{}")
        controller.import_snapshot_file(str(tmp_path / "later.json"))
        assert controller.scheduler.pending_count() > 0
        controller.shutdown()
        assert controller.scheduler.pending_count() == 0

    def test_attach_scheduler_moves_tasks(self, controller):
        old = controller.scheduler
        controller.start_simulation()
        controller.import_snapshot(b"{}")
        new = ManualScheduler()
        controller.attach_scheduler(new)
        assert old.pending_count() == 0
        new.advance(300)
        assert controller.get_snapshot().time_step == 1
        new.advance(2700)
        assert controller.get_snapshot().status_message == ""


class TestViewsAndLogging:

    def test_headless_view_runs_to_completion(self, controller):
        view = controller.initiate_view("headless")
        assert [frame["time_step"] for frame in view.frames] == list(range(21))
        assert controller.stepper.mode is StepperMode.COMPLETE
        assert view.scheduler.pending_count() == 0
        for frame in view.frames:
            assert all(0.0 <= value <= 1.0 for value in frame["latent_values"])

    def test_unknown_view(self, controller):
        with pytest.raises(ValueError):
            controller.initiate_view("cli")

    def test_configure_logger_memory(self, controller):
        controller.configure_logger(True, storage_strategy="memory", min_priority="WARNING")
        storage = Logger.log_storage_strategy
        assert isinstance(storage, MemoryLogStrategy)
        Logger.log("quiet")
        Logger.log("loud", Logger.LogPriority.ERROR)
        assert storage.messages("ERROR") == ["loud"]
        assert "quiet" not in storage.messages()
        Logger.set_min_priority("DEBUG")

    def test_configure_logger_file(self, controller, tmp_path):
        log_file = tmp_path / "logs" / "dashboard.txt"
        controller.configure_logger(True, storage_strategy="file", file_location=str(log_file))
        Logger.log("written", Logger.LogPriority.INFO)
        assert "[INFO] written" in log_file.read_text(encoding="utf-8")

    def test_configure_logger_file_needs_location(self, controller):
        with pytest.raises(ValueError):
            controller.configure_logger(True, storage_strategy="file")

    def test_disable_logging(self, controller, memory_log):
        controller.configure_logger(False)
        memory_log.flush_logs()
        Logger.log("dropped")
        assert memory_log.records == []
