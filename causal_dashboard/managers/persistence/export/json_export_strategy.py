from .export_strategy import DataExportStrategy
from ..snapshot_serializer import serialize_snapshot, snapshot_filename
from ....utils.logger.logger import Logger


class JsonSnapshotExportStrategy(DataExportStrategy):
    def generate_export(self, state, now=None):
        """The canonical snapshot document, importable again."""
        Logger.log("Starting JSON snapshot export generation")
        files = [(snapshot_filename(now), serialize_snapshot(state, now))]
        Logger.log(f"JSON snapshot export generated as {files[0][0]}")
        return files
