from ....models.simulation_state import SimulationState


class ExportStrategy:
    """Base for every exporter."""

    def generate_export(self, state: SimulationState, now=None):
        """Return a list[(filename, bytes)] for this export."""
        raise NotImplementedError()


class DataExportStrategy(ExportStrategy):
    """Exporters that write the state's data (JSON, Excel)."""


class ImageExportStrategy(ExportStrategy):
    """Exporters that draw the state as an image."""
