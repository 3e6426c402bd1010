import time
from io import BytesIO

import pandas as pd

from .export_strategy import DataExportStrategy
from ..snapshot_serializer import MODEL_METRICS
from ....utils.logger.logger import Logger


class ExcelExportStrategy(DataExportStrategy):
    SHEETS = ("latent_variables", "graph_nodes", "ode_parameters", "phenotype_series",
              "model_metrics")

    def generate_export(self, state, now=None):
        """Generate one workbook with a sheet per state slice plus the model metrics."""
        Logger.log("Starting Excel export generation")

        latent_df = pd.DataFrame(self._rows(state.latent_variables))
        Logger.log(f"Processed latent variables dataframe with {len(latent_df)} rows")

        # Connections are a list per node; flatten to a comma-separated cell
        node_rows = []
        for node in self._rows(state.graph_nodes):
            row = dict(node)
            connections = row.get("connections")
            if isinstance(connections, list):
                row["connections"] = ",".join(str(target) for target in connections)
            node_rows.append(row)
        nodes_df = pd.DataFrame(node_rows)
        Logger.log(f"Processed graph nodes dataframe with {len(nodes_df)} rows")

        params_df = pd.DataFrame(self._rows(state.ode_parameters))
        phenotype_df = pd.DataFrame(self._rows(state.phenotype_series))
        metrics_df = pd.DataFrame(list(MODEL_METRICS.items()), columns=["metric", "value"])
        metrics_df["placeholder"] = True
        Logger.log(f"Processed phenotype dataframe with {len(phenotype_df)} rows")

        buffer = BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            for sheet_name, df in zip(self.SHEETS,
                                      (latent_df, nodes_df, params_df, phenotype_df, metrics_df)):
                Logger.log(f"Writing sheet {sheet_name}")
                df.to_excel(writer, index=False, sheet_name=sheet_name)

        timestamp = time.strftime("%Y%m%d_%H%M%S")
        filename = f"causal_dashboard_t{state.time_step}_{timestamp}.xlsx"
        Logger.log(f"Excel export generated successfully. Saved as {filename}")
        return [(filename, buffer.getvalue())]

    @staticmethod
    def _rows(records):
        """Only dict records make table rows; permissive imports may hold anything."""
        if not isinstance(records, list):
            return []
        return [record for record in records if isinstance(record, dict)]
