from .json_export_strategy import JsonSnapshotExportStrategy
from .excel_export_strategy import ExcelExportStrategy
from .png_export_strategy import PngExportStrategy
from ....utils.logger.logger import Logger


class ExportRequestInterpreter:
    """Parse export requests and instantiate strategies."""

    VALID_DATA_STRATEGIES = {
        "json_snapshot_export_strategy": JsonSnapshotExportStrategy,
        "excel_data_export_strategy": ExcelExportStrategy,
    }

    VALID_IMAGE_STRATEGIES = {
        "png_image_export_strategy": PngExportStrategy,
    }

    def parse_request(self, request_str: str):
        """
        Parse `export_request <data_strategy|none> <image_strategy|none> <folder>`.

        The folder is the rest of the line, so it may contain spaces.

        Returns:
            dict with 'data_export_strategy', 'image_export_strategy' (instances or None)
            and 'folder_location'.
        """
        Logger.log(f"start parse_request({request_str})")
        request_str = request_str.strip()
        if not request_str.startswith("export_request"):
            Logger.log("Request does not start with 'export_request'", Logger.LogPriority.ERROR)
            raise ValueError("The request must start with 'export_request'")
        parts = request_str[len("export_request"):].strip().split(maxsplit=2)
        Logger.log(f"Split request into parts: {parts}")

        if len(parts) != 3:
            Logger.log(f"Expected 3 parts but got {len(parts)}", Logger.LogPriority.ERROR)
            raise ValueError("Request must consist of exactly 3 parts: data, image, folder.")

        data_name = None if parts[0].lower() == "none" else parts[0]
        image_name = None if parts[1].lower() == "none" else parts[1]
        folder_location = parts[2].strip()

        if data_name is None and image_name is None:
            raise ValueError("At least one of 'data_export_strategy' or 'image_export_strategy' must be provided.")
        if not folder_location or folder_location.lower() == "none":
            raise ValueError("Folder location must be provided and cannot be 'none'.")

        data_export_strategy = None
        if data_name:
            if data_name not in self.VALID_DATA_STRATEGIES:
                Logger.log(f"Invalid data export strategy: {data_name}", Logger.LogPriority.ERROR)
                raise ValueError(f"Invalid data export strategy: '{data_name}'.")
            data_export_strategy = self.VALID_DATA_STRATEGIES[data_name]()

        image_export_strategy = None
        if image_name:
            if image_name not in self.VALID_IMAGE_STRATEGIES:
                Logger.log(f"Invalid image export strategy: {image_name}", Logger.LogPriority.ERROR)
                raise ValueError(f"Invalid image export strategy: '{image_name}'.")
            image_export_strategy = self.VALID_IMAGE_STRATEGIES[image_name]()

        Logger.log("Request parsed successfully.")
        return {
            'data_export_strategy': data_export_strategy,
            'image_export_strategy': image_export_strategy,
            'folder_location': folder_location,
        }
