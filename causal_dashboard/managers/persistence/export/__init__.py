from .export_manager import ExportManager
from .export_request_interpreter import ExportRequestInterpreter
from .export_strategy import ExportStrategy, DataExportStrategy, ImageExportStrategy
from .json_export_strategy import JsonSnapshotExportStrategy
from .excel_export_strategy import ExcelExportStrategy
from .png_export_strategy import PngExportStrategy
