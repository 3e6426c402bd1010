import os
from datetime import datetime

from .export_request_interpreter import ExportRequestInterpreter
from ....utils.logger.logger import Logger


class ExportManager:
    def __init__(self):
        self.interpreter = ExportRequestInterpreter()

    def handle_export_request(self, state, export_request, now=None):
        """
        Parse the request, run its strategies on `state`, and save the outputs.

        Returns:
            The root folder the files were written to.
        """
        try:
            request = self.interpreter.parse_request(export_request)
            base_folder_location = request['folder_location']
            self._verify_folder(base_folder_location)

            data_export = None
            image_export = None
            if request['data_export_strategy']:
                data_export = request['data_export_strategy'].generate_export(state, now)
            if request['image_export_strategy']:
                image_export = request['image_export_strategy'].generate_export(state, now)

            return self._save_reports(data_export, image_export, base_folder_location)
        except Exception as ex:
            Logger.log(f"Error handling export request: {ex}", Logger.LogPriority.ERROR)
            raise

    def _create_export_folder(self, base_folder_location):
        """Create a timestamped root folder; a numeric suffix avoids collisions."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        root_folder = os.path.join(base_folder_location, f"export_{timestamp}")
        candidate, suffix = root_folder, 1
        while os.path.exists(candidate):
            suffix += 1
            candidate = f"{root_folder}_{suffix}"
        os.makedirs(candidate)
        Logger.log(f"Created root folder: {candidate}")
        return candidate

    def _save_reports(self, data_export, image_export, base_folder_location):
        root_folder = self._create_export_folder(base_folder_location)
        if data_export:
            self._save_files(data_export, os.path.join(root_folder, 'data_export'))
        if image_export:
            self._save_files(image_export, os.path.join(root_folder, 'image_export'))
        return root_folder

    def _save_files(self, files, folder_location):
        """Write each (filename, bytes) into `folder_location`."""
        os.makedirs(folder_location, exist_ok=True)
        for filename, content in files:
            file_path = os.path.join(folder_location, filename)
            try:
                with open(file_path, 'wb') as f:
                    f.write(content)
                Logger.log(f"Saved file: {file_path}")
            except OSError as e:
                Logger.log(f"Error saving file {file_path}: {e}", Logger.LogPriority.ERROR)
                raise

    def _verify_folder(self, folder_path):
        """Ensure base folder exists and is a directory."""
        if not os.path.exists(folder_path):
            os.makedirs(folder_path)
            Logger.log(f"Created folder: {folder_path}")
        elif not os.path.isdir(folder_path):
            Logger.log(f"{folder_path} exists but is not a directory.", Logger.LogPriority.ERROR)
            raise ValueError(f"{folder_path} exists but is not a directory.")
        Logger.log(f"Folder verified: {folder_path}")
