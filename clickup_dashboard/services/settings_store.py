"""
Settings store: keeps dashboard settings in a named slot of a JSON file
"""

import json
from typing import Optional, Dict, Any
from pathlib import Path
from pydantic import ValidationError as PydanticValidationError
from clickup_dashboard.config.settings import settings as app_settings
from clickup_dashboard.config.constants import SETTINGS_STORAGE_KEY
from clickup_dashboard.models.settings import DashboardSettings
from clickup_dashboard.utils.error_handler import ValidationError
from clickup_dashboard.utils.logger import logger


class SettingsStore:
    """Persistent key-value storage for DashboardSettings"""

    def __init__(self, storage_file: Optional[str] = None, key: str = SETTINGS_STORAGE_KEY):
        """
        Initialize settings store

        Args:
            storage_file: Path to storage file (optional, uses SETTINGS_FILE_PATH)
            key: Slot name inside the storage file
        """
        if storage_file is None:
            storage_file = app_settings.SETTINGS_FILE_PATH
        self.storage_file = Path(storage_file)
        self.key = key
        self.logger = logger

    def _read_storage(self) -> Dict[str, Any]:
        """Read the whole storage file"""
        try:
            if self.storage_file.exists():
                with open(self.storage_file, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    return data
                self.logger.warning(f"[SettingsStore] Ignoring non-object storage in {self.storage_file}")
        except (OSError, ValueError) as e:
            self.logger.warning(f"[SettingsStore] Failed to read storage: {e}")
        return {}

    def _write_storage(self, data: Dict[str, Any]):
        """Write the whole storage file"""
        self.storage_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.storage_file, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    def load(self) -> Optional[DashboardSettings]:
        """
        Load stored settings

        Returns:
            Stored settings, or None if the slot is empty or unreadable
        """
        raw = self._read_storage().get(self.key)
        if raw is None:
            return None

        try:
            return DashboardSettings.model_validate(raw)
        except PydanticValidationError as e:
            self.logger.warning(f"[SettingsStore] Stored settings are invalid: {e}")
            return None

    def has_settings(self) -> bool:
        return self.key in self._read_storage()

    def save(self, dashboard_settings: DashboardSettings) -> DashboardSettings:
        """Overwrite the slot with new settings"""
        storage = self._read_storage()
        storage[self.key] = dashboard_settings.to_wire()
        self._write_storage(storage)
        self.logger.info(f"[SettingsStore] Settings saved (listId={dashboard_settings.list_id})")
        return dashboard_settings

    def clear(self):
        """Remove the slot, leaving other keys in the file untouched"""
        storage = self._read_storage()
        if storage.pop(self.key, None) is not None:
            self._write_storage(storage)
            self.logger.info("[SettingsStore] Settings cleared")

    def export_json(self, dashboard_settings: Optional[DashboardSettings] = None) -> str:
        """
        Serialize settings for download

        Args:
            dashboard_settings: Settings to export (defaults to the stored ones)

        Returns:
            Pretty-printed JSON document

        Raises:
            ValidationError: If nothing is stored and nothing was passed
        """
        if dashboard_settings is None:
            dashboard_settings = self.load()
        if dashboard_settings is None:
            raise ValidationError("No settings to export")

        return json.dumps(dashboard_settings.to_wire(), ensure_ascii=False, indent=2)

    def import_json(self, document: str) -> DashboardSettings:
        """
        Parse an exported settings document and store it

        Args:
            document: JSON text

        Returns:
            Imported settings

        Raises:
            ValidationError: If the document is not a valid settings object
        """
        try:
            raw = json.loads(document)
        except ValueError as e:
            raise ValidationError("Invalid settings file", details=str(e)) from e

        if not isinstance(raw, dict):
            raise ValidationError("Invalid settings file", details="Expected a JSON object")

        try:
            imported = DashboardSettings.model_validate(raw)
        except PydanticValidationError as e:
            raise ValidationError("Invalid settings file", details=str(e)) from e

        return self.save(imported)
