"""
Project state storage

Two stores for the working set of parcels:
- Quick store: single JSON file, size-limited, overwritten on every save
- Project file: explicit export/import to any path, no size limit
"""

import json
import os
from typing import Any, Dict, Optional
from loguru import logger
from pydantic import ValidationError

from ..config import get_config, StorageConfig
from ..exceptions import ProjectStoreError, StoreQuotaExceededError
from ..models import ProjectState


class ProjectStore:
    """Saves and loads ProjectState as JSON"""

    def __init__(self, config: Optional[StorageConfig] = None):
        self.config = config or get_config().storage
        self.quick_store_path = self.config.quick_store_path
        self.max_bytes = self.config.quick_store_max_bytes

    def save_state(self, project_name: str, lands: Dict[str, Dict[str, Any]]) -> ProjectState:
        """
        Save project state to the quick store

        Raises:
            StoreQuotaExceededError: If the serialized state exceeds the limit
            ProjectStoreError: If the file cannot be written
        """
        state = ProjectState(project_name=project_name, lands=lands)
        payload = json.dumps(state.model_dump(), ensure_ascii=False).encode("utf-8")

        if len(payload) > self.max_bytes:
            logger.warning("Quick store quota exceeded. Consider exporting to file.")
            raise StoreQuotaExceededError(len(payload), self.max_bytes)

        try:
            os.makedirs(os.path.dirname(self.quick_store_path) or ".", exist_ok=True)
            with open(self.quick_store_path, 'wb') as f:
                f.write(payload)
        except OSError as e:
            raise ProjectStoreError(f"Failed to save project state: {e}") from e

        logger.info(f"State saved to quick store: {self.quick_store_path}")
        return state

    def load_state(self) -> Optional[ProjectState]:
        """Load project state from the quick store, None if absent or unreadable"""
        if not os.path.exists(self.quick_store_path):
            return None

        try:
            with open(self.quick_store_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            state = ProjectState.model_validate(data)
        except (OSError, ValueError, ValidationError) as e:
            logger.error(f"Quick store load error: {e}")
            return None

        logger.info(f"State loaded from quick store: {self.quick_store_path}")
        return state

    def clear_state(self) -> None:
        if os.path.exists(self.quick_store_path):
            os.remove(self.quick_store_path)

    def export_project(self, state: ProjectState, path: Optional[str] = None) -> str:
        """Write a full project file (pretty-printed, no size limit)"""
        path = path or self.config.project_filename
        try:
            os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(state.model_dump(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ProjectStoreError(f"Failed to export project to {path}: {e}") from e

        logger.info(f"Project saved to file: {path}")
        return path

    def import_project(self, path: str) -> ProjectState:
        """
        Read a project file

        Raises:
            ProjectStoreError: If the file is missing, not JSON or not a project
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            state = ProjectState.model_validate(data)
        except (OSError, ValueError, ValidationError) as e:
            raise ProjectStoreError(f"Failed to load project from {path}: {e}") from e

        logger.info(f"Project loaded from file: {path}")
        return state
