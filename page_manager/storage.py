"""
YAML file storage for page entities.
Path: page_manager/storage.py

Each page is stored as ``<pages_directory>/<page id>.yml``.
"""

import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Union

import structlog
import yaml

from page_manager.exceptions import PageNotFoundError
from page_manager.page import Page
from page_manager.utils.schema_validation import SchemaValidator

logger = structlog.get_logger()


class PageStorage:
    """Loads and saves page documents."""

    def __init__(self, directory: Union[str, Path], page_factory: Callable[[Dict[str, Any]], Page]):
        """
        Args:
            directory: Directory holding page files
            page_factory: Builds a Page from validated values
        """
        self.directory = Path(directory)
        self.page_factory = page_factory

    def path_for(self, page_id: str) -> Path:
        return self.directory / f"{page_id}.yml"

    def list_ids(self) -> List[str]:
        if not self.directory.exists():
            return []
        return sorted(
            os.path.splitext(name)[0] for name in os.listdir(self.directory)
            if name.endswith(('.yml', '.yaml'))
        )

    def exists(self, page_id: str) -> bool:
        return self._find(page_id) is not None

    def read(self, page_id: str) -> Dict[str, Any]:
        """
        Read and validate the raw document of a page.

        Raises:
            PageNotFoundError: If no file exists for page_id
            ConfigurationError: If the document is invalid
        """
        path = self._find(page_id)
        if path is None:
            raise PageNotFoundError(f"Page '{page_id}' not found in {self.directory}")
        with open(path) as f:
            values = yaml.safe_load(f) or {}
        return SchemaValidator.validate_page(values)

    def load(self, page_id: str) -> Page:
        page = self.page_factory(self.read(page_id))
        logger.debug("storage.page_loaded", page=page.id)
        return page

    def load_all(self) -> List[Page]:
        return [self.load(page_id) for page_id in self.list_ids()]

    def save(self, page: Page) -> Path:
        values = SchemaValidator.validate_page(page.to_dict())
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(page.id)
        with open(path, 'w') as f:
            yaml.safe_dump(values, f, sort_keys=False, default_flow_style=False)
        logger.info("storage.page_saved", page=page.id, path=str(path))
        return path

    def delete(self, page_id: str) -> None:
        path = self._find(page_id)
        if path is None:
            raise PageNotFoundError(f"Page '{page_id}' not found in {self.directory}")
        path.unlink()
        logger.info("storage.page_deleted", page=page_id, path=str(path))

    def _find(self, page_id: str):
        for ext in ('.yml', '.yaml'):
            path = self.directory / f"{page_id}{ext}"
            if path.exists():
                return path
        return None
