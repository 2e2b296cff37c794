"""Find and read a module's composer.json.

Lookup order is fixed: the module folder first, then its immediate parent
(modules nested under a shared package keep the manifest one level up).
There is no further upward search.
"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .exceptions import ComponentNotFound, InvalidManifest
from .locator import ModuleLocator
from .models import MANIFEST_FILE, ManifestDocument

log = logging.getLogger(__name__)


def parse_manifest_file(path: Path) -> ManifestDocument:
    """Parse a composer.json file into a ManifestDocument.

    Raises:
        InvalidManifest: the file is not JSON, or not a JSON object of the
            expected shape.
    """
    try:
        return ManifestDocument.model_validate_json(path.read_bytes())
    except ValidationError as e:
        raise InvalidManifest(path, f"{e.error_count()} validation error(s)") from e


class ManifestResolver:
    def __init__(self, locator: ModuleLocator):
        self._locator = locator

    def find_manifest_path(self, module_name: str) -> Optional[Path]:
        """Return the manifest path, or None when neither location has one.

        Raises:
            ModuleNotFound: propagated from the locator.
        """
        module_folder = self._locator.locate(module_name)

        candidates = (
            module_folder / MANIFEST_FILE,
            module_folder / ".." / MANIFEST_FILE,
        )
        for candidate in candidates:
            if candidate.is_file():
                log.debug("Manifest for %s: %s", module_name, candidate)
                return candidate

        log.debug("No manifest for %s in %s or its parent", module_name, module_folder)
        return None

    def resolve_manifest_path(self, module_name: str) -> Path:
        """Like find_manifest_path, but a missing manifest is an error.

        Raises:
            ModuleNotFound: propagated from the locator.
            ComponentNotFound: no manifest in the module folder or its parent.
        """
        path = self.find_manifest_path(module_name)
        if path is None:
            raise ComponentNotFound(module_name)
        return path

    def load_manifest(self, module_name: str) -> Optional[ManifestDocument]:
        """Parsed manifest, or None when the module has no manifest."""
        path = self.find_manifest_path(module_name)
        if path is None:
            return None
        return parse_manifest_file(path)

    def read_manifest(self, module_name: str) -> ManifestDocument:
        """Parsed manifest, with a missing manifest read as an empty document."""
        document = self.load_manifest(module_name)
        if document is None:
            return ManifestDocument()
        return document
