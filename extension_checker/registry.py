"""Filesystem-backed host registries.

Components announce themselves in a registration.php file:

    ComponentRegistrar::register(ComponentRegistrar::MODULE, 'Vendor_Module', __DIR__);

Scanning a platform root for those files gives the component map; module
metadata comes from etc/module.xml and package data from composer.json.
"""

import logging
import re
# stdlib ElementTree is not vulnerable to XXE (no external entity support)
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Mapping, Optional

from .exceptions import ModuleNotFound
from .manifest import parse_manifest_file
from .models import MANIFEST_FILE, MODULE_XML, REGISTRATION_FILE, ComponentType, ManifestDocument, ModuleRecord

log = logging.getLogger(__name__)


SKIP_DIRS = {
    ".git", ".github", ".idea", "node_modules", "__pycache__",
    "generated", "var", "pub", "dev",
    "Test", "tests",
}

_REGISTRATION_RE = re.compile(
    r"""ComponentRegistrar::register\(\s*"""
    r"""[\\\w]*ComponentRegistrar::(?P<type>[A-Z]+)\s*,\s*"""
    r"""['"](?P<name>[^'"]+)['"]"""
)


def scan_components(root: Path, depth: int = 6) -> dict[tuple[ComponentType, str], Path]:
    """
    Recursively scan a platform root for registered components.

    Args:
        root: Platform root directory.
        depth: Maximum directory depth to scan.

    Returns:
        Mapping of (component type, component name) to component directory.
        When a name is registered twice, the first directory found wins.
    """
    results: dict[tuple[ComponentType, str], Path] = {}
    _scan_directory(root, depth, results)
    log.debug("Scanned %s: %d components", root, len(results))
    return results


def _scan_directory(
    dir_path: Path,
    remaining_depth: int,
    results: dict[tuple[ComponentType, str], Path],
) -> None:
    if remaining_depth < 0:
        return

    registration = dir_path / REGISTRATION_FILE
    if registration.is_file():
        component = _parse_registration(registration)
        if component is not None:
            if component in results:
                log.warning(
                    "%s %s registered twice: %s and %s",
                    component[0].value, component[1], results[component], dir_path,
                )
            else:
                results[component] = dir_path
            # Components do not nest
            return

    try:
        for child in sorted(dir_path.iterdir()):
            if child.is_dir() and child.name not in SKIP_DIRS:
                _scan_directory(child, remaining_depth - 1, results)
    except PermissionError:
        log.debug("Skipping unreadable directory %s", dir_path)


def _parse_registration(path: Path) -> Optional[tuple[ComponentType, str]]:
    """Extract (type, name) from a registration.php file."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        log.debug("Cannot read %s", path, exc_info=True)
        return None

    match = _REGISTRATION_RE.search(text)
    if not match:
        return None
    try:
        component_type = ComponentType(match.group("type").lower())
    except ValueError:
        return None
    return component_type, match.group("name")


def _parse_module_xml(path: Path, module_name: str) -> ModuleRecord:
    """Read setup_version and <sequence> from etc/module.xml."""
    root = ET.parse(path).getroot()
    module_el = root.find("module")
    if module_el is None:
        return ModuleRecord(name=module_name)

    sequence = [
        el.get("name")
        for el in module_el.findall("sequence/module")
        if el.get("name")
    ]
    return ModuleRecord(
        name=module_el.get("name") or module_name,
        setup_version=module_el.get("setup_version"),
        sequence=sequence,
    )


class FileSystemComponentRegistry:
    def __init__(self, paths: Mapping[tuple[ComponentType, str], Path]):
        self._paths = dict(paths)

    @classmethod
    def from_root(cls, root: str | Path, depth: int = 6) -> "FileSystemComponentRegistry":
        return cls(scan_components(Path(root), depth))

    def resolve(self, component_type: ComponentType, name: str) -> Optional[Path]:
        return self._paths.get((ComponentType(component_type), name))

    def names(self, component_type: ComponentType) -> set[str]:
        return {name for kind, name in self._paths if kind == component_type}


class FileSystemModuleRegistry:
    """Installed modules are the registered module components."""

    def __init__(self, components: FileSystemComponentRegistry):
        self._components = components

    def list_names(self) -> set[str]:
        return self._components.names(ComponentType.MODULE)

    def get_info(self, name: str) -> ModuleRecord:
        module_folder = self._components.resolve(ComponentType.MODULE, name)
        if module_folder is None:
            raise ModuleNotFound(f'Module "{name}" is not installed')

        module_xml = module_folder / MODULE_XML
        if not module_xml.is_file():
            return ModuleRecord(name=name)
        try:
            return _parse_module_xml(module_xml, name)
        except ET.ParseError:
            log.warning("Cannot parse %s", module_xml, exc_info=True)
            return ModuleRecord(name=name)


class ComposerPackageInfo:
    """Package data from the composer.json inside a module folder.

    Modules without one report an empty name and version and no requirements.
    Each composer.json is parsed once per instance; build one per query.
    """

    def __init__(self, components: FileSystemComponentRegistry):
        self._components = components
        self._manifests: dict[str, ManifestDocument] = {}

    def _manifest(self, module_name: str) -> ManifestDocument:
        if module_name not in self._manifests:
            self._manifests[module_name] = self._read_manifest(module_name)
        return self._manifests[module_name]

    def _read_manifest(self, module_name: str) -> ManifestDocument:
        module_folder = self._components.resolve(ComponentType.MODULE, module_name)
        if module_folder is None:
            return ManifestDocument()
        path = module_folder / MANIFEST_FILE
        if not path.is_file():
            return ManifestDocument()
        return parse_manifest_file(path)

    def get_package_name(self, module_name: str) -> str:
        return self._manifest(module_name).name or ""

    def get_version(self, module_name: str) -> str:
        return self._manifest(module_name).version or ""

    def get_require(self, module_name: str) -> list[str]:
        return [
            f"{package} {constraint}".strip()
            for package, constraint in self._manifest(module_name).require.items()
        ]
