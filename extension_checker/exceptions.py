"""Typed failures raised while inspecting platform modules."""

from pathlib import Path


class ExtensionCheckerError(Exception):
    """Base class for all extension_checker failures."""


class ModuleNotFound(ExtensionCheckerError, LookupError):
    """The module is unknown, or its folder has no registration file."""


class ComponentNotFound(ExtensionCheckerError, LookupError):
    """No composer.json exists in the module folder or its parent."""

    def __init__(self, module_name: str):
        self.module_name = module_name
        super().__init__(f'No composer.json for module "{module_name}"')


class InvalidManifest(ExtensionCheckerError, ValueError):
    """A composer.json file exists but is not a valid manifest document."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Invalid manifest {path}: {reason}")
