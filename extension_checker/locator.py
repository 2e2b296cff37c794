"""Resolve module names to their folders on disk."""

import logging
from pathlib import Path

from .capabilities import ComponentRegistry, ModuleRegistry
from .exceptions import ModuleNotFound
from .models import REGISTRATION_FILE, ComponentType, ModuleRecord

log = logging.getLogger(__name__)


class ModuleLocator:
    """Looks modules up in the host registries.

    Holds only the injected registries; every call is self-contained.
    """

    def __init__(self, components: ComponentRegistry, modules: ModuleRegistry):
        self._components = components
        self._modules = modules

    def is_known(self, module_name: str) -> bool:
        return module_name in self._modules.list_names()

    def get_module_info(self, module_name: str) -> ModuleRecord:
        if not self.is_known(module_name):
            raise ModuleNotFound(f'Module "{module_name}" is not installed')
        return self._modules.get_info(module_name)

    def locate(self, module_name: str) -> Path:
        """Return the module folder, verified to contain registration.php.

        Raises:
            ModuleNotFound: the registry has no folder for the module, or the
                folder lacks the registration file.
        """
        module_folder = self._components.resolve(ComponentType.MODULE, module_name)
        if module_folder is None:
            raise ModuleNotFound(f'Module "{module_name}" is not registered')

        module_folder = Path(module_folder)
        if not (module_folder / REGISTRATION_FILE).is_file():
            raise ModuleNotFound(
                f'Module folder "{module_folder}" for module "{module_name}" is empty'
            )

        log.debug("Located %s at %s", module_name, module_folder)
        return module_folder
