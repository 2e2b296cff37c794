"""Build the package summary reported for a module."""

import logging
from typing import Sequence

from .capabilities import PackageInfoProvider
from .dependencies import DEFAULT_FRAMEWORK_PACKAGES, build_requirements, merge_dependencies
from .manifest import ManifestResolver
from .models import PackageSummary

log = logging.getLogger(__name__)


class PackageSummaryBuilder:
    def __init__(
        self,
        package_info: PackageInfoProvider,
        manifests: ManifestResolver,
        framework_packages: Sequence[str] = DEFAULT_FRAMEWORK_PACKAGES,
    ):
        self._package_info = package_info
        self._manifests = manifests
        self._framework_packages = tuple(framework_packages)

    def build(self, module_name: str) -> PackageSummary:
        """Summarize a module's package name, version and dependencies.

        A module without composer.json yields an empty dependency set and
        only the provider's require entries.

        Raises:
            ModuleNotFound: the module folder could not be located.
            InvalidManifest: composer.json exists but cannot be parsed.
        """
        document = self._manifests.read_manifest(module_name)
        module_require = self._package_info.get_require(module_name)

        summary = PackageSummary(
            name=self._package_info.get_package_name(module_name),
            version=self._package_info.get_version(module_name),
            requirements=build_requirements(document, module_require, self._framework_packages),
            dependencies=frozenset(merge_dependencies(document)),
        )
        log.info(
            "%s: %d requirements, %d dependencies",
            module_name, len(summary.requirements), len(summary.dependencies),
        )
        return summary
