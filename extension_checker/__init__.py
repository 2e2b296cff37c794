from .dependencies import build_requirements, merge_dependencies
from .exceptions import ComponentNotFound, InvalidManifest, ModuleNotFound
from .locator import ModuleLocator
from .manifest import ManifestResolver
from .models import ManifestDocument, PackageSummary
from .summary import PackageSummaryBuilder

__all__ = [
    "build_requirements",
    "merge_dependencies",
    "ComponentNotFound",
    "InvalidManifest",
    "ModuleNotFound",
    "ModuleLocator",
    "ManifestResolver",
    "ManifestDocument",
    "PackageSummary",
    "PackageSummaryBuilder",
]
