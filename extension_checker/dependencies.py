"""Consolidate the dependencies a module declares in composer.json."""

from typing import Iterable, Sequence

from .models import ManifestDocument

DEFAULT_FRAMEWORK_PACKAGES: tuple[str, ...] = ("magento/framework",)


def merge_dependencies(document: ManifestDocument) -> set[str]:
    """Union of package names from require, require-dev and suggest.

    Constraint values are discarded and a package listed in several sections
    counts once. Empty package names are skipped.
    """
    dependencies: set[str] = set()
    for section in (document.require, document.require_dev, document.suggest):
        dependencies.update(name for name in section if name)
    return dependencies


def build_requirements(
    document: ManifestDocument,
    module_require: Iterable[str],
    implicit_packages: Sequence[str] = DEFAULT_FRAMEWORK_PACKAGES,
) -> list[str]:
    """Trimmed, non-blank require entries followed by implicit framework packages.

    An implicit package is appended when it is a key of the manifest's
    require section, whatever its constraint value.
    """
    requirements = [entry.strip() for entry in module_require if entry and entry.strip()]

    # Deduplicate while preserving order
    seen: set[str] = set()
    for package in implicit_packages:
        if package in document.require and package not in seen:
            seen.add(package)
            requirements.append(package)

    return requirements
