"""Checker settings from environment."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from .dependencies import DEFAULT_FRAMEWORK_PACKAGES

DEFAULT_DEPTH = 6
DEFAULT_PHPSTAN_BIN = "vendor/bin/phpstan"
DEFAULT_PHPSTAN_CONFIG = "./phpstan.neon"


def _parse_packages(value: str) -> tuple[str, ...]:
    """Split a comma-separated package list, dropping blanks."""
    packages = tuple(p.strip() for p in value.split(",") if p.strip())
    if not packages:
        raise ValueError("EXTENSION_CHECKER_FRAMEWORK_PACKAGES must name at least one package")
    return packages


@dataclass(frozen=True)
class CheckerConfig:
    root: Path = field(default_factory=Path.cwd)
    depth: int = DEFAULT_DEPTH
    framework_packages: tuple[str, ...] = DEFAULT_FRAMEWORK_PACKAGES
    phpstan_bin: str = DEFAULT_PHPSTAN_BIN
    phpstan_config: str = DEFAULT_PHPSTAN_CONFIG

    @classmethod
    def from_env(cls) -> "CheckerConfig":
        """Load from environment variables.

        All optional:
          - EXTENSION_CHECKER_ROOT: platform root to scan (default: cwd)
          - EXTENSION_CHECKER_DEPTH: max scan depth (default: 6)
          - EXTENSION_CHECKER_FRAMEWORK_PACKAGES: comma-separated packages
            reported as implicit requirements (default: magento/framework)
          - PHPSTAN_BIN, PHPSTAN_CONFIG: analysis binary and config file
        """
        root = os.getenv("EXTENSION_CHECKER_ROOT", "")
        depth = os.getenv("EXTENSION_CHECKER_DEPTH", "")
        packages = os.getenv("EXTENSION_CHECKER_FRAMEWORK_PACKAGES")

        try:
            depth_value = int(depth) if depth else DEFAULT_DEPTH
        except ValueError:
            raise ValueError(f"EXTENSION_CHECKER_DEPTH must be an integer, got {depth!r}") from None
        if depth_value < 0:
            raise ValueError(f"EXTENSION_CHECKER_DEPTH must not be negative, got {depth_value}")

        return cls(
            root=Path(root).resolve() if root else Path.cwd(),
            depth=depth_value,
            framework_packages=(
                _parse_packages(packages) if packages is not None else DEFAULT_FRAMEWORK_PACKAGES
            ),
            phpstan_bin=os.getenv("PHPSTAN_BIN") or DEFAULT_PHPSTAN_BIN,
            phpstan_config=os.getenv("PHPSTAN_CONFIG") or DEFAULT_PHPSTAN_CONFIG,
        )
