"""Run PHPStan against a single module."""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Union

from .capabilities import ComponentRegistry
from .config import CheckerConfig
from .exceptions import ModuleNotFound
from .models import ComponentType

log = logging.getLogger(__name__)

DEFAULT_LEVEL = 2

Level = Union[int, str]


def parse_level(value: str) -> Level:
    """Accept a non-negative integer level or "max"."""
    if value == "max":
        return value
    try:
        level = int(value)
    except ValueError:
        raise ValueError(f"PHPStan level must be an integer or 'max', got {value!r}") from None
    if level < 0:
        raise ValueError(f"PHPStan level must not be negative, got {level}")
    return level


def _resolve_executable(binary: str, root: Path) -> str:
    """Locate the analysis binary relative to the platform root, then on PATH."""
    candidate = Path(binary)
    if not candidate.is_absolute():
        candidate = root / candidate
    if candidate.is_file():
        return str(candidate)

    resolved = shutil.which(binary)
    if resolved is None:
        raise FileNotFoundError(f"Executable '{binary}' was not found in {root} or on PATH")
    return resolved


def build_command(module_path: Path, level: Level, config: CheckerConfig) -> list[str]:
    return [
        config.phpstan_bin,
        "analyse",
        f"--configuration={config.phpstan_config}",
        f"--level={level}",
        "--no-progress",
        str(module_path),
    ]


def run_analysis(
    module_name: str,
    registry: ComponentRegistry,
    config: CheckerConfig,
    level: Level = DEFAULT_LEVEL,
) -> int:
    """Analyse a module and return PHPStan's exit status.

    Output is passed straight through to the terminal.

    Raises:
        ModuleNotFound: the module is not registered.
        FileNotFoundError: the PHPStan binary cannot be found.
    """
    module_path = registry.resolve(ComponentType.MODULE, module_name)
    if module_path is None:
        raise ModuleNotFound(f'Module "{module_name}" is not registered')

    command = build_command(module_path, level, config)
    command[0] = _resolve_executable(config.phpstan_bin, config.root)
    log.info("Running %s", " ".join(command))

    completed = subprocess.run(command, cwd=str(config.root), check=False)
    log.debug("PHPStan exited with %d", completed.returncode)
    return completed.returncode
