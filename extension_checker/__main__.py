"""CLI entry point: python -m extension_checker <command> <module>"""

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from .analysis import DEFAULT_LEVEL, parse_level, run_analysis
from .config import CheckerConfig
from .exceptions import ExtensionCheckerError, ModuleNotFound
from .locator import ModuleLocator
from .manifest import ManifestResolver
from .registry import ComposerPackageInfo, FileSystemComponentRegistry, FileSystemModuleRegistry
from .summary import PackageSummaryBuilder

log = logging.getLogger(__name__)


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="extension_checker",
        description="Inspect platform modules: package summary and static analysis.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    phpstan = subparsers.add_parser("phpstan", help="Run PHPStan for a specific module")
    phpstan.add_argument("module", help="Module name")
    phpstan.add_argument(
        "level",
        nargs="?",
        type=parse_level,
        default=DEFAULT_LEVEL,
        help=f"PHPStan level (default {DEFAULT_LEVEL})",
    )

    info = subparsers.add_parser("info", help="Show package name, version and dependencies")
    info.add_argument("module", help="Module name")
    info.add_argument(
        "-o", "--output",
        help="Also write the JSON summary to file",
    )
    return parser.parse_args(argv)


def _info(module_name: str, config: CheckerConfig, components: FileSystemComponentRegistry) -> dict:
    locator = ModuleLocator(components, FileSystemModuleRegistry(components))
    if not locator.is_known(module_name):
        raise ModuleNotFound(f'Module "{module_name}" is not installed')

    builder = PackageSummaryBuilder(
        package_info=ComposerPackageInfo(components),
        manifests=ManifestResolver(locator),
        framework_packages=config.framework_packages,
    )
    summary = builder.build(module_name)
    record = locator.get_module_info(module_name)

    return {
        "module": record.name,
        "path": str(locator.locate(module_name)),
        "setup_version": record.setup_version,
        "sequence": record.sequence,
        "name": summary.name,
        "version": summary.version,
        "requirements": summary.requirements,
        "dependencies": sorted(summary.dependencies),
    }


def main(argv=None):
    load_dotenv()
    args = _parse_args(argv)

    level = logging.DEBUG if args.debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        config = CheckerConfig.from_env()
    except ValueError as e:
        print(f"Config error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        components = FileSystemComponentRegistry.from_root(config.root, config.depth)
        if args.command == "phpstan":
            code = run_analysis(args.module, components, config, level=args.level)
            sys.exit(code)
        output = _info(args.module, config, components)
    except ExtensionCheckerError as e:
        print(str(e), file=sys.stderr)
        log.debug("%s detail", type(e).__name__, exc_info=True)
        sys.exit(1)
    except FileNotFoundError as e:
        print(f"Cannot start PHPStan: {e}", file=sys.stderr)
        log.debug("FileNotFoundError detail", exc_info=True)
        sys.exit(1)
    except PermissionError:
        print(f"Cannot read platform root at {config.root}.", file=sys.stderr)
        log.debug("PermissionError for %s", config.root, exc_info=True)
        sys.exit(1)
    except Exception as e:
        print(f"Unexpected error: {type(e).__name__}: {e}", file=sys.stderr)
        log.debug("Unexpected exception", exc_info=True)
        sys.exit(1)

    json_str = json.dumps(output, indent=2)
    print(json_str)
    if args.output:
        Path(args.output).write_text(json_str + "\n")
        print(f"Summary written to {args.output}", file=sys.stderr)


if __name__ == "__main__":
    main()
