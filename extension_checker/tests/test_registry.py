"""Tests for extension_checker filesystem registries."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from extension_checker.exceptions import ModuleNotFound
from extension_checker.manifest import parse_manifest_file
from extension_checker.models import ComponentType
from extension_checker.registry import (
    ComposerPackageInfo,
    FileSystemComponentRegistry,
    FileSystemModuleRegistry,
    _parse_registration,
    scan_components,
)


@pytest.fixture
def tmp_root(tmp_path):
    return tmp_path


def _register(directory: Path, name: str, kind: str = "MODULE", fqcn: bool = False) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    prefix = "\\Magento\\Framework\\Component\\" if fqcn else ""
    (directory / "registration.php").write_text(
        "<?php\n"
        "use Magento\\Framework\\Component\\ComponentRegistrar;\n\n"
        f"{prefix}ComponentRegistrar::register({prefix}ComponentRegistrar::{kind}, '{name}', __DIR__);\n"
    )
    return directory


class TestParseRegistration:
    def test_module(self, tmp_root):
        d = _register(tmp_root / "mod", "Vendor_Module")
        assert _parse_registration(d / "registration.php") == (ComponentType.MODULE, "Vendor_Module")

    def test_fully_qualified(self, tmp_root):
        d = _register(tmp_root / "mod", "Vendor_Module", fqcn=True)
        assert _parse_registration(d / "registration.php") == (ComponentType.MODULE, "Vendor_Module")

    def test_theme(self, tmp_root):
        d = _register(tmp_root / "theme", "frontend/Vendor/theme", kind="THEME")
        assert _parse_registration(d / "registration.php") == (ComponentType.THEME, "frontend/Vendor/theme")

    def test_double_quotes(self, tmp_root):
        (tmp_root / "registration.php").write_text(
            '<?php ComponentRegistrar::register(ComponentRegistrar::MODULE, "Vendor_Quoted", __DIR__);'
        )
        assert _parse_registration(tmp_root / "registration.php") == (ComponentType.MODULE, "Vendor_Quoted")

    def test_unknown_type(self, tmp_root):
        d = _register(tmp_root / "mod", "Vendor_Module", kind="WIDGET")
        assert _parse_registration(d / "registration.php") is None

    def test_no_register_call(self, tmp_root):
        (tmp_root / "registration.php").write_text("<?php\n")
        assert _parse_registration(tmp_root / "registration.php") is None


class TestScanComponents:
    def test_finds_app_code_and_vendor_modules(self, tmp_root):
        app = _register(tmp_root / "app" / "code" / "Acme" / "Blog", "Acme_Blog")
        vendor = _register(tmp_root / "vendor" / "acme" / "module-shop", "Acme_Shop")

        components = scan_components(tmp_root)

        assert components == {
            (ComponentType.MODULE, "Acme_Blog"): app,
            (ComponentType.MODULE, "Acme_Shop"): vendor,
        }

    def test_respects_depth(self, tmp_root):
        _register(tmp_root / "a" / "b" / "c" / "d", "Deep_Module")
        assert scan_components(tmp_root, depth=3) == {}
        assert (ComponentType.MODULE, "Deep_Module") in scan_components(tmp_root, depth=4)

    def test_skips_test_dirs(self, tmp_root):
        _register(tmp_root / "dev" / "tests" / "Fixture", "Test_Fixture")
        _register(tmp_root / "app" / "code" / "Acme" / "Blog" / "Test", "Acme_BlogTest")
        assert scan_components(tmp_root) == {}

    def test_components_do_not_nest(self, tmp_root):
        outer = _register(tmp_root / "Outer", "Outer_Module")
        _register(outer / "Inner", "Inner_Module")
        assert scan_components(tmp_root) == {(ComponentType.MODULE, "Outer_Module"): outer}

    def test_first_registration_wins(self, tmp_root):
        first = _register(tmp_root / "a" / "Blog", "Acme_Blog")
        _register(tmp_root / "b" / "Blog", "Acme_Blog")
        assert scan_components(tmp_root)[(ComponentType.MODULE, "Acme_Blog")] == first

    def test_empty_root(self, tmp_root):
        assert scan_components(tmp_root) == {}


class TestFileSystemComponentRegistry:
    def test_resolve(self, tmp_root):
        d = _register(tmp_root / "app" / "code" / "Acme" / "Blog", "Acme_Blog")
        registry = FileSystemComponentRegistry.from_root(tmp_root)
        assert registry.resolve(ComponentType.MODULE, "Acme_Blog") == d
        assert registry.resolve("module", "Acme_Blog") == d
        assert registry.resolve(ComponentType.THEME, "Acme_Blog") is None
        assert registry.resolve(ComponentType.MODULE, "Ghost_Module") is None

    def test_names_by_type(self, tmp_root):
        _register(tmp_root / "mod", "Acme_Blog")
        _register(tmp_root / "theme", "frontend/Acme/luma", kind="THEME")
        registry = FileSystemComponentRegistry.from_root(tmp_root)
        assert registry.names(ComponentType.MODULE) == {"Acme_Blog"}
        assert registry.names(ComponentType.THEME) == {"frontend/Acme/luma"}


class TestFileSystemModuleRegistry:
    def test_list_names(self, tmp_root):
        _register(tmp_root / "a", "Acme_Blog")
        _register(tmp_root / "b", "Acme_Shop")
        modules = FileSystemModuleRegistry(FileSystemComponentRegistry.from_root(tmp_root))
        assert modules.list_names() == {"Acme_Blog", "Acme_Shop"}

    def test_get_info_from_module_xml(self, tmp_root):
        d = _register(tmp_root / "blog", "Acme_Blog")
        (d / "etc").mkdir()
        (d / "etc" / "module.xml").write_text("""<?xml version="1.0"?>
<config xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
    <module name="Acme_Blog" setup_version="1.4.0">
        <sequence>
            <module name="Magento_Store"/>
            <module name="Magento_Cms"/>
        </sequence>
    </module>
</config>""")
        modules = FileSystemModuleRegistry(FileSystemComponentRegistry.from_root(tmp_root))

        info = modules.get_info("Acme_Blog")

        assert info.name == "Acme_Blog"
        assert info.setup_version == "1.4.0"
        assert info.sequence == ["Magento_Store", "Magento_Cms"]

    def test_get_info_without_module_xml(self, tmp_root):
        _register(tmp_root / "blog", "Acme_Blog")
        modules = FileSystemModuleRegistry(FileSystemComponentRegistry.from_root(tmp_root))
        info = modules.get_info("Acme_Blog")
        assert info.name == "Acme_Blog"
        assert info.setup_version is None

    def test_get_info_broken_module_xml(self, tmp_root):
        d = _register(tmp_root / "blog", "Acme_Blog")
        (d / "etc").mkdir()
        (d / "etc" / "module.xml").write_text("<config><module")
        modules = FileSystemModuleRegistry(FileSystemComponentRegistry.from_root(tmp_root))
        assert modules.get_info("Acme_Blog").sequence == []

    def test_get_info_unknown(self, tmp_root):
        modules = FileSystemModuleRegistry(FileSystemComponentRegistry({}))
        with pytest.raises(ModuleNotFound):
            modules.get_info("Ghost_Module")


class TestComposerPackageInfo:
    def test_reads_composer_json(self, tmp_root):
        d = _register(tmp_root / "blog", "Acme_Blog")
        (d / "composer.json").write_text(json.dumps({
            "name": "acme/module-blog",
            "version": "2.1.0",
            "require": {"php": "~8.1", "magento/framework": "103.0.*"},
        }))
        info = ComposerPackageInfo(FileSystemComponentRegistry.from_root(tmp_root))

        assert info.get_package_name("Acme_Blog") == "acme/module-blog"
        assert info.get_version("Acme_Blog") == "2.1.0"
        assert info.get_require("Acme_Blog") == ["php ~8.1", "magento/framework 103.0.*"]

    def test_without_composer_json(self, tmp_root):
        _register(tmp_root / "blog", "Acme_Blog")
        info = ComposerPackageInfo(FileSystemComponentRegistry.from_root(tmp_root))
        assert info.get_package_name("Acme_Blog") == ""
        assert info.get_version("Acme_Blog") == ""
        assert info.get_require("Acme_Blog") == []

    def test_unknown_module(self):
        info = ComposerPackageInfo(FileSystemComponentRegistry({}))
        assert info.get_require("Ghost_Module") == []

    def test_parses_composer_json_once(self, tmp_root):
        d = _register(tmp_root / "blog", "Acme_Blog")
        (d / "composer.json").write_text(json.dumps({
            "name": "acme/module-blog",
            "version": "2.1.0",
            "require": {"php": "~8.1"},
        }))
        info = ComposerPackageInfo(FileSystemComponentRegistry.from_root(tmp_root))

        with patch(
            "extension_checker.registry.parse_manifest_file", wraps=parse_manifest_file,
        ) as mock_parse:
            info.get_package_name("Acme_Blog")
            info.get_version("Acme_Blog")
            info.get_require("Acme_Blog")

        assert mock_parse.call_count == 1
