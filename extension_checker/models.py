from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

REGISTRATION_FILE = "registration.php"
MANIFEST_FILE = "composer.json"
MODULE_XML = "etc/module.xml"


class ComponentType(str, Enum):
    MODULE = "module"
    THEME = "theme"
    LIBRARY = "library"
    LANGUAGE = "language"
    SETUP = "setup"


class ManifestDocument(BaseModel):
    """Parsed composer.json. Only the keys below are read; the rest are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    name: Optional[str] = None
    version: Optional[str] = None
    require: dict[str, str] = Field(default_factory=dict)
    require_dev: dict[str, str] = Field(default_factory=dict, alias="require-dev")
    suggest: dict[str, str] = Field(default_factory=dict)

    @field_validator("require", "require_dev", "suggest", mode="before")
    @classmethod
    def empty_section_as_dict(cls, value):
        # PHP encodes an empty array as []
        if value is None or value == []:
            return {}
        return value


class ModuleRecord(BaseModel):
    name: str = Field(description="Module name as declared in etc/module.xml, e.g. Vendor_Module")
    setup_version: Optional[str] = Field(default=None, description="setup_version attribute, if declared")
    sequence: list[str] = Field(
        default_factory=list,
        description="Modules this module must load after, from <sequence>",
    )


class PackageSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Composer package name reported for the module")
    version: str = Field(description="Composer package version reported for the module")
    requirements: list[str] = Field(
        default_factory=list,
        description="Trimmed require entries, followed by implicit framework packages",
    )
    dependencies: frozenset[str] = Field(
        default_factory=frozenset,
        description="Package names from require, require-dev and suggest",
    )
