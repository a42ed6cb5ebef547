"""
Configuration for the code generator pipeline.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path

import yaml

from .errors import ConfigError


class DateType(str, Enum):
    """How date and date-time strings are typed."""

    STRING = "string"
    DATE = "Date"


class EnumType(str, Enum):
    """How named enumerations are declared."""

    CONST_OBJECT = "constObject"  # const object plus derived type
    UNION = "union"  # literal union type
    ENUM = "enum"  # TypeScript enum


class PropertyNameStyle(str, Enum):
    ORIGINAL = "original"
    CAMEL_CASE = "camelCase"


class NullableType(str, Enum):
    NULL = "null"
    UNDEFINED = "undefined"


class ClientSuffix(str, Enum):
    CLIENT = "Client"
    API = "Api"


class MethodNameStyle(str, Enum):
    """How client method names are derived. Only operationId is implemented."""

    OPERATION_ID = "operationId"


# camelCase spellings accepted in config files
_KEY_ALIASES = {
    "dateType": "date_type",
    "enumType": "enum_type",
    "propertyNameStyle": "property_name_style",
    "nullableType": "nullable_type",
    "clientSuffix": "client_suffix",
    "methodNameStyle": "method_name_style",
    "addGenerationComment": "add_generation_comment",
}


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Type used for "date" and "date-time" string formats
    date_type: DateType = DateType.STRING

    # Representation of named enums
    enum_type: EnumType = EnumType.CONST_OBJECT

    # Emitted property names: verbatim or camelCase
    property_name_style: PropertyNameStyle = PropertyNameStyle.ORIGINAL

    # What nullable properties are combined with
    nullable_type: NullableType = NullableType.NULL

    # Suffix of generated client classes (PetsClient / PetsApi)
    client_suffix: ClientSuffix = ClientSuffix.CLIENT

    # Naming of client methods
    method_name_style: MethodNameStyle = MethodNameStyle.OPERATION_ID

    # Add "do not edit" comment at top of each file
    add_generation_comment: bool = True

    def __post_init__(self):
        # Accept plain strings for every enum-typed option
        for f in fields(self):
            value = getattr(self, f.name)
            enum_cls = _ENUM_FIELDS.get(f.name)
            if enum_cls is not None and not isinstance(value, enum_cls):
                try:
                    setattr(self, f.name, enum_cls(value))
                except ValueError as exc:
                    allowed = ", ".join(repr(m.value) for m in enum_cls)
                    raise ConfigError(f"Invalid value {value!r} for {f.name}", f"Expected one of {allowed}") from exc

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary (snake_case or camelCase keys)."""
        known = {f.name for f in fields(CodeGeneratorConfig)}
        kwargs = {}
        for k, v in d.items():
            key = _KEY_ALIASES.get(k, k)
            if key not in known:
                raise ConfigError(f"Unknown codegen option: {k}", f"Supported options are {', '.join(sorted(known))}")
            kwargs[key] = v
        return CodeGeneratorConfig(**kwargs)

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "date_type": self.date_type.value,
            "enum_type": self.enum_type.value,
            "property_name_style": self.property_name_style.value,
            "nullable_type": self.nullable_type.value,
            "client_suffix": self.client_suffix.value,
            "method_name_style": self.method_name_style.value,
            "add_generation_comment": self.add_generation_comment,
        }


_ENUM_FIELDS: dict[str, type[Enum]] = {
    "date_type": DateType,
    "enum_type": EnumType,
    "property_name_style": PropertyNameStyle,
    "nullable_type": NullableType,
    "client_suffix": ClientSuffix,
    "method_name_style": MethodNameStyle,
}


@dataclass
class ProjectConfig:
    """Where to read the document from, where to write, and how to generate."""

    source: str = ""
    target: str = ""
    codegen: CodeGeneratorConfig = field(default_factory=CodeGeneratorConfig)

    @staticmethod
    def from_dict(d: dict, base_dir: Path | None = None) -> ProjectConfig:
        """Create a project config; relative paths are resolved against base_dir."""
        for key in ("source", "target"):
            if not isinstance(d.get(key), str) or not d[key]:
                raise ConfigError(f"Config is missing '{key}'", "Set both 'source' and 'target' in the config file")

        source = d["source"]
        target = d["target"]
        if base_dir is not None:
            if not source.startswith(("http://", "https://")):
                source = str((base_dir / source).resolve())
            target = str((base_dir / target).resolve())

        return ProjectConfig(
            source=source,
            target=target,
            codegen=CodeGeneratorConfig.from_dict(d.get("codegen") or {}),
        )


def load_config(path: str | Path) -> ProjectConfig:
    """
    Load a project config from a JSON or YAML file.

    Args:
        path: Path to the config file

    Returns:
        The project configuration

    Raises:
        ConfigError: If the file cannot be read or is not a valid config
    """
    config_path = Path(path)
    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read config file {config_path}: {exc}") from exc

    try:
        if config_path.suffix.lower() == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to parse config file {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain an object", "Add 'source', 'target' and 'codegen' keys")

    return ProjectConfig.from_dict(data, base_dir=config_path.parent.resolve())
