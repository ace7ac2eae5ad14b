from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from di_core.catalog import DEFAULT_RESOURCE_TYPES
from di_core.directive import DEFAULT_DIRECTIVE_PREFIX
from di_core.issues import to_lines
from di_core.schema import config_issues

DEFAULT_PREVIEW_LENGTH = 40
DEFAULT_PLACEHOLDER = "—"


class ConfigError(ValueError):
    """The configuration file is missing or does not match the schema."""


@dataclass(frozen=True)
class InheritConfig:
    directive_prefix: str = DEFAULT_DIRECTIVE_PREFIX
    resource_types: Tuple[str, ...] = DEFAULT_RESOURCE_TYPES
    include_sources: bool = True
    preview_length: int = DEFAULT_PREVIEW_LENGTH
    placeholder: str = DEFAULT_PLACEHOLDER


def load_config_data(path: str) -> Dict[str, Any]:
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {path}")

    with config_path.open("r", encoding="utf-8") as handle:
        try:
            loaded = yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if loaded is None:
        return {}

    if not isinstance(loaded, dict):
        raise ConfigError("Config must parse to a YAML object at root.")

    return loaded


def config_from_dict(data: Dict[str, Any]) -> InheritConfig:
    issues = config_issues(data)
    if issues:
        raise ConfigError("Invalid configuration:\n" + "\n".join(to_lines(issues)))

    defaults = InheritConfig()
    return InheritConfig(
        directive_prefix=data.get("directive_prefix", defaults.directive_prefix),
        resource_types=tuple(data.get("resource_types", defaults.resource_types)),
        include_sources=data.get("include_sources", defaults.include_sources),
        preview_length=data.get("preview_length", defaults.preview_length),
        placeholder=data.get("placeholder", defaults.placeholder),
    )


def load_config(path: Optional[str] = None) -> InheritConfig:
    if path is None:
        return InheritConfig()
    return config_from_dict(load_config_data(path))
