"""
Filter configuration loaded from YAML.

The default file (filters/defaults.yaml) has two sections, `filters` and
`approximations`. Each entry:

    glsw:
      module: spectrafilter.filters.glsw
      class: GLSW
      description: ...
      params:
        alpha: 0.001
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from spectrafilter.core.errors import ConfigError


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "filters" / "defaults.yaml"

SECTIONS = ('filters', 'approximations')


@dataclass
class FilterConfig:
    """One registered filter or approximation function."""
    name: str
    module: str
    class_name: str
    description: str = ""
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RegistryConfig:
    """Full contents of a configuration file."""
    version: str
    filters: Dict[str, FilterConfig] = field(default_factory=dict)
    approximations: Dict[str, FilterConfig] = field(default_factory=dict)


def _parse_entry(name: str, raw: Any, config_path: Path) -> FilterConfig:
    if not isinstance(raw, dict):
        raise ConfigError(f"{config_path}: entry '{name}' must be a mapping")

    missing = [key for key in ('module', 'class') if key not in raw]
    if missing:
        raise ConfigError(f"{config_path}: entry '{name}' is missing {', '.join(missing)}")

    params = raw.get('params') or {}
    if not isinstance(params, dict):
        raise ConfigError(f"{config_path}: params of '{name}' must be a mapping")

    return FilterConfig(
        name=name,
        module=raw['module'],
        class_name=raw['class'],
        description=raw.get('description', ''),
        params=params,
    )


def load_config(config_path: Optional[Union[str, Path]] = None) -> RegistryConfig:
    """Load filter configuration from a YAML file (defaults.yaml if None)."""
    config_path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH

    if not config_path.exists():
        raise FileNotFoundError(f"Filter config not found. Expected at: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ConfigError(f"{config_path}: top level must be a mapping")

    sections = {}
    for section in SECTIONS:
        entries = raw.get(section) or {}
        if not isinstance(entries, dict):
            raise ConfigError(f"{config_path}: section '{section}' must be a mapping")
        sections[section] = {
            name: _parse_entry(name, entry, config_path)
            for name, entry in entries.items()
        }

    return RegistryConfig(
        version=str(raw.get('version', '1.0')),
        filters=sections['filters'],
        approximations=sections['approximations'],
    )
