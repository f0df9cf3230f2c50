"""
Generator configuration.

Settings come from three layers: built-in defaults, an optional JSON file
and explicit overrides (CLI flags or API arguments). Later layers win.
"""

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

PathLike = Union[str, Path]


class ConfigError(Exception):
    """Raised for unreadable or invalid generator configuration."""
    pass


@dataclass
class GeneratorConfig:
    """Settings shared by every class builder."""

    #: Directory generated files are written to; None prints them instead
    output_dir: Optional[str] = None

    #: Emit module and method docstrings
    add_comments: bool = True

    #: Package providing ActiveRecord, ModelCriteria, Criteria and DateTimeUtil
    runtime_package: str = "ormgen_runtime"
    object_base_class: str = "ActiveRecord"
    query_base_class: str = "ModelCriteria"

    #: Tables generated concurrently (1 = sequential)
    max_workers: int = 1

    #: Unrecognized keys, kept for builders and behaviors that want them
    custom: Dict[str, Any] = field(default_factory=dict)


_FIELD_NAMES = frozenset(f.name for f in fields(GeneratorConfig))

DEFAULT_CONFIG: Dict[str, Any] = {
    key: value
    for key, value in asdict(GeneratorConfig()).items()
    if key not in ("output_dir", "custom")
}


def _read_json_object(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        raise ConfigError(f"Configuration file not found: {path}")
    if path.suffix.lower() != ".json":
        raise ConfigError(f"Configuration file must be JSON: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file must contain a JSON object: {path}")
    return data


class ConfigManager:
    """Builds validated GeneratorConfig objects from layered settings."""

    def __init__(self, defaults: Optional[Dict[str, Any]] = None):
        self.defaults = dict(DEFAULT_CONFIG if defaults is None else defaults)

    def get_config(self, custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[PathLike] = None) -> GeneratorConfig:
        """
        Merge defaults, the config file and overrides, then validate.

        Raises:
            ConfigError: If the file cannot be used or a value is invalid
        """
        layers = [self.defaults]
        if config_file:
            layers.append(_read_json_object(Path(config_file)))
        if custom_config:
            layers.append(custom_config)

        merged: Dict[str, Any] = {}
        for layer in layers:
            merged.update(layer)

        config = self.from_dict(merged)
        problems = self.validate_config(config)
        if problems:
            raise ConfigError("; ".join(problems))
        return config

    @staticmethod
    def from_dict(values: Dict[str, Any]) -> GeneratorConfig:
        """Build a config, collecting unknown keys under ``custom``."""
        known = {key: value for key, value in values.items() if key in _FIELD_NAMES}
        extra = {key: value for key, value in values.items() if key not in _FIELD_NAMES}
        if extra:
            known["custom"] = {**known.get("custom", {}), **extra}
        return GeneratorConfig(**known)

    def save_config(self, config: GeneratorConfig, output_path: PathLike):
        """Write a config as a flat JSON object that ``get_config`` reads back."""
        data = asdict(config)
        data.update(data.pop("custom"))

        try:
            Path(output_path).write_text(
                json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
            )
        except OSError as e:
            raise ConfigError(f"Cannot write configuration to {output_path}: {e}") from e

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """Return a description of every invalid value (empty when valid)."""
        problems = []

        if not isinstance(config.max_workers, int) or config.max_workers < 1:
            problems.append(f"Invalid max_workers: {config.max_workers}")

        for name in ("object_base_class", "query_base_class"):
            value = getattr(config, name)
            if not isinstance(value, str) or not value.isidentifier():
                problems.append(f"Invalid {name}: {value}")

        package = config.runtime_package
        if not isinstance(package, str) or not all(
            part.isidentifier() for part in package.split(".")
        ):
            problems.append(f"Invalid runtime_package: {package}")

        return problems


_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    global _manager
    if _manager is None:
        _manager = ConfigManager()
    return _manager


def load_config(custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[PathLike] = None) -> GeneratorConfig:
    """Shortcut for ``get_config_manager().get_config(...)``."""
    return get_config_manager().get_config(custom_config, config_file)
