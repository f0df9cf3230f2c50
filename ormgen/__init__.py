"""
ormgen: behavior-driven code generation for data-access classes.

Behaviors attached to schema tables add columns and splice code into the
generated table map, object and query classes.
"""

from .core import (
    Column,
    ColumnType,
    Contribution,
    GenerationResult,
    GeneratorConfig,
    HookPoint,
    Table,
    generate_code,
    generate_table,
    load_config,
    tables_from_definition,
)
from .behaviors import Behavior, ConfigurationError, TimestampableBehavior
from .registry import (
    BehaviorRegistry,
    create_behavior,
    get_registry,
    list_behaviors,
    register_behavior,
)
from .utils import load_schema_definition

__version__ = "0.1.0"


def generate_from_definition(definition, config=None) -> GenerationResult:
    """
    Generate code from a parsed schema definition.

    Args:
        definition: Parsed JSON schema definition
        config: GeneratorConfig or dict of overrides

    Returns:
        GenerationResult with generated files
    """
    if not isinstance(config, GeneratorConfig):
        config = load_config(custom_config=config)

    tables = tables_from_definition(definition)
    return generate_code(tables, config)


__all__ = [
    "Behavior",
    "BehaviorRegistry",
    "Column",
    "ColumnType",
    "ConfigurationError",
    "Contribution",
    "GenerationResult",
    "GeneratorConfig",
    "HookPoint",
    "Table",
    "TimestampableBehavior",
    "create_behavior",
    "generate_code",
    "generate_from_definition",
    "generate_table",
    "get_registry",
    "list_behaviors",
    "load_config",
    "load_schema_definition",
    "register_behavior",
    "tables_from_definition",
]
