"""
Core code generation components.

Provides the schema model, hook point contract and base class builder
used by all behaviors and builders.
"""

from .generator import (
    ClassBuilder,
    GeneratorError,
    GenerationResult,
    augment_table,
    generate_code,
    generate_table,
    generate_tables,
)
from .contribution import (
    ComposedHook,
    Contribution,
    ContributionError,
    HookPoint,
    compose,
)
from .schema import Column, ColumnType, SchemaError, Table, tables_from_definition
from .naming import NameSanitizer, NamingCase
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Builders and the generation pass
    "ClassBuilder",
    "GeneratorError",
    "GenerationResult",
    "augment_table",
    "generate_code",
    "generate_table",
    "generate_tables",
    # Hook point contract
    "ComposedHook",
    "Contribution",
    "ContributionError",
    "HookPoint",
    "compose",
    # Schema model
    "Column",
    "ColumnType",
    "SchemaError",
    "Table",
    "tables_from_definition",
    # Naming utilities
    "NameSanitizer",
    "NamingCase",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
