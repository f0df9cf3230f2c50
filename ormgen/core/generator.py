"""
Base class builder and the per-table generation pass.

A class builder renders one generated source file for a table. Behavior
contributions are collected per hook point, composed in attachment order
and spliced into the builder's template.
"""

import ast
import re
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Any, Optional, Sequence, Tuple, Type

from ..logging_config import get_logger
from .config import GeneratorConfig
from .contribution import ComposedHook, ContributionError, HookPoint, compose
from .naming import NamingCase, NameSanitizer
from .schema import Column, SchemaError, Table
from .templates import TemplateEngine, TemplateError, get_shared_template_engine

logger = get_logger(__name__)

_file_name_sanitizer = NameSanitizer()

_EXTRA_BLANK_LINES = re.compile(r"\n{4,}")


class GeneratorError(Exception):
    """Raised when a builder produces an invalid file."""

    pass


class ClassBuilder(ABC):
    """Abstract base class for all class builders."""

    #: Hook points this builder splices behavior contributions into
    hook_points: Tuple[HookPoint, ...] = ()

    #: Template rendering the whole file
    template_name: str = ""

    def __init__(self, table: Table, config: Optional[GeneratorConfig] = None):
        """Initialize builder for a table."""
        self.table = table
        self.config = config or GeneratorConfig()
        self._template_engine = None

    @property
    @abstractmethod
    def class_name(self) -> str:
        """Name of the generated class."""
        pass

    @staticmethod
    def module_name_for(class_name: str) -> str:
        """Module name a generated class lives in (``article_query``)."""
        return _file_name_sanitizer.sanitize_name(class_name, NamingCase.SNAKE_CASE)

    @property
    def file_name(self) -> str:
        """Name of the generated file (``article_query.py``)."""
        return f"{self.module_name_for(self.class_name)}.py"

    @property
    def table_map_class_name(self) -> str:
        return f"{self.table.class_name}TableMap"

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this builder.

        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Engine shared by every builder using the same template directory."""
        if self._template_engine is None:
            self._template_engine = get_shared_template_engine(self.get_template_directory())
        return self._template_engine

    def get_column_constant(self, column: Column) -> str:
        """Expression referencing a column constant on the table map."""
        return f"{self.table_map_class_name}.{column.constant_name}"

    def collect_hooks(self) -> Dict[HookPoint, ComposedHook]:
        """Ask every behavior of the table for each of this builder's hooks."""
        return {
            hook: compose(self.table.behaviors, hook, self)
            for hook in self.hook_points
        }

    def get_import_statements(self, hooks: Dict[HookPoint, ComposedHook]) -> List[str]:
        """
        Imports needed by the generated file.

        Plain ``import`` statements come first, then absolute ``from``
        imports, then relative ones.
        """
        statements = set(self.get_base_imports())
        for composed in hooks.values():
            statements.update(composed.imports)

        def sort_key(statement: str):
            if statement.startswith("import "):
                group = 0
            elif statement.startswith("from ."):
                group = 2
            else:
                group = 1
            return group, statement

        return sorted(statements, key=sort_key)

    def get_base_imports(self) -> List[str]:
        """Imports the builder's own template relies on."""
        return []

    @abstractmethod
    def get_template_context(self, hooks: Dict[HookPoint, ComposedHook]) -> Dict[str, Any]:
        """Template variables for the generated file."""
        pass

    def build(self) -> str:
        """
        Generate the source file for the table.

        Raises:
            GeneratorError: If the assembled file is not valid Python
        """
        hooks = self.collect_hooks()
        context = {
            "table": self.table,
            "class_name": self.class_name,
            "table_map_class": self.table_map_class_name,
            "imports": self.get_import_statements(hooks),
            "add_comments": self.config.add_comments,
        }
        context.update(self.get_template_context(hooks))

        code = self.format_code(self.template_engine.render_template(self.template_name, context))

        try:
            ast.parse(code)
        except SyntaxError as e:
            raise GeneratorError(
                f"Generated {self.file_name} for table '{self.table.name}' is invalid: "
                f"{e.msg} (line {e.lineno})"
            ) from e

        return code

    def format_code(self, code: str) -> str:
        """
        Normalize whitespace in rendered code.

        Trailing spaces are dropped, runs of blank lines are capped at two
        and the file ends with exactly one newline.
        """
        cleaned = "\n".join(line.rstrip() for line in code.splitlines())
        cleaned = _EXTRA_BLANK_LINES.sub("\n\n\n", cleaned)
        return cleaned.strip("\n") + "\n"


@dataclass
class GenerationResult:
    """Outcome of a generation run."""

    #: Generated sources, keyed by table name then file name
    files: Dict[str, Dict[str, str]] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    success: bool = True
    error_message: Optional[str] = None
    exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Optional[Exception] = None) -> "GenerationResult":
        """Failed run: no files, the message and the exception that caused it."""
        return cls(success=False, error_message=message, exception=exception)


def default_builder_classes() -> List[Type[ClassBuilder]]:
    """Builders run for every table, in output order."""
    from ..builders import ObjectBuilder, QueryBuilder, TableMapBuilder

    return [TableMapBuilder, ObjectBuilder, QueryBuilder]


def augment_table(table: Table) -> None:
    """Run every attached behavior's schema augmentation, in order."""
    for behavior in table.behaviors:
        logger.debug("Augmenting table %s with behavior %s", table.name, behavior.name)
        behavior.augment_schema(table)


def generate_table(
    table: Table,
    config: Optional[GeneratorConfig] = None,
    builder_classes: Optional[Sequence[Type[ClassBuilder]]] = None,
) -> Dict[str, str]:
    """
    Run the full generation pass for one table.

    Schema augmentation completes before any hook is queried. Nothing is
    returned unless every builder succeeds.

    Returns:
        Mapping of file name to generated source
    """
    config = config or GeneratorConfig()
    augment_table(table)
    table.check_identifiers()

    files = {}
    for builder_class in builder_classes or default_builder_classes():
        builder = builder_class(table, config)
        files[builder.file_name] = builder.build()
        logger.info("Generated %s for table %s", builder.file_name, table.name)

    return files


def check_output_names(
    tables: Sequence[Table],
    config: GeneratorConfig,
    builder_classes: Optional[Sequence[Type[ClassBuilder]]] = None,
) -> None:
    """
    Make sure no two tables generate the same file or class.

    Table ``article_query`` would otherwise write its object class over the
    query class of table ``article``.

    Raises:
        GeneratorError: Naming both tables on the first clash
    """
    owners: Dict[Tuple[str, str], Tuple[str, str]] = {}

    for table in tables:
        for builder_class in builder_classes or default_builder_classes():
            builder = builder_class(table, config)
            # Output directories may be case-insensitive
            outputs = (("file", builder.file_name.lower()), ("class", builder.class_name))
            for kind, name in outputs:
                owner = owners.setdefault((kind, name), (table.name, builder_class.__name__))
                if owner[0] != table.name:
                    raise GeneratorError(
                        f"Tables '{owner[0]}' and '{table.name}' both generate "
                        f"{kind} '{name}' ({owner[1]} and {builder_class.__name__})"
                    )


def generate_tables(
    tables: Sequence[Table],
    config: Optional[GeneratorConfig] = None,
    builder_classes: Optional[Sequence[Type[ClassBuilder]]] = None,
) -> Dict[str, Dict[str, str]]:
    """
    Generate every table, optionally in parallel.

    Tables share no mutable state, so with ``config.max_workers > 1`` they
    are generated on a thread pool. The first failure is raised.

    Returns:
        Mapping of table name to that table's generated files
    """
    config = config or GeneratorConfig()
    check_output_names(tables, config, builder_classes)

    if config.max_workers <= 1 or len(tables) <= 1:
        return {
            table.name: generate_table(table, config, builder_classes)
            for table in tables
        }

    with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
        futures = [
            (table.name, executor.submit(generate_table, table, config, builder_classes))
            for table in tables
        ]
        return {name: future.result() for name, future in futures}


def validate_tables(tables: Sequence[Table]) -> List[str]:
    """
    Check tables for structural issues that do not stop generation.

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    for table in tables:
        if not table.columns and not table.behaviors:
            warnings.append(f"Table '{table.name}' has no columns")
        elif table.columns and not any(column.primary_key for column in table.columns):
            warnings.append(f"Table '{table.name}' has no primary key")

        for behavior in table.behaviors:
            unknown = sorted(set(behavior.parameters) - set(behavior.default_parameters))
            if unknown:
                warnings.append(
                    f"Behavior '{behavior.name}' on table '{table.name}' has unknown "
                    f"parameters: {', '.join(unknown)}"
                )

    return warnings


def generate_code(
    tables: Sequence[Table],
    config: Optional[GeneratorConfig] = None,
    builder_classes: Optional[Sequence[Type[ClassBuilder]]] = None,
) -> GenerationResult:
    """
    Generate code for all tables with error handling.

    Args:
        tables: Tables with behaviors attached
        config: Generator configuration
        builder_classes: Builders to run (defaults to all)

    Returns:
        GenerationResult with generated files, warnings, and metadata
    """
    # Imported here to avoid a cycle with the behaviors package
    from ..behaviors.parameters import ConfigurationError

    config = config or GeneratorConfig()

    try:
        warnings = validate_tables(tables)

        files = generate_tables(tables, config, builder_classes)

        metadata = {
            "table_count": len(tables),
            "file_count": sum(len(table_files) for table_files in files.values()),
            "behaviors": sorted(
                {behavior.name for table in tables for behavior in table.behaviors}
            ),
            "columns": {table.name: [c.name for c in table.columns] for table in tables},
        }

        return GenerationResult(files, warnings, metadata)

    except (
        ConfigurationError,
        ContributionError,
        GeneratorError,
        SchemaError,
        TemplateError,
    ) as e:
        logger.error("Code generation failed: %s", e)
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)
