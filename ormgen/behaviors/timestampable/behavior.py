"""
Timestampable behavior.

Gives a model class the ability to track creation and last modification
dates, using two additional columns storing the creation and update date.
"""

from typing import Any, Dict, List

from ...core.contribution import Contribution, HookPoint
from ...core.schema import Column, Table
from ...logging_config import get_logger
from ..base import Behavior, Contributor
from ..parameters import ConfigurationError
from .config import DEFAULT_PARAMETERS, TimestampableConfig
from .templates import get_template_engine
from .timestamps import TimestampSource, imports_for, select_timestamp_source

logger = get_logger(__name__)


class TimestampableBehavior(Behavior):
    """Keeps ``created_at``/``updated_at`` style columns up to date."""

    name = "timestampable"
    default_parameters = DEFAULT_PARAMETERS

    def __init__(self, parameters=None):
        super().__init__(parameters)
        self._config = None

    @property
    def config(self) -> TimestampableConfig:
        """Typed view of the parameters, parsed on first use."""
        if self._config is None:
            table_name = self.table.name if self.table else None
            self._config = TimestampableConfig.from_resolved(self.parameters, table_name)
        return self._config

    def with_created_at(self) -> bool:
        return self.config.with_created_at

    def with_updated_at(self) -> bool:
        return self.config.with_updated_at

    def with_high_precision(self) -> bool:
        return self.config.high_precision

    # Schema augmentation

    def augment_schema(self, table: Table) -> None:
        """Add the create and update columns unless the table already has them."""
        config = self.config

        wanted = []
        if config.with_created_at:
            wanted.append(("create_column", config.create_column))
        if config.with_updated_at:
            wanted.append(("update_column", config.update_column))

        for parameter, column_name in wanted:
            if table.has_column(column_name):
                logger.debug(
                    "Table %s already has column %s, leaving it as declared",
                    table.name,
                    column_name,
                )
                continue
            column = Column(name=column_name, type=config.date_type)
            clash = table.find_identifier_clash(column)
            if clash is not None:
                raise ConfigurationError(
                    f"Column '{column_name}' would generate the same accessors as "
                    f"existing column '{clash.name}'",
                    table_name=table.name,
                    parameter=parameter,
                )
            table.add_column(column)
            logger.debug(
                "Added column %s (%s) to table %s",
                column_name,
                config.date_type.value,
                table.name,
            )

    # Hook contributions

    def contributors(self) -> Dict[HookPoint, Contributor]:
        return {
            HookPoint.OBJECT_ATTRIBUTES: self.object_attributes,
            HookPoint.PRE_INSERT: self.pre_insert,
            HookPoint.PRE_UPDATE: self.pre_update,
            HookPoint.OBJECT_METHODS: self.object_methods,
            HookPoint.QUERY_METHODS: self.query_methods,
        }

    def object_attributes(self, builder) -> Contribution:
        hook = HookPoint.OBJECT_ATTRIBUTES
        if not self.with_updated_at():
            return Contribution.empty(hook, self.name)

        return self._render(hook, {})

    def pre_insert(self, builder) -> Contribution:
        """
        Set the create and update columns on insert.

        Each column is only set when the caller did not set it explicitly.
        The current time is captured once so both columns get the same value.
        """
        hook = HookPoint.PRE_INSERT
        parameters = []
        if self.with_created_at():
            parameters.append("create_column")
        if self.with_updated_at():
            parameters.append("update_column")

        if not parameters:
            return Contribution.empty(hook, self.name)

        columns = []
        sources: List[TimestampSource] = []
        for parameter in parameters:
            column = self.get_column_for_parameter(parameter)
            source = select_timestamp_source(column, self.with_high_precision())
            if source not in sources:
                sources.append(source)
            columns.append(self._column_context(column, builder, source.variable))

        return self._render(
            hook,
            {"sources": sources, "columns": columns},
            imports_for(sources, builder.config.runtime_package),
        )

    def pre_update(self, builder) -> Contribution:
        """
        Touch the update column on save.

        Skipped when nothing changed, when keep_update_date_unchanged() was
        called, or when the update column was set explicitly.
        """
        hook = HookPoint.PRE_UPDATE
        if not self.with_updated_at():
            return Contribution.empty(hook, self.name)

        column = self.get_column_for_parameter("update_column")
        source = select_timestamp_source(column, self.with_high_precision())

        return self._render(
            hook,
            {"column": self._column_context(column, builder, source.expression)},
            imports_for([source], builder.config.runtime_package),
        )

    def object_methods(self, builder) -> Contribution:
        hook = HookPoint.OBJECT_METHODS
        if not self.with_updated_at():
            return Contribution.empty(hook, self.name)

        return self._render(hook, {"add_comments": builder.config.add_comments})

    def query_methods(self, builder) -> Contribution:
        hook = HookPoint.QUERY_METHODS
        methods = []

        if self.with_updated_at():
            constant = builder.get_column_constant(
                self.get_column_for_parameter("update_column")
            )
            methods.extend(
                [
                    {
                        "kind": "recent",
                        "name": "recently_updated",
                        "constant": constant,
                        "summary": "Filter by the latest updated.",
                        "argument": "Maximum age of the latest update in days",
                    },
                    {
                        "kind": "desc",
                        "name": "last_updated_first",
                        "constant": constant,
                        "summary": "Order by update date desc.",
                    },
                    {
                        "kind": "asc",
                        "name": "first_updated_first",
                        "constant": constant,
                        "summary": "Order by update date asc.",
                    },
                ]
            )

        if self.with_created_at():
            constant = builder.get_column_constant(
                self.get_column_for_parameter("create_column")
            )
            methods.extend(
                [
                    {
                        "kind": "desc",
                        "name": "last_created_first",
                        "constant": constant,
                        "summary": "Order by create date desc.",
                    },
                    {
                        "kind": "recent",
                        "name": "recently_created",
                        "constant": constant,
                        "summary": "Filter by the latest created.",
                        "argument": "Maximum age of the creation in days",
                    },
                    {
                        "kind": "asc",
                        "name": "first_created_first",
                        "constant": constant,
                        "summary": "Order by create date asc.",
                    },
                ]
            )

        if not methods:
            return Contribution.empty(hook, self.name)

        imports = set()
        if any(method["kind"] == "recent" for method in methods):
            runtime_package = builder.config.runtime_package
            imports = {"import time", f"from {runtime_package}.query import Criteria"}

        return self._render(
            hook,
            {"methods": methods, "add_comments": builder.config.add_comments},
            imports,
        )

    # Helpers

    def _column_context(self, column: Column, builder, value: str) -> Dict[str, Any]:
        return {
            "constant": builder.get_column_constant(column),
            "setter": column.setter_name,
            "value": value,
        }

    def _render(self, hook: HookPoint, context: Dict[str, Any], imports=()) -> Contribution:
        code = get_template_engine().render_template(
            f"timestampable/{hook.value}.py.j2", context
        )
        return Contribution(hook=hook, code=code, behavior=self.name, imports=frozenset(imports))
