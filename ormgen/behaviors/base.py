"""
Base behavior interface.

A behavior is a named, configurable extension attached to one table. It
can add columns to the table (``augment_schema``) and contribute code at
the hook points of the generated classes (``contribute``).
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Mapping, Optional

from ..core.contribution import Contribution, HookPoint
from ..core.schema import Column, Table
from .parameters import ConfigurationError, ResolvedConfig, resolve_parameters

Contributor = Callable[[object], Contribution]


class Behavior(ABC):
    """Abstract base class for all behaviors."""

    #: Registry name of the behavior
    name: str = ""

    #: Compiled-in parameter defaults
    default_parameters: Mapping[str, str] = {}

    def __init__(self, parameters: Optional[Mapping[str, str]] = None):
        """
        Initialize behavior with parameter overrides from the schema.

        Args:
            parameters: Parameter overrides; unknown keys are kept
        """
        self._overrides = dict(parameters or {})
        self._resolved: Optional[ResolvedConfig] = None
        self.table: Optional[Table] = None

    @property
    def parameters(self) -> ResolvedConfig:
        """Resolved parameters; fixed after first access."""
        if self._resolved is None:
            self._resolved = resolve_parameters(self.default_parameters, self._overrides)
        return self._resolved

    def get_parameter(self, name: str) -> str:
        try:
            return self.parameters[name]
        except KeyError:
            raise ConfigurationError(
                f"Unknown parameter for behavior '{self.name}'",
                table_name=self.table.name if self.table else None,
                parameter=name,
            )

    def get_table(self) -> Table:
        if self.table is None:
            raise ConfigurationError(f"Behavior '{self.name}' is not attached to a table")
        return self.table

    def get_column_for_parameter(self, parameter: str) -> Column:
        """
        Dereference a column named by a parameter.

        Raises:
            ConfigurationError: If the table has no such column
        """
        table = self.get_table()
        column_name = self.get_parameter(parameter)
        column = table.get_column(column_name)
        if column is None:
            raise ConfigurationError(
                f"Column '{column_name}' not found", table_name=table.name, parameter=parameter
            )
        return column

    @abstractmethod
    def augment_schema(self, table: Table) -> None:
        """Add this behavior's columns to the table. Must be idempotent."""
        pass

    def contributors(self) -> Dict[HookPoint, Contributor]:
        """Map of hook point to the method producing its contribution."""
        return {}

    def contribute(self, hook: HookPoint, builder) -> Contribution:
        """
        Return this behavior's contribution for a hook point.

        Hook points without a contributor get an empty contribution.
        """
        contributor = self.contributors().get(hook)
        if contributor is None:
            return Contribution.empty(hook, self.name)
        return contributor(builder)

    def __repr__(self) -> str:
        table = self.table.name if self.table else None
        return f"{type(self).__name__}(table={table!r}, parameters={dict(self.parameters)!r})"
