"""
Core schema representation for code generation.

Tables and columns as seen by behaviors and class builders, plus the
conversion from a parsed schema definition into that representation.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Iterator, TYPE_CHECKING
from enum import Enum

from .naming import (
    sanitize_python_class_name,
    sanitize_python_field_name,
    sanitize_constant_name,
)

if TYPE_CHECKING:
    from ..behaviors.base import Behavior


class SchemaError(Exception):
    """Exception raised for malformed schema definitions."""

    pass


class ColumnType(Enum):
    """Declared storage types understood by the generator."""

    BOOLEAN = "BOOLEAN"
    TINYINT = "TINYINT"
    SMALLINT = "SMALLINT"
    INTEGER = "INTEGER"
    BIGINT = "BIGINT"
    FLOAT = "FLOAT"
    DOUBLE = "DOUBLE"
    REAL = "REAL"
    DECIMAL = "DECIMAL"
    NUMERIC = "NUMERIC"
    CHAR = "CHAR"
    VARCHAR = "VARCHAR"
    LONGVARCHAR = "LONGVARCHAR"
    CLOB = "CLOB"
    BLOB = "BLOB"
    DATE = "DATE"
    TIME = "TIME"
    TIMESTAMP = "TIMESTAMP"
    DATETIME = "DATETIME"

    @classmethod
    def from_string(cls, value: str) -> "ColumnType":
        """Parse a type name, case-insensitively."""
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise SchemaError(f"Unknown column type '{value}'. Valid types: {valid}")

    @property
    def is_integer(self) -> bool:
        """Whether this is the plain integer kind (whole seconds only)."""
        return self is ColumnType.INTEGER

    @property
    def is_temporal(self) -> bool:
        return self in _TEMPORAL_TYPES


_TEMPORAL_TYPES = frozenset(
    {ColumnType.DATE, ColumnType.TIME, ColumnType.TIMESTAMP, ColumnType.DATETIME}
)


@dataclass
class Column:
    """Represents a single column of a table."""

    name: str
    type: ColumnType
    primary_key: bool = False
    required: bool = False
    description: Optional[str] = None

    @property
    def property_name(self) -> str:
        """Accessor identifier on generated classes (``created_at``)."""
        return sanitize_python_field_name(self.name)

    @property
    def constant_name(self) -> str:
        """Column constant on the generated table map (``COL_CREATED_AT``)."""
        return f"COL_{sanitize_constant_name(self.name)}"

    @property
    def setter_name(self) -> str:
        return f"set_{self.property_name}"

    @property
    def getter_name(self) -> str:
        return f"get_{self.property_name}"


@dataclass
class Table:
    """
    A named schema entity owning an ordered, unique-by-name set of columns.

    Behaviors attached to the table may add columns during the augmentation
    pass; columns are never removed or renamed.
    """

    name: str
    description: Optional[str] = None
    _columns: Dict[str, Column] = field(default_factory=dict, repr=False)
    behaviors: List["Behavior"] = field(default_factory=list, repr=False)

    @property
    def class_name(self) -> str:
        """Generated class name for this table (``Article``)."""
        return sanitize_python_class_name(self.name)

    @property
    def columns(self) -> List[Column]:
        """Columns in declaration order."""
        return list(self._columns.values())

    def __iter__(self) -> Iterator[Column]:
        return iter(self._columns.values())

    def has_column(self, name: str) -> bool:
        """Check if a column with this name exists."""
        return name in self._columns

    def get_column(self, name: str) -> Optional[Column]:
        """Get column by name."""
        return self._columns.get(name)

    def add_column(self, column: Column) -> Column:
        """
        Add a column to this table.

        Adding a column whose name already exists is a no-op; the existing
        column is kept and returned.
        """
        existing = self._columns.get(column.name)
        if existing is not None:
            return existing
        self._columns[column.name] = column
        return column

    def find_identifier_clash(self, column: Column) -> Optional[Column]:
        """
        Return an existing column that would generate the same identifiers.

        Two differently named columns clash when they share a property name
        (accessors) or a constant name (``COL_<NAME>`` on the table map),
        e.g. ``createdAt`` and ``created_at``.
        """
        for existing in self._columns.values():
            if existing.name == column.name:
                continue
            if (
                existing.property_name == column.property_name
                or existing.constant_name == column.constant_name
            ):
                return existing
        return None

    def check_identifiers(self) -> None:
        """
        Raises:
            SchemaError: If two columns generate the same identifiers
        """
        checked = Table(name=self.name)
        for column in self._columns.values():
            clash = checked.find_identifier_clash(column)
            if clash is not None:
                raise SchemaError(
                    f"Columns '{clash.name}' and '{column.name}' of table "
                    f"'{self.name}' generate the same identifier "
                    f"'{column.property_name}' / {column.constant_name}"
                )
            checked.add_column(column)

    def add_behavior(self, behavior: "Behavior") -> "Behavior":
        """Attach a behavior, preserving attachment order."""
        behavior.table = self
        self.behaviors.append(behavior)
        return behavior

    def get_behavior(self, name: str) -> Optional["Behavior"]:
        for behavior in self.behaviors:
            if behavior.name == name:
                return behavior
        return None


def _parse_flag(value: Any, context: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value in ("true", "false"):
        return value == "true"
    raise SchemaError(f"Expected a boolean for {context}, got {value!r}")


def _parameter_to_string(value: Any) -> str:
    """Behavior parameters are strings; JSON booleans map to their literals."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def tables_from_definition(
    definition: Dict[str, Any], behavior_factory=None
) -> List[Table]:
    """
    Convert a parsed schema definition into Table objects.

    The definition looks like::

        {"tables": [{"name": "article",
                     "columns": [{"name": "id", "type": "INTEGER",
                                  "primary_key": true}],
                     "behaviors": [{"name": "timestampable",
                                    "parameters": {"date_type": "TIMESTAMP"}}]}]}

    Args:
        definition: Parsed schema definition
        behavior_factory: Callable ``(name, parameters) -> Behavior``;
            defaults to the global behavior registry

    Returns:
        Tables in definition order, with behaviors attached

    Raises:
        SchemaError: If the definition is malformed or two columns of a
            table would generate the same identifiers
    """
    if behavior_factory is None:
        from ..registry import create_behavior

        behavior_factory = create_behavior

    if not isinstance(definition, dict) or not isinstance(
        definition.get("tables"), list
    ):
        raise SchemaError("Schema definition must be an object with a 'tables' list")

    tables = []
    seen_names = set()

    for index, table_data in enumerate(definition["tables"]):
        if not isinstance(table_data, dict) or not table_data.get("name"):
            raise SchemaError(f"Table #{index} must be an object with a 'name'")

        table_name = table_data["name"]
        if table_name in seen_names:
            raise SchemaError(f"Duplicate table name: {table_name}")
        seen_names.add(table_name)

        table = Table(name=table_name, description=table_data.get("description"))

        for column_data in table_data.get("columns", []):
            if not isinstance(column_data, dict) or not column_data.get("name"):
                raise SchemaError(f"Column in table '{table_name}' must have a 'name'")
            column_name = column_data["name"]
            if table.has_column(column_name):
                raise SchemaError(
                    f"Duplicate column '{column_name}' in table '{table_name}'"
                )
            context = f"{table_name}.{column_name}"
            table.add_column(
                Column(
                    name=column_name,
                    type=ColumnType.from_string(column_data.get("type", "VARCHAR")),
                    primary_key=_parse_flag(
                        column_data.get("primary_key", False), f"{context}.primary_key"
                    ),
                    required=_parse_flag(
                        column_data.get("required", False), f"{context}.required"
                    ),
                    description=column_data.get("description"),
                )
            )

        table.check_identifiers()

        for behavior_data in table_data.get("behaviors", []):
            if isinstance(behavior_data, str):
                behavior_data = {"name": behavior_data}
            if not isinstance(behavior_data, dict) or not behavior_data.get("name"):
                raise SchemaError(f"Behavior in table '{table_name}' must have a 'name'")
            parameters = behavior_data.get("parameters", {}) or {}
            if not isinstance(parameters, dict):
                raise SchemaError(
                    f"Parameters of behavior '{behavior_data['name']}' in table "
                    f"'{table_name}' must be an object"
                )
            behavior = behavior_factory(
                behavior_data["name"],
                {key: _parameter_to_string(value) for key, value in parameters.items()},
            )
            table.add_behavior(behavior)

        tables.append(table)

    return tables
