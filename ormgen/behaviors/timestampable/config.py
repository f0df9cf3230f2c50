"""
Typed configuration for the timestampable behavior.
"""

from dataclasses import dataclass
from typing import Mapping, Optional

from ...core.schema import ColumnType, SchemaError
from ..parameters import ConfigurationError, parse_boolean

DEFAULT_PARAMETERS = {
    "create_column": "created_at",
    "update_column": "updated_at",
    "disable_created_at": "false",
    "disable_updated_at": "false",
    "enable_high_precision": "false",
    "date_type": "DATETIME",
}


@dataclass(frozen=True)
class TimestampableConfig:
    """Parsed timestampable parameters."""

    create_column: str = "created_at"
    update_column: str = "updated_at"
    with_created_at: bool = True
    with_updated_at: bool = True
    high_precision: bool = False
    date_type: ColumnType = ColumnType.DATETIME

    @classmethod
    def from_resolved(
        cls, parameters: Mapping[str, str], table_name: Optional[str] = None
    ) -> "TimestampableConfig":
        """
        Parse resolved string parameters.

        Raises:
            ConfigurationError: On an unrecognized boolean literal, an
                unknown date type or an empty column name
        """
        for name in ("create_column", "update_column"):
            if not parameters[name].strip():
                raise ConfigurationError(
                    "Column name must not be empty", table_name=table_name, parameter=name
                )

        try:
            date_type = ColumnType.from_string(parameters["date_type"])
        except SchemaError as e:
            raise ConfigurationError(
                str(e), table_name=table_name, parameter="date_type"
            ) from e

        return cls(
            create_column=parameters["create_column"],
            update_column=parameters["update_column"],
            with_created_at=not parse_boolean(
                "disable_created_at", parameters["disable_created_at"], table_name
            ),
            with_updated_at=not parse_boolean(
                "disable_updated_at", parameters["disable_updated_at"], table_name
            ),
            high_precision=parse_boolean(
                "enable_high_precision", parameters["enable_high_precision"], table_name
            ),
            date_type=date_type,
        )
