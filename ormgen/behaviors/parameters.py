"""
Behavior parameter resolution.

Behavior parameters are string-valued. A behavior declares defaults, the
schema definition supplies overrides, and ``resolve_parameters`` merges
the two into a read-only ``ResolvedConfig``.
"""

from typing import Dict, Iterator, Mapping, Optional

TRUE_LITERAL = "true"
FALSE_LITERAL = "false"


class ConfigurationError(Exception):
    """Exception raised for misconfigured behavior parameters."""

    def __init__(
        self,
        message: str,
        table_name: Optional[str] = None,
        parameter: Optional[str] = None,
    ):
        self.table_name = table_name
        self.parameter = parameter
        location = []
        if table_name:
            location.append(f"table '{table_name}'")
        if parameter:
            location.append(f"parameter '{parameter}'")
        if location:
            message = f"{message} ({', '.join(location)})"
        super().__init__(message)


class ResolvedConfig(Mapping[str, str]):
    """Read-only view of a behavior's parameters after defaults are applied."""

    def __init__(self, values: Mapping[str, str]):
        self._values = dict(values)

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ResolvedConfig({self._values!r})"

    def is_enabled(self, key: str) -> bool:
        """Boolean value of a parameter, using the canonical predicate."""
        return is_true(self._values[key])


def resolve_parameters(
    defaults: Mapping[str, str], overrides: Optional[Mapping[str, str]] = None
) -> ResolvedConfig:
    """
    Merge overrides onto defaults.

    Overrides win; keys unknown to the defaults are kept as-is. Every
    default key is present in the result.
    """
    merged: Dict[str, str] = dict(defaults)
    if overrides:
        merged.update(overrides)
    return ResolvedConfig(merged)


def is_true(value: str) -> bool:
    """The one boolean predicate for parameters: exactly ``"true"``."""
    return value == TRUE_LITERAL


def parse_boolean(
    name: str, value: str, table_name: Optional[str] = None
) -> bool:
    """
    Parse a boolean parameter, rejecting anything but the two literals.

    Raises:
        ConfigurationError: If value is neither "true" nor "false"
    """
    if value not in (TRUE_LITERAL, FALSE_LITERAL):
        raise ConfigurationError(
            f"Invalid boolean value {value!r}, expected 'true' or 'false'",
            table_name=table_name,
            parameter=name,
        )
    return is_true(value)
