"""
Behaviors that augment table schemas and contribute generated code.
"""

from .base import Behavior
from .parameters import (
    ConfigurationError,
    ResolvedConfig,
    is_true,
    parse_boolean,
    resolve_parameters,
)
from .timestampable import TimestampableBehavior

__all__ = [
    "Behavior",
    "ConfigurationError",
    "ResolvedConfig",
    "is_true",
    "parse_boolean",
    "resolve_parameters",
    "TimestampableBehavior",
]
