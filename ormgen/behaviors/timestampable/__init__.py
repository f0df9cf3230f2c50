"""
Timestampable behavior module.

Tracks creation and last modification dates of generated model objects.
"""

from .behavior import TimestampableBehavior
from .config import DEFAULT_PARAMETERS, TimestampableConfig
from .timestamps import TimestampSource, select_timestamp_source, value_expression

__all__ = [
    "TimestampableBehavior",
    "TimestampableConfig",
    "DEFAULT_PARAMETERS",
    "TimestampSource",
    "select_timestamp_source",
    "value_expression",
]
