"""
Selection of the timestamp expression written into generated code.

The choice between a whole-second epoch and a high-precision timestamp is
made here, at generation time; the generated class only ever contains the
selected expression.
"""

from enum import Enum
from typing import Iterable, Set

from ...core.schema import Column


class TimestampSource(Enum):
    """Where a generated timestamp value comes from."""

    EPOCH = "epoch"
    HIGH_PRECISION = "high_precision"

    @property
    def expression(self) -> str:
        """Inline expression producing the current time."""
        if self is TimestampSource.EPOCH:
            return "int(time.time())"
        return "DateTimeUtil.create_high_precision()"

    @property
    def variable(self) -> str:
        """Local name used when the value is captured once per hook."""
        if self is TimestampSource.EPOCH:
            return "now"
        return "high_precision_now"

    def import_statement(self, runtime_package: str) -> str:
        if self is TimestampSource.EPOCH:
            return "import time"
        return f"from {runtime_package}.util import DateTimeUtil"


def select_timestamp_source(column: Column, high_precision: bool) -> TimestampSource:
    """
    Pick the timestamp source for a column.

    An INTEGER column cannot hold sub-second precision, so it always gets
    the epoch form, even when high precision was requested.
    """
    if column.type.is_integer or not high_precision:
        return TimestampSource.EPOCH
    return TimestampSource.HIGH_PRECISION


def value_expression(column: Column, high_precision: bool) -> str:
    """Inline Python expression for the column's current-time value."""
    return select_timestamp_source(column, high_precision).expression


def imports_for(sources: Iterable[TimestampSource], runtime_package: str) -> Set[str]:
    return {source.import_statement(runtime_package) for source in sources}
