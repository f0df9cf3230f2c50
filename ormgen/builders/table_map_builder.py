"""
Table map builder.

Generates the class holding the table's column constants and types. It
has no hook points but reflects the columns added by behaviors.
"""

from pathlib import Path
from typing import Any, Dict

from ..core.contribution import ComposedHook, HookPoint
from ..core.generator import ClassBuilder


class TableMapBuilder(ClassBuilder):
    """Builds ``<Table>TableMap``."""

    template_name = "table_map.py.j2"

    @property
    def class_name(self) -> str:
        return self.table_map_class_name

    def get_template_directory(self) -> Path:
        return Path(__file__).parent / "templates"

    def get_template_context(self, hooks: Dict[HookPoint, ComposedHook]) -> Dict[str, Any]:
        columns = [
            {
                "constant": column.constant_name,
                "qualified_name": f"{self.table.name}.{column.name}",
                "name": column.name,
                "property": column.property_name,
                "type": column.type.value,
                "primary_key": column.primary_key,
            }
            for column in self.table.columns
        ]
        return {"columns": columns}
