"""
Query builder.

Generates the query class for a table; behaviors contribute query
methods.
"""

from pathlib import Path
from typing import Any, Dict, List

from ..core.contribution import ComposedHook, HookPoint
from ..core.generator import ClassBuilder


class QueryBuilder(ClassBuilder):
    """Builds ``<Table>Query``."""

    hook_points = (HookPoint.QUERY_METHODS,)
    template_name = "query.py.j2"

    @property
    def class_name(self) -> str:
        return f"{self.table.class_name}Query"

    def get_template_directory(self) -> Path:
        return Path(__file__).parent / "templates"

    def get_base_imports(self) -> List[str]:
        table_map_module = self.module_name_for(self.table_map_class_name)
        return [
            f"from {self.config.runtime_package}.query import {self.config.query_base_class}",
            f"from .{table_map_module} import {self.table_map_class_name}",
        ]

    def get_template_context(self, hooks: Dict[HookPoint, ComposedHook]) -> Dict[str, Any]:
        return {
            "base_class": self.config.query_base_class,
            "methods": hooks[HookPoint.QUERY_METHODS].code,
        }
