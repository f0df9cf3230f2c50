"""
Object builder.

Generates the active record class for a table. Behaviors contribute class
attributes, pre-insert and pre-update code, and instance methods.
"""

from pathlib import Path
from typing import Any, Dict, List

from ..core.contribution import ComposedHook, HookPoint
from ..core.generator import ClassBuilder


class ObjectBuilder(ClassBuilder):
    """Builds the ``<Table>`` active record class."""

    hook_points = (
        HookPoint.OBJECT_ATTRIBUTES,
        HookPoint.PRE_INSERT,
        HookPoint.PRE_UPDATE,
        HookPoint.OBJECT_METHODS,
    )
    template_name = "object.py.j2"

    @property
    def class_name(self) -> str:
        return self.table.class_name

    def get_template_directory(self) -> Path:
        return Path(__file__).parent / "templates"

    def get_base_imports(self) -> List[str]:
        table_map_module = self.module_name_for(self.table_map_class_name)
        return [
            f"from {self.config.runtime_package}.om import {self.config.object_base_class}",
            f"from .{table_map_module} import {self.table_map_class_name}",
        ]

    def get_template_context(self, hooks: Dict[HookPoint, ComposedHook]) -> Dict[str, Any]:
        return {
            "base_class": self.config.object_base_class,
            "columns": self.table.columns,
            "attributes": hooks[HookPoint.OBJECT_ATTRIBUTES].code,
            "pre_insert": hooks[HookPoint.PRE_INSERT].code,
            "pre_update": hooks[HookPoint.PRE_UPDATE].code,
            "methods": hooks[HookPoint.OBJECT_METHODS].code,
        }
