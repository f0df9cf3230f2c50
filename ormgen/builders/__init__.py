"""
Class builders for generated data-access code.

Each builder renders one file per table: the table map with column
constants, the active record object class and the query class.
"""

from .object_builder import ObjectBuilder
from .query_builder import QueryBuilder
from .table_map_builder import TableMapBuilder

__all__ = ["ObjectBuilder", "QueryBuilder", "TableMapBuilder"]
