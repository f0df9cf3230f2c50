"""Shared fixtures for ormgen tests."""

import pytest

from ormgen.behaviors.timestampable import TimestampableBehavior
from ormgen.builders import ObjectBuilder, QueryBuilder
from ormgen.core.config import GeneratorConfig
from ormgen.core.schema import Column, ColumnType, Table


def make_table(name="article", extra_columns=(), behaviors=()):
    """Build a table with an id and title column plus extras."""
    table = Table(name=name)
    table.add_column(Column(name="id", type=ColumnType.INTEGER, primary_key=True))
    table.add_column(Column(name="title", type=ColumnType.VARCHAR))
    for column in extra_columns:
        table.add_column(column)
    for behavior in behaviors:
        table.add_behavior(behavior)
    return table


def timestampable_table(parameters=None, extra_columns=(), augment=True):
    """Article table with a timestampable behavior, optionally augmented."""
    behavior = TimestampableBehavior(parameters)
    table = make_table(extra_columns=extra_columns, behaviors=[behavior])
    if augment:
        behavior.augment_schema(table)
    return table, behavior


@pytest.fixture
def config():
    return GeneratorConfig()


@pytest.fixture
def article():
    """Augmented article table with default timestampable parameters."""
    table, _ = timestampable_table()
    return table


@pytest.fixture
def object_builder_for(config):
    def factory(table):
        return ObjectBuilder(table, config)

    return factory


@pytest.fixture
def query_builder_for(config):
    def factory(table):
        return QueryBuilder(table, config)

    return factory
