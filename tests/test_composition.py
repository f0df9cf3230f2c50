"""Tests for hook point composition across behaviors."""

import ast

import pytest

from conftest import make_table
from ormgen.behaviors.base import Behavior
from ormgen.behaviors.timestampable import TimestampableBehavior
from ormgen.builders import ObjectBuilder
from ormgen.core.contribution import (
    ComposedHook,
    Contribution,
    ContributionError,
    HookPoint,
    compose,
)
from ormgen.core.schema import Column, ColumnType


class AuditBehavior(Behavior):
    """Minimal second behavior used to exercise composition."""

    name = "audit"
    default_parameters = {"column": "audited_by"}

    def augment_schema(self, table):
        column_name = self.get_parameter("column")
        if not table.has_column(column_name):
            table.add_column(Column(name=column_name, type=ColumnType.VARCHAR))

    def contributors(self):
        return {
            HookPoint.OBJECT_ATTRIBUTES: lambda builder: Contribution(
                HookPoint.OBJECT_ATTRIBUTES, "_audit_user = None", self.name
            ),
            HookPoint.PRE_INSERT: lambda builder: Contribution(
                HookPoint.PRE_INSERT,
                "if self._audit_user is not None:\n"
                f"    self.set_{self.get_parameter('column')}(self._audit_user)",
                self.name,
            ),
        }


class BrokenBehavior(Behavior):
    name = "broken"

    def augment_schema(self, table):
        pass

    def contribute(self, hook, builder):
        return "not a contribution"


def audited_article():
    timestamps = TimestampableBehavior()
    audit = AuditBehavior()
    table = make_table(behaviors=[timestamps, audit])
    for behavior in table.behaviors:
        behavior.augment_schema(table)
    return table


class TestContribution:
    def test_empty_contribution_is_falsy(self):
        contribution = Contribution.empty(HookPoint.PRE_INSERT, "x")

        assert contribution.code == ""
        assert not contribution

    def test_code_is_dedented_and_stripped(self):
        contribution = Contribution(HookPoint.PRE_INSERT, "\n    x = 1\n    y = 2\n")

        assert contribution.code == "x = 1\ny = 2"
        assert str(contribution) == contribution.code

    def test_invalid_fragment_is_rejected(self):
        with pytest.raises(ContributionError):
            Contribution(HookPoint.PRE_INSERT, "if x\n    pass", "bad")

    def test_invalid_import_is_rejected(self):
        with pytest.raises(ContributionError):
            Contribution(HookPoint.PRE_INSERT, "x = 1", imports={"time"})


class TestCompose:
    def test_contributions_follow_attachment_order(self):
        table = audited_article()
        builder = ObjectBuilder(table)

        composed = compose(table.behaviors, HookPoint.OBJECT_ATTRIBUTES, builder)

        assert isinstance(composed, ComposedHook)
        assert [c.behavior for c in composed.contributions] == ["timestampable", "audit"]
        assert composed.code == "_keep_update_date_unchanged = False\n\n_audit_user = None"

    def test_empty_contributions_are_dropped(self):
        table = audited_article()
        builder = ObjectBuilder(table)

        composed = compose(table.behaviors, HookPoint.PRE_UPDATE, builder)

        assert len(composed) == 1
        assert composed.contributions[0].behavior == "timestampable"

    def test_no_behaviors_compose_to_nothing(self):
        table = make_table()

        composed = compose(table.behaviors, HookPoint.PRE_INSERT, ObjectBuilder(table))

        assert not composed
        assert composed.code == ""
        assert composed.imports == []

    def test_composed_pre_insert_is_valid_python(self):
        table = audited_article()

        code = compose(table.behaviors, HookPoint.PRE_INSERT, ObjectBuilder(table)).code

        ast.parse(code)
        assert code.index("set_updated_at") < code.index("set_audited_by")

    def test_imports_are_merged(self):
        table = audited_article()

        composed = compose(table.behaviors, HookPoint.PRE_INSERT, ObjectBuilder(table))

        assert composed.imports == ["import time"]

    def test_non_contribution_result_is_rejected(self):
        table = make_table(behaviors=[BrokenBehavior()])

        with pytest.raises(ContributionError, match="broken"):
            compose(table.behaviors, HookPoint.PRE_INSERT, ObjectBuilder(table))

    def test_wrong_hook_is_rejected(self):
        behavior = AuditBehavior()
        behavior.contributors = lambda: {
            HookPoint.PRE_UPDATE: lambda builder: Contribution(HookPoint.PRE_INSERT, "x = 1")
        }
        table = make_table(behaviors=[behavior])

        with pytest.raises(ContributionError):
            compose(table.behaviors, HookPoint.PRE_UPDATE, ObjectBuilder(table))

    def test_composed_object_class_is_valid(self):
        table = audited_article()

        code = ObjectBuilder(table).build()
        tree = ast.parse(code)
        cls = next(node for node in tree.body if isinstance(node, ast.ClassDef))
        methods = [node.name for node in cls.body if isinstance(node, ast.FunctionDef)]

        assert "keep_update_date_unchanged" in methods
        assert "set_audited_by" in methods
        assert "        self.set_audited_by(self._audit_user)" in code
