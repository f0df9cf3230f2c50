"""Tests for the command-line interface."""

import ast
import io
import json

import pytest
from rich.console import Console

from ormgen import cli
from ormgen.cli import main, write_generated_files

DEFINITION = {
    "tables": [
        {
            "name": "article",
            "columns": [
                {"name": "id", "type": "INTEGER", "primary_key": True},
                {"name": "title", "type": "VARCHAR"},
            ],
            "behaviors": ["timestampable"],
        },
        {
            "name": "author",
            "columns": [{"name": "id", "type": "INTEGER", "primary_key": True}],
        },
    ]
}


@pytest.fixture
def output(monkeypatch):
    """Capture CLI output as plain text."""
    buffer = io.StringIO()
    monkeypatch.setattr(cli, "console", Console(file=buffer, color_system=None, width=120))
    return buffer


@pytest.fixture
def schema_file(tmp_path):
    def factory(definition=DEFINITION):
        path = tmp_path / "schema.json"
        path.write_text(json.dumps(definition))
        return path

    return factory


def test_generates_files(schema_file, tmp_path):
    models = tmp_path / "models"

    assert main([str(schema_file()), "--output", str(models)]) == 0

    names = sorted(path.name for path in models.iterdir())
    assert names == [
        "__init__.py",
        "article.py",
        "article_query.py",
        "article_table_map.py",
        "author.py",
        "author_query.py",
        "author_table_map.py",
    ]
    ast.parse((models / "article.py").read_text())
    assert "def recently_updated" in (models / "article_query.py").read_text()


def test_table_filter(schema_file, tmp_path):
    models = tmp_path / "models"

    assert main([str(schema_file()), "-o", str(models), "--table", "author"]) == 0

    assert not (models / "article.py").exists()
    assert (models / "author.py").exists()


def test_unknown_table(schema_file, tmp_path):
    assert main([str(schema_file()), "--table", "comment"]) == 1


def test_configuration_error_writes_nothing(schema_file, tmp_path, output):
    definition = json.loads(json.dumps(DEFINITION))
    definition["tables"][0]["behaviors"] = [
        {"name": "timestampable", "parameters": {"enable_high_precision": "TRUE"}}
    ]
    models = tmp_path / "models"

    assert main([str(schema_file(definition)), "-o", str(models)]) == 1

    assert not models.exists()
    assert "Parameter: enable_high_precision" in output.getvalue()


def test_missing_schema_file(tmp_path):
    assert main([str(tmp_path / "missing.json")]) == 1


def test_requires_input():
    assert main([]) == 1


def test_list_behaviors(output):
    assert main(["--list-behaviors"]) == 0

    assert "timestampable" in output.getvalue()


def test_prints_to_stdout_without_output_dir(schema_file, output):
    assert main([str(schema_file()), "--no-comments"]) == 0

    assert "class ArticleQuery(ModelCriteria):" in output.getvalue()


def test_write_generated_files_keeps_existing_init(tmp_path):
    (tmp_path / "__init__.py").write_text("# package\n")

    written = write_generated_files({"article": {"article.py": "x = 1\n"}}, tmp_path)

    assert written == [tmp_path / "article.py"]
    assert (tmp_path / "__init__.py").read_text() == "# package\n"
