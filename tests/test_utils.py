"""Tests for schema definition loading."""

import json

import pytest
import requests

from ormgen import utils
from ormgen.utils import (
    SchemaLoaderError,
    load_definition_from_file,
    load_definition_from_url,
    load_schema_definition,
)

DEFINITION = {"tables": [{"name": "article"}]}


class FakeResponse:
    def __init__(self, payload=None, status_code=200, invalid_json=False):
        self.payload = payload
        self.status_code = status_code
        self.invalid_json = invalid_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(response=self)

    def json(self):
        if self.invalid_json:
            raise requests.exceptions.JSONDecodeError("Expecting value", "", 0)
        return self.payload


class TestLoadFromFile:
    def test_loads_json(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text(json.dumps(DEFINITION))

        source, data = load_definition_from_file(path)

        assert source == str(path)
        assert data == DEFINITION

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_definition_from_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text("{")

        with pytest.raises(SchemaLoaderError, match="Invalid JSON"):
            load_definition_from_file(path)


class TestLoadFromUrl:
    URL = "https://example.com/schema.json"

    def test_loads_json(self, monkeypatch):
        calls = []

        def fake_get(url, timeout):
            calls.append((url, timeout))
            return FakeResponse(DEFINITION)

        monkeypatch.setattr(utils.requests, "get", fake_get)

        assert load_definition_from_url(self.URL, timeout=5) == (self.URL, DEFINITION)
        assert calls == [(self.URL, 5)]

    def test_invalid_url(self):
        with pytest.raises(SchemaLoaderError, match="Invalid URL"):
            load_definition_from_url("schema.json")

    def test_http_error(self, monkeypatch):
        monkeypatch.setattr(
            utils.requests, "get", lambda url, timeout: FakeResponse(status_code=404)
        )

        with pytest.raises(SchemaLoaderError, match="HTTP error 404"):
            load_definition_from_url(self.URL)

    def test_invalid_json_response(self, monkeypatch):
        monkeypatch.setattr(
            utils.requests, "get", lambda url, timeout: FakeResponse(invalid_json=True)
        )

        with pytest.raises(SchemaLoaderError, match="Invalid JSON response"):
            load_definition_from_url(self.URL)

    def test_timeout(self, monkeypatch):
        def fake_get(url, timeout):
            raise requests.exceptions.Timeout()

        monkeypatch.setattr(utils.requests, "get", fake_get)

        with pytest.raises(SchemaLoaderError, match="timeout"):
            load_definition_from_url(self.URL)


class TestLoadSchemaDefinition:
    def test_requires_a_source(self):
        with pytest.raises(SchemaLoaderError, match="Either"):
            load_schema_definition()

    def test_rejects_both_sources(self, tmp_path):
        with pytest.raises(SchemaLoaderError, match="both"):
            load_schema_definition(file_path=tmp_path / "a.json", url="https://example.com")
