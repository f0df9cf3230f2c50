"""Tests for generator configuration loading."""

import json

import pytest

from ormgen.core.config import ConfigError, ConfigManager, GeneratorConfig, load_config


class TestLoadConfig:
    def test_defaults(self):
        config = load_config()

        assert config == GeneratorConfig()
        assert config.runtime_package == "ormgen_runtime"
        assert config.max_workers == 1

    def test_overrides_win_over_file(self, tmp_path):
        config_file = tmp_path / "ormgen.json"
        config_file.write_text(
            json.dumps({"add_comments": False, "max_workers": 2, "package_prefix": "app"})
        )

        config = load_config({"max_workers": 4}, config_file)

        assert config.add_comments is False
        assert config.max_workers == 4
        assert config.custom == {"package_prefix": "app"}

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"max_workers": 0}, "max_workers"),
            ({"object_base_class": "Active Record"}, "object_base_class"),
            ({"runtime_package": "my-orm.runtime"}, "runtime_package"),
        ],
    )
    def test_invalid_values(self, overrides, message):
        with pytest.raises(ConfigError, match=message):
            load_config(overrides)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(config_file=tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        config_file = tmp_path / "broken.json"
        config_file.write_text("{not json")

        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config(config_file=config_file)

    def test_non_object_file(self, tmp_path):
        config_file = tmp_path / "list.json"
        config_file.write_text("[1, 2]")

        with pytest.raises(ConfigError, match="JSON object"):
            load_config(config_file=config_file)


def test_save_config(tmp_path):
    manager = ConfigManager()
    path = tmp_path / "saved.json"
    config = GeneratorConfig(add_comments=False, custom={"package_prefix": "app"})

    manager.save_config(config, path)
    saved = json.loads(path.read_text())

    assert saved["add_comments"] is False
    assert saved["package_prefix"] == "app"
    assert "custom" not in saved
    assert manager.get_config(config_file=path) == config
