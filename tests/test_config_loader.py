import json

import pytest

from config.config_loader import DEFAULT_CONFIG, load_config, save_config, validate_config


def write_config(tmp_path, data):
    path = tmp_path / "runtime_config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoadConfig:

    def test_defaults_without_path(self):
        assert load_config() == DEFAULT_CONFIG

    def test_defaults_are_a_copy(self):
        config = load_config()
        config["tape_buffer"] = 7
        assert DEFAULT_CONFIG["tape_buffer"] == 50

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.json")

    def test_overrides_merge_over_defaults(self, tmp_path):
        path = write_config(tmp_path, {"tape_buffer": 10, "min_interval_ms": 20})
        config = load_config(path)
        assert config["tape_buffer"] == 10
        assert config["min_interval_ms"] == 20
        assert config["max_interval_ms"] == DEFAULT_CONFIG["max_interval_ms"]

    def test_wrong_type_rejected(self, tmp_path):
        path = write_config(tmp_path, {"tape_buffer": "50"})
        with pytest.raises(TypeError):
            load_config(path)

    def test_verbose_prints_summary(self, capsys):
        load_config(verbose=True)
        assert "tape_buffer: 50" in capsys.readouterr().out

    def test_save_then_load(self, tmp_path):
        path = tmp_path / "saved.json"
        save_config(dict(DEFAULT_CONFIG, default_speed=800), path)
        assert load_config(path)["default_speed"] == 800


class TestValidateConfig:

    def test_missing_key(self):
        config = dict(DEFAULT_CONFIG)
        del config["max_steps"]
        with pytest.raises(ValueError, match="max_steps"):
            validate_config(config)

    def test_bool_is_not_an_int(self):
        with pytest.raises(TypeError):
            validate_config(dict(DEFAULT_CONFIG, tape_buffer=True))

    def test_buffer_must_be_positive(self):
        with pytest.raises(ValueError):
            validate_config(dict(DEFAULT_CONFIG, tape_buffer=0))

    def test_interval_bounds_ordered(self):
        with pytest.raises(ValueError):
            validate_config(dict(DEFAULT_CONFIG, min_interval_ms=500, max_interval_ms=100))

    def test_negative_minimum_interval(self):
        with pytest.raises(ValueError):
            validate_config(dict(DEFAULT_CONFIG, min_interval_ms=-1))
