import pytest
import yaml

from stroom.config import Config, load_config


# --- Tests for the Config class ---


def test_config_get_top_level():
    """Tests retrieving a simple top-level value."""
    config = Config({"a": 1, "b": "hello"})
    assert config.get("a") == 1
    assert config.get("b") == "hello"


def test_config_get_nested():
    """Tests retrieving a nested value using dot notation."""
    config = Config({"demos": {"filter": {"threshold": 7}}})
    assert config.get("demos.filter.threshold") == 7


def test_config_get_missing_key_returns_default():
    config = Config({"a": 1})
    assert config.get("b") is None
    assert config.get("b", "default_value") == "default_value"


def test_config_get_partially_correct_nested_key():
    """Tests that a partially correct nested key returns the default."""
    config = Config({"a": {"b": 1}})
    assert config.get("a.c", "default") == "default"
    assert config.get("a.b.c", "default") == "default"


def test_config_defaults_to_empty():
    config = Config()
    assert config.get("a.b.c") is None
    assert config.to_dict() == {}


def test_config_get_int():
    config = Config({"demos": {"generate": {"limit": 3}, "filter": {"threshold": "high"}}})
    assert config.get_int("demos.generate.limit", 5) == 3
    assert config.get_int("demos.missing", 5) == 5
    with pytest.raises(ValueError):
        config.get_int("demos.filter.threshold", 5)


# --- Tests for the load_config function ---


def test_load_config_with_none_path():
    """Tests that passing None as a path returns an empty Config object."""
    config = load_config(None)
    assert isinstance(config, Config)
    assert config.get("any.key", "default") == "default"


def test_load_config_with_non_existent_path():
    """Tests that a non-existent path returns an empty Config object."""
    config = load_config("path/that/does/not/exist.yml")
    assert config.get("any.key", "default") == "default"


def test_load_config_from_valid_file(tmp_path):
    """Tests loading a valid YAML file."""
    content = """
    logging:
      level: "info"
      renderer: "console"
    demos:
      generate:
        limit: 8
    """
    config_file = tmp_path / "config.yml"
    config_file.write_text(content)

    config = load_config(str(config_file))
    assert config.get("logging.level") == "info"
    assert config.get("logging.renderer") == "console"
    assert config.get("demos.generate.limit") == 8


def test_load_config_from_empty_file(tmp_path):
    """Tests that loading an empty file results in an empty Config."""
    config_file = tmp_path / "config.yml"
    config_file.write_text("")

    config = load_config(str(config_file))
    assert config.get("any.key", "default") == "default"


def test_load_config_rejects_non_mapping(tmp_path):
    config_file = tmp_path / "config.yml"
    config_file.write_text("- just\n- a list\n")

    with pytest.raises(ValueError):
        load_config(str(config_file))


def test_load_config_raises_error_for_malformed_file(tmp_path):
    """Tests that a malformed YAML file raises a YAMLError."""
    config_file = tmp_path / "config.yml"
    config_file.write_text("key: value: oops")

    with pytest.raises(yaml.YAMLError):
        load_config(str(config_file))
