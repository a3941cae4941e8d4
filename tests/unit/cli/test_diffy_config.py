"""Unit tests for diffy CLI configuration discovery and loading."""

import argparse
import json

import pytest
import yaml

from diffy.cli.config import (
    discover_config_file,
    find_config_in_parents,
    load_config_file,
    load_config_with_priority,
)


@pytest.mark.unit
@pytest.mark.cli
class TestConfigDiscovery:
    """Test configuration file discovery."""

    def test_discover_in_cwd(self, isolated_config):
        """Test discovering a config file in the working directory."""
        config_file = isolated_config / ".diffy.toml"
        config_file.write_text("context_lines = 5\n")
        assert find_config_in_parents() == config_file.resolve()

    def test_discover_in_parent(self, isolated_config):
        """Test that parent directories are searched."""
        config_file = isolated_config / ".diffy.yaml"
        config_file.write_text("context_lines: 5\n")
        nested = isolated_config / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_in_parents(nested) == config_file.resolve()

    def test_toml_preferred_over_yaml(self, isolated_config):
        """Test the file name priority within one directory."""
        (isolated_config / ".diffy.yaml").write_text("context_lines: 1\n")
        toml_file = isolated_config / ".diffy.toml"
        toml_file.write_text("context_lines = 2\n")
        assert find_config_in_parents() == toml_file.resolve()

    def test_pyproject_with_section(self, isolated_config):
        """Test that a pyproject.toml with [tool.diffy] is found."""
        pyproject = isolated_config / "pyproject.toml"
        pyproject.write_text("[tool.diffy]\ncontext_lines = 7\n")
        assert find_config_in_parents() == pyproject.resolve()
        assert load_config_file(pyproject) == {"context_lines": 7}

    def test_pyproject_without_section_is_skipped(self, isolated_config):
        """Test that an unrelated pyproject.toml is ignored."""
        (isolated_config / "pyproject.toml").write_text("[project]\nname = 'x'\n")
        assert find_config_in_parents() is None

    def test_broken_pyproject_is_skipped(self, isolated_config):
        """Test that an unparsable pyproject.toml does not stop discovery."""
        (isolated_config / "pyproject.toml").write_text("[tool.diffy\n")
        assert find_config_in_parents() is None

    def test_home_directory_fallback(self, isolated_config, temp_dir):
        """Test that the home directory is searched last."""
        home_config = temp_dir / "home" / ".diffy.json"
        home_config.write_text(json.dumps({"context_lines": 4}))
        assert discover_config_file() == home_config

    def test_nothing_found(self, isolated_config):
        """Test that discovery returns None when no file exists."""
        assert discover_config_file() is None


@pytest.mark.unit
@pytest.mark.cli
class TestConfigLoading:
    """Test loading configuration files of each format."""

    def test_load_toml(self, temp_dir):
        """Test loading a TOML file."""
        path = temp_dir / "c.toml"
        path.write_text('context_lines = 5\nformat = "json"\n')
        assert load_config_file(path) == {"context_lines": 5, "format": "json"}

    def test_load_yaml(self, temp_dir):
        """Test loading a YAML file."""
        path = temp_dir / "c.yml"
        path.write_text(yaml.safe_dump({"context_lines": 2}))
        assert load_config_file(path) == {"context_lines": 2}

    def test_empty_yaml_is_empty_config(self, temp_dir):
        """Test that an empty YAML document loads as an empty mapping."""
        path = temp_dir / "c.yaml"
        path.write_text("")
        assert load_config_file(path) == {}

    def test_load_json(self, temp_dir):
        """Test loading a JSON file."""
        path = temp_dir / "c.json"
        path.write_text(json.dumps({"color": "never"}))
        assert load_config_file(str(path)) == {"color": "never"}

    @pytest.mark.parametrize(
        "name,content",
        [
            ("c.json", "[1, 2]"),
            ("c.json", "{not json"),
            ("c.toml", "context_lines = "),
            ("c.yaml", "- a\n- b\n"),
            ("c.yaml", "key: [unclosed"),
        ],
    )
    def test_invalid_content(self, temp_dir, name, content):
        """Test that malformed or non-mapping files are rejected."""
        path = temp_dir / name
        path.write_text(content)
        with pytest.raises(argparse.ArgumentTypeError):
            load_config_file(path)

    def test_unsupported_extension(self, temp_dir):
        """Test that unknown extensions are rejected."""
        path = temp_dir / "c.ini"
        path.write_text("[x]")
        with pytest.raises(argparse.ArgumentTypeError, match="Unsupported"):
            load_config_file(path)

    def test_missing_file(self, temp_dir):
        """Test that a missing file is rejected."""
        with pytest.raises(argparse.ArgumentTypeError, match="does not exist"):
            load_config_file(temp_dir / "missing.toml")

    def test_directory_is_rejected(self, temp_dir):
        """Test that a directory path is rejected."""
        with pytest.raises(argparse.ArgumentTypeError, match="not a file"):
            load_config_file(temp_dir)


@pytest.mark.unit
@pytest.mark.cli
class TestConfigPriority:
    """Test explicit, environment and discovered configuration priority."""

    @pytest.fixture
    def configs(self, isolated_config):
        explicit = isolated_config / "explicit.toml"
        explicit.write_text("context_lines = 1\n")
        env = isolated_config / "env.toml"
        env.write_text("context_lines = 2\n")
        (isolated_config / ".diffy.toml").write_text("context_lines = 3\n")
        return str(explicit), str(env)

    def test_explicit_wins(self, configs):
        """Test that the explicit path beats everything else."""
        explicit, env = configs
        assert load_config_with_priority(explicit, env) == {"context_lines": 1}

    def test_env_beats_discovery(self, configs):
        """Test that the environment path beats discovery."""
        _, env = configs
        assert load_config_with_priority(None, env) == {"context_lines": 2}

    def test_discovery(self, configs):
        """Test that discovery is used when nothing is given."""
        assert load_config_with_priority() == {"context_lines": 3}

    def test_no_config(self, isolated_config):
        """Test that an empty mapping is returned when nothing is found."""
        assert load_config_with_priority() == {}
