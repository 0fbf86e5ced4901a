"""Tests for configuration parsing."""

import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from sshconfgen.config import GeneratorConfig, HostDefaults, get_config_template, load_config


class TestConfigTemplate:
    def test_template_is_valid_yaml(self):
        import yaml

        data = yaml.safe_load(get_config_template())
        assert "inventory" in data
        assert "output" in data
        assert "defaults" in data

    def test_template_loads(self):
        import yaml

        config = GeneratorConfig(**yaml.safe_load(get_config_template()))
        assert config.inventory == "inventory.json"
        assert config.defaults.port == 22
        assert config.defaults.connection_type == "ssh"


class TestLoadConfig:
    def test_load_minimal_config(self):
        config_yaml = """
inventory: hosts.yml
"""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write(config_yaml)
            f.flush()

            config = load_config(Path(f.name))

            assert config.inventory == "hosts.yml"
            assert config.header is True  # default
            assert config.defaults.user is None  # default
            assert config.defaults.port == 22  # default

    def test_load_full_config(self):
        config_yaml = """
inventory: ~/infra/inventory.json
output: /tmp/sshconfgen/config
header: false
defaults:
  user: ops
  port: 2200
  identity_file: ~/.ssh/ops
  common_args: "-o ServerAliveInterval=30"
  connection_type: network_cli
"""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write(config_yaml)
            f.flush()

            config = load_config(Path(f.name))

            assert config.header is False
            assert config.output_path() == Path("/tmp/sshconfgen/config")
            assert config.inventory_path() == Path.home() / "infra" / "inventory.json"
            assert config.defaults.user == "ops"
            assert config.defaults.port == 2200
            assert config.defaults.common_args == "-o ServerAliveInterval=30"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "sshconfgen.yaml"
        path.write_text("")
        config = load_config(path)
        assert config.inventory is None
        assert config.inventory_path() is None

    def test_invalid_default_port(self):
        with pytest.raises(ValidationError, match="between 1 and 65535"):
            HostDefaults(port=0)
