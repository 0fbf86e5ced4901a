"""Configuration models for sshconfgen."""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, field_validator

from sshconfgen.types import DEFAULT_PORT


class HostDefaults(BaseModel):
    """Attribute values inherited by hosts that do not set them."""

    user: str | None = None
    port: int = DEFAULT_PORT
    identity_file: str | None = None
    common_args: str | list[str] | None = None
    connection_type: str = "ssh"

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not 1 <= v <= 65535:
            raise ValueError(f"defaults.port must be between 1 and 65535, got {v}")
        return v


class GeneratorConfig(BaseModel):
    """Main sshconfgen configuration."""

    inventory: str | None = None
    output: str = "~/.ssh/config.d/inventory"
    header: bool = True
    defaults: HostDefaults = HostDefaults()

    def output_path(self) -> Path:
        return Path(os.path.expanduser(self.output))

    def inventory_path(self) -> Path | None:
        if self.inventory is None:
            return None
        return Path(os.path.expanduser(self.inventory))


def load_config(path: Path) -> GeneratorConfig:
    """Load configuration from YAML file."""
    with open(path) as f:
        data = yaml.safe_load(f)
    return GeneratorConfig(**(data or {}))


def get_config_template() -> str:
    """Get the default configuration template."""
    return """# sshconfgen configuration

# Resolved inventory export. Accepted formats:
#   - a list of hosts (name, host, user, port, identity_file, common_args, connection_type)
#   - `ansible-inventory --list` JSON output
#   - an Ansible YAML inventory (all: hosts/children/vars)
# Templated values must already be rendered; sshconfgen does not evaluate them.
inventory: inventory.json

# Destination ssh_config file. Written atomically with mode 0600.
# Include it from ~/.ssh/config with: Include config.d/inventory
output: ~/.ssh/config.d/inventory

# Emit a comment at the top of the generated file
header: true

# Values used for hosts that do not set them
defaults:
  # user: admin
  port: 22
  # identity_file: ~/.ssh/id_ed25519
  # common_args: "-o ServerAliveInterval=30"
  connection_type: ssh  # only ssh and network_cli hosts are emitted
"""
