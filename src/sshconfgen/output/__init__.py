"""Rendering, writing and reading of ssh_config files."""

from sshconfgen.output.reader import ParsedHost, find_failed_hosts, read_config, read_config_file
from sshconfgen.output.render import render, render_block
from sshconfgen.output.writer import write_config

__all__ = [
    "ParsedHost",
    "find_failed_hosts",
    "read_config",
    "read_config_file",
    "render",
    "render_block",
    "write_config",
]
