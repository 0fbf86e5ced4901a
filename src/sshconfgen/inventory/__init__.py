"""Inventory loading and host resolution."""

from sshconfgen.inventory.loader import hostvars_to_raw, load_inventory, parse_inventory
from sshconfgen.inventory.resolver import resolve, resolve_host

__all__ = [
    "hostvars_to_raw",
    "load_inventory",
    "parse_inventory",
    "resolve",
    "resolve_host",
]
