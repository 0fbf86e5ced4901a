"""Loading of resolved inventory exports (host lists and Ansible formats)."""

import json
import logging
import shlex
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from sshconfgen.errors import InventoryError
from sshconfgen.types import RawHostInput

logger = logging.getLogger(__name__)

# Ansible connection variables, first match wins
ANSIBLE_VARS = {
    "host": ("ansible_host", "ansible_ssh_host"),
    "user": ("ansible_user", "ansible_ssh_user"),
    "port": ("ansible_port", "ansible_ssh_port"),
    "identity_file": ("ansible_ssh_private_key_file", "ansible_private_key_file"),
    "connection_type": ("ansible_connection",),
}

# Concatenated in this order into common_args
ANSIBLE_ARGS_VARS = ("ansible_ssh_common_args", "ansible_ssh_extra_args")


def _build_raw(data: dict[str, Any]) -> RawHostInput:
    try:
        return RawHostInput(**data)
    except ValidationError as e:
        raise InventoryError(f"Invalid host entry {data.get('name')!r}: {e}") from e


def _join_args(values: list[Any]) -> str | None:
    parts = []
    for value in values:
        if not value:
            continue
        parts.append(value if isinstance(value, str) else shlex.join(str(v) for v in value))
    return " ".join(parts) if parts else None


def hostvars_to_raw(name: str, hostvars: dict[str, Any] | None) -> RawHostInput:
    """Map Ansible connection variables of one host onto a raw host entry."""
    hostvars = hostvars or {}
    data: dict[str, Any] = {"name": name}

    for field, candidates in ANSIBLE_VARS.items():
        for var in candidates:
            if hostvars.get(var) not in (None, ""):
                data[field] = hostvars[var]
                break

    data["common_args"] = _join_args([hostvars.get(var) for var in ANSIBLE_ARGS_VARS])
    return _build_raw(data)


def _parse_host_list(entries: list[Any]) -> list[RawHostInput]:
    hosts = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise InventoryError(f"Host entry #{index} is not a mapping: {entry!r}")
        hosts.append(_build_raw(entry))
    return hosts


def _parse_inventory_list(data: dict[str, Any]) -> list[RawHostInput]:
    """Parse `ansible-inventory --list` output. Group vars are already merged."""
    hostvars = (data.get("_meta") or {}).get("hostvars") or {}
    order: list[str] = []
    visited_groups: set[str] = set()

    def walk(group_name: str) -> None:
        if group_name in visited_groups:
            return
        visited_groups.add(group_name)
        group = data.get(group_name) or {}
        if not isinstance(group, dict):
            raise InventoryError(f"Group '{group_name}' is not a mapping")
        for host in group.get("hosts") or []:
            if host not in order:
                order.append(host)
        for child in group.get("children") or []:
            walk(child)

    roots = ["all"] if "all" in data else [k for k in data if k != "_meta"]
    for root in roots:
        walk(root)
    for host in hostvars:
        if host not in order:
            order.append(host)

    return [hostvars_to_raw(host, hostvars.get(host)) for host in order]


def _parse_yaml_inventory(data: dict[str, Any]) -> list[RawHostInput]:
    """Parse an Ansible YAML inventory, applying group var inheritance."""
    order: list[str] = []
    group_vars: dict[str, dict[str, Any]] = {}
    own_vars: dict[str, dict[str, Any]] = {}

    def walk(group_name: str, group: Any, inherited: dict[str, Any]) -> None:
        if group is None:
            group = {}
        if not isinstance(group, dict):
            raise InventoryError(f"Group '{group_name}' is not a mapping")

        chain_vars = {**inherited, **(group.get("vars") or {})}

        hosts = group.get("hosts") or {}
        if not isinstance(hosts, dict):
            raise InventoryError(f"'hosts' of group '{group_name}' must be a mapping")
        for host, host_vars in hosts.items():
            host = str(host)
            if host not in order:
                order.append(host)
            group_vars.setdefault(host, {}).update(chain_vars)
            own_vars.setdefault(host, {}).update(host_vars or {})

        children = group.get("children") or {}
        if not isinstance(children, dict):
            raise InventoryError(f"'children' of group '{group_name}' must be a mapping")
        for child_name, child in children.items():
            walk(str(child_name), child, chain_vars)

    for group_name, group in data.items():
        walk(str(group_name), group, {})

    return [
        hostvars_to_raw(host, {**group_vars[host], **own_vars[host]})
        for host in order
    ]


def parse_inventory(data: Any) -> list[RawHostInput]:
    """Turn an already-decoded inventory document into raw host entries."""
    if data is None:
        return []
    if isinstance(data, list):
        return _parse_host_list(data)
    if not isinstance(data, dict):
        raise InventoryError(f"Unsupported inventory document: {type(data).__name__}")
    if "_meta" in data:
        return _parse_inventory_list(data)
    if isinstance(data.get("hosts"), list):
        return _parse_host_list(data["hosts"])
    return _parse_yaml_inventory(data)


def load_inventory(path: Path) -> list[RawHostInput]:
    """Load inventory from a JSON or YAML file."""
    try:
        with open(path) as f:
            if path.suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise InventoryError(f"Cannot parse inventory {path}: {e}") from e
    except OSError as e:
        raise InventoryError(f"Cannot read inventory {path}: {e}") from e

    hosts = parse_inventory(data)
    logger.info(f"Loaded {len(hosts)} host(s) from {path}")
    return hosts
