"""End-to-end generation: resolve, translate, aggregate, render, write."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from sshconfgen.aggregator import aggregate
from sshconfgen.config import GeneratorConfig, HostDefaults
from sshconfgen.errors import InventoryError, NoHostsError
from sshconfgen.inventory import load_inventory, resolve
from sshconfgen.output import render, write_config
from sshconfgen.types import ConfigBlock, HostRecord, RawHostInput

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Outcome of one generation pass."""

    text: str
    hosts: list[HostRecord] = field(default_factory=list)
    blocks: list[ConfigBlock] = field(default_factory=list)
    path: Path | None = None

    @property
    def failed_hosts(self) -> list[str]:
        return [block.name for block in self.blocks if block.failed]

    @property
    def skipped_hosts(self) -> list[str]:
        emitted = {block.name for block in self.blocks}
        return [host.name for host in self.hosts if host.name not in emitted]


def generate(
    raw_hosts: Iterable[RawHostInput],
    defaults: HostDefaults | None = None,
    header: bool = True,
) -> GenerationResult:
    """
    Produce the ssh_config text for fully-resolved inventory data.

    Raises:
        NoHostsError: the inventory contains no hosts.
        InventoryError: a host cannot be resolved.
    """
    hosts = resolve(raw_hosts, defaults)
    if not hosts:
        raise NoHostsError("No hosts could be resolved from the inventory")

    blocks = aggregate(hosts)
    if not blocks:
        logger.warning("No host uses an ssh or network_cli connection")

    result = GenerationResult(text=render(blocks, header=header), hosts=hosts, blocks=blocks)
    for name in result.failed_hosts:
        logger.warning(f"Host {name} was written with a failure comment")
    return result


def run(
    config: GeneratorConfig,
    inventory: Path | None = None,
    output: Path | None = None,
    write: bool = True,
) -> GenerationResult:
    """Load the inventory named by config, generate and write the result."""
    inventory = inventory or config.inventory_path()
    if inventory is None:
        raise InventoryError("No inventory given (set 'inventory' in the config or pass --inventory)")

    result = generate(load_inventory(inventory), config.defaults, header=config.header)

    if write:
        result.path = write_config(output or config.output_path(), result.text)

    return result
