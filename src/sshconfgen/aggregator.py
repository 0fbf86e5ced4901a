"""Config aggregator: merges resolved hosts with translated options."""

import logging
from typing import Iterable

from sshconfgen.translator import translate
from sshconfgen.types import ConfigBlock, HostRecord

logger = logging.getLogger(__name__)

FAILURE_COMMENT = (
    "# Script could not generate configuration for host {name}, check connection arguments"
)


def build_block(host: HostRecord) -> ConfigBlock:
    """Build the stanza for one host. Translation failures stay local to it."""
    block = ConfigBlock(
        name=host.name,
        host=host.host,
        port=host.port,
        user=host.user,
        identity_file=host.identity_file,
    )

    result = translate(host.common_args)
    if result.failed:
        logger.warning(f"Host {host.name}: cannot translate connection arguments: {result.error}")
        block.failure_comment = FAILURE_COMMENT.format(name=host.name)
    else:
        block.options = result.options

    return block


def aggregate(hosts: Iterable[HostRecord]) -> list[ConfigBlock]:
    """Build one block per emitted host, in input order."""
    blocks: dict[str, ConfigBlock] = {}

    for host in hosts:
        if not host.emitted:
            logger.debug(f"Skipping {host.name}: connection type {host.connection_type.value}")
            continue
        blocks[host.name] = build_block(host)

    return list(blocks.values())
