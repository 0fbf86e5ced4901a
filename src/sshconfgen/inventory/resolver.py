"""Host resolver: raw inventory entries to normalized host records."""

import logging
from typing import Iterable

from pydantic import ValidationError

from sshconfgen.config import HostDefaults
from sshconfgen.errors import DuplicateHostName, InventoryError, MissingRequiredAttribute
from sshconfgen.types import ConnectionType, HostRecord, RawHostInput

logger = logging.getLogger(__name__)

TEMPLATE_MARKERS = ("{{", "{%")

# Characters that would break out of a single ssh_config line
FORBIDDEN_CHARS = ("\n", "\r", '"')


def _warn_unrendered(name: str, raw: RawHostInput) -> None:
    """Templating must happen upstream; flag values that still carry markers."""
    for attr in ("host", "user", "identity_file", "common_args"):
        value = getattr(raw, attr)
        text = " ".join(value) if isinstance(value, list) else value
        if text and any(marker in text for marker in TEMPLATE_MARKERS):
            logger.warning(f"Host {name}: '{attr}' looks like an unrendered template: {text}")


def _check_attributes(name: str, values: dict[str, str | None]) -> None:
    """Reject values that cannot be written as a single directive."""
    if any(c.isspace() for c in name):
        raise InventoryError(f"Host name {name!r} contains whitespace")
    for attr, value in values.items():
        if value and any(c in value for c in FORBIDDEN_CHARS):
            raise InventoryError(f"Host {name!r}: '{attr}' contains a line break or quote")


def resolve_host(raw: RawHostInput, defaults: HostDefaults | None = None) -> HostRecord:
    """Apply inheritance (host value > defaults > built-ins) to a single entry."""
    defaults = defaults or HostDefaults()

    address = raw.host or raw.name
    if not address:
        raise MissingRequiredAttribute("host", raw.name)
    name = raw.name or address

    _warn_unrendered(name, raw)

    user = raw.user or defaults.user
    identity_file = raw.identity_file or defaults.identity_file
    _check_attributes(
        name, {"name": name, "host": address, "user": user, "identity_file": identity_file}
    )

    common_args = raw.common_args if raw.common_args is not None else defaults.common_args
    if isinstance(common_args, list):
        common_args = tuple(common_args)

    try:
        return HostRecord(
            name=name,
            host=address,
            user=user,
            port=raw.port if raw.port is not None else defaults.port,
            identity_file=identity_file,
            common_args=common_args or (),
            connection_type=ConnectionType.from_value(
                raw.connection_type or defaults.connection_type
            ),
        )
    except ValidationError as e:
        raise InventoryError(f"Invalid attributes for host '{name}': {e}") from e


def resolve(
    raw_hosts: Iterable[RawHostInput],
    defaults: HostDefaults | None = None,
) -> list[HostRecord]:
    """
    Resolve raw inventory entries into host records, preserving input order.

    Raises:
        MissingRequiredAttribute: an entry has neither `host` nor `name`.
        DuplicateHostName: two entries resolve to the same name.
    """
    records: list[HostRecord] = []
    seen: set[str] = set()

    for raw in raw_hosts:
        record = resolve_host(raw, defaults)
        if record.name in seen:
            raise DuplicateHostName(record.name)
        seen.add(record.name)
        records.append(record)

    logger.debug(f"Resolved {len(records)} host(s)")
    return records
