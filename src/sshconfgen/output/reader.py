"""SSH config parsing utilities."""

import re
from dataclasses import dataclass, field
from pathlib import Path

from paramiko.config import SSHConfig

_FAILED_HOST_RE = re.compile(
    r"^\s*# Script could not generate configuration for host (\S+), check connection arguments\s*$",
    re.MULTILINE,
)


@dataclass
class ParsedHost:
    """Raw directives of one Host stanza, keys lowercased as paramiko stores them."""

    pattern: str
    directives: dict[str, list[str]] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        """First value of a directive; ssh uses the first one it sees."""
        values = self.directives.get(key.lower())
        return values[0] if values else None


def read_config(text: str) -> list[ParsedHost]:
    """Parse ssh_config text and return its Host stanzas in file order."""
    config = SSHConfig.from_text(text)

    hosts = []
    for entry in config._config:
        patterns = entry.get("host", [])
        settings = entry.get("config", {})
        if not settings and patterns == ["*"]:
            continue

        directives = {}
        for key, value in settings.items():
            if value is None:
                value = "none"
            directives[key] = list(value) if isinstance(value, list) else [value]

        for pattern in patterns:
            hosts.append(ParsedHost(pattern=pattern, directives=dict(directives)))

    return hosts


def read_config_file(path: Path) -> list[ParsedHost]:
    """Parse an ssh_config file."""
    return read_config(Path(path).read_text())


def find_failed_hosts(text: str) -> list[str]:
    """Names of hosts whose stanza carries the translation failure comment."""
    return _FAILED_HOST_RE.findall(text)
