"""Core type definitions for sshconfgen."""

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_PORT = 22

# Directives whose value runs to the end of the line and must not be quoted
REST_OF_LINE_DIRECTIVES = {
    "proxycommand",
    "localcommand",
    "remotecommand",
    "knownhostscommand",
}

# Directives taking two space-separated arguments
MULTI_ARGUMENT_DIRECTIVES = {"localforward", "remoteforward"}


class ConnectionType(str, Enum):
    """How the automation framework reaches a host."""

    SSH = "ssh"
    NETWORK_CLI = "network_cli"
    OTHER = "other"

    @classmethod
    def from_value(cls, value: "str | ConnectionType | None") -> "ConnectionType":
        if value is None or value == "":
            return cls.SSH
        if isinstance(value, ConnectionType):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.OTHER


EMITTED_CONNECTION_TYPES = frozenset({ConnectionType.SSH, ConnectionType.NETWORK_CLI})


def _validate_port(v: int | None) -> int | None:
    if v is not None and not 1 <= v <= 65535:
        raise ValueError(f"port must be between 1 and 65535, got {v}")
    return v


class RawHostInput(BaseModel):
    """A host as delivered by the inventory, before defaults are applied."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    host: str | None = None
    user: str | None = None
    port: int | None = None
    identity_file: str | None = None
    common_args: str | list[str] | None = None
    connection_type: str | None = None

    @field_validator("name", "host", "user", "identity_file", "connection_type", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        if v is not None and not isinstance(v, str):
            return str(v)
        return v

    @field_validator("port", mode="before")
    @classmethod
    def blank_port_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int | None) -> int | None:
        return _validate_port(v)


class HostRecord(BaseModel):
    """A fully resolved host. Immutable for the duration of a run."""

    model_config = ConfigDict(frozen=True)

    name: str
    host: str
    user: str | None = None
    port: int = DEFAULT_PORT
    identity_file: str | None = None
    common_args: str | tuple[str, ...] = ()  # raw argument string or tokens
    connection_type: ConnectionType = ConnectionType.SSH

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        return _validate_port(v)

    @property
    def emitted(self) -> bool:
        return self.connection_type in EMITTED_CONNECTION_TYPES


def format_value(directive: str, value: str) -> str:
    """Quote a directive value if ssh_config would otherwise split it."""
    if directive.lower() in REST_OF_LINE_DIRECTIVES | MULTI_ARGUMENT_DIRECTIVES:
        return value
    if any(c.isspace() for c in value) and not value.startswith('"'):
        return f'"{value}"'
    return value


@dataclass(frozen=True)
class TranslatedOption:
    """One ssh_config directive derived from a command-line option."""

    directive: str
    value: str

    def line(self) -> str:
        return f"{self.directive} {format_value(self.directive, self.value)}"


@dataclass
class ConfigBlock:
    """Everything rendered for a single host stanza."""

    name: str
    host: str
    port: int
    user: str | None = None
    identity_file: str | None = None
    options: list[TranslatedOption] = field(default_factory=list)
    failure_comment: str | None = None

    @property
    def failed(self) -> bool:
        return self.failure_comment is not None
