"""Exceptions raised by sshconfgen."""


class SSHConfGenError(Exception):
    """Base class for all sshconfgen errors."""


class InventoryError(SSHConfGenError):
    """Inventory data could not be turned into host records."""


class MissingRequiredAttribute(InventoryError):
    """A host has no usable address (neither `host` nor `name`)."""

    def __init__(self, attribute: str, host_name: str | None = None):
        self.attribute = attribute
        self.host_name = host_name
        where = f"host '{host_name}'" if host_name else "unnamed host"
        super().__init__(f"Missing required attribute '{attribute}' for {where}")


class DuplicateHostName(InventoryError):
    """Two inventory entries share the same name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Duplicate host name: {name}")


class NoHostsError(SSHConfGenError):
    """The inventory resolved to zero hosts."""


class TranslationFailure(SSHConfGenError):
    """Connection arguments could not be translated to config directives."""

    def __init__(self, message: str, token: str | None = None):
        self.token = token
        super().__init__(message)


class WriteFailure(SSHConfGenError):
    """The generated config could not be written to its destination."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not write {path}: {reason}")
