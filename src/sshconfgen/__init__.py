"""sshconfgen - OpenSSH client config from inventory data."""

__version__ = "0.1.0"
