"""Rendering of config blocks into ssh_config text."""

from typing import Iterable

from sshconfgen.types import ConfigBlock, TranslatedOption

HEADER = "# Generated by sshconfgen from inventory data. Manual edits will be overwritten."
INDENT = "  "
OPTIONS_COMMENT = "# Options extracted from connection arguments :"

# Emitted for every host, after the connection directives
SECURITY_DIRECTIVES = (
    TranslatedOption("UserKnownHostsFile", "/dev/null"),
    TranslatedOption("StrictHostKeyChecking", "no"),
    TranslatedOption("PasswordAuthentication", "yes"),
)


def block_directives(block: ConfigBlock) -> list[TranslatedOption]:
    """Fixed-order directives of a stanza, before any translated options."""
    directives = [TranslatedOption("HostName", block.host)]
    if block.user:
        directives.append(TranslatedOption("User", block.user))
    directives.append(TranslatedOption("Port", str(block.port)))
    directives.extend(SECURITY_DIRECTIVES)
    if block.identity_file:
        directives.append(TranslatedOption("IdentityFile", block.identity_file))
    return directives


def render_block(block: ConfigBlock) -> str:
    """Render a single host stanza (no trailing newline)."""
    lines = [f"Host {block.name}"]
    lines.extend(INDENT + directive.line() for directive in block_directives(block))

    if block.failed:
        lines.append("")
        lines.append(INDENT + block.failure_comment)
    elif block.options:
        lines.append("")
        lines.append(INDENT + OPTIONS_COMMENT)
        lines.extend(INDENT + option.line() for option in block.options)

    return "\n".join(lines)


def render(blocks: Iterable[ConfigBlock], header: bool = True) -> str:
    """Render all blocks. Output depends only on the blocks and their order."""
    parts = [HEADER] if header else []
    parts.extend(render_block(block) for block in blocks)
    if not parts:
        return ""
    return "\n\n".join(parts) + "\n"
