"""Translation of ssh command-line options into ssh_config directives."""

import logging
import re
import shlex
from dataclasses import dataclass, field
from typing import Sequence

from sshconfgen.errors import TranslationFailure
from sshconfgen.types import MULTI_ARGUMENT_DIRECTIVES, REST_OF_LINE_DIRECTIVES, TranslatedOption

logger = logging.getLogger(__name__)

# Flags taking a value, either attached (-p2222) or as the next token (-p 2222)
VALUE_FLAGS = {
    "B": "BindInterface",
    "b": "BindAddress",
    "c": "Ciphers",
    "D": "DynamicForward",
    "e": "EscapeChar",
    "I": "PKCS11Provider",
    "i": "IdentityFile",
    "J": "ProxyJump",
    "L": "LocalForward",
    "l": "User",
    "m": "MACs",
    "p": "Port",
    "R": "RemoteForward",
    "S": "ControlPath",
    "w": "TunnelDevice",
}

# Flags without a value; they may be bundled (-AC)
SWITCH_FLAGS: dict[str, tuple[tuple[str, str], ...]] = {
    "4": (("AddressFamily", "inet"),),
    "6": (("AddressFamily", "inet6"),),
    "A": (("ForwardAgent", "yes"),),
    "a": (("ForwardAgent", "no"),),
    "C": (("Compression", "yes"),),
    "K": (("GSSAPIAuthentication", "yes"), ("GSSAPIDelegateCredentials", "yes")),
    "k": (("GSSAPIDelegateCredentials", "no"),),
    "q": (("LogLevel", "QUIET"),),
    "T": (("RequestTTY", "no"),),
    "t": (("RequestTTY", "yes"),),
    "X": (("ForwardX11", "yes"),),
    "x": (("ForwardX11", "no"),),
    "Y": (("ForwardX11Trusted", "yes"),),
}

GENERIC_OPTION_FLAG = "o"

# Written as two arguments in ssh_config: "[bind:]port host:hostport"
FORWARD_DIRECTIVES = MULTI_ARGUMENT_DIRECTIVES

# A line break or stray quote in a value would leak into the following lines
LINE_BREAKS = ("\n", "\r")

# ssh accepts "Key=Value", "Key = Value" and "Key Value" after -o
_KEY_VALUE_RE = re.compile(r"^\s*([A-Za-z][A-Za-z0-9]*)(?:\s*=\s*|\s+)(.*)$")


@dataclass
class TranslationResult:
    """Outcome of translating one host's connection arguments."""

    options: list[TranslatedOption] = field(default_factory=list)
    error: TranslationFailure | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


def split_args(args: str | Sequence[str] | None) -> list[str]:
    """Split a shell-style argument string into tokens. Sequences pass through."""
    if args is None:
        return []
    if isinstance(args, str):
        try:
            return shlex.split(args)
        except ValueError as e:
            raise TranslationFailure(f"Cannot split arguments: {e}") from e
    return [str(arg) for arg in args]


def _parse_generic(value: str, token: str) -> TranslatedOption:
    match = _KEY_VALUE_RE.match(value)
    if match is None or not match.group(2).strip():
        raise TranslationFailure(f"Expected Key=Value after -o, got {value!r}", token)
    return TranslatedOption(directive=match.group(1), value=match.group(2))


def _parse_port(value: str, token: str) -> TranslatedOption:
    if not value.isdigit() or not 1 <= int(value) <= 65535:
        raise TranslationFailure(f"Invalid port: {value!r}", token)
    return TranslatedOption(directive="Port", value=str(int(value)))


def _parse_forward(option: TranslatedOption, token: str) -> TranslatedOption:
    """Turn "[bind:]port:host:hostport" into "[bind:]port host:hostport"."""
    directive, value = option.directive, option.value
    parts = value.split()
    if len(parts) == 2:
        return TranslatedOption(directive=directive, value=" ".join(parts))
    if len(parts) != 1:
        raise TranslationFailure(f"Invalid {directive} specification: {value!r}", token)

    fields = parts[0].rsplit(":", 2)
    if len(fields) == 3 and all(fields):
        listen, host, hostport = fields
        return TranslatedOption(directive=directive, value=f"{listen} {host}:{hostport}")
    # Remote dynamic forwarding takes only the listen side
    if directive.lower() == "remoteforward" and all(fields):
        return TranslatedOption(directive=directive, value=parts[0])
    raise TranslationFailure(f"Invalid {directive} specification: {value!r}", token)


def _check_value(option: TranslatedOption, token: str) -> TranslatedOption:
    value = option.value
    if any(c in value for c in LINE_BREAKS):
        raise TranslationFailure(f"Line break in value of {option.directive}", token)
    if '"' in value:
        rest_of_line = option.directive.lower() in REST_OF_LINE_DIRECTIVES
        if not rest_of_line or value.count('"') % 2:
            raise TranslationFailure(f"Unexpected quote in value of {option.directive}", token)
    return option


def _translate_value(flag: str, value: str, token: str) -> TranslatedOption:
    if flag == GENERIC_OPTION_FLAG:
        option = _parse_generic(value, token)
    elif flag == "p":
        option = _parse_port(value, token)
    else:
        option = TranslatedOption(directive=VALUE_FLAGS[flag], value=value)

    option = _check_value(option, token)
    if option.directive.lower() in FORWARD_DIRECTIVES:
        option = _parse_forward(option, token)
    return option


def parse_args(tokens: Sequence[str]) -> list[TranslatedOption]:
    """
    Parse ssh command-line tokens into directives, in token order.

    Raises:
        TranslationFailure: on unknown flags, positional arguments or
            flags missing their value.
    """
    options: list[TranslatedOption] = []
    i = 0

    while i < len(tokens):
        token = tokens[i]
        i += 1

        if len(token) < 2 or not token.startswith("-") or token == "--":
            raise TranslationFailure(f"Unexpected argument: {token!r}", token)

        pos = 1
        while pos < len(token):
            flag = token[pos]
            pos += 1

            if flag in SWITCH_FLAGS:
                options.extend(TranslatedOption(d, v) for d, v in SWITCH_FLAGS[flag])
                continue

            if flag != GENERIC_OPTION_FLAG and flag not in VALUE_FLAGS:
                raise TranslationFailure(f"Unsupported option: -{flag}", token)

            # A value flag consumes the rest of the token or the next token
            value = token[pos:]
            if not value:
                if i >= len(tokens) or tokens[i].startswith("-") or not tokens[i]:
                    raise TranslationFailure(f"Option -{flag} requires a value", token)
                value = tokens[i]
                i += 1
            options.append(_translate_value(flag, value, token))
            break

    return options


def translate(tokens: str | Sequence[str] | None) -> TranslationResult:
    """Translate connection arguments. Never raises; failures land in the result."""
    try:
        options = parse_args(split_args(tokens))
    except TranslationFailure as e:
        logger.debug(f"Translation failed: {e}")
        return TranslationResult(error=e)

    logger.debug(f"Translated {len(options)} option(s)")
    return TranslationResult(options=options)


def options_to_args(options: Sequence[TranslatedOption]) -> list[str]:
    """Express directives back as generic -o tokens."""
    args: list[str] = []
    for option in options:
        args.extend([f"-{GENERIC_OPTION_FLAG}", f"{option.directive}={option.value}"])
    return args
