"""Option translator: ssh command-line arguments to ssh_config directives."""

from sshconfgen.translator.options import (
    TranslationResult,
    options_to_args,
    parse_args,
    split_args,
    translate,
)

__all__ = [
    "TranslationResult",
    "options_to_args",
    "parse_args",
    "split_args",
    "translate",
]
