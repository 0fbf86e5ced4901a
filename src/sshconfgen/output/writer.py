"""Atomic, permission-restricted writing of the generated config."""

import logging
import os
import tempfile
from pathlib import Path

from sshconfgen.errors import WriteFailure

logger = logging.getLogger(__name__)

FILE_MODE = 0o600
DIR_MODE = 0o700


def write_config(path: Path, text: str) -> Path:
    """
    Write text to path, replacing any existing file only once fully written.

    The content goes to a temp file next to the destination (mode 0600),
    is flushed and fsynced, then renamed over the destination.

    Raises:
        WriteFailure: on any OS error. No partial file is left behind.
    """
    path = Path(path)
    tmp_path: Path | None = None

    try:
        path.parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        tmp_path = Path(tmp_name)
        with os.fdopen(fd, "w") as f:
            os.fchmod(f.fileno(), FILE_MODE)
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise WriteFailure(path, e.strerror or str(e)) from e

    logger.info(f"Wrote {len(text)} bytes to {path}")
    return path
