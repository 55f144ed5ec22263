"""
Module: builder.output.file_locking

Purpose:
    Write compiled PDFs under an exclusive cross-platform file lock so
    two processes compiling to the same path never interleave output.

Key Functions:
    - locked_file: Context manager for locked file access
    - write_locked_bytes: Write bytes atomically with exclusive lock

Dependencies:
    - portalocker: Cross-platform file locking

Used By:
    - cli: compile command
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

import portalocker

logger = logging.getLogger(__name__)


@contextmanager
def locked_file(
    path: Path,
    mode: str = 'rb',
    lock_type: int = portalocker.LOCK_EX,
) -> Generator:
    """
    Context manager for cross-platform locked file access.

    Args:
        path: Path to file.
        mode: File open mode (binary modes only).
        lock_type: Lock type (LOCK_EX for exclusive, LOCK_SH for shared).

    Yields:
        Open file handle with lock held.

    Example:
        >>> with locked_file(path, 'ab') as f:
        ...     f.write(b'data')
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    # Ensure file exists for read modes
    if 'r' in mode and not path.exists():
        path.touch()

    with open(path, mode) as f:
        portalocker.lock(f, lock_type)
        try:
            yield f
        finally:
            portalocker.unlock(f)


def write_locked_bytes(path: Path, data: bytes) -> None:
    """
    Write bytes to a file with exclusive lock (atomic via temp file).

    The lock is taken on a sidecar ``.lock`` file so the target itself
    can be replaced atomically.

    Args:
        path: Destination file.
        data: Bytes to write.

    Raises:
        OSError: If the write or the replace fails (the temp file is
            removed first).
    """
    path = Path(path)
    lock_path = path.with_name(path.name + ".lock")
    with locked_file(lock_path, 'ab'):
        temp_path = path.with_name(path.name + ".tmp")
        try:
            temp_path.write_bytes(data)
            os.replace(temp_path, path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise
    logger.debug(f"Wrote {len(data)} bytes to {path}")
