"""
Snapshots of the project file taken before a transaction mutates it.
"""

import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path

from .errors import BackupRestoreFailure


@dataclass(frozen=True)
class BackupHandle:
    """Where a snapshot of `original` was written."""

    original: Path
    backup: Path


def snapshot(path: Path) -> BackupHandle:
    """Copy the file's current bytes to a temporary file next to it."""
    path = Path(path)
    fd, name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".backup", dir=path.parent)
    os.close(fd)
    backup = Path(name)

    try:
        shutil.copyfile(path, backup)
    except OSError:
        # Don't leave an empty snapshot behind
        backup.unlink(missing_ok=True)
        raise

    return BackupHandle(original=path, backup=backup)


def restore(handle: BackupHandle):
    """Overwrite the original file with the snapshot's bytes."""
    try:
        shutil.copyfile(handle.backup, handle.original)
    except OSError as e:
        raise BackupRestoreFailure(handle.original, handle.backup, str(e)) from e


def discard(handle: BackupHandle) -> bool:
    """
    Delete the snapshot.
    A failure only leaves a stray file behind, so it is reported and ignored.
    """
    try:
        handle.backup.unlink()
        return True
    except OSError as e:
        print(f"  ⚠ Could not remove backup {handle.backup}: {e}")
        return False
