"""
Exceptions raised while patching a project.pbxproj file.
"""

from pathlib import Path


class PbxprojError(Exception):
    """Base class for pbxproj patching failures."""


class StructuralError(PbxprojError):
    """The document is not (or would no longer be) a well-formed pbxproj."""

    def __init__(self, message: str, operation: str | None = None, section: str | None = None):
        super().__init__(message)
        self.operation = operation
        self.section = section


class BackupRestoreFailure(PbxprojError):
    """Restoring a backup failed; the project file needs manual attention."""

    def __init__(self, original: Path, backup: Path, reason: str):
        super().__init__(
            f"Could not restore {original} from backup {backup}: {reason}. "
            f"The backup has been kept for manual recovery."
        )
        self.original = original
        self.backup = backup
