"""
Backup, mutate, validate, then commit or roll back.

Every write to a project file goes through a Transaction:

    IDLE -> BACKED_UP -> MUTATED -> VALIDATED -> COMMITTED
                     \\           \\
                      -> ROLLED_BACK

The mutation works on the document in memory and the result is written
once. If the write fails or the written file fails validation, the backup
is copied back so the file is byte-identical to what it was. Errors raised
before the write leave the file alone and only drop the backup.
"""

from enum import Enum
from pathlib import Path

from .backup import discard, restore, snapshot
from .document import open_for_write, read_document
from .errors import PbxprojError, StructuralError
from .validator import find_problems, validate


class TransactionState(Enum):
    IDLE = "idle"
    BACKED_UP = "backed-up"
    MUTATED = "mutated"
    VALIDATED = "validated"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled-back"


class Transaction:
    """One edit of one project file. Not reusable."""

    def __init__(self, project_file: Path, operation: str, validator=validate):
        self.project_file = Path(project_file)
        self.operation = operation
        self.validator = validator
        self.state = TransactionState.IDLE
        self.changed = False

    def run(self, mutate) -> str:
        """
        Apply mutate(document) -> document to the file.

        Returns the committed document. Errors are re-raised with the
        operation attached (`StructuralError.operation` or a note); a
        validation failure raises StructuralError.
        """
        if self.state is not TransactionState.IDLE:
            raise RuntimeError(f"Transaction for {self.operation} is already {self.state.value}")

        handle = snapshot(self.project_file)
        self.state = TransactionState.BACKED_UP
        written = False

        try:
            document = read_document(self.project_file)
            problems = find_problems(document)
            if problems:
                raise StructuralError(
                    f"{self.project_file} is not a well-formed project file: {problems[0]}",
                    operation=self.operation,
                )

            updated = mutate(document)
            if updated != document:
                with open_for_write(self.project_file) as f:
                    written = True
                    f.write(updated)
                self.changed = True
            self.state = TransactionState.MUTATED

            valid = self.validator(self.project_file)
        except Exception as e:
            print(f"  ✗ Error during {self.operation}: {e}")
            _attach_operation(e, self.operation)
            if written:
                self._rollback(handle)
            else:
                self._abandon(handle)
            raise

        if not valid:
            print(f"  ✗ pbxproj validation failed after {self.operation}, rolling back...")
            self._rollback(handle)
            raise StructuralError(
                f"pbxproj file corruption detected after {self.operation}",
                operation=self.operation,
            )

        self.state = TransactionState.VALIDATED
        discard(handle)
        self.state = TransactionState.COMMITTED
        return updated

    def _rollback(self, handle):
        try:
            restore(handle)
        finally:
            self.state = TransactionState.ROLLED_BACK
        discard(handle)
        self.changed = False
        print("  Restored pbxproj file from backup")

    def _abandon(self, handle):
        # Nothing was written, the file is still the original
        self.state = TransactionState.ROLLED_BACK
        discard(handle)
        self.changed = False


def _attach_operation(error: Exception, operation: str):
    if isinstance(error, PbxprojError):
        if getattr(error, "operation", None) is None:
            error.operation = operation
        return
    error.add_note(f"during {operation}")


def apply(project_file: Path, operation: str, mutate, validator=validate) -> Transaction:
    """Run a single mutation as its own transaction."""
    transaction = Transaction(project_file, operation, validator=validator)
    transaction.run(mutate)
    return transaction
