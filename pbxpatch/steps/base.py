"""
Base setup step with common utilities.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from ..project_finder import detect_project_name


class BaseSetup(ABC):
    """Base class for all project setup steps."""

    name: str = "base"

    def __init__(self, project_file: Path, config: dict):
        self.project_file = Path(project_file)
        self.config = config
        self.project_name = detect_project_name(self.project_file)
        self.target_name = config.get("target_name") or self.project_name
        self.changes_made = 0
        self.changes_skipped = 0

    def track(self, changed: bool):
        """Count the outcome of one operation."""
        if changed:
            self.changes_made += 1
        else:
            self.changes_skipped += 1

    @abstractmethod
    def apply(self) -> bool:
        """
        Make this step's changes to the project.
        Returns True if successful, False otherwise.
        """
        pass

    def run(self) -> bool:
        """Run the step with a banner and a change count."""
        print(f"\n{'='*50}")
        print(f"Setting up: {self.name}")
        print('='*50)

        try:
            success = self.apply()
            print(f"  Changed: {self.changes_made}, Skipped (already present): {self.changes_skipped}")
            return success

        except Exception as e:
            print(f"  ✗ Setup failed: {e}")
            raise
