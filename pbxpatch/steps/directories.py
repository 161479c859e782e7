"""
Directory layout for views, layouts, styles and bindings.
"""

from ..operations import add_folder_group
from ..project_finder import setup_paths
from .base import BaseSetup


class DirectorySetup(BaseSetup):
    """Create missing directories and add a group for each to the project."""

    name = "directories"

    def apply(self) -> bool:
        paths = setup_paths(self.config, self.project_file)

        print("  Checking directories...")
        for path, present in paths.status().items():
            print(f"    {'Exists' if present else 'Missing'}: {path}")

        missing = paths.missing()
        if not missing:
            print("  ✓ All directories already exist")
            return True

        for _, path in missing:
            path.mkdir(parents=True, exist_ok=True)
            print(f"  ✓ Created directory: {path}")

        # Groups are added in directories() order so Core exists before UI and Base
        for group_name, path in missing:
            parent = paths.core_path.name if path.parent == paths.core_path else paths.source_path.name
            self.track(add_folder_group(self.project_file, group_name, paths.relative(path), parent))
        return True
