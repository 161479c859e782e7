"""
Remove the storyboard scene setting from the app's Info.plist.
Views are created in code, so the scene must not load a storyboard.
"""

import re
from pathlib import Path

from ..document import read_document, write_document
from ..project_finder import project_root
from .base import BaseSetup

STORYBOARD_KEY = "UISceneStoryboardFile"

# The <key> line and the <string> line that follows it
STORYBOARD_PATTERN = re.compile(
    r'^[ \t]*<key>UISceneStoryboardFile</key>[ \t]*\r?\n[ \t]*<string>[^<]*</string>[ \t]*\r?\n',
    re.M,
)


def find_info_plist(directory: Path) -> Path | None:
    """First Info.plist below the project directory."""
    matches = sorted(Path(directory).rglob("Info.plist"))
    return matches[0] if matches else None


def remove_storyboard_references(content: str) -> str:
    return STORYBOARD_PATTERN.sub('', content)


class InfoPlistSetup(BaseSetup):
    """Strip UISceneStoryboardFile entries from Info.plist."""

    name = "info-plist"

    def apply(self) -> bool:
        info_plist = find_info_plist(project_root(self.project_file))
        if info_plist is None:
            print("  ⚠ Could not find Info.plist file. StoryBoard references not removed.")
            return True

        print(f"  Updating Info.plist: {info_plist}")
        content = read_document(info_plist)

        if STORYBOARD_KEY not in content:
            print("  ✓ StoryBoard references already removed from Info.plist")
            self.track(False)
            return True

        updated = remove_storyboard_references(content)
        if updated == content:
            print(f"  ✗ {STORYBOARD_KEY} is present but not in the expected <key>/<string> form")
            return False

        write_document(info_plist, updated)
        print("  ✓ StoryBoard references removed from Info.plist")
        self.track(True)
        return True
