"""
Shared fixtures: a small but complete Xcode project.
"""

import shutil
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"
PROJECT_FIXTURE = FIXTURES / "App.pbxproj"


@pytest.fixture
def project_text():
    """The fixture project as a string, exactly as stored on disk."""
    with open(PROJECT_FIXTURE, 'r', encoding='utf-8', newline='') as f:
        return f.read()


@pytest.fixture
def project_file(tmp_path):
    """A writable copy at <tmp>/App.xcodeproj/project.pbxproj."""
    xcodeproj = tmp_path / "App.xcodeproj"
    xcodeproj.mkdir()
    path = xcodeproj / "project.pbxproj"
    shutil.copyfile(PROJECT_FIXTURE, path)
    return path
