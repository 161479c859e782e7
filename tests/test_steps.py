"""
Tests for the setup steps and the setup_project.py command line.
"""

import json

import pytest

import setup_project
from pbxpatch.config import DEFAULT_CONFIG
from pbxpatch.operations import group_by_name, project_entry
from pbxpatch.sections import attribute_value, find_attribute, list_items
from pbxpatch.steps import BaseSetup, DirectorySetup, InfoPlistSetup, LibrarySetup
from pbxpatch.steps.info_plist import find_info_plist, remove_storyboard_references
from pbxpatch.validator import find_problems

INFO_PLIST = """<?xml version="1.0" encoding="UTF-8"?>
<plist version="1.0">
<dict>
\t<key>UIApplicationSceneManifest</key>
\t<dict>
\t\t<key>UISceneConfigurations</key>
\t\t<dict>
\t\t\t<key>UIWindowSceneSessionRoleApplication</key>
\t\t\t<array>
\t\t\t\t<dict>
\t\t\t\t\t<key>UISceneConfigurationName</key>
\t\t\t\t\t<string>Default Configuration</string>
\t\t\t\t\t<key>UISceneStoryboardFile</key>
\t\t\t\t\t<string>Main</string>
\t\t\t\t</dict>
\t\t\t</array>
\t\t</dict>
\t</dict>
</dict>
</plist>
"""


def read(path):
    with open(path, 'r', encoding='utf-8', newline='') as f:
        return f.read()


# =============================================================================
# Base step
# =============================================================================

class CountingSetup(BaseSetup):
    name = "counting"

    def __init__(self, project_file, config, outcomes):
        super().__init__(project_file, config)
        self.outcomes = outcomes

    def apply(self):
        for outcome in self.outcomes:
            if isinstance(outcome, Exception):
                raise outcome
            self.track(outcome)
        return True


class TestBaseSetup:
    """Banner, change counts and error reporting."""

    def test_counts(self, project_file, capsys):
        step = CountingSetup(project_file, DEFAULT_CONFIG, [True, False, True])
        assert step.run() is True
        assert (step.changes_made, step.changes_skipped) == (2, 1)

        out = capsys.readouterr().out
        assert "Setting up: counting" in out
        assert "Changed: 2, Skipped (already present): 1" in out

    def test_target_name_defaults_to_project(self, project_file):
        assert CountingSetup(project_file, DEFAULT_CONFIG, []).target_name == "App"
        config = dict(DEFAULT_CONFIG, target_name="AppTests")
        assert CountingSetup(project_file, config, []).target_name == "AppTests"

    def test_failure_is_reported_and_raised(self, project_file, capsys):
        step = CountingSetup(project_file, DEFAULT_CONFIG, [RuntimeError("boom")])
        with pytest.raises(RuntimeError):
            step.run()
        assert "✗ Setup failed: boom" in capsys.readouterr().out


# =============================================================================
# Libraries
# =============================================================================

class TestLibrarySetup:
    """SwiftJsonUI always, SimpleApiNetwork on request."""

    def test_default_packages(self, project_file):
        step = LibrarySetup(project_file, DEFAULT_CONFIG)
        assert [package.name for package in step.packages()] == ["SwiftJsonUI"]

    def test_network_and_extra_packages(self, project_file):
        config = dict(DEFAULT_CONFIG, use_network=True, packages=[
            {"name": "Foo", "repository_url": "https://example.com/Foo", "minimum_version": "1.0.0"},
        ])
        step = LibrarySetup(project_file, config)
        assert [package.name for package in step.packages()] == ["SwiftJsonUI", "SimpleApiNetwork", "Foo"]

    def test_adds_packages_once(self, project_file):
        config = dict(DEFAULT_CONFIG, use_network=True)
        step = LibrarySetup(project_file, config)
        assert step.run() is True
        assert step.changes_made == 2

        document = read(project_file)
        assert find_problems(document) == []
        assert '"https://github.com/Tai-Kimura/SwiftJsonUI"' in document
        assert "minimumVersion = 5.3.0;" in document
        assert "minimumVersion = 2.1.8;" in document
        project = project_entry(document)
        assert len(list_items(document, find_attribute(document, project, "packageReferences"))) == 2

        again = LibrarySetup(project_file, config)
        again.run()
        assert (again.changes_made, again.changes_skipped) == (0, 2)
        assert read(project_file) == document


# =============================================================================
# Directories
# =============================================================================

class TestDirectorySetup:
    """Missing directories are created and grouped."""

    def test_creates_directories_and_groups(self, project_file, tmp_path):
        step = DirectorySetup(project_file, DEFAULT_CONFIG)
        assert step.run() is True
        assert step.changes_made == 7

        assert (tmp_path / "App" / "Core" / "Base").is_dir()
        document = read(project_file)
        assert find_problems(document) == []

        core = group_by_name(document, "Core")
        base = group_by_name(document, "Base")
        assert base.identifier in list_items(document, find_attribute(document, core, "children"))
        assert attribute_value(document, base, "path") == "App/Core/Base"

        app = group_by_name(document, "App")
        assert core.identifier in list_items(document, find_attribute(document, app, "children"))

    def test_nothing_to_do(self, project_file, capsys):
        DirectorySetup(project_file, DEFAULT_CONFIG).run()
        document = read(project_file)

        step = DirectorySetup(project_file, DEFAULT_CONFIG)
        assert step.run() is True
        assert step.changes_made == 0
        assert read(project_file) == document
        assert "All directories already exist" in capsys.readouterr().out


# =============================================================================
# Info.plist
# =============================================================================

class TestInfoPlistSetup:
    """Storyboard references are removed from the scene manifest."""

    def test_remove_storyboard_references(self):
        updated = remove_storyboard_references(INFO_PLIST)
        assert "UISceneStoryboardFile" not in updated
        assert "<string>Main</string>" not in updated
        assert "<string>Default Configuration</string>" in updated

    def test_find_info_plist(self, tmp_path):
        (tmp_path / "App").mkdir()
        (tmp_path / "App" / "Info.plist").write_text(INFO_PLIST)
        assert find_info_plist(tmp_path) == tmp_path / "App" / "Info.plist"
        assert find_info_plist(tmp_path / "App" / "Missing") is None

    def test_updates_plist(self, project_file, tmp_path):
        plist = tmp_path / "App" / "Info.plist"
        plist.parent.mkdir()
        plist.write_text(INFO_PLIST)

        step = InfoPlistSetup(project_file, DEFAULT_CONFIG)
        assert step.run() is True
        assert step.changes_made == 1
        assert "UISceneStoryboardFile" not in plist.read_text()

        again = InfoPlistSetup(project_file, DEFAULT_CONFIG)
        assert again.run() is True
        assert again.changes_skipped == 1

    def test_missing_plist_is_a_warning(self, project_file, capsys):
        assert InfoPlistSetup(project_file, DEFAULT_CONFIG).run() is True
        assert "Could not find Info.plist" in capsys.readouterr().out

    def test_unexpected_layout_fails(self, project_file, tmp_path):
        plist = tmp_path / "Info.plist"
        plist.write_text("<dict><key>UISceneStoryboardFile</key><string>Main</string></dict>\n")
        assert InfoPlistSetup(project_file, DEFAULT_CONFIG).run() is False


# =============================================================================
# Command line
# =============================================================================

class TestCommandLine:
    """setup_project.main"""

    def test_list(self, capsys):
        assert setup_project.main(["--list"]) == 0
        out = capsys.readouterr().out
        for name in setup_project.STEPS:
            assert f"  - {name}" in out

    def test_runs_selected_step(self, project_file, tmp_path, capsys):
        exit_code = setup_project.main(["libraries", "--config-dir", str(tmp_path)])

        assert exit_code == 0
        assert "SwiftJsonUI" in read(project_file)
        assert "libraries: 1 changes (0 already present)" in capsys.readouterr().out

    def test_project_from_config(self, project_file, tmp_path):
        config_dir = tmp_path / "settings"
        config_dir.mkdir()
        (config_dir / "config.json").write_text(json.dumps({"project_file": "../App.xcodeproj/project.pbxproj"}))

        assert setup_project.main(["libraries", "--config-dir", str(config_dir)]) == 0
        assert "SwiftJsonUI" in read(project_file)

    def test_explicit_project(self, project_file, tmp_path):
        exit_code = setup_project.main(["directories", "--project", str(project_file), "--config-dir", str(tmp_path)])
        assert exit_code == 0
        assert (tmp_path / "App" / "View").is_dir()

    def test_unknown_step(self, project_file, tmp_path, capsys):
        assert setup_project.main(["bogus", "--config-dir", str(tmp_path)]) == 1
        assert "Unknown step: bogus" in capsys.readouterr().out

    def test_failed_step_exit_code(self, project_file, tmp_path):
        (tmp_path / "config.json").write_text(json.dumps({"target_name": "Missing"}))
        original = project_file.read_bytes()

        assert setup_project.main(["libraries", "--config-dir", str(tmp_path)]) == 1
        assert project_file.read_bytes() == original

    def test_no_project_found(self, tmp_path, capsys):
        assert setup_project.main(["--config-dir", str(tmp_path)]) == 1
        assert "No .xcodeproj found" in capsys.readouterr().out

    def test_run_setup_results(self, project_file):
        results = setup_project.run_setup(project_file, dict(DEFAULT_CONFIG), ["libraries", "info-plist"])
        assert results["libraries"] == {'success': True, 'changed': 1, 'skipped': 0}
        assert results["info-plist"]["success"] is True
