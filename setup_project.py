#!/usr/bin/env python3
"""
Prepare an Xcode project for SwiftJsonUI bindings.

Usage:
    python setup_project.py                  # Run all setup steps
    python setup_project.py libraries        # Run specific steps
    python setup_project.py --list           # List available steps
    python setup_project.py --project App.xcodeproj/project.pbxproj
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path

from pbxpatch.config import load_config
from pbxpatch.project_finder import find_project_file
from pbxpatch.steps import (
    DirectorySetup,
    LibrarySetup,
    InfoPlistSetup,
)

# Available steps, in the order they run
STEPS = {
    'directories': DirectorySetup,
    'libraries': LibrarySetup,
    'info-plist': InfoPlistSetup,
}


def resolve_project_file(project: str | None, config: dict, config_dir: Path) -> Path:
    """Project file from the command line, then config.json, then a search."""
    if project:
        return Path(project)
    if config.get("project_file"):
        return config_dir / config["project_file"]
    return find_project_file(config_dir)


def run_setup(project_file: Path, config: dict, step_names: list[str] | None = None):
    """Run the specified steps (or all if None)."""
    steps_to_run = step_names or list(STEPS.keys())
    results = {}

    for name in steps_to_run:
        if name not in STEPS:
            print(f"Unknown step: {name}")
            print(f"Available: {', '.join(STEPS.keys())}")
            results[name] = {'success': False, 'error': 'unknown step'}
            continue

        step = STEPS[name](project_file, config)

        try:
            success = step.run()
            results[name] = {
                'success': success,
                'changed': step.changes_made,
                'skipped': step.changes_skipped,
            }
        except Exception as e:
            print(f"Error in {name}: {e}")
            results[name] = {'success': False, 'error': str(e)}

    return results


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description='Add SwiftJsonUI packages, directories and groups to an Xcode project'
    )
    parser.add_argument(
        'steps',
        nargs='*',
        help=f'Specific steps to run. Available: {", ".join(STEPS.keys())}'
    )
    parser.add_argument(
        '--project',
        help='Path to project.pbxproj (default: config.json, then search upwards)'
    )
    parser.add_argument(
        '--config-dir',
        default='.',
        help='Directory containing config.json (default: current directory)'
    )
    parser.add_argument(
        '--list',
        action='store_true',
        help='List available steps'
    )

    args = parser.parse_args(argv)

    if args.list:
        print("Available steps:")
        for name in STEPS:
            print(f"  - {name}")
        return 0

    config_dir = Path(args.config_dir)
    try:
        config = load_config(config_dir)
        project_file = resolve_project_file(args.project, config, config_dir)
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    print("\n" + "=" * 60)
    print("XCODE PROJECT SETUP")
    print(f"Project: {project_file}")
    print(f"Started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print("=" * 60)

    results = run_setup(project_file, config, args.steps or None)

    # Summary
    print("\n" + "=" * 60)
    print("SETUP SUMMARY")
    print("=" * 60)

    total_changed = 0
    total_skipped = 0

    for name, result in results.items():
        status = "✓" if result.get('success') else "✗"
        changed = result.get('changed', 0)
        skipped = result.get('skipped', 0)
        total_changed += changed
        total_skipped += skipped

        if 'error' in result:
            print(f"  {status} {name}: ERROR - {result['error']}")
        else:
            print(f"  {status} {name}: {changed} changes ({skipped} already present)")

    print("-" * 40)
    print(f"  Total: {total_changed} changes ({total_skipped} already present)")

    return 0 if all(result.get('success') for result in results.values()) else 1


if __name__ == '__main__':
    sys.exit(main())
