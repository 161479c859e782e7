"""
Reading and writing the project file without touching its line endings.
"""

from pathlib import Path


def read_document(path: Path) -> str:
    with open(path, 'r', encoding='utf-8', newline='') as f:
        return f.read()


def open_for_write(path: Path):
    """Open for writing. The file is only truncated once this succeeds."""
    return open(path, 'w', encoding='utf-8', newline='')


def write_document(path: Path, document: str):
    with open_for_write(path) as f:
        f.write(document)
