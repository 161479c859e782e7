"""
Structural checks for a pbxproj document.

These don't understand the object graph; they only make sure the file is
still something Xcode can parse: section markers pair up, delimiters
balance and the top-level keys are there exactly once.
"""

import re
from pathlib import Path

from .document import read_document
from .errors import StructuralError
from .scanner import OPENERS, depth_at, iter_delimiters, line_number

REQUIRED_KEYS = ('archiveVersion', 'classes', 'objectVersion', 'objects', 'rootObject')

MARKER_PATTERN = re.compile(r'/\* (Begin|End) (\w+) section \*/')


def _check_sections(document: str) -> list[str]:
    problems = []
    open_section = None
    seen = set()

    for match in MARKER_PATTERN.finditer(document):
        kind, name = match.groups()
        line = line_number(document, match.start())

        if kind == 'Begin':
            if open_section is not None:
                problems.append(f"Section {name} begins inside section {open_section} (line {line})")
            if name in seen:
                problems.append(f"Section {name} appears more than once (line {line})")
            open_section = name
            seen.add(name)
        elif name != open_section:
            problems.append(f"End of section {name} without a matching begin (line {line})")
        else:
            open_section = None

    if open_section is not None:
        problems.append(f"Section {open_section} is never closed")
    return problems


def _check_delimiters(document: str) -> list[str]:
    stack = []
    try:
        for index, ch in iter_delimiters(document):
            if ch in OPENERS:
                stack.append((index, ch))
                continue
            if not stack:
                return [f"Unexpected '{ch}' on line {line_number(document, index)}"]
            _, opener = stack.pop()
            if OPENERS[opener] != ch:
                return [f"Mismatched '{ch}' on line {line_number(document, index)}"]
    except StructuralError as e:
        return [str(e)]

    if stack:
        index, opener = stack[-1]
        return [f"'{opener}' on line {line_number(document, index)} is never closed"]
    return []


def _check_required_keys(document: str) -> list[str]:
    problems = []
    for key in REQUIRED_KEYS:
        pattern = re.compile(r'(?:^|(?<=[{;]))[ \t]*' + key + r'[ \t]*=', re.M)
        count = sum(1 for match in pattern.finditer(document) if depth_at(document, match.start()) == 1)
        if count != 1:
            problems.append(f"Top-level key {key} appears {count} times, expected once")
    return problems


def find_problems(document: str) -> list[str]:
    """Every structural problem found in the document (empty when well-formed)."""
    problems = _check_sections(document)

    delimiter_problems = _check_delimiters(document)
    problems += delimiter_problems

    # Depths are meaningless once the delimiters are broken
    if not delimiter_problems:
        problems += _check_required_keys(document)
    return problems


def validate(path: Path) -> bool:
    """
    Re-read the file and check it is structurally sound.
    Only raises if the file can't be read at all.
    """
    try:
        document = read_document(path)
    except UnicodeDecodeError as e:
        print(f"  ✗ {path} is not valid UTF-8: {e}")
        return False

    problems = find_problems(document)
    for problem in problems:
        print(f"  ✗ {problem}")
    return not problems
