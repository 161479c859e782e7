"""
Identifiers for new pbxproj objects.

Xcode names every object with 24 uppercase hex characters. New identifiers
only need to avoid collisions with the ones already in the document, so
they are drawn at random and checked against the document text.
"""

import os
import re

UUID_PATTERN = re.compile(r'\b[0-9A-F]{24}\b')


def generate_uuid() -> str:
    """Generate a unique 24-character hex ID like Xcode uses"""
    return ''.join(format(x, '02X') for x in os.urandom(12))


def existing_identifiers(document: str) -> set[str]:
    """All identifier-shaped tokens already present in the document."""
    return set(UUID_PATTERN.findall(document))


class IdentifierGenerator:
    """Hands out identifiers that are new to one document, for one transaction."""

    def __init__(self, document: str):
        self.taken = existing_identifiers(document)
        self.issued: list[str] = []

    def next(self) -> str:
        """Return an identifier not in the document and not issued before."""
        while True:
            candidate = generate_uuid()
            if candidate not in self.taken:
                self.taken.add(candidate)
                self.issued.append(candidate)
                return candidate
