"""
Duplicate detection before an entry is added.

A fingerprint is a handful of substrings (for a package: its product name
and repository URL). If all of them appear anywhere in the document the
entry is treated as already present. This errs on the side of "present",
which also covers entries somebody added by hand in Xcode.
"""


def exists(document: str, fingerprint) -> bool:
    """True when every part of the fingerprint occurs in the document."""
    parts = tuple(fingerprint)
    if not parts:
        raise ValueError("A fingerprint needs at least one substring")
    return all(part in document for part in parts)
