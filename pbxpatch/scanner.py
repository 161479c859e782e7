"""
Delimiter scanning for the pbxproj text format.

Braces and parentheses only count when they sit outside quoted strings
and comments: values such as "$(inherited)" and comments such as
/* XCRemoteSwiftPackageReference "Foo" */ are skipped whole.
"""

from .errors import StructuralError

OPENERS = {'{': '}', '(': ')'}
CLOSERS = {'}': '{', ')': '('}


def line_number(text: str, index: int) -> int:
    """1-based line number of an offset, for error messages."""
    return text.count('\n', 0, index) + 1


def skip_literal(text: str, index: int, end: int | None = None) -> int | None:
    """
    If a quoted string or comment starts at `index`, return the offset just
    past it. Returns None when no literal starts there.
    """
    end = len(text) if end is None else end
    ch = text[index]

    if ch == '"':
        i = index + 1
        while i < end:
            if text[i] == '\\':
                i += 2
                continue
            if text[i] == '"':
                return i + 1
            i += 1
        raise StructuralError(f"Unterminated string starting on line {line_number(text, index)}")

    if ch == '/' and index + 1 < end:
        following = text[index + 1]
        if following == '*':
            close = text.find('*/', index + 2, end)
            if close == -1:
                raise StructuralError(f"Unterminated comment starting on line {line_number(text, index)}")
            return close + 2
        if following == '/':
            newline = text.find('\n', index + 2, end)
            return end if newline == -1 else newline + 1

    return None


def iter_delimiters(text: str, start: int = 0, end: int | None = None):
    """Yield (offset, char) for every brace or parenthesis outside literals."""
    end = len(text) if end is None else end
    i = start
    while i < end:
        skipped = skip_literal(text, i, end)
        if skipped is not None:
            i = skipped
            continue
        if text[i] in OPENERS or text[i] in CLOSERS:
            yield i, text[i]
        i += 1


def matching_close(text: str, open_index: int) -> int:
    """Offset of the delimiter closing the one at `open_index`."""
    opener = text[open_index]
    if opener not in OPENERS:
        raise ValueError(f"No opening delimiter at offset {open_index}")

    stack = []
    for index, ch in iter_delimiters(text, open_index):
        if ch in OPENERS:
            stack.append(ch)
            continue
        if not stack or OPENERS[stack.pop()] != ch:
            raise StructuralError(f"Mismatched '{ch}' on line {line_number(text, index)}")
        if not stack:
            return index

    raise StructuralError(f"'{opener}' on line {line_number(text, open_index)} is never closed")


def depth_at(text: str, position: int, start: int = 0) -> int | None:
    """
    Nesting depth at `position`, counting delimiters from `start`.
    Returns None when `position` falls inside a quoted string or comment.
    """
    depth = 0
    i = start
    while i < position:
        skipped = skip_literal(text, i)
        if skipped is not None:
            if skipped > position:
                return None
            i = skipped
            continue
        if text[i] in OPENERS:
            depth += 1
        elif text[i] in CLOSERS:
            depth -= 1
        i += 1
    return depth
