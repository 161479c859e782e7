"""
Locating sections, entries and attributes inside a pbxproj document.

Sections are the regions Xcode delimits with literal comments:

    /* Begin PBXBuildFile section */
    ...
    /* End PBXBuildFile section */

They never nest, so finding one is a plain text search. Entries and
attributes inside them are located with the delimiter scanner so that
quoted values and comments can't throw off the brace matching.
"""

import re
from dataclasses import dataclass

from .errors import StructuralError
from .scanner import depth_at, matching_close, skip_literal

BEGIN_MARKER = "/* Begin {} section */"
END_MARKER = "/* End {} section */"

# `<ID> /* comment */ = {` at the start of a line
ENTRY_HEAD = re.compile(r'^[ \t]*([0-9A-Za-z_]+)(?:[ \t]+/\*[ \t]*(.*?)[ \t]*\*/)?[ \t]*=[ \t]*\{', re.M)

COMMENT = re.compile(r'/\*.*?\*/', re.S)


def line_start(text: str, index: int) -> int:
    """Offset of the first character of the line containing `index`."""
    return text.rfind('\n', 0, index) + 1


def line_end(text: str, index: int) -> int:
    """Offset just past the newline ending the line containing `index`."""
    newline = text.find('\n', index)
    return len(text) if newline == -1 else newline + 1


@dataclass(frozen=True)
class SectionSpan:
    """
    Offsets of one section.

    New entries go at `interior_end`, the start of the end marker's line.
    `stop` is the offset just past the end marker's line.
    """

    name: str
    begin: int
    end: int
    interior_start: int
    interior_end: int
    stop: int


@dataclass(frozen=True)
class Anchor:
    """A section a missing section can be created next to."""

    section: str
    placement: str = "after"  # or "before"

    def __post_init__(self):
        if self.placement not in ("after", "before"):
            raise ValueError(f"Anchor placement must be 'after' or 'before', not {self.placement!r}")


@dataclass(frozen=True)
class EntrySpan:
    """One `<ID> /* comment */ = { ... };` record inside a section."""

    identifier: str
    comment: str | None
    start: int
    open_brace: int
    close_brace: int
    end: int


@dataclass(frozen=True)
class AttributeSpan:
    """One `key = value;` pair directly inside an entry."""

    key: str
    start: int
    value_start: int
    value_end: int
    stop: int
    is_list: bool


def find_section(document: str, name: str) -> SectionSpan | None:
    """Find the section called `name`, or None when the document has none."""
    begin_marker = BEGIN_MARKER.format(name)
    begin = document.find(begin_marker)
    if begin == -1:
        return None

    end_marker = END_MARKER.format(name)
    end = document.find(end_marker, begin + len(begin_marker))
    if end == -1:
        raise StructuralError(f"Section {name} has no end marker", section=name)

    interior_start = line_end(document, begin + len(begin_marker))
    interior_end = line_start(document, end)
    if interior_end < interior_start:
        raise StructuralError(f"Section {name} begins and ends on the same line", section=name)

    return SectionSpan(
        name=name,
        begin=begin,
        end=end,
        interior_start=interior_start,
        interior_end=interior_end,
        stop=line_end(document, end + len(end_marker)),
    )


def find_anchor(document: str, anchors) -> tuple[Anchor, SectionSpan]:
    """Return the first anchor whose section exists in the document."""
    for anchor in anchors:
        span = find_section(document, anchor.section)
        if span is not None:
            return anchor, span

    names = ', '.join(anchor.section for anchor in anchors) or '(none given)'
    raise StructuralError(f"None of the anchor sections exist: {names}")


def find_entries(document: str, span: SectionSpan):
    """Yield every top-level entry of a section, in document order."""
    position = span.interior_start
    while True:
        match = ENTRY_HEAD.search(document, position, span.interior_end)
        if not match:
            return

        open_brace = match.end() - 1
        close_brace = matching_close(document, open_brace)
        end = close_brace + 1
        if end < len(document) and document[end] == ';':
            end += 1

        yield EntrySpan(
            identifier=match.group(1),
            comment=match.group(2),
            start=match.start(),
            open_brace=open_brace,
            close_brace=close_brace,
            end=end,
        )
        position = end


def find_entry(document: str, section: str, predicate=None) -> EntrySpan | None:
    """First entry of `section` for which predicate(document, entry) holds."""
    span = find_section(document, section)
    if span is None:
        return None

    for entry in find_entries(document, span):
        if predicate is None or predicate(document, entry):
            return entry
    return None


def find_entry_by_id(document: str, section: str, identifier: str) -> EntrySpan | None:
    return find_entry(document, section, lambda _, entry: entry.identifier == identifier)


def find_attribute(document: str, entry: EntrySpan, key: str) -> AttributeSpan | None:
    """Find `key = value;` at the entry's own level (not in nested dictionaries)."""
    pattern = re.compile(r'(?:^|(?<=[{;]))[ \t]*(' + re.escape(key) + r')[ \t]*=[ \t]*', re.M)

    for match in pattern.finditer(document, entry.open_brace + 1, entry.close_brace):
        if depth_at(document, match.start(1), entry.open_brace) != 1:
            continue

        value_start = match.end()
        if document[value_start] in '({':
            value_end = matching_close(document, value_start) + 1
        else:
            value_end = _scalar_end(document, value_start, entry.close_brace)

        semicolon = document.find(';', value_end, entry.close_brace)
        if semicolon == -1 or document[value_end:semicolon].strip():
            raise StructuralError(f"Attribute {key} of {entry.identifier} is not terminated by ';'")

        return AttributeSpan(
            key=key,
            start=match.start(1),
            value_start=value_start,
            value_end=value_end,
            stop=semicolon + 1,
            is_list=document[value_start] == "(",
        )

    return None


def _scalar_end(document: str, start: int, limit: int) -> int:
    """End of a scalar value: up to the ';' (comments and strings included)."""
    i = start
    while i < limit:
        skipped = skip_literal(document, i, limit)
        if skipped is not None:
            i = skipped
            continue
        if document[i] == ';':
            break
        i += 1
    return len(document[start:i].rstrip()) + start


def attribute_value(document: str, entry: EntrySpan, key: str) -> str | None:
    """The raw value text of an attribute, without trailing comments."""
    attribute = find_attribute(document, entry, key)
    if attribute is None:
        return None
    value = document[attribute.value_start:attribute.value_end]
    return COMMENT.sub('', value).strip()


def unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1].replace('\\"', '"').replace('\\\\', '\\')
    return value


def list_items(document: str, attribute: AttributeSpan) -> list[str]:
    """The items of a list attribute, comments stripped."""
    if not attribute.is_list:
        raise StructuralError(f"Attribute {attribute.key} is not a list")

    body = document[attribute.value_start + 1:attribute.value_end - 1]
    items = (unquote(item.strip()) for item in COMMENT.sub('', body).split(','))
    return [item for item in items if item]
