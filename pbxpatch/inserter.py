"""
Splicing new entries and list items into a pbxproj document.

Every function takes the document text and returns a new one; bytes
outside the insertion point are never touched. New text is written with
the document's own line ending (CRLF or LF).
"""

from .errors import StructuralError
from .sections import (
    BEGIN_MARKER,
    END_MARKER,
    AttributeSpan,
    EntrySpan,
    SectionSpan,
    find_anchor,
    find_attribute,
    find_section,
    line_end,
    line_start,
)


def newline_of(document: str) -> str:
    return '\r\n' if '\r\n' in document else '\n'


def _native(text: str, newline: str) -> str:
    return text.replace('\r\n', '\n').replace('\n', newline)


def _terminated(text: str, newline: str) -> str:
    text = _native(text, newline)
    return text if text.endswith(newline) else text + newline


def insert_entry(document: str, span: SectionSpan, entry_text: str) -> str:
    """Append an entry to a section, just before its end marker."""
    position = span.interior_end
    return document[:position] + _terminated(entry_text, newline_of(document)) + document[position:]


def synthesize_section(document: str, name: str, entry_text: str, anchors) -> str:
    """Create section `name` holding a single entry, next to the first anchor found."""
    if find_section(document, name) is not None:
        raise StructuralError(f"Section {name} already exists", section=name)

    anchor, span = find_anchor(document, anchors)
    newline = newline_of(document)
    block = f"{BEGIN_MARKER.format(name)}{newline}{_terminated(entry_text, newline)}{END_MARKER.format(name)}{newline}"

    # Xcode separates sections with one blank line
    if anchor.placement == "after":
        position = span.stop
        block = newline + block
    else:
        position = line_start(document, span.begin)
        block = block + newline

    return document[:position] + block + document[position:]


def insert_into_section(document: str, name: str, entry_text: str, anchors=()) -> str:
    """Add an entry to section `name`, creating the section if it is missing."""
    span = find_section(document, name)
    if span is not None:
        return insert_entry(document, span, entry_text)

    if not anchors:
        raise StructuralError(f"Section {name} not found", section=name)
    return synthesize_section(document, name, entry_text, anchors)


def append_list_item(document: str, attribute: AttributeSpan, token: str) -> str:
    """
    Append `token,` to a list attribute, before its closing parenthesis.

    Multi-line lists get the token on its own line, one tab deeper than the
    closing parenthesis. Single-line lists such as `( );` become
    `( token, );`.
    """
    if not attribute.is_list:
        raise StructuralError(f"Attribute {attribute.key} is not a list")

    open_paren = attribute.value_start
    close_paren = attribute.value_end - 1
    close_line = line_start(document, close_paren)
    indent = document[close_line:close_paren]

    if close_line > open_paren and not indent.strip():
        # Previous item must end with a comma
        last = len(document[:close_line].rstrip())
        if last > open_paren + 1 and document[last - 1] != ',':
            document = document[:last] + ',' + document[last:]
            close_line += 1
        return document[:close_line] + f"{indent}\t{token},{newline_of(document)}" + document[close_line:]

    inner = document[open_paren + 1:close_paren].rstrip()
    if inner.strip() and not inner.endswith(','):
        inner += ','
    return document[:open_paren + 1] + f"{inner} {token}, " + document[close_paren:]


def insert_list_attribute(document: str, entry: EntrySpan, key: str, tokens, after_keys=()) -> str:
    """
    Add a new `key = ( ... );` attribute to an entry.

    It goes on the line after the last of `after_keys` present in the entry,
    otherwise just before the entry's closing brace.
    """
    if find_attribute(document, entry, key) is not None:
        raise StructuralError(f"{entry.identifier} already has a {key} attribute")

    close_line = line_start(document, entry.close_brace)
    if close_line <= entry.open_brace or document[close_line:entry.close_brace].strip():
        raise StructuralError(f"Entry {entry.identifier} is not laid out one attribute per line")

    indent = document[close_line:entry.close_brace] + '\t'
    lines = [f"{indent}{key} = ("]
    lines += [f"{indent}\t{token}," for token in tokens]
    lines.append(f"{indent});")
    newline = newline_of(document)
    text = newline.join(lines) + newline

    position = close_line
    present = [find_attribute(document, entry, name) for name in after_keys]
    present = [attribute for attribute in present if attribute is not None]
    if present:
        position = line_end(document, max(attribute.stop for attribute in present))

    return document[:position] + text + document[position:]


def ensure_list_item(document: str, entry: EntrySpan, key: str, token: str, after_keys=()) -> str:
    """Append `token` to list attribute `key`, creating the attribute if needed."""
    attribute = find_attribute(document, entry, key)
    if attribute is None:
        return insert_list_attribute(document, entry, key, [token], after_keys)
    return append_list_item(document, attribute, token)
