"""
Transactional patching of Xcode project.pbxproj files.
"""

from .backup import BackupHandle, snapshot, restore, discard
from .entries import SwiftPackage
from .errors import PbxprojError, StructuralError, BackupRestoreFailure
from .guard import exists
from .identifiers import IdentifierGenerator, generate_uuid
from .inserter import (
    insert_entry,
    synthesize_section,
    insert_into_section,
    append_list_item,
    insert_list_attribute,
    ensure_list_item,
)
from .operations import add_swift_package, add_folder_group, add_source_file
from .sections import Anchor, SectionSpan, find_section, find_anchor
from .transaction import Transaction, TransactionState, apply
from .validator import find_problems, validate

__all__ = [
    'BackupHandle',
    'snapshot',
    'restore',
    'discard',
    'SwiftPackage',
    'PbxprojError',
    'StructuralError',
    'BackupRestoreFailure',
    'exists',
    'IdentifierGenerator',
    'generate_uuid',
    'insert_entry',
    'synthesize_section',
    'insert_into_section',
    'append_list_item',
    'insert_list_attribute',
    'ensure_list_item',
    'add_swift_package',
    'add_folder_group',
    'add_source_file',
    'Anchor',
    'SectionSpan',
    'find_section',
    'find_anchor',
    'Transaction',
    'TransactionState',
    'apply',
    'find_problems',
    'validate',
]
