"""
Setup steps run by setup_project.py.
"""

from .base import BaseSetup
from .directories import DirectorySetup
from .libraries import LibrarySetup
from .info_plist import InfoPlistSetup

__all__ = [
    'BaseSetup',
    'DirectorySetup',
    'LibrarySetup',
    'InfoPlistSetup',
]
