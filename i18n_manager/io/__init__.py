"""
Reading and writing translation folders.
"""

from .loader import load_folder, load_files, load_document, language_id_for
from .exporter import save_language_set, save_document, serialize_document

__all__ = [
    'load_folder',
    'load_files',
    'load_document',
    'language_id_for',
    'save_language_set',
    'save_document',
    'serialize_document',
]
