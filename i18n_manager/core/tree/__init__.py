"""
Key tree primitives: path extraction, lookup and copy-on-write assignment.
"""

from .paths import (
    KeyPath,
    ValueType,
    MISSING,
    as_key_path,
    extract_paths,
    get_value_by_path,
    is_leaf,
    is_mapping,
    resolve_path,
    set_value_by_path,
    value_type,
)

__all__ = [
    'KeyPath',
    'ValueType',
    'MISSING',
    'as_key_path',
    'extract_paths',
    'get_value_by_path',
    'is_leaf',
    'is_mapping',
    'resolve_path',
    'set_value_by_path',
    'value_type',
]
