"""
Key paths inside translation documents.

A document is a nested mapping of string keys to values. Mappings are
descended into; every other value (string, number, boolean, null, list) is a
leaf. Lists are never descended into, whatever they contain. An empty mapping
is a leaf of type "object".
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Optional, Sequence, Tuple, Union

from i18n_manager.config import MAX_TREE_DEPTH, KEY_SEPARATOR
from i18n_manager.core.exceptions import MalformedInputError


class ValueType(Enum):
    """Runtime type tag of a value found at a key path."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    UNDEFINED = "undefined"


class _Missing:
    """Sentinel for an absent key (None is a legitimate null value)."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


@dataclass(frozen=True)
class KeyPath:
    """Ordered, non-empty sequence of key segments.

    Attributes:
        segments: Key names from the document root down to the addressed node
    """
    segments: Tuple[str, ...]

    def __post_init__(self):
        if not self.segments:
            raise ValueError("KeyPath must contain at least one segment")
        # Accept any sequence, store a tuple
        object.__setattr__(self, 'segments', tuple(self.segments))

    @classmethod
    def parse(cls, dotted: str) -> 'KeyPath':
        """Build a KeyPath from its dotted string form ("a.b.c")."""
        return cls(tuple(dotted.split(KEY_SEPARATOR)))

    @property
    def key(self) -> str:
        """Last segment."""
        return self.segments[-1]

    @property
    def parent(self) -> Optional['KeyPath']:
        """Path of the enclosing mapping, None for a top-level key."""
        if len(self.segments) == 1:
            return None
        return KeyPath(self.segments[:-1])

    def child(self, segment: str) -> 'KeyPath':
        return KeyPath(self.segments + (segment,))

    def __len__(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        return KEY_SEPARATOR.join(self.segments)


PathLike = Union[KeyPath, str, Sequence[str]]


def as_key_path(path: PathLike) -> KeyPath:
    """Coerce a dotted string, segment sequence or KeyPath into a KeyPath."""
    if isinstance(path, KeyPath):
        return path
    if isinstance(path, str):
        return KeyPath.parse(path)
    return KeyPath(tuple(path))


def is_mapping(value: Any) -> bool:
    """True for values that are descended into (non-array mappings)."""
    return isinstance(value, Mapping)


def value_type(value: Any) -> ValueType:
    """Classify a value. Pass MISSING for an absent key.

    null is tagged "object", matching how JSON tooling reports it.
    """
    if value is MISSING:
        return ValueType.UNDEFINED
    if isinstance(value, (list, tuple)):
        return ValueType.ARRAY
    if isinstance(value, str):
        return ValueType.STRING
    # bool is a subclass of int, test it first
    if isinstance(value, bool):
        return ValueType.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueType.NUMBER
    return ValueType.OBJECT


def is_leaf(value: Any) -> bool:
    """A leaf is any non-mapping value, or an empty mapping."""
    return not is_mapping(value) or len(value) == 0


def check_depth(path: KeyPath, max_depth: int) -> None:
    """Raise MalformedInputError when a path is nested deeper than max_depth."""
    if len(path) > max_depth:
        raise MalformedInputError(
            f"Document nesting exceeds the maximum depth of {max_depth}",
            context={'path': str(path)}
        )


def extract_paths(document: Any,
                  max_depth: Optional[int] = None,
                  include_intermediate: bool = True) -> Iterator[KeyPath]:
    """
    Depth-first walk of a document yielding every key path.

    Each call returns a fresh generator; the walk holds no state outside it.

    Args:
        document: Nested mapping. Anything else yields nothing.
        max_depth: Deepest allowed path length (defaults to MAX_TREE_DEPTH)
        include_intermediate: Also yield paths of non-empty mappings, before
            their children. With False only leaves are yielded.

    Raises:
        MalformedInputError: If the document nests deeper than max_depth
    """
    if max_depth is None:
        max_depth = MAX_TREE_DEPTH
    if not is_mapping(document):
        return
    yield from _walk(document, (), max_depth, include_intermediate)


def _walk(node: Mapping, prefix: Tuple[str, ...], max_depth: int,
          include_intermediate: bool) -> Iterator[KeyPath]:
    for key, value in node.items():
        path = KeyPath(prefix + (str(key),))
        check_depth(path, max_depth)

        if is_leaf(value):
            yield path
            continue

        if include_intermediate:
            yield path
        yield from _walk(value, path.segments, max_depth, include_intermediate)


def resolve_path(document: Any, path: PathLike) -> Tuple[bool, Any]:
    """
    Walk a path segment by segment.

    Returns:
        (exists, value). When any intermediate segment is absent or is not a
        mapping, or the final key is absent, returns (False, MISSING).
    """
    current = document
    for segment in as_key_path(path).segments:
        if not is_mapping(current) or segment not in current:
            return False, MISSING
        current = current[segment]
    return True, current


def get_value_by_path(document: Any, path: PathLike, default: Any = None) -> Any:
    """Value at path, or default when the path does not resolve."""
    exists, value = resolve_path(document, path)
    return value if exists else default


def set_value_by_path(document: Optional[Mapping], path: PathLike, value: Any) -> dict:
    """
    Copy-on-write assignment.

    Returns a new root in which every mapping on the path is a shallow copy
    and everything off the path is shared with the input. Intermediate
    segments that are missing or not mappings are replaced by new mappings.
    The input document is left untouched.
    """
    segments = as_key_path(path).segments
    new_root = dict(document) if is_mapping(document) else {}

    current = new_root
    for segment in segments[:-1]:
        existing = current.get(segment)
        copied = dict(existing) if is_mapping(existing) else {}
        current[segment] = copied
        current = copied

    current[segments[-1]] = value
    return new_root
