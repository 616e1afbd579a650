"""
Reconciliation of translation documents.

Two modes are provided and deliberately kept distinct:

- Pairwise (compare_pair): one synchronized walk over two documents. Keys that
  are mappings on both sides are descended into and not reported themselves,
  so the report lists leaves only.
- N-way (compare_all): the union of every language's paths, intermediate
  mappings included, each resolved independently against every language. A
  sub-tree missing from one language therefore shows up at its first
  divergent path as well as at each leaf below it.

Both are pure: documents are only read, and re-running over the same input
yields an identical report.
"""

from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from i18n_manager.config import MAX_TREE_DEPTH
from i18n_manager.core.document import TranslationFile
from i18n_manager.core.tree.paths import (
    KeyPath,
    MISSING,
    PathLike,
    ValueType,
    as_key_path,
    check_depth,
    extract_paths,
    is_mapping,
    resolve_path,
    value_type,
)

DEFAULT_PAIR_LABELS = ("file1", "file2")


class StatusKind(Enum):
    """Reconciliation status of one key path."""
    OK = "Ok"
    MISSING_IN_A = "MissingInA"
    MISSING_IN_B = "MissingInB"
    TYPE_MISMATCH = "TypeMismatch"
    MISSING_IN_ALL = "MissingInAll"
    MISSING_IN_SOME = "MissingInSome"


class CompareMode(Enum):
    PAIRWISE = "two-files"
    NWAY = "folder"


@dataclass(frozen=True)
class EntryStatus:
    """
    Status with its payload.

    Attributes:
        kind: Status discriminant
        missing_count: Number of languages lacking the path (MissingInSome only)
    """
    kind: StatusKind
    missing_count: int = 0

    @property
    def is_ok(self) -> bool:
        return self.kind is StatusKind.OK

    @property
    def label(self) -> str:
        if self.kind is StatusKind.MISSING_IN_SOME:
            return f"{self.kind.value}({self.missing_count})"
        return self.kind.value

    def mirrored(self) -> 'EntryStatus':
        """Status seen from the other side of a pairwise comparison."""
        if self.kind is StatusKind.MISSING_IN_A:
            return EntryStatus(StatusKind.MISSING_IN_B)
        if self.kind is StatusKind.MISSING_IN_B:
            return EntryStatus(StatusKind.MISSING_IN_A)
        return self

    def __str__(self) -> str:
        return self.label


OK = EntryStatus(StatusKind.OK)
TYPE_MISMATCH = EntryStatus(StatusKind.TYPE_MISMATCH)


@dataclass(frozen=True)
class ReconciliationEntry:
    """
    One reported key path.

    Attributes:
        path: Key path
        exists_by_language: Whether each language (or side label) has the path
        type_by_language: Value type per language, UNDEFINED where absent
        status: Derived status
        intermediate: True when the path holds a non-empty mapping in some
            language (N-way reports include such nodes; they are not leaves)
    """
    path: KeyPath
    exists_by_language: Dict[str, bool]
    type_by_language: Dict[str, ValueType]
    status: EntryStatus
    intermediate: bool = False

    @property
    def key(self) -> str:
        return self.path.key

    @property
    def key_path(self) -> str:
        return str(self.path)

    @property
    def missing_languages(self) -> List[str]:
        return [lang for lang, exists in self.exists_by_language.items() if not exists]


@dataclass
class ReconciliationReport:
    """
    Entries in path-discovery order.

    Attributes:
        mode: Comparison mode that produced the report
        languages: Language ids (or side labels) in comparison order
        entries: Reconciliation entries
    """
    mode: CompareMode
    languages: Tuple[str, ...]
    entries: List[ReconciliationEntry] = field(default_factory=list)

    def __iter__(self) -> Iterator[ReconciliationEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def issues_only(self) -> List[ReconciliationEntry]:
        """Filtered view without Ok entries. The report itself is unchanged."""
        return [entry for entry in self.entries if not entry.status.is_ok]

    def view(self, show_issues_only: bool = False) -> List[ReconciliationEntry]:
        return self.issues_only() if show_issues_only else list(self.entries)

    def leaf_entries(self) -> List[ReconciliationEntry]:
        return [entry for entry in self.entries if not entry.intermediate]

    def find(self, path: PathLike) -> Optional[ReconciliationEntry]:
        target = as_key_path(path)
        for entry in self.entries:
            if entry.path == target:
                return entry
        return None

    def status_counts(self) -> Dict[str, int]:
        """Entry count per status kind, e.g. {"Ok": 12, "MissingInSome": 3}."""
        counts = Counter(entry.status.kind.value for entry in self.entries)
        return dict(counts)


def derive_pair_status(exists_a: bool, exists_b: bool,
                       type_a: ValueType, type_b: ValueType) -> EntryStatus:
    if not exists_a:
        return EntryStatus(StatusKind.MISSING_IN_A)
    if not exists_b:
        return EntryStatus(StatusKind.MISSING_IN_B)
    if type_a is not type_b:
        return TYPE_MISMATCH
    return OK


def derive_nway_status(exists_by_language: Dict[str, bool],
                       type_by_language: Dict[str, ValueType]) -> EntryStatus:
    total_langs = len(exists_by_language)
    missing_count = sum(1 for exists in exists_by_language.values() if not exists)

    if missing_count == total_langs:
        return EntryStatus(StatusKind.MISSING_IN_ALL)
    if missing_count > 0:
        return EntryStatus(StatusKind.MISSING_IN_SOME, missing_count)

    observed = {t for t in type_by_language.values() if t is not ValueType.UNDEFINED}
    if len(observed) > 1:
        return TYPE_MISMATCH
    return OK


def _document_of(value: Any) -> Any:
    if isinstance(value, TranslationFile):
        return value.content
    return value


class ComparisonEngine:
    """Builds reconciliation reports over translation documents."""

    def __init__(self, max_depth: int = MAX_TREE_DEPTH):
        self.max_depth = max_depth

    # ------------------------------------------------------------------
    # Pairwise mode
    # ------------------------------------------------------------------

    def compare_pair(self, document_a: Any, document_b: Any,
                     labels: Sequence[str] = DEFAULT_PAIR_LABELS) -> ReconciliationReport:
        """
        Compare two documents in a single synchronized walk.

        Args:
            document_a: First document (or TranslationFile)
            document_b: Second document (or TranslationFile)
            labels: Side names used as keys of the per-language tables

        Raises:
            MalformedInputError: If either document nests deeper than max_depth
        """
        label_a, label_b = labels
        if label_a == label_b:
            raise ValueError("Pairwise comparison needs two distinct labels")

        doc_a = _document_of(document_a)
        doc_b = _document_of(document_b)
        report = ReconciliationReport(mode=CompareMode.PAIRWISE, languages=(label_a, label_b))
        self._walk_pair(
            doc_a if is_mapping(doc_a) else {},
            doc_b if is_mapping(doc_b) else {},
            (), label_a, label_b, report.entries
        )
        return report

    def _walk_pair(self, node_a: Mapping, node_b: Mapping, prefix: Tuple[str, ...],
                   label_a: str, label_b: str, entries: List[ReconciliationEntry]) -> None:
        keys = list(node_a.keys()) + [key for key in node_b.keys() if key not in node_a]

        for key in keys:
            path = KeyPath(prefix + (str(key),))
            check_depth(path, self.max_depth)

            exists_a = key in node_a
            exists_b = key in node_b
            value_a = node_a[key] if exists_a else MISSING
            value_b = node_b[key] if exists_b else MISSING

            # Both sides are mappings: descend, the key itself is not reported
            if is_mapping(value_a) and is_mapping(value_b):
                self._walk_pair(value_a, value_b, path.segments, label_a, label_b, entries)
                continue

            type_a = value_type(value_a)
            type_b = value_type(value_b)
            entries.append(ReconciliationEntry(
                path=path,
                exists_by_language={label_a: exists_a, label_b: exists_b},
                type_by_language={label_a: type_a, label_b: type_b},
                status=derive_pair_status(exists_a, exists_b, type_a, type_b),
            ))

    # ------------------------------------------------------------------
    # N-way mode
    # ------------------------------------------------------------------

    def collect_paths(self, documents: Dict[str, Any]) -> List[KeyPath]:
        """Union of all paths, deduplicated by dotted form, in discovery order."""
        seen = set()
        union: List[KeyPath] = []
        for document in documents.values():
            for path in extract_paths(_document_of(document), max_depth=self.max_depth):
                dotted = str(path)
                if dotted not in seen:
                    seen.add(dotted)
                    union.append(path)
        return union

    def compare_all(self, documents: Dict[str, Any]) -> ReconciliationReport:
        """
        Compare any number of documents.

        Args:
            documents: Language id -> document (or TranslationFile), e.g. a LanguageSet

        Raises:
            MalformedInputError: If a document nests deeper than max_depth
        """
        languages = tuple(documents.keys())
        report = ReconciliationReport(mode=CompareMode.NWAY, languages=languages)

        for path in self.collect_paths(documents):
            exists_by_language: Dict[str, bool] = {}
            type_by_language: Dict[str, ValueType] = {}
            intermediate = False

            for lang in languages:
                exists, value = resolve_path(_document_of(documents[lang]), path)
                exists_by_language[lang] = exists
                type_by_language[lang] = value_type(value)
                if is_mapping(value) and value:
                    intermediate = True

            report.entries.append(ReconciliationEntry(
                path=path,
                exists_by_language=exists_by_language,
                type_by_language=type_by_language,
                status=derive_nway_status(exists_by_language, type_by_language),
                intermediate=intermediate,
            ))

        return report


def compare_two_files(document_a: Any, document_b: Any,
                      labels: Sequence[str] = DEFAULT_PAIR_LABELS,
                      max_depth: int = MAX_TREE_DEPTH) -> ReconciliationReport:
    """Pairwise comparison with a default engine."""
    return ComparisonEngine(max_depth=max_depth).compare_pair(document_a, document_b, labels)


def compare_languages(documents: Dict[str, Any], max_depth: int = MAX_TREE_DEPTH) -> ReconciliationReport:
    """N-way comparison with a default engine."""
    return ComparisonEngine(max_depth=max_depth).compare_all(documents)
