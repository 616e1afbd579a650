"""
Batch translation jobs.

A job is an ordered list of (path, source text, target language) items built
from a reconciliation report. Only string source values become items; other
leaf types are left for manual editing.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from i18n_manager.core.comparison import ReconciliationReport
from i18n_manager.core.document import LanguageSet
from i18n_manager.core.tree.paths import KeyPath, PathLike, as_key_path, resolve_path


@dataclass(frozen=True)
class JobItem:
    """
    One (path, target language) pair to fill.

    Attributes:
        path: Key path to write in the target document
        source_value: Source-language value at that path
        target_language: Language whose document receives the translation
    """
    path: KeyPath
    source_value: Any
    target_language: str

    @property
    def is_translatable(self) -> bool:
        return isinstance(self.source_value, str)


@dataclass
class BatchTranslationJob:
    """
    Attributes:
        source_language: Language the texts are translated from
        target_languages: Languages being filled, in request order
        items: Work items, consumed strictly in order
    """
    source_language: str
    target_languages: Tuple[str, ...]
    items: List[JobItem] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def translatable_items(self) -> List[JobItem]:
        return [item for item in self.items if item.is_translatable]


@dataclass
class TranslationOutcome:
    """
    Aggregate result of a batch. Counters only grow while the batch runs; the
    values are final once the batch returns.

    Attributes:
        success_count: Items translated and written
        failed_count: Items whose translation failed
        total: Items the batch set out to attempt
        cancelled: True when the batch stopped before attempting every item
        errors: (dotted path, target language, message) for each failure
    """
    success_count: int = 0
    failed_count: int = 0
    total: int = 0
    cancelled: bool = False
    errors: List[Tuple[str, str, str]] = field(default_factory=list)

    @property
    def completed_count(self) -> int:
        return self.success_count + self.failed_count

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success_count,
            'failed': self.failed_count,
            'total': self.total,
            'cancelled': self.cancelled
        }


def find_missing_translations(report: ReconciliationReport, language_set: LanguageSet,
                              source_language: str, target_language: str) -> List[Tuple[KeyPath, str]]:
    """
    Report entries present in the source, absent from the target, whose
    source value is a string.

    Returns an empty list if either language is not part of the report or set.
    """
    if source_language not in language_set or target_language not in language_set:
        return []

    source_document = language_set[source_language].content
    missing = []
    for entry in report:
        if not entry.exists_by_language.get(source_language):
            continue
        if entry.exists_by_language.get(target_language, True):
            continue
        exists, value = resolve_path(source_document, entry.path)
        if exists and isinstance(value, str):
            missing.append((entry.path, value))
    return missing


def build_job(report: ReconciliationReport, language_set: LanguageSet,
              source_language: str, target_languages: Iterable[str]) -> BatchTranslationJob:
    """
    Build a job filling every target from the source.

    Items are ordered path-major: for each path in report order, one item per
    target language that lacks it.
    """
    targets = tuple(dict.fromkeys(lang for lang in target_languages if lang))
    missing_by_target = {
        target: {str(path): value for path, value in
                 find_missing_translations(report, language_set, source_language, target)}
        for target in targets
    }

    items: List[JobItem] = []
    for entry in report:
        dotted = str(entry.path)
        for target in targets:
            if dotted in missing_by_target[target]:
                items.append(JobItem(entry.path, missing_by_target[target][dotted], target))

    return BatchTranslationJob(source_language=source_language, target_languages=targets, items=items)


def build_path_job(language_set: LanguageSet, path: PathLike, source_language: str,
                   target_languages: Sequence[str]) -> BatchTranslationJob:
    """
    Fan one key out to several targets (interactive per-key action).

    Targets that already hold the key are overwritten; a source value that is
    missing or not a string produces no items.
    """
    key_path = as_key_path(path)
    targets = tuple(dict.fromkeys(lang for lang in target_languages if lang and lang != source_language))
    items: List[JobItem] = []

    if source_language in language_set:
        exists, value = resolve_path(language_set[source_language].content, key_path)
        if exists and isinstance(value, str):
            items = [JobItem(key_path, value, target) for target in targets]

    return BatchTranslationJob(source_language=source_language, target_languages=targets, items=items)
