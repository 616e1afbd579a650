"""
Editing session over one loaded language set.

The session owns the LanguageSet for as long as it is open. Reads go through
the comparison engine; every write (manual edit, single-key or batch
translation) replaces one language entry with a copy-on-write update, so a
report or document a caller already holds is never modified underneath it.
"""

from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from i18n_manager.config import DEFAULT_SERVICE, MAX_TREE_DEPTH
from i18n_manager.core.comparison import ComparisonEngine, ReconciliationReport
from i18n_manager.core.document import LanguageSet, TranslationFile
from i18n_manager.core.editing import parse_edited_value
from i18n_manager.core.events import EventBus
from i18n_manager.core.exceptions import MissingTargetLanguageError
from i18n_manager.core.providers import ProviderAdapter
from i18n_manager.core.result import Result
from i18n_manager.core.translation import (
    BatchTranslationJob,
    TranslationOrchestrator,
    TranslationOutcome,
    build_job,
)
from i18n_manager.core.tree.key_tree import KeyTreeNode, build_key_tree, get_all_keys
from i18n_manager.core.tree.paths import PathLike, get_value_by_path, set_value_by_path
from i18n_manager.io.exporter import save_language_set
from i18n_manager.io.loader import load_folder
from i18n_manager.utils.unified_logger import get_logger, LogType


class TranslationSession:
    """Loaded language set plus the operations an editor performs on it."""

    def __init__(self, language_set: Optional[LanguageSet] = None,
                 adapter=None, api_key: Optional[str] = None,
                 service: str = DEFAULT_SERVICE, event_bus: Optional[EventBus] = None,
                 max_depth: int = MAX_TREE_DEPTH):
        self.language_set: LanguageSet = language_set if language_set is not None else {}
        self.api_key = api_key
        self.service = service
        self.event_bus = event_bus
        self.engine = ComparisonEngine(max_depth=max_depth)
        self._adapter = adapter
        self._owns_adapter = adapter is None
        self._dirty = False
        self.logger = get_logger()

    @classmethod
    def from_folder(cls, folder: Union[str, Path], **kwargs) -> 'TranslationSession':
        session = cls(**kwargs)
        session.load(load_folder(folder, max_depth=session.engine.max_depth))
        return session

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def load(self, language_set: LanguageSet) -> None:
        """Replace the loaded set, discarding any unsaved change."""
        self.language_set = language_set
        self._dirty = False

    @property
    def languages(self) -> List[str]:
        return list(self.language_set.keys())

    @property
    def dirty(self) -> bool:
        """True once any document was modified and not saved since."""
        return self._dirty or any(f.dirty for f in self.language_set.values())

    @property
    def adapter(self):
        if self._adapter is None:
            self._adapter = ProviderAdapter()
        return self._adapter

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def compare(self, show_issues_only: bool = False) -> ReconciliationReport:
        """N-way report over every loaded language."""
        report = self.engine.compare_all(self.language_set)
        self.logger.debug("Comparison summary", LogType.COMPARISON_SUMMARY, {
            'languages': list(report.languages),
            'total': len(report),
            'counts': report.status_counts()
        })
        if show_issues_only:
            return ReconciliationReport(report.mode, report.languages, report.issues_only())
        return report

    def compare_pair(self, language_a: str, language_b: str) -> ReconciliationReport:
        """Pairwise report of two loaded languages, labelled by language id."""
        for lang in (language_a, language_b):
            if lang not in self.language_set:
                raise MissingTargetLanguageError(f"Language not loaded: {lang}")
        return self.engine.compare_pair(
            self.language_set[language_a],
            self.language_set[language_b],
            labels=(language_a, language_b)
        )

    def get_value(self, language: str, path: PathLike, default: Any = None) -> Any:
        translation_file = self.language_set.get(language)
        if translation_file is None:
            return default
        return get_value_by_path(translation_file.content, path, default)

    def values_for(self, path: PathLike) -> Dict[str, Any]:
        """Value of one key in every language (None where absent)."""
        return {lang: self.get_value(lang, path) for lang in self.language_set}

    def all_keys(self) -> List[str]:
        return get_all_keys(self.language_set)

    def key_tree(self) -> KeyTreeNode:
        return build_key_tree(self.all_keys())

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def update_value(self, language: str, path: PathLike, value: Any) -> TranslationFile:
        """
        Set one key in one language.

        Returns:
            The new TranslationFile now held for that language

        Raises:
            MissingTargetLanguageError: If the language is not loaded
        """
        translation_file = self.language_set.get(language)
        if translation_file is None:
            raise MissingTargetLanguageError(f"Language not loaded: {language}")
        updated = translation_file.with_content(set_value_by_path(translation_file.content, path, value))
        self.language_set[language] = updated
        self._dirty = True
        return updated

    def update_from_text(self, language: str, path: PathLike, text: str) -> TranslationFile:
        """update_value with editor text coerced by parse_edited_value."""
        return self.update_value(language, path, parse_edited_value(text))

    def build_missing_job(self, source_language: str, target_languages: Iterable[str]) -> BatchTranslationJob:
        return build_job(self.compare(), self.language_set, source_language, target_languages)

    def _orchestrator(self) -> TranslationOrchestrator:
        return TranslationOrchestrator(self.language_set, self.adapter, self.api_key,
                                       self.service, event_bus=self.event_bus)

    async def translate_missing(self, source_language: str, target_languages: Iterable[str],
                                on_progress: Optional[Callable[[int], None]] = None,
                                check_interruption_callback: Optional[Callable[[], bool]] = None
                                ) -> TranslationOutcome:
        """
        Fill every key the targets lack from the source language.

        Raises:
            ValidationError: If a batch precondition fails
        """
        job = self.build_missing_job(source_language, target_languages)
        outcome = await self._orchestrator().run_batch(
            job,
            on_progress=on_progress,
            check_interruption_callback=check_interruption_callback
        )
        if outcome.success_count:
            self._dirty = True
        return outcome

    async def translate_single(self, path: PathLike, source_language: str, target_language: str) -> Result:
        result = await self._orchestrator().translate_single(path, source_language, target_language)
        if result.is_ok():
            self._dirty = True
        return result

    async def save(self, folder: Union[str, Path], only_dirty: bool = False) -> List[str]:
        """Write documents under folder and mark the session clean."""
        written = await save_language_set(self.language_set, folder, only_dirty=only_dirty)
        for lang, translation_file in list(self.language_set.items()):
            if translation_file.dirty:
                self.language_set[lang] = replace(translation_file, dirty=False)
        self._dirty = False
        return written

    async def close(self):
        if self._owns_adapter and self._adapter is not None:
            await self._adapter.close()
            self._adapter = None

    async def __aenter__(self) -> 'TranslationSession':
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
