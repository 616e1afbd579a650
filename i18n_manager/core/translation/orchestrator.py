"""
Sequential batch translation.

Items are translated one at a time: the request for item i+1 is only sent
once item i has succeeded or failed. A failed item is counted and skipped.
Each success is written into the target document with a copy-on-write
update and a single swap of the language set entry, so a reader holding the
language set sees either the old or the new document, never a partial one.
"""

import math
from typing import Callable, List, Optional, Protocol

from i18n_manager.config import DEFAULT_SERVICE
from i18n_manager.core.document import LanguageSet
from i18n_manager.core.events import (
    Event,
    EventBus,
    EventType,
    create_item_event,
    create_progress_event,
)
from i18n_manager.core.exceptions import (
    EmptyJobError,
    MissingCredentialError,
    MissingSourceLanguageError,
    MissingTargetLanguageError,
)
from i18n_manager.core.result import Err, Ok, Result
from i18n_manager.core.tree.paths import (
    PathLike,
    as_key_path,
    get_value_by_path,
    resolve_path,
    set_value_by_path,
)
from i18n_manager.utils.unified_logger import get_logger, LogType
from .job import BatchTranslationJob, JobItem, TranslationOutcome


class TranslationAdapter(Protocol):
    async def translate(self, text: str, source_lang: str, target_lang: str,
                        api_key: Optional[str], service: str = DEFAULT_SERVICE) -> Result:
        ...


def progress_percentage(completed: int, total: int) -> int:
    """Percentage rounded half up, kept below 100 until the last item is done."""
    if total <= 0:
        return 0
    percentage = math.floor(100 * completed / total + 0.5)
    if completed < total:
        return min(percentage, 99)
    return 100


class TranslationOrchestrator:
    """Runs batch translation jobs against one language set."""

    def __init__(self, language_set: LanguageSet, adapter: TranslationAdapter,
                 api_key: Optional[str], service: str = DEFAULT_SERVICE,
                 event_bus: Optional[EventBus] = None):
        """
        Args:
            language_set: Documents to fill; entries are replaced as items succeed
            adapter: Object with an async translate(text, source, target, api_key, service)
            api_key: Credential for the service
            service: Service identifier passed to the adapter
            event_bus: Optional bus receiving batch and item events
        """
        self.language_set = language_set
        self.adapter = adapter
        self.api_key = api_key
        self.service = service
        self.event_bus = event_bus
        self.logger = get_logger()

    def _emit(self, event: Event) -> None:
        if self.event_bus:
            self.event_bus.publish(event)

    def validate(self, job: BatchTranslationJob) -> List[JobItem]:
        """
        Check batch preconditions before anything is sent.

        Returns:
            The items that will be attempted (string source values only)

        Raises:
            MissingCredentialError, MissingSourceLanguageError,
            MissingTargetLanguageError, EmptyJobError
        """
        if not self.api_key:
            raise MissingCredentialError(context={'service': self.service})

        if not job.source_language:
            raise MissingSourceLanguageError()

        if job.source_language not in self.language_set:
            raise MissingSourceLanguageError(
                f"Source language not loaded: {job.source_language}",
                context={'loaded': ", ".join(self.language_set)}
            )

        if not job.target_languages:
            raise MissingTargetLanguageError()

        unknown = [lang for lang in job.target_languages if lang not in self.language_set]
        if unknown:
            raise MissingTargetLanguageError(
                f"Target language not loaded: {', '.join(unknown)}",
                context={'loaded': ", ".join(self.language_set)}
            )

        items = job.translatable_items()
        skipped = len(job.items) - len(items)
        if skipped:
            self.logger.warning(f"Skipping {skipped} non-string value(s); they cannot be auto-translated")

        if not items:
            raise EmptyJobError()

        return items

    async def run_batch(self, job: BatchTranslationJob,
                        on_progress: Optional[Callable[[int], None]] = None,
                        stats_callback: Optional[Callable[[dict], None]] = None,
                        check_interruption_callback: Optional[Callable[[], bool]] = None) -> TranslationOutcome:
        """
        Translate every item of a job in order.

        Args:
            job: Batch to run
            on_progress: Called once per finished item with round(100 * done / total)
            stats_callback: Called once per finished item with the running counts
            check_interruption_callback: Checked before each item; returning True
                stops the batch before the next request

        Returns:
            TranslationOutcome with final counts

        Raises:
            ValidationError: If a precondition fails (nothing has been sent)
        """
        items = self.validate(job)
        total = len(items)
        outcome = TranslationOutcome(total=total)

        self.logger.info("Batch Started", LogType.BATCH_START, {
            'source_lang': job.source_language,
            'target_langs': list(job.target_languages),
            'service': self.service,
            'total_items': total
        })
        self._emit(Event(type=EventType.BATCH_STARTED, source="orchestrator", data={
            'source_language': job.source_language,
            'target_languages': list(job.target_languages),
            'total': total
        }))

        for index, item in enumerate(items):
            if check_interruption_callback and check_interruption_callback():
                outcome.cancelled = True
                self.logger.warning(f"Batch interrupted before key {index + 1}/{total}")
                self._emit(Event(type=EventType.BATCH_CANCELLED, source="orchestrator",
                                 data={'completed': outcome.completed_count, 'total': total}))
                break

            dotted = str(item.path)
            self._emit(create_item_event(EventType.ITEM_STARTED, index, total, dotted, item.target_language))

            error_message = await self._translate_item(job, item)
            if error_message is None:
                outcome.success_count += 1
                self._emit(create_item_event(EventType.ITEM_TRANSLATED, index, total, dotted,
                                             item.target_language))
            else:
                outcome.failed_count += 1
                outcome.errors.append((dotted, item.target_language, error_message))
                self.logger.error(f"Translation failed for {dotted}", LogType.ERROR_DETAIL, {
                    'details': error_message,
                    'path': f"{item.target_language}:{dotted}"
                })
                self._emit(create_item_event(EventType.ITEM_FAILED, index, total, dotted,
                                             item.target_language, error=error_message))

            percentage = progress_percentage(outcome.completed_count, total)
            if on_progress:
                on_progress(percentage)
            if stats_callback:
                stats_callback({'success_count': outcome.success_count, 'failed_count': outcome.failed_count})
            self._emit(create_progress_event(outcome.completed_count, total, percentage))
            self.logger.debug("Progress", LogType.PROGRESS, {
                'current': outcome.completed_count,
                'total': total,
                'percentage': percentage
            })

        self.logger.info("Batch Complete", LogType.BATCH_END, {
            'success_count': outcome.success_count,
            'failed_count': outcome.failed_count,
            'cancelled': outcome.cancelled
        })
        if not outcome.cancelled:
            self._emit(Event(type=EventType.BATCH_COMPLETED, source="orchestrator", data=outcome.to_dict()))
        return outcome

    async def _translate_item(self, job: BatchTranslationJob, item: JobItem) -> Optional[str]:
        """Translate and write one item. Returns None on success, else the error message."""
        try:
            result = await self.adapter.translate(
                item.source_value,
                job.source_language,
                item.target_language,
                self.api_key,
                self.service
            )
        except Exception as e:
            # Adapters are not supposed to raise; a single key must not end the batch
            return str(e) or e.__class__.__name__

        if result.is_err():
            return str(result.error)

        self.write_value(item, result.unwrap())
        return None

    async def translate_single(self, path: PathLike, source_language: str, target_language: str) -> Result:
        """
        Translate one key into one language and write it.

        Unlike a batch, nothing is raised: precondition failures come back as
        Err so an editor can show them next to the field.

        Returns:
            Ok(translated_text) once written, or Err(message)
        """
        if not self.api_key:
            return Err(MissingCredentialError().message)
        if not source_language or source_language not in self.language_set:
            return Err(MissingSourceLanguageError().message)
        if not target_language or target_language not in self.language_set:
            return Err(MissingTargetLanguageError().message)

        key_path = as_key_path(path)
        exists, source_value = resolve_path(self.language_set[source_language].content, key_path)
        if not exists or not isinstance(source_value, str) or not source_value:
            return Err(f"No source text for {key_path} in {source_language}")

        item = JobItem(key_path, source_value, target_language)
        job = BatchTranslationJob(source_language, (target_language,), [item])
        error_message = await self._translate_item(job, item)
        if error_message is not None:
            self.logger.error(f"Translation failed for {key_path}", LogType.ERROR_DETAIL, {
                'details': error_message,
                'path': f"{target_language}:{key_path}"
            })
            return Err(error_message)

        return Ok(get_value_by_path(self.language_set[target_language].content, key_path))

    def write_value(self, item: JobItem, value) -> None:
        """Copy-on-write update of one key, then swap the language entry."""
        translation_file = self.language_set[item.target_language]
        new_root = set_value_by_path(translation_file.content, item.path, value)
        self.language_set[item.target_language] = translation_file.with_content(new_root)


async def run_batch(job: BatchTranslationJob, language_set: LanguageSet, adapter: TranslationAdapter,
                    api_key: Optional[str], service: str = DEFAULT_SERVICE,
                    on_progress: Optional[Callable[[int], None]] = None,
                    check_interruption_callback: Optional[Callable[[], bool]] = None,
                    event_bus: Optional[EventBus] = None) -> TranslationOutcome:
    """Functional form of TranslationOrchestrator.run_batch."""
    orchestrator = TranslationOrchestrator(language_set, adapter, api_key, service, event_bus=event_bus)
    return await orchestrator.run_batch(
        job,
        on_progress=on_progress,
        check_interruption_callback=check_interruption_callback
    )
