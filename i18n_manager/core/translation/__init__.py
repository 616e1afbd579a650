"""
Batch translation: job construction and the sequential orchestrator.
"""

from .job import (
    BatchTranslationJob,
    JobItem,
    TranslationOutcome,
    build_job,
    build_path_job,
    find_missing_translations,
)
from .orchestrator import TranslationOrchestrator, run_batch, progress_percentage

__all__ = [
    'BatchTranslationJob',
    'JobItem',
    'TranslationOutcome',
    'build_job',
    'build_path_job',
    'find_missing_translations',
    'TranslationOrchestrator',
    'run_batch',
    'progress_percentage',
]
