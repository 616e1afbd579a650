"""
Core reconciliation and translation modules
"""
from .document import TranslationFile, LanguageSet
from .comparison import ComparisonEngine, ReconciliationReport, compare_two_files, compare_languages
from .editing import parse_edited_value
from .samples import get_sample_translations

__all__ = [
    'TranslationFile',
    'LanguageSet',
    'ComparisonEngine',
    'ReconciliationReport',
    'compare_two_files',
    'compare_languages',
    'parse_edited_value',
    'get_sample_translations'
]
