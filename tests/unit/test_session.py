"""
Unit tests for TranslationSession.
"""
import json

import pytest

from conftest import MockAdapter
from i18n_manager.core.comparison import CompareMode, StatusKind
from i18n_manager.core.exceptions import (
    EmptyJobError,
    MissingSourceLanguageError,
    MissingTargetLanguageError,
)
from i18n_manager.core.result import Err
from i18n_manager.core.samples import get_sample_translations
from i18n_manager.core.session import TranslationSession


class TestSessionState:
    """Loading, reading and editing."""

    def test_from_folder(self, translation_folder):
        session = TranslationSession.from_folder(translation_folder)
        assert sorted(session.languages) == ['en', 'fr']
        assert not session.dirty

    def test_compare(self, language_set):
        session = TranslationSession({'en': language_set['en'], 'fr': language_set['fr']})
        report = session.compare()
        assert report.mode is CompareMode.NWAY
        issues = session.compare(show_issues_only=True)
        assert issues.entries == report.issues_only()
        assert all(not e.status.is_ok for e in issues)
        assert report.find('greeting.hello').status.is_ok
        assert len(issues) < len(report)

    def test_compare_with_empty_language_has_no_ok_entries(self, language_set):
        session = TranslationSession(language_set)
        report = session.compare()
        issues = session.compare(show_issues_only=True)
        assert len(issues) == len(report)

    def test_compare_pair_uses_language_labels(self, language_set):
        report = TranslationSession(language_set).compare_pair('en', 'fr')
        assert report.languages == ('en', 'fr')
        assert report.find('greeting.bye').status.kind is StatusKind.MISSING_IN_B

    def test_compare_pair_unknown_language(self, language_set):
        with pytest.raises(MissingTargetLanguageError):
            TranslationSession(language_set).compare_pair('en', 'it')

    def test_update_value_is_copy_on_write(self, language_set):
        session = TranslationSession(language_set)
        before = session.language_set['fr']
        session.update_value('fr', 'greeting.bye', "Au revoir")

        assert session.dirty
        assert before.content == {'greeting': {'hello': "Bonjour"}}
        assert session.get_value('fr', 'greeting.bye') == "Au revoir"

    def test_update_from_text(self, language_set):
        session = TranslationSession(language_set)
        session.update_from_text('fr', 'menu.count', "3")
        assert session.get_value('fr', 'menu.count') == 3

    def test_update_unknown_language(self, language_set):
        with pytest.raises(MissingTargetLanguageError):
            TranslationSession(language_set).update_value('it', 'a', "x")

    def test_values_for(self, language_set):
        values = TranslationSession(language_set).values_for('greeting.hello')
        assert values == {'en': "Hello", 'fr': "Bonjour", 'de': None}

    def test_key_tree(self):
        session = TranslationSession(get_sample_translations())
        tree = session.key_tree()
        assert sorted(tree.children) == ['common', 'pages']
        assert 'common.buttons.save' in session.all_keys()

    def test_load_resets_dirty(self, language_set):
        session = TranslationSession(language_set)
        session.update_value('fr', 'x', "y")
        session.load(get_sample_translations())
        assert not session.dirty


class TestSessionTranslation:
    """Batch and single-key translation through the session."""

    @pytest.mark.asyncio
    async def test_translate_missing(self, language_set):
        adapter = MockAdapter(responses={"Goodbye": Err("HTTP 429")})
        session = TranslationSession(language_set, adapter=adapter, api_key="key")
        progress = []
        outcome = await session.translate_missing('en', ['fr'], on_progress=progress.append)

        assert outcome.success_count == 1
        assert outcome.failed_count == 1
        assert progress[-1] == 100
        assert session.dirty
        assert session.get_value('fr', 'menu.file') == "fr:File"

    @pytest.mark.asyncio
    async def test_nothing_to_translate(self):
        session = TranslationSession(get_sample_translations(), adapter=MockAdapter(), api_key="key")
        with pytest.raises(EmptyJobError):
            await session.translate_missing('en', ['fr'])

    @pytest.mark.asyncio
    async def test_unloaded_source_language(self, language_set):
        adapter = MockAdapter()
        session = TranslationSession(language_set, adapter=adapter, api_key="key")
        with pytest.raises(MissingSourceLanguageError):
            await session.translate_missing('eng', ['fr'])
        assert adapter.calls == []

    @pytest.mark.asyncio
    async def test_translate_single(self, language_set):
        session = TranslationSession(language_set, adapter=MockAdapter(), api_key="key")
        result = await session.translate_single('greeting.hello', 'en', 'de')
        assert result.unwrap() == "de:Hello"
        assert session.dirty

    @pytest.mark.asyncio
    async def test_save_marks_clean(self, language_set, tmp_path):
        session = TranslationSession(language_set)
        session.update_value('fr', 'greeting.bye', "Au revoir")
        written = await session.save(tmp_path, only_dirty=True)

        assert len(written) == 1
        assert not session.dirty
        saved = json.loads((tmp_path / 'fr.json').read_text(encoding='utf-8'))
        assert saved['greeting']['bye'] == "Au revoir"
