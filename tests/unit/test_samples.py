"""
Unit tests for the built-in sample translations.
"""
from i18n_manager.core.comparison import compare_languages
from i18n_manager.core.samples import get_sample_translations


class TestSampleTranslations:
    """Tests for get_sample_translations."""

    def test_languages(self):
        samples = get_sample_translations()
        assert list(samples) == ['en', 'es', 'fr']
        assert samples['fr'].file_path == 'fr.json'
        assert samples['en'].content['common']['greeting'] == "Hello, {{name}}!"

    def test_samples_are_complete(self):
        report = compare_languages(get_sample_translations())
        assert report.issues_only() == []

    def test_each_call_returns_a_fresh_copy(self):
        first = get_sample_translations()
        first['en'].content['common']['welcome'] = "changed"
        assert get_sample_translations()['en'].content['common']['welcome'] == "Welcome to i18n Manager"
