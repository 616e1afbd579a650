"""
Pytest configuration and fixtures for all tests.

This file is automatically loaded by pytest and provides common fixtures
and configuration for all test modules.
"""

import json
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from i18n_manager.core.document import TranslationFile
from i18n_manager.core.result import Ok, Err


class MockAdapter:
    """
    Scripted translation adapter.

    responses maps source text to the value to return: a string becomes
    Ok(text), an Exception instance is raised, anything else is returned
    as is (e.g. an Err). Unscripted texts translate to "<target>:<text>".
    """

    def __init__(self, responses=None, on_call=None):
        self.responses = responses or {}
        self.on_call = on_call
        self.calls = []

    async def translate(self, text, source_lang, target_lang, api_key, service="openai"):
        self.calls.append((text, source_lang, target_lang, api_key, service))
        if self.on_call:
            self.on_call(len(self.calls))
        response = self.responses.get(text, f"{target_lang}:{text}")
        if isinstance(response, Exception):
            raise response
        if isinstance(response, str):
            return Ok(response)
        return response


@pytest.fixture
def mock_adapter():
    return MockAdapter()


@pytest.fixture
def failing_adapter():
    return MockAdapter(responses={"Goodbye": Err("HTTP 500: Unknown error occurred during translation")})


@pytest.fixture
def language_set():
    """en is complete, fr lacks greeting.bye and menu.*, de is empty."""
    return {
        'en': TranslationFile('en.json', {
            'greeting': {'hello': "Hello", 'bye': "Goodbye"},
            'menu': {'file': "File", 'count': 3},
        }),
        'fr': TranslationFile('fr.json', {
            'greeting': {'hello': "Bonjour"},
        }),
        'de': TranslationFile('de.json', {}),
    }


@pytest.fixture
def translation_folder(tmp_path):
    """Folder with en.json at the root and fr/translation.json in a sub-folder."""
    (tmp_path / 'en.json').write_text(
        json.dumps({'a': {'b': "x"}, 'c': "hello"}), encoding='utf-8')
    (tmp_path / 'fr').mkdir()
    (tmp_path / 'fr' / 'translation.json').write_text(
        json.dumps({'a': {'b': "y"}}), encoding='utf-8')
    return tmp_path
