"""
Translation service providers

Providers:
    - openai: OpenAI chat-completion API
    - google: Google Cloud Translation v2
    - azure: Azure Translator v3
"""

from .base import TranslationProvider, ProviderRequest, extract_error_message
from .openai import OpenAIProvider
from .google import GoogleTranslateProvider
from .azure import AzureTranslatorProvider
from .adapter import ProviderAdapter, create_provider, translate_text

__all__ = [
    'TranslationProvider',
    'ProviderRequest',
    'extract_error_message',
    'OpenAIProvider',
    'GoogleTranslateProvider',
    'AzureTranslatorProvider',
    'ProviderAdapter',
    'create_provider',
    'translate_text',
]
