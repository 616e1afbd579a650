"""
Single entry point over the translation services.

ProviderAdapter.translate() keeps one provider (and so one pooled HTTP client)
per (service, api_key) for the lifetime of the adapter, which is what a batch
wants. translate_text() is the one-shot form.
"""

from typing import Dict, Optional, Tuple

import httpx

from i18n_manager.config import DEFAULT_SERVICE, SUPPORTED_SERVICES
from i18n_manager.core.exceptions import UnknownServiceError
from i18n_manager.core.result import Err, Result
from .base import TranslationProvider
from .openai import OpenAIProvider
from .google import GoogleTranslateProvider
from .azure import AzureTranslatorProvider

PROVIDER_CLASSES = {
    "openai": OpenAIProvider,
    "google": GoogleTranslateProvider,
    "azure": AzureTranslatorProvider,
}


def create_provider(service: str, api_key: Optional[str], **kwargs) -> TranslationProvider:
    """Factory function to create translation providers"""
    provider_class = PROVIDER_CLASSES.get((service or "").lower())
    if provider_class is None:
        raise UnknownServiceError(
            f"Unknown translation service: {service}",
            context={'supported': ", ".join(SUPPORTED_SERVICES)}
        )
    return provider_class(api_key=api_key, **kwargs)


class ProviderAdapter:
    """Uniform asynchronous translate operation over all services"""

    def __init__(self, client: Optional[httpx.AsyncClient] = None, **provider_options):
        """
        Args:
            client: Shared HTTP client handed to every provider (not closed here)
            **provider_options: Extra constructor arguments per service, e.g.
                openai={"model": "gpt-4o-mini"}, azure={"region": "eastus"}
        """
        self._client = client
        self._provider_options = provider_options
        self._providers: Dict[Tuple[str, str], TranslationProvider] = {}

    def get_provider(self, service: str, api_key: Optional[str]) -> TranslationProvider:
        """
        Raises:
            UnknownServiceError: If the service identifier is not supported
        """
        cache_key = ((service or "").lower(), api_key or "")
        provider = self._providers.get(cache_key)
        if provider is None:
            options = dict(self._provider_options.get(cache_key[0], {}))
            if self._client is not None:
                options.setdefault("client", self._client)
            provider = create_provider(service, api_key, **options)
            self._providers[cache_key] = provider
        return provider

    async def translate(self, text: str, source_lang: str, target_lang: str,
                        api_key: Optional[str], service: str = DEFAULT_SERVICE) -> Result:
        """
        Translate text with the named service. Never raises.

        Returns:
            Ok(translated_text) or Err(error message)
        """
        try:
            provider = self.get_provider(service, api_key)
        except UnknownServiceError as e:
            return Err(e.message)
        return await provider.translate(text, source_lang, target_lang)

    async def close(self):
        for provider in self._providers.values():
            await provider.close()
        self._providers.clear()

    async def __aenter__(self) -> 'ProviderAdapter':
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()


async def translate_text(text: str, source_lang: str, target_lang: str,
                         api_key: Optional[str], service: str = DEFAULT_SERVICE,
                         client: Optional[httpx.AsyncClient] = None) -> Result:
    """One-shot translation that opens and closes its own provider."""
    async with ProviderAdapter(client=client) as adapter:
        return await adapter.translate(text, source_lang, target_lang, api_key, service)
