"""
Azure Translator (v3) provider.

Credential and region go in the Ocp-Apim headers; languages are query
parameters; the body is a one-element array.
"""

from typing import Any, Optional

import httpx

from i18n_manager.config import (
    AZURE_TRANSLATOR_ENDPOINT,
    AZURE_TRANSLATOR_REGION,
    AZURE_API_VERSION,
    REQUEST_TIMEOUT,
)
from .base import TranslationProvider, ProviderRequest


class AzureTranslatorProvider(TranslationProvider):
    """Provider for Microsoft Azure Translator"""

    service_name = "azure"

    def __init__(self, api_key: Optional[str], region: str = AZURE_TRANSLATOR_REGION,
                 api_endpoint: str = AZURE_TRANSLATOR_ENDPOINT,
                 timeout: float = REQUEST_TIMEOUT, client: Optional[httpx.AsyncClient] = None):
        super().__init__(api_key, timeout=timeout, client=client)
        self.region = region
        self.api_endpoint = api_endpoint

    def build_request(self, text: str, source_lang: str, target_lang: str) -> ProviderRequest:
        return ProviderRequest(
            url=self.api_endpoint,
            params={
                "api-version": AZURE_API_VERSION,
                "from": source_lang,
                "to": target_lang
            },
            headers={
                "Content-Type": "application/json",
                "Ocp-Apim-Subscription-Key": self.api_key,
                "Ocp-Apim-Subscription-Region": self.region
            },
            json=[{"text": text}]
        )

    def extract_translation(self, data: Any) -> Optional[str]:
        if not data:
            return None
        translations = data[0].get("translations") or []
        if not translations:
            return None
        return translations[0]["text"]
