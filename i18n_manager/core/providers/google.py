"""
Google Cloud Translation (v2) provider.

The credential travels as the `key` query parameter.
"""

from typing import Any, Optional

import httpx

from i18n_manager.config import GOOGLE_TRANSLATE_ENDPOINT, REQUEST_TIMEOUT
from .base import TranslationProvider, ProviderRequest


class GoogleTranslateProvider(TranslationProvider):
    """Provider for the Google Translate v2 REST API"""

    service_name = "google"

    def __init__(self, api_key: Optional[str], api_endpoint: str = GOOGLE_TRANSLATE_ENDPOINT,
                 timeout: float = REQUEST_TIMEOUT, client: Optional[httpx.AsyncClient] = None):
        super().__init__(api_key, timeout=timeout, client=client)
        self.api_endpoint = api_endpoint

    def build_request(self, text: str, source_lang: str, target_lang: str) -> ProviderRequest:
        return ProviderRequest(
            url=self.api_endpoint,
            params={"key": self.api_key},
            headers={"Content-Type": "application/json"},
            json={
                "q": text,
                "source": source_lang,
                "target": target_lang,
                "format": "text"
            }
        )

    def extract_translation(self, data: Any) -> Optional[str]:
        translations = (data.get("data") or {}).get("translations") or []
        if not translations:
            return None
        return translations[0]["translatedText"]
