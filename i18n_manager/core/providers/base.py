"""
Base class for translation providers.

Every provider turns one (text, source, target) triple into one HTTP POST and
normalizes whatever comes back into a Result: Ok(translated_text) or
Err(human-readable message). translate() never raises.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import time

import httpx

from i18n_manager.config import REQUEST_TIMEOUT, GENERIC_TRANSLATION_ERROR
from i18n_manager.core.result import Ok, Err, Result
from i18n_manager.utils.unified_logger import get_logger, LogType


@dataclass
class ProviderRequest:
    """HTTP request description built by a provider."""
    url: str
    json: Any
    params: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)


def extract_error_message(data: Any, default: str = GENERIC_TRANSLATION_ERROR) -> str:
    """Server-provided `error.message` from a JSON body, or default."""
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
    return default


class TranslationProvider(ABC):
    """Abstract base class for translation backends"""

    service_name = "unknown"

    def __init__(self, api_key: Optional[str], timeout: float = REQUEST_TIMEOUT,
                 client: Optional[httpx.AsyncClient] = None):
        """
        Initialize the provider.

        Args:
            api_key: Service credential
            timeout: Request timeout in seconds
            client: Pre-built HTTP client (the provider will not close it)
        """
        self.api_key = api_key
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create a persistent HTTP client with connection pooling"""
        if self._client is None:
            self._client = httpx.AsyncClient(
                limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
                timeout=httpx.Timeout(self.timeout),
            )
            self._owns_client = True
        return self._client

    async def close(self):
        """Close the HTTP client if this provider created it"""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> 'TranslationProvider':
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    @abstractmethod
    def build_request(self, text: str, source_lang: str, target_lang: str) -> ProviderRequest:
        """Describe the HTTP request for one translation."""
        pass

    @abstractmethod
    def extract_translation(self, data: Any) -> Optional[str]:
        """
        Pull the translated text out of a successful response body.

        Returns None when the body holds no translation. May raise KeyError,
        IndexError, TypeError or AttributeError on unexpected shapes; the
        caller treats those as a malformed response.
        """
        pass

    async def translate(self, text: str, source_lang: str, target_lang: str) -> Result:
        """
        Translate one string.

        Returns:
            Ok(translated_text) or Err(error message)
        """
        if not self.api_key:
            return Err("API Key is required")

        logger = get_logger()
        request = self.build_request(text, source_lang, target_lang)
        logger.debug("Provider request", LogType.PROVIDER_REQUEST, {
            'service': self.service_name,
            'source_lang': source_lang,
            'target_lang': target_lang,
            'text': text
        })

        start_time = time.time()
        try:
            client = await self._get_client()
            response = await client.post(
                request.url,
                params=request.params or None,
                headers=request.headers,
                json=request.json,
                timeout=self.timeout
            )
        except httpx.TimeoutException as e:
            logger.debug(f"{self.service_name} timeout: {e}")
            return Err(f"Request timed out: {e}" if str(e) else "Request timed out")
        except httpx.HTTPError as e:
            logger.debug(f"{self.service_name} HTTP error: {e}")
            return Err(str(e) or GENERIC_TRANSLATION_ERROR)
        except Exception as e:
            logger.debug(f"{self.service_name} unexpected error: {e}")
            return Err(str(e) or GENERIC_TRANSLATION_ERROR)

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.is_success:
            return Err(extract_error_message(data, f"HTTP {response.status_code}: {GENERIC_TRANSLATION_ERROR}"))

        try:
            translated = self.extract_translation(data)
        except (KeyError, IndexError, TypeError, AttributeError):
            translated = None

        if translated is None:
            return Err(extract_error_message(data))

        logger.debug("Provider response", LogType.PROVIDER_RESPONSE, {
            'service': self.service_name,
            'execution_time': time.time() - start_time,
            'response': translated
        })
        return Ok(translated)
