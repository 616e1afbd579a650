"""
OpenAI chat-completion provider.

The text is sent as the user message; a system instruction names the source
and target languages and asks for the bare translation.
"""

from typing import Any, Optional

import httpx

from i18n_manager.config import (
    OPENAI_API_ENDPOINT,
    OPENAI_MODEL,
    OPENAI_TEMPERATURE,
    OPENAI_MAX_TOKENS,
    REQUEST_TIMEOUT,
)
from .base import TranslationProvider, ProviderRequest

SYSTEM_PROMPT_TEMPLATE = (
    "You are a professional translator. Translate the following text from {source_lang} to {target_lang}. "
    "Preserve all formatting and special characters. Return ONLY the translated text without any explanations."
)


class OpenAIProvider(TranslationProvider):
    """Chat-completion provider (OpenAI API and compatible endpoints)"""

    service_name = "openai"

    def __init__(self, api_key: Optional[str], model: str = OPENAI_MODEL,
                 api_endpoint: str = OPENAI_API_ENDPOINT,
                 temperature: float = OPENAI_TEMPERATURE,
                 max_tokens: int = OPENAI_MAX_TOKENS,
                 timeout: float = REQUEST_TIMEOUT,
                 client: Optional[httpx.AsyncClient] = None):
        super().__init__(api_key, timeout=timeout, client=client)
        self.model = model
        self.api_endpoint = api_endpoint
        self.temperature = temperature
        self.max_tokens = max_tokens

    def build_request(self, text: str, source_lang: str, target_lang: str) -> ProviderRequest:
        system_prompt = SYSTEM_PROMPT_TEMPLATE.format(source_lang=source_lang, target_lang=target_lang)
        return ProviderRequest(
            url=self.api_endpoint,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self.api_key}"
            },
            json={
                "model": self.model,
                "messages": [
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": text}
                ],
                "temperature": self.temperature,
                "max_tokens": self.max_tokens
            }
        )

    def extract_translation(self, data: Any) -> Optional[str]:
        choices = data.get("choices") or []
        if not choices:
            return None
        content = choices[0]["message"]["content"]
        if content is None:
            return None
        return content.strip()
