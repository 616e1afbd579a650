"""
Unit tests for the HTTP translation providers and the provider adapter.

Requests are served by httpx.MockTransport; nothing leaves the process.
"""
import json

import httpx
import pytest

from i18n_manager.config import GENERIC_TRANSLATION_ERROR
from i18n_manager.core.exceptions import UnknownServiceError
from i18n_manager.core.providers import (
    AzureTranslatorProvider,
    GoogleTranslateProvider,
    OpenAIProvider,
    ProviderAdapter,
    create_provider,
    extract_error_message,
    translate_text,
)


def make_client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class Recorder:
    """Transport handler returning a fixed response and keeping the requests."""

    def __init__(self, status_code=200, body=None, raw=None):
        self.status_code = status_code
        self.body = body
        self.raw = raw
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raw is not None:
            return httpx.Response(self.status_code, content=self.raw)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last_json(self):
        return json.loads(self.requests[-1].content)


class TestOpenAIProvider:
    """Tests for OpenAIProvider."""

    @pytest.mark.asyncio
    async def test_success(self):
        recorder = Recorder(body={"choices": [{"message": {"content": "  Bonjour \n"}}]})
        async with make_client(recorder) as client:
            provider = OpenAIProvider("sk-test", client=client)
            result = await provider.translate("Hello", "en", "fr")

        assert result.is_ok()
        assert result.unwrap() == "Bonjour"

        request = recorder.requests[0]
        assert request.method == "POST"
        assert request.headers["Authorization"] == "Bearer sk-test"
        body = recorder.last_json
        assert body["model"] == provider.model
        assert body["messages"][0]["role"] == "system"
        assert "from en to fr" in body["messages"][0]["content"]
        assert body["messages"][1] == {"role": "user", "content": "Hello"}

    @pytest.mark.asyncio
    async def test_server_error_message(self):
        recorder = Recorder(status_code=401, body={"error": {"message": "Incorrect API key provided"}})
        async with make_client(recorder) as client:
            result = await OpenAIProvider("bad", client=client).translate("Hello", "en", "fr")

        assert result.is_err()
        assert result.error == "Incorrect API key provided"

    @pytest.mark.asyncio
    async def test_no_choices(self):
        recorder = Recorder(body={"choices": []})
        async with make_client(recorder) as client:
            result = await OpenAIProvider("sk", client=client).translate("Hello", "en", "fr")

        assert result.is_err()
        assert result.error == GENERIC_TRANSLATION_ERROR

    @pytest.mark.asyncio
    async def test_missing_key_sends_nothing(self):
        recorder = Recorder(body={})
        async with make_client(recorder) as client:
            result = await OpenAIProvider("", client=client).translate("Hello", "en", "fr")

        assert result.is_err()
        assert result.error == "API Key is required"
        assert recorder.requests == []


class TestGoogleTranslateProvider:
    """Tests for GoogleTranslateProvider."""

    @pytest.mark.asyncio
    async def test_success(self):
        recorder = Recorder(body={"data": {"translations": [{"translatedText": "Hallo"}]}})
        async with make_client(recorder) as client:
            result = await GoogleTranslateProvider("g-key", client=client).translate("Hello", "en", "de")

        assert result.unwrap() == "Hallo"
        request = recorder.requests[0]
        assert request.url.params["key"] == "g-key"
        assert recorder.last_json == {"q": "Hello", "source": "en", "target": "de", "format": "text"}

    @pytest.mark.asyncio
    async def test_http_error_without_body(self):
        recorder = Recorder(status_code=503, raw=b"Service Unavailable")
        async with make_client(recorder) as client:
            result = await GoogleTranslateProvider("g-key", client=client).translate("Hello", "en", "de")

        assert result.is_err()
        assert result.error == f"HTTP 503: {GENERIC_TRANSLATION_ERROR}"

    @pytest.mark.asyncio
    async def test_empty_translations(self):
        recorder = Recorder(body={"data": {"translations": []}})
        async with make_client(recorder) as client:
            result = await GoogleTranslateProvider("g-key", client=client).translate("Hello", "en", "de")

        assert result.is_err()


class TestAzureTranslatorProvider:
    """Tests for AzureTranslatorProvider."""

    @pytest.mark.asyncio
    async def test_success(self):
        recorder = Recorder(body=[{"translations": [{"text": "Hola", "to": "es"}]}])
        async with make_client(recorder) as client:
            provider = AzureTranslatorProvider("az-key", region="eastus", client=client)
            result = await provider.translate("Hello", "en", "es")

        assert result.unwrap() == "Hola"
        request = recorder.requests[0]
        assert request.headers["Ocp-Apim-Subscription-Key"] == "az-key"
        assert request.headers["Ocp-Apim-Subscription-Region"] == "eastus"
        assert request.url.params["api-version"] == "3.0"
        assert request.url.params["from"] == "en"
        assert request.url.params["to"] == "es"
        assert recorder.last_json == [{"text": "Hello"}]

    @pytest.mark.asyncio
    async def test_malformed_body(self):
        recorder = Recorder(body={"unexpected": True})
        async with make_client(recorder) as client:
            result = await AzureTranslatorProvider("az-key", client=client).translate("Hello", "en", "es")

        assert result.is_err()
        assert result.error == GENERIC_TRANSLATION_ERROR


class TestTransportFailures:
    """Network-level failures come back as Err."""

    @pytest.mark.asyncio
    async def test_connect_error(self):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        async with make_client(handler) as client:
            result = await OpenAIProvider("sk", client=client).translate("Hello", "en", "fr")

        assert result.is_err()
        assert "Connection refused" in result.error

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async with make_client(handler) as client:
            result = await GoogleTranslateProvider("g", client=client).translate("Hello", "en", "fr")

        assert result.is_err()
        assert result.error.startswith("Request timed out")

    @pytest.mark.asyncio
    async def test_shared_client_is_not_closed(self):
        recorder = Recorder(body={"data": {"translations": [{"translatedText": "x"}]}})
        async with make_client(recorder) as client:
            provider = GoogleTranslateProvider("g", client=client)
            await provider.close()
            assert not client.is_closed


class TestExtractErrorMessage:
    """Tests for extract_error_message."""

    def test_nested_message(self):
        assert extract_error_message({"error": {"message": "quota"}}) == "quota"

    def test_string_error(self):
        assert extract_error_message({"error": "bad request"}) == "bad request"

    def test_default(self):
        assert extract_error_message(None) == GENERIC_TRANSLATION_ERROR
        assert extract_error_message([], "fallback") == "fallback"


class TestProviderAdapter:
    """Tests for ProviderAdapter and create_provider."""

    def test_create_provider(self):
        assert isinstance(create_provider("openai", "k"), OpenAIProvider)
        assert isinstance(create_provider("Google", "k"), GoogleTranslateProvider)
        assert isinstance(create_provider("azure", "k"), AzureTranslatorProvider)

    def test_create_unknown_provider(self):
        with pytest.raises(UnknownServiceError):
            create_provider("deepl", "k")

    @pytest.mark.asyncio
    async def test_unknown_service_is_err(self):
        async with ProviderAdapter() as adapter:
            result = await adapter.translate("Hello", "en", "fr", "k", service="deepl")
        assert result.is_err()
        assert "deepl" in result.error

    @pytest.mark.asyncio
    async def test_routes_to_service_and_reuses_provider(self):
        recorder = Recorder(body=[{"translations": [{"text": "Hola"}]}])
        async with make_client(recorder) as client:
            adapter = ProviderAdapter(client=client, azure={"region": "northeurope"})
            first = await adapter.translate("Hello", "en", "es", "az", service="azure")
            second = await adapter.translate("Bye", "en", "es", "az", service="azure")
            provider = adapter.get_provider("azure", "az")
            await adapter.close()

        assert first.unwrap() == "Hola"
        assert second.unwrap() == "Hola"
        assert provider.region == "northeurope"
        assert len(recorder.requests) == 2
        assert "microsofttranslator" in str(recorder.requests[0].url)

    @pytest.mark.asyncio
    async def test_missing_key(self):
        async with ProviderAdapter() as adapter:
            result = await adapter.translate("Hello", "en", "fr", None, service="openai")
        assert result.is_err()
        assert result.error == "API Key is required"

    @pytest.mark.asyncio
    async def test_translate_text_one_shot(self):
        recorder = Recorder(body={"choices": [{"message": {"content": "Ciao"}}]})
        async with make_client(recorder) as client:
            result = await translate_text("Hello", "en", "it", "sk", service="openai", client=client)
        assert result.unwrap() == "Ciao"
