"""Tests for the Google Cloud Translation adapter."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from google.api_core.exceptions import BadRequest, ResourceExhausted
from google.auth.credentials import AnonymousCredentials
from google.auth.exceptions import DefaultCredentialsError
from google.cloud import translate_v3

from reacjilator.adapters.translation.google import GoogleTranslateAdapter
from reacjilator.config.schema import TranslateConfig
from reacjilator.utils.async_helpers import TranslationError


def translate_response(*texts: str, detected: str = "en") -> SimpleNamespace:
    return SimpleNamespace(
        translations=[
            SimpleNamespace(translated_text=text, detected_language_code=detected)
            for text in texts
        ]
    )


@pytest.fixture
def mock_client() -> MagicMock:
    """Create a mock TranslationServiceAsyncClient."""
    client = MagicMock()
    client.translate_text = AsyncMock(return_value=translate_response("こんにちは"))
    return client


@pytest.fixture
def adapter(translate_config: TranslateConfig, mock_client: MagicMock) -> GoogleTranslateAdapter:
    return GoogleTranslateAdapter(translate_config, client=mock_client)


class TestGoogleTranslateAdapter:
    """Tests for GoogleTranslateAdapter."""

    def test_init_defers_client(self, translate_config: TranslateConfig) -> None:
        with patch(
            "reacjilator.adapters.translation.google.translate_v3.TranslationServiceAsyncClient"
        ) as mock_client_class:
            GoogleTranslateAdapter(translate_config)

        mock_client_class.assert_not_called()

    async def test_client_created_on_first_use(
        self, translate_config: TranslateConfig, mock_client: MagicMock
    ) -> None:
        factory = MagicMock(return_value=mock_client)
        adapter = GoogleTranslateAdapter(translate_config, client_factory=factory)

        await adapter.translate("Hello", "ja")
        await adapter.translate("Hello", "fr")

        factory.assert_called_once_with()
        assert mock_client.translate_text.await_count == 2

    def test_client_rebuilt_for_new_event_loop(
        self, translate_config: TranslateConfig, mock_client: MagicMock
    ) -> None:
        factory = MagicMock(return_value=mock_client)
        adapter = GoogleTranslateAdapter(translate_config, client_factory=factory)

        asyncio.run(adapter.translate("Hello", "ja"))
        asyncio.run(adapter.translate("Hello", "ja"))

        assert factory.call_count == 2

    def test_unreachable_endpoint(self) -> None:
        config = TranslateConfig(project_id="test-project", timeout=5.0)

        def unreachable_client() -> translate_v3.TranslationServiceAsyncClient:
            return translate_v3.TranslationServiceAsyncClient(
                credentials=AnonymousCredentials(),
                client_options={"api_endpoint": "127.0.0.1:9"},
            )

        # Built outside any event loop, as the server does before uvicorn starts
        adapter = GoogleTranslateAdapter(config, client_factory=unreachable_client)

        with pytest.raises(TranslationError):
            asyncio.run(adapter.translate("Hello", "ja"))
        with pytest.raises(TranslationError):
            asyncio.run(adapter.translate("Hello", "ja"))

    async def test_runtime_error(
        self, adapter: GoogleTranslateAdapter, mock_client: MagicMock
    ) -> None:
        mock_client.translate_text.side_effect = RuntimeError("Event loop is closed")

        with pytest.raises(TranslationError, match="Translation to ja failed"):
            await adapter.translate("Hello", "ja")

    async def test_translate(self, adapter: GoogleTranslateAdapter, mock_client: MagicMock) -> None:
        result = await adapter.translate("Hello", "ja")

        assert result.translated_text == "こんにちは"
        assert result.target_language == "ja"
        assert result.detected_source_language == "en"
        mock_client.translate_text.assert_awaited_once_with(
            request={
                "parent": "projects/test-project/locations/global",
                "contents": ["Hello"],
                "mime_type": "text/plain",
                "target_language_code": "ja",
            },
            timeout=30.0,
        )

    async def test_uses_first_translation(
        self, adapter: GoogleTranslateAdapter, mock_client: MagicMock
    ) -> None:
        mock_client.translate_text.return_value = translate_response("first", "second")

        result = await adapter.translate("Hello", "fr")

        assert result.translated_text == "first"

    async def test_empty_detected_language(
        self, adapter: GoogleTranslateAdapter, mock_client: MagicMock
    ) -> None:
        mock_client.translate_text.return_value = translate_response("Hola", detected="")

        result = await adapter.translate("Hello", "es")

        assert result.detected_source_language is None

    async def test_quota_error(self, adapter: GoogleTranslateAdapter, mock_client: MagicMock) -> None:
        mock_client.translate_text.side_effect = ResourceExhausted("quota")

        with pytest.raises(TranslationError, match="Translation to ja failed"):
            await adapter.translate("Hello", "ja")

    async def test_unsupported_language(
        self, adapter: GoogleTranslateAdapter, mock_client: MagicMock
    ) -> None:
        mock_client.translate_text.side_effect = BadRequest("Target language is invalid")

        with pytest.raises(TranslationError):
            await adapter.translate("Hello", "dz")

    async def test_credentials_error(
        self, adapter: GoogleTranslateAdapter, mock_client: MagicMock
    ) -> None:
        mock_client.translate_text.side_effect = DefaultCredentialsError("no credentials")

        with pytest.raises(TranslationError):
            await adapter.translate("Hello", "ja")

    async def test_empty_response(
        self, adapter: GoogleTranslateAdapter, mock_client: MagicMock
    ) -> None:
        mock_client.translate_text.return_value = translate_response()

        with pytest.raises(TranslationError, match="No translation"):
            await adapter.translate("Hello", "ja")
