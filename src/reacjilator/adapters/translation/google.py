"""Google Cloud Translation (v3) adapter.

Credentials are resolved by google-auth's Application Default Credentials
(``GOOGLE_APPLICATION_CREDENTIALS`` pointing at a service account key, or
the metadata server when running on Google Cloud).
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import structlog
from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import translate_v3

from ...config.schema import TranslateConfig
from ...models.message import TranslationResult
from ...utils.async_helpers import TranslationError

log = structlog.get_logger()


class GoogleTranslateAdapter:
    """Translation adapter implementing the TranslationProvider protocol.

    Example:
        adapter = GoogleTranslateAdapter(TranslateConfig(project_id="my-project"))
        result = await adapter.translate("Hello", "ja")
        print(result.translated_text)
    """

    def __init__(
        self,
        config: TranslateConfig,
        client: translate_v3.TranslationServiceAsyncClient | None = None,
        client_factory: Callable[[], translate_v3.TranslationServiceAsyncClient] | None = None,
    ) -> None:
        """Initialize the adapter.

        The gRPC channel of an async client is bound to the event loop it is
        created in, so unless a client is injected it is built on first use
        and rebuilt if the running loop changes.

        Args:
            config: Translation provider configuration.
            client: Pre-built async client (tests inject a mock here).
            client_factory: Callable building the client on first use.
        """
        self._config = config
        self._client = client
        self._client_factory = client_factory or _default_client
        self._owns_client = client is None
        self._client_loop: asyncio.AbstractEventLoop | None = None

    def _get_client(self) -> translate_v3.TranslationServiceAsyncClient:
        if not self._owns_client and self._client is not None:
            return self._client

        loop = asyncio.get_running_loop()
        if self._client is None or self._client_loop is not loop:
            log.debug("translate_client_created")
            self._client = self._client_factory()
            self._client_loop = loop
        return self._client

    async def translate(self, text: str, target_language: str) -> TranslationResult:
        """Translate one plain-text document.

        Args:
            text: Text to translate.
            target_language: Target language code.

        Returns:
            TranslationResult for the first returned translation.

        Raises:
            TranslationError: If the provider call fails or returns nothing.
        """
        request = {
            "parent": self._config.parent,
            "contents": [text],
            "mime_type": self._config.mime_type,
            "target_language_code": target_language,
        }

        try:
            response = await self._get_client().translate_text(
                request=request,
                timeout=self._config.timeout,
            )
        except (GoogleAPIError, GoogleAuthError, RuntimeError) as e:
            log.error(
                "translate_request_failed",
                target_language=target_language,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise TranslationError(f"Translation to {target_language} failed: {e}") from e

        if not response.translations:
            log.error("translate_response_empty", target_language=target_language)
            raise TranslationError(f"No translation returned for {target_language}")

        translation = response.translations[0]
        log.debug(
            "translate_response",
            target_language=target_language,
            detected_language=translation.detected_language_code or None,
            chars=len(translation.translated_text),
        )

        return TranslationResult(
            translated_text=translation.translated_text,
            target_language=target_language,
            detected_source_language=translation.detected_language_code or None,
        )


def _default_client() -> translate_v3.TranslationServiceAsyncClient:
    return translate_v3.TranslationServiceAsyncClient()
