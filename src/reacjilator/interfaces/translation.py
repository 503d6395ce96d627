"""Abstract interface for translation providers."""

from typing import Protocol

from ..models.message import TranslationResult


class TranslationProvider(Protocol):
    """Translates a single text document."""

    async def translate(self, text: str, target_language: str) -> TranslationResult:
        """
        Translate text into the target language.

        The source language is detected by the provider.

        Args:
            text: Text to translate
            target_language: ISO 639-1 code of the target language

        Returns:
            TranslationResult with the translated text

        Raises:
            TranslationError: On quota, unsupported language or network failure
        """
        ...
