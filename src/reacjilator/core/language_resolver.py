"""Reaction emoji to target language resolution."""

from __future__ import annotations

import re
from collections.abc import Mapping
from types import MappingProxyType

from reacjilator.core.langcode import LANGUAGE_CODES

# Slack names country flags "flag-<country>" (e.g. flag-jp)
FLAG_PATTERN = re.compile(r"^flag-(?P<country>\w+)")


def emoji_lookup_key(emoji_name: str) -> str:
    """Return the key used to look an emoji up in the language table."""
    match = FLAG_PATTERN.match(emoji_name)
    if match:
        return match.group("country")
    return emoji_name


def resolve_language(emoji_name: str, languages: Mapping[str, str]) -> str | None:
    """Map a reaction emoji to a target language code.

    ``flag-jp`` is looked up as ``jp``; any other name (``fr``, ``jp``) is
    looked up as-is. Returns None when the key is not in ``languages``.
    """
    if not emoji_name:
        return None
    return languages.get(emoji_lookup_key(emoji_name))


class LanguageResolver:
    """Resolves reaction emoji against an immutable language table.

    Example:
        resolver = LanguageResolver()
        resolver.resolve("flag-jp")  # "ja"
        resolver.resolve("thumbsup")  # None
    """

    def __init__(
        self,
        languages: Mapping[str, str] | None = None,
        overrides: Mapping[str, str] | None = None,
    ) -> None:
        table = dict(LANGUAGE_CODES if languages is None else languages)
        if overrides:
            table.update(overrides)
        self._languages: Mapping[str, str] = MappingProxyType(table)

    @property
    def languages(self) -> Mapping[str, str]:
        return self._languages

    def resolve(self, emoji_name: str) -> str | None:
        return resolve_language(emoji_name, self._languages)
