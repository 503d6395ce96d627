"""Abstract interfaces for pluggable providers."""

from .chat import ChatProvider, RequestVerifier
from .translation import TranslationProvider

__all__ = ["ChatProvider", "RequestVerifier", "TranslationProvider"]
