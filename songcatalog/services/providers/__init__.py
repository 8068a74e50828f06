"""
Provider factory for search providers.
"""

from typing import TYPE_CHECKING

import httpx

from songcatalog.core.errors import ConfigurationError

if TYPE_CHECKING:
    from songcatalog.core.config import Settings
    from songcatalog.services.providers.base import BaseProvider


class ProviderFactory:
    """Factory for creating search providers by name."""

    _providers = {}
    _initialized = False

    @classmethod
    def _ensure_initialized(cls):
        """Lazy load providers to avoid circular imports."""
        if not cls._initialized:
            from songcatalog.services.providers.genius import GeniusProvider

            cls._providers = {
                'genius': GeniusProvider,
            }
            cls._initialized = True

    @classmethod
    def create(cls, name: str, client: httpx.AsyncClient, settings: 'Settings') -> 'BaseProvider':
        """
        Create a provider instance.

        Args:
            name: Registry key (``SEARCH_PROVIDER``)
            client: Shared HTTP client
            settings: Application settings carrying credentials

        Returns:
            Provider instance
        """
        cls._ensure_initialized()
        provider_class = cls._providers.get(name)
        if provider_class:
            return provider_class.from_settings(client, settings)
        raise ConfigurationError(f"Unknown search provider: {name} (supported: {cls.get_supported_providers()})")

    @classmethod
    def get_supported_providers(cls):
        cls._ensure_initialized()
        return list(cls._providers.keys())
