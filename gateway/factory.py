"""
Factory for creating processing gateways.
"""
from typing import Optional

from config.settings import Settings, settings as default_settings
from .base import ProcessingGateway
from .http_client import HttpProcessingGateway


class GatewayFactory:
    """
    Factory class for creating processing gateways.
    """

    @staticmethod
    def create_gateway(
        provider: str = 'http',
        settings: Optional[Settings] = None,
        **kwargs
    ) -> ProcessingGateway:
        """
        Create a gateway for the given provider.

        Args:
            provider: Provider name (only 'http' for now)
            settings: Settings to read the backend URL and timeout from
            **kwargs: Overrides passed to the gateway constructor
                (base_url, timeout, transport)

        Returns:
            Configured gateway instance

        Raises:
            ValueError: If provider is not supported
        """
        settings = settings or default_settings
        provider = provider.lower().strip()

        if provider == 'http':
            options = settings.get_gateway_config()
            options.update(kwargs)
            return HttpProcessingGateway(**options)

        raise ValueError(
            f"Unsupported gateway provider: '{provider}'. "
            f"Supported providers: 'http'"
        )

    @staticmethod
    def get_supported_providers():
        """List of provider names."""
        return ['http']
