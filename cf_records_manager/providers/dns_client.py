"""
DNS Client - Unified interface for DNS provider APIs

This module picks the configured provider (Cloudflare, or the in-memory
mock) and forwards record operations to it.
"""

import logging
from typing import List

from .base_provider import DNSProvider
from .cloudflare_provider import CloudflareProvider
from .mock_provider import MockDNSProvider
from ..core.config import Config
from ..core.exceptions import ConfigError
from ..core.models import Record

logger = logging.getLogger(__name__)


class DNSClient:
    """Unified DNS client that supports multiple providers."""

    def __init__(self, config: Config, provider: DNSProvider = None):
        """Initialize DNS client with configuration."""
        self.config = config
        self.provider = provider or self._get_provider()

    def _get_provider(self) -> DNSProvider:
        """Get DNS provider based on configuration."""
        provider_name = self.config.provider

        if provider_name == "cloudflare":
            return CloudflareProvider(
                self.config.api_token, self.config.zone_id, base_url=self.config.base_url
            )
        elif provider_name == "mock":
            return MockDNSProvider()
        raise ConfigError(f"Unknown provider '{provider_name}'")

    def get_records(self, record_types: List[str]) -> List[Record]:
        """Get all DNS records of the given types."""
        return self.provider.get_records(record_types)

    def create_record(self, record: Record) -> Record:
        """Create a new DNS record."""
        return self.provider.create_record(record)

    def update_record(self, record: Record) -> Record:
        """Update an existing DNS record."""
        return self.provider.update_record(record)

    def delete_record(self, record: Record) -> str:
        """Delete a DNS record."""
        return self.provider.delete_record(record)

    def close(self):
        self.provider.close()
