"""
DNS provider implementations.

This package contains the Cloudflare provider and an in-memory mock
provider behind a common interface.
"""

from .dns_client import DNSClient, DNSProvider
from .cloudflare_provider import APIResponse, CloudflareProvider
from .mock_provider import MockDNSProvider

__all__ = ["DNSClient", "DNSProvider", "APIResponse", "CloudflareProvider", "MockDNSProvider"]
