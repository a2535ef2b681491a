"""
CF Records Manager - Declarative DNS record management for Cloudflare

Keeps a Cloudflare zone in sync with a JSON records file, with formatting,
validation, export and restricted subdomain filtering.
"""

__version__ = "1.0.0"
__author__ = "CF Records Manager Team"
__description__ = "Declarative DNS record management for Cloudflare zones"

# set at build time
__git_commit__ = ""

from .core.dns_manager import DNSManager
from .core.record_manager import RecordManager
from .providers.dns_client import DNSClient

__all__ = [
    "DNSManager",
    "RecordManager",
    "DNSClient",
]
