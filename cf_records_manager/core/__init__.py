"""
Core DNS management functionality.

This package contains the data model, configuration and the main business
logic for reconciling local records with the zone.
"""

from .config import Config, resolve_config
from .dns_manager import DNSManager
from .formatter import RecordFormatter
from .record_manager import RecordManager

__all__ = ["Config", "resolve_config", "DNSManager", "RecordFormatter", "RecordManager"]
