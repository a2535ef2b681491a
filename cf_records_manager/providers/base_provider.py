"""
Base DNS provider interface.

This module defines the abstract base class that all DNS providers must implement.
"""

from abc import ABC, abstractmethod
from typing import List

from ..core.models import Record


class DNSProvider(ABC):
    """Abstract base class for DNS providers."""

    @abstractmethod
    def get_records(self, record_types: List[str]) -> List[Record]:
        """Get all DNS records of the given types in the zone."""
        pass

    @abstractmethod
    def create_record(self, record: Record) -> Record:
        """Create a new DNS record and return it as stored by the provider."""
        pass

    @abstractmethod
    def update_record(self, record: Record) -> Record:
        """Update the record with record.id and return it as stored."""
        pass

    @abstractmethod
    def delete_record(self, record: Record) -> str:
        """Delete the record with record.id and return the deleted id."""
        pass

    def close(self):
        """Release any held resources."""
