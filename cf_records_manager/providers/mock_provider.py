"""
Mock DNS provider for testing and demonstration.

This module provides a mock DNS provider that stores records in memory
for safe testing and demonstration purposes.
"""

import itertools
import logging
from dataclasses import replace
from typing import List

from .base_provider import DNSProvider
from ..core.exceptions import APIError
from ..core.models import Record

logger = logging.getLogger(__name__)


class MockDNSProvider(DNSProvider):
    """Mock DNS provider for testing and demonstration purposes."""

    def __init__(self, records: List[Record] = None):
        """Initialize mock provider."""
        self.records = []
        self.calls = []
        self._ids = itertools.count(1)
        for record in records or []:
            self.records.append(replace(record, id=record.id or self._next_id()))
        logger.info("Mock DNS provider initialized")

    def _next_id(self) -> str:
        return f"mock{next(self._ids):06d}"

    @property
    def mutating_calls(self) -> int:
        return len([call for call in self.calls if call[0] != "get"])

    def get_records(self, record_types: List[str]) -> List[Record]:
        """Get all DNS records of the given types."""
        self.calls.append(("get", tuple(record_types)))
        found = [replace(r) for t in record_types for r in self.records if r.type == t]
        logger.info(f"Mock: Retrieved {len(found)} records")
        return found

    def create_record(self, record: Record) -> Record:
        """Create a new DNS record."""
        self.calls.append(("create", record.name))
        created = replace(record, id=self._next_id(), proxiable=True)
        self.records.append(created)
        logger.info(f"Mock: Created record {created.id} {created}")
        return replace(created)

    def update_record(self, record: Record) -> Record:
        """Update an existing DNS record."""
        self.calls.append(("update", record.name))
        for i, existing in enumerate(self.records):
            if existing.id == record.id:
                self.records[i] = replace(record, proxiable=existing.proxiable)
                logger.info(f"Mock: Updated record {record.id} {record}")
                return replace(self.records[i])

        raise APIError(f"Record {record.id} not found for update", status_code=404)

    def delete_record(self, record: Record) -> str:
        """Delete a DNS record."""
        self.calls.append(("delete", record.name))
        for i, existing in enumerate(self.records):
            if existing.id == record.id:
                del self.records[i]
                logger.info(f"Mock: Deleted record {record.id} {record}")
                return record.id

        raise APIError(f"Record {record.id} not found for deletion", status_code=404)
