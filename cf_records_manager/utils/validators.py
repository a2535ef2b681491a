"""
Validators - Input validation for DNS records

This module checks records from the local records file before they are
formatted or synced.
"""

import logging
from typing import List, Tuple

from ..core.models import PROXIED_TYPES, Record

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("type", "name", "content")


def validate_record(record: Record, entry_num: int) -> Tuple[bool, List[str]]:
    """
    Validate the required fields of a record.

    Args:
        record: The record to validate
        entry_num: 1-based position of the entry in the records file

    Returns:
        Tuple of (is_valid, errors); errors name the missing fields in
        type, name, content order
    """
    errors = []
    for field_name in REQUIRED_FIELDS:
        if not getattr(record, field_name).strip():
            errors.append(f"record {field_name} cannot be empty")

    if errors:
        logger.debug(f"Entry {entry_num} failed validation: {errors}")
    return not errors, errors


def record_warnings(record: Record) -> List[str]:
    """Return non-fatal issues with a record."""
    warnings = []
    if record.type in PROXIED_TYPES and not record.proxied:
        warnings.append("Proxied is false")
    return warnings
