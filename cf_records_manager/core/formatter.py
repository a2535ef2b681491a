"""
Record Formatter - checks and normalizes the local records file.

check() is read-only and raises on the first problem. normalize() rewrites
records in place so A/AAAA/CNAME records are proxied with an automatic TTL,
and optionally drops records that use restricted subdomains.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Tuple

from .exceptions import RestrictedSubdomainViolation, ValidationError
from .models import ALL_RECORD_TYPES, AUTO_TTL, Record, Records
from ..utils.restricted import is_restricted, split_restricted
from ..utils.validators import record_warnings, validate_record

logger = logging.getLogger(__name__)

REMOVE_RESTRICTED_PROMPT = "Do you want to remove restricted subdomains?"


@dataclass
class CheckReport:
    checked: int = 0
    # (1-based entry number, record, message)
    warnings: List[Tuple[int, Record, str]] = field(default_factory=list)


@dataclass
class FormatResult:
    entries: List[Records] = field(default_factory=list)
    formatted: int = 0
    removed: List[Records] = field(default_factory=list)


class RecordFormatter:
    """Validates and normalizes local record entries."""

    def __init__(self, restricted_patterns: List[str]):
        self.restricted_patterns = restricted_patterns

    def check(self, entries: List[Records]) -> CheckReport:
        """
        Validate every entry.

        Raises:
            ValidationError: an entry lacks type, name or content
            RestrictedSubdomainViolation: entries use restricted subdomains
        """
        report = CheckReport()
        for entry_num, entry in enumerate(entries, start=1):
            record = entry.record
            for warning in record_warnings(record):
                report.warnings.append((entry_num, record, warning))
                logger.warning(f"Entry {entry_num} ({record}): {warning}")

            is_valid, errors = validate_record(record, entry_num)
            if not is_valid:
                raise ValidationError(errors[0])
            report.checked += 1

        records = [entry.record for entry in entries if entry.record.type in ALL_RECORD_TYPES]
        _, restricted = split_restricted(records, self.restricted_patterns)
        if restricted:
            raise RestrictedSubdomainViolation("Restricted subdomains found", restricted)

        return report

    def normalize(self, entries: List[Records], confirm: Callable[[str], bool]) -> FormatResult:
        """
        Normalize entries in place.

        Every record becomes proxiable; A/AAAA/CNAME records become proxied
        and get an automatic TTL when none is set. When some records use
        restricted subdomains, confirm() decides whether they are dropped.
        """
        result = FormatResult()
        restricted_entries = []

        for entry in entries:
            record = entry.record
            changed = False
            record.proxiable = True
            if record.is_proxy_type and not record.proxied:
                logger.info(f"Setting proxied to true for {record}")
                record.proxied = True
                changed = True
            if record.is_proxy_type and record.ttl == 0:
                logger.info(f"Setting TTL to auto for {record}")
                record.ttl = AUTO_TTL
                changed = True
            if changed:
                result.formatted += 1
            if is_restricted(record.name, self.restricted_patterns):
                restricted_entries.append(entry)

        if restricted_entries and confirm(REMOVE_RESTRICTED_PROMPT):
            result.removed = restricted_entries
            result.formatted += len(restricted_entries)
            entries = [entry for entry in entries if not any(entry is r for r in restricted_entries)]

        result.entries = entries
        return result
