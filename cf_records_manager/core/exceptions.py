"""
Exceptions raised by the CF Records Manager.

Every error is fatal for the command that hits it; the CLI catches
CFRecordsError, reports it and exits with status 1.
"""

from typing import Dict, List, Optional


class CFRecordsError(Exception):
    """Base class for all CF Records Manager errors."""


class ConfigError(CFRecordsError):
    """Required configuration is missing or invalid."""


class ConfigParseError(ConfigError):
    """The config file could not be parsed."""


class FileIOError(CFRecordsError):
    """A records or export file could not be read or written."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)


class RecordParseError(CFRecordsError):
    """A records or restricted file is not valid JSON of the expected shape."""


class APIError(CFRecordsError):
    """The DNS provider reported one or more errors."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        errors: Optional[List[Dict]] = None,
    ):
        self.status_code = status_code
        self.errors = errors or []
        super().__init__(message)


class TransportError(CFRecordsError):
    """The request never produced a usable response."""


class ValidationError(CFRecordsError):
    """A record failed validation."""


class RestrictedSubdomainViolation(ValidationError):
    """One or more records use a restricted subdomain."""

    def __init__(self, message: str, records: Optional[List] = None):
        self.records = records or []
        super().__init__(message)
