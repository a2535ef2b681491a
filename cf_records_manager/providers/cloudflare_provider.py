"""
Cloudflare DNS provider implementation.

Talks to the Cloudflare v4 REST API with a bearer token. Every response uses
the envelope {success, errors, messages, result_info, result}; a non-empty
errors list becomes an APIError, and anything that prevents reading the
envelope becomes a TransportError. Nothing is retried.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from .base_provider import DNSProvider
from ..core.config import DEFAULT_BASE_URL
from ..core.exceptions import APIError, ConfigError, TransportError
from ..core.models import Record

logger = logging.getLogger(__name__)

PER_PAGE = 100


@dataclass
class APIResponse:
    """Parsed Cloudflare response envelope."""

    success: bool
    errors: List[Dict] = field(default_factory=list)
    messages: List[Any] = field(default_factory=list)
    result_info: Any = None
    result: Any = None
    status_code: Optional[int] = None

    @classmethod
    def from_response(cls, response: requests.Response) -> "APIResponse":
        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(
                f"malformed response from {response.url} (HTTP {response.status_code}): {e}"
            ) from e
        if not isinstance(data, dict):
            raise TransportError(f"unexpected response body from {response.url}: {data!r}")
        return cls(
            success=bool(data.get("success", False)),
            errors=data.get("errors") or [],
            messages=data.get("messages") or [],
            result_info=data.get("result_info"),
            result=data.get("result"),
            status_code=response.status_code,
        )

    def raise_for_errors(self):
        """Raise APIError carrying the first provider message, if any."""
        if not self.errors:
            return
        first = self.errors[0]
        message = first.get("message", str(first)) if isinstance(first, dict) else str(first)
        code = first.get("code") if isinstance(first, dict) else None
        if code:
            message = f"{message} (code {code})"
        raise APIError(message, status_code=self.status_code, errors=self.errors)


class CloudflareProvider(DNSProvider):
    """Cloudflare DNS provider for a single zone."""

    def __init__(
        self,
        api_token: str,
        zone_id: str,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the provider; token and zone id are required."""
        if not api_token:
            raise ConfigError("Cloudflare API token is not set; use CF_TOK or cf_token in the config file")
        if not zone_id:
            raise ConfigError("Cloudflare zone id is not set; use CF_ZID or zone_id in the config file")

        self.zone_id = zone_id
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {api_token}",
                "Content-Type": "application/json",
            }
        )
        logger.info(f"Cloudflare provider initialized for zone {zone_id}")

    @property
    def records_endpoint(self) -> str:
        return f"{self.base_url}zones/{self.zone_id}/dns_records"

    def _request(self, method: str, url: str, **kwargs) -> APIResponse:
        logger.debug(f"{method} {url} {kwargs.get('params', '')}")
        try:
            response = self.session.request(method, url, **kwargs)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        api_response = APIResponse.from_response(response)
        api_response.raise_for_errors()
        return api_response

    def get_records(self, record_types: List[str]) -> List[Record]:
        """Fetch all records of the given types, one type at a time."""
        records = []
        for record_type in record_types:
            page = 1
            while True:
                params = {"type": record_type, "per_page": PER_PAGE, "page": page}
                response = self._request("GET", self.records_endpoint, params=params)
                if not response.success:
                    logger.warning(
                        f"Listing {record_type} records stopped at page {page}: request not successful"
                    )
                    break

                results = response.result or []
                records.extend(
                    Record.from_dict(item, f"{record_type} page {page}") for item in results
                )
                if len(results) < PER_PAGE:
                    break
                page += 1

        logger.info(f"Retrieved {len(records)} records of types {','.join(record_types)}")
        return records

    def create_record(self, record: Record) -> Record:
        response = self._request("POST", self.records_endpoint, json=record.payload())
        created = Record.from_dict(response.result or {}, "create result")
        logger.info(f"Created record {created.id} {created}")
        return created

    def update_record(self, record: Record) -> Record:
        if not record.id:
            raise ValueError(f"Record {record.name} has no id to update")
        response = self._request(
            "PUT", f"{self.records_endpoint}/{record.id}", json=record.payload()
        )
        updated = Record.from_dict(response.result or {}, "update result")
        logger.info(f"Updated record {updated.id} {updated}")
        return updated

    def delete_record(self, record: Record) -> str:
        if not record.id:
            raise ValueError(f"Record {record.name} has no id to delete")
        response = self._request("DELETE", f"{self.records_endpoint}/{record.id}")
        result = response.result or {}
        deleted_id = result.get("id", "") if isinstance(result, dict) else ""
        if not deleted_id:
            raise APIError(
                f"failed to delete {record.type}:{record.name}",
                status_code=response.status_code,
            )
        logger.info(f"Deleted record {deleted_id} {record}")
        return deleted_id

    def close(self):
        self.session.close()
