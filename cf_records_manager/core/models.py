"""
Data model for DNS records.

Record mirrors the shape of a Cloudflare DNS record. Records is one entry of
the local records file: a Record plus descriptive metadata that never takes
part in reconciliation.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from .exceptions import RecordParseError

PROXIED_TYPES = ("A", "AAAA", "CNAME")
ALL_RECORD_TYPES = ["A", "AAAA", "CNAME", "TXT", "MX", "SRV"]
DEFAULT_RECORD_TYPES = ["A", "CNAME"]

# Cloudflare uses ttl=1 for "automatic"
AUTO_TTL = 1


def _get(data: Dict, key: str, kind, default, where: str):
    value = data.get(key, default)
    if value is None:
        return default
    # bool is a subclass of int; a JSON true is never a valid ttl
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise RecordParseError(
            f"{where}: field '{key}' must be of type {kind.__name__}, got {value!r}"
        )
    return value


@dataclass
class Record:
    """A single DNS record."""

    id: str = ""
    type: str = ""
    name: str = ""
    content: str = ""
    proxiable: bool = False
    proxied: bool = False
    ttl: int = 0

    @classmethod
    def from_dict(cls, data: Dict, where: str = "record") -> "Record":
        """Build a record from a JSON object, ignoring unknown keys."""
        if not isinstance(data, dict):
            raise RecordParseError(f"{where}: expected an object, got {data!r}")
        ttl = _get(data, "ttl", int, 0, where)
        if ttl < 0:
            raise RecordParseError(f"{where}: field 'ttl' cannot be negative")
        return cls(
            id=_get(data, "id", str, "", where),
            type=_get(data, "type", str, "", where),
            name=_get(data, "name", str, "", where),
            content=_get(data, "content", str, "", where),
            proxiable=_get(data, "proxiable", bool, False, where),
            proxied=_get(data, "proxied", bool, False, where),
            ttl=ttl,
        )

    def to_dict(self) -> Dict:
        """Serialize the record, leaving out empty fields."""
        data = {
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "content": self.content,
            "proxiable": self.proxiable,
            "proxied": self.proxied,
            "ttl": self.ttl,
        }
        return {key: value for key, value in data.items() if value}

    def payload(self) -> Dict:
        """Request body for create and update calls."""
        return {
            "type": self.type,
            "name": self.name,
            "content": self.content,
            "proxied": self.proxied,
            "ttl": self.ttl,
        }

    @property
    def is_proxy_type(self) -> bool:
        return self.type in PROXIED_TYPES

    def __str__(self) -> str:
        return f"{self.type}: {self.name} -> {self.content}"


@dataclass
class Owner:
    username: str = ""
    email: str = ""

    @classmethod
    def from_dict(cls, data: Dict, where: str = "owner") -> "Owner":
        if not isinstance(data, dict):
            raise RecordParseError(f"{where}: expected an object, got {data!r}")
        return cls(
            username=_get(data, "username", str, "", where),
            email=_get(data, "email", str, "", where),
        )

    def to_dict(self) -> Dict:
        data = {"username": self.username, "email": self.email}
        return {key: value for key, value in data.items() if value}


@dataclass
class Records:
    """An entry of the local records file."""

    record: Record = field(default_factory=Record)
    description: str = ""
    repo: str = ""
    owner: Owner = field(default_factory=Owner)

    @classmethod
    def from_dict(cls, data: Dict, where: str = "entry") -> "Records":
        if not isinstance(data, dict):
            raise RecordParseError(f"{where}: expected an object, got {data!r}")
        return cls(
            record=Record.from_dict(data.get("record") or {}, f"{where}.record"),
            description=_get(data, "description", str, "", where),
            repo=_get(data, "repo", str, "", where),
            owner=Owner.from_dict(data.get("owner") or {}, f"{where}.owner"),
        )

    def to_dict(self) -> Dict:
        data = {}
        if self.description:
            data["description"] = self.description
        if self.repo:
            data["repo"] = self.repo
        owner = self.owner.to_dict()
        if owner:
            data["owner"] = owner
        data["record"] = self.record.to_dict()
        return data


@dataclass
class SyncPlan:
    """Records that a sync would create, update or delete."""

    creates: List[Record] = field(default_factory=list)
    updates: List[Record] = field(default_factory=list)
    deletes: List[Record] = field(default_factory=list)
    unchanged: List[Record] = field(default_factory=list)

    @property
    def total_changes(self) -> int:
        return len(self.creates) + len(self.updates) + len(self.deletes)


@dataclass
class SyncResult:
    """Outcome of applying a SyncPlan."""

    created: List[Record] = field(default_factory=list)
    updated: List[Record] = field(default_factory=list)
    deleted: List[Record] = field(default_factory=list)
    restricted: List[Record] = field(default_factory=list)
    dry_run: bool = False
