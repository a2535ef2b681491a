"""
Record Manager - Core logic for DNS record reconciliation

This module works out which records a sync has to create, update or delete
by comparing the local records against the records registered in the zone.
Records are matched by name only; the first remote record with a matching
name wins.
"""

import logging
from dataclasses import replace
from typing import List, Optional

from .models import AUTO_TTL, Record, SyncPlan

logger = logging.getLogger(__name__)


class RecordManager:
    """Manages DNS record preparation and change analysis."""

    def prepare_local_records(
        self, records: List[Record], domain: str, force_proxied: bool = False
    ) -> List[Record]:
        """
        Turn local records into the shape the provider stores.

        Args:
            records: Records from the local records file
            domain: Zone domain; "@" becomes the domain, other names get it appended
            force_proxied: Mark every record as proxied

        Returns:
            New Record objects; the inputs are left untouched
        """
        prepared = []
        for record in records:
            name = domain if record.name == "@" else f"{record.name}.{domain}"
            prepared.append(
                replace(
                    record,
                    name=name,
                    ttl=AUTO_TTL,
                    proxied=True if force_proxied else record.proxied,
                )
            )
        return prepared

    def analyze_changes(self, local_records: List[Record], remote_records: List[Record]) -> SyncPlan:
        """
        Analyze changes between local and remote DNS records.

        Args:
            local_records: Desired records, already prepared and filtered
            remote_records: Records currently registered with the provider

        Returns:
            SyncPlan with the records to create, update and delete
        """
        logger.info("Analyzing DNS record changes...")
        plan = SyncPlan()

        for local in local_records:
            remote = self._find_by_name(remote_records, local.name)
            if remote is None:
                plan.creates.append(replace(local, id=""))
                logger.info(f"Create needed: {local}")
            elif self._needs_update(local, remote):
                plan.updates.append(replace(local, id=remote.id))
                logger.info(f"Update needed: {remote} -> {local.content} (proxied={local.proxied})")
            else:
                plan.unchanged.append(replace(local, id=remote.id))
                logger.debug(f"No change needed: {local}")

        local_names = {record.name for record in local_records}
        for remote in remote_records:
            if remote.name not in local_names:
                plan.deletes.append(replace(remote))
                logger.info(f"Delete needed: {remote}")

        logger.info(
            f"Change analysis complete: {len(plan.creates)} creates, {len(plan.updates)} updates, "
            f"{len(plan.deletes)} deletes, {len(plan.unchanged)} no changes"
        )
        return plan

    def _find_by_name(self, records: List[Record], name: str) -> Optional[Record]:
        """Find the first record with the given name."""
        for record in records:
            if record.name == name:
                return record
        return None

    def _needs_update(self, local: Record, remote: Record) -> bool:
        # ttl differences never trigger an update
        return (
            local.content != remote.content
            or local.proxied != remote.proxied
            or local.name != remote.name
        )
