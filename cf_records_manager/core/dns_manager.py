"""
DNS Manager - orchestrates the list, fmt, sync and export commands

Each command loads what it needs (local records file, restricted patterns,
remote records), runs the core logic and reports to the console. Errors are
raised to the caller; nothing is retried.
"""

import logging
import random
from datetime import datetime
from typing import Callable, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .config import Config
from .exceptions import FileIOError
from .formatter import CheckReport, FormatResult, RecordFormatter
from .models import ALL_RECORD_TYPES, Record, Records, SyncPlan, SyncResult
from .record_manager import RecordManager
from ..parsers.records import RecordsParser, filter_by_type
from ..parsers.restricted import load_restricted
from ..providers.dns_client import DNSClient
from ..utils.prompt import confirm_prompt
from ..utils.restricted import split_restricted

logger = logging.getLogger(__name__)


def export_filename() -> str:
    """Default export file name: dns_records_<date>_<n>.json."""
    date = datetime.now().strftime("%Y-%m-%d")
    return f"dns_records_{date}_{random.randint(0, 998)}.json"


class DNSManager:
    """Main DNS management class that orchestrates the entire process."""

    def __init__(
        self,
        config: Config,
        dns_client: Optional[DNSClient] = None,
        console: Optional[Console] = None,
        confirm: Optional[Callable[[str], bool]] = None,
    ):
        """Initialize the DNS manager; the DNS client is created on first use."""
        self.config = config
        self.console = console or Console()
        self.confirm = confirm or (lambda message: confirm_prompt(message, self.console))
        self.record_manager = RecordManager()
        self._dns_client = dns_client

    @property
    def dns_client(self) -> DNSClient:
        if self._dns_client is None:
            self._dns_client = DNSClient(self.config)
        return self._dns_client

    def close(self):
        if self._dns_client is not None:
            self._dns_client.close()

    def _display_name(self, record: Record) -> str:
        if not self.config.domain:
            return record.name
        if record.name == "@":
            return self.config.domain
        return f"{record.name}.{self.config.domain}"

    def _records_table(self, title: str, records: List[Record], local: bool) -> Table:
        table = Table(title=title)
        table.add_column("Type", style="cyan")
        table.add_column("Name", style="magenta")
        table.add_column("Content", style="white")
        table.add_column("TTL", justify="right")
        table.add_column("Proxied")
        for record in records:
            name = self._display_name(record) if local else record.name
            table.add_row(
                record.type,
                escape(name),
                escape(record.content),
                str(record.ttl),
                "yes" if record.proxied else "no",
            )
        return table

    # list

    def list_local(self, record_types: Optional[List[str]] = None) -> List[Record]:
        """List records from the local records file."""
        record_types = record_types or self.config.record_types
        self.console.print("[green]Gathering DNS records from local file...[/green]")
        entries = RecordsParser(self.config.record_file).parse()
        records = filter_by_type(entries, record_types)
        self.console.print(self._records_table(self.config.record_file, records, local=True))
        self.console.print(f"[blue]Got {len(records)} DNS records in {self.config.record_file}[/blue]")
        return records

    def list_remote(self, record_types: Optional[List[str]] = None) -> List[Record]:
        """List records registered with the provider."""
        record_types = record_types or ALL_RECORD_TYPES
        self.console.print("[green]Gathering DNS records from Cloudflare API...[/green]")
        records = self.dns_client.get_records(record_types)
        self.console.print(self._records_table("Registered DNS records", records, local=False))
        self.console.print(f"[blue]Got {len(records)} registered DNS records[/blue]")
        return records

    # fmt

    def check_records(self) -> CheckReport:
        """Validate the local records file without changing it."""
        entries = RecordsParser(self.config.record_file).parse()
        patterns = load_restricted(self.config.restricted_file)

        for entry_num, entry in enumerate(entries, start=1):
            self.console.print(f"[cyan]{entry_num}[/cyan] {escape(str(entry.record))}")

        report = RecordFormatter(patterns).check(entries)

        for entry_num, record, warning in report.warnings:
            self.console.print(
                f"[yellow]WARN - entry {entry_num} {escape(str(record))}: {warning}[/yellow]"
            )
        self.console.print(f"[green]{report.checked} record(s) found and are valid[/green]")
        if report.warnings:
            self.console.print("[yellow]WARN - There are records with warnings, please check them[/yellow]")
        self.console.print("PASS\tok")
        return report

    def format_records(self) -> FormatResult:
        """Normalize the local records file and write it back."""
        parser = RecordsParser(self.config.record_file)
        entries = parser.parse()
        patterns = load_restricted(self.config.restricted_file)

        result = RecordFormatter(patterns).normalize(entries, self.confirm)
        parser.write(result.entries)

        if result.removed:
            self.console.print(f"[yellow]{len(result.removed)} record(s) removed[/yellow]")
        self.console.print(f"[green]{result.formatted} record(s) formatted[/green]")
        self.console.print("[green]Formatting records complete![/green]")
        return result

    # sync

    def sync(
        self,
        dry_run: bool = False,
        force_proxied: bool = False,
        output_file: Optional[str] = None,
    ) -> SyncResult:
        """Reconcile the zone with the local records file."""
        domain = self.config.require_domain()
        record_types = self.config.record_types

        self.console.print("[green]Fetching registered DNS records...[/green]")
        remote_records = self.dns_client.get_records(record_types)
        self.console.print(f"[blue]Found {len(remote_records)} registered DNS records[/blue]")

        entries = RecordsParser(self.config.record_file).parse()
        local_records = self.record_manager.prepare_local_records(
            filter_by_type(entries, record_types), domain, force_proxied=force_proxied
        )
        self.console.print(f"[blue]Found {len(local_records)} local DNS records[/blue]")

        patterns = load_restricted(self.config.restricted_file)
        local_records, restricted = split_restricted(local_records, patterns)
        self.console.print(f"[blue]Removed {len(restricted)} restricted subdomain(s)[/blue]")

        plan = self.record_manager.analyze_changes(local_records, remote_records)
        self._display_changes_summary(plan)

        if dry_run:
            self.console.print("[yellow]DRY RUN MODE - No changes will be applied[/yellow]")
            if output_file:
                self._save_dry_run_output(plan, output_file)
                self.console.print(f"[green]Dry run output saved to: {output_file}[/green]")
            result = SyncResult(
                created=plan.creates,
                updated=plan.updates,
                deleted=plan.deletes,
                restricted=restricted,
                dry_run=True,
            )
        elif plan.total_changes == 0:
            result = SyncResult(restricted=restricted)
        else:
            result = self._apply_changes(plan)
            result.restricted = restricted

        self.console.print(
            f"[bold]STATUS - {len(result.created)} record(s) created, "
            f"{len(result.updated)} record(s) updated, "
            f"{len(result.deleted)} record(s) deleted[/bold]"
        )
        return result

    def _display_changes_summary(self, plan: SyncPlan):
        """Display a summary of planned changes."""
        table = Table(title="DNS Changes Summary")
        table.add_column("Operation", style="cyan")
        table.add_column("Count", style="magenta")
        table.add_column("Details", style="white")

        if plan.creates:
            table.add_row(
                "Create", str(len(plan.creates)), escape(", ".join(r.name for r in plan.creates))
            )
        if plan.updates:
            table.add_row(
                "Update", str(len(plan.updates)), escape(", ".join(r.name for r in plan.updates))
            )
        if plan.deletes:
            table.add_row(
                "Delete", str(len(plan.deletes)), escape(", ".join(r.name for r in plan.deletes))
            )
        if plan.unchanged:
            table.add_row("No Change", str(len(plan.unchanged)), "")

        self.console.print(table)
        self.console.print(f"\n[bold]Total changes: {plan.total_changes}[/bold]")

    def _apply_changes(self, plan: SyncPlan) -> SyncResult:
        """Apply creates, then updates, then deletes."""
        result = SyncResult()

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
        ) as progress:
            task = progress.add_task("Applying DNS changes...", total=plan.total_changes)

            for record in plan.creates:
                created = self.dns_client.create_record(record)
                result.created.append(created)
                progress.update(task, advance=1)
                self.console.print(f"[green]+ {created.id} {escape(str(created))}[/green]")

            for record in plan.updates:
                updated = self.dns_client.update_record(record)
                result.updated.append(updated)
                progress.update(task, advance=1)
                self.console.print(f"[yellow]~ {updated.id} {escape(str(updated))}[/yellow]")

            for record in plan.deletes:
                self.dns_client.delete_record(record)
                result.deleted.append(record)
                progress.update(task, advance=1)
                self.console.print(f"[red]- {record.id} {escape(str(record))}[/red]")

        self.console.print(f"[blue]Successfully applied {plan.total_changes} changes[/blue]")
        return result

    def _save_dry_run_output(self, plan: SyncPlan, output_file: str):
        """Save dry run output to a file."""
        lines = [
            "=" * 60,
            "CF RECORDS MANAGER - DRY RUN SUMMARY",
            "=" * 60,
            "",
            f"Total Changes: {plan.total_changes}",
            f"Timestamp: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            "",
        ]

        if plan.creates:
            lines += ["RECORDS TO CREATE:", "-" * 20]
            lines += [f"  + {r.type:<6} {r.name:<30} -> {r.content}" for r in plan.creates]
            lines.append("")

        if plan.updates:
            lines += ["RECORDS TO UPDATE:", "-" * 20]
            lines += [f"  ~ {r.type:<6} {r.name:<30} -> {r.content}" for r in plan.updates]
            lines.append("")

        if plan.deletes:
            lines += ["RECORDS TO DELETE:", "-" * 20]
            lines += [f"  - {r.type:<6} {r.name}" for r in plan.deletes]
            lines.append("")

        if plan.unchanged:
            lines += ["RECORDS WITH NO CHANGES:", "-" * 25]
            lines += [f"  = {r.type:<6} {r.name}" for r in plan.unchanged]
            lines.append("")

        lines += ["=" * 60, "END OF DRY RUN SUMMARY", "=" * 60]

        try:
            with open(output_file, "w") as f:
                f.write("\n".join(lines) + "\n")
        except OSError as e:
            raise FileIOError(f"fail to write dry run output to {output_file}: {e}", output_file) from e
        logger.info(f"Dry run output saved to: {output_file}")

    # export

    def export(self, output_path: Optional[str] = None) -> str:
        """Export registered records of the configured types to a records file."""
        self.console.print("[green]Export started...[/green]")
        records = self.dns_client.get_records(self.config.record_types)
        entries = [Records(record=record) for record in records]

        output_path = output_path or export_filename()
        RecordsParser(output_path).write(entries)
        self.console.print(f"[green]Exported {len(entries)} record(s) to {output_path}[/green]")
        return output_path
