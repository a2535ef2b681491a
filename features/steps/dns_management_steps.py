"""
Step definitions for CF Records Manager integration tests.
"""

import json
from io import StringIO

from behave import given, then, when
from rich.console import Console

from cf_records_manager.core.config import Config
from cf_records_manager.core.dns_manager import DNSManager
from cf_records_manager.core.exceptions import ValidationError
from cf_records_manager.core.models import Record
from cf_records_manager.providers.dns_client import DNSClient
from cf_records_manager.providers.mock_provider import MockDNSProvider
from cf_records_manager.utils.prompt import fixed_answer


def _rows_to_records(table):
    return [
        Record(type=row["type"], name=row["name"], content=row["content"])
        for row in table
    ]


def _write_records(path, records):
    entries = [{"record": record.to_dict()} for record in records]
    with open(path, "w") as f:
        json.dump(entries, f)


def _read_records(path):
    with open(path) as f:
        return [entry["record"] for entry in json.load(f)]


def _manager(context, confirm=None):
    if hasattr(context, "dns_manager"):
        context.dns_manager.close()
    context.provider = MockDNSProvider(records=context.remote_records)
    context.output = StringIO()
    context.dns_manager = DNSManager(
        context.records_config,
        dns_client=DNSClient(context.records_config, provider=context.provider),
        console=Console(file=context.output, width=200),
        confirm=confirm,
    )
    return context.dns_manager


@given("the CF Records Manager is configured with the mock provider")
def step_impl(context):
    """Configure the CF Records Manager with the in-memory provider."""
    context.records_config = Config(
        domain=context.test_domain,
        record_file=str(context.records_file),
        restricted_file=str(context.restricted_file),
        record_types=["A", "AAAA", "CNAME", "TXT"],
        provider="mock",
    )


@given("the local records file contains")
def step_impl(context):
    """Write the records table to the local records file."""
    _write_records(context.records_file, _rows_to_records(context.table))


@given("the restricted subdomains are \"{pattern}\"")
def step_impl(context, pattern):
    """Write a restricted subdomains file with a single pattern."""
    with open(context.restricted_file, "w") as f:
        json.dump({"restricted_subdomain": [pattern]}, f)


@given("the zone has no records")
def step_impl(context):
    context.remote_records = []


@given("the zone contains")
def step_impl(context):
    """Seed the mock zone."""
    context.remote_records = _rows_to_records(context.table)


@when("I sync the records")
def step_impl(context):
    context.result = _manager(context).sync()


@when("I sync the records again")
def step_impl(context):
    """Sync again against the zone left by the previous sync."""
    context.remote_records = list(context.provider.records)
    context.result = _manager(context).sync()


@when("I sync the records in dry run mode")
def step_impl(context):
    context.result = _manager(context).sync(dry_run=True)


@when("I check the records file")
def step_impl(context):
    try:
        context.result = _manager(context).check_records()
    except ValidationError as e:
        context.error = e


@when("I format the records file answering \"{answer}\"")
def step_impl(context, answer):
    confirm = fixed_answer(answer in ("y", "yes"))
    context.result = _manager(context, confirm=confirm).format_records()


@then("{count:d} records should be created")
@then("{count:d} record should be created")
def step_impl(context, count):
    assert len(context.result.created) == count, context.result.created
    assert context.provider.mutating_calls >= count


@then("{count:d} record should be updated")
def step_impl(context, count):
    assert len(context.result.updated) == count, context.result.updated


@then("{count:d} record should be deleted")
def step_impl(context, count):
    assert len(context.result.deleted) == count, context.result.deleted


@then("{count:d} record should be planned for creation")
def step_impl(context, count):
    assert context.result.dry_run
    assert len(context.result.created) == count, context.result.created


@then("{count:d} record should be reported as restricted")
def step_impl(context, count):
    assert len(context.result.restricted) == count, context.result.restricted


@then("no changes should be made")
def step_impl(context):
    result = context.result
    assert not (result.created or result.updated or result.deleted)
    assert context.provider.mutating_calls == 0


@then("the provider should not have been changed")
def step_impl(context):
    assert context.provider.mutating_calls == 0
    assert context.provider.records == []


@then("the zone should contain \"{name}\" pointing to \"{content}\"")
def step_impl(context, name, content):
    matches = [r for r in context.provider.records if r.name == name]
    assert len(matches) == 1, matches
    assert matches[0].content == content, matches[0]


@then("the check should pass")
def step_impl(context):
    assert context.error is None, context.error
    assert "PASS" in context.output.getvalue()


@then("the check should fail with \"{message}\"")
def step_impl(context, message):
    assert isinstance(context.error, ValidationError), context.error
    assert message in str(context.error), str(context.error)


@then("the records file record \"{name}\" should be proxied with ttl {ttl:d}")
def step_impl(context, name, ttl):
    record = next(r for r in _read_records(context.records_file) if r["name"] == name)
    assert record["proxied"] is True, record
    assert record["ttl"] == ttl, record


@then("the records file record \"{name}\" should not be proxied")
def step_impl(context, name):
    record = next(r for r in _read_records(context.records_file) if r["name"] == name)
    assert "proxied" not in record, record
    assert record["proxiable"] is True, record


@then("the records file should contain {count:d} record")
def step_impl(context, count):
    records = _read_records(context.records_file)
    assert len(records) == count, records
