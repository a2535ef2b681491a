"""
Behave environment configuration for CF Records Manager integration tests.

Scenarios run against the in-memory mock provider, so no Cloudflare account
is needed.
"""

import logging
import shutil
import tempfile
from pathlib import Path

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def before_all(context):
    """Set up test environment before all tests."""
    context.test_domain = "example.com"
    logger.info("Test environment setup complete")


def before_scenario(context, scenario):
    """Set up each test scenario."""
    context.scenario_name = scenario.name
    context.test_data_dir = Path(tempfile.mkdtemp(prefix="cf_records_"))
    context.records_file = context.test_data_dir / "records.json"
    context.restricted_file = context.test_data_dir / "restricted.json"
    context.remote_records = []
    context.error = None
    context.result = None

    logger.info(f"Starting scenario: {scenario.name}")


def after_scenario(context, scenario):
    """Clean up after each test scenario."""
    if hasattr(context, "dns_manager"):
        context.dns_manager.close()
    shutil.rmtree(context.test_data_dir, ignore_errors=True)

    logger.info(f"Completed scenario: {scenario.name}")
