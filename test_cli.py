#!/usr/bin/env python3
"""
Tests for the command-line interface.

Commands run against the in-memory mock provider; output is captured from
stdout and the exit status from SystemExit.
"""

import io
import json
import os
import shutil
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

from cf_records_manager import __version__
from cf_records_manager.cli.main import main, parse_types, version_string


class TestCLI(unittest.TestCase):
    """Run the CLI end to end."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_file = os.path.join(self.temp_dir, "config.json")
        self.records_file = os.path.join(self.temp_dir, "records.json")
        self.restricted_file = os.path.join(self.temp_dir, "restricted.json")

        self.write(
            self.config_file,
            {
                "domain_name": "example.com",
                "record_file": self.records_file,
                "restricted_file": self.restricted_file,
                "record_type": ["A", "CNAME"],
                "provider": "mock",
            },
        )
        self.write(
            self.records_file,
            [
                {"record": {"type": "A", "name": "@", "content": "1.1.1.1", "proxied": True, "ttl": 1}},
                {"record": {"type": "CNAME", "name": "docs", "content": "example.net", "proxied": True, "ttl": 1}},
            ],
        )
        self.write(self.restricted_file, {"restricted_subdomain": ["^admin"]})

        env = patch.dict(os.environ, {"CONFIG_FILE": self.config_file}, clear=True)
        env.start()
        self.addCleanup(env.stop)

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.temp_dir)

    def write(self, path, data):
        with open(path, "w") as f:
            json.dump(data, f)

    def run_cli(self, *argv):
        """Run the CLI and return (exit status, output)."""
        output = io.StringIO()
        with redirect_stdout(output):
            with self.assertRaises(SystemExit) as ctx:
                main(list(argv))
        return ctx.exception.code, output.getvalue()

    def test_version(self):
        """Test the version command."""
        status, output = self.run_cli("version")

        self.assertEqual(status, 0)
        self.assertIn(f"Version: {__version__}", output)

    def test_no_command_prints_tip(self):
        """Test a tip is printed without a subcommand."""
        status, output = self.run_cli()

        self.assertEqual(status, 0)
        self.assertIn("tip:", output)

    def test_fmt_check_passes(self):
        """Test fmt --check on a valid records file."""
        status, output = self.run_cli("fmt", "--check")

        self.assertEqual(status, 0)
        self.assertIn("PASS", output)

    def test_fmt_check_missing_field(self):
        """Test fmt --check names the missing field."""
        self.write(self.records_file, [{"record": {"type": "A", "name": "x"}}])

        status, output = self.run_cli("fmt", "--check")

        self.assertEqual(status, 1)
        self.assertIn("record content cannot be empty", output)
        self.assertIn("FAIL", output)

    def test_fmt_check_restricted(self):
        """Test fmt --check fails on restricted subdomains."""
        self.write(
            self.records_file,
            [{"record": {"type": "A", "name": "admin", "content": "1.1.1.1", "proxied": True}}],
        )

        status, output = self.run_cli("fmt", "--check")

        self.assertEqual(status, 1)
        self.assertIn("Restricted subdomains found", output)

    def test_fmt_yes_removes_restricted(self):
        """Test fmt --yes removes restricted records without prompting."""
        self.write(
            self.records_file,
            [
                {"record": {"type": "A", "name": "admin", "content": "1.1.1.1"}},
                {"record": {"type": "A", "name": "www", "content": "1.1.1.1"}},
            ],
        )

        status, _ = self.run_cli("fmt", "--yes")

        self.assertEqual(status, 0)
        with open(self.records_file) as f:
            data = json.load(f)
        self.assertEqual(
            data,
            [{"record": {"type": "A", "name": "www", "content": "1.1.1.1", "proxiable": True, "proxied": True, "ttl": 1}}],
        )

    def test_fmt_check_malformed_records(self):
        """Test a malformed records file fails the check."""
        with open(self.records_file, "w") as f:
            f.write("[{")

        status, output = self.run_cli("fmt", "--check")

        self.assertEqual(status, 1)
        self.assertIn("ERROR - fail to parse records file", output)
        self.assertIn("FAIL", output)
        self.assertIn("failed", output)

    def test_fmt_check_missing_records_file(self):
        """Test a missing records file fails the check."""
        os.remove(self.records_file)

        status, output = self.run_cli("fmt", "--check")

        self.assertEqual(status, 1)
        self.assertIn("FAIL", output)

    def test_fmt_malformed_records(self):
        """Test formatting a malformed records file reports an error."""
        with open(self.records_file, "w") as f:
            f.write("[{")

        status, output = self.run_cli("fmt")

        self.assertEqual(status, 1)
        self.assertIn("ERROR", output)
        self.assertNotIn("FAIL", output)

    def test_sync_dry_run(self):
        """Test a dry run sync against an empty zone."""
        status, output = self.run_cli("sync", "--dry-run")

        self.assertEqual(status, 0)
        self.assertIn("DRY RUN MODE", output)
        self.assertIn("STATUS - 2 record(s) created", output)

    def test_sync_file_flag(self):
        """Test --file overrides the configured records file."""
        other = os.path.join(self.temp_dir, "other.json")
        self.write(other, [{"record": {"type": "A", "name": "one", "content": "1.1.1.1"}}])

        status, output = self.run_cli("sync", "--file", other)

        self.assertEqual(status, 0)
        self.assertIn("STATUS - 1 record(s) created", output)

    def test_sync_without_domain(self):
        """Test sync fails without a domain."""
        self.write(self.config_file, {"record_file": self.records_file, "provider": "mock"})

        status, output = self.run_cli("sync")

        self.assertEqual(status, 1)
        self.assertIn("domain name is not set", output)

    def test_sync_output_file_requires_dry_run(self):
        """Test --output-file is only accepted with --dry-run."""
        status, _ = self.run_cli("sync", "--output-file", os.path.join(self.temp_dir, "plan.txt"))

        self.assertEqual(status, 1)

    def test_sync_cloudflare_without_token(self):
        """Test the Cloudflare provider needs a token."""
        self.write(self.config_file, {"domain_name": "example.com", "record_file": self.records_file})

        status, output = self.run_cli("sync")

        self.assertEqual(status, 1)
        self.assertIn("API token is not set", output)

    def test_list_local(self):
        """Test listing the local records file."""
        status, output = self.run_cli("list", "--local", "--type", "cname")

        self.assertEqual(status, 0)
        self.assertIn("docs.example.com", output)
        self.assertIn("Got 1 DNS records", output)

    def test_export(self):
        """Test exporting to a named file."""
        export_file = os.path.join(self.temp_dir, "export.json")

        status, _ = self.run_cli("export", "--file", export_file)

        self.assertEqual(status, 0)
        with open(export_file) as f:
            self.assertEqual(json.load(f), [])

    def test_config_gen(self):
        """Test generating a config file."""
        generated = os.path.join(self.temp_dir, "generated.json")
        cwd = os.getcwd()
        os.chdir(self.temp_dir)
        try:
            status, _ = self.run_cli("config", "--gen", "--output", generated)
        finally:
            os.chdir(cwd)

        self.assertEqual(status, 0)
        with open(generated) as f:
            self.assertEqual(json.load(f)["record_type"], ["A", "CNAME"])

    def test_parse_types(self):
        """Test record type lists are split and upper-cased."""
        self.assertEqual(parse_types("a, cname,,TXT"), ["A", "CNAME", "TXT"])
        self.assertIsNone(parse_types(None))

    def test_version_string_short_commit(self):
        """Test the git commit is shortened to 7 characters."""
        with patch("cf_records_manager.cli.main.__git_commit__", "0123456789abcdef"):
            self.assertEqual(version_string(), f"Version: {__version__} 0123456")
        with patch("cf_records_manager.cli.main.__git_commit__", "0123"):
            self.assertEqual(version_string(), f"Version: {__version__}")


if __name__ == "__main__":
    unittest.main(verbosity=2)
