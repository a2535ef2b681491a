#!/usr/bin/env python3
"""
CF Records Manager - Main Entry Point

This is the main entry point for the CF Records Manager.
It can be run directly or imported as a module.
"""

from cf_records_manager.cli.main import main

if __name__ == "__main__":
    main()
