"""
File parsers for the local records file and the restricted subdomain list.
"""

from .records import RecordsParser, filter_by_type
from .restricted import load_restricted

__all__ = ["RecordsParser", "filter_by_type", "load_restricted"]
