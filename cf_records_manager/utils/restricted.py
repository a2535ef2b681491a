"""
Restricted subdomain matching.

A record name is restricted when any configured regular expression matches
anywhere in it.
"""

import logging
import re
from functools import lru_cache
from typing import List, Tuple

from ..core.exceptions import ValidationError
from ..core.models import Record

logger = logging.getLogger(__name__)


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ValidationError(f"invalid restricted subdomain pattern '{pattern}': {e}") from e


def is_restricted(name: str, patterns: List[str]) -> bool:
    """Check whether a record name matches any restricted pattern."""
    for pattern in patterns:
        if _compile(pattern).search(name):
            logger.debug(f"'{name}' matches restricted pattern '{pattern}'")
            return True
    return False


def split_restricted(
    records: List[Record], patterns: List[str]
) -> Tuple[List[Record], List[Record]]:
    """Split records into (allowed, restricted), keeping their order."""
    allowed = []
    restricted = []
    for record in records:
        if is_restricted(record.name, patterns):
            restricted.append(record)
        else:
            allowed.append(record)
    return allowed, restricted
