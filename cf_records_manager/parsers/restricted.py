import json
import logging
from typing import List

from ..core.exceptions import FileIOError, RecordParseError

logger = logging.getLogger(__name__)


def load_restricted(restricted_path: str) -> List[str]:
    """
    Load restricted subdomain patterns.

    The file holds {"restricted_subdomain": ["regex", ...]}. A missing file
    means nothing is restricted.
    """
    try:
        with open(restricted_path, "r") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.warning(f"Restricted file {restricted_path} not found, no subdomains restricted")
        return []
    except json.JSONDecodeError as e:
        raise RecordParseError(f"fail to parse restricted file {restricted_path}: {e}") from e
    except OSError as e:
        raise FileIOError(
            f"cannot read restricted file {restricted_path}: {e}", restricted_path
        ) from e

    if not isinstance(data, dict):
        raise RecordParseError(f"restricted file {restricted_path} must contain an object")

    patterns = data.get("restricted_subdomain") or []
    if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
        raise RecordParseError(
            f"restricted file {restricted_path}: 'restricted_subdomain' must be a list of strings"
        )

    logger.info(f"Loaded {len(patterns)} restricted patterns from {restricted_path}")
    return patterns
