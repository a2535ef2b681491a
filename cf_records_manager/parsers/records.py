import json
import logging
from typing import List

from ..core.exceptions import FileIOError, RecordParseError
from ..core.models import Record, Records

logger = logging.getLogger(__name__)


class RecordsParser:
    """Reads and writes the local records file (a JSON array of entries)."""

    def __init__(self, records_path: str):
        self.records_path = records_path

    def parse(self) -> List[Records]:
        """Parse the records file into entries."""
        try:
            with open(self.records_path, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise RecordParseError(f"fail to parse records file {self.records_path}: {e}") from e
        except OSError as e:
            raise FileIOError(
                f"cannot read records file {self.records_path}: {e}", self.records_path
            ) from e

        if not isinstance(data, list):
            raise RecordParseError(f"records file {self.records_path} must contain a JSON array")

        entries = [
            Records.from_dict(item, f"{self.records_path}[{index}]")
            for index, item in enumerate(data)
        ]
        logger.info(f"Successfully parsed {len(entries)} records from {self.records_path}")
        return entries

    def write(self, entries: List[Records], indent: str = "\t"):
        """Write entries back to the records file."""
        data = [entry.to_dict() for entry in entries]
        try:
            with open(self.records_path, "w") as f:
                json.dump(data, f, indent=indent)
                f.write("\n")
        except OSError as e:
            raise FileIOError(
                f"fail to write records file {self.records_path}: {e}", self.records_path
            ) from e
        logger.info(f"Wrote {len(entries)} records to {self.records_path}")


def filter_by_type(entries: List[Records], record_types: List[str]) -> List[Record]:
    """Return the records of the enabled types."""
    return [entry.record for entry in entries if entry.record.type in record_types]
