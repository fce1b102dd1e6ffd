"""CSV manifest reader."""

from __future__ import annotations

import csv
from pathlib import Path

from ..config import ConfigManager
from ..models import ManifestRecord
from ..utils.logger import get_logger


def read_manifest(manifest_path: Path, config: ConfigManager | None = None, logger=None) -> list[ManifestRecord]:
    """Parse ``source,destination_dir[,new_name]`` rows in file order.

    Raises ``FileNotFoundError`` when the manifest does not exist.
    """
    config = config or ConfigManager()
    logger = logger or get_logger("ManifestReader")
    if not manifest_path.is_file():
        raise FileNotFoundError(f"Manifest not found: {manifest_path}")

    delimiter = str(config.get("manifest.delimiter", ","))
    encoding = str(config.get("manifest.encoding", "utf-8-sig"))
    skip_header = bool(config.get("manifest.skip_header", False))

    records: list[ManifestRecord] = []
    with manifest_path.open("r", encoding=encoding, newline="") as handle:
        reader = csv.reader(handle, delimiter=delimiter)
        for row in reader:
            if skip_header and reader.line_num == 1:
                continue
            fields = [value.strip() for value in row]
            if not any(fields):
                continue
            if len(fields) > 3:
                logger.debug(f"line {reader.line_num}: ignoring {len(fields) - 3} extra field(s)")
            preferred = fields[2] if len(fields) > 2 and fields[2] else None
            records.append(
                ManifestRecord(
                    raw_source=fields[0],
                    destination_dir=fields[1] if len(fields) > 1 else "",
                    preferred_name=preferred,
                    line_number=reader.line_num,
                )
            )

    logger.info(f"Loaded {len(records)} record(s) from {manifest_path}")
    return records
