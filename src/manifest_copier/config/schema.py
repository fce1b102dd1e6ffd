"""設定檔驗證邏輯。"""

from __future__ import annotations

import logging
from typing import Any


def validate_config(config: dict[str, Any]) -> list[str]:
    errors: list[str] = []

    def add_error(path: str, message: str) -> None:
        errors.append(f"{path}: {message}")

    archive = config.get("archive", {})
    extensions = archive.get("extensions", [".zip"])
    if (
        not isinstance(extensions, list)
        or not extensions
        or any(not isinstance(item, str) or not item.startswith(".") for item in extensions)
    ):
        add_error("archive.extensions", "must be a non-empty list of suffixes starting with '.'")
    if not isinstance(archive.get("case_insensitive_lookup", False), bool):
        add_error("archive.case_insensitive_lookup", "must be a boolean")

    runner = config.get("runner", {})
    if not isinstance(runner.get("reserve_failed_destinations", True), bool):
        add_error("runner.reserve_failed_destinations", "must be a boolean")

    history = config.get("history", {})
    history_path = history.get("path")
    if not isinstance(history_path, str) or not history_path.strip():
        add_error("history.path", "must be a non-empty string")
    indent = history.get("indent", 2)
    if indent is not None and (not isinstance(indent, int) or indent < 0):
        add_error("history.indent", "must be null or an integer >= 0")

    manifest = config.get("manifest", {})
    delimiter = manifest.get("delimiter", ",")
    if not isinstance(delimiter, str) or len(delimiter) != 1:
        add_error("manifest.delimiter", "must be a single character")
    encoding = manifest.get("encoding", "utf-8-sig")
    if not isinstance(encoding, str) or not encoding.strip():
        add_error("manifest.encoding", "must be a non-empty string")
    if not isinstance(manifest.get("skip_header", False), bool):
        add_error("manifest.skip_header", "must be a boolean")

    retry = config.get("retry", {})
    max_retries = retry.get("max_retries", 2)
    backoff_base_sec = retry.get("backoff_base_sec", 0.5)
    backoff_cap_sec = retry.get("backoff_cap_sec", 5.0)
    if not isinstance(max_retries, int) or max_retries < 0:
        add_error("retry.max_retries", "must be an integer >= 0")
    if not isinstance(backoff_base_sec, (int, float)) or backoff_base_sec < 0:
        add_error("retry.backoff_base_sec", "must be a number >= 0")
    if not isinstance(backoff_cap_sec, (int, float)) or backoff_cap_sec < 0:
        add_error("retry.backoff_cap_sec", "must be a number >= 0")
    if (
        isinstance(backoff_base_sec, (int, float))
        and isinstance(backoff_cap_sec, (int, float))
        and backoff_base_sec > backoff_cap_sec
    ):
        add_error("retry", "backoff_base_sec must not exceed backoff_cap_sec")

    logging_config = config.get("logging", {})
    level = logging_config.get("level", "INFO")
    if not isinstance(level, str) or not isinstance(logging.getLevelName(level.upper()), int):
        add_error("logging.level", "must be a standard logging level name")
    log_file = logging_config.get("file")
    if log_file is not None and (not isinstance(log_file, str) or not log_file.strip()):
        add_error("logging.file", "must be null or a non-empty string")

    return errors
