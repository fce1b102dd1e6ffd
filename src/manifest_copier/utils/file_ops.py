"""安全檔案操作（copy/extract/mkdir/remove）。"""

from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
import shutil
import time
import zipfile
from pathlib import Path
from typing import Any, Callable, Optional

from ..config.manager import ConfigManager
from .logger import get_logger

NON_RETRYABLE_ERRORS: tuple[type[BaseException], ...] = (
    FileNotFoundError,
    FileExistsError,
    IsADirectoryError,
    NotADirectoryError,
)


@dataclass
class OperationResult:
    success: bool
    error_message: Optional[str] = None
    retry_count: int = 0
    elapsed_time: float = 0.0
    value: Any = None


def safe_op(
    *,
    config,
    max_retries: Optional[int] = None,
    backoff_base_sec: Optional[float] = None,
    backoff_cap_sec: Optional[float] = None,
    exceptions: Optional[tuple[type[BaseException], ...]] = None,
    logger=None,
) -> Callable:
    """包裝檔案操作，提供重試與指數退避。

    Exceptions outside ``exceptions`` propagate unchanged. Missing paths are
    reported as failures right away instead of being retried.
    """

    cfg_get = getattr(config, "get", None)
    if not callable(cfg_get):
        raise TypeError("config must provide a get(key, default) method")

    resolved_max = int(max_retries if max_retries is not None else cfg_get("retry.max_retries", 2))
    resolved_base = float(
        backoff_base_sec if backoff_base_sec is not None else cfg_get("retry.backoff_base_sec", 0.5)
    )
    resolved_cap = float(backoff_cap_sec if backoff_cap_sec is not None else cfg_get("retry.backoff_cap_sec", 5.0))
    resolved_exceptions = exceptions if exceptions is not None else (OSError,)
    op_logger = logger or get_logger("FileOps")

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs) -> OperationResult:
            start_time = time.time()
            last_error: BaseException | None = None
            attempt = 0

            for attempt in range(resolved_max + 1):
                try:
                    value = func(*args, **kwargs)
                    return OperationResult(
                        success=True,
                        retry_count=attempt,
                        elapsed_time=time.time() - start_time,
                        value=value,
                    )
                except resolved_exceptions as exc:
                    last_error = exc
                    if isinstance(exc, NON_RETRYABLE_ERRORS):
                        break
                    if attempt < resolved_max:
                        wait_time = min(resolved_base * (2**attempt), resolved_cap)
                        op_logger.warning(
                            "Retrying file operation %s/%s in %.2fs: %s",
                            attempt + 1,
                            resolved_max,
                            wait_time,
                            exc,
                        )
                        time.sleep(wait_time)

            return OperationResult(
                success=False,
                error_message=str(last_error) if last_error is not None else "Unknown error",
                retry_count=attempt,
                elapsed_time=time.time() - start_time,
            )

        return wrapper

    return decorator


def _resolve_config(config) -> ConfigManager:
    if config is None:
        return ConfigManager()
    return config


def safe_copy2(
    src_path: Path,
    dst_path: Path,
    *,
    config=None,
    max_retries: Optional[int] = None,
    backoff_base_sec: Optional[float] = None,
    backoff_cap_sec: Optional[float] = None,
    logger=None,
) -> OperationResult:
    """Copy bytes and metadata, overwriting ``dst_path`` if present."""
    cfg = _resolve_config(config)

    @safe_op(
        config=cfg,
        max_retries=max_retries,
        backoff_base_sec=backoff_base_sec,
        backoff_cap_sec=backoff_cap_sec,
        logger=logger,
    )
    def _copy() -> int:
        if not src_path.is_file():
            raise FileNotFoundError(f"Source file not found: {src_path}")
        shutil.copy2(src_path, dst_path)
        return dst_path.stat().st_size

    return _copy()


def safe_extract_entry(
    container_path: Path,
    entry_name: str,
    dst_path: Path,
    *,
    config=None,
    max_retries: Optional[int] = None,
    logger=None,
) -> OperationResult:
    """Decompress one archive entry to ``dst_path``, overwriting if present.

    A missing entry raises ``KeyError`` and a damaged container raises
    ``zipfile.BadZipFile``; a damaged entry stream raises ``zlib.error`` or
    ``EOFError``. None of these is retried. The archive handle is closed on
    every exit path.
    """
    cfg = _resolve_config(config)

    @safe_op(config=cfg, max_retries=max_retries, logger=logger)
    def _extract() -> int:
        with zipfile.ZipFile(container_path, "r") as archive:
            info = archive.getinfo(entry_name)
            with archive.open(info) as source, dst_path.open("wb") as target:
                shutil.copyfileobj(source, target)
            return info.file_size

    return _extract()


def safe_makedirs(
    path: Path,
    *,
    config=None,
    max_retries: Optional[int] = None,
    logger=None,
) -> OperationResult:
    cfg = _resolve_config(config)

    @safe_op(config=cfg, max_retries=max_retries, logger=logger)
    def _makedirs() -> None:
        path.mkdir(parents=True, exist_ok=True)

    return _makedirs()


def safe_remove(
    path: Path,
    *,
    config=None,
    max_retries: Optional[int] = None,
    logger=None,
) -> OperationResult:
    cfg = _resolve_config(config)

    @safe_op(config=cfg, max_retries=max_retries, logger=logger)
    def _remove() -> None:
        path.unlink()

    return _remove()
