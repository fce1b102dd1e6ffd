"""Collision-free destination names."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator

from ..utils.path_utils import occupied_key


class OccupiedSet:
    """Destination paths claimed during one run, compared by normalized path."""

    def __init__(self, paths: Iterable[Path | str] = ()) -> None:
        self._keys: set[str] = set()
        for path in paths:
            self.add(path)

    def add(self, path: Path | str) -> None:
        self._keys.add(occupied_key(path))

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        return occupied_key(path) in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._keys))


class NameAllocator:
    def allocate(self, directory: Path | str, desired_name: str, occupied: OccupiedSet) -> str:
        """First of ``name``, ``stem_1.ext``, ``stem_2.ext`` ... free on disk and in ``occupied``.

        ``occupied`` is never modified; the caller reserves the chosen path.
        """
        parent = Path(directory)
        stem = Path(desired_name).stem
        ext = Path(desired_name).suffix
        candidate = desired_name
        seq = 0
        while self._is_taken(parent / candidate, occupied):
            seq += 1
            candidate = f"{stem}_{seq}{ext}"
        return candidate

    def _is_taken(self, path: Path, occupied: OccupiedSet) -> bool:
        return path.exists() or path.is_symlink() or path in occupied
