"""
Local-disk storage for uploaded documents and PDF splitter temporary files.

All paths handled by callers are relative to the storage root (the value kept
in ``documents.file_path``). Operations are blocking; async handlers run them
through ``starlette.concurrency.run_in_threadpool``.
"""

import shutil
import time
from pathlib import Path
from typing import BinaryIO, Union

from docvault.core.logging_config import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]


class UnsafePathError(ValueError):
    """Raised when a relative path resolves outside its allowed directory."""


def resolve_within(relative: PathLike, base: PathLike) -> Path:
    """
    Resolve ``relative`` against ``base`` and make sure it stays inside it.

    Raises:
        UnsafePathError: If the path is absolute, empty or escapes ``base``.
    """
    relative = str(relative or "").strip()
    if not relative:
        raise UnsafePathError("Empty path")

    base_path = Path(base).resolve()
    candidate = (base_path / relative).resolve()
    if Path(relative).is_absolute() or (candidate != base_path and base_path not in candidate.parents):
        raise UnsafePathError(f"Path escapes its base directory: {relative}")
    return candidate


class LocalStorage:
    """A storage disk rooted at a local directory."""

    def __init__(self, root: PathLike):
        self.root = Path(root).resolve()

    def path(self, relative: PathLike) -> Path:
        """Absolute path of a storage-relative path."""
        return resolve_within(relative, self.root)

    def relative(self, absolute: PathLike) -> str:
        """Storage-relative POSIX path of an absolute path under the root."""
        return Path(absolute).resolve().relative_to(self.root).as_posix()

    def exists(self, relative: PathLike) -> bool:
        try:
            return self.path(relative).is_file()
        except UnsafePathError:
            return False

    def size(self, relative: PathLike) -> int:
        return self.path(relative).stat().st_size

    def last_modified(self, relative: PathLike) -> float:
        return self.path(relative).stat().st_mtime

    def put_bytes(self, relative: PathLike, content: bytes) -> str:
        """Write ``content`` at ``relative``, creating parent directories."""
        target = self.path(relative)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
        logger.debug(f"Stored {len(content)} bytes at {relative}")
        return self.relative(target)

    def put_stream(self, relative: PathLike, stream: BinaryIO) -> str:
        """Copy a file-like object to ``relative``, creating parent directories."""
        target = self.path(relative)
        target.parent.mkdir(parents=True, exist_ok=True)
        stream.seek(0)
        with target.open("wb") as destination:
            shutil.copyfileobj(stream, destination)
        logger.debug(f"Stored stream at {relative}")
        return self.relative(target)

    def copy(self, source: PathLike, destination: PathLike) -> str:
        target = self.path(destination)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(self.path(source), target)
        return self.relative(target)

    def delete(self, relative: PathLike) -> bool:
        """Delete a file; returns whether something was removed."""
        target = self.path(relative)
        if not target.is_file():
            return False
        target.unlink()
        logger.debug(f"Deleted {relative}")
        return True

    def files(self, directory: PathLike) -> list[str]:
        """Storage-relative paths of the files directly inside ``directory``."""
        folder = self.path(directory)
        if not folder.is_dir():
            return []
        return sorted(self.relative(entry) for entry in folder.iterdir() if entry.is_file())

    def delete_older_than(self, directory: PathLike, max_age_seconds: float) -> int:
        """Delete files in ``directory`` last modified more than ``max_age_seconds`` ago."""
        cutoff = time.time() - max_age_seconds
        removed = 0
        for relative in self.files(directory):
            if self.last_modified(relative) < cutoff and self.delete(relative):
                removed += 1
        if removed:
            logger.info(f"Removed {removed} stale file(s) from {directory}")
        return removed
