"""A metrics log store: recent entries in memory, evicted ones appended to rotating files."""

from __future__ import annotations

import struct
import sys
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

MAX_MEM_ENTRIES = 100_000
MAX_DISK_BYTES = 500 * 1024 * 1024
MAX_RETENTION_DAYS = 7
ROTATE_INTERVAL_SECS = 60.0

# timestamp (u64 LE) + payload length (u32 LE), then the payload
_RECORD_HEADER = struct.Struct("<QI")


class LogsError(Exception):
    """Raised when the log store cannot read or write its files or is misused."""


@dataclass
class DiskMeta:
    path: Path
    size: int
    mtime: float


class LogsStore:
    """Keeps up to MAX_MEM_ENTRIES values in an LRU; evicted values are written to disk."""

    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory)
        files: dict[float, DiskMeta] = {}
        total = 0
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            for path in self._dir.iterdir():
                if path.suffix != ".log":
                    continue
                stat = path.stat()
                total += stat.st_size
                files[stat.st_mtime] = DiskMeta(path, stat.st_size, stat.st_mtime)
        except OSError as err:
            raise LogsError(f"IO error: {err}") from err

        self._lock = threading.RLock()
        self._mem: OrderedDict[int, bytes] = OrderedDict()
        self._disk_files = files
        self._writer = None
        self._current_size = 0
        self._current_ts = 0.0
        self._evict_disk(total)

    @property
    def directory(self) -> Path:
        return self._dir

    def put(self, key: int, value: bytes) -> None:
        """Store a value; whatever the cache pushes out is appended to the current file."""
        with self._lock:
            evicted: bytes | None = None
            if key in self._mem:
                evicted = self._mem.pop(key)
            elif len(self._mem) >= MAX_MEM_ENTRIES:
                _, evicted = self._mem.popitem(last=False)
            self._mem[key] = bytes(value)
            if evicted is not None:
                self._append_to_disk(evicted)

    def close(self) -> None:
        """Close the current log file, if one is open."""
        with self._lock:
            if self._writer is not None:
                self._writer.close()
                self._writer = None

    def __enter__(self) -> LogsStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _append_to_disk(self, data: bytes) -> None:
        now = time.time()
        if max(now - self._current_ts, 0.0) >= ROTATE_INTERVAL_SECS:
            self._current_ts = now
            self._rotate_file(now)

        if self._writer is None:
            raise LogsError("Invalid state: No current writer available")
        header = _RECORD_HEADER.pack(int(now), len(data) & 0xFFFFFFFF)
        try:
            self._writer.write(header)
            self._writer.write(data)
            self._writer.flush()
        except OSError as err:
            raise LogsError(f"IO error: {err}") from err
        self._current_size += _RECORD_HEADER.size + len(data)

    def _rotate_file(self, now: float) -> None:
        self.close()
        stamp = datetime.fromtimestamp(now, tz=timezone.utc).strftime("%Y%m%d-%H%M")
        path = self._dir / f"metrics.{stamp}.log"
        try:
            self._writer = open(path, "ab")
            size = path.stat().st_size
        except OSError as err:
            raise LogsError(f"IO error: {err}") from err
        self._current_size = 0
        self._disk_files[now] = DiskMeta(path, size, now)
        self._evict_disk(0)

    def _evict_disk(self, additional: int) -> None:
        total = sum(meta.size for meta in self._disk_files.values()) + additional
        cutoff = time.time() - MAX_RETENTION_DAYS * 86400
        for oldest in sorted(self._disk_files):
            if not (total > MAX_DISK_BYTES or oldest < cutoff):
                break
            meta = self._disk_files.pop(oldest)
            try:
                meta.path.unlink()
            except OSError as err:
                print(f"Failed to remove {meta.path}: {err}", file=sys.stderr)
            else:
                total = max(total - meta.size, 0)