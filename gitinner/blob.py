"""Blob objects: raw file contents."""

from __future__ import annotations

from dataclasses import dataclass

from gitinner.types import HashValue, HashVersion, ObjectType


@dataclass(frozen=True, eq=False)
class Blob:
    """File contents with their object id; blobs compare equal by id."""

    id: HashValue
    data: bytes

    @classmethod
    def parse(cls, data: bytes, version: HashVersion) -> Blob:
        """Wrap data as a blob, computing its id with the given algorithm."""
        payload = bytes(data)
        header = b"blob %d\0" % len(payload)
        return cls(version.hash(header + payload), payload)

    def object_type(self) -> ObjectType:
        return ObjectType.BLOB

    def size(self) -> int:
        return len(self.data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Blob):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return f"Type: Blob\nSize: {len(self.data)}\n"