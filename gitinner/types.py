"""Hash algorithms, hash values and object type codes."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from enum import Enum, IntEnum

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


@dataclass(frozen=True)
class HashValue:
    """A raw object id (20 bytes for SHA-1, 32 for SHA-256)."""

    raw: bytes

    @classmethod
    def from_str(cls, s: str) -> HashValue | None:
        """Parse a hex id; None if it is not 40 or 64 hex digits."""
        if len(s) not in (40, 64) or not set(s) <= _HEX_DIGITS:
            return None
        return cls(bytes.fromhex(s))

    @classmethod
    def from_bytes(cls, data: bytes) -> HashValue | None:
        """Wrap a raw digest; None if it is not 20 or 32 bytes."""
        data = bytes(data)
        if len(data) not in (20, 32):
            return None
        return cls(data)

    @property
    def hex(self) -> str:
        return self.raw.hex()

    def __str__(self) -> str:
        return self.raw.hex()


class HashVersion(Enum):
    SHA1 = "sha1"
    SHA256 = "sha256"

    @property
    def digest_size(self) -> int:
        return 20 if self is HashVersion.SHA1 else 32

    def hash(self, data: bytes) -> HashValue:
        return HashValue(hashlib.new(self.value, bytes(data)).digest())

    def default(self) -> HashValue:
        """The all-zero id of this algorithm."""
        return HashValue(bytes(self.digest_size))


class ObjectType(IntEnum):
    UNKNOWN = 0
    COMMIT = 1
    TREE = 2
    BLOB = 3
    TAG = 4
    OFS_DELTA = 6
    REF_DELTA = 7

    @classmethod
    def from_u8(cls, value: int) -> ObjectType:
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    @classmethod
    def from_str(cls, value: str) -> ObjectType:
        return _BY_NAME.get(value, cls.UNKNOWN)

    def to_u8(self) -> int:
        return int(self)

    def __str__(self) -> str:
        return _NAMES[self]

    def to_raw(self) -> bytes:
        return _NAMES[self].encode("ascii")

    def hash_value(self, hash_version: HashVersion, data: bytes) -> HashValue:
        """Hash the type name followed directly by data."""
        return hash_version.hash(self.to_raw() + bytes(data))


_NAMES = {
    ObjectType.UNKNOWN: "unknown",
    ObjectType.COMMIT: "commit",
    ObjectType.TREE: "tree",
    ObjectType.BLOB: "blob",
    ObjectType.TAG: "tag",
    ObjectType.OFS_DELTA: "ofs-delta",
    ObjectType.REF_DELTA: "ref-delta",
}
_BY_NAME = {name: kind for kind, name in _NAMES.items() if kind is not ObjectType.UNKNOWN}