"""Offset and reference delta objects, and the pack delta instruction format."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass

from gitinner.errors import ErrorKind, GitInnerError
from gitinner.odb import OdbTransaction
from gitinner.types import HashValue, ObjectType

Hasher = Callable[[bytes], HashValue]

_COPY_MAX = 0x10000
_OFFSET_BITS = (0x01, 0x02, 0x04, 0x08)
_SIZE_BITS = (0x10, 0x20, 0x40)


class _Reader:
    """Sequential reader over delta bytes that raises on truncation."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    @property
    def done(self) -> bool:
        return self._pos >= len(self._data)

    def byte(self) -> int:
        if self.done:
            raise GitInnerError(ErrorKind.UNEXPECTED_EOF)
        value = self._data[self._pos]
        self._pos += 1
        return value

    def take(self, count: int) -> bytes:
        end = self._pos + count
        if end > len(self._data):
            raise GitInnerError(ErrorKind.UNEXPECTED_EOF)
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def size_varint(self) -> int:
        """Little-endian base-128 size, as in delta headers."""
        result = 0
        shift = 0
        while True:
            byte = self.byte()
            result |= (byte & 0x7F) << shift
            shift += 7
            if not byte & 0x80:
                return result

    def gather(self, opcode: int, bits: tuple[int, ...]) -> int:
        value = 0
        for index, bit in enumerate(bits):
            if opcode & bit:
                value |= self.byte() << (8 * index)
        return value


def _apply(
    base: bytes,
    delta: bytes,
    *,
    base_mismatch: ErrorKind,
    bad_opcode: ErrorKind,
    result_mismatch: ErrorKind,
) -> bytes:
    base = bytes(base)
    reader = _Reader(bytes(delta))
    base_size = reader.size_varint()
    result_size = reader.size_varint()
    if base_size != len(base):
        raise GitInnerError(base_mismatch)

    out = bytearray()
    while not reader.done:
        opcode = reader.byte()
        if opcode & 0x80:
            offset = reader.gather(opcode, _OFFSET_BITS)
            size = reader.gather(opcode, _SIZE_BITS) or _COPY_MAX
            end = offset + size
            if end > len(base):
                raise GitInnerError(ErrorKind.INVALID_DELTA)
            out += base[offset:end]
        elif opcode:
            out += reader.take(opcode)
        else:
            raise GitInnerError(bad_opcode)

    if len(out) != result_size:
        raise GitInnerError(result_mismatch)
    return bytes(out)


@dataclass(frozen=True)
class OfsDelta:
    """A delta whose base lies at an absolute offset in the same pack."""

    id: HashValue
    base_offset: int
    delta_data: bytes

    @classmethod
    def create(cls, base_offset: int, delta_data: bytes, hasher: Hasher) -> OfsDelta:
        data = bytes(delta_data)
        object_id = hasher(b"ofs-delta %d\0" % len(data) + data)
        return cls(object_id, base_offset, data)

    @classmethod
    def parse(cls, data: bytes, current_offset: int, hasher: Hasher) -> OfsDelta:
        """Read the negative base offset, then keep the rest as delta data."""
        raw = bytes(data)
        reader = _Reader(raw)
        ofs = 0
        consumed = 0
        while True:
            byte = reader.byte()
            consumed += 1
            ofs = (ofs << 7) | (byte & 0x7F)
            if not byte & 0x80:
                break
        if ofs > current_offset:
            raise GitInnerError(ErrorKind.INVALID_DELTA)
        return cls.create(current_offset - ofs, raw[consumed:], hasher)

    @staticmethod
    def apply_delta(base: bytes, delta: bytes) -> bytes:
        """Rebuild an object from its base and delta instructions."""
        return _apply(
            base,
            delta,
            base_mismatch=ErrorKind.INVALID_DELTA,
            bad_opcode=ErrorKind.INVALID_DELTA,
            result_mismatch=ErrorKind.INVALID_DELTA,
        )

    def object_type(self) -> ObjectType:
        return ObjectType.OFS_DELTA

    def size(self) -> int:
        return len(self.delta_data)

    def __str__(self) -> str:
        return f"Type: OfsDelta\nBase Offset: {self.base_offset}\nSize: {len(self.delta_data)}\n"


@dataclass(frozen=True)
class RefDelta:
    """A delta whose base is named by its object id."""

    id: HashValue
    base_sha: HashValue
    delta_data: bytes

    @classmethod
    def create(cls, base_sha: HashValue, delta_data: bytes, hasher: Hasher) -> RefDelta:
        data = bytes(delta_data)
        object_id = hasher(b"ref-delta %d\0" % len(data) + data)
        return cls(object_id, base_sha, data)

    @classmethod
    def parse(cls, data: bytes, hash_len: int, hasher: Hasher) -> RefDelta:
        """Read a hex base id of hash_len characters, then the delta data."""
        raw = bytes(data)
        if len(raw) < hash_len:
            raise GitInnerError(ErrorKind.UNEXPECTED_EOF)
        try:
            text = raw[:hash_len].decode("utf-8")
        except UnicodeDecodeError:
            raise GitInnerError(ErrorKind.INVALID_UTF8) from None
        base_sha = HashValue.from_str(text)
        if base_sha is None:
            raise GitInnerError(ErrorKind.INVALID_DATA)
        return cls.create(base_sha, raw[hash_len:], hasher)

    @staticmethod
    def apply_git_delta(base: bytes, delta: bytes) -> bytes:
        """Rebuild an object from its base and delta instructions."""
        return _apply(
            base,
            delta,
            base_mismatch=ErrorKind.DELTA_BASE_SIZE_MISMATCH,
            bad_opcode=ErrorKind.DELTA_INVALID_INSTRUCTION,
            result_mismatch=ErrorKind.DELTA_RESULT_SIZE_MISMATCH,
        )

    @staticmethod
    async def resolve(
        base_hash: HashValue,
        delta_data: bytes,
        txn: OdbTransaction,
        resolved_ofs: Mapping[int, tuple[HashValue, bytes, ObjectType]],
    ) -> tuple[bytes, ObjectType]:
        """Find the base among resolved objects or in the store and apply the delta."""
        found = next(
            (
                (data, kind)
                for _, (object_id, data, kind) in sorted(resolved_ofs.items())
                if object_id == base_hash
            ),
            None,
        )
        if found is None:
            if await txn.has_blob(base_hash):
                found = ((await txn.get_blob(base_hash)).data, ObjectType.BLOB)
            elif await txn.has_commit(base_hash):
                found = ((await txn.get_commit(base_hash)).data(), ObjectType.COMMIT)
            elif await txn.has_tree(base_hash):
                found = ((await txn.get_tree(base_hash)).data(), ObjectType.TREE)
            elif await txn.has_tag(base_hash):
                found = ((await txn.get_tag(base_hash)).data(), ObjectType.TAG)
            else:
                raise GitInnerError(ErrorKind.MISSING_BASE_OBJECT)
        base, kind = found
        return RefDelta.apply_git_delta(base, delta_data), kind

    def object_type(self) -> ObjectType:
        return ObjectType.REF_DELTA

    def size(self) -> int:
        return len(self.delta_data)

    def __str__(self) -> str:
        return f"Type: RefDelta\nBase SHA: {self.base_sha}\nSize: {len(self.delta_data)}\n"