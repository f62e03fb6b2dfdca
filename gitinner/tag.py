"""Annotated tag objects."""

from __future__ import annotations

from dataclasses import dataclass

from gitinner.errors import ErrorKind, GitInnerError
from gitinner.signature import Signature
from gitinner.types import HashValue, HashVersion, ObjectType


@dataclass(frozen=True, eq=False)
class Tag:
    """An annotated tag; tags compare equal by id."""

    id: HashValue
    object_hash: HashValue
    target_type: ObjectType
    tag_name: str
    tagger: Signature
    message: str

    @classmethod
    def parse(cls, data: bytes, version: HashVersion) -> Tag:
        raw = bytes(data)
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError:
            raise GitInnerError(ErrorKind.INVALID_UTF8) from None
        header, sep, message = text.partition("\n\n")
        if not sep:
            raise GitInnerError(ErrorKind.MISSING_FIELD, "message")

        object_hash: HashValue | None = None
        target_type: ObjectType | None = None
        tag_name: str | None = None
        tagger: Signature | None = None

        for line in header.split("\n"):
            line = line.removesuffix("\r")
            if line.startswith("object "):
                object_hash = HashValue.from_str(line[len("object "):].strip())
            elif line.startswith("type "):
                target_type = ObjectType.from_str(line[len("type "):].strip())
            elif line.startswith("tag "):
                tag_name = line[len("tag "):].strip()
            elif line.startswith("tagger "):
                entry = line[len("tagger "):].strip()
                try:
                    tagger = Signature.from_data(f"tagger {entry}".encode("utf-8"))
                except GitInnerError:
                    tagger = None

        if object_hash is None:
            raise GitInnerError(ErrorKind.MISSING_FIELD, "object")
        if target_type is None:
            raise GitInnerError(ErrorKind.MISSING_FIELD, "type")
        if tag_name is None:
            raise GitInnerError(ErrorKind.MISSING_FIELD, "tag")
        if tagger is None:
            raise GitInnerError(ErrorKind.MISSING_FIELD, "tagger")

        tag_id = version.hash(b"tag %d\0" % len(raw) + raw)
        return cls(tag_id, object_hash, target_type, tag_name, tagger, message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tag):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return (
            f"object {self.object_hash}\n"
            f"type {self.target_type}\n"
            f"tag {self.tag_name}\n"
            f"tagger {self.tagger}\n"
            f"\n"
            f"{self.message}"
        )

    def object_type(self) -> ObjectType:
        return ObjectType.TAG

    def size(self) -> int:
        return len(self.data())

    def data(self) -> bytes:
        return str(self).encode("utf-8")