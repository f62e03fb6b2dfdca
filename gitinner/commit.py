"""Commit objects."""

from __future__ import annotations

from dataclasses import dataclass

from gitinner.errors import ErrorKind, GitInnerError
from gitinner.signature import Signature
from gitinner.types import HashValue, HashVersion, ObjectType

_SIG_END = "-----END PGP SIGNATURE-----"


@dataclass(frozen=True)
class Gpgsig:
    signature: str


@dataclass(frozen=True)
class Commit:
    hash: HashValue
    message: str
    author: Signature
    committer: Signature
    parents: tuple[HashValue, ...] = ()
    tree: HashValue | None = None
    gpgsig: Gpgsig | None = None

    @classmethod
    def parse(cls, data: bytes, version: HashVersion) -> Commit:
        """Parse a commit body; the id is computed over the raw bytes."""
        raw = bytes(data)
        digest = version.hash(b"commit %d\0" % len(raw) + raw)
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError:
            raise GitInnerError(ErrorKind.INVALID_UTF8) from None
        text = text.replace("\r\n", "\n")
        header, _, message = text.partition("\n\n")

        tree: HashValue | None = None
        parents: list[HashValue] = []
        author: Signature | None = None
        committer: Signature | None = None
        gpgsig: str | None = None
        collecting: list[str] | None = None

        for line in header.split("\n"):
            if collecting is not None:
                collecting.append(line)
                if line.lstrip() == _SIG_END:
                    gpgsig = "\n".join(collecting)
                    collecting = None
                continue
            if line.startswith("gpgsig "):
                collecting = [line]
                continue

            if line.startswith("tree "):
                tree = HashValue.from_str(line[len("tree "):].strip())
            elif line.startswith("parent "):
                parent = HashValue.from_str(line[len("parent "):].strip())
                if parent is not None:
                    parents.append(parent)
            elif line.startswith("author "):
                author = _signature("author", line[len("author "):], ErrorKind.MISSING_AUTHOR)
            elif line.startswith("committer "):
                committer = _signature(
                    "committer", line[len("committer "):], ErrorKind.MISSING_COMMITTER
                )

        if author is None:
            raise GitInnerError(ErrorKind.MISSING_AUTHOR)
        if committer is None:
            raise GitInnerError(ErrorKind.MISSING_COMMITTER)
        return cls(
            hash=digest,
            message=message,
            author=author,
            committer=committer,
            parents=tuple(parents),
            tree=tree,
            gpgsig=Gpgsig(gpgsig) if gpgsig is not None else None,
        )

    def __str__(self) -> str:
        parts: list[str] = []
        if self.tree is not None:
            parts.append(f"tree {self.tree}\n")
        parts.extend(f"parent {parent}\n" for parent in self.parents)
        parts.append(f"author {self.author}\n")
        parts.append(f"committer {self.committer}\n")
        if self.gpgsig is not None:
            parts.extend(f"{line}\n" for line in self.gpgsig.signature.split("\n"))
            parts.append(" \n")
        parts.append("\n")
        parts.append(self.message)
        return "".join(parts)

    def object_type(self) -> ObjectType:
        return ObjectType.COMMIT

    def size(self) -> int:
        return len(self.data())

    def data(self) -> bytes:
        return str(self).encode("utf-8")


def _signature(prefix: str, rest: str, kind: ErrorKind) -> Signature:
    try:
        return Signature.from_data(f"{prefix} {rest.strip()}".encode("utf-8"))
    except GitInnerError:
        raise GitInnerError(kind) from None