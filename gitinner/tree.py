"""Tree objects: directory listings of modes, names and object ids."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from gitinner.errors import ErrorKind, GitInnerError
from gitinner.types import HashValue, HashVersion, ObjectType

_ENTRY_HASH_LEN = 20


class TreeItemMode(Enum):
    BLOB = "blob"
    BLOB_EXECUTABLE = "blob executable"
    TREE = "tree"
    COMMIT = "commit"
    LINK = "link"

    @classmethod
    def from_bytes(cls, mode: bytes) -> TreeItemMode:
        """Parse an octal mode as written in a tree entry."""
        found = _MODES_IN.get(bytes(mode))
        if found is None:
            raise GitInnerError(
                ErrorKind.INVALID_TREE_ITEM, bytes(mode).decode("utf-8", errors="replace")
            )
        return found

    def to_bytes(self) -> bytes:
        return _MODES_OUT[self]

    def to_str(self) -> str:
        return _MODES_OUT[self].decode("ascii")

    @property
    def kind(self) -> str:
        """The object kind the entry points at."""
        return "blob" if self is TreeItemMode.BLOB_EXECUTABLE else self.value

    def __str__(self) -> str:
        return self.value


_MODES_IN = {
    b"040000": TreeItemMode.TREE,
    b"40000": TreeItemMode.TREE,
    b"100644": TreeItemMode.BLOB,
    b"100664": TreeItemMode.BLOB,
    b"100640": TreeItemMode.BLOB,
    b"100755": TreeItemMode.BLOB_EXECUTABLE,
    b"120000": TreeItemMode.LINK,
    b"160000": TreeItemMode.COMMIT,
}

_MODES_OUT = {
    TreeItemMode.BLOB: b"100644",
    TreeItemMode.BLOB_EXECUTABLE: b"100755",
    TreeItemMode.LINK: b"120000",
    TreeItemMode.TREE: b"40000",
    TreeItemMode.COMMIT: b"160000",
}


@dataclass(frozen=True)
class TreeItem:
    mode: TreeItemMode
    id: HashValue
    name: str

    def to_data(self) -> bytes:
        """Encode as '<mode> <name>\\0<raw id>'."""
        raw = self.id.raw
        if len(raw) in (20, 32):
            digest = raw
        elif len(raw) in (40, 64):
            try:
                digest = bytes.fromhex(raw.decode("ascii"))
            except (UnicodeDecodeError, ValueError):
                raise GitInnerError(ErrorKind.INVALID_HASH, raw) from None
        else:
            raise GitInnerError(ErrorKind.INVALID_HASH, f"unexpected hash length: {len(raw)}")
        return self.mode.to_bytes() + b" " + self.name.encode("utf-8") + b"\0" + digest

    def __str__(self) -> str:
        return f"{self.mode} {self.name} {self.id}"


@dataclass(frozen=True, eq=False)
class Tree:
    """A tree object; trees compare equal by id."""

    id: HashValue
    tree_items: tuple[TreeItem, ...] = ()

    @classmethod
    def parse(cls, data: bytes, version: HashVersion) -> Tree:
        raw = bytes(data)
        items: list[TreeItem] = []
        pos = 0
        while pos < len(raw):
            space = raw.find(b" ", pos)
            if space < 0:
                raise GitInnerError(ErrorKind.INVALID_TREE_ITEM, "Missing space after mode")
            mode = TreeItemMode.from_bytes(raw[pos:space])
            pos = space + 1

            nul = raw.find(b"\0", pos)
            if nul < 0:
                raise GitInnerError(ErrorKind.INVALID_TREE_ITEM, "Missing null after filename")
            try:
                name = raw[pos:nul].decode("utf-8")
            except UnicodeDecodeError:
                raise GitInnerError(ErrorKind.INVALID_TREE_ITEM, "Filename not UTF-8") from None
            pos = nul + 1

            if pos + _ENTRY_HASH_LEN > len(raw):
                raise GitInnerError(ErrorKind.INVALID_TREE_ITEM, "Tree item hash truncated")
            item_id = HashValue(raw[pos:pos + _ENTRY_HASH_LEN])
            pos += _ENTRY_HASH_LEN
            items.append(TreeItem(mode, item_id, name))

        tree_id = version.hash(b"tree %d\0" % len(raw) + raw)
        return cls(tree_id, tuple(items))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tree):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return "".join(
            f"{item.mode.to_str()} {item.mode.kind} {item.id}\t{item.name}\n"
            for item in self.tree_items
        )

    def object_type(self) -> ObjectType:
        return ObjectType.TREE

    def size(self) -> int:
        return sum(len(item.to_data()) for item in self.tree_items)

    def data(self) -> bytes:
        return b"".join(item.to_data() for item in self.tree_items)