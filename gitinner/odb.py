"""Object database interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod

from gitinner.blob import Blob
from gitinner.commit import Commit
from gitinner.tag import Tag
from gitinner.tree import Tree
from gitinner.types import HashValue


class Odb(ABC):
    """Stores and retrieves commits, tags, trees and blobs by id.

    Lookups of missing objects raise GitInnerError(ErrorKind.OBJECT_NOT_FOUND).
    """

    @abstractmethod
    async def put_commit(self, commit: Commit) -> HashValue:
        """Store a commit and return its id."""

    @abstractmethod
    async def get_commit(self, hash_value: HashValue) -> Commit:
        """Return the commit with this id."""

    @abstractmethod
    async def has_commit(self, hash_value: HashValue) -> bool:
        """Whether a commit with this id is stored."""

    @abstractmethod
    async def put_tag(self, tag: Tag) -> HashValue:
        """Store a tag and return its id."""

    @abstractmethod
    async def get_tag(self, hash_value: HashValue) -> Tag:
        """Return the tag with this id."""

    @abstractmethod
    async def has_tag(self, hash_value: HashValue) -> bool:
        """Whether a tag with this id is stored."""

    @abstractmethod
    async def put_tree(self, tree: Tree) -> HashValue:
        """Store a tree and return its id."""

    @abstractmethod
    async def get_tree(self, hash_value: HashValue) -> Tree:
        """Return the tree with this id."""

    @abstractmethod
    async def has_tree(self, hash_value: HashValue) -> bool:
        """Whether a tree with this id is stored."""

    @abstractmethod
    async def put_blob(self, blob: Blob) -> HashValue:
        """Store a blob and return its id."""

    @abstractmethod
    async def get_blob(self, hash_value: HashValue) -> Blob:
        """Return the blob with this id."""

    @abstractmethod
    async def has_blob(self, hash_value: HashValue) -> bool:
        """Whether a blob with this id is stored."""

    @abstractmethod
    async def begin_transaction(self) -> OdbTransaction:
        """Open a transaction over this database."""


class OdbTransaction(Odb):
    """An object database whose writes become visible only on commit."""

    @abstractmethod
    async def commit(self) -> None:
        """Make the transaction's writes permanent."""

    @abstractmethod
    async def abort(self) -> None:
        """Discard the transaction's writes."""

    @abstractmethod
    async def rollback(self) -> None:
        """Discard the transaction's writes."""