"""References: branches, tags and HEAD."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from gitinner.types import HashValue


@dataclass
class RefItem:
    name: str
    value: HashValue
    is_branch: bool
    is_tag: bool
    is_head: bool


class RefsManager(ABC):
    """Reads and updates the references of one repository."""

    @abstractmethod
    async def head(self) -> RefItem:
        """The HEAD reference."""

    @abstractmethod
    async def refs(self) -> list[RefItem]:
        """Every reference."""

    @abstractmethod
    async def tags(self) -> list[RefItem]:
        """The tag references."""

    @abstractmethod
    async def branches(self) -> list[RefItem]:
        """The branch references."""

    @abstractmethod
    async def del_refs(self, ref_name: str) -> None:
        """Delete a reference; the default branch cannot be deleted."""

    @abstractmethod
    async def create_refs(self, ref_name: str, ref_value: HashValue) -> None:
        """Create a reference pointing at ref_value."""

    @abstractmethod
    async def update_refs(self, ref_name: str, ref_value: HashValue) -> None:
        """Point an existing reference at ref_value."""

    @abstractmethod
    async def get_refs(self, ref_name: str) -> RefItem:
        """The named reference; raises GitInnerError if missing."""

    @abstractmethod
    async def exists_refs(self, ref_name: str) -> bool:
        """Whether the named reference exists."""

    @abstractmethod
    async def get_value_refs(self, ref_name: str) -> HashValue:
        """The value of the named reference; raises GitInnerError if missing."""

    @abstractmethod
    async def exchange_default_branch(self, branch_name: str) -> None:
        """Make branch_name the reference HEAD points at."""