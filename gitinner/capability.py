"""Git protocol capabilities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CapabilityKind(Enum):
    MULTI_ACK = "multi_ack"
    MULTI_ACK_DETAILED = "multi_ack_detailed"
    NO_DONE = "no-done"
    THIN_PACK = "thin-pack"
    SIDE_BAND = "side-band"
    SIDE_BAND_64K = "side-band-64k"
    OFS_DELTA = "ofs-delta"
    SHALLOW = "shallow"
    DEFERRED_FETCH = "deferred-fetch"
    NO_PROGRESS = "no-progress"
    INCLUDE_TAG = "include-tag"
    REPORT_STATUS = "report-status"
    DELETE_REFS = "delete-refs"
    QUIET = "quiet"
    ATOMIC = "atomic"
    PUSH_OPTIONS = "push-options"
    AGENT = "agent"
    OBJECT_FORMAT = "object-format"
    SYMREF = "symref"
    OTHER = "other"


_VALUED = {CapabilityKind.AGENT, CapabilityKind.OBJECT_FORMAT, CapabilityKind.SYMREF, CapabilityKind.OTHER}
_SIMPLE = {kind.value: kind for kind in CapabilityKind if kind not in _VALUED}


@dataclass(frozen=True)
class GitCapability:
    """A capability; value/target carry the arguments of valued kinds."""

    kind: CapabilityKind
    value: str | None = None
    target: str | None = None

    @classmethod
    def from_bytes(cls, data: bytes) -> GitCapability | None:
        try:
            text = bytes(data).decode("utf-8")
        except UnicodeDecodeError:
            return None
        return cls.from_str(text)

    @classmethod
    def from_str(cls, s: str) -> GitCapability:
        simple = _SIMPLE.get(s)
        if simple is not None:
            return cls(simple)
        if s.startswith("agent="):
            return cls(CapabilityKind.AGENT, s[len("agent="):])
        if s.startswith("object-format="):
            return cls(CapabilityKind.OBJECT_FORMAT, s[len("object-format="):])
        if s.startswith("symref="):
            source, sep, dest = s[len("symref="):].partition(":")
            if sep:
                return cls(CapabilityKind.SYMREF, source, dest)
        return cls(CapabilityKind.OTHER, s)

    def __str__(self) -> str:
        match self.kind:
            case CapabilityKind.AGENT:
                return f"agent={self.value}"
            case CapabilityKind.OBJECT_FORMAT:
                return f"object-format={self.value}"
            case CapabilityKind.SYMREF:
                return f"symref={self.value}:{self.target}"
            case CapabilityKind.OTHER:
                return self.value or ""
            case _:
                return self.kind.value

    @classmethod
    def basic(cls) -> list[GitCapability]:
        return [
            cls(CapabilityKind.SIDE_BAND),
            cls(CapabilityKind.SIDE_BAND_64K),
            cls(CapabilityKind.AGENT, "git-inner"),
            cls(CapabilityKind.REPORT_STATUS),
        ]

    @classmethod
    def upload(cls) -> list[GitCapability]:
        return cls.basic() + [
            cls(CapabilityKind.MULTI_ACK),
            cls(CapabilityKind.MULTI_ACK_DETAILED),
            cls(CapabilityKind.THIN_PACK),
            cls(CapabilityKind.NO_DONE),
            cls(CapabilityKind.INCLUDE_TAG),
            cls(CapabilityKind.SHALLOW),
        ]

    @classmethod
    def receive(cls) -> list[GitCapability]:
        return cls.basic() + [
            cls(CapabilityKind.ATOMIC),
            cls(CapabilityKind.PUSH_OPTIONS),
            cls(CapabilityKind.DELETE_REFS),
        ]