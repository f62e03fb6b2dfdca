"""Author, committer and tagger signatures."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from gitinner.errors import ErrorKind, GitInnerError

_TIMESTAMP = re.compile(r"\+?[0-9]+")


class SignatureType(Enum):
    AUTHOR = "author"
    COMMITTER = "committer"
    TAGGER = "tagger"

    @classmethod
    def from_data(cls, data: bytes) -> SignatureType:
        try:
            text = bytes(data).decode("utf-8")
        except UnicodeDecodeError as err:
            raise GitInnerError(ErrorKind.CONVERSION_ERROR, str(err)) from err
        return cls.from_str(text)

    @classmethod
    def from_str(cls, s: str) -> SignatureType:
        try:
            return cls(s)
        except ValueError:
            raise GitInnerError(ErrorKind.INVALID_SIGNATURE_TYPE, s) from None

    def to_bytes(self) -> bytes:
        return self.value.encode("ascii")

    def __str__(self) -> str:
        return self.value


def _text(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class Signature:
    signature_type: SignatureType = SignatureType.AUTHOR
    name: str = ""
    email: str = ""
    timestamp: int = 0
    timezone: str = ""

    @classmethod
    def from_data(cls, data: bytes) -> Signature:
        """Parse '<type> <name> <<email>> <timestamp> <timezone>'."""
        sign = bytes(data)
        name_start = sign.find(b" ")
        if name_start < 0:
            raise GitInnerError(ErrorKind.INVALID_SIGNATURE)
        signature_type = SignatureType.from_data(sign[:name_start])

        email_start = sign.find(b"<")
        email_end = sign.find(b">")
        if email_start < 0 or email_end < 0:
            raise GitInnerError(ErrorKind.INVALID_SIGNATURE)
        if email_start - 1 < name_start + 1 or email_end < email_start + 1:
            raise GitInnerError(ErrorKind.INVALID_SIGNATURE)
        name = _text(sign[name_start + 1:email_start - 1])
        email = _text(sign[email_start + 1:email_end])

        rest = sign[email_end + 2:]
        split = rest.find(b" ")
        if split < 0:
            raise GitInnerError(ErrorKind.INVALID_SIGNATURE)
        stamp = _text(rest[:split])
        if not _TIMESTAMP.fullmatch(stamp):
            raise GitInnerError(ErrorKind.INVALID_TIMESTAMP)
        timezone = _text(rest[split + 1:])
        return cls(signature_type, name, email, int(stamp), timezone)

    def to_data(self) -> bytes:
        return b" ".join(
            [
                self.signature_type.to_bytes(),
                self.name.encode("utf-8"),
                f"<{self.email}>".encode("utf-8"),
                str(self.timestamp).encode("ascii"),
                self.timezone.encode("utf-8"),
            ]
        )

    @classmethod
    def new(cls, sign_type: SignatureType, name: str, email: str) -> Signature:
        """A signature stamped with the current time and local UTC offset."""
        offset = datetime.now().astimezone().utcoffset()
        seconds = int(offset.total_seconds()) if offset is not None else 0
        sign = "-" if seconds < 0 else "+"
        hours, minutes = divmod(abs(seconds) // 60, 60)
        return cls(sign_type, name, email, int(time.time()), f"{sign}{hours:02d}{minutes:02d}")

    def __str__(self) -> str:
        return f"{self.name} <{self.email}> {self.timestamp} {self.timezone}"