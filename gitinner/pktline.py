"""Pkt-line framing, side-band channels and an async callback queue."""

from __future__ import annotations

import asyncio
from enum import IntEnum

FLUSH_PKT = b"0000"


def write_pkt_line(data: str | bytes) -> bytes:
    """Frame data as a pkt-line; empty input yields the flush packet."""
    payload = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    if not payload:
        return FLUSH_PKT
    return b"%04x" % (len(payload) + 4) + payload


def bend_pkt_flush() -> bytes:
    """Side-band wrapped flush packet, as sent by git-http-backend."""
    body = b"\x01" + b"00000000"
    return b"%04x" % len(body) + body


class SideBand(IntEnum):
    """Side-band channel numbers."""

    FLUSH = 0
    PRIMARY = 1
    MESSAGE = 2
    REMOTE_ERROR = 3

    def to_u32(self) -> int:
        return int(self)

    @classmethod
    def from_u32(cls, value: int) -> SideBand | None:
        try:
            return cls(value)
        except ValueError:
            return None


class CallBack:
    """A bounded async queue of outgoing protocol chunks."""

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError("callback buffer size must be positive")
        self._queue: asyncio.Queue[bytes] = asyncio.Queue(maxsize=size)

    async def send(self, data: bytes) -> None:
        await self._queue.put(bytes(data))

    async def send_pkt_line(self, line: bytes) -> None:
        await self.send(b"%04x" % (len(line) + 4) + bytes(line))

    async def send_side_pkt_line(self, line: bytes, side: SideBand) -> None:
        if side == SideBand.FLUSH:
            await self.send(b"%04x" % 1)
            return
        length = len(line) + 1
        await self.send(b"%04x" % (length + 4) + bytes([side.to_u32() & 0xFF]) + bytes(line))

    async def receive(self) -> bytes:
        """Wait for and return the next queued chunk."""
        return await self._queue.get()