import pytest

from gitinner.pktline import CallBack, SideBand, bend_pkt_flush, write_pkt_line


def test_sidebend_to_u32():
    assert SideBand.REMOTE_ERROR.to_u32() == 3
    assert SideBand.FLUSH.to_u32() == 0
    assert SideBand.PRIMARY.to_u32() == 1
    assert SideBand.MESSAGE.to_u32() == 2


def test_sidebend_from_u32_valid():
    assert SideBand.from_u32(3) is SideBand.REMOTE_ERROR
    assert SideBand.from_u32(0) is SideBand.FLUSH
    assert SideBand.from_u32(1) is SideBand.PRIMARY
    assert SideBand.from_u32(2) is SideBand.MESSAGE


@pytest.mark.parametrize("value", [4, 5, 2**32 - 1])
def test_sidebend_from_u32_invalid(value):
    assert SideBand.from_u32(value) is None


def test_sidebend_round_trip():
    for variant in SideBand:
        assert SideBand.from_u32(variant.to_u32()) is variant


def test_write_pkt_line_empty_is_flush():
    assert write_pkt_line("") == b"0000"


def test_write_pkt_line_hello():
    buf = write_pkt_line("hello\n")
    assert buf.startswith(b"000a")
    assert buf.endswith(b"hello\n")
    assert len(buf) == int(buf[:4], 16)


def test_write_pkt_line_counts_bytes_not_chars():
    buf = write_pkt_line("é")
    assert int(buf[:4], 16) == len(buf)


def test_bend_pkt_flush():
    out = bend_pkt_flush()
    assert out == b"0009\x0100000000"
    assert int(out[:4], 16) == len(out) - 4


def test_callback_rejects_zero_size():
    with pytest.raises(ValueError):
        CallBack(0)


@pytest.mark.asyncio
async def test_callback_send_pkt_line():
    cb = CallBack(4)
    await cb.send_pkt_line(b"abc")
    got = await cb.receive()
    assert got == b"0007abc"


@pytest.mark.asyncio
async def test_callback_side_pkt_line_primary():
    cb = CallBack(4)
    await cb.send_side_pkt_line(b"ab", SideBand.PRIMARY)
    got = await cb.receive()
    assert got[4:5] == b"\x01"
    assert got[5:] == b"ab"
    assert int(got[:4], 16) == len(got)


@pytest.mark.asyncio
async def test_callback_side_flush():
    cb = CallBack(4)
    await cb.send_side_pkt_line(b"ignored", SideBand.FLUSH)
    assert await cb.receive() == b"0001"


@pytest.mark.asyncio
async def test_callback_preserves_order():
    cb = CallBack(4)
    await cb.send(b"one")
    await cb.send(b"two")
    assert [await cb.receive(), await cb.receive()] == [b"one", b"two"]