"""Tests for line splitting of child output."""

import anyio
import pytest

from mcp_bridge.supervisor.output import iter_lines


async def collect(chunks: list[bytes], **kwargs) -> list[str]:
    send, receive = anyio.create_memory_object_stream(len(chunks) + 1)
    for chunk in chunks:
        send.send_nowait(chunk)
    send.close()
    return [line async for line in iter_lines(receive, **kwargs)]


@pytest.mark.anyio
async def test_lines_are_reassembled_across_chunks():
    assert await collect([b"hel", b"lo\nwor", b"ld\n"]) == ["hello", "world"]


@pytest.mark.anyio
async def test_trailing_whitespace_and_blank_lines_are_dropped():
    lines = await collect([b"one  \r\n", b"\n", b"   \n", b"\ttwo\t\n"])

    assert lines == ["one", "\ttwo"]


@pytest.mark.anyio
async def test_final_line_without_newline_is_flushed():
    assert await collect([b"first\n", b"last"]) == ["first", "last"]


@pytest.mark.anyio
async def test_empty_stream_yields_nothing():
    assert await collect([]) == []


@pytest.mark.anyio
async def test_long_line_is_split_at_max_bytes():
    lines = await collect([b"abcdefgh", b"ijkl\n"], max_bytes=8)

    assert lines == ["abcdefgh", "ijkl"]


@pytest.mark.anyio
async def test_invalid_utf8_is_replaced():
    assert await collect([b"caf\xe9\n"]) == ["caf\ufffd"]


@pytest.mark.anyio
async def test_closed_stream_ends_quietly():
    send, receive = anyio.create_memory_object_stream(1)
    await receive.aclose()

    assert [line async for line in iter_lines(receive)] == []
    send.close()
