"""Line-by-line reading of child output streams."""

from collections.abc import AsyncIterator

import anyio
from anyio.abc import ByteReceiveStream
from anyio.streams.buffered import BufferedByteReceiveStream

MAX_LINE_BYTES = 64 * 1024


async def iter_lines(stream: ByteReceiveStream, max_bytes: int = MAX_LINE_BYTES) -> AsyncIterator[str]:
    """
    Yield decoded lines from ``stream`` until it ends.

    Trailing whitespace is stripped and blank lines are skipped. A line longer
    than ``max_bytes`` is yielded in pieces instead of growing the buffer.
    """
    buffered = BufferedByteReceiveStream(stream)
    while True:
        try:
            chunk = await buffered.receive_until(b"\n", max_bytes)
        except anyio.DelimiterNotFound:
            chunk = await buffered.receive(max_bytes)
        except anyio.IncompleteRead:
            # EOF without a final newline; flush what is left.
            chunk = buffered.buffer
            if not chunk:
                return
            text = chunk.decode("utf-8", errors="replace").rstrip()
            if text:
                yield text
            return
        except (anyio.EndOfStream, anyio.ClosedResourceError, anyio.BrokenResourceError):
            return

        text = chunk.decode("utf-8", errors="replace").rstrip()
        if text:
            yield text
