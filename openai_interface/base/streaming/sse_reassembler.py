"""SSE frame reassembly over arbitrarily split byte fragments.

Summary
-------
Transport reads do not line up with SSE events: one read may hold no event,
part of one, or several. :class:`SseFrameReassembler` buffers bytes until a
blank line closes an event block, then emits exactly one frame per block that
has ``data:`` lines. A blank line is two consecutive line terminators, each of
which may be ``\\r\\n``, ``\\n`` or ``\\r``, mixed freely (``\\n\\r\\n`` counts).

Block handling
--------------
- Only ``data:`` lines are kept; ``event:``, ``id:``, ``retry:`` and comment
  lines (``:``) are ignored.
- The ``data:`` prefix and surrounding whitespace are stripped; several data
  lines in one block are joined with ``\\n``.
- A block is decoded as UTF-8 only once complete, so a multi-byte character
  split between reads is safe. An undecodable block becomes an error item of
  kind ``MALFORMED_FRAME``.
- A trailing block without a closing blank line is never emitted; it stays
  in the buffer (see :attr:`SseFrameReassembler.pending`).

The output is identical for every split of the same byte stream.
"""
from __future__ import annotations

import re
from typing import Iterable, Iterator, List, Union

from ..constants import SSE_DATA_PREFIX
from ..errors import ResponseError, ResponseErrorKind
from .stream_item import StreamItem

# Two line terminators. The first "\r" may not pair with a following "\n", so a
# single "\r\n" never counts as two. The first terminator always has a byte after
# it; only a trailing lone "\r" on the second one is ambiguous (see _skip_lf).
_DELIMITER = re.compile(rb"(?:\r\n|\r(?!\n)|\n)(?:\r\n|\r|\n)")
# A delimiter is at most 4 bytes, so rescanning the last 3 old bytes is enough
_OVERLAP = 3

Fragment = Union[bytes, bytearray, memoryview, str]


def _block_payload(block: bytes) -> bytes | None:
    """Return the joined ``data:`` payload of one event block, or ``None``."""
    data_lines = [
        line[len(SSE_DATA_PREFIX):].strip()
        for line in block.splitlines()
        if line.startswith(SSE_DATA_PREFIX)
    ]
    if not data_lines:
        return None
    return b"\n".join(data_lines)


def _decode_frame(payload: bytes) -> StreamItem[str]:
    try:
        return StreamItem.ok(payload.decode("utf-8"))
    except UnicodeDecodeError as exc:
        return StreamItem.fail(
            ResponseError(
                ResponseErrorKind.MALFORMED_FRAME,
                "SSE frame is not valid UTF-8",
                context=payload.decode("utf-8", errors="replace"),
                cause=exc,
            )
        )


class SseFrameReassembler:
    """Incremental SSE frame splitter. One instance per response body."""

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._scan_from = 0
        # Last delimiter ended the buffer with "\r"; a "\n" arriving next belongs to it
        self._skip_lf = False

    @property
    def pending(self) -> bool:
        """Whether bytes of an unterminated block are buffered."""
        return bool(self._buffer)

    @property
    def remainder(self) -> bytes:
        """Buffered bytes not yet resolved into a frame."""
        return bytes(self._buffer)

    def feed(self, fragment: Fragment) -> List[StreamItem[str]]:
        """Append ``fragment`` and return the frames it completed, in order."""
        if not fragment:
            return []
        if isinstance(fragment, str):
            fragment = fragment.encode("utf-8")
        if self._skip_lf:
            self._skip_lf = False
            if fragment[:1] == b"\n":
                fragment = fragment[1:]
                if not fragment:
                    return []
        self._buffer += fragment
        frames: List[StreamItem[str]] = []
        start = 0
        pos = self._scan_from
        while True:
            match = _DELIMITER.search(self._buffer, pos)
            if match is None:
                break
            payload = _block_payload(bytes(self._buffer[start:match.start()]))
            if payload is not None:
                frames.append(_decode_frame(payload))
            start = pos = match.end()
        if start and start == len(self._buffer) and self._buffer.endswith(b"\r"):
            self._skip_lf = True
        if start:
            del self._buffer[:start]
        self._scan_from = max(0, len(self._buffer) - _OVERLAP)
        return frames


def iter_sse_frames(fragments: Iterable[Fragment]) -> Iterator[StreamItem[str]]:
    """Lazily reassemble ``fragments`` into frames (one pass, pull-based)."""
    reassembler = SseFrameReassembler()
    for fragment in fragments:
        yield from reassembler.feed(fragment)


__all__ = ["SseFrameReassembler", "iter_sse_frames"]
