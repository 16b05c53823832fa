"""Owning iterators over a live response body.

``FrameStream`` yields raw SSE frames; ``ChunkStream`` wraps one and yields
decoded chunks. Both are single-pass and pull-based: nothing is read until the
caller asks for the next item.

Release rules
-------------
The resources registered with :meth:`FrameStream.callback` (the HTTP response,
logging hooks) are released exactly once, when any of these happens first:

* the underlying fragments are exhausted or raise,
* ``close()`` is called or a ``with`` block exits,
* the internal generator is closed (abandoned iteration).

``ChunkStream`` additionally closes its frame stream as soon as ``[DONE]`` is
decoded.
"""
from __future__ import annotations

import time
from contextlib import ExitStack
from typing import Any, Callable, Iterable, Iterator, Optional

from ..constants import DONE_SENTINEL
from ..models import ChatCompletionChunk
from .accumulate import StreamAccumulation, accumulate_chunks
from .decoder import decode_frames
from .sse_reassembler import Fragment, SseFrameReassembler
from .stream_item import StreamItem


class FrameStream:
    """Raw frame iterator owning the response it reads from.

    Attributes:
      emitted: number of frame items yielded so far
      saw_done: whether the ``[DONE]`` frame was yielded
      closed: whether resources have been released
    """

    def __init__(self, fragments: Iterable[Fragment]) -> None:
        self._fragments = fragments
        self._reassembler = SseFrameReassembler()
        self._exit = ExitStack()
        self._iter: Optional[Iterator[StreamItem[str]]] = None
        self._started = time.monotonic()
        self.emitted = 0
        self.saw_done = False
        self.closed = False
        close_fragments = getattr(fragments, "close", None)
        if callable(close_fragments):
            self._exit.callback(close_fragments)

    # API -----------------------------------------------------------------
    def callback(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        """Register ``fn`` to run on release (last registered runs first)."""
        self._exit.callback(fn, *args, **kwargs)

    @property
    def elapsed_ms(self) -> float:
        return (time.monotonic() - self._started) * 1000.0

    @property
    def pending(self) -> bool:
        """Whether an unterminated block was left in the buffer."""
        return self._reassembler.pending

    def close(self) -> None:
        """Stop iteration and release the response. Safe to call repeatedly."""
        if self._iter is None:
            self._iter = iter(())
        close_iter = getattr(self._iter, "close", None)
        if callable(close_iter):
            close_iter()
        self._release()

    def chunks(self) -> "ChunkStream":
        """Wrap this stream in a decoding :class:`ChunkStream`."""
        return ChunkStream(self)

    # Iteration -----------------------------------------------------------
    def __iter__(self) -> "FrameStream":
        return self

    def __next__(self) -> StreamItem[str]:
        if self._iter is None:
            self._iter = self._generate()
        return next(self._iter)

    def __enter__(self) -> "FrameStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _generate(self) -> Iterator[StreamItem[str]]:
        try:
            for fragment in self._fragments:
                for item in self._reassembler.feed(fragment):
                    self.emitted += 1
                    if item.value == DONE_SENTINEL:
                        self.saw_done = True
                    yield item
        finally:
            self._release()

    def _release(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._exit.close()


class ChunkStream:
    """Decoded chunk iterator over a :class:`FrameStream`.

    Yields ``StreamItem[ChatCompletionChunk]``; see ``decode_frames`` for the
    error item rules.
    """

    def __init__(self, frames: FrameStream) -> None:
        self._frames = frames
        self._iter: Optional[Iterator[StreamItem[ChatCompletionChunk]]] = None

    @property
    def frames(self) -> FrameStream:
        return self._frames

    @property
    def closed(self) -> bool:
        return self._frames.closed

    def close(self) -> None:
        if self._iter is not None:
            self._iter.close()  # type: ignore[attr-defined]
        self._frames.close()

    def accumulate(self, *, strict: bool = True) -> StreamAccumulation:
        """Consume the rest of the stream and fold it (see ``accumulate_chunks``)."""
        with self:
            return accumulate_chunks(self, strict=strict)

    def __iter__(self) -> "ChunkStream":
        return self

    def __next__(self) -> StreamItem[ChatCompletionChunk]:
        if self._iter is None:
            self._iter = self._generate()
        return next(self._iter)

    def __enter__(self) -> "ChunkStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _generate(self) -> Iterator[StreamItem[ChatCompletionChunk]]:
        try:
            yield from decode_frames(self._frames)
        finally:
            self._frames.close()


__all__ = ["FrameStream", "ChunkStream"]
