"""Frame-to-chunk decoding for chat completion streams.

``decode_frames`` turns resolved SSE frames into ``ChatCompletionChunk``
items:

* ``[DONE]`` ends the sequence normally; nothing after it is read.
* Empty payloads are skipped.
* A payload that is not JSON, does not fit the chunk schema or carries a
  provider ``{"error": ...}`` object yields one error item at its position;
  decoding continues with the next frame.
* Frame-level errors (e.g. undecodable UTF-8) are passed through.
* If the frames run out before ``[DONE]`` a final ``TRUNCATED_STREAM`` error
  item is produced.
"""
from __future__ import annotations

from typing import Iterable, Iterator, Union

from ..constants import DONE_SENTINEL
from ..errors import ResponseError, ResponseErrorKind
from ..models import ChatCompletionChunk
from .stream_item import StreamItem

FrameInput = Union[str, StreamItem[str]]


def decode_frame(payload: str) -> StreamItem[ChatCompletionChunk]:
    """Parse a single non-sentinel payload into a chunk item."""
    try:
        return StreamItem.ok(ChatCompletionChunk.parse(payload))
    except ResponseError as err:
        return StreamItem.fail(err)


def decode_frames(frames: Iterable[FrameInput]) -> Iterator[StreamItem[ChatCompletionChunk]]:
    """Lazily decode ``frames``; see the module docstring for the item rules."""
    for frame in frames:
        if isinstance(frame, StreamItem):
            if frame.is_error():
                yield StreamItem.fail(frame.error)  # type: ignore[arg-type]
                continue
            payload = frame.value
        else:
            payload = frame
        if not payload:
            continue
        if payload == DONE_SENTINEL:
            return
        yield decode_frame(payload)
    yield StreamItem.fail(
        ResponseError(
            ResponseErrorKind.TRUNCATED_STREAM,
            f"stream ended before {DONE_SENTINEL}",
        )
    )


__all__ = ["decode_frame", "decode_frames"]
