"""Streaming pipeline: SSE reassembly, chunk decoding, accumulation."""

from .stream_item import StreamItem
from .sse_reassembler import SseFrameReassembler, iter_sse_frames
from .decoder import decode_frame, decode_frames
from .accumulate import StreamAccumulation, accumulate_chunks
from .stream_controller import ChunkStream, FrameStream

__all__ = [
    "StreamItem",
    "SseFrameReassembler",
    "iter_sse_frames",
    "decode_frame",
    "decode_frames",
    "StreamAccumulation",
    "accumulate_chunks",
    "ChunkStream",
    "FrameStream",
]
