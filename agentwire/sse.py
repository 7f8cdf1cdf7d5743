"""Reading and writing of Server-Sent Events streams."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from agentwire import log
from agentwire.jsonrpc import new_notification_response
from agentwire.parts import DecodeError

__all__ = [
    "DEFAULT_MAX_LINE_SIZE",
    "SSEError",
    "Event",
    "CloseEventData",
    "EventReader",
    "EventBatch",
    "format_event",
    "format_jsonrpc_event_batch",
]

DEFAULT_MAX_LINE_SIZE = 64 * 1024


class SSEError(Exception):
    """Raised when an event stream cannot be read or written."""


def _encode(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"object of type {type(value).__name__} is not JSON serializable")


def _write(writer: Any, text: str) -> None:
    try:
        writer.write(text)
    except TypeError:
        writer.write(text.encode("utf-8"))


@dataclass(frozen=True)
class Event:
    """One complete event read from a stream."""

    data: str
    event_type: str = "message"


@dataclass
class CloseEventData:
    """Payload of an event announcing that a stream is closing."""

    id: str
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {"taskId": self.id, "reason": self.reason}

    @classmethod
    def from_dict(cls, data: Any) -> CloseEventData:
        if not isinstance(data, Mapping):
            raise DecodeError("close event data must be a JSON object")
        task_id = data.get("taskId") or ""
        reason = data.get("reason") or ""
        if not isinstance(task_id, str) or not isinstance(reason, str):
            raise DecodeError("close event fields must be strings")
        return cls(id=task_id, reason=reason)


class EventReader:
    """Parses ``text/event-stream`` data from an iterable of lines.

    The source may be a text or binary file object, or any iterable of
    ``str`` or ``bytes`` lines.
    """

    def __init__(self, stream: Iterable[Any], *, max_line_size: int = DEFAULT_MAX_LINE_SIZE) -> None:
        self._lines = iter(stream)
        self._max_line_size = max_line_size

    def _next_line(self) -> Optional[str]:
        raw = next(self._lines, None)
        if raw is None:
            return None
        if isinstance(raw, (bytes, bytearray)):
            raw = bytes(raw).decode("utf-8", errors="replace")
        if len(raw) > self._max_line_size:
            raise SSEError("token too long")
        if raw.endswith("\n"):
            raw = raw[:-1]
        if raw.endswith("\r"):
            raw = raw[:-1]
        return raw

    def read_event(self) -> Optional[Event]:
        """Return the next event, or None once the stream is exhausted."""
        chunks: list[str] = []
        event_type = "message"
        while (line := self._next_line()) is not None:
            if not line:
                if chunks:
                    return Event("\n".join(chunks), event_type)
                continue  # keep-alive
            if line.startswith("event:"):
                event_type = line[len("event:"):].strip()
            elif line.startswith("data:"):
                chunk = line[len("data:"):]
                if chunk.startswith(" "):
                    chunk = chunk[1:]
                chunks.append(chunk)
            elif line.startswith(("id:", "retry:", ":")):
                continue
            else:
                log.warnf("SSE line without recognized prefix: %s", line)
                chunks.append(line)
        if chunks:
            return Event("\n".join(chunks), event_type)
        return None

    def __iter__(self) -> Iterator[Event]:
        while (event := self.read_event()) is not None:
            yield event


@dataclass
class EventBatch:
    """One event of a batch written by :func:`format_jsonrpc_event_batch`."""

    event_type: str
    id: Any
    data: Any


def format_event(writer: Any, event_type: str, data: Any) -> None:
    """Write ``data`` as JSON in one SSE event."""
    try:
        payload = json.dumps(
            data, default=_encode, separators=(",", ":"), ensure_ascii=False, allow_nan=False
        )
    except (TypeError, ValueError) as exc:
        raise SSEError(f"failed to marshal SSE event data: {exc}") from exc
    try:
        _write(writer, f"event: {event_type}\ndata: {payload}\n\n")
    except OSError as exc:
        raise SSEError(f"failed to write SSE event: {exc}") from exc


def format_jsonrpc_event_batch(writer: Any, events: Optional[Iterable[EventBatch]]) -> None:
    """Write several events, each wrapped in a JSON-RPC envelope, in one write."""
    if not events:
        return
    pieces: list[str] = []
    for event in events:
        try:
            payload = new_notification_response(event.id, event.data).to_json()
        except (TypeError, ValueError) as exc:
            raise SSEError(f"failed to marshal JSON-RPC SSE event data: {exc}") from exc
        pieces.append(f"event: {event.event_type}\ndata: {payload}\n\n")
    if not pieces:
        return
    try:
        _write(writer, "".join(pieces))
    except OSError as exc:
        raise SSEError(f"failed to write JSON-RPC SSE event batch: {exc}") from exc