"""Message parts: text, file and structured data segments."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Union

from agentwire.protocol import KIND_DATA, KIND_FILE, KIND_TEXT

__all__ = [
    "DecodeError",
    "FileWithBytes",
    "FileWithURI",
    "FileContent",
    "TextPart",
    "FilePart",
    "DataPart",
    "Part",
    "file_from_dict",
    "part_from_dict",
]


class DecodeError(ValueError):
    """Raised when a JSON value cannot be decoded into a protocol type."""


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise DecodeError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


def _optional_str(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    raise DecodeError(f"field {key!r} must be a string, got {type(value).__name__}")


def _str(data: Mapping[str, Any], key: str) -> str:
    value = _optional_str(data, key)
    return "" if value is None else value


def _metadata(data: Mapping[str, Any]) -> Optional[dict[str, Any]]:
    value = data.get("metadata")
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise DecodeError(
            f"field 'metadata' must be a JSON object, got {type(value).__name__}"
        )
    return dict(value)


def _with_metadata(out: dict[str, Any], metadata: Optional[dict[str, Any]]) -> dict[str, Any]:
    if metadata:
        out["metadata"] = metadata
    return out


@dataclass
class FileWithBytes:
    """File content embedded as a base64-encoded string."""

    bytes: str
    name: Optional[str] = None
    mime_type: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.name is not None:
            out["name"] = self.name
        if self.mime_type is not None:
            out["mimeType"] = self.mime_type
        out["bytes"] = self.bytes
        return out

    @classmethod
    def from_dict(cls, data: Any) -> FileWithBytes:
        data = _require_mapping(data, "file with bytes")
        return cls(
            bytes=_str(data, "bytes"),
            name=_optional_str(data, "name"),
            mime_type=_optional_str(data, "mimeType"),
        )


@dataclass
class FileWithURI:
    """File content referenced by URI."""

    uri: str
    name: Optional[str] = None
    mime_type: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.name is not None:
            out["name"] = self.name
        if self.mime_type is not None:
            out["mimeType"] = self.mime_type
        out["uri"] = self.uri
        return out

    @classmethod
    def from_dict(cls, data: Any) -> FileWithURI:
        data = _require_mapping(data, "file with uri")
        return cls(
            uri=_str(data, "uri"),
            name=_optional_str(data, "name"),
            mime_type=_optional_str(data, "mimeType"),
        )


FileContent = Union[FileWithBytes, FileWithURI]


def file_from_dict(data: Any) -> FileContent:
    """Decode file content, choosing the variant by the fields present."""
    if not isinstance(data, Mapping):
        raise DecodeError("unknown file type: must have either 'bytes' or 'uri' field")
    if "bytes" in data:
        return FileWithBytes.from_dict(data)
    if "uri" in data:
        return FileWithURI.from_dict(data)
    raise DecodeError("unknown file type: must have either 'bytes' or 'uri' field")


@dataclass
class TextPart:
    """A text segment within a message."""

    kind: ClassVar[str] = KIND_TEXT

    text: str
    metadata: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        return _with_metadata({"kind": self.kind, "text": self.text}, self.metadata)

    @classmethod
    def from_dict(cls, data: Any) -> TextPart:
        data = _require_mapping(data, "text part")
        return cls(text=_str(data, "text"), metadata=_metadata(data))


@dataclass
class FilePart:
    """A file included in a message."""

    kind: ClassVar[str] = KIND_FILE

    file: FileContent
    metadata: Optional[dict[str, Any]] = None

    @classmethod
    def with_bytes(cls, name: str, mime_type: str, data: str) -> FilePart:
        """Build a part carrying base64-encoded file content."""
        return cls(file=FileWithBytes(bytes=data, name=name, mime_type=mime_type))

    @classmethod
    def with_uri(cls, name: str, mime_type: str, uri: str) -> FilePart:
        """Build a part referring to file content by URI."""
        return cls(file=FileWithURI(uri=uri, name=name, mime_type=mime_type))

    def to_dict(self) -> dict[str, Any]:
        return _with_metadata(
            {"kind": self.kind, "file": self.file.to_dict()}, self.metadata
        )

    @classmethod
    def from_dict(cls, data: Any) -> FilePart:
        data = _require_mapping(data, "file part")
        if "file" not in data:
            raise DecodeError("failed to unmarshal file content: missing 'file' field")
        return cls(file=file_from_dict(data["file"]), metadata=_metadata(data))


@dataclass
class DataPart:
    """Arbitrary structured JSON data within a message."""

    kind: ClassVar[str] = KIND_DATA

    data: Any
    metadata: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        return _with_metadata({"kind": self.kind, "data": self.data}, self.metadata)

    @classmethod
    def from_dict(cls, data: Any) -> DataPart:
        data = _require_mapping(data, "data part")
        return cls(data=data.get("data"), metadata=_metadata(data))


Part = Union[TextPart, FilePart, DataPart]

_PART_TYPES: dict[str, type] = {
    KIND_TEXT: TextPart,
    KIND_FILE: FilePart,
    KIND_DATA: DataPart,
}


def part_from_dict(data: Any) -> Part:
    """Decode a part, choosing its type by the ``kind`` field."""
    data = _require_mapping(data, "part")
    kind = data.get("kind")
    if kind is None:
        kind = ""
    if not isinstance(kind, str):
        raise DecodeError(f"failed to detect part type: kind must be a string, got {kind!r}")
    part_type = _PART_TYPES.get(kind)
    if part_type is None:
        raise DecodeError(f"unsupported part kind: {kind}")
    return part_type.from_dict(data)