"""Protocol models: messages, artifacts, tasks, events and RPC parameters."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar, Optional, Union

from agentwire.parts import DecodeError, Part, part_from_dict
from agentwire.protocol import (
    KIND_MESSAGE,
    KIND_TASK,
    KIND_TASK_ARTIFACT_UPDATE,
    KIND_TASK_STATUS_UPDATE,
    MessageRole,
    TaskState,
    generate_artifact_id,
    generate_message_id,
)

__all__ = [
    "PushNotificationAuthenticationInfo",
    "AuthenticationInfo",
    "OAuth2AuthInfo",
    "JWTAuthInfo",
    "APIKeyAuthInfo",
    "PushNotificationConfig",
    "TaskPushNotificationConfig",
    "Message",
    "Artifact",
    "TaskStatus",
    "Task",
    "TaskStatusUpdateEvent",
    "TaskArtifactUpdateEvent",
    "TaskQueryParams",
    "TaskIDParams",
    "SendMessageConfiguration",
    "SendMessageParams",
    "SendStreamingMessageParams",
    "UnaryMessageResult",
    "StreamingMessageResult",
    "parse_message_result",
    "parse_streaming_event",
    "dump_result",
]


# --- decoding helpers -------------------------------------------------------


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise DecodeError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


def _opt_str(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    raise DecodeError(f"field {key!r} must be a string, got {type(value).__name__}")


def _str(data: Mapping[str, Any], key: str) -> str:
    value = _opt_str(data, key)
    return "" if value is None else value


def _opt_bool(data: Mapping[str, Any], key: str) -> Optional[bool]:
    value = data.get(key)
    if value is None or isinstance(value, bool):
        return value
    raise DecodeError(f"field {key!r} must be a boolean, got {type(value).__name__}")


def _opt_int(data: Mapping[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"field {key!r} must be an integer, got {type(value).__name__}")
    return value


def _str_list(data: Mapping[str, Any], key: str) -> Optional[list[str]]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise DecodeError(f"field {key!r} must be a list of strings")
    return list(value)


def _metadata(data: Mapping[str, Any]) -> Optional[dict[str, Any]]:
    value = data.get("metadata")
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise DecodeError(
            f"field 'metadata' must be a JSON object, got {type(value).__name__}"
        )
    return dict(value)


def _enum_or_str(enum_type: type[Enum], value: Any, key: str) -> Any:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"field {key!r} must be a string, got {type(value).__name__}")
    try:
        return enum_type(value)
    except ValueError:
        return value


def _value(item: Any) -> Any:
    return item.value if isinstance(item, Enum) else item


def _parts(data: Mapping[str, Any], label: str) -> list[Part]:
    raw = data.get("parts")
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise DecodeError("field 'parts' must be a list")
    parts: list[Part] = []
    for index, item in enumerate(raw):
        try:
            parts.append(part_from_dict(item))
        except DecodeError as exc:
            raise DecodeError(f"failed to unmarshal {label} {index}: {exc}") from exc
    return parts


def _list_of(data: Mapping[str, Any], key: str, decode: Any) -> Optional[list[Any]]:
    raw = data.get(key)
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise DecodeError(f"field {key!r} must be a list")
    items = []
    for index, item in enumerate(raw):
        try:
            items.append(decode(item))
        except DecodeError as exc:
            raise DecodeError(f"failed to unmarshal {key} {index}: {exc}") from exc
    return items


def _put(out: dict[str, Any], key: str, value: Any) -> None:
    """Store a value unless it is empty (zero, empty string, empty container)."""
    if value:
        out[key] = value


def _put_optional(out: dict[str, Any], key: str, value: Any) -> None:
    """Store a value unless it is absent."""
    if value is not None:
        out[key] = value


def _camel(name: str) -> str:
    """Turn a snake_case attribute name into its camelCase JSON key."""
    head, *rest = name.split("_")
    return head + "".join(piece.capitalize() for piece in rest)


def _encode_fields(obj: Any) -> dict[str, Any]:
    """Encode every dataclass field under its camelCase key, omitting empty ones."""
    out: dict[str, Any] = {}
    for item in fields(obj):
        _put(out, _camel(item.name), getattr(obj, item.name))
    return out


def _decode_fields(
    cls: type, data: Mapping[str, Any], list_fields: tuple[str, ...] = ()
) -> dict[str, Any]:
    """Decode every dataclass field from its camelCase key."""
    values: dict[str, Any] = {}
    for item in fields(cls):
        key = _camel(item.name)
        if item.name in list_fields:
            values[item.name] = _str_list(data, key)
        else:
            values[item.name] = _str(data, key)
    return values


# --- authentication and push notifications ---------------------------------


@dataclass
class PushNotificationAuthenticationInfo:
    """Authentication details for push notification endpoints."""

    schemes: list[str] = field(default_factory=list)
    credentials: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put_optional(out, "credentials", self.credentials)
        out["schemes"] = list(self.schemes)
        return out

    @classmethod
    def from_dict(cls, data: Any) -> PushNotificationAuthenticationInfo:
        data = _mapping(data, "authentication info")
        return cls(
            schemes=_str_list(data, "schemes") or [],
            credentials=_opt_str(data, "credentials"),
        )


AuthenticationInfo = PushNotificationAuthenticationInfo


@dataclass
class OAuth2AuthInfo:
    """OAuth2 authentication details."""

    client_id: str = ""
    client_secret: str = ""
    token_url: str = ""
    auth_url: str = ""
    scopes: Optional[list[str]] = None
    refresh_token: str = ""
    access_token: str = ""

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)

    @classmethod
    def from_dict(cls, data: Any) -> OAuth2AuthInfo:
        data = _mapping(data, "oauth2 info")
        return cls(**_decode_fields(cls, data, list_fields=("scopes",)))


@dataclass
class JWTAuthInfo:
    """JWT authentication details."""

    token: str = ""
    key_id: str = ""
    jwks_url: str = ""
    audience: str = ""
    issuer: str = ""

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)

    @classmethod
    def from_dict(cls, data: Any) -> JWTAuthInfo:
        data = _mapping(data, "jwt info")
        return cls(**_decode_fields(cls, data))


@dataclass
class APIKeyAuthInfo:
    """API key authentication details."""

    key: str = ""
    header_name: str = ""
    param_name: str = ""
    location: str = ""

    def to_dict(self) -> dict[str, Any]:
        return _encode_fields(self)

    @classmethod
    def from_dict(cls, data: Any) -> APIKeyAuthInfo:
        data = _mapping(data, "api key info")
        return cls(**_decode_fields(cls, data))


@dataclass
class PushNotificationConfig:
    """Configuration for task push notifications."""

    url: str
    id: str = ""
    token: str = ""
    authentication: Optional[PushNotificationAuthenticationInfo] = None
    metadata: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.authentication is not None:
            out["authentication"] = self.authentication.to_dict()
        _put(out, "id", self.id)
        _put(out, "token", self.token)
        out["url"] = self.url
        _put(out, "metadata", self.metadata)
        return out

    @classmethod
    def from_dict(cls, data: Any) -> PushNotificationConfig:
        data = _mapping(data, "push notification config")
        auth = data.get("authentication")
        return cls(
            url=_str(data, "url"),
            id=_str(data, "id"),
            token=_str(data, "token"),
            authentication=(
                None if auth is None else PushNotificationAuthenticationInfo.from_dict(auth)
            ),
            metadata=_metadata(data),
        )


@dataclass
class TaskPushNotificationConfig:
    """Push notification settings bound to a task."""

    task_id: str
    push_notification_config: PushNotificationConfig
    metadata: Optional[dict[str, Any]] = None
    rpc_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "pushNotificationConfig": self.push_notification_config.to_dict(),
            "taskId": self.task_id,
        }
        _put(out, "metadata", self.metadata)
        return out

    @classmethod
    def from_dict(cls, data: Any) -> TaskPushNotificationConfig:
        data = _mapping(data, "task push notification config")
        raw = data.get("pushNotificationConfig")
        config = (
            PushNotificationConfig(url="")
            if raw is None
            else PushNotificationConfig.from_dict(raw)
        )
        return cls(
            task_id=_str(data, "taskId"),
            push_notification_config=config,
            metadata=_metadata(data),
        )


# --- messages, artifacts and tasks -----------------------------------------


@dataclass
class Message:
    """A single exchange between a user and an agent."""

    kind: ClassVar[str] = KIND_MESSAGE

    role: Union[MessageRole, str]
    parts: list[Part] = field(default_factory=list)
    message_id: str = field(default_factory=generate_message_id)
    task_id: Optional[str] = None
    context_id: Optional[str] = None
    reference_task_ids: Optional[list[str]] = None
    extensions: Optional[list[str]] = None
    metadata: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put_optional(out, "contextId", self.context_id)
        _put(out, "extensions", self.extensions)
        out["kind"] = self.kind
        out["messageId"] = self.message_id
        _put(out, "metadata", self.metadata)
        out["parts"] = [part.to_dict() for part in self.parts]
        _put(out, "referenceTaskIds", self.reference_task_ids)
        out["role"] = _value(self.role)
        _put_optional(out, "taskId", self.task_id)
        return out

    @classmethod
    def from_dict(cls, data: Any) -> Message:
        data = _mapping(data, "message")
        return cls(
            role=_enum_or_str(MessageRole, data.get("role"), "role"),
            parts=_parts(data, "part"),
            message_id=_str(data, "messageId"),
            task_id=_opt_str(data, "taskId"),
            context_id=_opt_str(data, "contextId"),
            reference_task_ids=_str_list(data, "referenceTaskIds"),
            extensions=_str_list(data, "extensions"),
            metadata=_metadata(data),
        )


@dataclass
class Artifact:
    """An output generated by a task."""

    artifact_id: str = field(default_factory=generate_artifact_id)
    name: Optional[str] = None
    description: Optional[str] = None
    parts: list[Part] = field(default_factory=list)
    metadata: Optional[dict[str, Any]] = field(default_factory=dict)
    extensions: Optional[list[str]] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"artifactId": self.artifact_id}
        _put_optional(out, "name", self.name)
        _put_optional(out, "description", self.description)
        out["parts"] = [part.to_dict() for part in self.parts]
        _put(out, "metadata", self.metadata)
        _put(out, "extensions", self.extensions)
        return out

    @classmethod
    def from_dict(cls, data: Any) -> Artifact:
        data = _mapping(data, "artifact")
        return cls(
            artifact_id=_str(data, "artifactId"),
            name=_opt_str(data, "name"),
            description=_opt_str(data, "description"),
            parts=_parts(data, "artifact part"),
            metadata=_metadata(data),
            extensions=_str_list(data, "extensions"),
        )


@dataclass
class TaskStatus:
    """Current status of a task."""

    state: Union[TaskState, str]
    message: Optional[Message] = None
    timestamp: str = ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"state": _value(self.state)}
        if self.message is not None:
            out["message"] = self.message.to_dict()
        _put(out, "timestamp", self.timestamp)
        return out

    @classmethod
    def from_dict(cls, data: Any) -> TaskStatus:
        data = _mapping(data, "task status")
        raw_message = data.get("message")
        return cls(
            state=_enum_or_str(TaskState, data.get("state"), "state"),
            message=None if raw_message is None else Message.from_dict(raw_message),
            timestamp=_str(data, "timestamp"),
        )


def _status(data: Mapping[str, Any]) -> TaskStatus:
    raw = data.get("status")
    return TaskStatus(state="") if raw is None else TaskStatus.from_dict(raw)


@dataclass
class Task:
    """A unit of work processed by the agent."""

    kind: ClassVar[str] = KIND_TASK

    id: str
    context_id: str
    status: TaskStatus
    artifacts: Optional[list[Artifact]] = None
    history: Optional[list[Message]] = None
    metadata: Optional[dict[str, Any]] = None

    @classmethod
    def new(cls, task_id: str, context_id: str) -> Task:
        """Create a task in the submitted state, stamped with the current UTC time."""
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        return cls(
            id=task_id,
            context_id=context_id,
            status=TaskStatus(state=TaskState.SUBMITTED, timestamp=timestamp),
            metadata={},
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.artifacts:
            out["artifacts"] = [artifact.to_dict() for artifact in self.artifacts]
        out["contextId"] = self.context_id
        if self.history:
            out["history"] = [message.to_dict() for message in self.history]
        out["id"] = self.id
        out["kind"] = self.kind
        _put(out, "metadata", self.metadata)
        out["status"] = self.status.to_dict()
        return out

    @classmethod
    def from_dict(cls, data: Any) -> Task:
        data = _mapping(data, "task")
        return cls(
            id=_str(data, "id"),
            context_id=_str(data, "contextId"),
            status=_status(data),
            artifacts=_list_of(data, "artifacts", Artifact.from_dict),
            history=_list_of(data, "history", Message.from_dict),
            metadata=_metadata(data),
        )


@dataclass
class TaskStatusUpdateEvent:
    """A change in a task's lifecycle state."""

    kind: ClassVar[str] = KIND_TASK_STATUS_UPDATE

    task_id: str
    context_id: str
    status: TaskStatus
    final: bool = False
    metadata: Optional[dict[str, Any]] = None

    def is_final(self) -> bool:
        return self.final

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "contextId": self.context_id,
            "final": self.final,
            "kind": self.kind,
        }
        _put(out, "metadata", self.metadata)
        out["status"] = self.status.to_dict()
        out["taskId"] = self.task_id
        return out

    @classmethod
    def from_dict(cls, data: Any) -> TaskStatusUpdateEvent:
        data = _mapping(data, "task status update event")
        return cls(
            task_id=_str(data, "taskId"),
            context_id=_str(data, "contextId"),
            status=_status(data),
            final=bool(_opt_bool(data, "final")),
            metadata=_metadata(data),
        )


@dataclass
class TaskArtifactUpdateEvent:
    """A new or updated artifact chunk."""

    kind: ClassVar[str] = KIND_TASK_ARTIFACT_UPDATE

    task_id: str
    context_id: str
    artifact: Artifact
    last_chunk: Optional[bool] = None
    append: Optional[bool] = None
    metadata: Optional[dict[str, Any]] = None

    def is_final(self) -> bool:
        return self.last_chunk is True

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put_optional(out, "append", self.append)
        out["artifact"] = self.artifact.to_dict()
        out["contextId"] = self.context_id
        out["kind"] = self.kind
        _put_optional(out, "lastChunk", self.last_chunk)
        _put(out, "metadata", self.metadata)
        out["taskId"] = self.task_id
        return out

    @classmethod
    def from_dict(cls, data: Any) -> TaskArtifactUpdateEvent:
        data = _mapping(data, "task artifact update event")
        raw_artifact = data.get("artifact")
        artifact = (
            Artifact(artifact_id="", metadata=None)
            if raw_artifact is None
            else Artifact.from_dict(raw_artifact)
        )
        return cls(
            task_id=_str(data, "taskId"),
            context_id=_str(data, "contextId"),
            artifact=artifact,
            last_chunk=_opt_bool(data, "lastChunk"),
            append=_opt_bool(data, "append"),
            metadata=_metadata(data),
        )


# --- RPC parameters ---------------------------------------------------------


@dataclass
class TaskQueryParams:
    """Parameters of the tasks/get method."""

    id: str
    history_length: Optional[int] = None
    metadata: Optional[dict[str, Any]] = None
    rpc_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id}
        _put_optional(out, "historyLength", self.history_length)
        _put(out, "metadata", self.metadata)
        return out

    @classmethod
    def from_dict(cls, data: Any) -> TaskQueryParams:
        data = _mapping(data, "task query params")
        return cls(
            id=_str(data, "id"),
            history_length=_opt_int(data, "historyLength"),
            metadata=_metadata(data),
        )


@dataclass
class TaskIDParams:
    """Parameters of methods that need only a task ID."""

    id: str
    metadata: Optional[dict[str, Any]] = None
    rpc_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id}
        _put(out, "metadata", self.metadata)
        return out

    @classmethod
    def from_dict(cls, data: Any) -> TaskIDParams:
        data = _mapping(data, "task id params")
        return cls(id=_str(data, "id"), metadata=_metadata(data))


@dataclass
class SendMessageConfiguration:
    """Optional configuration for sending a message."""

    accepted_output_modes: list[str] = field(default_factory=list)
    push_notification_config: Optional[PushNotificationConfig] = None
    history_length: Optional[int] = None
    blocking: Optional[bool] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"acceptedOutputModes": list(self.accepted_output_modes)}
        if self.push_notification_config is not None:
            out["pushNotificationConfig"] = self.push_notification_config.to_dict()
        _put_optional(out, "historyLength", self.history_length)
        _put_optional(out, "blocking", self.blocking)
        return out

    @classmethod
    def from_dict(cls, data: Any) -> SendMessageConfiguration:
        data = _mapping(data, "send message configuration")
        raw_push = data.get("pushNotificationConfig")
        return cls(
            accepted_output_modes=_str_list(data, "acceptedOutputModes") or [],
            push_notification_config=(
                None if raw_push is None else PushNotificationConfig.from_dict(raw_push)
            ),
            history_length=_opt_int(data, "historyLength"),
            blocking=_opt_bool(data, "blocking"),
        )


def _message_params(data: Mapping[str, Any]) -> tuple[Message, Optional[SendMessageConfiguration]]:
    raw_message = data.get("message")
    message = Message(role="", message_id="") if raw_message is None else Message.from_dict(raw_message)
    raw_config = data.get("configuration")
    config = None if raw_config is None else SendMessageConfiguration.from_dict(raw_config)
    return message, config


def _message_params_dict(
    message: Message,
    configuration: Optional[SendMessageConfiguration],
    metadata: Optional[dict[str, Any]],
) -> dict[str, Any]:
    out: dict[str, Any] = {}
    if configuration is not None:
        out["configuration"] = configuration.to_dict()
    out["message"] = message.to_dict()
    _put(out, "metadata", metadata)
    return out


@dataclass
class SendMessageParams:
    """Parameters of the message/send and message/stream methods."""

    message: Message
    configuration: Optional[SendMessageConfiguration] = None
    metadata: Optional[dict[str, Any]] = None
    rpc_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        return _message_params_dict(self.message, self.configuration, self.metadata)

    @classmethod
    def from_dict(cls, data: Any) -> SendMessageParams:
        data = _mapping(data, "send message params")
        message, config = _message_params(data)
        return cls(message=message, configuration=config, metadata=_metadata(data))


@dataclass
class SendStreamingMessageParams:
    """Parameters of the message/stream method."""

    message: Message
    configuration: Optional[SendMessageConfiguration] = None
    metadata: Optional[dict[str, Any]] = None
    id: str = ""

    def to_dict(self) -> dict[str, Any]:
        return _message_params_dict(self.message, self.configuration, self.metadata)

    @classmethod
    def from_dict(cls, data: Any) -> SendStreamingMessageParams:
        data = _mapping(data, "send streaming message params")
        message, config = _message_params(data)
        return cls(message=message, configuration=config, metadata=_metadata(data))


# --- result unions ----------------------------------------------------------

UnaryMessageResult = Union[Message, Task]
StreamingMessageResult = Union[Message, Task, TaskStatusUpdateEvent, TaskArtifactUpdateEvent]

_UNARY_TYPES: dict[str, tuple[type, str]] = {
    KIND_MESSAGE: (Message, "message"),
    KIND_TASK: (Task, "task"),
}

_STREAMING_TYPES: dict[str, tuple[type, str]] = {
    **_UNARY_TYPES,
    KIND_TASK_STATUS_UPDATE: (TaskStatusUpdateEvent, "task status update event"),
    KIND_TASK_ARTIFACT_UPDATE: (TaskArtifactUpdateEvent, "task artifact update event"),
}


def _kind_of(data: Any) -> str:
    if data is None:
        return ""
    if not isinstance(data, Mapping):
        raise DecodeError("failed to unmarshal result kind: result must be a JSON object")
    kind = data.get("kind")
    if kind is None:
        return ""
    if not isinstance(kind, str):
        raise DecodeError("failed to unmarshal result kind: kind must be a string")
    return kind


def _decode_by_kind(data: Any, table: dict[str, tuple[type, str]]) -> Any:
    kind = _kind_of(data)
    entry = table.get(kind)
    if entry is None:
        raise DecodeError(f"unsupported result kind: {kind}")
    result_type, label = entry
    try:
        return result_type.from_dict(data)
    except DecodeError as exc:
        raise DecodeError(f"failed to unmarshal {label}: {exc}") from exc


def parse_message_result(data: Any) -> UnaryMessageResult:
    """Decode the result of message/send into a Message or a Task."""
    return _decode_by_kind(data, _UNARY_TYPES)


def parse_streaming_event(data: Any) -> StreamingMessageResult:
    """Decode a streaming result, accepting it bare or wrapped in a ``Result`` field."""
    if isinstance(data, Mapping) and "Result" in data:
        data = data["Result"]
    return _decode_by_kind(data, _STREAMING_TYPES)


def dump_result(result: Any) -> dict[str, Any]:
    """Encode a message, task or task event as a JSON-ready dict."""
    kind = getattr(result, "kind", None)
    entry = _STREAMING_TYPES.get(kind) if isinstance(kind, str) else None
    if entry is None or not isinstance(result, entry[0]):
        raise ValueError(f"unsupported result kind: {kind}")
    return result.to_dict()