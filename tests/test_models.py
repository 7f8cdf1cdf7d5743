import json
from datetime import datetime

import pytest

from agentwire.models import (
    APIKeyAuthInfo,
    Artifact,
    JWTAuthInfo,
    Message,
    OAuth2AuthInfo,
    PushNotificationAuthenticationInfo,
    PushNotificationConfig,
    SendMessageConfiguration,
    SendMessageParams,
    SendStreamingMessageParams,
    Task,
    TaskArtifactUpdateEvent,
    TaskIDParams,
    TaskPushNotificationConfig,
    TaskQueryParams,
    TaskStatus,
    TaskStatusUpdateEvent,
    dump_result,
    parse_message_result,
    parse_streaming_event,
)
from agentwire.parts import DataPart, DecodeError, FilePart, FileWithBytes, TextPart
from agentwire.protocol import MessageRole, TaskState


def _roundtrip(obj):
    return json.loads(json.dumps(obj.to_dict()))


def _status_event(state, final):
    return TaskStatusUpdateEvent(
        task_id="", context_id="", status=TaskStatus(state=state), final=final
    )


@pytest.mark.parametrize(
    "event, expected",
    [
        (_status_event(TaskState.SUBMITTED, False), False),
        (_status_event(TaskState.WORKING, False), False),
        (_status_event(TaskState.COMPLETED, True), True),
        (_status_event(TaskState.FAILED, True), True),
        (_status_event(TaskState.CANCELED, True), True),
        (_status_event(TaskState.REJECTED, True), True),
        (_status_event(TaskState.AUTH_REQUIRED, False), False),
        (TaskArtifactUpdateEvent(task_id="", context_id="", artifact=Artifact()), False),
        (
            TaskArtifactUpdateEvent(
                task_id="", context_id="", artifact=Artifact(), last_chunk=True
            ),
            True,
        ),
    ],
)
def test_event_is_final(event, expected):
    assert event.is_final() is expected


def test_message_decodes_polymorphic_parts():
    data = json.loads(
        """{
        "role": "user",
        "parts": [
            {"kind": "text", "text": "part1"},
            {"kind": "data", "data": {"val": true}},
            {"kind": "text", "text": "part3"}
        ]
    }"""
    )
    msg = Message.from_dict(data)
    assert len(msg.parts) == 3
    assert isinstance(msg.parts[0], TextPart)
    assert msg.parts[0].text == "part1"
    assert isinstance(msg.parts[1], DataPart)
    assert msg.parts[1].data == {"val": True}
    assert isinstance(msg.parts[2], TextPart)
    assert msg.parts[2].text == "part3"


def test_message_json_roundtrip_with_file_part():
    original = Message(
        MessageRole.USER,
        [
            TextPart("Hello, world!"),
            FilePart.with_bytes("example.txt", "text/plain", "File content"),
        ],
    )
    decoded = Message.from_dict(_roundtrip(original))
    assert decoded.role is MessageRole.USER
    assert len(decoded.parts) == 2
    assert isinstance(decoded.parts[0], TextPart)
    assert decoded.parts[0].kind == "text"
    assert decoded.parts[0].text == "Hello, world!"
    file_part = decoded.parts[1]
    assert isinstance(file_part, FilePart)
    assert file_part.kind == "file"
    assert isinstance(file_part.file, FileWithBytes)
    assert file_part.file.name == "example.txt"
    assert file_part.file.mime_type == "text/plain"
    assert file_part.file.bytes == "File content"
    assert decoded == original


def test_message_marshal_without_kind_roundtrips():
    message = Message(role=MessageRole.USER, parts=[TextPart("Hello")])
    encoded = message.to_dict()
    assert encoded["kind"] == "message"
    decoded = Message.from_dict(encoded)
    assert len(decoded.parts) == 1
    assert decoded.parts[0] == TextPart("Hello")


def test_message_unmarshal_text_and_file():
    data = {
        "role": "user",
        "parts": [
            {"kind": "text", "text": "Hello"},
            {
                "kind": "file",
                "file": {"name": "test.txt", "mimeType": "text/plain", "bytes": "SGVsbG8="},
            },
        ],
    }
    message = Message.from_dict(data)
    assert message.role is MessageRole.USER
    assert message.parts[0].text == "Hello"
    assert message.parts[1].file.name == "test.txt"
    assert message.message_id == ""


def test_message_bad_part_error_is_wrapped():
    with pytest.raises(DecodeError, match="failed to unmarshal part 1: unsupported part kind: video"):
        Message.from_dict({"role": "user", "parts": [{"kind": "text", "text": "a"}, {"kind": "video"}]})


def test_message_unknown_role_kept_as_string():
    assert Message.from_dict({"role": "system", "parts": []}).role == "system"


def test_new_message_defaults():
    parts = [TextPart("Hello")]
    message = Message(MessageRole.USER, parts)
    assert message.role is MessageRole.USER
    assert message.parts == parts
    assert message.message_id.startswith("msg-")
    assert len(message.message_id) == 40
    assert message.kind == "message"
    assert message.task_id is None
    assert message.context_id is None
    assert Message(MessageRole.USER, parts).message_id != message.message_id


def test_new_message_with_context():
    parts = [TextPart("Hello")]
    message = Message(MessageRole.AGENT, parts, task_id="task-123", context_id="ctx-456")
    assert message.role is MessageRole.AGENT
    assert message.parts == parts
    assert message.message_id.startswith("msg-")
    encoded = message.to_dict()
    assert encoded["taskId"] == "task-123"
    assert encoded["contextId"] == "ctx-456"
    assert encoded["role"] == "agent"


def test_artifact_roundtrip():
    artifact = Artifact(
        name="Test Artifact",
        description="This is a test artifact",
        parts=[TextPart("Artifact content")],
    )
    assert artifact.name == "Test Artifact"
    assert artifact.description == "This is a test artifact"
    assert len(artifact.parts) == 1
    assert artifact.artifact_id.startswith("artifact-")
    assert artifact.metadata == {}

    decoded = Artifact.from_dict(_roundtrip(artifact))
    assert decoded.name == artifact.name
    assert decoded.description == artifact.description
    assert decoded.artifact_id == artifact.artifact_id
    assert decoded.parts == [TextPart("Artifact content")]


def test_artifact_bad_part_error_is_wrapped():
    with pytest.raises(DecodeError, match="failed to unmarshal artifact part 0"):
        Artifact.from_dict({"artifactId": "a", "parts": [{"kind": "nope"}]})


def test_task_status_with_message():
    now = "2025-01-02T03:04:05Z"
    status = TaskStatus(state=TaskState.COMPLETED, timestamp=now)
    status.message = Message(MessageRole.AGENT, [TextPart("Task completed successfully")])
    encoded = status.to_dict()
    assert encoded["state"] == "completed"
    assert encoded["timestamp"] == now
    decoded = TaskStatus.from_dict(encoded)
    assert decoded.state is TaskState.COMPLETED
    assert decoded.message.role is MessageRole.AGENT


def test_task_new():
    task = Task.new("test-task", "test-context-123")
    assert task.id == "test-task"
    assert task.context_id == "test-context-123"
    assert task.status.state is TaskState.SUBMITTED
    assert task.status.timestamp.endswith("Z")
    datetime.strptime(task.status.timestamp, "%Y-%m-%dT%H:%M:%SZ")
    assert task.metadata == {}
    assert task.artifacts is None
    encoded = task.to_dict()
    assert encoded["kind"] == "task"
    assert "metadata" not in encoded
    assert "artifacts" not in encoded


def test_artifact_event_encoding():
    event = TaskArtifactUpdateEvent(
        task_id="t", context_id="c", artifact=Artifact(artifact_id="a"), last_chunk=True, append=False
    )
    encoded = event.to_dict()
    assert encoded == {
        "append": False,
        "artifact": {"artifactId": "a", "parts": []},
        "contextId": "c",
        "kind": "artifact-update",
        "lastChunk": True,
        "taskId": "t",
    }
    assert TaskArtifactUpdateEvent.from_dict(encoded) == TaskArtifactUpdateEvent(
        task_id="t",
        context_id="c",
        artifact=Artifact(artifact_id="a", metadata=None),
        last_chunk=True,
        append=False,
    )


def test_parse_message_result_dispatches_on_kind():
    msg = parse_message_result({"kind": "message", "role": "agent", "messageId": "m", "parts": []})
    assert isinstance(msg, Message)
    assert msg.message_id == "m"
    task = parse_message_result(
        {"kind": "task", "id": "t", "contextId": "c", "status": {"state": "completed"}}
    )
    assert isinstance(task, Task)
    assert task.status.state is TaskState.COMPLETED


def test_parse_message_result_rejects_event_kinds():
    with pytest.raises(DecodeError, match="unsupported result kind: status-update"):
        parse_message_result({"kind": "status-update"})


def test_parse_streaming_event_wrapped_and_bare():
    payload = {
        "kind": "status-update",
        "taskId": "t",
        "contextId": "c",
        "final": True,
        "status": {"state": "completed"},
    }
    wrapped = parse_streaming_event({"Result": payload})
    bare = parse_streaming_event(payload)
    assert isinstance(wrapped, TaskStatusUpdateEvent)
    assert wrapped == bare
    assert wrapped.is_final() is True


def test_parse_streaming_event_unknown_kind():
    with pytest.raises(DecodeError, match="unsupported result kind: bogus"):
        parse_streaming_event({"kind": "bogus"})


def test_parse_streaming_event_wraps_inner_error():
    with pytest.raises(DecodeError, match="failed to unmarshal message"):
        parse_streaming_event({"kind": "message", "parts": "oops"})


def test_dump_result_roundtrip():
    event = TaskStatusUpdateEvent(
        task_id="t", context_id="c", status=TaskStatus(state=TaskState.WORKING)
    )
    assert parse_streaming_event(dump_result(event)) == event


def test_dump_result_rejects_unknown():
    with pytest.raises(ValueError, match="unsupported result kind"):
        dump_result(TextPart("x"))


def test_send_message_configuration_encoding():
    config = SendMessageConfiguration(accepted_output_modes=["text"], blocking=False)
    assert config.to_dict() == {"acceptedOutputModes": ["text"], "blocking": False}
    assert SendMessageConfiguration.from_dict(config.to_dict()) == config


def test_send_message_params_roundtrip():
    params = SendMessageParams(
        message=Message(MessageRole.USER, [TextPart("hi")], message_id="m1"),
        configuration=SendMessageConfiguration(
            accepted_output_modes=["text"],
            history_length=3,
            push_notification_config=PushNotificationConfig(url="https://example.com/hook"),
        ),
        metadata={"a": "b"},
        rpc_id="rpc-1",
    )
    encoded = _roundtrip(params)
    assert "rpc_id" not in encoded and "rpcId" not in encoded
    decoded = SendMessageParams.from_dict(encoded)
    assert decoded.rpc_id == ""
    assert decoded.message == params.message
    assert decoded.configuration == params.configuration
    assert decoded.metadata == {"a": "b"}


def test_send_streaming_params_roundtrip():
    params = SendStreamingMessageParams(
        message=Message(MessageRole.USER, [TextPart("hi")], message_id="m2"), id="x"
    )
    encoded = params.to_dict()
    assert encoded == {
        "message": {"kind": "message", "messageId": "m2", "parts": [{"kind": "text", "text": "hi"}], "role": "user"}
    }
    assert SendStreamingMessageParams.from_dict(encoded).message == params.message


def test_push_notification_config_encoding():
    config = PushNotificationConfig(
        url="https://example.com/hook",
        token="token",
        authentication=PushNotificationAuthenticationInfo(schemes=["Bearer"]),
    )
    assert config.to_dict() == {
        "authentication": {"schemes": ["Bearer"]},
        "token": "token",
        "url": "https://example.com/hook",
    }
    wrapped = TaskPushNotificationConfig(task_id="t1", push_notification_config=config)
    assert wrapped.to_dict() == {"pushNotificationConfig": config.to_dict(), "taskId": "t1"}
    assert TaskPushNotificationConfig.from_dict(_roundtrip(wrapped)) == wrapped


def test_auth_infos_omit_empty_fields():
    oauth = OAuth2AuthInfo(client_id="client", scopes=["read"])
    assert oauth.to_dict() == {"clientId": "client", "scopes": ["read"]}
    assert OAuth2AuthInfo.from_dict(oauth.to_dict()) == oauth

    jwt = JWTAuthInfo(token="token", audience="agents")
    assert jwt.to_dict() == {"token": "token", "audience": "agents"}
    assert JWTAuthInfo.from_dict(jwt.to_dict()) == jwt

    api = APIKeyAuthInfo(key="placeholder", header_name="X-API-Key", location="header")
    assert api.to_dict() == {"key": "placeholder", "headerName": "X-API-Key", "location": "header"}
    assert APIKeyAuthInfo.from_dict(api.to_dict()) == api


def test_task_query_params():
    params = TaskQueryParams(id="t", history_length=5)
    assert params.to_dict() == {"id": "t", "historyLength": 5}
    assert TaskQueryParams.from_dict({"id": "t", "historyLength": 5}) == params
    with pytest.raises(DecodeError):
        TaskQueryParams.from_dict({"id": "t", "historyLength": "5"})


def test_task_id_params():
    params = TaskIDParams(id="t", metadata={"x": 1})
    assert params.to_dict() == {"id": "t", "metadata": {"x": 1}}
    assert TaskIDParams.from_dict(params.to_dict()) == params
    with pytest.raises(DecodeError):
        TaskIDParams.from_dict(["t"])