"""Protocol constants, enumerations and identifier generators."""

from __future__ import annotations

import uuid
from enum import Enum

__all__ = [
    "METHOD_MESSAGE_SEND",
    "METHOD_MESSAGE_STREAM",
    "METHOD_TASKS_GET",
    "METHOD_TASKS_CANCEL",
    "METHOD_TASKS_PUSH_NOTIFICATION_CONFIG_SET",
    "METHOD_TASKS_PUSH_NOTIFICATION_CONFIG_GET",
    "METHOD_TASKS_RESUBSCRIBE",
    "METHOD_AGENT_AUTHENTICATED_EXTENDED_CARD",
    "EVENT_STATUS_UPDATE",
    "EVENT_ARTIFACT_UPDATE",
    "EVENT_TASK",
    "EVENT_MESSAGE",
    "EVENT_CLOSE",
    "AGENT_CARD_PATH",
    "JWKS_PATH",
    "DEFAULT_JSONRPC_PATH",
    "KIND_MESSAGE",
    "KIND_TASK",
    "KIND_TASK_STATUS_UPDATE",
    "KIND_TASK_ARTIFACT_UPDATE",
    "KIND_DATA",
    "KIND_FILE",
    "KIND_TEXT",
    "TaskState",
    "MessageRole",
    "generate_message_id",
    "generate_context_id",
    "generate_task_id",
    "generate_artifact_id",
    "generate_rpc_id",
]

# RPC method names.
METHOD_MESSAGE_SEND = "message/send"
METHOD_MESSAGE_STREAM = "message/stream"
METHOD_TASKS_GET = "tasks/get"
METHOD_TASKS_CANCEL = "tasks/cancel"
METHOD_TASKS_PUSH_NOTIFICATION_CONFIG_SET = "tasks/pushNotificationConfig/set"
METHOD_TASKS_PUSH_NOTIFICATION_CONFIG_GET = "tasks/pushNotificationConfig/get"
METHOD_TASKS_RESUBSCRIBE = "tasks/resubscribe"
METHOD_AGENT_AUTHENTICATED_EXTENDED_CARD = "agent/getAuthenticatedExtendedCard"

# Server-sent event types.
EVENT_STATUS_UPDATE = "task_status_update"
EVENT_ARTIFACT_UPDATE = "task_artifact_update"
EVENT_TASK = "task"
EVENT_MESSAGE = "message"
EVENT_CLOSE = "close"

# HTTP endpoint paths.
AGENT_CARD_PATH = "/.well-known/agent-card.json"
JWKS_PATH = "/.well-known/jwks.json"
DEFAULT_JSONRPC_PATH = "/"

# Kind discriminators.
KIND_MESSAGE = "message"
KIND_TASK = "task"
KIND_TASK_STATUS_UPDATE = "status-update"
KIND_TASK_ARTIFACT_UPDATE = "artifact-update"
KIND_DATA = "data"
KIND_FILE = "file"
KIND_TEXT = "text"


class TaskState(str, Enum):
    """Lifecycle state of a task."""

    SUBMITTED = "submitted"
    WORKING = "working"
    INPUT_REQUIRED = "input-required"
    COMPLETED = "completed"
    CANCELED = "canceled"
    FAILED = "failed"
    REJECTED = "rejected"
    AUTH_REQUIRED = "auth-required"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


class MessageRole(str, Enum):
    """Originator of a message."""

    USER = "user"
    AGENT = "agent"

    def __str__(self) -> str:
        return self.value


def generate_message_id() -> str:
    """Return a new unique message ID."""
    return f"msg-{uuid.uuid4()}"


def generate_context_id() -> str:
    """Return a new unique context ID."""
    return f"ctx-{uuid.uuid4()}"


def generate_task_id() -> str:
    """Return a new unique task ID."""
    return f"task-{uuid.uuid4()}"


def generate_artifact_id() -> str:
    """Return a new unique artifact ID."""
    return f"artifact-{uuid.uuid4()}"


def generate_rpc_id() -> str:
    """Return a new unique JSON-RPC request ID."""
    return str(uuid.uuid4())