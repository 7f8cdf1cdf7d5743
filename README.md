# agentwire

Building blocks for agent-to-agent (A2A) messaging. The package contains:

- `agentwire.protocol`: method names, event types, endpoint paths, the
  `TaskState` and `MessageRole` enumerations, and ID generators;
- `agentwire.parts`: message parts (text, file and structured data);
- `agentwire.models`: messages, artifacts, tasks, status and artifact update
  events, push-notification configuration, and RPC parameters;
- `agentwire.jsonrpc`: JSON-RPC 2.0 request and response envelopes and the
  standard error codes;
- `agentwire.sse`: reading and writing Server-Sent Events streams;
- `agentwire.log`: a small logging front end with a replaceable default logger.

It uses only the standard library.

## Installation

From a checkout of the project:

```
pip install .
```

## Messages and parts

```python
from agentwire.models import Message
from agentwire.parts import TextPart, FilePart, DataPart, part_from_dict
from agentwire.protocol import MessageRole

message = Message(
    role=MessageRole.USER,
    parts=[
        TextPart("Hello, world!"),
        FilePart.with_bytes("example.txt", "text/plain", "SGVsbG8="),
        DataPart({"key": "value"}),
    ],
)

payload = message.to_dict()
same = Message.from_dict(payload)
```

A new `Message` gets a generated `message_id` unless you pass one.
`to_dict` uses the protocol's camelCase keys and leaves out fields that are
unset or empty.

`part_from_dict` chooses the part class from the `kind` field (`text`, `file`
or `data`). It raises `DecodeError` (a `ValueError`) for any other kind. A file
part's content is a `FileWithBytes` when the payload has a `bytes` field and a
`FileWithURI` when it has a `uri` field. If it has neither, `file_from_dict`
raises `DecodeError`.

## Tasks and events

```python
from agentwire.models import Task, parse_streaming_event, dump_result

task = Task.new("task-1", "ctx-1")          # starts in the "submitted" state
event = parse_streaming_event(task.to_dict())
assert dump_result(event) == task.to_dict()
```

`Task.new` stamps the status with the current UTC time in RFC 3339 form.

`parse_message_result` accepts a message or a task. `parse_streaming_event`
also accepts status-update and artifact-update events. It takes them either
on their own or wrapped in a `{"Result": ...}` object. Both functions raise
`DecodeError` for an unsupported `kind`. `dump_result` raises `ValueError`
for anything that is not one of these four types.

`TaskStatusUpdateEvent.is_final()` returns the event's `final` flag.
`TaskArtifactUpdateEvent.is_final()` returns whether `last_chunk` is `True`.

## Identifiers

`generate_message_id()`, `generate_context_id()`, `generate_task_id()` and
`generate_artifact_id()` return random UUIDs with the prefixes `msg-`, `ctx-`,
`task-` and `artifact-`. `generate_rpc_id()` returns a UUID with no prefix.

## JSON-RPC

```python
from agentwire.jsonrpc import new_request, new_response, invalid_params, new_error_response, Response

request = new_request("message/send", "req-1")
print(request.to_json())

ok = new_response("req-1", {"status": "ok"})
failed = new_error_response("req-1", invalid_params("missing field 'name'"))
print(failed.to_json())

decoded = Response.from_json(failed.to_json())
assert decoded.error == failed.error
```

If `new_request` gets an empty ID, it generates one. An `id` of `None` is
left out of the output, which makes a request a notification. `JSONRPCError`
is an exception. Its string form is `jsonrpc error <code>: <message>`. The
helpers `parse_error`, `invalid_request`, `method_not_found`,
`invalid_params` and `internal_error` build the standard errors.

## Server-Sent Events

```python
import io
from agentwire.sse import EventReader, format_event

buffer = io.StringIO()
format_event(buffer, "message", {"text": "hi"})

for event in EventReader(io.StringIO(buffer.getvalue())):
    print(event.event_type, event.data)
```

`EventReader` accepts any iterable of `str` or `bytes` lines, such as a text
or binary file object. `read_event()` returns `None` once the stream is
exhausted. It raises `SSEError` when a line is longer than `max_line_size`.
Lines without a known field prefix are logged as warnings and kept as data.

`format_event` writes to text or binary writers. It raises `SSEError` when the
data cannot be encoded as JSON. `format_jsonrpc_event_batch` wraps each
`EventBatch` in a JSON-RPC envelope and writes the whole batch in a single
call.

## Logging

`agentwire.log` has module-level `debug`/`info`/`warn`/`error`/`fatal`
functions. Each has an `...f` variant that takes a %-style format string.
Every call goes to the default logger, which writes to standard output at INFO
level. Its `fatal` calls raise `SystemExit(1)` after logging. To send records
elsewhere, pass any object with the same methods to `set_default`. It returns
the previous logger.

## What the package does not include

There is no HTTP client or server, no task manager or task storage, and no
agent card type. The package provides only the data model, the wire formats
and the stream helpers that such components would build on.

## Running the tests

```
pip install ".[test]"
pytest
```