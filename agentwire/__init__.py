"""Agent-to-agent protocol types, JSON-RPC envelopes, SSE helpers and logging."""

__version__ = "0.1.0"

__all__ = ["log", "protocol", "parts", "models", "jsonrpc", "sse"]