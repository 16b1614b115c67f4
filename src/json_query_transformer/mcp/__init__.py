"""JSON-RPC (MCP) front-end."""

from .server import McpServer, TOOL_NAME, PROTOCOL_VERSION

__all__ = ["McpServer", "TOOL_NAME", "PROTOCOL_VERSION"]
