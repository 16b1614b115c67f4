"""
Line-delimited JSON-RPC 2.0 server exposing the transformer as an MCP tool.

One request per line on stdin, one response per line on stdout. Lines are
handled one at a time in arrival order; logs go to stderr only.
"""

import io
import json
import logging
import sys
from typing import Any, BinaryIO, Callable, Dict, IO, Optional

from .. import __version__
from ..config import ServiceConfig
from ..engines import create_engine
from ..envelope import build_envelope
from ..transformer import QueryTransformer
from ..types import TransformRequest
from ..utils.log_setup import setup_logging

PROTOCOL_VERSION = "2024-11-05"
TOOL_NAME = "jq_transform"

# JSON-RPC 2.0 error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

TOOL_DEFINITION = {
    "name": TOOL_NAME,
    "description": ("Transform JSON data using a jq query. Provide JSON data and a jq "
                    "program to filter, map or restructure the data."),
    "inputSchema": {
        "type": "object",
        "properties": {
            "jsonData": {
                "description": "JSON data to transform (as JSON text or a JSON value)",
            },
            "query": {
                "type": "string",
                "description": "jq transformation query",
            },
            "prettyPrint": {
                "type": "boolean",
                "description": "Format string output with indentation",
                "default": False,
            },
            "returnAsString": {
                "type": "boolean",
                "description": "Return the result as JSON text instead of a value",
                "default": False,
            },
        },
        "required": ["jsonData", "query"],
    },
}


def text_stream(binary: BinaryIO) -> IO[str]:
    """Decode a byte stream as UTF-8, replacing undecodable bytes."""
    return io.TextIOWrapper(binary, encoding="utf-8", errors="replace")


class InvalidParams(Exception):
    """Raised by handlers when request params are unusable."""


class McpServer:
    """
    JSON-RPC dispatcher for the MCP methods the transformer supports.

    ``handle_request`` maps a decoded request to a response dictionary, or to
    ``None`` for notifications that take no reply.
    """

    def __init__(self, transformer: Optional[QueryTransformer] = None,
                 config: Optional[ServiceConfig] = None,
                 logger: Optional[logging.Logger] = None):
        self.config = config or ServiceConfig()
        self.transformer = transformer or QueryTransformer()
        self.logger = logger or logging.getLogger(__name__)
        self.handlers: Dict[str, Callable[[Any, Any], Optional[Dict[str, Any]]]] = {
            "initialize": self.handle_initialize,
            "notifications/initialized": self.handle_initialized,
            "tools/list": self.handle_tools_list,
            "tools/call": self.handle_tools_call,
        }

    def serve(self, stdin: IO[str], stdout: IO[str]) -> None:
        """
        Serve requests until the input stream closes.

        Args:
            stdin: Stream of request lines
            stdout: Stream receiving response lines
        """
        self.logger.info("Starting MCP server with stdio transport")
        for line in stdin:
            try:
                response = self.handle_line(line)
            except Exception as e:
                self.logger.exception("Unhandled error while processing request line")
                response = self.error_response(None, INTERNAL_ERROR, "Internal error", str(e))
            if response is not None:
                stdout.write(json.dumps(response, ensure_ascii=False) + "\n")
                stdout.flush()
        self.logger.info("Input stream closed, MCP server stopping")

    def handle_line(self, line: str) -> Optional[Dict[str, Any]]:
        """
        Decode and handle one line of input.

        Args:
            line: Raw request line

        Returns:
            Response dictionary, or None for blank lines and notifications
        """
        line = line.strip()
        if not line:
            return None

        try:
            request = json.loads(line)
        except (json.JSONDecodeError, RecursionError) as e:
            self.logger.warning(f"Unparsable request line: {e}")
            return self.error_response(None, PARSE_ERROR, "Parse error", str(e))

        return self.handle_request(request)

    def handle_request(self, request: Any) -> Optional[Dict[str, Any]]:
        """
        Dispatch a decoded JSON-RPC request by method name.

        Args:
            request: Decoded JSON value

        Returns:
            Response dictionary, or None for notifications
        """
        if not isinstance(request, dict):
            return self.error_response(None, INVALID_REQUEST, "Invalid Request",
                                       "Request must be a JSON object")

        request_id = request.get("id")
        method = request.get("method")
        params = request.get("params")

        self.logger.debug(f"Handling MCP request: method={method}, id={request_id}")

        if not isinstance(method, str):
            return self.error_response(request_id, INVALID_REQUEST, "Invalid Request",
                                       "Request method must be a string")

        handler = self.handlers.get(method)
        if handler is None:
            return self.error_response(request_id, METHOD_NOT_FOUND, "Method not found",
                                       f"Unknown method: {method}")

        try:
            return handler(params, request_id)
        except InvalidParams as e:
            return self.error_response(request_id, INVALID_PARAMS, "Invalid params", str(e))
        except Exception as e:
            self.logger.exception(f"Error handling MCP method: {method}")
            return self.error_response(request_id, INTERNAL_ERROR, "Internal error", str(e))

    def handle_initialize(self, params: Any, request_id: Any) -> Dict[str, Any]:
        return self.success_response(request_id, {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"tools": {"listChanged": False}},
            "serverInfo": {"name": self.config.mcp_server_name, "version": __version__},
        })

    def handle_initialized(self, params: Any, request_id: Any) -> None:
        self.logger.info("MCP client initialized successfully")
        return None

    def handle_tools_list(self, params: Any, request_id: Any) -> Dict[str, Any]:
        return self.success_response(request_id, {"tools": [TOOL_DEFINITION]})

    def handle_tools_call(self, params: Any, request_id: Any) -> Dict[str, Any]:
        """
        Validate a ``tools/call`` request and run the transformation.

        Args:
            params: ``{"name": ..., "arguments": {...}}``
            request_id: JSON-RPC id to echo

        Returns:
            Response whose result holds the envelope as MCP text content

        Raises:
            InvalidParams: For unknown tools or missing arguments
        """
        if not isinstance(params, dict):
            raise InvalidParams("params must be an object")

        tool_name = params.get("name")
        if tool_name != TOOL_NAME:
            raise InvalidParams(f"Unknown tool: {tool_name}")

        arguments = params.get("arguments")
        if not isinstance(arguments, dict):
            raise InvalidParams("arguments must be an object")

        json_data = arguments.get("jsonData")
        query = arguments.get("query")
        if json_data is None or json_data == "" or not isinstance(query, str) or not query.strip():
            raise InvalidParams("Missing required parameters: jsonData and query")

        request = TransformRequest(
            data=json_data,
            query=query,
            pretty_print=bool(arguments.get("prettyPrint", False)),
            return_as_string=bool(arguments.get("returnAsString", False)),
            data_is_text=isinstance(json_data, str)
        )
        result = self.transformer.transform(request)
        envelope = build_envelope(self.transformer, request, result)

        self.logger.info(f"{TOOL_NAME} completed - success: {envelope.success}, "
                         f"time: {envelope.processing_time_ms}ms")

        return self.success_response(request_id, {
            "content": [{
                "type": "text",
                "text": json.dumps(envelope.to_dict(), ensure_ascii=False),
            }],
            "isError": not envelope.success,
        })

    @staticmethod
    def success_response(request_id: Any, result: Any) -> Dict[str, Any]:
        return {"jsonrpc": "2.0", "id": request_id, "result": result}

    @staticmethod
    def error_response(request_id: Any, code: int, message: str,
                       data: Optional[str] = None) -> Dict[str, Any]:
        error: Dict[str, Any] = {"code": code, "message": message}
        if data is not None:
            error["data"] = data
        return {"jsonrpc": "2.0", "id": request_id, "error": error}


def main():
    """Run the MCP server on stdin/stdout."""

    config = ServiceConfig.from_env()
    setup_logging(config.log_level)
    server = McpServer(
        transformer=QueryTransformer(engine=create_engine(config.engine)),
        config=config
    )
    server.serve(text_stream(sys.stdin.buffer), sys.stdout)


if __name__ == "__main__":
    main()
