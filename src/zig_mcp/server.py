"""
Zig MCP Server.

JSON-RPC 2.0 MCP server for Zig code analysis and generation.
Analysis is heuristic and regex-driven; generation is template-based.

Architecture:
    Message Handler → Tool Registry → Argument Validation → Tool → Text Result
    Message Handler → Resource Registry → Static Guide | Remote Fetch

Deployment:
    - VS Code MCP extension
    - Claude Desktop
    - Any MCP-compatible client
"""

import asyncio
import json
import logging
import sys
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any, TypeAlias

from zig_mcp import tools
from zig_mcp.__version__ import __version__
from zig_mcp.errors import InvalidParamsError, ResourceFetchError, ResourceNotFoundError
from zig_mcp.generators import example_dependencies
from zig_mcp.knowledge import BUILD_BEST_PRACTICES, BUILD_TROUBLESHOOTING
from zig_mcp.models import BuildConfig, OptimizationLevel, ServerConfig, ZigDependency
from zig_mcp.remote import ZigResourceClient

# MCP Protocol version
MCP_VERSION = "2024-11-05"

# Configure logging (stderr; stdout carries JSON-RPC)
logging.basicConfig(level=logging.INFO, format="%(message)s", stream=sys.stderr)
logger = logging.getLogger(__name__)

Message: TypeAlias = dict[str, Any]
ToolHandler: TypeAlias = Callable[[dict[str, Any]], str]
ResourceReader: TypeAlias = Callable[[], Awaitable[str]]


class JSONRPCErrorCode(Enum):
    """JSON-RPC 2.0 error codes used by the server.

    Attributes:
        PARSE_ERROR: Invalid JSON received (-32700).
        INVALID_REQUEST: JSON is not a valid request object (-32600).
        METHOD_NOT_FOUND: Method or tool does not exist (-32601).
        INVALID_PARAMS: Invalid method parameters (-32602).
        INTERNAL_ERROR: Internal server or collaborator error (-32603).
        RESOURCE_NOT_FOUND: Unknown resource URI (-32002, MCP extension).
    """

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603
    RESOURCE_NOT_FOUND = -32002


OPTIMIZATION_LEVEL_SCHEMA = {
    "type": "string",
    "enum": OptimizationLevel.names(),
    "default": OptimizationLevel.RELEASE_SAFE.value,
}

TOOL_SCHEMAS: dict[str, dict[str, Any]] = {
    "optimize_code": {
        "name": "optimize_code",
        "description": (
            "Suggest optimizations for Zig code and list build advice "
            "for the chosen optimization level"
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "code": {"type": "string", "description": "Zig source code to optimize"},
                "optimizationLevel": {
                    **OPTIMIZATION_LEVEL_SCHEMA,
                    "description": "Optimization level to target",
                },
            },
            "required": ["code"],
        },
    },
    "estimate_compute_units": {
        "name": "estimate_compute_units",
        "description": (
            "Estimate memory usage, time complexity and allocation strategy of Zig code "
            "(heuristic)"
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "code": {"type": "string", "description": "Zig source code to analyze"},
            },
            "required": ["code"],
        },
    },
    "generate_code": {
        "name": "generate_code",
        "description": "Generate Zig code from a natural language description",
        "inputSchema": {
            "type": "object",
            "properties": {
                "prompt": {
                    "type": "string",
                    "description": "Natural language description of the desired code",
                },
                "context": {
                    "type": "string",
                    "description": "Additional context or requirements",
                },
            },
            "required": ["prompt"],
        },
    },
    "get_recommendations": {
        "name": "get_recommendations",
        "description": (
            "Review Zig code for style, idioms, safety, performance, concurrency, "
            "metaprogramming, testing, build, interop, metrics and language version issues"
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "code": {"type": "string", "description": "Zig source code to review"},
                "prompt": {
                    "type": "string",
                    "description": "Focus area, e.g. performance, memory, safety",
                },
            },
            "required": ["code"],
        },
    },
    "generate_build_zig": {
        "name": "generate_build_zig",
        "description": "Generate a build.zig file using the current build API",
        "inputSchema": {
            "type": "object",
            "properties": {
                "zigVersion": {
                    "type": "string",
                    "description": "Target Zig version",
                    "default": "0.12.0",
                },
                "optimizationLevel": {
                    **OPTIMIZATION_LEVEL_SCHEMA,
                    "description": "Preferred optimization level",
                },
                "targetTriple": {
                    "type": "string",
                    "description": "Default target triple, e.g. x86_64-linux-gnu",
                },
                "dependencies": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Dependency names to wire into the build",
                },
                "buildSteps": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Additional named build steps",
                },
            },
        },
    },
    "analyze_build_zig": {
        "name": "analyze_build_zig",
        "description": "Analyze a build.zig file and recommend modernizations",
        "inputSchema": {
            "type": "object",
            "properties": {
                "buildFileContent": {
                    "type": "string",
                    "description": "Content of the build.zig file",
                },
            },
            "required": ["buildFileContent"],
        },
    },
    "generate_build_zon": {
        "name": "generate_build_zon",
        "description": "Generate a build.zig.zon dependency manifest",
        "inputSchema": {
            "type": "object",
            "properties": {
                "dependencies": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "name": {"type": "string"},
                            "url": {"type": "string"},
                        },
                        "required": ["name"],
                    },
                    "description": "Dependencies to declare",
                },
                "projectName": {
                    "type": "string",
                    "description": "Package name",
                    "default": "my-project",
                },
                "version": {
                    "type": "string",
                    "description": "Package version",
                    "default": "0.1.0",
                },
            },
        },
    },
}

RESOURCES: tuple[dict[str, str], ...] = (
    {
        "uri": "zig://docs/language-reference",
        "name": "Zig Language Reference",
        "description": "Official Zig language documentation",
        "mimeType": "text/html",
    },
    {
        "uri": "zig://docs/std-lib",
        "name": "Zig Standard Library Documentation",
        "description": "Documentation for the Zig standard library",
        "mimeType": "text/html",
    },
    {
        "uri": "zig://repos/popular",
        "name": "Popular Zig Repositories",
        "description": "Most starred Zig repositories on GitHub",
        "mimeType": "application/json",
    },
    {
        "uri": "zig://guides/build-best-practices",
        "name": "Zig Build System Best Practices",
        "description": "Modern build.zig patterns, dependencies and cross-compilation",
        "mimeType": "text/markdown",
    },
    {
        "uri": "zig://guides/build-troubleshooting",
        "name": "Zig Build Troubleshooting",
        "description": "Common build errors and how to fix them",
        "mimeType": "text/markdown",
    },
    {
        "uri": "zig://examples/build-dependencies",
        "name": "Example Build Dependencies",
        "description": "Well-known Zig packages with their repository URLs",
        "mimeType": "application/json",
    },
)


# ==================== ARGUMENT VALIDATION ====================


def require_string(arguments: dict[str, Any], key: str) -> str:
    """Return a required string argument. Empty strings are valid.

    Raises:
        InvalidParamsError: Argument missing or not a string.
    """
    value = arguments.get(key)
    if not isinstance(value, str):
        raise InvalidParamsError(f"'{key}' is required and must be a string")
    return value


def optional_string(arguments: dict[str, Any], key: str, default: str | None = None) -> str | None:
    """Return an optional string argument, or ``default`` when absent or mistyped."""
    value = arguments.get(key)
    return value if isinstance(value, str) else default


def string_list(arguments: dict[str, Any], key: str) -> list[str]:
    """Return an optional list of strings (empty when absent).

    Raises:
        InvalidParamsError: Present but not a list of strings.
    """
    value = arguments.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise InvalidParamsError(f"'{key}' must be a list of strings")
    return value


def dependency_list(arguments: dict[str, Any], key: str = "dependencies") -> list[ZigDependency]:
    """Return ``[{name, url?}]`` entries as ZigDependency objects.

    Raises:
        InvalidParamsError: Not a list, or an entry without a string name.
    """
    value = arguments.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise InvalidParamsError(f"'{key}' must be a list of objects")

    dependencies = []
    for index, entry in enumerate(value):
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            raise InvalidParamsError(f"'{key}[{index}]' must be an object with a string 'name'")
        url = entry.get("url")
        dependencies.append(
            ZigDependency(name=entry["name"], url=url if isinstance(url, str) else "")
        )
    return dependencies


class ZigMCPServer:
    """MCP server for Zig code analysis and generation.

    MCP Protocol Implementation:
    - initialize: Establish connection and negotiate capabilities
    - ping: Liveness check
    - tools/list, tools/call: Advertise and execute tools
    - resources/list, resources/read: Advertise and read resources
    - notifications/*: Accepted without a response

    Attributes:
        config: Server configuration
        logger: Logger instance
        client: Remote collaborator for fetched resources
        tools: Registry of tool schemas
        handlers: Tool name to implementation
        readers: Resource URI to async reader
    """

    def __init__(
        self,
        config: ServerConfig | None = None,
        logger_instance: logging.Logger | None = None,
        client: ZigResourceClient | None = None,
    ) -> None:
        """Initialize MCP server with tool and resource registries.

        Args:
            config: Server configuration. Defaults to ServerConfig.from_env().
            logger_instance: Logger instance. Defaults to module logger.
            client: Remote client for fetched resources. Defaults to one
                built from ``config``.

        Returns:
            None - initializes instance attributes.

        Raises:
            No exceptions raised.

        Example:
            >>> server = ZigMCPServer()
            >>> server = ZigMCPServer(config=ServerConfig(max_code_size=1024))
        """
        self.config = config or ServerConfig.from_env()
        self.logger = logger_instance or logger
        self.client = client or ZigResourceClient(self.config, logger=self.logger)

        self.tools = TOOL_SCHEMAS
        self.handlers: dict[str, ToolHandler] = {
            "optimize_code": self._optimize_code,
            "estimate_compute_units": self._estimate_compute_units,
            "generate_code": self._generate_code,
            "get_recommendations": self._get_recommendations,
            "generate_build_zig": self._generate_build_zig,
            "analyze_build_zig": self._analyze_build_zig,
            "generate_build_zon": self._generate_build_zon,
        }

        self.resources = RESOURCES
        self.readers: dict[str, ResourceReader] = {
            "zig://docs/language-reference": lambda: self.client.fetch_docs("language"),
            "zig://docs/std-lib": lambda: self.client.fetch_docs("std"),
            "zig://repos/popular": self.client.fetch_popular_repos,
            "zig://guides/build-best-practices": self._static(BUILD_BEST_PRACTICES),
            "zig://guides/build-troubleshooting": self._static(BUILD_TROUBLESHOOTING),
            "zig://examples/build-dependencies": self._static(self._dependency_catalogue()),
        }

    @staticmethod
    def _static(text: str) -> ResourceReader:
        async def read() -> str:
            return text

        return read

    @staticmethod
    def _dependency_catalogue() -> str:
        catalogue = {key: dep.to_dict() for key, dep in example_dependencies().items()}
        return json.dumps(catalogue, indent=2)

    # ==================== RESPONSES ====================

    @staticmethod
    def _result(message_id: Any, result: dict[str, Any]) -> Message:
        return {"jsonrpc": "2.0", "id": message_id, "result": result}

    @staticmethod
    def _error(message_id: Any, code: JSONRPCErrorCode, message: str) -> Message:
        return {
            "jsonrpc": "2.0",
            "id": message_id,
            "error": {"code": code.value, "message": message},
        }

    # ==================== ROUTING ====================

    async def handle_message(self, message: Any) -> Message | None:
        """Route incoming JSON-RPC 2.0 messages to appropriate handlers.

        Args:
            message: Decoded JSON-RPC message. Anything other than an
                object is an invalid request.

        Returns:
            JSON-RPC 2.0 response dict, or None for notifications.

        Raises:
            No exceptions - errors returned in JSON-RPC error format.

        Example:
            >>> response = await server.handle_message({
            ...     'jsonrpc': '2.0',
            ...     'id': 1,
            ...     'method': 'tools/list'
            ... })
            >>> len(response['result']['tools'])
            7
        """
        if not isinstance(message, dict):
            return self._error(None, JSONRPCErrorCode.INVALID_REQUEST, "Invalid Request")

        method = message.get("method")
        message_id = message.get("id")
        params = message.get("params") or {}

        if not isinstance(method, str):
            return self._error(message_id, JSONRPCErrorCode.INVALID_REQUEST, "Invalid Request")

        if method.startswith("notifications/"):
            self.logger.debug(f"Notification received: {method}")
            return None

        if method == "initialize":
            return self._result(
                message_id,
                {
                    "protocolVersion": MCP_VERSION,
                    "capabilities": {"tools": {}, "resources": {}},
                    "serverInfo": {"name": "zig-mcp-server", "version": __version__},
                },
            )

        elif method == "ping":
            return self._result(message_id, {})

        elif method == "tools/list":
            return self._result(message_id, {"tools": list(self.tools.values())})

        elif method == "tools/call":
            if not isinstance(params, dict):
                return self._error(
                    message_id, JSONRPCErrorCode.INVALID_PARAMS, "params must be an object"
                )
            return await self._call_tool(
                params.get("name"), params.get("arguments") or {}, message_id
            )

        elif method == "resources/list":
            return self._result(message_id, {"resources": list(self.resources)})

        elif method == "resources/read":
            uri = params.get("uri") if isinstance(params, dict) else None
            return await self._read_resource(uri, message_id)

        else:
            return self._error(
                message_id, JSONRPCErrorCode.METHOD_NOT_FOUND, f"Unknown method: {method}"
            )

    async def _call_tool(self, name: Any, arguments: Any, message_id: Any) -> Message:
        """Validate and execute one tool call.

        Args:
            name: Tool name from the request.
            arguments: Tool argument bag.
            message_id: Request ID for response correlation.

        Returns:
            JSON-RPC 2.0 response with a single text content item or error.

        Raises:
            No exceptions - errors returned in JSON-RPC error format.
        """
        handler = self.handlers.get(name) if isinstance(name, str) else None
        if handler is None:
            return self._error(
                message_id, JSONRPCErrorCode.METHOD_NOT_FOUND, f"Unknown tool: {name}"
            )
        if not isinstance(arguments, dict):
            return self._error(
                message_id, JSONRPCErrorCode.INVALID_PARAMS, "arguments must be an object"
            )

        try:
            text = handler(arguments)
        except InvalidParamsError as e:
            self.logger.warning(f"Invalid parameters for {name}: {e}")
            return self._error(message_id, JSONRPCErrorCode.INVALID_PARAMS, str(e))
        except Exception as e:
            self.logger.exception(f"Error in {name}: {e}")
            return self._error(
                message_id, JSONRPCErrorCode.INTERNAL_ERROR, f"Internal error: {e!s}"
            )

        self.logger.debug(f"{name} returned {len(text)} characters")
        return self._result(message_id, {"content": [{"type": "text", "text": text}]})

    async def _read_resource(self, uri: Any, message_id: Any) -> Message:
        """Read one resource by URI.

        Args:
            uri: Resource URI from the request.
            message_id: Request ID for response correlation.

        Returns:
            JSON-RPC 2.0 response with a single content item or error.

        Raises:
            No exceptions - errors returned in JSON-RPC error format.
        """
        if not isinstance(uri, str):
            return self._error(
                message_id,
                JSONRPCErrorCode.INVALID_PARAMS,
                "'uri' is required and must be a string",
            )

        try:
            reader = self.readers.get(uri)
            if reader is None:
                raise ResourceNotFoundError(uri)
            text = await reader()
        except ResourceNotFoundError as e:
            return self._error(message_id, JSONRPCErrorCode.RESOURCE_NOT_FOUND, str(e))
        except ResourceFetchError as e:
            return self._error(message_id, JSONRPCErrorCode.INTERNAL_ERROR, str(e))
        except Exception as e:
            self.logger.exception(f"Error reading resource {uri}: {e}")
            return self._error(
                message_id, JSONRPCErrorCode.INTERNAL_ERROR, f"Internal error: {e!s}"
            )

        mime_type = next(r["mimeType"] for r in self.resources if r["uri"] == uri)
        return self._result(
            message_id, {"contents": [{"uri": uri, "mimeType": mime_type, "text": text}]}
        )

    # ==================== TOOLS ====================

    def _code(self, arguments: dict[str, Any], key: str = "code") -> str:
        """Required source argument, bounded by ``max_code_size``."""
        code = require_string(arguments, key)
        max_size = self.config.max_code_size
        if len(code) > max_size:
            raise InvalidParamsError(f"Code too large (max {max_size // 1024}KB)")
        return code

    def _optimize_code(self, arguments: dict[str, Any]) -> str:
        return tools.optimize_code(self._code(arguments), arguments.get("optimizationLevel"))

    def _estimate_compute_units(self, arguments: dict[str, Any]) -> str:
        return tools.estimate_compute_units(self._code(arguments))

    def _generate_code(self, arguments: dict[str, Any]) -> str:
        prompt = require_string(arguments, "prompt")
        return tools.generate_code(prompt, optional_string(arguments, "context"))

    def _get_recommendations(self, arguments: dict[str, Any]) -> str:
        return tools.get_recommendations(
            self._code(arguments), optional_string(arguments, "prompt")
        )

    def _generate_build_zig(self, arguments: dict[str, Any]) -> str:
        level = arguments.get("optimizationLevel")
        if isinstance(level, str) and level not in OptimizationLevel.names():
            raise InvalidParamsError(
                f"Unknown optimizationLevel '{level}' "
                f"(expected one of {', '.join(OptimizationLevel.names())})"
            )
        config = BuildConfig(
            zig_version=optional_string(arguments, "zigVersion", self.config.default_zig_version),
            optimization_level=OptimizationLevel.parse(level),
            target_triple=optional_string(arguments, "targetTriple") or None,
            dependencies={name: name for name in string_list(arguments, "dependencies")},
            build_steps=string_list(arguments, "buildSteps"),
        )
        return tools.generate_build_zig(config)

    def _analyze_build_zig(self, arguments: dict[str, Any]) -> str:
        return tools.analyze_build_zig(self._code(arguments, "buildFileContent"))

    def _generate_build_zon(self, arguments: dict[str, Any]) -> str:
        return tools.generate_build_zon(
            dependency_list(arguments),
            project_name=optional_string(arguments, "projectName", "my-project"),
            version=optional_string(arguments, "version", "0.1.0"),
        )

    # ==================== TRANSPORT ====================

    async def handle_line(self, line: str) -> Message | None:
        """Decode one stdin line and handle it.

        Args:
            line: Raw line (surrounding whitespace ignored).

        Returns:
            Response to write, or None for blank lines and notifications.
        """
        line = line.strip()
        if not line:
            return None
        try:
            message = json.loads(line)
        except json.JSONDecodeError as e:
            self.logger.error(f"Invalid JSON: {e}")
            return self._error(None, JSONRPCErrorCode.PARSE_ERROR, "Parse error")
        return await self.handle_message(message)

    async def run(self) -> None:  # pragma: no cover
        """Execute MCP server stdio event loop.

        Reads JSON-RPC messages from stdin line by line and writes
        responses to stdout. Runs until EOF.

        Args:
            None - uses stdin/stdout for communication.

        Returns:
            None - runs until terminated.

        Raises:
            No exceptions - errors logged and loop exits.
        """
        self.logger.info("Zig MCP server running on stdio")
        self.logger.debug(f"Configuration: {self.config.to_dict()}")

        while True:
            try:
                line = await asyncio.get_event_loop().run_in_executor(None, sys.stdin.readline)

                if not line:
                    self.logger.info("EOF detected, shutting down")
                    break

                response = await self.handle_line(line)
                if response is not None:
                    print(json.dumps(response), flush=True)

            except Exception as e:
                self.logger.error(f"Error processing message: {e}")
                break


def configure_logging(config: ServerConfig) -> None:
    """Apply the configured log level to the root logger."""
    level = logging.getLevelNamesMapping().get(config.log_level, logging.INFO)
    logging.getLogger().setLevel(level)


async def main() -> None:  # pragma: no cover
    """Entry point for MCP server process.

    Example:
        >>> # From command line:
        >>> # python -m zig_mcp.server
    """
    config = ServerConfig.from_env()
    configure_logging(config)
    server = ZigMCPServer(config=config)
    await server.run()


if __name__ == "__main__":  # pragma: no cover
    asyncio.run(main())
