# The module wires the registries to the MCP protocol (stdio transport).
# Version: 0.1.0

import json
from typing import Any, Dict, Iterable, List, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from postgsail_mcp.core.errors import PostgSailError
from postgsail_mcp.core.prompts import PromptRegistry
from postgsail_mcp.core.resources import ResourceRegistry
from postgsail_mcp.core.tool_registry import ToolRegistry
from postgsail_mcp.services.postgsail_client import PostgSailClient
from postgsail_mcp.utils.logger import console

SERVER_NAME = "postgsail-server"
SERVER_VERSION = "0.1.0"


class PostgSailServer:
    """
    Implements the six MCP request handlers on top of the tool, prompt and
    resource registries.

    Tool failures are returned as content with isError set. Unknown resources
    and prompts are protocol errors (McpError), since the protocol tells
    "the operation failed" apart from "this does not exist".
    """

    def __init__(self, client: PostgSailClient,
                 prompts: Optional[PromptRegistry] = None,
                 resources: Optional[ResourceRegistry] = None):
        self.client = client
        self.tool_registry = ToolRegistry(client)
        self.prompts = prompts or PromptRegistry()
        self.resources = resources or ResourceRegistry()

    # --- Tools ---
    async def list_tools(self) -> List[types.Tool]:
        tools = []
        for definition in self.tool_registry.get_definitions():
            meta = {"outputSchema": definition["outputSchema"]} if "outputSchema" in definition else None
            tools.append(types.Tool(
                name=definition["name"],
                title=definition["title"],
                description=definition["description"],
                inputSchema=definition["inputSchema"],
                annotations=types.ToolAnnotations(readOnlyHint=True, idempotentHint=True),
                _meta=meta,
            ))
        return tools

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> types.CallToolResult:
        result = await self.tool_registry.dispatch(name, arguments)
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=result.content)],
            isError=result.is_error,
        )

    # --- Resources ---
    async def list_resources(self) -> List[types.Resource]:
        return [
            types.Resource(uri=entry.uri, name=entry.name, description=entry.description, mimeType=entry.mime_type)
            for entry in self.resources.list_resources()
        ]

    async def read_resource(self, uri: Any) -> Iterable[ReadResourceContents]:
        try:
            entry = self.resources.read(str(uri))
        except PostgSailError as e:
            console.error(f"Resource read failed: {e}")
            raise McpError(types.ErrorData(code=types.INVALID_PARAMS, message=str(e))) from e
        text = json.dumps(entry.content, indent=2, ensure_ascii=False)
        return [ReadResourceContents(content=text, mime_type=entry.mime_type)]

    # --- Prompts ---
    async def list_prompts(self) -> List[types.Prompt]:
        return [
            types.Prompt(
                name=prompt.name,
                description=prompt.description,
                arguments=[
                    types.PromptArgument(name=arg.name, description=arg.description, required=arg.required)
                    for arg in prompt.arguments
                ],
            )
            for prompt in self.prompts.list_prompts()
        ]

    async def get_prompt(self, name: str, arguments: Optional[Dict[str, str]]) -> types.GetPromptResult:
        try:
            rendered = self.prompts.render(name, arguments)
        except PostgSailError as e:
            console.error(f"Prompt lookup failed: {e}")
            # GetPromptResult has no error flag, so unknown prompts fail at protocol level like resources.
            raise McpError(types.ErrorData(code=types.INVALID_PARAMS, message=str(e))) from e
        return types.GetPromptResult(
            description=rendered["description"],
            messages=[
                types.PromptMessage(
                    role="assistant",
                    content=types.TextContent(type="text", text=rendered["message"]),
                )
            ],
        )

    def build(self) -> Server:
        """Registers the handlers on a low-level MCP server."""
        server = Server(SERVER_NAME, version=SERVER_VERSION)
        server.list_tools()(self.list_tools)
        # Argument errors are reported by the dispatcher, not by the SDK's schema check.
        server.call_tool(validate_input=False)(self.call_tool)
        server.list_resources()(self.list_resources)
        server.read_resource()(self.read_resource)
        server.list_prompts()(self.list_prompts)
        server.get_prompt()(self.get_prompt)
        return server

    async def serve_stdio(self):
        server = self.build()
        async with stdio_server() as (read_stream, write_stream):
            console.success("PostgSail MCP Server running on stdio")
            await server.run(read_stream, write_stream, server.create_initialization_options())
