# Discovers, catalogs and dispatches all available tools.
# Version: 0.1.0

import pkgutil
import inspect
from pydantic import ValidationError
from typing import Dict, List, Any, Optional, TYPE_CHECKING
from postgsail_mcp import tools as tools_package
from postgsail_mcp.tools.base_tool import BaseTool
from postgsail_mcp.core.errors import (
    ArgumentInvalidError,
    ArgumentRequiredError,
    PostgSailError,
    UnknownOperationError,
)
from postgsail_mcp.models.common import ToolResult
from postgsail_mcp.utils.logger import console

if TYPE_CHECKING:
    from postgsail_mcp.services.postgsail_client import PostgSailClient

class ToolRegistry:
    """
    Maps tool names to tool instances and routes invocations to them.
    Every tool shares the one backend client the registry was built with.
    """
    def __init__(self, client: "PostgSailClient"):
        self.client = client
        self.tools: Dict[str, BaseTool] = {}
        self._discover_tools()
        console.success(f"Tool discovery complete. Found {len(self.tools)} tools.")
        console.debug(f"Registered tools: {list(self.tools.keys())}")

    def _discover_tools(self):
        """
        Scans the tools package, imports all modules, finds concrete classes
        that inherit from BaseTool and registers an instance of each.
        """
        for _, modname, _ in pkgutil.iter_modules(tools_package.__path__, f"{tools_package.__name__}."):
            if modname.endswith(".base_tool"):
                continue
            try:
                module = __import__(modname, fromlist="dummy")
                for _, obj in inspect.getmembers(module, inspect.isclass):
                    if (issubclass(obj, BaseTool) and not inspect.isabstract(obj)
                            and obj.__module__ == module.__name__):
                        self.register(obj(self.client))
            except Exception as e:
                console.error(f"Failed to load or register tool from module {modname}: {e}")

    def register(self, tool: BaseTool):
        if tool.name in self.tools:
            raise ValueError(f"Tool '{tool.name}' is already registered.")
        self.tools[tool.name] = tool
        console.debug(f"Successfully registered tool: '{tool.name}'")

    def get(self, tool_name: str) -> BaseTool:
        tool = self.tools.get(tool_name)
        if tool is None:
            raise UnknownOperationError(tool_name, "tool")
        return tool

    def get_definitions(self) -> List[Dict[str, Any]]:
        """Returns the catalog entry of every registered tool, sorted by name."""
        return [self.tools[name].get_definition() for name in sorted(self.tools)]

    @staticmethod
    def validate_arguments(tool: BaseTool, arguments: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Validates raw arguments against the tool's args_schema.

        Returns:
            The validated arguments keyed by the execute() parameter names.

        Raises:
            ArgumentRequiredError: A required argument is absent.
            ArgumentInvalidError: An argument has the wrong type or value.
        """
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise ArgumentInvalidError("arguments", "expected an object")
        try:
            params = tool.args_schema.model_validate(arguments)
        except ValidationError as e:
            errors = e.errors()
            missing = [err for err in errors if err["type"] == "missing"]
            first = missing[0] if missing else errors[0]
            field = ".".join(str(part) for part in first["loc"]) or "arguments"
            if missing:
                raise ArgumentRequiredError(field) from e
            raise ArgumentInvalidError(field, first["msg"]) from e
        return params.model_dump()

    async def dispatch(self, tool_name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResult:
        """
        Executes one tool invocation and wraps the outcome in a ToolResult.
        Never raises: every failure becomes an error envelope.
        """
        try:
            tool = self.get(tool_name)
            params = self.validate_arguments(tool, arguments)
            console.info(f"Executing tool '{tool_name}'")
            payload = await tool.execute(**params)
            console.success(f"Tool '{tool_name}' executed successfully.")
            return ToolResult.ok(payload)
        except PostgSailError as e:
            console.error(f"Tool '{tool_name}' failed ({e.kind.value}): {e}")
            return ToolResult.fail(e.message)
        except Exception as e:
            console.exception(f"An unexpected error occurred while executing tool '{tool_name}'")
            return ToolResult.fail(str(e))
