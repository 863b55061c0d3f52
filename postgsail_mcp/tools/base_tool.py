# The module is to define the base class for all PostgSail tools.
# Version: 0.1.0

from abc import ABC, abstractmethod
from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, Optional, Type, TYPE_CHECKING
from postgsail_mcp.core.errors import MalformedResponseError

if TYPE_CHECKING:
    from postgsail_mcp.services.postgsail_client import PostgSailClient


class NoArguments(BaseModel):
    """Input model for tools that take no arguments."""
    model_config = ConfigDict(extra="ignore")


class BaseTool(ABC):
    """
    Abstract Base Class for all tools.

    Attributes:
        name (str): The name of the tool, used for dispatch.
        title (str): A short human-readable title.
        description (str): A brief description of what the tool does.
        args_schema (Type[BaseModel]): A Pydantic model defining the arguments
            that the tool accepts, validated before execution.
        output_schema (Optional[dict]): JSON schema of the expected response.
            Documentation only, never enforced.
    """
    name: str
    title: Optional[str] = None
    description: str
    args_schema: Type[BaseModel] = NoArguments
    output_schema: Optional[Dict[str, Any]] = None

    def __init__(self, client: "PostgSailClient"):
        self.client = client

    @abstractmethod
    async def execute(self, **kwargs) -> Any:
        """
        Issues exactly one backend call and returns its payload.

        Args:
            **kwargs: The arguments for the tool, validated against args_schema.

        Returns:
            The JSON value or raw text to hand back to the caller.
        """
        pass

    def get_input_schema(self) -> Dict[str, Any]:
        schema = self.args_schema.model_json_schema(by_alias=True)
        schema.pop("title", None)
        schema.pop("description", None)
        schema.setdefault("properties", {})
        return schema

    def get_definition(self) -> Dict[str, Any]:
        """Returns the catalog entry advertised to the agent host."""
        definition = {
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "inputSchema": self.get_input_schema(),
        }
        if self.output_schema:
            definition["outputSchema"] = self.output_schema
        return definition

    # Coarse shape checks on backend payloads.
    def expect_list(self, data: Any, label: str) -> list:
        if not isinstance(data, list):
            raise MalformedResponseError(f"Invalid {label} data")
        return data

    def expect_first_row(self, data: Any, label: str) -> Any:
        if not isinstance(data, list) or not data:
            raise MalformedResponseError(f"Invalid {label} data")
        return data[0]

    def expect_key(self, data: Any, key: str, label: str) -> Any:
        if not isinstance(data, dict) or not data.get(key):
            raise MalformedResponseError(f"No {label} data found")
        return data[key]
