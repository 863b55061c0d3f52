# Request-scoped and catalog models shared across the server.
# Version: 0.1.0

import json
from pydantic import BaseModel, Field, field_validator
from typing import Any, List, Optional


class Session(BaseModel):
    """
    Process-wide backend credentials.
    Attributes:
        base_url (str): Base URL of the REST API, always ending with '/'.
        token (Optional[str]): Bearer token attached to every request when set.
    """
    base_url: str = Field(..., description="Base URL of the REST API.")
    token: Optional[str] = Field(default=None, description="Bearer token for the API.")

    @field_validator("base_url")
    @classmethod
    def _ensure_trailing_slash(cls, value: str) -> str:
        return value if value.endswith("/") else value + "/"

    def replace_token(self, token: Optional[str]):
        self.token = token


class ToolResult(BaseModel):
    """
    The uniform envelope returned for every tool invocation.
    Attributes:
        content (str): Serialized payload, or a single error message.
        is_error (bool): True when the invocation failed.
    """
    content: str
    is_error: bool = False

    @classmethod
    def ok(cls, payload: Any) -> "ToolResult":
        # Text bodies (GPX, KML exports) are passed through untouched.
        if isinstance(payload, str):
            return cls(content=payload)
        return cls(content=json.dumps(payload, indent=2, ensure_ascii=False))

    @classmethod
    def fail(cls, message: str) -> "ToolResult":
        return cls(content=f"Error: {message}", is_error=True)


class PromptArgument(BaseModel):
    name: str
    description: str
    required: bool = False


class PromptTemplate(BaseModel):
    """A canned natural-language request offered to the agent host."""
    name: str
    description: str
    arguments: List[PromptArgument] = Field(default_factory=list)
    message: str = Field(..., description="Text of the assistant message, may contain {{argument}} placeholders.")


class ResourceEntry(BaseModel):
    """A static, URI-addressed document exposed for agent context."""
    uri: str
    name: str
    description: str
    mime_type: str = "application/json"
    content: Any = None
