# Static catalog of prompt templates offered to the agent host.
# Version: 0.1.0

import re
from typing import Dict, List, Optional
from postgsail_mcp.core.errors import ArgumentRequiredError, NotFoundError
from postgsail_mcp.models.common import PromptArgument, PromptTemplate

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")

_MONTH = PromptArgument(name="month", description="Month to analyze stay duration for", required=True)

PROMPTS: List[PromptTemplate] = [
    PromptTemplate(
        name="vessel-system-status",
        description="🛥️ Give me a summary of my current systems status.",
        message="Provide a daily briefing of my boat's systems.",
    ),
    PromptTemplate(
        name="stay-duration-analysis",
        description="📍 Where did we stay the longest during {{month}}?",
        arguments=[_MONTH],
        message="Where did we stay the longest during {{month}}?",
    ),
    PromptTemplate(
        name="anchor-stay-history",
        description="⚓ Show me all anchorages we used last month.",
        arguments=[_MONTH],
        message="Show me all anchorages we used during {{month}}.",
    ),
    PromptTemplate(
        name="last-logbook-summary",
        description="🧾 Summarize my last voyage log.",
        message="Summarize my last voyage log.",
    ),
    PromptTemplate(
        name="logbook-summary",
        description="🧾 Summarize the voyage logs for the last month.",
        message="Summarize the voyage logs for the last month.",
    ),
    PromptTemplate(
        name="system-monitoring",
        description="🔧 List any alerts or events from the vessel today.",
        message="List any alerts or events from the vessel today.",
    ),
]


def render(text: str, arguments: Dict[str, str]) -> str:
    """Replaces {{name}} placeholders, leaving unknown ones untouched."""
    return _PLACEHOLDER.sub(lambda m: str(arguments.get(m.group(1), m.group(0))), text)


class PromptRegistry:
    """Pure lookups over PROMPTS; never touches the backend."""

    def __init__(self, prompts: Optional[List[PromptTemplate]] = None):
        self.prompts: Dict[str, PromptTemplate] = {p.name: p for p in (prompts or PROMPTS)}

    def list_prompts(self) -> List[PromptTemplate]:
        return list(self.prompts.values())

    def get(self, name: str) -> PromptTemplate:
        prompt = self.prompts.get(name)
        if prompt is None:
            raise NotFoundError(name, "prompt")
        return prompt

    def render(self, name: str, arguments: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """
        Resolves a prompt and fills in its arguments.

        Returns:
            A dict with the rendered `description` and `message`.
        """
        prompt = self.get(name)
        arguments = arguments or {}
        for argument in prompt.arguments:
            if argument.required and not arguments.get(argument.name):
                raise ArgumentRequiredError(argument.name)
        return {
            "description": render(prompt.description, arguments),
            "message": render(prompt.message, arguments),
        }
