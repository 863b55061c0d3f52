# Tools for account-level data: settings, statistics, event logs and badges.
# Version: 0.1.0

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Literal
from .base_tool import BaseTool

SETTINGS_OUTPUT_SCHEMA = {
    "type": "object",
    "required": ["first", "last", "username", "has_vessel", "created_at", "preferences"],
    "properties": {
        "first": {"type": "string"},
        "last": {"type": "string"},
        "username": {"type": "string"},
        "has_vessel": {"type": "boolean"},
        "created_at": {"type": "string", "format": "date-time"},
        "preferences": {
            "type": "object",
            "properties": {
                "windy_last_metric": {"type": "string"},
                "use_imperial_units": {"type": "boolean"},
                "alarms": {"type": "object"},
                "badges": {"type": "object"},
                "alerting": {"type": "object", "additionalProperties": True},
            },
            "additionalProperties": True,
        },
    },
    "additionalProperties": True,
}


class VesselStatsInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    stats_type: Literal["logs", "moorages", "general"] = Field(
        default="general", alias="type", description="Type of statistics to retrieve"
    )
    timeframe: str = Field(
        default="all", description="Time period for general stats (e.g., 'last_month', 'this_year')"
    )


class GetSettingsTool(BaseTool):
    name: str = "get_settings"
    title: str = "Get User Settings"
    description: str = "Get user settings and preferences"
    output_schema = SETTINGS_OUTPUT_SCHEMA

    async def execute(self) -> Any:
        data = await self.client.get_settings()
        return self.expect_key(data, "settings", "settings")


class GetVesselStatsTool(BaseTool):
    name: str = "get_vessel_stats"
    title: str = "Get Vessel Statistics"
    description: str = "Get vessel statistics and analytics for logs, moorages or in general"
    args_schema = VesselStatsInput

    async def execute(self, stats_type: str = "general", timeframe: str = "all") -> Any:
        if stats_type == "logs":
            return await self.client.get_stats_logs()
        if stats_type == "moorages":
            return await self.client.get_stats_moorages()
        return await self.client.get_stats(timeframe)


class GetEventLogsTool(BaseTool):
    name: str = "get_event_logs"
    title: str = "Get Event Logs"
    description: str = "Get system event logs and alerts"

    async def execute(self) -> Any:
        return await self.client.get_event_logs()


class GetBadgesTool(BaseTool):
    name: str = "get_badges"
    title: str = "Get Badges"
    description: str = "Get vessel achievements and badges"

    async def execute(self) -> Any:
        return await self.client.get_badges()
