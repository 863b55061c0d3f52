# Tools for moorages (marinas, anchorages, mooring fields) and visits to them.
# Version: 0.1.0

from pydantic import BaseModel, ConfigDict, Field
from typing import Any
from .base_tool import BaseTool
from postgsail_mcp.services.postgsail_client import STAY_TYPES

STAY_TYPE_CHOICES = ["All", *STAY_TYPES.keys()]


class MooragesInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    stay_type: str = Field(
        default="All", alias="stayType",
        description="Only include moorages of this stay type. 'All' disables the filter.",
        json_schema_extra={"enum": STAY_TYPE_CHOICES},
    )
    limit: int = Field(default=5, ge=1, le=1000, description="Maximum number of moorages to return (default: 5).")


class MoorageIdInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    moorage_id: str = Field(..., alias="id", description="Moorage ID")


class GetMooragesTool(BaseTool):
    name: str = "get_moorages"
    title: str = "Get Moorages"
    description: str = "Get a summary of all moorages/marinas/anchorages, optionally filtered by stay type"
    args_schema = MooragesInput

    async def execute(self, stay_type: str = "All", limit: int = 5) -> Any:
        data = await self.client.get_moorages(stay_type=stay_type, limit=limit)
        return self.expect_list(data, "moorages")


class GetMoorageTool(BaseTool):
    name: str = "get_moorage"
    title: str = "Get Moorage"
    description: str = "Get all details for specific moorage by ID"
    args_schema = MoorageIdInput

    async def execute(self, moorage_id: str) -> Any:
        data = await self.client.get_moorage(moorage_id)
        return self.expect_list(data, "moorage")


class GetMoorageStaysTool(BaseTool):
    name: str = "get_moorage_stays"
    title: str = "Get Moorage Stays"
    description: str = "Get all stays at a specific moorage"
    args_schema = MoorageIdInput

    async def execute(self, moorage_id: str) -> Any:
        data = await self.client.get_moorage_stays(moorage_id)
        return self.expect_list(data, "moorage stays")


class GetMoorageArrivalsDeparturesTool(BaseTool):
    name: str = "get_moorage_arrivals_departures"
    title: str = "Get Moorage Arrivals and Departures"
    description: str = "Get all voyage logs arriving at or departing from a specific moorage"
    args_schema = MoorageIdInput

    async def execute(self, moorage_id: str) -> Any:
        data = await self.client.get_moorage_arrivals_departures(moorage_id)
        return self.expect_list(data, "moorage logbooks")


class GetMooragesGeoJSONTool(BaseTool):
    name: str = "get_moorages_geojson"
    title: str = "Get Moorages GeoJSON"
    description: str = "Get all moorages as a GeoJSON feature collection for mapping"

    async def execute(self) -> Any:
        return await self.client.get_moorages_geojson()
