# Tools for stays: the time spent at anchor, at a dock or on a buoy.
# Version: 0.1.0

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional
from .base_tool import BaseTool
from .log_tools import DateRangeInput, PageInput
from .moorage_tools import STAY_TYPE_CHOICES


class StaysInput(DateRangeInput):
    stay_type: str = Field(
        default="All", alias="stayType",
        description="Only include stays of this type. 'All' disables the filter.",
        json_schema_extra={"enum": STAY_TYPE_CHOICES},
    )


class StayIdInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    stay_id: str = Field(..., alias="id", description="Stay ID")


class GetStaysTool(BaseTool):
    name: str = "get_stays"
    title: str = "Get Stays"
    description: str = "Get a summary of all stays (times at anchor/dock), optionally by date range and stay type"
    args_schema = StaysInput

    async def execute(self, start_date: Optional[str] = None, end_date: Optional[str] = None,
                      stay_type: str = "All", limit: int = 5) -> Any:
        data = await self.client.get_stays(
            start_date=start_date, end_date=end_date, stay_type=stay_type, limit=limit
        )
        return self.expect_list(data, "stays")


class GetStayTool(BaseTool):
    name: str = "get_stay"
    title: str = "Get Stay"
    description: str = "Get all details for specific stay by ID"
    args_schema = StayIdInput

    async def execute(self, stay_id: str) -> Any:
        data = await self.client.get_stay(stay_id)
        return self.expect_list(data, "stay")


class GetStaysGeoJSONTool(BaseTool):
    name: str = "get_stays_geojson"
    title: str = "Get Stays GeoJSON"
    description: str = "Get stays as GeoJSON for mapping, 100 per page"
    args_schema = PageInput

    async def execute(self, page: int = 1) -> Any:
        return await self.client.get_stays_map(page)
