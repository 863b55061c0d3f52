# Tools for voyage logs (logbook entries) and their exported tracks.
# Version: 0.1.0

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Literal, Optional
from .base_tool import BaseTool

LOGS_OUTPUT_SCHEMA = {
    "type": "array",
    "items": {
        "type": "object",
        "required": [
            "id", "name", "from", "started", "to", "ended",
            "distance", "duration", "_from_moorage_id", "_to_moorage_id",
        ],
        "properties": {
            "id": {"type": "integer", "minimum": 1},
            "name": {"type": "string"},
            "from": {"type": "string"},
            "started": {"type": "string", "format": "date-time"},
            "to": {"type": "string"},
            "ended": {"type": "string", "format": "date-time"},
            "distance": {"type": "number", "minimum": 0},
            "duration": {"type": "string", "pattern": "^PT(?:\\d+H)?(?:\\d+M)?(?:\\d+(?:\\.\\d+)?S)?$"},
            "_from_moorage_id": {"type": "integer", "minimum": 1},
            "_to_moorage_id": {"type": "integer", "minimum": 1},
            "tags": {"type": ["array", "null"], "items": {"type": "string"}},
        },
    },
}


class DateRangeInput(BaseModel):
    """Optional date-range filter shared by the log and stay summaries."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    start_date: Optional[str] = Field(
        default=None, alias="startDate",
        description="Only include entries starting on or after this date (ISO 8601).",
        json_schema_extra={"format": "date-time"},
    )
    end_date: Optional[str] = Field(
        default=None, alias="endDate",
        description="Only include entries ending on or before this date (ISO 8601).",
        json_schema_extra={"format": "date-time"},
    )
    limit: int = Field(default=5, ge=1, le=1000, description="Maximum number of entries to return (default: 5).")


class LogIdInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    log_id: str = Field(..., alias="id", description="Log ID")


class PageInput(BaseModel):
    model_config = ConfigDict(extra="ignore")

    page: int = Field(default=1, ge=1, description="Page number (default: 1)")


class ExportLogTrackInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    log_id: str = Field(..., alias="logId", description="Log ID to export")
    export_format: Literal["gpx", "geojson", "kml"] = Field(..., alias="format", description="Export format")


class GetLogsTool(BaseTool):
    name: str = "get_logs"
    title: str = "Get Voyage Logs"
    description: str = "Get a summary of voyages or logs or trips, optionally within a date range"
    args_schema = DateRangeInput
    output_schema = LOGS_OUTPUT_SCHEMA

    async def execute(self, start_date: Optional[str] = None, end_date: Optional[str] = None,
                      limit: int = 5) -> Any:
        data = await self.client.get_logs(start_date=start_date, end_date=end_date, limit=limit)
        return self.expect_list(data, "logbooks")


class GetLogTool(BaseTool):
    name: str = "get_log"
    title: str = "Get Voyage Log"
    description: str = "Get all details for specific voyage log by ID"
    args_schema = LogIdInput

    async def execute(self, log_id: str) -> Any:
        data = await self.client.get_log(log_id)
        return self.expect_list(data, "logbook")


class GetLastLogTool(BaseTool):
    name: str = "get_last_log"
    title: str = "Get Last Voyage Log"
    description: str = "Get all details of the most recent voyage log"

    async def execute(self) -> Any:
        data = await self.client.get_last_log()
        return self.expect_list(data, "logbook")


class GetLogsGeoJSONTool(BaseTool):
    name: str = "get_logs_geojson"
    title: str = "Get Voyage Logs GeoJSON"
    description: str = "Get recent voyage logs as GeoJSON for mapping, 100 per page"
    args_schema = PageInput

    async def execute(self, page: int = 1) -> Any:
        return await self.client.get_logs_map(page)


class ExportLogTrackTool(BaseTool):
    """GPX is requested as text/xml and comes back as raw text; geojson is JSON."""
    name: str = "export_log_track"
    title: str = "Export Voyage Track"
    description: str = "Export specific log track in various formats (gpx, geojson, kml)"
    args_schema = ExportLogTrackInput

    async def execute(self, log_id: str, export_format: str) -> Any:
        return await self.client.export_log(log_id, export_format)
