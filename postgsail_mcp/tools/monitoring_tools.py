# Tools for live sensor monitoring, historical monitoring and timelapse tracks.
# Version: 0.1.0

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Literal, Optional
from .base_tool import BaseTool
from .vessel_tools import POINT_FEATURE_SCHEMA

_NULLABLE_NUMBER = {"type": ["number", "null"]}

MONITORING_LIVE_OUTPUT_SCHEMA = {
    "type": "object",
    "required": ["time", "offline", "data", "geojson", "name", "status"],
    "properties": {
        "time": {"type": "string", "format": "date-time"},
        "offline": {"type": "boolean"},
        "name": {"type": "string"},
        "status": {"type": "string"},
        **{
            key: _NULLABLE_NUMBER for key in (
                "watertemperature", "insidetemperature", "outsidetemperature",
                "windspeedoverground", "winddirectiontrue", "insidehumidity",
                "outsidehumidity", "outsidepressure", "insidepressure",
                "batterycharge", "batteryvoltage", "depth", "solarpower",
                "solarvoltage", "tanklevel",
            )
        },
        "outsidepressurehistory": {"type": ["array", "null"]},
        "geojson": POINT_FEATURE_SCHEMA,
        "live": {
            "type": "object",
            "required": ["type", "features"],
            "properties": {
                "type": {"type": "string", "const": "FeatureCollection"},
                "features": {"type": "array", "items": {"type": "object"}},
            },
        },
        "data": {"type": "object", "additionalProperties": True},
    },
}


class MonitoringHistoryInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    start_date: str = Field(..., alias="startDate", description="Start date (ISO format)",
                            json_schema_extra={"format": "date-time"})
    end_date: str = Field(..., alias="endDate", description="End date (ISO format)",
                          json_schema_extra={"format": "date-time"})
    sensors: Optional[List[str]] = Field(default=None, description="Specific sensors to query (optional)")


class TimelapseInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    start_date: str = Field(..., alias="startDate", description="Start date (ISO format)",
                            json_schema_extra={"format": "date-time"})
    end_date: str = Field(..., alias="endDate", description="End date (ISO format)",
                          json_schema_extra={"format": "date-time"})
    track_format: Literal["points", "linestring"] = Field(
        default="points", alias="format", description="Data format for visualization"
    )


class GetMonitoringLiveTool(BaseTool):
    """Returns the single row of the monitoring_live view."""
    name: str = "get_monitoring_live"
    title: str = "Get Live Monitoring"
    description: str = "Get current live monitoring data (sensors, position, etc.)"
    output_schema = MONITORING_LIVE_OUTPUT_SCHEMA

    async def execute(self) -> Any:
        data = await self.client.get_monitoring_live()
        return self.expect_first_row(data, "live monitoring")


class GetMonitoringHistoryTool(BaseTool):
    name: str = "get_monitoring_history"
    title: str = "Get Monitoring History"
    description: str = "Get historical monitoring data for specific timeframe"
    args_schema = MonitoringHistoryInput

    async def execute(self, start_date: str, end_date: str, sensors: Optional[List[str]] = None) -> Any:
        return await self.client.get_monitoring_history(start_date, end_date, sensors)


class GetTimelapseDataTool(BaseTool):
    """
    'points' exports the trips as GeoJSON points, 'linestring' asks the
    timelapse rpc for the aggregated track.
    """
    name: str = "get_timelapse_data"
    title: str = "Get Timelapse Data"
    description: str = "Get timelapse/track data for visualization"
    args_schema = TimelapseInput

    async def execute(self, start_date: str, end_date: str, track_format: str = "points") -> Any:
        if track_format == "linestring":
            return await self.client.get_timelapse(start_date, end_date)
        return await self.client.get_timelapse_trips(start_date, end_date)
