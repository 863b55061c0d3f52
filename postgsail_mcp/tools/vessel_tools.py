# Tools exposing vessel details, polar data and the SignalK key mapping.
# Version: 0.1.0

from typing import Any
from .base_tool import BaseTool

POINT_FEATURE_SCHEMA = {
    "type": "object",
    "required": ["type", "geometry", "properties"],
    "properties": {
        "type": {"type": "string", "const": "Feature"},
        "geometry": {
            "type": "object",
            "required": ["type", "coordinates"],
            "properties": {
                "type": {"type": "string", "const": "Point"},
                "coordinates": {
                    "type": "array",
                    "items": {"type": "number"},
                    "minItems": 2,
                    "maxItems": 2,
                },
            },
        },
        "properties": {"type": "object"},
    },
}

VESSEL_OUTPUT_SCHEMA = {
    "type": "object",
    "required": [
        "name", "geojson", "offline", "has_image", "has_polar", "image_url",
        "vessel_id", "created_at", "last_contact", "configuration",
        "first_contact", "plugin_version", "signalk_version", "image_updated_at",
    ],
    "properties": {
        "beam": {"type": "number"},
        "mmsi": {"type": "string", "pattern": "^\\d{9}$"},
        "name": {"type": "string"},
        "height": {"type": "number"},
        "length": {"type": "number"},
        "alpha_2": {"type": "string", "minLength": 2, "maxLength": 2},
        "country": {"type": "string"},
        "offline": {"type": "boolean"},
        "platform": {"type": "string"},
        "has_image": {"type": "boolean"},
        "has_polar": {"type": "boolean"},
        "image_url": {"type": "string", "format": "uri-reference"},
        "ship_type": {"type": "string", "enum": ["Sailing", "Motor", "Cargo", "Fishing", "Tanker", "Other"]},
        "vessel_id": {"type": "string", "pattern": "^[a-f0-9]{16,}$"},
        "created_at": {"type": "string", "format": "date-time"},
        "make_model": {"type": "string"},
        "last_contact": {"type": "string", "format": "date-time"},
        "configuration": {"type": "boolean"},
        "first_contact": {"type": "string", "format": "date-time"},
        "plugin_version": {"type": "string", "pattern": "^\\d+\\.\\d+\\.\\d+$"},
        "image_updated_at": {"type": "string", "format": "date-time"},
        "geojson": POINT_FEATURE_SCHEMA,
    },
    "additionalProperties": True,
}

_MAPPING_KEYS = [
    "depthKey", "voltageKey", "windSpeedKey", "stateOfChargeKey", "windDirectionKey",
    "insideHumidityKey", "insidePressureKey", "outsideHumidityKey", "outsidePressureKey",
    "waterTemperatureKey", "insideTemperatureKey", "outsideTemperatureKey",
    "solarPowerKey", "solarVoltageKey", "tankLevelKey",
]

VESSEL_MAPPING_OUTPUT_SCHEMA = {
    "type": "object",
    "required": ["configuration"],
    "properties": {
        "configuration": {
            "type": "object",
            "properties": {
                "updated_at": {"type": "string", "format": "date-time"},
                **{key: {"type": "string"} for key in _MAPPING_KEYS},
            },
            "additionalProperties": True,
        },
        "available_keys": {"type": ["array", "null"], "items": {"type": "string"}},
    },
    "additionalProperties": True,
}


class GetVesselTool(BaseTool):
    """Returns the `vessel` object of the vessel_fn rpc."""
    name: str = "get_vessel"
    title: str = "Get Vessel Information"
    description: str = "Get current vessel information"
    output_schema = VESSEL_OUTPUT_SCHEMA

    async def execute(self) -> Any:
        data = await self.client.get_vessel()
        return self.expect_key(data, "vessel", "vessel")


class GetVesselPolarTool(BaseTool):
    name: str = "get_vessel_polar"
    title: str = "Get Vessel Polar"
    description: str = "Get the vessel polar performance data and when it was last updated"

    async def execute(self) -> Any:
        data = await self.client.get_vessel_polar()
        return self.expect_list(data, "vessel polar")


class GetVesselMappingTool(BaseTool):
    name: str = "get_vessel_mapping"
    title: str = "Get Vessel SignalK Mapping"
    description: str = "Get vessel signalk path mapping configuration and the available keys"
    output_schema = VESSEL_MAPPING_OUTPUT_SCHEMA

    async def execute(self) -> Any:
        data = await self.client.get_vessel_mapping()
        row = self.expect_first_row(data, "vessel mapping")
        self.expect_key(row, "configuration", "vessel mapping")
        return row
