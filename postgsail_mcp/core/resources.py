# Static documentation resources exposed to the agent host.
# Version: 0.1.0

from typing import Dict, List, Optional
from postgsail_mcp.core.errors import NotFoundError
from postgsail_mcp.models.common import ResourceEntry

POSTGSAIL_OVERVIEW = {
    "summary": (
        "PostgSail is an open-source telemetry logbook for boats. A SignalK plugin "
        "streams vessel metrics to a PostgreSQL/TimescaleDB backend that derives "
        "voyages, stays and moorages automatically and exposes them through a "
        "PostgREST API."
    ),
    "concepts": {
        "vessel": "The boat sending telemetry. One account owns one or more vessels; the API is scoped to the vessel of the token.",
        "metrics": "Raw time series of SignalK values (position, wind, depth, batteries...) sampled while the vessel is online.",
        "log": "A voyage (logbook entry) from a departure moorage to an arrival moorage, with distance, duration and a GeoJSON track.",
        "stay": "A period spent stationary, typed by how the vessel was held (anchor, dock, mooring buoy).",
        "moorage": "A named place where stays happen. Aggregates the stays and the logs that start or end there.",
        "monitoring": "The latest metrics snapshot of the vessel, including position and online status.",
    },
    "relationships": [
        "log._from_moorage_id -> moorage.id",
        "log._to_moorage_id -> moorage.id",
        "stay.moorage_id -> moorage.id",
        "stay.stayed_at_id -> stay_code (1 Unknown, 2 Anchor, 3 Mooring Buoy, 4 Dock)",
    ],
    "api": {
        "views": [
            "logs_view", "log_view", "moorages_view", "moorage_view",
            "stays_view", "stay_view", "monitoring_live", "eventlogs_view", "badges_view",
        ],
        "functions": [
            "rpc/vessel_fn", "rpc/settings_fn", "rpc/export_logbook_gpx_trip_fn",
            "rpc/export_logbook_geojson_trip_fn", "rpc/export_logbook_kml_trip_fn",
            "rpc/export_moorages_geojson_fn", "rpc/monitoring_history_fn", "rpc/stats_fn",
        ],
        "filters": "PostgREST syntax: column=eq.value, column=gte.value, or=(a.eq.1,b.eq.1), limit, offset, order.",
    },
}

DATA_MODEL_REFERENCE = {
    "navigation.position": "Latitude/longitude of the vessel (degrees).",
    "navigation.speedOverGround": "Speed over ground (m/s, reported in knots by the API).",
    "navigation.courseOverGroundTrue": "Course over ground relative to true north (radians).",
    "navigation.headingTrue": "Heading relative to true north (radians).",
    "navigation.state": "Vessel state: moored, anchored, sailing, motoring.",
    "environment.wind.speedTrue": "True wind speed (m/s).",
    "environment.wind.directionTrue": "True wind direction (radians).",
    "environment.wind.speedApparent": "Apparent wind speed (m/s).",
    "environment.depth.belowTransducer": "Water depth below the transducer (m).",
    "environment.water.temperature": "Sea water temperature (K).",
    "environment.outside.temperature": "Outside air temperature (K).",
    "environment.outside.pressure": "Outside barometric pressure (Pa).",
    "environment.outside.humidity": "Outside relative humidity (ratio).",
    "environment.inside.temperature": "Cabin temperature (K).",
    "environment.inside.humidity": "Cabin relative humidity (ratio).",
    "electrical.batteries.*.voltage": "Battery bank voltage (V).",
    "electrical.batteries.*.stateOfCharge": "Battery state of charge (ratio).",
    "electrical.solar.*.panelPower": "Solar panel power (W).",
    "electrical.solar.*.panelVoltage": "Solar panel voltage (V).",
    "tanks.*.*.currentLevel": "Tank level (ratio).",
}

PATH_CATEGORIES_GUIDE = {
    "navigation": {
        "description": "Where the vessel is and how it moves.",
        "examples": ["navigation.position", "navigation.speedOverGround", "navigation.state"],
    },
    "environment": {
        "description": "Conditions around and inside the vessel: wind, water, air.",
        "examples": ["environment.wind.speedTrue", "environment.depth.belowTransducer"],
    },
    "electrical": {
        "description": "Batteries, chargers, solar and alternators.",
        "examples": ["electrical.batteries.house.voltage", "electrical.solar.main.panelPower"],
    },
    "tanks": {
        "description": "Fresh water, fuel and waste tank levels.",
        "examples": ["tanks.freshWater.0.currentLevel", "tanks.fuel.0.currentLevel"],
    },
    "propulsion": {
        "description": "Engine state, revolutions and run time.",
        "examples": ["propulsion.main.revolutions", "propulsion.main.runTime"],
    },
    "mapping": (
        "Vessels may publish non-standard paths. The get_vessel_mapping tool returns "
        "which SignalK path feeds each monitoring key (depthKey, voltageKey, ...) "
        "and the list of paths the vessel reports."
    ),
}

RESOURCES: List[ResourceEntry] = [
    ResourceEntry(
        uri="postgsail://postgsail_overview",
        name="PostgSail Overview",
        description="Core concepts and data model structure of SignalK's PostgSail",
        content=POSTGSAIL_OVERVIEW,
    ),
    ResourceEntry(
        uri="postgsail://data_model_reference",
        name="SignalK Data Model Reference",
        description="Comprehensive reference of SignalK paths and their meanings",
        content=DATA_MODEL_REFERENCE,
    ),
    ResourceEntry(
        uri="postgsail://path_categories_guide",
        name="SignalK Path Categories Guide",
        description="Guide to understanding and categorizing SignalK paths",
        content=PATH_CATEGORIES_GUIDE,
    ),
]


class ResourceRegistry:
    """Pure lookups over RESOURCES; never touches the backend."""

    def __init__(self, resources: Optional[List[ResourceEntry]] = None):
        self.resources: Dict[str, ResourceEntry] = {r.uri: r for r in (resources or RESOURCES)}

    def list_resources(self) -> List[ResourceEntry]:
        return list(self.resources.values())

    def read(self, uri: str) -> ResourceEntry:
        key = str(uri)
        # URL types may normalise a trailing slash onto the identifier
        resource = self.resources.get(key) or self.resources.get(key.rstrip("/"))
        if resource is None:
            raise NotFoundError(key, "resource")
        return resource
