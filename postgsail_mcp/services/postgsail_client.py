# Async client for the PostgSail REST API (PostgREST views and rpc functions).
# Every method issues exactly one request; nothing is cached or retried.
# Version: 0.1.0

import json
import httpx
from typing import Any, Dict, List, Optional, Sequence, Tuple
from urllib.parse import quote

from postgsail_mcp.core.errors import ArgumentInvalidError, BackendError, MalformedResponseError
from postgsail_mcp.models.common import Session
from postgsail_mcp.utils.logger import console

USER_AGENT = "postgsail.mcp v0.1.0"

# Geojson map endpoints page through the backend 100 rows at a time.
MAP_PAGE_SIZE = 100

# Human-readable stay categories mapped to the backend's stay_code ids.
# "All" is deliberately absent: it means "no filter".
STAY_TYPES: Dict[str, int] = {
    "Unknown": 1,
    "Anchor": 2,
    "Mooring Buoy": 3,
    "Dock": 4,
}

EXPORT_FORMATS = ("gpx", "geojson", "kml")


def stay_type_code(category: Optional[str]) -> Optional[int]:
    """Returns the stay_code for a category, or None when no filter should be sent."""
    if not category:
        return None
    if category in STAY_TYPES:
        return STAY_TYPES[category]
    for name, code in STAY_TYPES.items():
        if name.lower() == category.strip().lower():
            return code
    return None


def _eq(value: Optional[int]) -> Optional[str]:
    return f"eq.{value}" if value is not None else None


def build_path(resource: str, params: Sequence[Tuple[str, Any]]) -> str:
    """
    Appends PostgREST query parameters to a relative path.
    Parameters whose value is None are skipped. Values are percent-encoded but
    keep the PostgREST operator syntax (`eq.`, `gte.`, `or=(...)`) readable.
    """
    parts = [f"{key}={quote(str(value), safe='.,:()_-*')}" for key, value in params if value is not None]
    if not parts:
        return resource
    return f"{resource}?{'&'.join(parts)}"


class PostgSailClient:
    """
    Translates logical operations into HTTP requests against a single base URL.
    The bearer token lives in the injected Session and can be replaced with set_token.
    """

    def __init__(self, session: Session, timeout: float = 30.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.session = session
        self._timeout = timeout
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self.session.base_url

    def set_token(self, token: str):
        self.session.replace_token(token)

    def _build_headers(self, overrides: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }
        if overrides:
            headers.update(overrides)
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"
        return headers

    async def request(self, endpoint: str, method: str = "GET",
                      json_body: Optional[Any] = None,
                      headers: Optional[Dict[str, str]] = None) -> Any:
        """
        Sends one request to `base_url + endpoint` and decodes the response.

        Returns:
            The decoded JSON value when the response declares application/json,
            otherwise the raw text body.

        Raises:
            BackendError: On transport failures and non-2xx statuses.
            MalformedResponseError: When a JSON response cannot be decoded.
        """
        url = f"{self.base_url}{endpoint}"
        if console.verbose:
            console.info(f"{method} {url}")

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.request(
                    method,
                    url,
                    headers=self._build_headers(headers),
                    content=json.dumps(json_body) if json_body is not None else None,
                )
        except httpx.HTTPError as e:
            raise BackendError(f"Request to {endpoint} failed: {e}") from e

        if not response.is_success:
            raise BackendError(
                f"Request to {endpoint} failed: API request failed: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                reason=response.reason_phrase,
            )

        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            try:
                return response.json()
            except ValueError as e:
                raise MalformedResponseError(f"Request to {endpoint} returned invalid JSON: {e}") from e
        console.debug(f"{endpoint} returned '{content_type or 'no content type'}', passing text through.")
        return response.text

    # --- Auth ---
    async def login(self, email: str, password: str) -> Any:
        return await self.request("rpc/login", method="POST", json_body={"email": email, "pass": password})

    # --- Vessel ---
    async def get_vessel(self) -> Any:
        return await self.request("rpc/vessel_fn")

    async def get_vessel_polar(self) -> Any:
        return await self.request("metadata_ext?select=polar,polar_updated_at")

    async def get_vessel_mapping(self) -> Any:
        return await self.request("metadata?select=configuration,available_keys")

    # --- Logs ---
    async def get_logs(self, start_date: Optional[str] = None, end_date: Optional[str] = None,
                       limit: int = 5) -> Any:
        return await self.request(build_path("logs_view", [
            ("limit", limit),
            ("started", f"gte.{start_date}" if start_date else None),
            ("ended", f"lte.{end_date}" if end_date else None),
        ]))

    async def get_last_log(self) -> Any:
        return await self.request("log_view?limit=1")

    async def get_log(self, log_id: str) -> Any:
        return await self.request(build_path("log_view", [("id", f"eq.{log_id}")]))

    async def get_logs_map(self, page: int = 1) -> Any:
        offset = (page - 1) * MAP_PAGE_SIZE
        return await self.request(
            build_path("logs_geojson_view", [
                ("select", "geojson"),
                ("geojson", "not.is.null"),
                ("order", "starttimestamp.desc"),
                ("limit", MAP_PAGE_SIZE),
                ("offset", offset),
            ]),
            headers={"Prefer": "count=exact"},
        )

    async def export_log(self, log_id: str, export_format: str) -> Any:
        if export_format not in EXPORT_FORMATS:
            raise ArgumentInvalidError("format", f"use one of: {', '.join(EXPORT_FORMATS)}")
        headers = {"Accept": "text/xml"} if export_format == "gpx" else None
        return await self.request(
            f"rpc/export_logbook_{export_format}_trip_fn",
            method="POST",
            json_body={"_id": log_id},
            headers=headers,
        )

    # --- Moorages ---
    async def get_moorages(self, stay_type: Optional[str] = None, limit: int = 5) -> Any:
        return await self.request(build_path("moorages_view", [
            ("limit", limit),
            ("default_stay_id", _eq(stay_type_code(stay_type))),
        ]))

    async def get_moorage(self, moorage_id: str) -> Any:
        return await self.request(build_path("moorage_view", [("id", f"eq.{moorage_id}")]))

    async def get_moorage_stays(self, moorage_id: str) -> Any:
        return await self.request(build_path("moorages_stays_view", [("id", f"eq.{moorage_id}")]))

    async def get_moorage_arrivals_departures(self, moorage_id: str) -> Any:
        return await self.request(build_path("logs_view", [
            ("or", f"(_from_moorage_id.eq.{moorage_id},_to_moorage_id.eq.{moorage_id})"),
        ]))

    async def get_moorages_geojson(self) -> Any:
        return await self.request("rpc/export_moorages_geojson_fn", method="POST")

    # --- Stays ---
    async def get_stays(self, start_date: Optional[str] = None, end_date: Optional[str] = None,
                        stay_type: Optional[str] = None, limit: int = 5) -> Any:
        return await self.request(build_path("stays_view", [
            ("limit", limit),
            ("arrived", f"gte.{start_date}" if start_date else None),
            ("departed", f"lte.{end_date}" if end_date else None),
            ("stayed_at_id", _eq(stay_type_code(stay_type))),
        ]))

    async def get_stay(self, stay_id: str) -> Any:
        return await self.request(build_path("stay_view", [("id", f"eq.{stay_id}")]))

    async def get_stays_map(self, page: int = 1) -> Any:
        offset = (page - 1) * MAP_PAGE_SIZE
        return await self.request(
            build_path("stays_geojson_view", [
                ("select", "geojson"),
                ("geojson", "not.is.null"),
                ("limit", MAP_PAGE_SIZE),
                ("offset", offset),
            ]),
            headers={"Prefer": "count=exact"},
        )

    # --- Monitoring ---
    async def get_monitoring_live(self) -> Any:
        return await self.request("monitoring_live")

    async def get_monitoring_history(self, start_date: str, end_date: str,
                                     sensors: Optional[List[str]] = None) -> Any:
        payload = {"start_date": start_date, "end_date": end_date, "sensors": sensors or []}
        return await self.request("rpc/monitoring_history_fn", method="POST", json_body=payload)

    async def get_timelapse(self, start_date: str, end_date: str) -> Any:
        payload = {"start_date": start_date, "end_date": end_date}
        return await self.request("rpc/timelapse_fn", method="POST", json_body=payload)

    async def get_timelapse_trips(self, start_date: str, end_date: str) -> Any:
        return await self.request(build_path("rpc/export_logbooks_geojson_point_trips_fn", [
            ("start_date", start_date),
            ("end_date", end_date),
        ]))

    # --- Stats ---
    async def get_stats_logs(self) -> Any:
        return await self.request("stats_logs_view")

    async def get_stats_moorages(self) -> Any:
        return await self.request("stats_moorages_view")

    async def get_stats(self, timeframe: str = "all") -> Any:
        return await self.request("rpc/stats_fn", method="POST", json_body={"timeframe": timeframe})

    # --- Account ---
    async def get_event_logs(self) -> Any:
        return await self.request("eventlogs_view")

    async def get_badges(self) -> Any:
        return await self.request("badges_view")

    async def get_settings(self) -> Any:
        return await self.request("rpc/settings_fn")
