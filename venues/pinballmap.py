"""Pinball Map client (https://pinballmap.com).

Community-maintained database of pinball locations and machines.
"""

import logging
import math
import os
from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import httpx

from models import PinballVenue
from venues.exceptions import VenueLookupError

logger = logging.getLogger(__name__)

BASE_URL = "https://pinballmap.com/api/v1"
DEFAULT_REGIONS = ("seattle", "spokane")
NEARBY_RADII_KM = (0.5, 1.0)  # widen to the next radius only when nothing is found
MAX_NEARBY_VENUES = 3
EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two coordinates in kilometers."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def _regions_from_env() -> Sequence[str]:
    raw = os.environ.get("PINBALLMAP_REGIONS")
    if not raw:
        return DEFAULT_REGIONS
    return tuple(r.strip() for r in raw.split(",") if r.strip())


@dataclass
class Location:
    """A Pinball Map location as listed by the region endpoint."""
    id: int
    name: str
    lat: float
    lng: float


class PinballMapClient:
    """Looks up venues and machines across the configured regions.

    Args:
        regions: Pinball Map region slugs. Defaults to PINBALLMAP_REGIONS
            or seattle + spokane.
        http_client: Optional shared AsyncClient. When omitted a client is
            opened per request.
    """

    def __init__(
        self,
        regions: Optional[Sequence[str]] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        base_url: str = BASE_URL,
        timeout: float = 10.0,
    ) -> None:
        self.regions = tuple(regions) if regions else tuple(_regions_from_env())
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = http_client

    async def _get_json(self, path: str) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            if self._http is not None:
                response = await self._http.get(url, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise VenueLookupError(f"Pinball Map request failed for {path}: {e}") from e
        except ValueError as e:
            raise VenueLookupError(f"Pinball Map returned invalid JSON for {path}") from e
        if not isinstance(data, dict):
            raise VenueLookupError(
                f"Pinball Map returned an unexpected payload for {path}: {type(data).__name__}"
            )
        return data

    # ================================================================
    # Raw endpoints
    # ================================================================

    async def fetch_locations(self) -> List[Location]:
        """All locations in every configured region."""
        locations: List[Location] = []
        for region in self.regions:
            data = await self._get_json(f"/region/{region}/locations.json")
            for loc in data.get("locations") or []:
                try:
                    if not isinstance(loc["name"], str):
                        raise TypeError("location name is not a string")
                    locations.append(Location(
                        id=int(loc["id"]),
                        name=loc["name"],
                        lat=float(loc["lat"]),
                        lng=float(loc["lon"]),
                    ))
                except (KeyError, TypeError, ValueError):
                    logger.debug("Skipping malformed location in %s: %r", region, loc)
        return locations

    async def fetch_machine_xrefs(self) -> List[Dict[str, Any]]:
        """Location/machine pairs in every configured region."""
        xrefs: List[Dict[str, Any]] = []
        for region in self.regions:
            data = await self._get_json(f"/region/{region}/location_machine_xrefs.json")
            xrefs.extend(
                x for x in data.get("location_machine_xrefs") or [] if isinstance(x, dict)
            )
        return xrefs

    async def _machine_counts(self) -> Counter:
        try:
            xrefs = await self.fetch_machine_xrefs()
        except VenueLookupError as e:
            logger.error("Error fetching machine counts: %s", e)
            return Counter()
        return Counter(
            x["location_id"] for x in xrefs if isinstance(x.get("location_id"), int)
        )

    # ================================================================
    # Public lookups
    # ================================================================

    async def get_nearby_venues(self, latitude: float, longitude: float) -> List[PinballVenue]:
        """Up to three closest venues within 0.5 km, or 1 km if none are that close.

        Raises:
            VenueLookupError: If the location list cannot be fetched.
        """
        locations = await self.fetch_locations()
        distances = [
            (loc, haversine_km(latitude, longitude, loc.lat, loc.lng))
            for loc in locations
        ]

        within = []
        for radius in NEARBY_RADII_KM:
            within = [(loc, d) for loc, d in distances if d <= radius]
            if within:
                break
        if not within:
            return []

        within.sort(key=lambda pair: pair[1])
        counts = await self._machine_counts()
        return [
            PinballVenue(
                id=loc.id,
                name=loc.name,
                latitude=loc.lat,
                longitude=loc.lng,
                machine_count=counts.get(loc.id, 0),
                distance=d,
            )
            for loc, d in within[:MAX_NEARBY_VENUES]
        ]

    async def search_venues_by_name(self, query: str) -> List[PinballVenue]:
        """Case-insensitive partial match on venue name. Distance is always 0.

        Raises:
            VenueLookupError: If the location list cannot be fetched.
        """
        needle = query.strip().lower()
        matches = [loc for loc in await self.fetch_locations() if needle in loc.name.lower()]
        if not matches:
            return []
        counts = await self._machine_counts()
        return [
            PinballVenue(
                id=loc.id,
                name=loc.name,
                latitude=loc.lat,
                longitude=loc.lng,
                machine_count=counts.get(loc.id, 0),
            )
            for loc in matches
        ]

    async def get_machines_at_venue(self, venue_id: int) -> List[str]:
        """Machine names at a venue. Returns [] if Pinball Map is unavailable."""
        try:
            xrefs = await self.fetch_machine_xrefs()
        except VenueLookupError as e:
            logger.error("Error fetching machines for venue %s: %s", venue_id, e)
            return []
        names = []
        for x in xrefs:
            machine = x.get("machine")
            # entries with a null or nameless machine are skipped
            if x.get("location_id") == venue_id and isinstance(machine, dict) and machine.get("name"):
                names.append(machine["name"])
        return names
