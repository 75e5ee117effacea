"""Venue lookup and active venue endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Optional

from database.db_manager import DatabaseManager
from api.dependencies import get_db, get_pinballmap
from api.schemas import SetActiveVenueRequest
from models import ActiveVenue, PinballVenue
from venues.exceptions import VenueLookupError
from venues.pinballmap import PinballMapClient

router = APIRouter()


@router.get("/nearby", response_model=List[PinballVenue])
async def nearby_venues(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    pinballmap: PinballMapClient = Depends(get_pinballmap),
):
    try:
        return await pinballmap.get_nearby_venues(lat, lon)
    except VenueLookupError as e:
        raise HTTPException(502, str(e))


@router.get("/search", response_model=List[PinballVenue])
async def search_venues(
    q: str = Query(..., min_length=1),
    pinballmap: PinballMapClient = Depends(get_pinballmap),
):
    try:
        return await pinballmap.search_venues_by_name(q)
    except VenueLookupError as e:
        raise HTTPException(502, str(e))


@router.get("/active", response_model=Optional[ActiveVenue])
async def get_active_venue(db: DatabaseManager = Depends(get_db)):
    return await db.venues.get_active_venue()


@router.put("/active", response_model=ActiveVenue)
async def set_active_venue(req: SetActiveVenueRequest, db: DatabaseManager = Depends(get_db)):
    return await db.venues.set_active_venue(req.id, req.name)


@router.delete("/active", status_code=204)
async def clear_active_venue(db: DatabaseManager = Depends(get_db)):
    await db.venues.clear_active_venue()


@router.get("/{venue_id}/machines", response_model=List[str])
async def venue_machines(
    venue_id: int,
    pinballmap: PinballMapClient = Depends(get_pinballmap),
):
    return await pinballmap.get_machines_at_venue(venue_id)
