"""Active venue context: where the player is logging scores right now."""

import json
import logging
from typing import Optional

from models import ActiveVenue
from database.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

ACTIVE_VENUE_KEY = "flipperslog:active_venue"


class VenueContextRepository:
    """Persists the single active venue."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    async def set_active_venue(self, venue_id: int, venue_name: str) -> ActiveVenue:
        """Replace any previous active venue."""
        venue = ActiveVenue(id=venue_id, name=venue_name)
        await self._store.set(ACTIVE_VENUE_KEY, json.dumps(venue.to_record()))
        return venue

    async def get_active_venue(self) -> Optional[ActiveVenue]:
        data = await self._store.get(ACTIVE_VENUE_KEY)
        if not data:
            return None
        try:
            return ActiveVenue.model_validate_json(data)
        except ValueError as e:
            logger.error("Error loading active venue: %s", e)
            return None

    async def clear_active_venue(self) -> None:
        await self._store.delete(ACTIVE_VENUE_KEY)
