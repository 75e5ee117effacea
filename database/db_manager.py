from database.kv_store import KeyValueStore
from database.repositories import ScoreRepository, VenueContextRepository


class DatabaseManager:
    """Bundles the repositories that share one key-value store."""

    def __init__(self, store: KeyValueStore):
        self.store = store
        self.scores = ScoreRepository(store)
        self.venues = VenueContextRepository(store)
