from fastapi import Request
from database.db_manager import DatabaseManager
from venues.pinballmap import PinballMapClient


def get_db(request: Request) -> DatabaseManager:
    """FastAPI dependency that provides the DatabaseManager."""
    return request.app.state.db_manager


def get_pinballmap(request: Request) -> PinballMapClient:
    """FastAPI dependency that provides the shared Pinball Map client."""
    return request.app.state.pinballmap
