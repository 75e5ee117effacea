"""Score API endpoints."""

import logging
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from database.db_manager import DatabaseManager
from database.exceptions import NotFoundError
from api.dependencies import get_db
from api.schemas import AddScoreRequest, UpdateScoreRequest
from models import Score

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[Score])
async def list_scores(db: DatabaseManager = Depends(get_db)):
    return await db.scores.get_scores()


@router.get("/{score_id}", response_model=Score)
async def get_score(score_id: str, db: DatabaseManager = Depends(get_db)):
    score = await db.scores.get_score_by_id(score_id)
    if not score:
        raise HTTPException(404, "Score not found")
    return score


@router.post("", response_model=Score, status_code=201)
async def add_score(req: AddScoreRequest, db: DatabaseManager = Depends(get_db)):
    """Log a score, tagging it with the active venue when none is given."""
    venue_id = req.venue_id
    if venue_id is None:
        active = await db.venues.get_active_venue()
        venue_id = active.id if active else None

    try:
        return await db.scores.add_score(
            req.score,
            req.table_name,
            req.date or datetime.now(timezone.utc).isoformat(),
            photo_uri=req.photo_uri,
            venue_id=venue_id,
        )
    except ValidationError as e:
        raise HTTPException(422, e.errors()[0]["msg"])


@router.patch("/{score_id}", response_model=Score)
async def update_score(
    score_id: str,
    req: UpdateScoreRequest,
    db: DatabaseManager = Depends(get_db),
):
    """Edit a score. Changing the table name re-files it under that table."""
    try:
        return await db.scores.update_score(
            score_id,
            score=req.score,
            table_name=req.table_name,
            date=req.date,
            photo_uri=req.photo_uri,
        )
    except NotFoundError:
        raise HTTPException(404, "Score not found")
    except ValidationError as e:
        raise HTTPException(422, e.errors()[0]["msg"])


@router.delete("/{score_id}", status_code=204)
async def delete_score(score_id: str, db: DatabaseManager = Depends(get_db)):
    deleted = await db.scores.delete_score(score_id)
    if not deleted:
        raise HTTPException(404, "Score not found")
