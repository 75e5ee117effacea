"""Table API endpoints."""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from database.db_manager import DatabaseManager
from api.dependencies import get_db
from api.schemas import CreateTableRequest
from models import Table, TableWithScores

router = APIRouter()


@router.get("", response_model=List[Table])
async def list_tables(db: DatabaseManager = Depends(get_db)):
    return await db.scores.get_tables()


@router.post("", response_model=Table, status_code=201)
async def create_table(req: CreateTableRequest, db: DatabaseManager = Depends(get_db)):
    """Create a table, or return the existing one with the same name."""
    return await db.scores.save_table(
        req.name, year=req.year, manufacturer=req.manufacturer,
    )


@router.get("/with-scores", response_model=List[TableWithScores])
async def tables_with_scores(
    venue_id: Optional[int] = Query(None),
    db: DatabaseManager = Depends(get_db),
):
    """Home screen: tables with their top 3 scores, optionally for one venue."""
    return await db.scores.get_tables_with_scores(venue_id=venue_id)


@router.get("/quick-select", response_model=List[Table])
async def quick_select_tables(
    limit: int = Query(7, ge=1, le=50),
    db: DatabaseManager = Depends(get_db),
):
    return await db.scores.get_quick_select_tables(limit=limit)


@router.get("/samples", response_model=List[Table])
async def sample_tables(db: DatabaseManager = Depends(get_db)):
    return await db.scores.get_sample_tables()
