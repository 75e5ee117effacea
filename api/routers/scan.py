"""Scoreboard photo analysis endpoint."""

import logging

from fastapi import APIRouter, File, UploadFile

from llm.vision import analyze_image_bytes
from models import VisionOutcome

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/analyze", response_model=VisionOutcome)
async def analyze_scan(file: UploadFile = File(...)):
    """Upload a scoreboard photo and read the score and table name from it.

    Always answers 200: when the photo cannot be read automatically the body
    carries placeholder values with isMockData=true and an error message, and
    the app falls back to manual entry.
    """
    data = await file.read()
    outcome = await analyze_image_bytes(
        data, file.filename or "", content_type=file.content_type,
    )

    if outcome.is_mock_data:
        logger.info("Scan of %s returned mock data: %s", file.filename, outcome.error)
    return outcome
