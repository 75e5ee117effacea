import asyncio
import logging
import os
from pathlib import Path
from typing import Awaitable, Callable, Optional

from dotenv import load_dotenv
load_dotenv()

from google import genai
from google.genai import types

from models import VisionOutcome
from llm.prompts import SCORE_EXTRACTION_PROMPT
from llm.response_parser import extract_score_response

logger = logging.getLogger(__name__)


# --- Configuration ---

GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.5-flash")
MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".heic": "image/heic",
}

# Placeholder shown when the photo could not be read automatically
MOCK_TABLE_NAME = "Medieval Madness"
MOCK_SCORE = 125_000_000
MOCK_MANUFACTURER = "Williams"


# --- File Loading ---

def _get_mime_type(filename: str, content_type: Optional[str] = None) -> str:
    """MIME type from the file extension, or from content_type when there is none."""
    suffix = Path(filename).suffix.lower()
    if suffix in MIME_TYPES:
        return MIME_TYPES[suffix]
    if not suffix and content_type in set(MIME_TYPES.values()):
        return content_type
    raise ValueError(
        f"Unsupported file type: {suffix or content_type or 'unknown'}. "
        f"Supported: {', '.join(sorted(MIME_TYPES.keys()))}"
    )


async def _load_file_as_part(file_path: Path) -> types.Part:
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")
    mime_type = _get_mime_type(file_path.name)
    data = await asyncio.to_thread(file_path.read_bytes)
    return types.Part.from_bytes(data=data, mime_type=mime_type)


# --- API Interaction ---

def _create_client() -> genai.Client:
    api_key = os.environ.get("GOOGLE_API_KEY")
    if not api_key:
        raise EnvironmentError(
            "GOOGLE_API_KEY environment variable is not set. "
            "Get an API key at https://aistudio.google.com/apikey"
        )
    return genai.Client(api_key=api_key)


async def _call_gemini(
    client: genai.Client,
    file_part: types.Part,
    prompt: str,
    model: str = GEMINI_MODEL,
) -> str:
    """Send prompt + image and return the reply text as-is."""
    response = await client.aio.models.generate_content(
        model=model,
        contents=[file_part, prompt],
        config=types.GenerateContentConfig(temperature=0.0),
    )
    return response.text or ""


# --- Outcomes ---

def mock_outcome(error: Optional[str] = None) -> VisionOutcome:
    """The fixed placeholder returned whenever analysis fails."""
    return VisionOutcome(
        score=MOCK_SCORE,
        table_name=MOCK_TABLE_NAME,
        confidence=0,
        manufacturer=MOCK_MANUFACTURER,
        is_mock_data=True,
        error=error,
    )


# --- Public API ---

async def _analyze(
    load_part: Callable[[], Awaitable[types.Part]],
    client: Optional[genai.Client],
    model: Optional[str],
) -> VisionOutcome:
    try:
        client = client or _create_client()
        file_part = await load_part()
        text = await _call_gemini(
            client, file_part, SCORE_EXTRACTION_PROMPT, model=model or GEMINI_MODEL,
        )
        result = extract_score_response(text)
    except Exception as e:
        error = str(e) or type(e).__name__
        logger.warning("Photo analysis failed, using mock data: %s", error)
        return mock_outcome(error)

    return VisionOutcome(
        score=result.score,
        table_name=result.table_name,
        confidence=1,
        is_mock_data=False,
    )


async def analyze_photo(
    photo_path: str | Path,
    *,
    client: Optional[genai.Client] = None,
    model: Optional[str] = None,
) -> VisionOutcome:
    """Read the score and table name from a scoreboard photo on disk.

    Never raises: any failure (missing API key, unreadable file, model error,
    unparseable reply) yields the mock outcome with `error` set so the app can
    offer manual entry instead.

    Args:
        photo_path: Path to a JPG, PNG, WEBP, or HEIC photo.
        client: Optional pre-built genai client. Defaults to one built from
            GOOGLE_API_KEY.
        model: Model name override. Defaults to GEMINI_MODEL.
    """
    return await _analyze(lambda: _load_file_as_part(Path(photo_path)), client, model)


async def analyze_image_bytes(
    data: bytes,
    filename: str,
    *,
    content_type: Optional[str] = None,
    client: Optional[genai.Client] = None,
    model: Optional[str] = None,
) -> VisionOutcome:
    """Same as analyze_photo for an uploaded image already in memory.

    The MIME type comes from the filename extension; an extensionless name
    falls back to content_type.
    """
    async def load_part() -> types.Part:
        return types.Part.from_bytes(data=data, mime_type=_get_mime_type(filename, content_type))

    return await _analyze(load_part, client, model)
