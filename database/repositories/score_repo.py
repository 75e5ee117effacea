"""Score and table bookkeeping over the key-value store."""

import json
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, TypeVar
from uuid import uuid4

from pydantic import BaseModel

from models import Score, Table, TableWithScores
from database.exceptions import NotFoundError
from database.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

SCORES_KEY = "flipperslog:scores"
TABLES_KEY = "flipperslog:tables"

TOP_SCORES_PER_TABLE = 3

T = TypeVar("T", bound=BaseModel)


def _new_id() -> str:
    return str(uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _find_table(
    tables: List[Table], table_id: Optional[str], table_name: Optional[str],
) -> Optional[Table]:
    """Match by id first, then case-insensitive name."""
    if table_id is not None:
        for t in tables:
            if t.id == table_id:
                return t
    if table_name is not None:
        for t in tables:
            if t.matches_name(table_name):
                return t
    return None


class ScoreRepository:
    """Async CRUD for scores and the tables they are grouped under.

    Tables exist only while at least one score references them: deleting
    or re-filing the last score of a table removes the table.
    """

    def __init__(self, store: KeyValueStore):
        self._store = store

    # ================================================================
    # Private helpers
    # ================================================================

    async def _load(self, key: str, parse: Callable[[dict], T]) -> List[T]:
        data = await self._store.get(key)
        if not data:
            return []
        try:
            return [parse(record) for record in json.loads(data)]
        except (ValueError, TypeError) as e:
            logger.error("Error loading %s: %s", key, e)
            return []

    async def _write(self, key: str, items: List[BaseModel]) -> None:
        await self._store.set(key, json.dumps([i.to_record() for i in items]))

    async def _touch_table(self, table_name: str) -> Table:
        """Ensure a table with this name exists and stamp it as just used."""
        tables = await self.get_tables()
        table = _find_table(tables, None, table_name)
        if table is None:
            table = Table(id=_new_id(), name=table_name)
            tables.append(table)
        table.last_used_date = _now()
        await self._write(TABLES_KEY, tables)
        return table

    async def _remove_if_orphaned(
        self, scores: List[Score], table_id: Optional[str], table_name: Optional[str],
    ) -> None:
        tables = await self.get_tables()
        table = _find_table(tables, table_id, table_name)
        if table is None:
            return
        if any(s.belongs_to(table.id, table.name) for s in scores):
            return
        tables.remove(table)
        await self._write(TABLES_KEY, tables)

    # ================================================================
    # Scores
    # ================================================================

    async def get_scores(self) -> List[Score]:
        """All scores in insertion order."""
        return await self._load(SCORES_KEY, Score.model_validate)

    async def get_score_by_id(self, score_id: str) -> Optional[Score]:
        for s in await self.get_scores():
            if s.id == score_id:
                return s
        return None

    async def save_score(self, score: Score) -> Score:
        """Store a score as given (legacy path: linked by table_id)."""
        scores = await self.get_scores()
        new_score = score.model_copy(update={"id": _new_id()})
        scores.append(new_score)
        await self._write(SCORES_KEY, scores)
        return new_score

    async def add_score(
        self,
        score: int,
        table_name: str,
        date: str,
        *,
        photo_uri: Optional[str] = None,
        venue_id: Optional[int] = None,
    ) -> Score:
        """Log a score under a table name, creating the table if needed."""
        new_score = Score(
            id=_new_id(),
            score=score,
            table_name=table_name,
            date=date,
            photo_uri=photo_uri,
            venue_id=venue_id,
        )
        await self._touch_table(table_name)
        scores = await self.get_scores()
        scores.append(new_score)
        await self._write(SCORES_KEY, scores)
        return new_score

    async def update_score(
        self,
        score_id: str,
        *,
        score: Optional[int] = None,
        table_name: Optional[str] = None,
        date: Optional[str] = None,
        photo_uri: Optional[str] = None,
    ) -> Score:
        """Edit a score. Moving it to another table may remove the old one."""
        scores = await self.get_scores()
        index = next((i for i, s in enumerate(scores) if s.id == score_id), None)
        if index is None:
            raise NotFoundError(f"Score {score_id} not found")

        old = scores[index]
        changes = {
            k: v for k, v in {
                "score": score, "table_name": table_name,
                "date": date, "photo_uri": photo_uri,
            }.items() if v is not None
        }
        if table_name is not None:
            changes["table_id"] = None
        updated = Score.model_validate({**old.model_dump(), **changes})
        scores[index] = updated
        await self._write(SCORES_KEY, scores)

        if table_name is not None:
            await self._touch_table(table_name)
            await self._remove_if_orphaned(scores, old.table_id, old.table_name)
        return updated

    async def delete_score(self, score_id: str) -> bool:
        """Delete a score, and its table if no other score uses it."""
        scores = await self.get_scores()
        removed = next((s for s in scores if s.id == score_id), None)
        if removed is None:
            return False
        scores.remove(removed)
        await self._write(SCORES_KEY, scores)
        await self._remove_if_orphaned(scores, removed.table_id, removed.table_name)
        return True

    # ================================================================
    # Tables
    # ================================================================

    async def get_tables(self) -> List[Table]:
        return await self._load(TABLES_KEY, Table.model_validate)

    async def save_table(
        self,
        name: str,
        *,
        year: Optional[int] = None,
        manufacturer: Optional[str] = None,
        last_used_date: Optional[datetime] = None,
        table_id: Optional[str] = None,
    ) -> Table:
        """Create a table, or return the existing one with this id or name."""
        tables = await self.get_tables()
        existing = (
            _find_table(tables, table_id, None) if table_id is not None
            else _find_table(tables, None, name)
        )
        if existing is not None:
            return existing

        table = Table(
            id=table_id or _new_id(),
            name=name,
            year=year,
            manufacturer=manufacturer,
            last_used_date=last_used_date,
        )
        tables.append(table)
        await self._write(TABLES_KEY, tables)
        return table

    async def get_tables_with_scores(
        self, venue_id: Optional[int] = None,
    ) -> List[TableWithScores]:
        """Tables with their top scores, best table first.

        Tables with no scores (after the optional venue filter) are omitted.
        """
        tables = await self.get_tables()
        scores = await self.get_scores()
        if venue_id is not None:
            scores = [s for s in scores if s.venue_id == venue_id]

        result: List[TableWithScores] = []
        for table in tables:
            table_scores = sorted(
                (s for s in scores if s.belongs_to(table.id, table.name)),
                key=lambda s: s.score,
                reverse=True,
            )[:TOP_SCORES_PER_TABLE]
            if table_scores:
                result.append(TableWithScores(**table.model_dump(), top_scores=table_scores))

        result.sort(key=lambda t: t.best_score, reverse=True)
        return result

    async def get_quick_select_tables(self, limit: int = 7) -> List[Table]:
        """Most recently used tables for the manual entry picker.

        Falls back to the sample tables when nothing has been logged yet.
        """
        tables = await self.get_tables()
        if not tables:
            return (await self.get_sample_tables())[:limit]
        tables.sort(
            key=lambda t: t.last_used_date.timestamp() if t.last_used_date else float("-inf"),
            reverse=True,
        )
        return tables[:limit]

    async def get_sample_tables(self) -> List[Table]:
        return [
            Table(id="sample-1", name="Medieval Madness", manufacturer="Williams", year=1997),
            Table(id="sample-2", name="Attack from Mars", manufacturer="Bally", year=1995),
            Table(id="sample-3", name="The Addams Family", manufacturer="Bally", year=1992),
        ]

    async def clear_all(self) -> None:
        """Remove all scores and tables."""
        await self._store.delete(SCORES_KEY)
        await self._store.delete(TABLES_KEY)
