# aim_ai/services/progress_service.py
"""
ProgressService - per-user module completion and course percentages.

Two backends, picked once at startup:
- SupabaseProgressBackend: `user_progress` table, upsert on the
  (user_id, course_id, module_id) key
- LocalProgressBackend: JSON file on this device (demo mode)

Percentages are never stored. They are recomputed from the records and the
catalog on every read, so they cannot drift.

Progress is best-effort: backend failures are logged and reported as
False / empty progress, never raised to the views.
"""

import logging
from typing import Dict, List, Optional, Protocol, Set, Tuple

from pydantic import ValidationError
from supabase import Client

from aim_ai.errors import ProgressStoreError
from aim_ai.models import ProgressRecord
from aim_ai.modules.catalog import Catalog
from aim_ai.modules.progress_store import LocalProgressStore
from aim_ai.services import db_supabase

logger = logging.getLogger(__name__)


def percentage(completed: int, total: int) -> int:
    """round(100 * completed / total), halves rounded up."""
    return (200 * completed + total) // (2 * total)


class ProgressBackend(Protocol):
    def save(self, user_id: str, course_id: str, module_id: str) -> None: ...

    def fetch(self, user_id: str) -> List[ProgressRecord]: ...


class SupabaseProgressBackend:
    def __init__(self, client: Client):
        self.client = client

    def save(self, user_id: str, course_id: str, module_id: str) -> None:
        try:
            db_supabase.upsert_progress(self.client, user_id, course_id, module_id)
        except Exception as e:
            raise ProgressStoreError(f"Supabase upsert failed: {e}") from e

    def fetch(self, user_id: str) -> List[ProgressRecord]:
        try:
            rows = db_supabase.list_progress(self.client, user_id)
        except Exception as e:
            raise ProgressStoreError(f"Supabase select failed: {e}") from e
        try:
            return [
                ProgressRecord(
                    user_id=user_id,
                    course_id=r["course_id"],
                    module_id=r["module_id"],
                    completed_at=r.get("completed_at"),
                )
                for r in rows
            ]
        except (KeyError, TypeError, ValidationError) as e:
            raise ProgressStoreError(f"Unexpected progress row: {e}") from e


class LocalProgressBackend:
    def __init__(self, store: LocalProgressStore):
        self.store = store

    def save(self, user_id: str, course_id: str, module_id: str) -> None:
        self.store.add(user_id, course_id, module_id)

    def fetch(self, user_id: str) -> List[ProgressRecord]:
        entries = self.store.entries(user_id)
        try:
            return [
                ProgressRecord(
                    user_id=user_id,
                    course_id=p["courseId"],
                    module_id=p["moduleId"],
                    completed_at=p.get("completedAt"),
                )
                for p in entries
                if p.get("courseId") and p.get("moduleId")
            ]
        except ValidationError as e:
            raise ProgressStoreError(f"Unexpected local progress entry: {e}") from e


class ProgressService:
    def __init__(self, backend: ProgressBackend, catalog: Catalog):
        self.backend = backend
        self.catalog = catalog

    def mark_complete(self, user_id: str, course_id: str, module_id: str) -> bool:
        """Record a completed module. Safe to call repeatedly."""
        try:
            self.backend.save(user_id, course_id, module_id)
        except ProgressStoreError as e:
            logger.error("Could not mark %s/%s complete: %s", course_id, module_id, e)
            return False
        logger.debug("Marked %s/%s complete for %s", course_id, module_id, user_id)
        return True

    def _records(self, user_id: str) -> List[ProgressRecord]:
        try:
            return self.backend.fetch(user_id)
        except ProgressStoreError as e:
            logger.error("Could not load progress for %s: %s", user_id, e)
            return []

    def _completed_by_course(self, records: List[ProgressRecord]) -> Dict[str, set]:
        # only distinct module ids that still belong to the course count
        done: Dict[str, set] = {}
        for r in records:
            course = self.catalog.get_course(r.course_id)
            if course is None or r.module_id not in course.module_ids():
                continue
            done.setdefault(r.course_id, set()).add(r.module_id)
        return done

    def _percentages(self, done: Dict[str, set]) -> Dict[str, int]:
        progress: Dict[str, int] = {}
        for course in self.catalog:
            total = len(course.modules)
            if total == 0:
                continue
            progress[course.id] = percentage(len(done.get(course.id, ())), total)
        return progress

    def get_user_progress(self, user_id: str) -> Dict[str, int]:
        """course_id -> completion percentage (0-100) for every non-empty course."""
        return self._percentages(self._completed_by_course(self._records(user_id)))

    def get_progress_snapshot(self, user_id: str) -> Tuple[Dict[str, int], Set[Tuple[str, str]]]:
        """Percentages and completed (course_id, module_id) pairs from a single read."""
        done = self._completed_by_course(self._records(user_id))
        pairs = {(c, m) for c, ids in done.items() for m in ids}
        return self._percentages(done), pairs

    def get_completed_module_ids(self, user_id: str, course_id: Optional[str] = None) -> set:
        """Completed module ids, optionally limited to one course."""
        done = self._completed_by_course(self._records(user_id))
        if course_id is not None:
            return set(done.get(course_id, ()))
        return {m for ids in done.values() for m in ids}

    def get_completed_pairs(self, user_id: str) -> set:
        """{(course_id, module_id)} for everything the user finished."""
        done = self._completed_by_course(self._records(user_id))
        return {(c, m) for c, ids in done.items() for m in ids}


def build_progress_service(
    catalog: Catalog,
    client: Optional[Client],
    local_store: LocalProgressStore,
) -> ProgressService:
    if client is not None:
        backend: ProgressBackend = SupabaseProgressBackend(client)
    else:
        backend = LocalProgressBackend(local_store)
    logger.info("Progress backend: %s", type(backend).__name__)
    return ProgressService(backend, catalog)
