# aim_ai/modules/progress_store.py
from __future__ import annotations

import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List

from aim_ai.errors import ProgressStoreError

logger = logging.getLogger(__name__)

KEY_PREFIX = "aim_ai_progress_"


def user_key(user_id: str) -> str:
    return f"{KEY_PREFIX}{user_id}"


class LocalProgressStore:
    """
    On-device progress used when Supabase is not configured.

    The file holds one namespaced key per user:
        { "aim_ai_progress_<uid>": [ {"courseId", "moduleId", "completedAt"}, ... ] }
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, List[dict]]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ProgressStoreError(f"Cannot read {self.path}: {e}")
        if not isinstance(data, dict):
            raise ProgressStoreError(f"Unexpected content in {self.path}")
        return data

    def _save(self, data: Dict[str, List[dict]]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(data, ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
        except OSError as e:
            raise ProgressStoreError(f"Cannot write {self.path}: {e}")

    def _user_entries(self, data: Dict[str, List[dict]], user_id: str) -> List[dict]:
        current = data.get(user_key(user_id), [])
        if not isinstance(current, list) or not all(isinstance(p, dict) for p in current):
            raise ProgressStoreError(f"Malformed progress for {user_id} in {self.path}")
        return current

    def entries(self, user_id: str) -> List[dict]:
        with self._lock:
            return list(self._user_entries(self._load(), user_id))

    def add(self, user_id: str, course_id: str, module_id: str) -> bool:
        """Append the triple unless already present. Returns True if it was added."""
        with self._lock:
            data = self._load()
            current = self._user_entries(data, user_id)
            exists = any(
                p.get("courseId") == course_id and p.get("moduleId") == module_id
                for p in current
            )
            if exists:
                return False
            current.append({
                "courseId": course_id,
                "moduleId": module_id,
                "completedAt": datetime.now(timezone.utc).isoformat(),
            })
            data[user_key(user_id)] = current
            self._save(data)
            logger.debug("Stored local progress %s/%s for %s", course_id, module_id, user_id)
            return True
