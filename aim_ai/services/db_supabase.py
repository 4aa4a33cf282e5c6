# aim_ai/services/db_supabase.py

import json
import logging
import pathlib
from typing import Any, Dict, List, Optional

from supabase import Client, create_client

from aim_ai.config import AppConfig

logger = logging.getLogger(__name__)

PROGRESS_TABLE = "user_progress"
PROGRESS_CONFLICT_KEY = "user_id,course_id,module_id"


# -------------------- Supabase Init --------------------
def create_supabase_client(config: AppConfig) -> Optional[Client]:
    """None when the project is not configured (demo mode)."""
    if not config.supabase_configured:
        return None
    return create_client(config.supabase_url, config.supabase_anon_key)


# -------------------- Session Persistence --------------------
def save_session(session_file: pathlib.Path, access_token: str, refresh_token: str) -> None:
    session_file.parent.mkdir(parents=True, exist_ok=True)
    session_file.write_text(json.dumps({
        "access_token": access_token,
        "refresh_token": refresh_token,
    }, indent=2))


def clear_saved_session(session_file: pathlib.Path) -> None:
    try:
        if session_file.exists():
            session_file.unlink()
    except OSError as e:
        logger.warning("Could not remove %s: %s", session_file, e)


def restore_session(sb: Client, session_file: pathlib.Path) -> bool:
    """Re-establish a saved session. False when nothing usable is stored."""
    if not session_file.exists():
        return False
    try:
        data = json.loads(session_file.read_text())
        access = data.get("access_token")
        refresh = data.get("refresh_token")
        if not access or not refresh:
            return False

        sb.auth.set_session(access, refresh)
        sess = sb.auth.get_session()
        return bool(sess and sess.user)
    except Exception as e:
        logger.warning("Saved session could not be restored: %s", e)
        return False


# -------------------- Auth --------------------
def send_magic_link(sb: Client, email: str, redirect_to: Optional[str] = None) -> None:
    options: Dict[str, Any] = {}
    if redirect_to:
        options["email_redirect_to"] = redirect_to
    sb.auth.sign_in_with_otp({"email": email, "options": options})


def verify_email_code(sb: Client, email: str, code: str):
    res = sb.auth.verify_otp({"email": email, "token": code, "type": "email"})
    return res.session


# -------------------- Progress --------------------
def upsert_progress(sb: Client, user_id: str, course_id: str, module_id: str) -> None:
    sb.table(PROGRESS_TABLE).upsert(
        {"user_id": user_id, "course_id": course_id, "module_id": module_id},
        on_conflict=PROGRESS_CONFLICT_KEY,
    ).execute()


def list_progress(sb: Client, user_id: str) -> List[Dict[str, Any]]:
    res = (
        sb.table(PROGRESS_TABLE)
        .select("course_id, module_id, completed_at")
        .eq("user_id", user_id)
        .execute()
    )
    return res.data or []
