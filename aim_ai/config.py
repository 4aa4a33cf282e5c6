# aim_ai/config.py
"""
Startup configuration.

Everything the app needs from the environment is read once by load_config()
into a frozen AppConfig. Missing Supabase / Gemini credentials are not errors:
they switch the app into its demo modes (mock auth + local progress file,
offline tutor).
"""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict

from aim_ai.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_GEMINI_TIMEOUT = 60.0
DEFAULT_DATA_DIR = Path.home() / ".aim_ai"


class AppConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    supabase_url: Optional[str] = None
    supabase_anon_key: Optional[str] = None
    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    gemini_timeout: float = DEFAULT_GEMINI_TIMEOUT
    data_dir: Path = DEFAULT_DATA_DIR
    catalog_path: Optional[Path] = None
    log_level: str = "INFO"
    web: bool = False

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)

    @property
    def ai_configured(self) -> bool:
        return bool(self.gemini_api_key)

    @property
    def progress_file(self) -> Path:
        return self.data_dir / "progress.json"

    @property
    def session_file(self) -> Path:
        return self.data_dir / "supabase_session.json"


def _first(env: Mapping[str, str], *names: str) -> Optional[str]:
    for name in names:
        value = (env.get(name) or "").strip()
        if value:
            return value
    return None


def _parse_timeout(raw: Optional[str]) -> float:
    if raw is None:
        return DEFAULT_GEMINI_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"GEMINI_TIMEOUT must be a number, got {raw!r}")
    if value <= 0:
        raise ConfigError(f"GEMINI_TIMEOUT must be positive, got {raw!r}")
    return value


def load_config(env: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Build the AppConfig from `env` (defaults to os.environ)."""
    if env is None:
        env = os.environ

    data_dir = _first(env, "AIM_AI_DATA_DIR")
    catalog = _first(env, "AIM_AI_CATALOG")

    config = AppConfig(
        supabase_url=_first(env, "SUPABASE_URL", "VITE_SUPABASE_URL"),
        supabase_anon_key=_first(env, "SUPABASE_ANON_KEY", "VITE_SUPABASE_ANON_KEY"),
        gemini_api_key=_first(env, "GEMINI_API_KEY", "API_KEY"),
        gemini_model=_first(env, "GEMINI_MODEL") or DEFAULT_GEMINI_MODEL,
        gemini_timeout=_parse_timeout(_first(env, "GEMINI_TIMEOUT")),
        data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
        catalog_path=Path(catalog).expanduser() if catalog else None,
        log_level=(_first(env, "AIM_AI_LOG_LEVEL") or "INFO").upper(),
        web=_first(env, "AIM_AI_WEB") in ("1", "true", "yes"),
    )

    if not config.supabase_configured:
        logger.warning("Supabase not configured. Using mock auth and local progress storage.")
    if not config.ai_configured:
        logger.warning("GEMINI_API_KEY not set. The AI tutor runs in offline demo mode.")
    return config
