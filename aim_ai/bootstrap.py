# aim_ai/bootstrap.py
"""
Wire the services once at startup.

The mode decision (Supabase vs. demo, Gemini vs. offline) happens here and
nowhere else; views receive the finished AppContext.
"""

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict

from aim_ai.config import AppConfig
from aim_ai.engines.gemini_engine import build_tutor_engine
from aim_ai.modules.catalog import Catalog, load_catalog
from aim_ai.modules.progress_store import LocalProgressStore
from aim_ai.services.auth_provider import AuthProvider, build_auth_provider
from aim_ai.services.db_supabase import create_supabase_client
from aim_ai.services.progress_service import ProgressService, build_progress_service

logger = logging.getLogger(__name__)


class AppContext(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: AppConfig
    catalog: Catalog
    auth: AuthProvider
    progress: ProgressService
    tutor: object  # GeminiEngine | OfflineTutorEngine

    @property
    def is_mock(self) -> bool:
        return self.auth.is_mock


def build_context(config: AppConfig, mock_delay: float = 0.5, client: Optional[object] = None) -> AppContext:
    catalog = load_catalog(config.catalog_path)
    if client is None:
        client = create_supabase_client(config)

    auth = build_auth_provider(client, config.session_file, mock_delay=mock_delay)
    progress = build_progress_service(catalog, client, LocalProgressStore(config.progress_file))
    tutor = build_tutor_engine(config)

    logger.info(
        "Aim AI ready: %d courses, auth=%s, tutor=%s",
        len(catalog),
        type(auth).__name__,
        type(tutor).__name__,
    )
    return AppContext(config=config, catalog=catalog, auth=auth, progress=progress, tutor=tutor)
