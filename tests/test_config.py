from pathlib import Path

import pytest
from pydantic import ValidationError

from aim_ai.config import DEFAULT_DATA_DIR, AppConfig, load_config
from aim_ai.errors import ConfigError


class TestLoadConfig:
    def test_empty_environment_is_demo_mode(self):
        config = load_config({})
        assert config.supabase_configured is False
        assert config.ai_configured is False
        assert config.gemini_model == "gemini-2.5-flash"
        assert config.gemini_timeout == 60
        assert config.data_dir == DEFAULT_DATA_DIR
        assert config.log_level == "INFO"
        assert config.web is False

    def test_vite_aliases(self):
        config = load_config({
            "VITE_SUPABASE_URL": "https://demo.supabase.co",
            "VITE_SUPABASE_ANON_KEY": "anon",
            "API_KEY": "gem",
        })
        assert config.supabase_url == "https://demo.supabase.co"
        assert config.supabase_configured is True
        assert config.gemini_api_key == "gem"

    def test_primary_names_win(self):
        config = load_config({
            "SUPABASE_URL": "https://a.supabase.co",
            "VITE_SUPABASE_URL": "https://b.supabase.co",
            "GEMINI_API_KEY": "primary",
            "API_KEY": "alias",
        })
        assert config.supabase_url == "https://a.supabase.co"
        assert config.gemini_api_key == "primary"

    def test_url_without_key_is_not_configured(self):
        assert load_config({"SUPABASE_URL": "https://a.supabase.co"}).supabase_configured is False

    def test_blank_values_ignored(self):
        assert load_config({"GEMINI_API_KEY": "   "}).ai_configured is False

    def test_overrides(self, tmp_path):
        config = load_config({
            "GEMINI_MODEL": "gemini-2.0-flash",
            "GEMINI_TIMEOUT": "12.5",
            "AIM_AI_DATA_DIR": str(tmp_path),
            "AIM_AI_CATALOG": str(tmp_path / "courses.json"),
            "AIM_AI_LOG_LEVEL": "debug",
            "AIM_AI_WEB": "1",
        })
        assert config.gemini_model == "gemini-2.0-flash"
        assert config.gemini_timeout == 12.5
        assert config.progress_file == tmp_path / "progress.json"
        assert config.session_file == tmp_path / "supabase_session.json"
        assert config.catalog_path == tmp_path / "courses.json"
        assert config.log_level == "DEBUG"
        assert config.web is True

    @pytest.mark.parametrize("raw", ["soon", "0", "-5"])
    def test_bad_timeout(self, raw):
        with pytest.raises(ConfigError):
            load_config({"GEMINI_TIMEOUT": raw})

    def test_config_is_frozen(self):
        config = AppConfig(data_dir=Path("/tmp/x"))
        with pytest.raises(ValidationError):
            config.gemini_model = "other"
