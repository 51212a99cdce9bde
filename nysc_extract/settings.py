# nysc_extract/settings.py
from __future__ import annotations
from functools import lru_cache
from typing import Optional, Dict, Any
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field
from pathlib import Path
import tomllib
from dotenv import load_dotenv

# Project root: .../nysc-extract
BASE_DIR = Path(__file__).resolve().parents[1]

# Force-load .env from project root, then fall back to CWD
load_dotenv(BASE_DIR / ".env")
load_dotenv()  # no-op if already loaded

class Settings(BaseSettings):
    # app
    app_title: str = Field(default="NYSC Extract")
    default_provider: str = Field(default="gemini")
    log_level: str = Field(default="INFO")
    max_upload_mb: int = Field(default=20)

    # provider creds; GEMINI_API_KEY wins over the bare API_KEY used by older deployments
    gemini_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("gemini_api_key", "GEMINI_API_KEY", "API_KEY"),
    )
    gemini_model: str = Field(default="gemini-3-flash-preview")

    # pydantic v2 settings config
    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
        env_file=[str(BASE_DIR / ".env"), ".env"],  # try both absolute and CWD .env
        env_file_encoding="utf-8",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # env and .env beat the TOML values passed in as init kwargs
        return env_settings, dotenv_settings, init_settings, file_secret_settings

def load_settings(cfg_path: Path | None = None) -> Settings:
    cfg_path = cfg_path or BASE_DIR / "config" / "app.toml"
    data: Dict[str, Any] = {}
    if cfg_path.exists():
        with cfg_path.open("rb") as f:
            data = tomllib.load(f)
    # TOML defaults + env override
    return Settings(**data.get("app", {}), **data.get("keys", {}))

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
