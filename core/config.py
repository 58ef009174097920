from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

PROJECT_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = str(PROJECT_ROOT / "config" / "sample_chatbot.json")


class Settings(BaseModel):
    """Runtime settings collected from the environment (.env supported)."""
    model_config = ConfigDict(str_strip_whitespace=True)

    config_path: str = DEFAULT_CONFIG_PATH
    seed: Optional[int] = None
    max_distance: Optional[int] = Field(default=None, ge=0)
    session_ttl: int = Field(default=3600, gt=0)
    history_limit: int = Field(default=50, ge=0)
    log_level: str = "INFO"

    @field_validator("seed", "max_distance", mode="before")
    @classmethod
    def empty_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def upper_level(cls, v: str) -> str:
        return v.upper()


def load_settings(env_file: Optional[str] = None) -> Settings:
    load_dotenv(env_file)
    values = {
        "config_path": os.getenv("CHATBOT_CONFIG"),
        "seed": os.getenv("CHATBOT_SEED"),
        "max_distance": os.getenv("CHATBOT_MAX_DISTANCE"),
        "session_ttl": os.getenv("CHATBOT_SESSION_TTL"),
        "history_limit": os.getenv("CHATBOT_HISTORY_LIMIT"),
        "log_level": os.getenv("LOG_LEVEL"),
    }
    return Settings(**{k: v for k, v in values.items() if v is not None})
