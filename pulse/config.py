"""Runtime configuration loaded from the environment."""

import os
from dataclasses import dataclass
from os import getenv
from pathlib import Path
from typing import Optional

ENV_FILE_PATHS = [
    Path("/opt/pulse/.env"),
    Path(__file__).parent.parent / ".env",
]

DEFAULT_DATABASE_URL = "postgresql+asyncpg://postgres:postgres@db:5432/pulse"
DEFAULT_EVENT_SCAN_CODE = "TechGuruMeetup2025"


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def load_env_file_fallback(paths: Optional[list] = None) -> int:
    """
    Load KEY=VALUE pairs from the first .env file found.

    Variables already present in the environment are never overridden.
    Returns the number of variables that were set.
    """
    for env_file in paths if paths is not None else ENV_FILE_PATHS:
        env_file = Path(env_file)
        if not (env_file.exists() and env_file.is_file()):
            continue
        loaded_count = 0
        with open(env_file, "r") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, value = line.split("=", 1)
                key = key.strip()
                value = _strip_quotes(value.strip())
                if key and value and key not in os.environ:
                    os.environ[key] = value
                    loaded_count += 1
        if loaded_count > 0:
            print(f"[Pulse] Loaded {loaded_count} environment variables from {env_file}")
        return loaded_count
    return 0


@dataclass(frozen=True)
class Settings:
    """Application settings."""

    database_url: str = DEFAULT_DATABASE_URL
    debug: bool = False
    frontend_url: Optional[str] = None
    event_scan_code: str = DEFAULT_EVENT_SCAN_CODE

    @classmethod
    def from_env(cls) -> "Settings":
        if not getenv("DATABASE_URL"):
            load_env_file_fallback()
        return cls(
            database_url=getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            debug=getenv("APP_DEBUG", "false").lower() == "true",
            frontend_url=getenv("FRONTEND_URL") or None,
            event_scan_code=getenv("EVENT_SCAN_CODE", DEFAULT_EVENT_SCAN_CODE),
        )

    @property
    def cors_origins(self) -> list:
        return [self.frontend_url] if self.frontend_url else ["*"]
