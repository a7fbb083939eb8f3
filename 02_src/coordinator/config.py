"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_DB_PATH = DATA_DIR / "coordinator.db"
DEFAULT_LOG_PATH = LOGS_DIR / "coordinator.log"

# Upper bound of one server-side long-poll, in seconds
MAX_WAIT_TIMEOUT = 300.0


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


@dataclass
class Settings:
    """Runtime settings read from the environment."""

    db_path: PathLike
    url: str | None
    poll_interval: float
    max_poll_interval: float
    wait_timeout: float
    api_host: str
    api_port: int

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        return cls(
            db_path=resolve_db_path(os.getenv("DATABASE_URL")),
            url=os.getenv("COORDINATOR_URL") or None,
            poll_interval=float(os.getenv("COORDINATOR_POLL_INTERVAL", "0.5")),
            max_poll_interval=float(os.getenv("COORDINATOR_MAX_POLL_INTERVAL", "5.0")),
            wait_timeout=float(os.getenv("COORDINATOR_WAIT_TIMEOUT", "30.0")),
            api_host=os.getenv("API_HOST", "localhost"),
            api_port=int(os.getenv("API_PORT", "8000")),
        )
