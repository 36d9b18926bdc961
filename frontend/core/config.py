import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()


def _env(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


def _env_float(name: str, default: float) -> float:
    raw = _env(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r, not a number; using %s", name, raw, default)
        return default


@dataclass
class Settings:
    # Base URL of the REST backend. The backend mounts its resources under /api,
    # so that prefix lives here and service paths stay /supplies and /inventory.
    api_base_url: str = field(
        default_factory=lambda: _env("SUPPLY_API_BASE_URL") or "http://localhost:8080/api"
    )
    api_token: str = field(default_factory=lambda: _env("SUPPLY_API_TOKEN"))
    api_timeout: float = field(default_factory=lambda: _env_float("SUPPLY_API_TIMEOUT", 30.0))

    download_dir: str = field(default_factory=lambda: _env("SUPPLY_DOWNLOAD_DIR", ".") or ".")

    log_level: str = field(default_factory=lambda: _env("SUPPLY_LOG_LEVEL", "INFO").upper() or "INFO")
    log_file: str = field(default_factory=lambda: _env("SUPPLY_LOG_FILE", "supply_console.log"))


settings = Settings()
