import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from api.client import DEFAULT_API_URL

load_dotenv()


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    storage_path: str = "data/local_storage.sqlite"
    rider_payout: float = 2500
    request_timeout: Optional[float] = 30.0
    debug: bool = False


def load_settings() -> Settings:
    """Read settings from the environment (and .env, if present)."""
    timeout = _float_env("SWIFTLOGI_TIMEOUT", 30.0)
    return Settings(
        api_url=os.getenv("SWIFTLOGI_API_URL", "").strip() or DEFAULT_API_URL,
        storage_path=os.getenv("SWIFTLOGI_STORAGE", "").strip()
        or Settings.storage_path,
        rider_payout=_float_env("SWIFTLOGI_RIDER_PAYOUT", 2500),
        request_timeout=timeout if timeout > 0 else None,
        debug=bool(os.getenv("DEBUG")),
    )
