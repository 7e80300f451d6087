from __future__ import annotations

import os
from pathlib import Path

DEFAULT_NOTIFICATION_TIMEOUT = 3.0
_TRUTHY = {"1", "true", "yes", "on"}


def notification_timeout() -> float:
    raw = os.getenv("PORTAL_NOTIFICATION_TIMEOUT")
    if not raw:
        return DEFAULT_NOTIFICATION_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_NOTIFICATION_TIMEOUT
    return value if value > 0 else DEFAULT_NOTIFICATION_TIMEOUT


def strict_invariants() -> bool:
    return os.getenv("PORTAL_STRICT_INVARIANTS", "").strip().lower() in _TRUTHY


def requirements_file() -> Path | None:
    env_path = os.getenv("PORTAL_REQUIREMENTS_FILE")
    if env_path:
        return Path(env_path).expanduser().resolve()
    return None


def cors_origins() -> list[str]:
    origins_env = os.getenv("API_CORS_ORIGINS", "")
    origins = [origin.strip() for origin in origins_env.split(",") if origin.strip()]
    if not origins:
        origins = ["http://localhost:3000", "http://127.0.0.1:3000"]
    return origins
