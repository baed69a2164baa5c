from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


MATCH_POLICIES = ("first", "longest")

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


# -------------------------
# Helpers
# -------------------------

def _get_env(name: str, default: Optional[str] = None) -> str:
    val = os.getenv(name, default)
    if val is None or val.strip() == "":
        if default is not None:
            return default
        raise RuntimeError(f"Missing required environment variable: {name}")
    return val.strip()


def _get_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, "true" if default else "false").lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    raise RuntimeError(f"Invalid boolean for {name}: {raw!r}")


def _get_float(name: str, default: float) -> float:
    raw = _get_env(name, str(default))
    try:
        val = float(raw)
    except ValueError:
        raise RuntimeError(f"Invalid number for {name}: {raw!r}")
    if val <= 0:
        raise RuntimeError(f"{name} must be positive, got {val}")
    return val


def parse_origins(raw: str) -> list[str]:
    raw = (raw or "").strip()
    if not raw:
        return ["*"]
    if raw == "*":
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()]


# -------------------------
# Settings
# -------------------------

@dataclass(frozen=True)
class Settings:
    service_url: str = "http://localhost:8000"
    timeout: float = 30.0
    use_mock_data: bool = False
    catalog_match: str = "first"
    cors_origins: tuple[str, ...] = ("*",)

    def endpoint_url(self, path: str) -> str:
        return f"{self.service_url.rstrip('/')}{path}"


def load_settings() -> Settings:
    match = _get_env("CONTENT_CATALOG_MATCH", "first").lower()
    if match not in MATCH_POLICIES:
        raise RuntimeError(
            f"CONTENT_CATALOG_MATCH must be one of {', '.join(MATCH_POLICIES)}, got {match!r}"
        )

    return Settings(
        service_url=_get_env("CONTENT_SERVICE_URL", "http://localhost:8000").rstrip("/"),
        timeout=_get_float("CONTENT_SERVICE_TIMEOUT", 30.0),
        use_mock_data=_get_bool("CONTENT_USE_MOCK_DATA", False),
        catalog_match=match,
        cors_origins=tuple(parse_origins(os.getenv("CORS_ORIGINS", "*"))),
    )
