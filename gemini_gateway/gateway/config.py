"""
Process configuration for the Gemini gateway.
Reads environment variables (and a local .env file) into an immutable settings object.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_PORT = 3000
DEFAULT_MAX_UPLOAD_MB = 20

_TRUTHY = {"1", "true", "yes", "on"}


def _as_bool(value: Optional[str], default: bool) -> bool:
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in _TRUTHY


def _as_int(name: str, value: Optional[str], default: Optional[int]) -> Optional[int]:
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}")


@dataclass(frozen=True)
class Settings:
    api_key: str
    model: str = DEFAULT_MODEL
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    max_upload_mb: int = DEFAULT_MAX_UPLOAD_MB
    expose_error_details: bool = True
    timeout_ms: Optional[int] = None
    cors_origins: Tuple[str, ...] = ("*",)
    debug: bool = False

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ (Mapping, optional): Source mapping. When omitted, `.env` is loaded
                and `os.environ` is used.

        Returns:
            Settings: The resolved configuration.

        Raises:
            RuntimeError: GEMINI_API_KEY is missing.
            ValueError: A numeric variable could not be parsed.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        api_key = environ.get("GEMINI_API_KEY")
        if not api_key:
            raise RuntimeError("GEMINI_API_KEY is missing. Set it in .env")

        max_upload_mb = _as_int("MAX_UPLOAD_MB", environ.get("MAX_UPLOAD_MB"), DEFAULT_MAX_UPLOAD_MB)
        if max_upload_mb <= 0:
            raise ValueError("MAX_UPLOAD_MB must be positive")

        origins = environ.get("CORS_ORIGINS", "*")
        cors_origins = tuple(o.strip() for o in origins.split(",") if o.strip()) or ("*",)

        return cls(
            api_key=api_key,
            model=environ.get("GEMINI_MODEL") or DEFAULT_MODEL,
            host=environ.get("HOST") or "0.0.0.0",
            port=_as_int("PORT", environ.get("PORT"), DEFAULT_PORT),
            max_upload_mb=max_upload_mb,
            expose_error_details=_as_bool(environ.get("EXPOSE_ERROR_DETAILS"), True),
            timeout_ms=_as_int("GEMINI_TIMEOUT_MS", environ.get("GEMINI_TIMEOUT_MS"), None),
            cors_origins=cors_origins,
            debug=_as_bool(environ.get("DEBUG"), False),
        )
