"""Process configuration loaded from environment variables."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"
HF_INFERENCE_URL = "https://router.huggingface.co/hf-inference/models"
HF_MODEL = "black-forest-labs/FLUX.1-schnell"


@dataclass(frozen=True)
class Settings:
    """Represents server settings loaded from environment variables."""

    hf_token: Optional[str] = None
    hf_model: str = HF_MODEL
    hf_inference_url: str = HF_INFERENCE_URL
    nominatim_url: str = NOMINATIM_URL
    open_meteo_url: str = OPEN_METEO_URL
    user_agent: str = "MCP-Server/1.0.0"
    http_timeout: Optional[float] = None  # seconds; None waits indefinitely
    default_timezone: str = "Asia/Seoul"
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Settings":
        """
        Load settings from environment variables.

        Returns:
            Settings with defaults for anything not set
        """
        timeout = None
        raw_timeout = os.getenv("MCP_HTTP_TIMEOUT")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                # Invalid format, fall back to no timeout
                logger.warning("Ignoring invalid MCP_HTTP_TIMEOUT=%r", raw_timeout)
            else:
                if timeout <= 0:
                    timeout = None

        return cls(
            hf_token=os.getenv("HF_TOKEN") or None,
            hf_model=os.getenv("HF_MODEL", HF_MODEL),
            hf_inference_url=os.getenv("HF_INFERENCE_URL", HF_INFERENCE_URL).rstrip("/"),
            nominatim_url=os.getenv("NOMINATIM_URL", NOMINATIM_URL),
            open_meteo_url=os.getenv("OPEN_METEO_URL", OPEN_METEO_URL),
            user_agent=os.getenv("MCP_USER_AGENT", "MCP-Server/1.0.0"),
            http_timeout=timeout,
            default_timezone=os.getenv("MCP_DEFAULT_TIMEZONE", "Asia/Seoul"),
            log_level=os.getenv("MCP_LOG_LEVEL", "INFO").upper(),
        )
