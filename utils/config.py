# utils/config.py

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_API_BASE_URL = "http://localhost:5000/api"


@dataclass(frozen=True)
class Settings:
    api_base_url: str = DEFAULT_API_BASE_URL
    log_level: str = "INFO"


def load_settings() -> Settings:
    """
    Read settings from the environment (and a local .env file if present).

      - API_BASE_URL: root of the REST backend, e.g. http://host:5000/api
      - LOG_LEVEL: standard logging level name
    """
    load_dotenv()
    base_url = os.getenv("API_BASE_URL") or DEFAULT_API_BASE_URL
    log_level = (os.getenv("LOG_LEVEL") or "INFO").upper()
    return Settings(api_base_url=base_url.rstrip("/"), log_level=log_level)


def configure_logging(level: str = "INFO") -> None:
    # Streamlit reruns scripts; basicConfig is a no-op once a handler exists
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
