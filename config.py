import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from errors import ConfigurationError

PROVIDERS = {
    # provider: (api key variable, default model)
    "gemini": ("GOOGLE_AI_API_KEY", "gemini-2.5-flash"),
    "openai": ("OPENAI_API_KEY", "gpt-4o-mini"),
}

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
RAW_LOGGER = "llm_raw"
MAX_PHOTO_BYTES = 10 * 1024 * 1024


@dataclass(frozen=True)
class Settings:
    provider: str
    api_key: str
    model_name: str
    raw_log: Optional[str] = None
    log_level: str = "INFO"


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Read settings from `env` (or the process environment plus .env).
    Raises ConfigurationError if the provider's API key is absent or LOG_LEVEL is unknown.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    provider = env.get("MODEL_PROVIDER", "gemini").strip().lower()
    if provider not in PROVIDERS:
        raise ConfigurationError(f"Unknown MODEL_PROVIDER: {provider}")

    key_var, default_model = PROVIDERS[provider]
    api_key = (env.get(key_var) or "").strip()
    if not api_key:
        raise ConfigurationError(f"{key_var} is not set")

    log_level = (env.get("LOG_LEVEL") or "INFO").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError(f"Unknown LOG_LEVEL: {log_level}")

    return Settings(
        provider=provider,
        api_key=api_key,
        model_name=(env.get("MODEL_NAME") or default_model).strip(),
        raw_log=env.get("RAW_LOG") or None,
        log_level=log_level,
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    if settings.raw_log:
        d = os.path.dirname(settings.raw_log)
        if d and not os.path.exists(d):
            os.makedirs(d, exist_ok=True)
        raw_logger = logging.getLogger(RAW_LOGGER)
        # avoid stacking handlers when create_app() runs more than once
        if not any(isinstance(h, logging.FileHandler) and h.baseFilename == os.path.abspath(settings.raw_log)
                   for h in raw_logger.handlers):
            handler = logging.FileHandler(settings.raw_log, encoding="utf-8")
            handler.setFormatter(logging.Formatter("%(message)s"))
            raw_logger.addHandler(handler)
        raw_logger.setLevel(logging.DEBUG)
