import os
from dataclasses import dataclass
from dotenv import load_dotenv

from secret_santa.services.assignment import RANDOM_SOURCES

load_dotenv()


@dataclass(frozen=True)
class Settings:
    bot_token: str
    database_url: str
    log_level: str
    log_path: str
    generation_delay: float
    random_source: str


def _parse_delay(raw: str) -> float:
    try:
        delay = float(raw)
    except ValueError:
        raise ValueError(f"GENERATION_DELAY must be a number of seconds, got {raw!r}.") from None
    if delay < 0:
        raise ValueError("GENERATION_DELAY cannot be negative.")
    return delay


def load_settings() -> Settings:
    bot_token = os.getenv("BOT_TOKEN")
    database_url = os.getenv("DATABASE_URL")
    log_level = os.getenv("LOG_LEVEL", "INFO")
    log_path = os.getenv("LOG_PATH", "logs/secret_santa.log")
    generation_delay = _parse_delay(os.getenv("GENERATION_DELAY", "1.5"))
    random_source = os.getenv("RANDOM_SOURCE", "secure").strip().lower()

    if not bot_token:
        raise ValueError("BOT_TOKEN is required. Set it in the environment or .env file.")
    if not database_url:
        raise ValueError("DATABASE_URL is required. Set it in the environment or .env file.")
    if random_source not in RANDOM_SOURCES:
        raise ValueError(f"RANDOM_SOURCE must be one of {', '.join(RANDOM_SOURCES)}.")

    return Settings(
        bot_token=bot_token,
        database_url=database_url,
        log_level=log_level,
        log_path=log_path,
        generation_delay=generation_delay,
        random_source=random_source,
    )
