# Environment, paths and logging. Single place that loads .env.
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent
load_dotenv(BASE_DIR / ".env")

DEFAULT_DB_PATH = BASE_DIR / "journal.db"
DEFAULT_MODEL = "gpt-4.1-nano"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_REQUEST_TIMEOUT = 15.0
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def db_path() -> Path:
    raw = os.environ.get("REFLECT_DB_PATH")
    return Path(raw) if raw else DEFAULT_DB_PATH


def model_name() -> str:
    return os.environ.get("REFLECT_MODEL") or DEFAULT_MODEL


def env_api_key() -> str | None:
    return os.environ.get("OPENAI_API_KEY") or None


# Seconds allowed per remote completion.
def request_timeout() -> float:
    raw = os.environ.get("REFLECT_REQUEST_TIMEOUT")
    try:
        value = float(raw) if raw else DEFAULT_REQUEST_TIMEOUT
    except ValueError:
        return DEFAULT_REQUEST_TIMEOUT
    return value if value > 0 else DEFAULT_REQUEST_TIMEOUT


def log_level() -> int:
    name = (os.environ.get("REFLECT_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def setup_logging() -> None:
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=log_level(), format=LOG_FORMAT)
    else:
        root.setLevel(log_level())
