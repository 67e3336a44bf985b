# SQLite key-value store: entries, API key, display settings. Use _with_conn for DB access.
import json
import logging
import sqlite3

from pydantic import ValidationError

import config
from models import Entry

logger = logging.getLogger(__name__)

ENTRIES_KEY = "reflect-entries"
API_KEY_KEY = "reflect-api-key"
DARK_MODE_KEY = "reflect-dark-mode"


SCHEMA = "CREATE TABLE IF NOT EXISTS kv (key TEXT PRIMARY KEY, value BLOB NOT NULL)"


# Schema is created on connect, so a fresh file reads as empty.
def get_conn():
    path = config.db_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    conn.execute(SCHEMA)
    return conn


def _with_conn(f):
    conn = get_conn()
    try:
        return f(conn)
    finally:
        conn.close()


def get_value(key: str) -> bytes | None:
    def run(c):
        row = c.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        return None if row is None else bytes(row["value"])
    return _with_conn(run)


def set_value(key: str, value: bytes) -> None:
    def run(c):
        c.execute("INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)", (key, value))
        c.commit()
    _with_conn(run)


def delete_value(key: str) -> None:
    def run(c):
        c.execute("DELETE FROM kv WHERE key = ?", (key,))
        c.commit()
    _with_conn(run)


def decode_entries(raw: bytes | None) -> list:
    """Entries from a stored payload; bad payloads and bad records are dropped."""
    if raw is None:
        return []
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Stored entries are unreadable, starting empty: %s", e)
        return []
    if not isinstance(data, list):
        logger.warning("Stored entries are not a list, starting empty.")
        return []
    out = []
    for item in data:
        try:
            out.append(Entry.model_validate(item))
        except ValidationError as e:
            logger.warning("Skipping malformed entry %r: %s", item.get("id") if isinstance(item, dict) else item, e)
    return out


def encode_entries(entries) -> bytes:
    return json.dumps([e.to_dict() for e in entries]).encode("utf-8")


def load_entries() -> list:
    return decode_entries(get_value(ENTRIES_KEY))


# Full rewrite on every mutation.
def save_entries(entries) -> None:
    set_value(ENTRIES_KEY, encode_entries(entries))


def clear_entries() -> None:
    delete_value(ENTRIES_KEY)


def get_api_key() -> str | None:
    raw = get_value(API_KEY_KEY)
    if not raw:
        return None
    try:
        return raw.decode("utf-8").strip() or None
    except UnicodeDecodeError:
        return None


def set_api_key(key: str) -> None:
    key = (key or "").strip()
    if not key:
        raise ValueError("API key must not be empty.")
    set_value(API_KEY_KEY, key.encode("utf-8"))


def remove_api_key() -> None:
    delete_value(API_KEY_KEY)


def get_dark_mode() -> bool:
    return get_value(DARK_MODE_KEY) == b"true"


def set_dark_mode(value: bool) -> None:
    set_value(DARK_MODE_KEY, b"true" if value else b"false")
