import os
import json
import logging
from typing import Optional

from saveit.core.config import TOKEN_KEY

logger = logging.getLogger(__name__)


class MemoryTokenStore:
    """Keeps the token for the lifetime of the process."""

    def __init__(self, token: Optional[str] = None):
        self._token = token

    def get_token(self) -> Optional[str]:
        return self._token

    def set_token(self, token: Optional[str]) -> None:
        self._token = token


class FileTokenStore:
    """
    Persists the bearer token as {"saveit_token": "..."} in a JSON file.
    The file is read on every call so a token written by another process is picked up.

    Reads and writes are blocking file I/O, done from inside SaveItClient's async
    calls. The file holds a single small JSON object, so this is tolerable; use
    MemoryTokenStore in services where a blocking read on the event loop matters.
    """

    def __init__(self, path: str = "~/.saveit/storage.json"):
        self.path = os.path.expanduser(path)

    def _load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return data if isinstance(data, dict) else {}
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read token storage {self.path}: {e}")
            return {}

    def get_token(self) -> Optional[str]:
        return self._load().get(TOKEN_KEY)

    def set_token(self, token: Optional[str]) -> None:
        data = self._load()
        if token:
            data[TOKEN_KEY] = token
        else:
            data.pop(TOKEN_KEY, None)
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f)
