import logging
from typing import Any, Dict, List, Optional

import httpx

from saveit.core import config
from saveit.core.classifier import derive_title, detect_type
from saveit.core.errors import ApiError
from saveit.core.paths import item_path
from saveit.core.schemas import SavedItem, SaveRequest

logger = logging.getLogger(__name__)

SUMMARY_FALLBACK = "Error generating summary"


class SaveItClient:
    """
    Async wrapper around the SaveIt API.

    The token store is consulted on every call; nothing is cached and a failed
    call is never retried.
    """

    def __init__(self, token_store, base_url: str = config.API_BASE_URL,
                 timeout: float = config.BACKEND_TIMEOUT,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.token_store = token_store
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        token = self.token_store.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request(self, method: str, path: str, fallback: str,
                       payload: Optional[Any] = None, params: Optional[Dict[str, Any]] = None) -> Any:
        """Sends one request and returns the decoded body; raises ApiError on any failure."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.request(
                    method, f"{self.base_url}{path}",
                    headers=self._headers(), json=payload, params=params,
                )
        except httpx.HTTPError as e:
            raise ApiError(f"{fallback}: {e}" if str(e) else fallback) from e

        if not response.is_success:
            try:
                body = response.json()
            except ValueError:
                body = {}
            message = (body.get("error") or body.get("details")) if isinstance(body, dict) else None
            raise ApiError(message or fallback, status_code=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(fallback, status_code=response.status_code) from e

    @staticmethod
    def _data(result: Any, fallback: str) -> Any:
        if not isinstance(result, dict) or "data" not in result:
            raise ApiError(fallback)
        return result["data"]

    @staticmethod
    def _item(raw: Any, fallback: str) -> SavedItem:
        """Maps one backend document; anything that is not a valid item is an ApiError."""
        if not isinstance(raw, dict):
            raise ApiError(fallback)
        try:
            return SavedItem.from_backend(raw)
        except ValueError as e:
            raise ApiError(fallback) from e

    @staticmethod
    def _item_path(item_id: str, fallback: str, suffix: str = "") -> str:
        try:
            return item_path(item_id, suffix)
        except ValueError as e:
            raise ApiError(f"{fallback}: invalid item id") from e

    async def save_item(self, item_type: str, content: str, title: str = "") -> SavedItem:
        try:
            payload = SaveRequest(type=item_type, content=content, title=title).model_dump()
            result = await self._request("POST", "/save", "Failed to save item", payload=payload)
            return self._item(self._data(result, "Failed to save item"), "Failed to save item")
        except ApiError as e:
            logger.error(f"Error saving item: {e}")
            raise
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Unexpected save response: {e}")
            raise ApiError("Failed to save item") from e

    async def save_text(self, text: str) -> SavedItem:
        """Classifies free text, derives a title and saves it."""
        if not text or not text.strip():
            raise ValueError("Nothing to save")
        item_type = detect_type(text)
        return await self.save_item(item_type, text, derive_title(text, item_type))

    async def fetch_items(self, **filters) -> List[SavedItem]:
        """
        Lists the user's items. Any failure is logged and reported as an empty
        list so the dashboard shell keeps rendering.
        """
        params = {k: v for k, v in filters.items() if v is not None} or None
        try:
            result = await self._request("GET", "/items", "Failed to fetch items", params=params)
            return [self._item(item, "Failed to fetch items") for item in self._data(result, "Failed to fetch items")]
        except Exception as e:
            logger.error(f"Error fetching items: {e}")
            return []

    async def fetch_item(self, item_id: str) -> SavedItem:
        result = await self._request("GET", self._item_path(item_id, "Failed to fetch item"), "Failed to fetch item")
        return self._item(self._data(result, "Failed to fetch item"), "Failed to fetch item")

    async def update_item(self, item_id: str, patch: Dict[str, Any]) -> SavedItem:
        result = await self._request("PUT", self._item_path(item_id, "Failed to update item"), "Failed to update item",
                                     payload=patch)
        return self._item(self._data(result, "Failed to update item"), "Failed to update item")

    async def update_thumbnail(self, item_id: str, thumbnail: str) -> Any:
        result = await self._request("PUT", self._item_path(item_id, "Failed to update thumbnail", "/thumbnail"),
                                     "Failed to update thumbnail",
                                     payload={"thumbnail": thumbnail})
        return self._data(result, "Failed to update thumbnail")

    async def delete_item(self, item_id: str) -> None:
        try:
            await self._request("DELETE", self._item_path(item_id, "Failed to delete item"), "Failed to delete item")
        except ApiError as e:
            logger.error(f"Error deleting item {item_id}: {e}")
            raise

    async def analyze_code(self, code: str) -> Any:
        result = await self._request("POST", "/code/analyze", "Failed to analyze code", payload={"code": code})
        return self._data(result, "Failed to analyze code")

    async def optimize_code(self, code: str, language: Optional[str] = None) -> Any:
        payload = {"code": code, "language": language or config.DEFAULT_CODE_LANGUAGE}
        result = await self._request("POST", "/code/optimize", "Failed to optimize code", payload=payload)
        return self._data(result, "Failed to optimize code")

    async def generate_summary(self, content: str) -> str:
        try:
            result = await self._request("POST", "/generate-summary", "Failed to generate summary",
                                         payload={"content": content})
            return result["text"]
        except Exception as e:
            logger.error(f"Summary generation failed: {e}")
            return SUMMARY_FALLBACK
