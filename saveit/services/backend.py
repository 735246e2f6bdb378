import logging
from typing import Any, Dict, Optional

import httpx

from saveit.core import config
from saveit.core.errors import TransportError, UpstreamError

logger = logging.getLogger(__name__)


class BackendProxy:
    """
    Forwards validated requests to the SaveIt backend and maps its answers.
    Each call opens one client, sends exactly one request and never retries.
    """

    def __init__(self, base_url: str = config.BACKEND_URL, timeout: float = config.BACKEND_TIMEOUT,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def forward(
        self,
        method: str,
        path: str,
        authorization: Optional[str] = None,
        payload: Optional[Any] = None,
        query: Optional[str] = None,
        error: str = "Request to backend failed",
        details: str = "The backend server could not process this request",
    ) -> Any:
        url = f"{self.base_url}{path}"
        if query:
            url = f"{url}?{query}"

        headers = {"Content-Type": "application/json"}
        if authorization:
            headers["Authorization"] = authorization

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.request(method, url, headers=headers, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} could not reach the backend: {e}")
            raise TransportError(error, str(e) or "An unexpected error occurred")

        if not response.is_success:
            body = _json_or_empty(response)
            logger.error(f"Backend returned {response.status_code} for {method} {path}: {body.get('error')}")
            raise UpstreamError(
                body.get("error") or error,
                body.get("details") or details,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Backend sent an unreadable body for {method} {path}: {e}")
            raise TransportError(error, str(e) or "An unexpected error occurred")


def _json_or_empty(response: httpx.Response) -> Dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


_default_proxy = BackendProxy()

def get_backend() -> BackendProxy:
    return _default_proxy
