import logging
from fastapi import Header
from saveit.core.errors import Unauthorized

logger = logging.getLogger(__name__)

async def require_authorization(authorization: str = Header(None)) -> str:
    """
    Returns the caller's Authorization header so it can be forwarded to the backend.
    The token itself is verified by the backend, not here.
    """
    if not authorization or not authorization.strip():
        logger.info("Rejecting request without Authorization header")
        raise Unauthorized("Unauthorized: No token provided")
    return authorization
