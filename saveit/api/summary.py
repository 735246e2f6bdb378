import logging
from fastapi import APIRouter, Request
from saveit.api.payload import read_json_object, require_string
from saveit.core import config
from saveit.core.errors import ProxyError, TransportError
from saveit.services import summary as summary_service

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("/generate-summary")
async def generate_summary(request: Request):
    """
    Unauthenticated: the Gemini key stays on the server and never reaches the caller.
    """
    try:
        body = await read_json_object(request)
        content = require_string(body, "content", "Content is required")

        if not config.GEMINI_API_KEY:
            raise TransportError("Gemini API key not configured")

        text = await summary_service.generate_summary(content)
        return {"text": text, **summary_service.parse_summary(text)}
    except ProxyError:
        raise
    except Exception as e:
        logger.error(f"Error generating summary: {e}")
        raise TransportError("Failed to generate summary", str(e))
