import logging
from fastapi import APIRouter, Depends, Request
from saveit.api.payload import read_json_object, require_string
from saveit.core import config
from saveit.core.auth import require_authorization
from saveit.core.errors import ProxyError, TransportError, ValidationError
from saveit.services.backend import BackendProxy, get_backend

router = APIRouter()
logger = logging.getLogger(__name__)

def _validated_code(body: dict) -> str:
    code = require_string(body, "code", "Code is required")
    if len(code.strip()) < config.MIN_CODE_LENGTH:
        raise ValidationError(
            "Code snippet is too short",
            f"Provide at least {config.MIN_CODE_LENGTH} characters of code",
        )
    return code

@router.post("/analyze")
async def analyze_code(request: Request, authorization: str = Depends(require_authorization),
                       backend: BackendProxy = Depends(get_backend)):
    try:
        body = await read_json_object(request)
        code = _validated_code(body)
        return await backend.forward(
            "POST", "/api/code/analyze", authorization,
            payload={"code": code},
            error="Failed to analyze code",
            details="The AI service could not analyze this code",
        )
    except ProxyError:
        raise
    except Exception as e:
        logger.error(f"Error analyzing code: {e}")
        raise TransportError("Failed to analyze code", str(e))

@router.post("/optimize")
async def optimize_code(request: Request, authorization: str = Depends(require_authorization),
                        backend: BackendProxy = Depends(get_backend)):
    try:
        body = await read_json_object(request)
        code = _validated_code(body)
        language = body.get("language") or config.DEFAULT_CODE_LANGUAGE
        return await backend.forward(
            "POST", "/api/code/optimize", authorization,
            payload={"code": code, "language": language},
            error="Failed to optimize code",
            details="The AI service could not optimize this code",
        )
    except ProxyError:
        raise
    except Exception as e:
        logger.error(f"Error optimizing code: {e}")
        raise TransportError("Failed to optimize code", str(e))
