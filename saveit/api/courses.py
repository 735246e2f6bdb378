import logging
import re
import httpx
from fastapi import APIRouter, Depends, Request
from saveit.api.payload import read_json_object, require_string
from saveit.core import config
from saveit.core.auth import require_authorization
from saveit.core.errors import ProxyError, TransportError, ValidationError
from saveit.services.backend import BackendProxy, get_backend

router = APIRouter()
logger = logging.getLogger(__name__)

_SCHEME_PATTERN = re.compile(r"^https?://", re.IGNORECASE)

def normalize_course_url(raw: str) -> str:
    """
    Prefixes scheme-less input with https:// and checks that the result is a usable URL.
    """
    url = raw.strip()
    if not _SCHEME_PATTERN.match(url):
        url = f"https://{url}"
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL:
        raise ValidationError("Invalid URL format", f"Could not parse '{raw}' as a URL")
    if not parsed.host:
        raise ValidationError("Invalid URL format", f"'{raw}' has no host")
    return url

@router.post("/analyze-url")
async def analyze_course_url(request: Request, authorization: str = Depends(require_authorization),
                             backend: BackendProxy = Depends(get_backend)):
    try:
        body = await read_json_object(request)
        url = normalize_course_url(require_string(body, "url", "URL is required"))

        payload = {"url": url, "userRole": body.get("userRole") or config.DEFAULT_USER_ROLE}
        if body.get("targetSkillLevel"):
            payload["targetSkillLevel"] = body["targetSkillLevel"]

        logger.info(f"Analyzing course URL {url} for role {payload['userRole']}")
        return await backend.forward(
            "POST", "/api/courses/analyze-url", authorization,
            payload=payload,
            error="Failed to analyze URL",
            details="The backend server could not process this URL",
        )
    except ProxyError:
        raise
    except Exception as e:
        logger.error(f"Error analyzing URL: {e}")
        raise TransportError("Failed to analyze URL", str(e))

@router.post("/create-from-structure")
async def create_course_from_structure(request: Request, authorization: str = Depends(require_authorization),
                                       backend: BackendProxy = Depends(get_backend)):
    try:
        body = await read_json_object(request)
        course_data = body.get("courseData")
        if not course_data or not isinstance(course_data, dict):
            raise ValidationError("Course data is required")
        title = course_data.get("courseTitle")
        if not title or not isinstance(title, str) or not title.strip():
            raise ValidationError("Course title is required")

        modules = course_data.get("modules") or []
        logger.info(f"Creating course '{title}' with {len(modules)} modules")
        return await backend.forward(
            "POST", "/api/courses/create-from-structure", authorization,
            payload={"courseData": course_data},
            error="Failed to create course",
            details="The backend server could not create this course",
        )
    except ProxyError:
        raise
    except Exception as e:
        logger.error(f"Error creating course from structure: {e}")
        raise TransportError("Failed to create course from structure", str(e))
