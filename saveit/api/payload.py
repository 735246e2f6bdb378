import json
from typing import Any, Dict
from fastapi import Request
from saveit.core.errors import ValidationError

async def read_json_object(request: Request) -> Dict[str, Any]:
    """Parses the request body and insists on a JSON object."""
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationError("Invalid JSON body", "The request body could not be parsed as JSON")
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body

def require_string(body: Dict[str, Any], field: str, message: str) -> str:
    value = body.get(field)
    if not value or not isinstance(value, str) or not value.strip():
        raise ValidationError(message)
    return value
