import logging
from fastapi import APIRouter, Depends, Request
from saveit.api.payload import read_json_object, require_string
from saveit.core.auth import require_authorization
from saveit.core.errors import ProxyError, TransportError, ValidationError
from saveit.core.paths import item_path
from saveit.core.schemas import ITEM_TYPES
from saveit.services.backend import BackendProxy, get_backend

router = APIRouter()
logger = logging.getLogger(__name__)

def _backend_item_path(item_id: str, suffix: str = "") -> str:
    try:
        return f"/api{item_path(item_id, suffix)}"
    except ValueError:
        raise ValidationError("Invalid item id", f"'{item_id}' is not a valid item id")

@router.post("/save")
async def save_item(request: Request, authorization: str = Depends(require_authorization),
                    backend: BackendProxy = Depends(get_backend)):
    try:
        body = await read_json_object(request)
        content = require_string(body, "content", "Content is required")
        item_type = body.get("type")
        if item_type not in ITEM_TYPES:
            raise ValidationError("Invalid item type", f"Type must be one of: {', '.join(ITEM_TYPES)}")
        title = body.get("title") or ""
        if not isinstance(title, str):
            raise ValidationError("Title must be a string")

        logger.info(f"Saving {item_type} item ({len(content)} chars)")
        return await backend.forward(
            "POST", "/api/save", authorization,
            payload={"type": item_type, "content": content, "title": title},
            error="Failed to save item",
            details="The backend server could not save this item",
        )
    except ProxyError:
        raise
    except Exception as e:
        logger.error(f"Error saving item: {e}")
        raise TransportError("Failed to save item", str(e))

@router.get("/items")
async def list_items(request: Request, authorization: str = Depends(require_authorization),
                     backend: BackendProxy = Depends(get_backend)):
    try:
        return await backend.forward(
            "GET", "/api/items", authorization,
            query=request.url.query,
            error="Failed to fetch items",
            details="The backend server could not list items",
        )
    except ProxyError:
        raise
    except Exception as e:
        logger.error(f"Error fetching items: {e}")
        raise TransportError("Failed to fetch items", str(e))

@router.get("/item/{item_id}")
async def get_item(item_id: str, authorization: str = Depends(require_authorization),
                   backend: BackendProxy = Depends(get_backend)):
    try:
        return await backend.forward(
            "GET", _backend_item_path(item_id), authorization,
            error="Failed to fetch item",
            details="The backend server could not find this item",
        )
    except ProxyError:
        raise
    except Exception as e:
        logger.error(f"Error fetching item {item_id}: {e}")
        raise TransportError("Failed to fetch item", str(e))

@router.put("/item/{item_id}")
async def update_item(item_id: str, request: Request, authorization: str = Depends(require_authorization),
                      backend: BackendProxy = Depends(get_backend)):
    try:
        patch = await read_json_object(request)
        # Items never change type once created
        if "type" in patch:
            logger.info(f"Dropping type change from update of item {item_id}")
            patch = {k: v for k, v in patch.items() if k != "type"}

        return await backend.forward(
            "PUT", _backend_item_path(item_id), authorization,
            payload=patch,
            error="Failed to update item",
            details="The backend server could not update this item",
        )
    except ProxyError:
        raise
    except Exception as e:
        logger.error(f"Error updating item {item_id}: {e}")
        raise TransportError("Failed to update item", str(e))

@router.delete("/item/{item_id}")
async def delete_item(item_id: str, authorization: str = Depends(require_authorization),
                      backend: BackendProxy = Depends(get_backend)):
    try:
        logger.info(f"Deleting item {item_id}")
        return await backend.forward(
            "DELETE", _backend_item_path(item_id), authorization,
            error="Failed to delete item",
            details="The backend server could not delete this item",
        )
    except ProxyError:
        raise
    except Exception as e:
        logger.error(f"Error deleting item {item_id}: {e}")
        raise TransportError("Failed to delete item", str(e))

@router.put("/item/{item_id}/thumbnail")
async def update_thumbnail(item_id: str, request: Request, authorization: str = Depends(require_authorization),
                           backend: BackendProxy = Depends(get_backend)):
    try:
        body = await read_json_object(request)
        thumbnail = require_string(body, "thumbnail", "Thumbnail is required")
        return await backend.forward(
            "PUT", _backend_item_path(item_id, "/thumbnail"), authorization,
            payload={"thumbnail": thumbnail},
            error="Failed to update thumbnail",
            details="The backend server could not update this thumbnail",
        )
    except ProxyError:
        raise
    except Exception as e:
        logger.error(f"Error updating thumbnail for item {item_id}: {e}")
        raise TransportError("Failed to update thumbnail", str(e))
