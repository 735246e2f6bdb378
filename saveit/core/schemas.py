from pydantic import BaseModel
from typing import Any, Dict, List, Literal, Optional

ItemType = Literal["note", "link", "code", "component"]
ITEM_TYPES = ("note", "link", "code", "component")

class SavedItem(BaseModel):
    """Frontend view of an item owned by the backend."""
    id: str
    type: ItemType
    title: str = ""
    content: str = ""
    summary: Optional[str] = None
    tags: Optional[List[str]] = None
    thumbnail: Optional[str] = None
    image: Optional[str] = None
    favicon: Optional[str] = None
    domain: Optional[str] = None
    author: Optional[str] = None
    language: Optional[str] = None
    contentType: Optional[str] = None
    readabilityScore: Optional[float] = None
    confidence: Optional[float] = None
    notes: Optional[str] = None
    publishedDate: Optional[str] = None
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None
    url: Optional[str] = None
    platform: Optional[str] = None
    category: Optional[str] = None
    # Code-specific fields
    codeLanguage: Optional[str] = None
    framework: Optional[str] = None
    optimizationSuggestions: Optional[List[str]] = None
    codeQuality: Optional[float] = None
    componentPreview: Optional[bool] = None
    dependencies: Optional[List[str]] = None

    @classmethod
    def from_backend(cls, raw: Dict[str, Any]) -> "SavedItem":
        """
        Maps the backend document shape (_id, image) onto the view model (id, thumbnail).
        Fields the view model does not know about are dropped.
        """
        if not isinstance(raw, dict):
            raise TypeError(f"Expected an item object, got {type(raw).__name__}")
        known = {k: v for k, v in raw.items() if k in cls.model_fields and v is not None}
        known["id"] = str(raw.get("_id") or raw.get("id") or "")
        known["thumbnail"] = raw.get("thumbnail") or raw.get("image")
        known["url"] = raw.get("content") if raw.get("type") == "link" else None
        return cls.model_validate(known)

class SaveRequest(BaseModel):
    type: ItemType
    content: str
    title: str = ""
