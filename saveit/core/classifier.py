import re

from saveit.core.schemas import ItemType

_LINK_PATTERN = re.compile(r"^https?://", re.IGNORECASE)

_CODE_PATTERNS = [
    re.compile(r"^(import|export|const|let|var|function|class|interface|type)\s", re.MULTILINE),
    re.compile(r"^<[A-Z]", re.MULTILINE),  # JSX component
    re.compile(r"^\s*\{", re.MULTILINE),  # JSON or object literal
    re.compile(r"^def\s|^class\s", re.MULTILINE),  # Python
]

_COMPONENT_PATTERN = re.compile(r"<[A-Z][a-zA-Z0-9]*")

TITLE_LIMIT = 50


def detect_type(text: str) -> ItemType:
    """
    Classifies pasted text as a link, code, component or note.
    Rules are checked in order and the first match wins.
    """
    if _LINK_PATTERN.match(text.strip()):
        return "link"
    if any(pattern.search(text) for pattern in _CODE_PATTERNS):
        return "code"
    if _COMPONENT_PATTERN.search(text):
        return "component"
    return "note"


def derive_title(text: str, item_type: ItemType) -> str:
    """First line of the content for text items; links get their title from the backend."""
    if item_type == "link":
        return ""
    first_line = text.split("\n")[0][:TITLE_LIMIT]
    return first_line or f"{item_type.capitalize()} Snippet"
