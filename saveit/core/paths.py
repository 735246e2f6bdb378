from urllib.parse import quote

def item_path(item_id: str, suffix: str = "") -> str:
    """
    Builds /item/<id><suffix> with the id escaped as a single path segment.
    Raises ValueError for ids that would resolve to a different path.
    """
    if not item_id or item_id.strip(".") == "":
        raise ValueError(f"Invalid item id: {item_id!r}")
    return f"/item/{quote(item_id, safe='')}{suffix}"
