import json

import httpx
import pytest

from saveit.client import FileTokenStore, MemoryTokenStore, SaveItClient, SUMMARY_FALLBACK
from saveit.core.config import TOKEN_KEY
from saveit.core.errors import ApiError


def make_client(handler, token="abc123"):
    return SaveItClient(
        MemoryTokenStore(token),
        base_url="http://api.test/api",
        transport=httpx.MockTransport(handler),
    )


def unreachable(request):
    raise httpx.ConnectError("connection refused")


@pytest.mark.asyncio
async def test_save_link_maps_backend_fields():
    seen = {}

    def handler(request):
        seen["request"] = request
        return httpx.Response(200, json={
            "success": True,
            "data": {
                "_id": "66f0c0ffee",
                "type": "link",
                "title": "X",
                "content": "https://x.com",
                "image": "https://x.com/og.png",
                "createdAt": "2024-05-01T10:00:00Z",
                "__v": 0,
            },
        })

    item = await make_client(handler).save_item("link", "https://x.com", "")

    assert item.id == "66f0c0ffee"
    assert item.url == "https://x.com"
    assert item.thumbnail == "https://x.com/og.png"
    assert item.createdAt == "2024-05-01T10:00:00Z"
    request = seen["request"]
    assert str(request.url) == "http://api.test/api/save"
    assert request.headers["Authorization"] == "Bearer abc123"
    assert json.loads(request.content) == {"type": "link", "content": "https://x.com", "title": ""}


@pytest.mark.asyncio
async def test_non_link_items_have_no_url():
    def handler(request):
        return httpx.Response(200, json={"success": True, "data": {
            "_id": "1", "type": "note", "content": "https://looks-like-a-link", "thumbnail": "t.png", "image": "i.png",
        }})

    item = await make_client(handler).save_item("note", "https://looks-like-a-link")

    assert item.url is None
    assert item.thumbnail == "t.png"


@pytest.mark.asyncio
async def test_save_failure_raises():
    def handler(request):
        return httpx.Response(500, json={"success": False, "error": "Database unavailable"})

    with pytest.raises(ApiError) as exc_info:
        await make_client(handler).save_item("note", "hello world")

    assert exc_info.value.message == "Database unavailable"
    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_save_text_classifies_and_titles():
    captured = []

    def handler(request):
        captured.append(json.loads(request.content))
        return httpx.Response(200, json={"success": True, "data": {"_id": "2", "type": "code", "content": "x"}})

    await make_client(handler).save_text("def greet():\n    return 'hi'")

    assert captured == [{"type": "code", "content": "def greet():\n    return 'hi'", "title": "def greet():"}]


@pytest.mark.asyncio
async def test_save_text_rejects_blank_input():
    def handler(request):
        raise AssertionError("no request expected")

    with pytest.raises(ValueError):
        await make_client(handler).save_text("   \n  ")


@pytest.mark.asyncio
async def test_token_is_read_on_every_call():
    store = MemoryTokenStore("first")
    seen = []

    def handler(request):
        seen.append(request.headers.get("Authorization"))
        return httpx.Response(200, json={"success": True, "data": []})

    client = SaveItClient(store, base_url="http://api.test/api", transport=httpx.MockTransport(handler))
    await client.fetch_items()
    store.set_token("second")
    await client.fetch_items()
    store.set_token(None)
    await client.fetch_items()

    assert seen == ["Bearer first", "Bearer second", None]


@pytest.mark.asyncio
async def test_fetch_items_maps_every_element():
    def handler(request):
        assert request.url.params["type"] == "code"
        return httpx.Response(200, json={"success": True, "data": [
            {"_id": "a", "type": "link", "content": "https://a.dev"},
            {"_id": "b", "type": "code", "content": "let x = 1", "codeLanguage": "javascript"},
        ]})

    items = await make_client(handler).fetch_items(type="code", search=None)

    assert [i.id for i in items] == ["a", "b"]
    assert items[0].url == "https://a.dev"
    assert items[1].codeLanguage == "javascript"


@pytest.mark.asyncio
async def test_fetch_items_degrades_to_empty_list_when_unreachable():
    assert await make_client(unreachable).fetch_items() == []


@pytest.mark.asyncio
async def test_fetch_items_degrades_on_error_status():
    def handler(request):
        return httpx.Response(401, json={"success": False, "error": "Invalid token"})

    assert await make_client(handler).fetch_items() == []


@pytest.mark.asyncio
async def test_delete_item_raises_when_unreachable():
    with pytest.raises(ApiError) as exc_info:
        await make_client(unreachable).delete_item("abc")

    assert exc_info.value.message


@pytest.mark.asyncio
async def test_delete_item_raises_on_error_status():
    def handler(request):
        return httpx.Response(404, text="not found")

    with pytest.raises(ApiError) as exc_info:
        await make_client(handler).delete_item("abc")

    assert exc_info.value.message == "Failed to delete item"
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_delete_item_success():
    seen = []

    def handler(request):
        seen.append((request.method, str(request.url)))
        return httpx.Response(200, json={"success": True})

    assert await make_client(handler).delete_item("abc") is None
    assert seen == [("DELETE", "http://api.test/api/item/abc")]


@pytest.mark.asyncio
async def test_analyze_code_surfaces_backend_message():
    def handler(request):
        return httpx.Response(400, json={"success": False, "error": "Code snippet is too short"})

    with pytest.raises(ApiError, match="Code snippet is too short"):
        await make_client(handler).analyze_code("x")


@pytest.mark.asyncio
async def test_optimize_code_returns_data():
    def handler(request):
        assert json.loads(request.content) == {"code": "var a = 1;", "language": "javascript"}
        return httpx.Response(200, json={"success": True, "data": {"optimizedCode": "const a = 1;"}})

    assert await make_client(handler).optimize_code("var a = 1;") == {"optimizedCode": "const a = 1;"}


@pytest.mark.asyncio
async def test_generate_summary_falls_back_on_failure():
    assert await make_client(unreachable).generate_summary("some content") == SUMMARY_FALLBACK


@pytest.mark.asyncio
async def test_update_item_returns_mapped_item():
    def handler(request):
        assert request.method == "PUT"
        return httpx.Response(200, json={"success": True, "data": {"_id": "z", "type": "note", "title": "Renamed"}})

    item = await make_client(handler).update_item("z", {"title": "Renamed"})

    assert item.id == "z"
    assert item.title == "Renamed"


def test_file_token_store_round_trip(tmp_path):
    path = tmp_path / "storage.json"
    store = FileTokenStore(str(path))

    assert store.get_token() is None
    store.set_token("tok")
    assert json.loads(path.read_text()) == {TOKEN_KEY: "tok"}
    assert FileTokenStore(str(path)).get_token() == "tok"
    store.set_token(None)
    assert store.get_token() is None


def test_file_token_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("{broken")

    assert FileTokenStore(str(path)).get_token() is None


@pytest.mark.asyncio
@pytest.mark.parametrize("data", [None, [], "oops", {"_id": "1"}])
async def test_save_item_rejects_malformed_data(data):
    def handler(request):
        return httpx.Response(200, json={"success": True, "data": data})

    with pytest.raises(ApiError, match="Failed to save item"):
        await make_client(handler).save_item("note", "hello world")


@pytest.mark.asyncio
@pytest.mark.parametrize("data", [None, ["a"], 7, {"_id": "1", "type": "video"}])
async def test_fetch_and_update_item_reject_malformed_data(data):
    def handler(request):
        return httpx.Response(200, json={"success": True, "data": data})

    client = make_client(handler)
    with pytest.raises(ApiError, match="Failed to fetch item"):
        await client.fetch_item("1")
    with pytest.raises(ApiError, match="Failed to update item"):
        await client.update_item("1", {"title": "x"})


@pytest.mark.asyncio
async def test_fetch_items_with_malformed_element_degrades():
    def handler(request):
        return httpx.Response(200, json={"success": True, "data": [{"_id": "a", "type": "note"}, None]})

    assert await make_client(handler).fetch_items() == []


@pytest.mark.asyncio
async def test_item_ids_are_escaped():
    seen = []

    def handler(request):
        seen.append(request.url)
        return httpx.Response(200, json={"success": True})

    await make_client(handler).delete_item("abc?force=true")

    assert seen[0].raw_path == b"/api/item/abc%3Fforce%3Dtrue"
    assert seen[0].query == b""


@pytest.mark.asyncio
@pytest.mark.parametrize("item_id", ["..", ".", ""])
async def test_dot_item_ids_never_leave_the_client(item_id):
    def handler(request):
        raise AssertionError("no request expected")

    with pytest.raises(ApiError, match="invalid item id"):
        await make_client(handler).delete_item(item_id)
