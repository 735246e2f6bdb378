import json

import httpx
import pytest
from fastapi.testclient import TestClient

import main
from saveit.services.backend import BackendProxy, get_backend


class FakeBackend:
    """Records forwarded requests and answers with a canned response."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.body = {"success": True, "data": {}}
        self.error = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.body, (dict, list)):
            return httpx.Response(self.status_code, json=self.body)
        return httpx.Response(self.status_code, text=self.body)

    def last_json(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture()
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture()
def client(backend: FakeBackend):
    proxy = BackendProxy(base_url="http://backend.test", timeout=5, transport=httpx.MockTransport(backend))
    main.app.dependency_overrides[get_backend] = lambda: proxy
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()
