"""Fixtures con una sesión HTTP falsa para probar el conector sin red."""

import json
from io import BytesIO

import pytest
from PIL import Image

from fb_api import FacebookConnector
from graph_config import FacebookConfig


class FakeResponse:
    def __init__(self, status_code=200, body=b"", content_type="application/json"):
        if isinstance(body, (dict, list)) or body is False:
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.status_code = status_code
        self.content = body
        self.headers = {"Content-Type": content_type}

    @property
    def text(self):
        return self.content.decode("utf-8")


class FakeSession:
    """Imita requests.Session.request: devuelve respuestas encoladas y guarda las llamadas."""

    def __init__(self):
        self.calls = []
        self.queue = []
        self.closed = False

    def reply(self, body=b"", status_code=200, content_type="application/json"):
        self.queue.append(FakeResponse(status_code, body, content_type))
        return self

    def fail(self, exc):
        self.queue.append(exc)
        return self

    def request(self, method, url, params=None, data=None, files=None, timeout=None):
        self.calls.append({
            "method": method, "url": url, "params": params,
            "data": data, "files": files, "timeout": timeout,
        })
        if not self.queue:
            raise AssertionError(f"Request inesperado: {method} {url}")
        item = self.queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def close(self):
        self.closed = True

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def fb(session):
    return FacebookConnector(FacebookConfig(), session=session, token_supplier=lambda: "TOKEN")


@pytest.fixture
def png_bytes():
    buf = BytesIO()
    Image.new("RGB", (10, 10), color=(200, 30, 30)).save(buf, format="PNG")
    return buf.getvalue()
