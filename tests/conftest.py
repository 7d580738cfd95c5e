"""Test configuration ensuring local package import when editable install not active.

If users invoke `pytest` outside the project's virtualenv, we still add the project
root to sys.path so `import youtrack_app` works. Also provides an in-memory
stand-in for ``requests.Session`` so no test touches the network.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None, reason="OK"):
        self.status_code = status_code
        self.reason = reason
        if text is None:
            text = "" if payload is None else json.dumps(payload)
        self.text = text

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Records calls; ``handler(method, url, params)`` returns a FakeResponse."""

    def __init__(self, handler):
        self.handler = handler
        self.calls: list[dict] = []

    def request(self, method, url, params=None, headers=None, data=None, timeout=None):
        self.calls.append(
            {
                "method": method,
                "url": url,
                "params": dict(params or {}),
                "headers": dict(headers or {}),
                "data": data,
                "timeout": timeout,
            }
        )
        return self.handler(method, url, params or {})


def paged_handler(items_by_path: dict[str, list]):
    """Serve ``$top``/``$skip`` slices of fixed item lists keyed by URL suffix."""

    def handler(method, url, params):
        for suffix, items in items_by_path.items():
            if url.endswith(suffix):
                skip = int(params.get("$skip", 0))
                top = int(params.get("$top", 200))
                return FakeResponse(payload=items[skip : skip + top])
        return FakeResponse(status_code=404, text="no route", reason="Not Found")

    return handler


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def make_paged_session():
    def _make(items_by_path):
        return FakeSession(paged_handler(items_by_path))

    return _make
