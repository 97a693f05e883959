"""Shared fixtures for font-proxy tests."""

from unittest.mock import MagicMock, patch

import pytest

from main import API_KEY_ENV, app

API_KEY = "abc123"


def make_upstream_response(status_code=200, text="", payload=None):
    """Build a stand-in for requests.Response."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    if payload is None:
        resp.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    else:
        resp.json.return_value = payload
    return resp


@pytest.fixture()
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


@pytest.fixture()
def api_key(monkeypatch):
    monkeypatch.setenv(API_KEY_ENV, API_KEY)
    return API_KEY


@pytest.fixture()
def mock_get():
    with patch("main.requests.get") as m:
        yield m
