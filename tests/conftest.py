"""Shared fixtures: a fake registrar API served through httpx.MockTransport."""

from typing import Callable, Dict, List, Union

import httpx
import pytest

from fabulous_client import Configuration, FabulousClient

BASE_URL = "https://api.fabulous.com"

Responder = Union[str, Callable[[Dict[str, str]], str]]


def xml_response(status_code, status_text, body=""):
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<response>
  <statusCode>{status_code}</statusCode>
  <statusText>{status_text}</statusText>
  {body}
</response>
"""


class FakeAPI:
    """Routes actions to canned XML bodies and records every request."""

    def __init__(self):
        self.routes: Dict[str, Responder] = {}
        self.requests: List[httpx.Request] = []

    def add(self, action: str, responder: Responder) -> None:
        self.routes[action] = responder

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        action = request.url.path.lstrip("/")
        params = dict(request.url.params)
        if action not in self.routes:
            return httpx.Response(200, text=xml_response(404, f"Unknown action {action}"))
        responder = self.routes[action]
        body = responder(params) if callable(responder) else responder
        return httpx.Response(200, text=body)

    @property
    def params(self) -> List[Dict[str, str]]:
        """Query parameters of every recorded request."""
        return [dict(r.url.params) for r in self.requests]


@pytest.fixture
def api():
    return FakeAPI()


@pytest.fixture
def configuration():
    return Configuration(username="test_user", password="test_pass", base_url=BASE_URL)


@pytest.fixture
def client(api, configuration):
    with FabulousClient(configuration, transport=httpx.MockTransport(api.handler)) as c:
        yield c
