"""Shared pytest fixtures: a fake Dex service behind httpx.MockTransport."""
import json
import re

import httpx
import pytest

from dex_mcp.client import DexClient

GRAPHQL_URL = "https://dex.test/v1/graphql"
REST_URL = "https://dex.test/api/rest"

CONTACT_ID = "4e87699a-71f4-4dad-9c11-9623c21eb017"
NOTE_ID = "9b2f1c3e-5d6a-4b7c-8d9e-0f1a2b3c4d5e"
REMINDER_ID = "1c9d8e7f-6a5b-4c3d-a2e1-f0e9d8c7b6a5"

_OPERATION = re.compile(r"(?:query|mutation)\s+(\w+)")


class FakeDex:
    """Records requests and answers them from canned responses.

    ``graphql`` maps an operation name (e.g. "GetContacts") to either a data
    dict, an httpx.Response to return as-is, or a callable taking the request
    and returning a transport exception to raise for that operation only.
    ``rest`` is the response to the note-creation endpoint.
    """

    def __init__(self):
        self.graphql = {}
        self.rest = None
        self.requests = []
        self.fail_with = None

    def operations(self) -> list[str]:
        return [r["operation"] for r in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        if self.fail_with is not None:
            raise self.fail_with(request)

        body = json.loads(request.content or b"{}")

        if str(request.url) == GRAPHQL_URL:
            operation = _OPERATION.search(body["query"]).group(1)
            self.requests.append({"operation": operation, "variables": body.get("variables"), "request": request})
            answer = self.graphql.get(operation, {})
            if callable(answer):
                raise answer(request)
            if isinstance(answer, httpx.Response):
                return answer
            return httpx.Response(200, json={"data": answer})

        self.requests.append({"operation": "rest:" + request.url.path, "body": body, "request": request})
        if isinstance(self.rest, httpx.Response):
            return self.rest
        return httpx.Response(200, json=self.rest or {})


@pytest.fixture
def fake_dex():
    return FakeDex()


@pytest.fixture
def http_client(fake_dex):
    return httpx.AsyncClient(
        transport=httpx.MockTransport(fake_dex.handler),
        headers={"x-hasura-dex-api-key": "test-key"},
    )


@pytest.fixture
def dex_client(http_client):
    return DexClient(http_client, GRAPHQL_URL, REST_URL)


@pytest.fixture
def recent_contacts():
    return [
        {"id": CONTACT_ID, "full_name": "Ada Lovelace", "first_name": "Ada",
         "last_name": "Lovelace", "company": "Analytical Engines"},
        {"id": "0a1b2c3d-abc1-4234-8567-abc123def456", "full_name": "Charles Babbage",
         "first_name": "Charles", "last_name": "Babbage", "company": None},
        {"id": "7f6e5d4c-3b2a-4190-8fed-cba987654321", "full_name": "Grace Hopper",
         "first_name": "Grace", "last_name": "Hopper", "company": "ABC123 Navy Labs"},
    ]
