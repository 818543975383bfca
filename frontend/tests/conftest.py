import json

import httpx
import pytest

from frontend.app.api_client import ResourceClient
from frontend.app.errors import HttpError

BASE_URL = 'http://testserver'
CREDS = {'email': 'ana@example.org', 'password': 'pw-123456'}


class BackendConnection:
    """Async context manager yielding a ResourceClient wired to the in-process backend"""

    def __init__(self, app, signed_in=True):
        self.app = app
        self.signed_in = signed_in
        self.client = None

    async def __aenter__(self):
        http = httpx.AsyncClient(transport=httpx.ASGITransport(app=self.app))
        self.client = ResourceClient(BASE_URL, http=http)
        if self.signed_in:
            try:
                await self.client.send('POST', '/auth/signup', CREDS)
            except HttpError:
                # account left over from an earlier connection in the same test
                await self.client.send('POST', '/auth/signin', CREDS)
        return self.client

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.client.aclose()


class ScriptedBackend:
    """httpx MockTransport handler serving canned responses and recording calls.

    Responses queue per (method, path); the last one repeats once the queue
    is down to a single entry.
    """

    def __init__(self):
        self.calls = []
        self.routes = {}

    def on(self, method, path, status=200, json_body=None, text=None, error=None, content=None, headers=None):
        self.routes.setdefault((method, path), []).append((status, json_body, text, error, content, headers))
        return self

    def __call__(self, request):
        body = json.loads(request.content) if request.content else None
        self.calls.append((request.method, request.url.path, body))
        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, text='Not Found')
        status, json_body, text, error, content, headers = queue.pop(0) if len(queue) > 1 else queue[0]
        if error is not None:
            raise error(f'{request.method} {request.url.path}', request=request)
        if content is not None:
            # raw body, decoded only when the client reads it
            return httpx.Response(status, headers=headers, stream=httpx.ByteStream(content))
        if json_body is not None:
            return httpx.Response(status, json=json_body)
        return httpx.Response(status, text=text or '')

    def count(self, method, path):
        return sum(1 for m, p, _ in self.calls if m == method and p == path)

    def sequence(self):
        return [(m, p) for m, p, _ in self.calls]

    def client(self):
        return ResourceClient(BASE_URL, http=httpx.AsyncClient(transport=httpx.MockTransport(self)))


@pytest.fixture
def connect(backend):
    def _connect(signed_in=True):
        return BackendConnection(backend, signed_in)
    return _connect


@pytest.fixture
def scripted():
    return ScriptedBackend()


def donation_json(id, coins=0, income_eur=20.0, co_op='STUDIO-MATIC', donated_at='2025-03-05T10:00:00'):
    return {'id': id, 'coins': coins, 'donated_at': donated_at, 'income_eur': income_eur, 'co_op': co_op}


@pytest.fixture
def donation():
    return donation_json
