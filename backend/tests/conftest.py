import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def client(backend):
    with TestClient(backend) as c:
        yield c


@pytest.fixture
def signed_in(client):
    resp = client.post('/auth/signup', json={'email': 'ana@example.org', 'password': 'pw-123456'})
    assert resp.status_code == 200
    return client
