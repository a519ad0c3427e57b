import pytest

from config import ALLOWED_ORIGINS

SERVICES = ["/api/catalog", "/api/categories/Backend", "/api/accounts", "/api/orders", "/api/learning"]


def preflight(client, path, origin):
    return client.options(path, headers={
        "Origin": origin,
        "Access-Control-Request-Method": "POST",
        "Access-Control-Request-Headers": "Content-Type",
    })


@pytest.mark.parametrize("path", SERVICES)
def test_allowed_origin_is_accepted_by_every_service(client, path):
    origin = ALLOWED_ORIGINS[0]
    response = preflight(client, path, origin)

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == origin
    assert "POST" in response.headers["access-control-allow-methods"]


@pytest.mark.parametrize("path", SERVICES)
def test_unknown_origin_is_refused_by_every_service(client, path):
    response = preflight(client, path, "https://evil.example")

    assert response.status_code == 400
    assert "access-control-allow-origin" not in response.headers


def test_simple_request_from_allowed_origin_carries_the_header(client):
    origin = ALLOWED_ORIGINS[-1]
    response = client.get("/api/orders", headers={"Origin": origin})

    assert response.headers["access-control-allow-origin"] == origin
