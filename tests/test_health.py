import pytest


@pytest.mark.asyncio
async def test_health_check(client):
    response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "OK", "message": "Backend is running"}


@pytest.mark.asyncio
async def test_unknown_route_uses_message_body(client):
    response = await client.get("/api/nowhere")

    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}
