from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from tests.helpers import auth_headers, create_workspace, future_start

WORKSPACES_URL = "/api/workspaces"


def new_workspace(**overrides) -> dict:
    payload = {
        "name": "Cabin 4",
        "location": "Koramangala Hub",
        "type": "Private Cabin",
        "capacity": "4 seats",
        "basePrice": 12000,
        "hasCabin": True,
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_workspaces_are_public(client, workspace):
    listing = await client.get(WORKSPACES_URL)
    detail = await client.get(f"{WORKSPACES_URL}/{workspace.id}")

    assert [w["id"] for w in listing.json()] == [workspace.id]
    assert detail.json()["name"] == "Desk A"
    assert detail.json()["allottedTo"] is None
    assert (await client.get(f"{WORKSPACES_URL}/9999")).json() == {"message": "Workspace not found"}


@pytest.mark.asyncio
async def test_admin_manages_workspaces(client, admin, member):
    assert (await client.post(WORKSPACES_URL, json=new_workspace(), headers=auth_headers(member))).status_code == 403

    created = await client.post(WORKSPACES_URL, json=new_workspace(), headers=auth_headers(admin))
    assert created.status_code == 201
    workspace_id = created.json()["id"]
    assert created.json()["amenities"] == ["High-speed WiFi", "Coffee Bar"]

    updated = await client.put(
        f"{WORKSPACES_URL}/{workspace_id}", json={"basePrice": 15000, "featured": True}, headers=auth_headers(admin)
    )
    assert updated.json()["basePrice"] == 15000
    assert updated.json()["featured"] is True
    assert updated.json()["name"] == "Cabin 4"

    removed = await client.delete(f"{WORKSPACES_URL}/{workspace_id}", headers=auth_headers(admin))
    assert removed.json() == {"message": "Workspace removed"}
    assert (await client.get(f"{WORKSPACES_URL}/{workspace_id}")).status_code == 404


@pytest.mark.asyncio
async def test_negative_price_is_rejected(client, admin):
    response = await client.post(WORKSPACES_URL, json=new_workspace(basePrice=-1), headers=auth_headers(admin))

    assert response.status_code == 400
    assert response.json()["message"].startswith("Invalid base price")


@pytest.mark.asyncio
async def test_admin_allotment_respects_the_current_occupant(client, db, admin, member, other_member, workspace):
    end = (future_start(30)).isoformat()
    url = f"{WORKSPACES_URL}/{workspace.id}"

    allotted = await client.put(url, json={"allottedToId": member.id, "allotmentEnd": end}, headers=auth_headers(admin))
    assert allotted.status_code == 200
    assert allotted.json()["allottedTo"]["id"] == member.id

    conflict = await client.put(url, json={"allottedToId": other_member.id}, headers=auth_headers(admin))
    assert conflict.status_code == 409
    assert conflict.json() == {"message": "Workspace is already allotted"}

    released = await client.put(url, json={"allottedToId": None}, headers=auth_headers(admin))
    assert released.json()["allottedToId"] is None
    assert released.json()["allotmentEnd"] is None

    reallotted = await client.put(url, json={"allottedToId": other_member.id}, headers=auth_headers(admin))
    assert reallotted.json()["allottedToId"] == other_member.id


@pytest.mark.asyncio
async def test_allotment_window_must_be_ordered(client, admin, member, workspace):
    start = future_start(10)
    response = await client.put(
        f"{WORKSPACES_URL}/{workspace.id}",
        json={
            "allottedToId": member.id,
            "allotmentStart": start.isoformat(),
            "allotmentEnd": (start - timedelta(days=1)).isoformat(),
        },
        headers=auth_headers(admin),
    )

    assert response.status_code == 400
    assert response.json() == {"message": "Allotment end must be after start"}


@pytest.mark.asyncio
async def test_my_workspace_and_community(client, db, member, other_member):
    desk = await create_workspace(db, name="Desk A", allotted_to_id=member.id, allotment_end=future_start(30))
    await create_workspace(db, name="Desk B", allotted_to_id=other_member.id, allotment_end=future_start(30))
    await create_workspace(db, name="Desk C", location="Koramangala Hub")

    mine = await client.get(f"{WORKSPACES_URL}/my-workspace", headers=auth_headers(member))
    community = await client.get(f"{WORKSPACES_URL}/community", headers=auth_headers(member))

    assert mine.json()["id"] == desk.id
    assert [(c["workspaceName"], c["user"]["id"]) for c in community.json()] == [("Desk B", other_member.id)]
    assert community.json()[0]["user"]["name"] == "Vikram Shah"


@pytest.mark.asyncio
async def test_lapsed_allotment_is_not_my_workspace(client, db, member):
    await create_workspace(db, allotted_to_id=member.id, allotment_end=future_start(-3))

    mine = await client.get(f"{WORKSPACES_URL}/my-workspace", headers=auth_headers(member))
    community = await client.get(f"{WORKSPACES_URL}/community", headers=auth_headers(member))

    assert mine.status_code == 404
    assert mine.json() == {"message": "No workspace allotted"}
    assert community.json() == []


@pytest.mark.asyncio
async def test_image_upload_replaces_the_gallery(client, admin, workspace, monkeypatch):
    storage = MagicMock()
    storage.upload_bytes_async = AsyncMock(side_effect=lambda content, name, content_type: name)
    monkeypatch.setattr("app.services.workspace_service.gcs_storage", storage)

    response = await client.post(
        f"{WORKSPACES_URL}/{workspace.id}/images",
        files=[
            ("images", ("front.png", b"\x89PNG fake", "image/png")),
            ("images", ("desk.webp", b"RIFF fake", "image/webp")),
        ],
        headers=auth_headers(admin),
    )

    assert response.status_code == 200
    images = response.json()["images"]
    assert len(images) == 2
    assert images[0].startswith(f"workspaces/{workspace.id}/") and images[0].endswith(".png")
    assert images[1].endswith(".webp")
    assert storage.upload_bytes_async.await_count == 2


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "files, message",
    [
        ([("images", (f"{i}.png", b"x", "image/png")) for i in range(4)], "You can upload up to 3 images"),
        ([("images", ("notes.pdf", b"%PDF", "application/pdf"))], "File type application/pdf not allowed"),
    ],
)
async def test_image_upload_rejects_bad_files(client, admin, workspace, monkeypatch, files, message):
    storage = MagicMock()
    storage.upload_bytes_async = AsyncMock()
    monkeypatch.setattr("app.services.workspace_service.gcs_storage", storage)

    response = await client.post(
        f"{WORKSPACES_URL}/{workspace.id}/images", files=files, headers=auth_headers(admin)
    )

    assert response.status_code == 400
    assert response.json()["message"].startswith(message)
    storage.upload_bytes_async.assert_not_awaited()


@pytest.mark.asyncio
async def test_image_upload_without_storage(client, admin, workspace):
    response = await client.post(
        f"{WORKSPACES_URL}/{workspace.id}/images",
        files=[("images", ("front.png", b"\x89PNG", "image/png"))],
        headers=auth_headers(admin),
    )

    assert response.status_code == 503
