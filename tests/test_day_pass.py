import re
from datetime import timedelta

import pytest
from sqlalchemy import select

from app.models import DayPass
from app.models.enums import UserRole
from app.services.day_pass_service import deliver_day_pass, generate_pass_code
from app.utils.clock import utc_now
from tests.helpers import auth_headers, create_user

DAY_PASS_URL = "/api/daypass"


def pass_payload(visit_date=None, **overrides) -> dict:
    payload = {
        "name": "Leela Menon",
        "email": "leela@example.com",
        "contact": "9845012345",
        "purpose": "Client meeting",
        "visitDate": (visit_date or utc_now()).isoformat(),
    }
    payload.update(overrides)
    return payload


async def _issue(client, visit_date=None) -> str:
    response = await client.post(DAY_PASS_URL, json=pass_payload(visit_date))
    assert response.status_code == 201
    return response.json()["data"]["passCode"]


def test_pass_codes_are_prefixed_and_short():
    codes = {generate_pass_code() for _ in range(50)}

    assert len(codes) == 50
    assert all(re.fullmatch(r"COHORT-[0-9A-F]{8}", code) for code in codes)


def test_delivery_attaches_a_qr_png(mock_emails):
    deliver_day_pass("leela@example.com", "Leela", "COHORT-ABCD1234", "June 01, 2030")

    kwargs = mock_emails["day_pass"].call_args.kwargs
    assert kwargs["qr_png"].startswith(b"\x89PNG")


@pytest.mark.asyncio
async def test_issuing_a_pass_emails_the_visitor(client, mock_emails):
    response = await client.post(DAY_PASS_URL, json=pass_payload())

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["status"] == "Pending"
    args = mock_emails["day_pass"].call_args
    assert args.args[:3] == ("leela@example.com", "Leela Menon", body["data"]["passCode"])
    assert args.kwargs["qr_png"].startswith(b"\x89PNG")


@pytest.mark.asyncio
async def test_missing_visit_date_is_named(client):
    payload = pass_payload()
    del payload["visitDate"]

    response = await client.post(DAY_PASS_URL, json=payload)

    assert response.status_code == 400
    assert response.json() == {"message": "Visit date is required"}


@pytest.mark.asyncio
async def test_pass_is_valid_once_on_its_visit_date(client, admin):
    code = await _issue(client)
    headers = auth_headers(admin)

    first = await client.get(f"{DAY_PASS_URL}/verify/{code.lower()}", headers=headers)
    second = await client.get(f"{DAY_PASS_URL}/verify/{code}", headers=headers)

    assert first.status_code == 200
    assert first.json()["data"]["status"] == "Used"
    assert second.status_code == 400
    assert second.json() == {"message": "Pass has already been used"}


@pytest.mark.asyncio
async def test_future_pass_is_not_yet_valid(client, admin):
    visit = utc_now() + timedelta(days=3)
    code = await _issue(client, visit)

    response = await client.get(f"{DAY_PASS_URL}/verify/{code}", headers=auth_headers(admin))

    assert response.status_code == 400
    assert response.json() == {"message": f"Pass is only valid on {visit:%B %d, %Y}"}


@pytest.mark.asyncio
async def test_past_pass_expires(client, db, admin):
    code = await _issue(client, utc_now() - timedelta(days=2))
    headers = auth_headers(admin)

    first = await client.get(f"{DAY_PASS_URL}/verify/{code}", headers=headers)
    second = await client.get(f"{DAY_PASS_URL}/verify/{code}", headers=headers)

    assert first.json() == {"message": "Pass has expired"}
    assert second.json() == {"message": "Pass has expired"}
    result = await db.execute(select(DayPass).where(DayPass.pass_code == code))
    assert result.scalar_one().status.value == "Expired"


@pytest.mark.asyncio
async def test_unknown_pass(client, admin):
    response = await client.get(f"{DAY_PASS_URL}/verify/COHORT-00000000", headers=auth_headers(admin))

    assert response.status_code == 404
    assert response.json() == {"message": "Invalid pass code"}


@pytest.mark.asyncio
async def test_only_pass_checkers_verify_and_list(client, db, member):
    code = await _issue(client)
    checker = await create_user(db, email="desk@example.com", role=UserRole.AUTHENTICATOR)

    assert (await client.get(f"{DAY_PASS_URL}/verify/{code}", headers=auth_headers(member))).status_code == 403
    assert (await client.get(DAY_PASS_URL, headers=auth_headers(member))).status_code == 403
    assert (await client.get(f"{DAY_PASS_URL}/verify/{code}", headers=auth_headers(checker))).status_code == 200
    assert [p["passCode"] for p in (await client.get(DAY_PASS_URL, headers=auth_headers(checker))).json()] == [code]
