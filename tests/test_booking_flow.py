import re
from datetime import datetime, timedelta

import pytest
from fastapi import HTTPException

from app.models import BookingRequest, Invoice
from app.models.enums import UserStatus
from app.utils.clock import utc_now
from app.utils.duration import add_duration, parse_duration
from tests.helpers import auth_headers, booking_payload, count_rows, create_user, future_start

BOOKING_URL = "/api/requests/booking"


@pytest.mark.asyncio
async def test_pay_now_confirms_allots_and_issues_paid_invoice(client, db, member, workspace):
    start = future_start()
    response = await client.post(BOOKING_URL, json=booking_payload(workspace.id, startDate=start.isoformat()))

    assert response.status_code == 201
    body = response.json()
    booking, invoice = body["booking"], body["invoice"]

    assert booking["status"] == "Confirmed"
    assert booking["paymentStatus"] == "Paid"
    assert booking["totalAmount"] == 3000
    assert booking["userId"] == member.id
    assert re.fullmatch(r"INV-[0-9A-F]{6}", booking["invoiceNumber"])
    assert datetime.fromisoformat(booking["endDate"]) == add_duration(start, parse_duration("3 months"))

    assert invoice["invoiceNumber"] == booking["invoiceNumber"]
    assert invoice["bookingId"] == booking["id"]
    assert invoice["amount"] == 3000
    assert invoice["status"] == "Paid"
    assert invoice["dueDate"] is None
    assert invoice["paidDate"] is not None
    assert invoice["customerEmail"] == "asha@example.com"

    await db.refresh(workspace)
    assert workspace.allotted_to_id == member.id
    assert workspace.allotment_start == start
    assert workspace.allotment_end == datetime.fromisoformat(booking["endDate"])


@pytest.mark.asyncio
async def test_pay_later_awaits_payment_without_allotment(client, db, member, workspace):
    response = await client.post(BOOKING_URL, json=booking_payload(workspace.id, paymentMethod="Pay Later"))

    assert response.status_code == 201
    booking, invoice = response.json()["booking"], response.json()["invoice"]
    assert booking["status"] == "Awaiting Payment"
    assert booking["paymentStatus"] == "Pending"
    assert invoice["status"] == "Pending"
    assert invoice["paidDate"] is None

    due = datetime.fromisoformat(invoice["dueDate"])
    expected_due = utc_now() + timedelta(days=7)
    assert abs((due - expected_due).total_seconds()) < 60

    await db.refresh(workspace)
    assert workspace.allotted_to_id is None


@pytest.mark.asyncio
async def test_invoice_payment_method_is_deferred(client, member, workspace):
    response = await client.post(BOOKING_URL, json=booking_payload(workspace.id, paymentMethod="Invoice"))

    assert response.status_code == 201
    assert response.json()["booking"]["status"] == "Awaiting Payment"
    assert response.json()["invoice"]["paymentMethod"] == "Invoice"


@pytest.mark.asyncio
async def test_pay_now_for_unregistered_email_skips_allotment(client, db, workspace):
    response = await client.post(BOOKING_URL, json=booking_payload(workspace.id, email="walkin@example.com"))

    assert response.status_code == 201
    assert response.json()["booking"]["status"] == "Confirmed"
    assert response.json()["invoice"]["userId"] is None
    await db.refresh(workspace)
    assert workspace.allotted_to_id is None


@pytest.mark.asyncio
async def test_session_user_is_the_payer(client, db, member, workspace):
    response = await client.post(
        BOOKING_URL,
        json=booking_payload(workspace.id, email="billing@raostudio.com"),
        headers=auth_headers(member),
    )

    assert response.status_code == 201
    assert response.json()["invoice"]["userId"] == member.id
    await db.refresh(workspace)
    assert workspace.allotted_to_id == member.id


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"contactNumber": None}, "Contact number is required"),
        ({"contactNumber": "   "}, "Contact number is required"),
        ({"fullName": ""}, "Full name is required"),
        ({"duration": None}, "Duration is required"),
        ({"startDate": None}, "Start date is required"),
        ({"email": "asha.example.com"}, "Invalid email format"),
        ({"contactNumber": "12345"}, "Invalid contact number format"),
    ],
)
async def test_invalid_submissions_are_rejected_without_writes(client, db, workspace, overrides, message):
    response = await client.post(BOOKING_URL, json=booking_payload(workspace.id, **overrides))

    assert response.status_code == 400
    assert response.json() == {"message": message}
    assert await count_rows(db, BookingRequest) == 0
    assert await count_rows(db, Invoice) == 0


@pytest.mark.asyncio
async def test_missing_field_in_body_is_named(client, workspace):
    payload = booking_payload(workspace.id)
    del payload["contactNumber"]

    response = await client.post(BOOKING_URL, json=payload)

    assert response.status_code == 400
    assert response.json()["message"] == "Contact number is required"


@pytest.mark.asyncio
async def test_unknown_payment_method_is_rejected(client, workspace):
    response = await client.post(BOOKING_URL, json=booking_payload(workspace.id, paymentMethod="Cash"))

    assert response.status_code == 400
    assert "payment method" in response.json()["message"].lower()


@pytest.mark.asyncio
async def test_unknown_duration_unit_is_rejected(client, db, workspace):
    response = await client.post(BOOKING_URL, json=booking_payload(workspace.id, duration="3 fortnights"))

    assert response.status_code == 400
    assert "duration unit" in response.json()["message"]
    assert await count_rows(db, BookingRequest) == 0


@pytest.mark.asyncio
async def test_unknown_workspace_is_not_found(client, db):
    response = await client.post(BOOKING_URL, json=booking_payload(9999))

    assert response.status_code == 404
    assert response.json() == {"message": "Workspace not found"}
    assert await count_rows(db, BookingRequest) == 0


@pytest.mark.asyncio
async def test_workspace_held_by_someone_else_conflicts(client, db, member, other_member, workspace):
    workspace.allotted_to_id = other_member.id
    workspace.allotment_start = utc_now()
    workspace.allotment_end = utc_now() + timedelta(days=60)
    await db.commit()

    response = await client.post(BOOKING_URL, json=booking_payload(workspace.id))

    assert response.status_code == 409
    assert response.json() == {"message": "Workspace is already allotted"}
    assert await count_rows(db, BookingRequest) == 0
    assert await count_rows(db, Invoice) == 0
    await db.refresh(workspace)
    assert workspace.allotted_to_id == other_member.id


@pytest.mark.asyncio
async def test_expired_allotment_frees_the_workspace(client, db, member, other_member, workspace):
    workspace.allotted_to_id = other_member.id
    workspace.allotment_start = utc_now() - timedelta(days=90)
    workspace.allotment_end = utc_now() - timedelta(days=1)
    await db.commit()

    response = await client.post(BOOKING_URL, json=booking_payload(workspace.id))

    assert response.status_code == 201
    await db.refresh(workspace)
    assert workspace.allotted_to_id == member.id


@pytest.mark.asyncio
async def test_current_occupant_can_extend(client, db, member, workspace):
    first = await client.post(BOOKING_URL, json=booking_payload(workspace.id))
    second = await client.post(
        BOOKING_URL, json=booking_payload(workspace.id, startDate=future_start(days=100).isoformat())
    )

    assert first.status_code == 201
    assert second.status_code == 201
    await db.refresh(workspace)
    assert workspace.allotment_end == datetime.fromisoformat(second.json()["booking"]["endDate"])


@pytest.mark.asyncio
async def test_invoice_failure_rolls_back_booking_and_allotment(client, db, member, workspace, monkeypatch):
    async def failing_issue_invoice(*args, **kwargs):
        raise HTTPException(status_code=503, detail="Invoice store unavailable")

    monkeypatch.setattr("app.services.invoice_service.issue_invoice", failing_issue_invoice)

    response = await client.post(BOOKING_URL, json=booking_payload(workspace.id))

    assert response.status_code == 503
    assert await count_rows(db, BookingRequest) == 0
    assert await count_rows(db, Invoice) == 0
    await db.refresh(workspace)
    assert workspace.allotted_to_id is None


@pytest.mark.asyncio
async def test_price_is_read_from_the_current_workspace(client, admin, workspace):
    update = await client.put(
        f"/api/workspaces/{workspace.id}", json={"basePrice": 2500}, headers=auth_headers(admin)
    )
    assert update.status_code == 200

    response = await client.post(
        BOOKING_URL, json=booking_payload(workspace.id, duration="2 weeks", paymentMethod="Pay Later")
    )

    assert response.status_code == 201
    assert response.json()["booking"]["totalAmount"] == 1153


@pytest.mark.asyncio
async def test_invoice_numbers_are_unique_per_booking(client, db, workspace):
    numbers = set()
    for _ in range(3):
        response = await client.post(
            BOOKING_URL, json=booking_payload(workspace.id, paymentMethod="Pay Later")
        )
        numbers.add(response.json()["booking"]["invoiceNumber"])

    assert len(numbers) == 3
    assert await count_rows(db, Invoice) == 3


@pytest.mark.asyncio
async def test_inactive_session_token_falls_back_to_email_lookup(client, db, workspace):
    inactive = await create_user(db, email="gone@example.com", status=UserStatus.INACTIVE)
    response = await client.post(
        BOOKING_URL,
        json=booking_payload(workspace.id, email="walkin@example.com"),
        headers=auth_headers(inactive),
    )

    assert response.status_code == 201
    assert response.json()["invoice"]["userId"] is None


@pytest.mark.asyncio
@pytest.mark.parametrize("duration", ["99999999999 days", "99999999 weeks", "9" * 400 + " hours"])
async def test_oversized_duration_is_a_bad_request(client, db, member, workspace, duration):
    response = await client.post(BOOKING_URL, json=booking_payload(workspace.id, duration=duration))

    assert response.status_code == 400
    assert response.json() == {"message": "Duration must not exceed 100 years"}
    assert await count_rows(db, BookingRequest) == 0
    await db.refresh(workspace)
    assert workspace.allotted_to_id is None


@pytest.mark.asyncio
async def test_lease_end_beyond_the_calendar_is_a_bad_request(client, db, workspace):
    response = await client.post(
        BOOKING_URL,
        json=booking_payload(workspace.id, startDate="9999-06-01T09:00:00", duration="40 weeks"),
    )

    assert response.status_code == 400
    assert response.json() == {"message": "Lease end date is out of range"}
    assert await count_rows(db, BookingRequest) == 0


@pytest.mark.asyncio
async def test_unknown_workspace_wins_over_bad_duration(client, db):
    response = await client.post(BOOKING_URL, json=booking_payload(9999, duration="3 fortnights"))

    assert response.status_code == 404
    assert response.json() == {"message": "Workspace not found"}


@pytest.mark.asyncio
async def test_taken_invoice_number_is_regenerated(client, db, workspace, monkeypatch):
    numbers = iter(["INV-ABCDEF", "INV-ABCDEF", "INV-ABCDEF", "INV-123456"])
    monkeypatch.setattr("app.services.invoice_service.generate_invoice_number", lambda: next(numbers))

    first = await client.post(BOOKING_URL, json=booking_payload(workspace.id, paymentMethod="Pay Later"))
    second = await client.post(BOOKING_URL, json=booking_payload(workspace.id, paymentMethod="Pay Later"))

    assert first.status_code == 201 and second.status_code == 201
    assert first.json()["invoice"]["invoiceNumber"] == "INV-ABCDEF"
    assert second.json()["booking"]["invoiceNumber"] == "INV-123456"
    assert second.json()["invoice"]["invoiceNumber"] == "INV-123456"
    assert await count_rows(db, Invoice) == 2


@pytest.mark.asyncio
async def test_invoice_number_allocation_gives_up_after_repeated_collisions(client, db, workspace, monkeypatch):
    monkeypatch.setattr("app.services.invoice_service.generate_invoice_number", lambda: "INV-ABCDEF")

    first = await client.post(BOOKING_URL, json=booking_payload(workspace.id, paymentMethod="Pay Later"))
    second = await client.post(BOOKING_URL, json=booking_payload(workspace.id, paymentMethod="Pay Later"))

    assert first.status_code == 201
    assert second.status_code == 503
    assert second.json() == {"message": "Could not allocate an invoice number, please retry"}
    assert await count_rows(db, BookingRequest) == 1


@pytest.mark.asyncio
async def test_pay_now_for_inactive_account_email_skips_allotment(client, db, workspace):
    await create_user(db, email="gone@example.com", status=UserStatus.INACTIVE)

    response = await client.post(BOOKING_URL, json=booking_payload(workspace.id, email="gone@example.com"))

    assert response.status_code == 201
    assert response.json()["booking"]["userId"] is None
    assert response.json()["invoice"]["userId"] is None
    await db.refresh(workspace)
    assert workspace.allotted_to_id is None
