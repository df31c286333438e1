from datetime import datetime, timedelta

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from angelina.domain.appointments.repository import AppointmentRepository
from angelina.domain.appointments.schemas import REQUIRED_FIELDS, AppointmentCreate
from angelina.domain.appointments.service import MAX_LIST_LIMIT, AppointmentService
from angelina.models import Appointment
from angelina.shared.errors import NotFoundError, NotificationError, StoreError, ValidationError


@pytest.fixture
def service(db_session, email_sender):
    return AppointmentService(db_session, email_sender)


def make_rows(db_session, count, status="pending"):
    """Insert rows with strictly increasing created_at, oldest first"""
    base = datetime(2026, 1, 1, 9, 0, 0)
    rows = []
    for i in range(count):
        row = Appointment(
            first_name=f"Client{i}",
            surname="Test",
            email=f"client{i}@example.com",
            whatsapp="+2348000000000",
            phone="+2348000000000",
            location="Lagos",
            work_type="landing",
            ranking="basic",
            description="Site",
            status=status,
            created_at=base + timedelta(minutes=i),
        )
        db_session.add(row)
        rows.append(row)
    db_session.commit()
    return rows


# ============================================================================
# submit
# ============================================================================


@pytest.mark.asyncio
@pytest.mark.parametrize("field", REQUIRED_FIELDS)
async def test_submit_rejects_missing_required_field(service, db_session, email_sender, appointment_payload, field):
    del appointment_payload[field]

    with pytest.raises(ValidationError) as exc_info:
        await service.submit(AppointmentCreate(**appointment_payload))

    assert field in exc_info.value.message
    assert db_session.query(Appointment).count() == 0
    email_sender.send_client_confirmation.assert_not_called()


@pytest.mark.asyncio
async def test_submit_treats_whitespace_as_missing(service, db_session, appointment_payload):
    appointment_payload["location"] = "   "

    with pytest.raises(ValidationError):
        await service.submit(AppointmentCreate(**appointment_payload))

    assert db_session.query(Appointment).count() == 0


@pytest.mark.asyncio
async def test_submit_rejects_malformed_email_and_phone(service, db_session, appointment_payload):
    with pytest.raises(ValidationError):
        await service.submit(AppointmentCreate(**{**appointment_payload, "email": "not-an-email"}))
    with pytest.raises(ValidationError):
        await service.submit(AppointmentCreate(**{**appointment_payload, "phone": "call me maybe"}))

    assert db_session.query(Appointment).count() == 0


@pytest.mark.asyncio
async def test_submit_stores_pending_appointment_and_notifies(service, email_sender, appointment_payload):
    appointment = await service.submit(
        AppointmentCreate(**appointment_payload, maintenance=True, budget="", hear="Instagram")
    )

    assert appointment.id is not None
    assert appointment.status == "pending"
    assert appointment.created_at is not None
    assert appointment.maintenance is True
    assert appointment.hosting is False
    assert appointment.budget is None
    assert appointment.hear_about == "Instagram"

    email_sender.send_client_confirmation.assert_awaited_once_with(
        to="ada@example.com",
        first_name="Ada",
        surname="Lovelace",
        appointment_id=appointment.id,
        work_type="landing",
        ranking="basic",
    )
    email_sender.send_admin_notification.assert_awaited_once()
    assert email_sender.send_admin_notification.await_args.kwargs["appointment_id"] == appointment.id


@pytest.mark.asyncio
async def test_submit_assigns_distinct_increasing_ids(service, appointment_payload):
    first = await service.submit(AppointmentCreate(**appointment_payload))
    second = await service.submit(AppointmentCreate(**appointment_payload))
    third = await service.submit(AppointmentCreate(**appointment_payload))

    assert first.id < second.id < third.id


@pytest.mark.asyncio
async def test_submit_survives_notification_failures(service, db_session, email_sender, appointment_payload):
    email_sender.send_client_confirmation.side_effect = NotificationError("smtp down")
    email_sender.send_admin_notification.side_effect = RuntimeError("relay unreachable")

    appointment = await service.submit(AppointmentCreate(**appointment_payload))

    assert db_session.query(Appointment).filter(Appointment.id == appointment.id).count() == 1
    email_sender.send_admin_notification.assert_awaited_once()


@pytest.mark.asyncio
async def test_submit_wraps_store_failure(service, monkeypatch, email_sender, appointment_payload):
    def fail(db, **data):
        raise OperationalError("INSERT", {}, Exception("connection lost"))

    monkeypatch.setattr(AppointmentRepository, "create_appointment", staticmethod(fail))

    with pytest.raises(StoreError) as exc_info:
        await service.submit(AppointmentCreate(**appointment_payload))

    assert "connection lost" not in exc_info.value.message
    email_sender.send_client_confirmation.assert_not_called()


# ============================================================================
# list / get / delete
# ============================================================================


def test_list_returns_most_recent_first_with_limit(service, db_session):
    rows = make_rows(db_session, 5)

    result = service.list_appointments(status="pending", limit=2, offset=0)

    assert [a.id for a in result] == [rows[4].id, rows[3].id]


def test_list_filters_by_status_and_offsets(service, db_session):
    make_rows(db_session, 3, status="pending")
    accepted = make_rows(db_session, 2, status="accepted")

    assert {a.id for a in service.list_appointments(status="accepted")} == {a.id for a in accepted}
    assert len(service.list_appointments()) == 5
    assert len(service.list_appointments(offset=4)) == 1


def test_list_clamps_limit(service, db_session):
    make_rows(db_session, MAX_LIST_LIMIT + 5)

    assert len(service.list_appointments(limit=1000)) == MAX_LIST_LIMIT


def test_list_rejects_bad_parameters(service):
    with pytest.raises(ValidationError):
        service.list_appointments(status="archived")
    with pytest.raises(ValidationError):
        service.list_appointments(limit=0)
    with pytest.raises(ValidationError):
        service.list_appointments(offset=-1)


def test_get_missing_appointment_raises_not_found(service):
    with pytest.raises(NotFoundError):
        service.get(999)


def test_delete_removes_row_and_ignores_missing(service, db_session):
    (row,) = make_rows(db_session, 1)
    row_id = row.id

    service.delete(row_id)
    service.delete(row_id)
    service.delete(12345)

    assert db_session.query(Appointment).count() == 0


# ============================================================================
# update_status
# ============================================================================


@pytest.mark.asyncio
async def test_update_status_rejects_unknown_status(service, db_session, email_sender):
    (row,) = make_rows(db_session, 1)

    with pytest.raises(ValidationError):
        await service.update_status(row.id, "archived", "nope")
    with pytest.raises(ValidationError):
        await service.update_status(row.id, None)

    db_session.refresh(row)
    assert row.status == "pending"
    assert row.admin_notes is None
    assert row.updated_at is None
    email_sender.send_status_update.assert_not_called()


@pytest.mark.asyncio
async def test_update_status_accepted_emails_stored_address_once(service, db_session, email_sender):
    (row,) = make_rows(db_session, 1)

    updated = await service.update_status(row.id, "accepted", "Kickoff next week")

    assert updated.status == "accepted"
    assert updated.admin_notes == "Kickoff next week"
    assert updated.updated_at is not None
    email_sender.send_status_update.assert_awaited_once_with(
        to="client0@example.com",
        first_name="Client0",
        appointment_id=row.id,
        status="accepted",
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("status", ["pending", "reviewed"])
async def test_update_status_without_client_message_sends_nothing(service, db_session, email_sender, status):
    (row,) = make_rows(db_session, 1)

    updated = await service.update_status(row.id, status)

    assert updated.status == status
    email_sender.send_status_update.assert_not_called()


@pytest.mark.asyncio
async def test_update_status_same_value_refreshes_and_resends(service, db_session, email_sender):
    (row,) = make_rows(db_session, 1, status="completed")

    await service.update_status(row.id, "completed")
    await service.update_status(row.id, "completed")

    assert email_sender.send_status_update.await_count == 2


@pytest.mark.asyncio
async def test_update_status_email_failure_is_not_fatal(service, db_session, email_sender):
    (row,) = make_rows(db_session, 1)
    email_sender.send_status_update.side_effect = NotificationError("smtp down")

    updated = await service.update_status(row.id, "rejected")

    assert updated.status == "rejected"


@pytest.mark.asyncio
async def test_update_status_missing_appointment_is_noop(service, email_sender):
    assert await service.update_status(4242, "accepted") is None
    email_sender.send_status_update.assert_not_called()


def test_repository_update_status_uses_database_clock(db_session):
    (row,) = make_rows(db_session, 1)
    row_id = row.id

    AppointmentRepository.update_status(db_session, row_id, "reviewed", None)

    db_now = db_session.scalar(select(func.now()))
    updated = AppointmentRepository.get_appointment_by_id(db_session, row_id)
    assert updated.status == "reviewed"
    assert abs(updated.updated_at - db_now) <= timedelta(seconds=5)
