import datetime as dt
import sqlite3
import threading

import pytest
from fastapi import status

from conftest import API, TEST_DB_PATH, count_rows
from room_reservations.config import settings
from room_reservations.database import SessionLocal, engine
from room_reservations.models.reservation import Reservation
from room_reservations.models.room import Room
from room_reservations.schemas.reservation import ReservationCreateRequest
from room_reservations.schemas.room import RoomCreateRequest
from room_reservations.services import reservation_service as reservation_module
from room_reservations.services.conflict_service import (
    CatalogKind, can_delete, count_reservations, is_slot_free,
)
from room_reservations.services.reservation_service import reservation_service
from room_reservations.services.room_service import room_service
from room_reservations.utils.exceptions import (
    ConflictException, NotFoundException, ReservationConflictException, ResourceInUseException,
)

MONDAY = dt.date(2024, 3, 4)


def _request(room, time_slot, day=MONDAY, user="a@b.com") -> ReservationCreateRequest:
    return ReservationCreateRequest(
        room_id=room["id"], time_slot_id=time_slot["id"], date=day, user_id=user, purpose="class",
    )


def test_is_slot_free_matches_exact_triple(test_db, room, other_room, time_slot):
    assert is_slot_free(test_db, room["id"], time_slot["id"], MONDAY)

    reservation_service.create_reservation(test_db, _request(room, time_slot))

    assert not is_slot_free(test_db, room["id"], time_slot["id"], MONDAY)
    assert is_slot_free(test_db, room["id"], time_slot["id"], MONDAY + dt.timedelta(days=1))
    assert is_slot_free(test_db, other_room["id"], time_slot["id"], MONDAY)


def test_can_delete_counts_references(test_db, room, other_room, time_slot):
    assert can_delete(test_db, CatalogKind.ROOM, room["id"])
    assert can_delete(test_db, CatalogKind.TIME_SLOT, time_slot["id"])

    reservation_service.create_reservation(test_db, _request(room, time_slot))
    reservation_service.create_reservation(test_db, _request(room, time_slot, MONDAY + dt.timedelta(days=7)))

    assert count_reservations(test_db, CatalogKind.ROOM, room["id"]) == 2
    assert not can_delete(test_db, CatalogKind.ROOM, room["id"])
    assert not can_delete(test_db, CatalogKind.TIME_SLOT, time_slot["id"])
    assert can_delete(test_db, CatalogKind.ROOM, other_room["id"])


def test_conflict_errors_share_a_family(test_db, room, time_slot):
    reservation_service.create_reservation(test_db, _request(room, time_slot))

    with pytest.raises(ConflictException):
        reservation_service.create_reservation(test_db, _request(room, time_slot, user="c@d.com"))
    with pytest.raises(ConflictException):
        room_service.delete_room(test_db, room["id"])


def test_failed_create_leaves_session_usable(test_db, room, time_slot):
    reservation_service.create_reservation(test_db, _request(room, time_slot))

    with pytest.raises(ReservationConflictException):
        reservation_service.create_reservation(test_db, _request(room, time_slot))

    created = reservation_service.create_reservation(
        test_db, _request(room, time_slot, MONDAY + dt.timedelta(days=1))
    )
    assert created["date"] == "2024-03-05"
    assert count_rows(Reservation) == 2


def test_missing_room_is_checked_before_insert(test_db, time_slot):
    with pytest.raises(NotFoundException):
        reservation_service.create_reservation(test_db, _request({"id": 9999}, time_slot))
    assert count_rows(Reservation) == 0


def test_unique_constraint_backs_up_the_check(test_db, room, time_slot, monkeypatch):
    # Simulate a race that got past the pre-check
    monkeypatch.setattr(reservation_module, "is_slot_free", lambda *args: True)

    reservation_service.create_reservation(test_db, _request(room, time_slot))
    with pytest.raises(ReservationConflictException):
        reservation_service.create_reservation(test_db, _request(room, time_slot, user="c@d.com"))

    assert count_rows(Reservation) == 1


def test_restrict_foreign_key_backs_up_the_delete_check(test_db, room, time_slot, monkeypatch):
    reservation_service.create_reservation(test_db, _request(room, time_slot))
    monkeypatch.setattr("room_reservations.services.room_service.can_delete", lambda *args: True)

    with pytest.raises(ResourceInUseException):
        room_service.delete_room(test_db, room["id"])

    assert count_rows(Room) == 1


def test_room_update_then_read_in_new_session(test_db, room):
    room_service.update_room(
        test_db, room["id"], RoomCreateRequest(name="Aula Magna", capacity=120, building="Edificio 1")
    )
    with SessionLocal() as db:
        assert room_service.get_room(db, room["id"])["name"] == "Aula Magna"


def test_simultaneous_identical_reservations(room, time_slot):
    barrier = threading.Barrier(2)
    outcomes = []

    def attempt(user):
        db = SessionLocal()
        try:
            barrier.wait()
            reservation_service.create_reservation(db, _request(room, time_slot, user=user))
            outcomes.append("created")
        except ReservationConflictException:
            outcomes.append("conflict")
        finally:
            db.close()

    threads = [threading.Thread(target=attempt, args=(f"user{i}@example.com",)) for i in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)

    assert sorted(outcomes) == ["conflict", "created"]
    assert count_rows(Reservation) == 1


def test_store_busy_returns_503(api, reservation_data, monkeypatch):
    # New pooled connections pick up the shorter lock wait
    monkeypatch.setattr(settings, "DATABASE_BUSY_TIMEOUT_MS", 200)
    engine.dispose()

    writer = sqlite3.connect(TEST_DB_PATH, isolation_level=None)
    try:
        writer.execute("BEGIN IMMEDIATE")
        response = api.post(f"{API}/reservations", json=reservation_data)
    finally:
        writer.rollback()
        writer.close()

    try:
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        payload = response.json()
        assert payload["success"] is False
        assert payload["error"]["code"] == "STORE_BUSY"
        assert count_rows(Reservation) == 0
    finally:
        engine.dispose()
