from fastapi import status

from conftest import API, count_rows
from room_reservations.models.time_slot import TimeSlot


def test_create_time_slot_success(api, time_slot_data):
    response = api.post(f"{API}/time-slots", json=time_slot_data)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert isinstance(data["id"], int)
    assert data["start"] == "08:00"
    assert data["end"] == "09:30"
    assert data["days"] == ["L", "M", "X", "J", "V"]


def test_create_time_slot_normalizes(api):
    response = api.post(
        f"{API}/time-slots", json={"start": "8:00", "end": " 9:30", "days": ["V", "L", "V", "X"]}
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["start"] == "08:00"
    assert data["end"] == "09:30"
    assert data["days"] == ["L", "X", "V"]


def test_create_time_slot_accepts_days_as_json_text(api):
    response = api.post(
        f"{API}/time-slots", json={"start": "14:00", "end": "15:30", "days": '["L","M","X","J"]'}
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["days"] == ["L", "M", "X", "J"]


def test_create_time_slot_rejects_invalid_input(api):
    cases = [
        {"start": "09:30", "end": "08:00", "days": ["L"]},
        {"start": "09:30", "end": "09:30", "days": ["L"]},
        {"start": "25:00", "end": "26:00", "days": ["L"]},
        {"start": "nine", "end": "10:00", "days": ["L"]},
        {"start": "08:00", "end": "09:00", "days": []},
        {"start": "08:00", "end": "09:00", "days": ["S"]},
        {"start": "08:00", "end": "09:00"},
    ]
    for body in cases:
        response = api.post(f"{API}/time-slots", json=body)
        assert response.status_code == status.HTTP_400_BAD_REQUEST, body
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    assert count_rows(TimeSlot) == 0


def test_create_then_get_round_trip(api, time_slot):
    response = api.get(f"{API}/time-slots/{time_slot['id']}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == time_slot


def test_list_time_slots_ordered_by_start(api):
    late = api.post(f"{API}/time-slots", json={"start": "15:45", "end": "17:15", "days": ["L"]}).json()
    early = api.post(f"{API}/time-slots", json={"start": "08:00", "end": "09:30", "days": ["L"]}).json()

    response = api.get(f"{API}/time-slots")
    assert response.status_code == status.HTTP_200_OK
    assert [s["id"] for s in response.json()] == [early["id"], late["id"]]


def test_update_time_slot_success(api, time_slot):
    update_data = {"start": "09:45", "end": "11:15", "days": ["M", "J"]}
    response = api.put(f"{API}/time-slots/{time_slot['id']}", json=update_data)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"id": time_slot["id"], **update_data}
    assert api.get(f"{API}/time-slots/{time_slot['id']}").json()["days"] == ["M", "J"]


def test_update_time_slot_validates(api, time_slot):
    response = api.put(
        f"{API}/time-slots/{time_slot['id']}", json={"start": "10:00", "end": "09:00", "days": ["L"]}
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert api.get(f"{API}/time-slots/{time_slot['id']}").json() == time_slot


def test_update_time_slot_not_found(api, time_slot_data):
    response = api.put(f"{API}/time-slots/9999", json=time_slot_data)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["message"] == "Time slot not found"


def test_delete_time_slot_success(api, time_slot):
    response = api.delete(f"{API}/time-slots/{time_slot['id']}")
    assert response.status_code == status.HTTP_200_OK
    assert count_rows(TimeSlot) == 0


def test_delete_time_slot_not_found(api):
    response = api.delete(f"{API}/time-slots/9999")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_time_slot_ids_outside_the_integer_range_are_rejected(api, time_slot_data):
    for time_slot_id in (0, 2**63, 2**70):
        url = f"{API}/time-slots/{time_slot_id}"
        assert api.get(url).status_code == status.HTTP_400_BAD_REQUEST
        assert api.put(url, json=time_slot_data).status_code == status.HTTP_400_BAD_REQUEST
        assert api.delete(url).status_code == status.HTTP_400_BAD_REQUEST


def test_delete_time_slot_with_reservation_is_refused(api, time_slot, reservation_data):
    assert api.post(f"{API}/reservations", json=reservation_data).status_code == 201

    response = api.delete(f"{API}/time-slots/{time_slot['id']}")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"]["code"] == "RESOURCE_IN_USE"
    assert api.get(f"{API}/time-slots/{time_slot['id']}").status_code == status.HTTP_200_OK
