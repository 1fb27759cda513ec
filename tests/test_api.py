"""
HTTP tests for /appointments.
"""

from __future__ import annotations


def _body(**overrides) -> dict:
    body = {
        "name": "Anna",
        "phoneNumber": "+37491000000",
        "service": "treatment",
        "start": "2024-06-10T09:00:00.000Z",
        "tzOffset": 0,
    }
    body.update(overrides)
    return body


def test_create_and_list(client) -> None:
    resp = client.post("/appointments", json=_body())

    assert resp.status_code == 201
    created = resp.json()
    assert created["phoneNumber"] == "+37491000000"
    assert created["start"] == "2024-06-10T09:00:00.000Z"
    assert created["end"] == "2024-06-10T09:45:00.000Z"
    assert "createdAt" in created

    listed = client.get("/appointments").json()
    assert [a["id"] for a in listed] == [created["id"]]


def test_overlap_is_400(client) -> None:
    assert client.post("/appointments", json=_body()).status_code == 201

    resp = client.post(
        "/appointments",
        json=_body(service="consultation", start="2024-06-10T09:15:00.000Z"),
    )

    assert resp.status_code == 400
    assert resp.json() == {"detail": "Time slot is busy"}


def test_outside_hours_is_400(client) -> None:
    resp = client.post("/appointments", json=_body(start="2024-06-15T12:30:00.000Z"))

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Outside working hours"


def test_missing_fields_is_400(client) -> None:
    resp = client.post("/appointments", json={"name": "Anna"})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "name, phoneNumber, service, start are required"


def test_string_tz_offset_accepted(client) -> None:
    resp = client.post(
        "/appointments",
        json=_body(start="2024-06-10T05:00:00.000Z", tzOffset="-240"),
    )
    assert resp.status_code == 201


def test_availability(client) -> None:
    client.post("/appointments", json=_body())

    resp = client.get(
        "/appointments/availability",
        params={"date": "2024-06-10", "service": "consultation", "tzOffset": "0"},
    )

    assert resp.status_code == 200
    data = resp.json()
    assert set(data) == {"availableSlots", "busySlots", "workingSlots"}
    assert len(data["workingSlots"]) == 36
    assert data["workingSlots"][0] == "2024-06-10T09:00:00.000Z"
    assert data["workingSlots"][-1] == "2024-06-10T17:45:00.000Z"
    assert sorted(data["busySlots"]) == [
        "2024-06-10T09:00:00.000Z",
        "2024-06-10T09:15:00.000Z",
        "2024-06-10T09:30:00.000Z",
    ]
    assert data["availableSlots"][0] == "2024-06-10T09:45:00.000Z"


def test_availability_saturday(client) -> None:
    data = client.get("/appointments/availability", params={"date": "2024-06-15"}).json()
    assert len(data["workingSlots"]) == 16


def test_availability_bad_input(client) -> None:
    assert client.get("/appointments/availability").status_code == 400
    assert client.get("/appointments/availability", params={"date": "10/06/2024"}).status_code == 400
    resp = client.get(
        "/appointments/availability", params={"date": "2024-06-10", "service": "massage"}
    )
    assert resp.status_code == 400


def test_availability_garbage_offset_is_utc(client) -> None:
    data = client.get(
        "/appointments/availability", params={"date": "2024-06-10", "tzOffset": "abc"}
    ).json()
    assert data["workingSlots"][0] == "2024-06-10T09:00:00.000Z"


def test_patch(client) -> None:
    created = client.post("/appointments", json=_body()).json()

    resp = client.patch(
        f"/appointments/{created['id']}",
        json={"start": "2024-06-10T10:00:00.000Z", "phoneNumber": "+37499999999"},
    )

    assert resp.status_code == 200
    data = resp.json()
    assert data["start"] == "2024-06-10T10:00:00.000Z"
    assert data["end"] == "2024-06-10T10:45:00.000Z"
    assert data["phoneNumber"] == "+37499999999"


def test_patch_errors(client) -> None:
    first = client.post("/appointments", json=_body()).json()
    second = client.post("/appointments", json=_body(start="2024-06-10T11:00:00.000Z")).json()

    busy = client.patch(f"/appointments/{second['id']}", json={"start": first["start"]})
    assert busy.status_code == 400

    missing = client.patch("/appointments/9999", json={"name": "X"})
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Appointment not found"


def test_patch_with_offset(client) -> None:
    created = client.post(
        "/appointments",
        json=_body(service="consultation", start="2024-06-10T05:00:00.000Z", tzOffset=-240),
    ).json()

    resp = client.patch(
        f"/appointments/{created['id']}", json={"service": "treatment", "tzOffset": -240}
    )

    assert resp.status_code == 200
    assert resp.json()["end"] == "2024-06-10T05:45:00.000Z"


def test_calendar_edge_is_not_500(client) -> None:
    created = client.post("/appointments", json=_body(start="9999-12-31T09:00:00.000Z"))
    assert created.status_code == 201

    late = client.post("/appointments", json=_body(start="9999-12-31T23:50:00.000Z"))
    assert late.status_code == 400

    day = client.get("/appointments/availability", params={"date": "9999-12-31"})
    assert day.status_code == 200
    assert day.json()["busySlots"][0] == "9999-12-31T09:00:00.000Z"

    west = client.get(
        "/appointments/availability", params={"date": "9999-12-31", "tzOffset": "300"}
    )
    assert west.status_code == 400

    huge = client.get(
        "/appointments/availability", params={"date": "2024-06-10", "tzOffset": "1e10"}
    )
    assert huge.json()["workingSlots"][0] == "2024-06-10T09:00:00.000Z"


def test_delete(client) -> None:
    created = client.post("/appointments", json=_body()).json()

    resp = client.delete(f"/appointments/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Appointment deleted successfully"}

    again = client.delete(f"/appointments/{created['id']}")
    assert again.status_code == 404


def test_health(client) -> None:
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"database": True, "redis": None}
