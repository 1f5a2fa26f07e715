from __future__ import annotations

from datetime import date, timedelta


def _book(client, headers, machine="Machine 1", slot="07:00 - 08:00", day=None):
    day = day or date.today()
    return client.post(
        "/laundry/bookings",
        json={"machine": machine, "time_slot": slot, "booking_date": day.isoformat()},
        headers=headers,
    )


def _booked(availability):
    return {
        (m["machine"], s["time_slot"])
        for m in availability["machines"]
        for s in m["slots"]
        if s["is_booked"]
    }


def test_days_and_catalog(client, guest):
    _, headers = guest
    days = client.get("/laundry/days", headers=headers).json()
    assert len(days) == 7
    assert days[0]["label"] == "Today"

    cat = client.get("/laundry/slots", headers=headers).json()
    assert cat["machines"] == ["Machine 1", "Machine 2", "Machine 3"]
    assert len(cat["slots"]) == 16


def test_booking_shows_up_in_availability(client, guest):
    _, headers = guest
    r = client.get("/laundry/availability", headers=headers)
    assert r.status_code == 200
    assert r.json()["booked"] == 0
    assert r.json()["free"] == 48

    r = _book(client, headers)
    assert r.status_code == 201, r.text
    assert r.json()["is_peak"] is True

    av = client.get("/laundry/availability", params={"date": date.today().isoformat()}, headers=headers).json()
    assert _booked(av) == {("Machine 1", "07:00 - 08:00")}
    slot = next(s for s in av["machines"][0]["slots"] if s["time_slot"] == "07:00 - 08:00")
    assert slot["is_mine"] is True


def test_booked_slot_is_refused(client, guest, other_guest):
    _, h1 = guest
    _, h2 = other_guest
    assert _book(client, h1).status_code == 201

    r = _book(client, h2)
    assert r.status_code == 409
    assert r.json()["detail"] == "Slot already booked"

    av = client.get("/laundry/availability", headers=h2).json()
    assert av["booked"] == 1
    slot = next(s for s in av["machines"][0]["slots"] if s["time_slot"] == "07:00 - 08:00")
    assert slot["is_mine"] is False


def test_same_slot_other_machine_is_fine(client, guest, other_guest):
    _, h1 = guest
    _, h2 = other_guest
    assert _book(client, h1).status_code == 201
    assert _book(client, h2, machine="Machine 2").status_code == 201


def test_rejects_unknown_machine_slot_and_dates(client, guest):
    _, headers = guest
    assert _book(client, headers, machine="Machine 7").status_code == 400
    assert _book(client, headers, slot="23:00 - 24:00").status_code == 400
    assert _book(client, headers, day=date.today() + timedelta(days=7)).status_code == 400
    assert _book(client, headers, day=date.today() - timedelta(days=1)).status_code == 400


def test_head_cannot_book_but_sees_day_sheet(client, head, guest):
    _, hh = head
    _, gh = guest
    assert _book(client, hh).status_code == 403
    _book(client, gh, machine="Machine 3", slot="20:00 - 21:00")

    rows = client.get("/laundry/bookings", headers=hh).json()
    assert len(rows) == 1
    assert rows[0]["resident_name"] == "Ravi"
    assert rows[0]["room_number"] == "101"

    assert client.get("/laundry/bookings", headers=gh).status_code == 403


def test_cancel_frees_the_slot(client, guest, other_guest):
    _, h1 = guest
    _, h2 = other_guest
    booking = _book(client, h1, day=date.today() + timedelta(days=2)).json()

    mine = client.get("/laundry/bookings/mine", headers=h1).json()
    assert [b["id"] for b in mine] == [booking["id"]]

    assert client.delete(f"/laundry/bookings/{booking['id']}", headers=h2).status_code == 403
    assert client.delete(f"/laundry/bookings/{booking['id']}", headers=h1).status_code == 204
    assert client.get("/laundry/bookings/mine", headers=h1).json() == []

    assert _book(client, h2, day=date.today() + timedelta(days=2)).status_code == 201


def test_cancel_unknown_booking(client, guest):
    _, headers = guest
    assert client.delete("/laundry/bookings/nope", headers=headers).status_code == 404


def test_requires_login(client):
    assert client.get("/laundry/availability").status_code == 401
