from __future__ import annotations

import csv
import io


def _bill(guest_id, **overrides):
    body = {
        "user_id": guest_id,
        "bill_type": "electricity",
        "amount": 450.5,
        "month": "march",
        "year": 2026,
        "due_date": "2026-04-10",
    }
    body.update(overrides)
    return body


def test_head_posts_and_guest_sees_bill(client, head, guest):
    _, hh = head
    guest_id, gh = guest

    r = client.post("/bills", json=_bill(guest_id), headers=hh)
    assert r.status_code == 201, r.text
    bill = r.json()
    assert bill["status"] == "pending"
    assert bill["month"] == "March"
    assert bill["resident_name"] == "Ravi"

    client.post("/bills", json=_bill(guest_id, bill_type="water", amount=100), headers=hh)

    mine = client.get("/bills/mine", headers=gh).json()
    assert len(mine["bills"]) == 2
    assert mine["totals_by_type"] == {"electricity": 450.5, "water": 100.0}
    assert mine["pending_count"] == 2
    assert mine["pending_total"] == 550.5


def test_mark_paid(client, head, guest):
    _, hh = head
    guest_id, gh = guest
    bill = client.post("/bills", json=_bill(guest_id), headers=hh).json()

    r = client.patch(f"/bills/{bill['id']}/status", json={"status": "paid"}, headers=hh)
    assert r.json()["status"] == "paid"

    assert client.get("/bills", params={"status": "pending"}, headers=hh).json() == []
    assert len(client.get("/bills", params={"status": "paid"}, headers=hh).json()) == 1

    mine = client.get("/bills/mine", headers=gh).json()
    assert mine["pending_count"] == 0
    assert mine["pending_total"] == 0

    assert client.patch(f"/bills/{bill['id']}/status", json={"status": "void"}, headers=hh).status_code == 422
    assert client.patch("/bills/missing/status", json={"status": "paid"}, headers=hh).status_code == 404


def test_bill_validation(client, head, guest):
    _, hh = head
    guest_id, gh = guest
    assert client.post("/bills", json=_bill(guest_id, amount=0), headers=hh).status_code == 422
    assert client.post("/bills", json=_bill(guest_id, month="Smarch"), headers=hh).status_code == 422
    assert client.post("/bills", json=_bill(guest_id, bill_type="wifi"), headers=hh).status_code == 422
    assert client.post("/bills", json=_bill("nobody"), headers=hh).status_code == 404
    assert client.post("/bills", json=_bill(guest_id), headers=gh).status_code == 403


def test_export_csv(client, head, guest):
    _, hh = head
    guest_id, _ = guest
    client.post("/bills", json=_bill(guest_id), headers=hh)

    r = client.get("/bills/export", headers=hh)
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    rows = list(csv.reader(io.StringIO(r.text)))
    assert rows[0][:3] == ["id", "resident", "room"]
    assert rows[1][1:5] == ["Ravi", "101", "electricity", "450.50"]
