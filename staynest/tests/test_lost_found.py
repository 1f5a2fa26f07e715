from __future__ import annotations

import io


def _report(client, headers, **fields):
    data = {"item_name": "Blue umbrella", "location_found": "Lobby", "description": "Folding"}
    data.update(fields)
    return client.post("/lost-found", data=data, headers=headers)


def test_report_and_claim(client, head, guest, other_guest):
    _, hh = head
    _, gh = guest
    meena_id, oh = other_guest

    r = _report(client, gh)
    assert r.status_code == 201, r.text
    item = r.json()
    assert item["status"] == "found"
    assert item["reporter_name"] == "Ravi"
    assert item["image_url"] is None

    assert client.post(f"/lost-found/{item['id']}/claim", json={"claimant_id": meena_id}, headers=gh).status_code == 403

    r = client.post(f"/lost-found/{item['id']}/claim", json={"claimant_id": meena_id}, headers=hh)
    assert r.status_code == 200
    claimed = r.json()
    assert claimed["status"] == "claimed"
    assert claimed["claimed_by"] == meena_id
    assert claimed["claimant_name"] == "Meena"
    assert claimed["claimed_at"] is not None

    r = client.post(f"/lost-found/{item['id']}/claim", json={"claimant_id": meena_id}, headers=hh)
    assert r.status_code == 400

    assert client.get("/lost-found", params={"status": "found"}, headers=oh).json() == []
    assert len(client.get("/lost-found", params={"status": "claimed"}, headers=oh).json()) == 1


def test_report_with_photo(client, guest):
    _, gh = guest
    r = client.post(
        "/lost-found",
        data={"item_name": "Keys", "location_found": "Mess hall"},
        files={"file": ("keys.JPG", io.BytesIO(b"jpeg-bytes"), "image/jpeg")},
        headers=gh,
    )
    assert r.status_code == 201, r.text
    url = r.json()["image_url"]
    assert url.startswith("/uploads/lostfound_")
    assert client.get(url).content == b"jpeg-bytes"


def test_report_validation(client, guest, head):
    _, gh = guest
    _, hh = head
    assert _report(client, gh, item_name="  ").status_code == 400
    r = client.post(
        "/lost-found",
        data={"item_name": "Doc", "location_found": "Gate"},
        files={"file": ("doc.pdf", io.BytesIO(b"%PDF"), "application/pdf")},
        headers=gh,
    )
    assert r.status_code == 400

    item = _report(client, gh).json()
    assert client.post(f"/lost-found/{item['id']}/claim", json={"claimant_id": "ghost"}, headers=hh).status_code == 404
    assert client.post("/lost-found/missing/claim", json={"claimant_id": "ghost"}, headers=hh).status_code == 404
