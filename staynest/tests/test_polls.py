from __future__ import annotations

from datetime import datetime, timedelta
from types import SimpleNamespace

from staynest.utils.polls import average_rating, is_open, rating_histogram, vote_counts


def _create(client, headers, **overrides):
    body = {"question": "Sunday special?", "options": ["Biryani", " Pulao ", "", "Biryani", "Khichdi"]}
    body.update(overrides)
    return client.post("/polls", json=body, headers=headers)


def test_aggregation_helpers():
    votes = [SimpleNamespace(option="A"), SimpleNamespace(option="A"), SimpleNamespace(option="Z")]
    assert vote_counts(["A", "B"], votes) == {"A": 2, "B": 0}

    hist = rating_histogram([SimpleNamespace(rating=5), SimpleNamespace(rating=4), SimpleNamespace(rating=4)])
    assert [b["count"] for b in hist] == [0, 0, 0, 2, 1]
    assert average_rating(hist) == 4.3
    assert average_rating(rating_histogram([])) == 0.0


def test_is_open():
    now = datetime(2026, 5, 1, 12, 0)
    assert is_open(SimpleNamespace(is_active=True, ends_at=None), now)
    assert not is_open(SimpleNamespace(is_active=False, ends_at=None), now)
    assert not is_open(SimpleNamespace(is_active=True, ends_at=now - timedelta(minutes=1)), now)


def test_create_cleans_options(client, head):
    _, hh = head
    r = _create(client, hh)
    assert r.status_code == 201, r.text
    poll = r.json()
    assert poll["options"] == ["Biryani", "Pulao", "Khichdi"]
    assert poll["votes"] == {"Biryani": 0, "Pulao": 0, "Khichdi": 0}
    assert poll["average_rating"] == 0.0

    assert _create(client, hh, options=["Only one", " "]).status_code == 422
    assert _create(client, hh, options=[str(i) for i in range(7)]).status_code == 422


def test_vote_once_per_guest(client, head, guest, other_guest):
    _, hh = head
    _, gh = guest
    _, oh = other_guest
    pid = _create(client, hh).json()["id"]

    client.put(f"/polls/{pid}/vote", json={"option": "Biryani"}, headers=gh)
    r = client.put(f"/polls/{pid}/vote", json={"option": "Pulao"}, headers=gh)
    assert r.status_code == 200
    assert r.json()["votes"] == {"Biryani": 0, "Pulao": 1, "Khichdi": 0}
    assert r.json()["user_vote"] == "Pulao"

    r = client.put(f"/polls/{pid}/vote", json={"option": "Pulao"}, headers=oh)
    assert r.json()["total_votes"] == 2

    polls = client.get("/polls", headers=hh).json()
    assert polls[0]["votes"]["Pulao"] == 2
    assert polls[0]["user_vote"] is None


def test_ratings(client, head, guest, other_guest):
    _, hh = head
    _, gh = guest
    _, oh = other_guest
    pid = _create(client, hh).json()["id"]

    client.put(f"/polls/{pid}/rating", json={"rating": 2}, headers=gh)
    client.put(f"/polls/{pid}/rating", json={"rating": 5}, headers=gh)
    r = client.put(f"/polls/{pid}/rating", json={"rating": 4}, headers=oh)
    data = r.json()
    assert data["user_rating"] == 4
    assert data["average_rating"] == 4.5
    assert {b["rating"]: b["count"] for b in data["ratings"]} == {1: 0, 2: 0, 3: 0, 4: 1, 5: 1}

    assert client.put(f"/polls/{pid}/rating", json={"rating": 6}, headers=gh).status_code == 422


def test_closed_polls_refuse_votes(client, head, guest):
    _, hh = head
    _, gh = guest
    pid = _create(client, hh).json()["id"]

    r = client.patch(f"/polls/{pid}/active", json={"is_active": False}, headers=hh)
    assert r.json()["is_active"] is False
    assert client.put(f"/polls/{pid}/vote", json={"option": "Biryani"}, headers=gh).status_code == 400

    client.patch(f"/polls/{pid}/active", json={"is_active": True}, headers=hh)
    assert client.put(f"/polls/{pid}/vote", json={"option": "Pizza"}, headers=gh).status_code == 400

    past = (datetime.utcnow() - timedelta(hours=1)).isoformat()
    ended = _create(client, hh, ends_at=past).json()["id"]
    assert client.put(f"/polls/{ended}/rating", json={"rating": 3}, headers=gh).status_code == 400


def test_poll_permissions(client, head, guest):
    _, hh = head
    _, gh = guest
    assert _create(client, gh).status_code == 403
    pid = _create(client, hh).json()["id"]
    assert client.put(f"/polls/{pid}/vote", json={"option": "Biryani"}, headers=hh).status_code == 403
    assert client.put("/polls/missing/vote", json={"option": "Biryani"}, headers=gh).status_code == 404
