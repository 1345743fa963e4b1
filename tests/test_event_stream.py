from __future__ import annotations

import fakeredis
from fastapi.testclient import TestClient

from helpers import HOUSE, P1, P2


def _act(client: TestClient, game_id: str, **body: object):
    return client.post(f"/games/{game_id}/actions", json=body)


def test_events_published_in_order(client_and_redis: tuple[TestClient, fakeredis.FakeRedis]) -> None:
    client, r = client_and_redis
    gid = client.post("/game").json()["game_id"]

    _act(client, gid, action="claim_house", caller=HOUSE)
    _act(client, gid, action="set_target", caller=HOUSE, value=10)
    _act(client, gid, action="claim_player", caller=P1)
    _act(client, gid, action="claim_player", caller=P2)
    _act(client, gid, action="bet", caller=P1, amount=11)
    _act(client, gid, action="bet", caller=P1, amount=12)  # rejected: not P1's turn
    _act(client, gid, action="stay", caller=P2)
    _act(client, gid, action="reveal", caller=HOUSE)

    entries = r.xrange(f"events:{gid}")
    types = [fields["type"] for _, fields in entries]
    assert types == ["HOUSE_ASSIGNED", "PLAYER_JOINED", "PLAYER_JOINED", "BID_PLACED", "RESULT", "REVEALED"]

    fields = [f for _, f in entries]
    assert fields[0]["identity"] == HOUSE
    assert fields[1]["identity"] == P1
    assert fields[3]["amount"] == "11"
    assert fields[3]["next_turn"] == P2
    assert fields[4]["winner"] == P1
    assert fields[5]["target"] == "10"
    assert all(f["game_id"] == gid for f in fields)


def test_events_endpoint_returns_messages(client: TestClient) -> None:
    gid = client.post("/game").json()["game_id"]
    _act(client, gid, action="claim_house", caller=HOUSE)

    resp = client.get(f"/games/{gid}/events?count=10")
    assert resp.status_code == 200
    data = resp.json()

    assert data["stream"] == f"events:{gid}"
    assert [m["fields"]["type"] for m in data["messages"]] == ["HOUSE_ASSIGNED"]

    assert client.get(f"/games/{gid}/events?count=0").status_code == 422
