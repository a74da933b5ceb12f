from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.core.month_utils import current_month
from app.db import Base


def test_root_ok(client):
    r = client.get("/")
    assert r.status_code == 200
    data = r.json()
    assert "message" in data


def test_empty_month_has_every_day(client):
    r = client.get("/months/2024-02")
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["label"] == "February 2024"
    assert data["prev"] == "2024-01"
    assert data["next"] == "2024-03"
    assert data["initial_weight"] == 0
    assert len(data["days"]) == 29
    assert data["days"][0]["label"] == "1st"
    assert data["days"][0]["record"] == {"date": "2024-02-01", "weight": None, "comment": None, "persisted": False}
    assert data["days"][0]["trend"]["slots"][4] == "target"
    assert data["days"][0]["trend"]["active_index"] is None


def test_save_day_and_see_trend(client):
    assert client.put("/days/2026-10-03", json={"weight": 150, "comment": "start"}).status_code == 200
    assert client.put("/days/2026-10-05", json={"weight": 152}).status_code == 200

    data = client.get("/months/2026-10").json()
    assert data["initial_weight"] == 150
    third, fifth = data["days"][2], data["days"][4]
    assert third["record"]["persisted"] is True
    assert third["record"]["comment"] == "start"
    assert third["trend"]["active_index"] == 5
    assert fifth["trend"]["active_index"] == 7
    assert data["days"][0]["trend"]["active_index"] is None


def test_put_same_day_replaces(client):
    client.put("/days/2026-10-05", json={"weight": 150, "comment": "a"})
    r = client.put("/days/2026-10-05", json={"weight": 149.5, "comment": "  "})
    assert r.status_code == 200, r.text
    assert r.json() == {"date": "2026-10-05", "weight": 149.5, "comment": None, "persisted": True}

    stored = [d for d in client.get("/months/2026-10").json()["days"] if d["record"]["persisted"]]
    assert len(stored) == 1


def test_get_day_placeholder(client):
    r = client.get("/days/2026-10-07")
    assert r.status_code == 200
    assert r.json()["persisted"] is False


def test_rejects_bad_input(client):
    assert client.get("/months/2026-13").status_code == 422
    assert client.get("/months/2026-1").status_code == 422
    assert client.get("/days/2026-02-30").status_code == 422
    assert client.put("/days/2026-10-05", json={"weight": 0}).status_code == 422


def test_current_month(client):
    r = client.get("/months/current")
    assert r.status_code == 200
    assert r.json()["key"] == current_month("UTC").key


def test_storage_failure_is_503(client):
    Base.metadata.drop_all(bind=client.app.state.store.engine)
    r = client.get("/months/2026-10")
    assert r.status_code == 503
    assert "detail" in r.json()


def test_rejects_weights_the_column_cannot_hold(client):
    client.put("/days/2026-10-05", json={"weight": 150})
    assert client.put("/days/2026-10-05", json={"weight": 1e30}).status_code == 422
    assert client.put("/days/2026-10-05", json={"weight": 10000}).status_code == 422
    assert client.put("/days/2026-10-05", json={"weight": -3}).status_code == 422
    r = client.put(
        "/days/2026-10-05",
        content='{"weight": Infinity}',
        headers={"content-type": "application/json"},
    )
    assert r.status_code == 422
    assert client.put("/days/2026-10-06", json={"weight": 9999.99}).status_code == 200

    r = client.get("/months/2026-10")
    assert r.status_code == 200, r.text
    days = r.json()["days"]
    assert days[4]["record"]["weight"] == 150
    assert days[5]["trend"]["active_index"] == 8
    assert days[5]["trend"]["clamped"] is True


def test_calendar_edges_have_no_neighbour(client):
    last = client.get("/months/9999-12")
    assert last.status_code == 200, last.text
    assert last.json()["next"] is None
    assert last.json()["prev"] == "9999-11"
    assert len(last.json()["days"]) == 31

    first = client.get("/months/0001-01")
    assert first.status_code == 200, first.text
    assert first.json()["prev"] is None
    assert first.json()["next"] == "0001-02"


def test_failed_write_is_503_and_keeps_row(client, monkeypatch):
    assert client.put("/days/2026-10-05", json={"weight": 150, "comment": "kept"}).status_code == 200

    def boom(self):
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(Session, "commit", boom)
    r = client.put("/days/2026-10-05", json={"weight": 160, "comment": "lost"})
    assert r.status_code == 503
    assert "detail" in r.json()
    monkeypatch.undo()

    stored = client.get("/days/2026-10-05").json()
    assert stored == {"date": "2026-10-05", "weight": 150, "comment": "kept", "persisted": True}
