from __future__ import annotations

from flask.testing import FlaskClient


def simulation_payload() -> dict:
    return {
        "start": "2023-02-23",
        "days": 2,
        "accounts": [
            {"id": 0, "name": "Current", "initialValue": "£1000.00"},
            {"id": 1, "name": "Savings", "initialValue": "£500.00", "interest": 0.03},
        ],
        "transactions": [
            {"value": "£500.00", "source": 0, "sink": 1, "start": "2023-02-24"},
        ],
    }


def test_ping_returns_pong(client: FlaskClient):
    response = client.get("/api/ping")

    assert response.status_code == 200
    assert response.json == {"message": "pong"}


def test_sample_projection(client: FlaskClient):
    resp = client.get("/api/simulation/sample?days=3")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["start"] == "2023-02-23"
    assert [account["name"] for account in body["accounts"]] == ["Bank", "Savings", "Employer", "Costs"]
    assert [row["date"] for row in body["days"]] == ["2023-02-24", "2023-02-25", "2023-02-26"]
    assert body["days"][1]["values"]["0"] == "2500.00"
    assert body["days"][2]["values"] == {"0": "2000.00", "1": "1000.16", "2": "0.00", "3": "0.00"}


def test_sample_uses_default_days(client: FlaskClient):
    resp = client.get("/api/simulation/sample")

    assert resp.status_code == 200
    assert len(resp.get_json()["days"]) == 5


def test_sample_rejects_bad_days(client: FlaskClient):
    for days in ("0", "101", "abc"):
        resp = client.get(f"/api/simulation/sample?days={days}")
        assert resp.status_code == 400
        assert "days must be" in resp.get_json()["error"][0]


def test_posted_simulation(client: FlaskClient):
    resp = client.post("/api/simulation", json=simulation_payload())

    assert resp.status_code == 200
    days = resp.get_json()["days"]
    assert days[0] == {"date": "2023-02-24", "values": {"0": "1000.00", "1": "500.04"}}
    assert days[1] == {"date": "2023-02-25", "values": {"0": "500.00", "1": "1000.12"}}


def test_invalid_transaction_returns_400(client: FlaskClient):
    payload = simulation_payload()
    payload["transactions"][0]["sink"] = 5

    resp = client.post("/api/simulation", json=payload)

    assert resp.status_code == 400
    assert resp.get_json()["error"] == ["transactions[0]: account 5 does not exist"]


def test_malformed_payload_returns_422(client: FlaskClient):
    resp = client.post("/api/simulation", json={"accounts": []})

    assert resp.status_code == 422
    body = resp.get_json()
    assert "detail" in body
    assert {tuple(error["loc"]) for error in body["detail"]} >= {("start",), ("accounts",)}


def test_cors_headers_for_configured_origin(client: FlaskClient):
    resp = client.get("/api/ping", headers={"Origin": "http://localhost:5173"})

    assert resp.headers["Access-Control-Allow-Origin"] == "http://localhost:5173"


def test_run_past_last_date_returns_400(client: FlaskClient):
    payload = simulation_payload()
    payload["start"] = "9999-12-30"
    payload["transactions"] = []
    payload["days"] = 5

    resp = client.post("/api/simulation", json=payload)

    assert resp.status_code == 400
    assert resp.get_json()["error"] == ["days must end on or before 9999-12-31"]

    payload["days"] = 1
    resp = client.post("/api/simulation", json=payload)
    assert resp.status_code == 200
    assert resp.get_json()["days"][-1]["date"] == "9999-12-31"


def test_transaction_schedules_cover_the_window(client: FlaskClient):
    payload = simulation_payload()
    payload["days"] = 40
    payload["transactions"].append(
        {"value": "£20", "source": 1, "sink": 0, "start": "2023-03-01", "interval": "weekly"}
    )

    resp = client.post("/api/simulation", json=payload)

    assert resp.status_code == 200
    schedules = resp.get_json()["transactions"]
    assert schedules[0] == {"source": 0, "sink": 1, "value": "500.00", "occurrences": ["2023-02-24"]}
    assert schedules[1]["value"] == "20.00"
    assert schedules[1]["occurrences"] == ["2023-03-01", "2023-03-08", "2023-03-15", "2023-03-22", "2023-03-29"]


def test_sample_lists_salary_dates(client: FlaskClient):
    resp = client.get("/api/simulation/sample?days=40")

    salary = resp.get_json()["transactions"][1]
    assert salary["occurrences"] == ["2023-02-24", "2023-03-24"]
