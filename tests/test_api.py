import pytest

from src.quoting_system.quoting_system.main import create_app

SHIFT = {
    "date": "2023-10-27",
    "dayType": "weekday",
    "startTime": "08:00",
    "finishTime": "16:00",
    "travelIn": 0.5,
    "travelOut": 0.5,
}
RATES = {"siteNormal": 100, "siteOvertime": 150, "travel": 80, "travelOvertime": 100}


@pytest.fixture()
def client():
    app = create_app("config.testing")
    return app.test_client()


def test_allocate_endpoint(client):
    resp = client.post("/api/allocate", json={"shift": SHIFT, "rates": RATES})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["cost"] == pytest.approx(825)
    assert body["breakdown"]["travelOutOT"] == 0.5


def test_allocate_endpoint_uses_default_rates(client):
    resp = client.post("/api/allocate", json={"shift": SHIFT})
    # 7.5h at 160 + 0.5h at 190
    assert resp.get_json()["cost"] == pytest.approx(1295)


def test_allocate_endpoint_rejects_bad_time(client):
    resp = client.post("/api/allocate", json={"shift": {**SHIFT, "startTime": "8"}, "rates": RATES})
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_customer_rates_endpoint(client):
    assert client.put("/api/rates/customers/Acme", json={"siteNormal": 99}).status_code == 200
    assert client.get("/api/rates/customers/Acme").get_json()["siteNormal"] == 99
    assert client.get("/api/rates/defaults").get_json()["siteNormal"] == 160


def test_quote_flow(client):
    resp = client.post("/api/quotes", json={"customer": "Acme", "jobNo": "J1"})
    assert resp.status_code == 201
    qid = resp.get_json()["id"]

    assert client.put(f"/api/quotes/{qid}/rates", json=RATES).status_code == 200
    assert client.post(f"/api/quotes/{qid}/shifts", json=SHIFT).status_code == 201
    assert client.post(f"/api/quotes/{qid}/extras", json={"description": "Parts", "cost": 75}).status_code == 201

    summary = client.get(f"/api/quotes/{qid}/summary").get_json()
    assert summary["totals"]["total"] == pytest.approx(900)

    resp = client.post(f"/api/quotes/{qid}/status/submit")
    assert resp.get_json()["status"] == "quoted"
    assert client.post(f"/api/quotes/{qid}/shifts", json=SHIFT).status_code == 409
    assert client.post(f"/api/quotes/{qid}/status/close").status_code == 409

    text = client.get(f"/api/quotes/{qid}/breakdown")
    assert text.status_code == 200
    assert "SHIFT BREAKDOWN" in text.get_data(as_text=True)

    export = client.get(f"/api/quotes/{qid}/export")
    assert export.status_code == 200
    assert export.data[:2] == b"PK"


def test_unknown_quote_and_action(client):
    assert client.get("/api/quotes/999").status_code == 404
    qid = client.post("/api/quotes", json={}).get_json()["id"]
    assert client.post(f"/api/quotes/{qid}/status/archive").status_code == 404
    assert client.post(f"/api/quotes/{qid}/status/submit").status_code == 400


def test_allocate_endpoint_rejects_non_numeric_shift_id(client):
    resp = client.post("/api/allocate", json={"shift": {**SHIFT, "id": "abc"}, "rates": RATES})
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_allocate_endpoint_accepts_non_string_customer(client):
    resp = client.post("/api/allocate", json={"shift": SHIFT, "customer": 5})
    assert resp.status_code == 200
    assert resp.get_json()["cost"] == pytest.approx(1295)


def test_allocate_endpoint_empty_rate_table_is_an_error(client):
    resp = client.post("/api/allocate", json={"shift": SHIFT, "rates": {}})
    assert resp.status_code == 400
    assert "siteNormal" in resp.get_json()["error"]


def test_default_rates_patch_and_customer_rates_delete(client):
    resp = client.patch("/api/rates/defaults", json={"weekend": 300})
    assert resp.status_code == 200
    assert resp.get_json()["weekend"] == 300
    assert resp.get_json()["siteNormal"] == 160

    client.put("/api/rates/customers/Acme", json={"siteNormal": 99})
    assert client.delete("/api/rates/customers/Acme").status_code == 204
    assert client.get("/api/rates/customers/Acme").get_json()["siteNormal"] == 160
    assert client.delete("/api/rates/customers/Acme").status_code == 400


def test_quote_rejects_technicians_given_as_string(client):
    resp = client.post("/api/quotes", json={"customer": "Acme", "technicians": "Alex"})
    assert resp.status_code == 400
