import pytest
from httpx import AsyncClient

from medimatch.core.states import DONATIONS, REQUESTS
from medimatch.services.submissions import (
    DONATION_FAILED,
    DONATION_REGISTERED,
    REQUEST_FAILED,
    REQUEST_REGISTERED,
)

pytestmark = pytest.mark.anyio

AMOXICILLIN_DONATION = {
    "donor_name": "Maria Santos",
    "contact": "maria@example.org",
    "medicine_name": "Amoxicillin",
    "quantity": "10 tablets",
    "expiry_date": "",
    "description": "",
}

AMOXICILLIN_REQUEST = {
    "requester_name": "Jose Rizal",
    "contact": "+63 917 555 0101",
    "medicine_name": "Amoxicillin",
    "urgency": "high",
    "reason": "Infection",
    "location": "",
}


async def test_health(test_client: AsyncClient):
    r = await test_client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


async def test_donation_then_request_scenario(test_client: AsyncClient):
    r = await test_client.post("/api/donations", json=AMOXICILLIN_DONATION)
    assert r.status_code == 201, r.text
    data = r.json()
    assert data["donation"]["status"] == "available"
    assert data["donation"]["expiry_date"] is None
    assert data["matched_request"] is None
    assert data["message"] == {"kind": "success", "text": DONATION_REGISTERED}
    assert "matched" not in data["message"]["text"]

    r = await test_client.post("/api/requests", json=AMOXICILLIN_REQUEST)
    assert r.status_code == 201, r.text
    data = r.json()
    assert data["request"]["status"] == "matched"
    assert data["matched_donation"]["donor_name"] == "Maria Santos"
    assert data["matched_donation"]["status"] == "matched"
    assert data["message"]["kind"] == "success"
    assert "Maria Santos" in data["message"]["text"]

    donations = (await test_client.get("/api/donations")).json()
    requests = (await test_client.get("/api/requests")).json()
    assert [d["status"] for d in donations] == ["matched"]
    assert [q["status"] for q in requests] == ["matched"]


async def test_two_insulin_requests_one_donation(test_client: AsyncClient, clock):
    first = await test_client.post("/api/requests", json={**AMOXICILLIN_REQUEST, "medicine_name": "Insulin",
                                                          "requester_name": "First"})
    clock.advance(5)
    second = await test_client.post("/api/requests", json={**AMOXICILLIN_REQUEST, "medicine_name": "Insulin",
                                                           "requester_name": "Second"})
    assert first.json()["message"]["text"] == REQUEST_REGISTERED
    assert second.json()["request"]["status"] == "pending"

    r = await test_client.post("/api/donations", json={**AMOXICILLIN_DONATION, "medicine_name": "Insulin"})
    data = r.json()
    assert data["matched_request"]["id"] == first.json()["request"]["id"]
    assert "First" in data["message"]["text"]

    by_id = {q["id"]: q["status"] for q in (await test_client.get("/api/requests")).json()}
    assert by_id[first.json()["request"]["id"]] == "matched"
    assert by_id[second.json()["request"]["id"]] == "pending"


async def test_listing_is_newest_first_and_includes_matched(test_client: AsyncClient):
    names = ["Aspirin", "Ibuprofen", "Cetirizine"]
    for name in names:
        await test_client.post("/api/requests", json={**AMOXICILLIN_REQUEST, "medicine_name": name})
    await test_client.post("/api/donations", json={**AMOXICILLIN_DONATION, "medicine_name": "Aspirin"})

    rows = (await test_client.get("/api/requests")).json()
    assert [q["medicine_name"] for q in rows] == list(reversed(names))
    assert [q["status"] for q in rows] == ["pending", "pending", "matched"]


@pytest.mark.parametrize("field", ["donor_name", "contact", "medicine_name", "quantity"])
async def test_blank_required_field_is_rejected(test_client: AsyncClient, field):
    r = await test_client.post("/api/donations", json={**AMOXICILLIN_DONATION, field: "  "})
    assert r.status_code == 422


async def test_unknown_urgency_is_rejected(test_client: AsyncClient):
    r = await test_client.post("/api/requests", json={**AMOXICILLIN_REQUEST, "urgency": "whenever"})
    assert r.status_code == 422


async def test_creation_failure_is_generic_error(test_client: AsyncClient, store):
    store.fail_create = True
    r = await test_client.post("/api/donations", json=AMOXICILLIN_DONATION)
    assert r.status_code == 502
    assert r.json()["detail"] == DONATION_FAILED

    r = await test_client.post("/api/requests", json=AMOXICILLIN_REQUEST)
    assert r.status_code == 502
    assert r.json()["detail"] == REQUEST_FAILED


async def test_matching_failure_still_reports_registered(test_client: AsyncClient, store):
    await test_client.post("/api/donations", json=AMOXICILLIN_DONATION)
    store.fail_find = True

    r = await test_client.post("/api/requests", json=AMOXICILLIN_REQUEST)
    assert r.status_code == 201
    data = r.json()
    assert data["matched_donation"] is None
    assert data["message"] == {"kind": "success", "text": REQUEST_REGISTERED}


async def test_half_completed_match_looks_like_no_match(test_client: AsyncClient, store):
    await test_client.post("/api/donations", json=AMOXICILLIN_DONATION)
    store.fail_update = {REQUESTS}

    r = await test_client.post("/api/requests", json=AMOXICILLIN_REQUEST)
    assert r.status_code == 201
    assert r.json()["message"]["text"] == REQUEST_REGISTERED
    assert r.json()["request"]["status"] == "pending"
    donations = (await test_client.get("/api/donations")).json()
    assert donations[0]["status"] == "matched"


async def test_response_shows_status_left_by_half_completed_match(test_client: AsyncClient, store):
    await test_client.post("/api/donations", json=AMOXICILLIN_DONATION)
    store.fail_update = {DONATIONS}

    r = await test_client.post("/api/requests", json=AMOXICILLIN_REQUEST)
    assert r.status_code == 201
    data = r.json()
    assert data["message"]["text"] == REQUEST_REGISTERED
    assert data["matched_donation"] is None
    assert data["request"]["status"] == "matched"
    requests = (await test_client.get("/api/requests")).json()
    assert requests[0]["status"] == "matched"


async def test_stats_overview(test_client: AsyncClient):
    await test_client.post("/api/donations", json=AMOXICILLIN_DONATION)
    await test_client.post("/api/donations", json={**AMOXICILLIN_DONATION, "medicine_name": "Insulin"})
    await test_client.post("/api/requests", json=AMOXICILLIN_REQUEST)

    r = await test_client.get("/api/stats/overview")
    assert r.status_code == 200
    s = r.json()
    assert s["total_donations"] == 2
    assert s["total_requests"] == 1
    assert s["available_donations"] == 1
    assert s["pending_requests"] == 0
    assert s["successful_matches"] == 1
    assert s["by_medicine"] == [{"medicine_name": "Amoxicillin", "matches": 1}]


async def test_status_plot_is_png(test_client: AsyncClient):
    r = await test_client.get("/api/stats/plots/status.png")
    assert r.status_code == 200
    assert r.headers["content-type"] == "image/png"
    assert r.content[:8] == b"\x89PNG\r\n\x1a\n"
