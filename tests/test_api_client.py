import json
from datetime import date

import httpx

from frontend.services.api_client import ApiClient
from frontend.services.forms import DONATION_REQUIRED, REQUEST_REQUIRED, missing_required, show_date
from medimatch.services.submissions import DONATION_FAILED, REQUEST_FAILED

DONATION_ROW = {
    "id": "d1",
    "donor_name": "Maria",
    "contact": "maria@example.org",
    "medicine_name": "Amoxicillin",
    "quantity": "10 tablets",
    "expiry_date": None,
    "description": None,
    "status": "available",
    "created_at": "2025-01-01T09:00:00Z",
    "updated_at": "2025-01-01T09:00:00Z",
}


def _client(handler) -> ApiClient:
    return ApiClient("http://api.test/", transport=httpx.MockTransport(handler))


def test_submit_donation_returns_server_message():
    sent = []

    def handler(request):
        sent.append(json.loads(request.content))
        return httpx.Response(201, json={
            "donation": DONATION_ROW,
            "matched_request": None,
            "message": {"kind": "success", "text": "Thank you!"},
        })

    api = _client(handler)
    msg = api.submit_donation({"donor_name": "Maria", "medicine_name": "Amoxicillin"})
    assert msg.kind == "success"
    assert msg.text == "Thank you!"
    assert sent == [{"donor_name": "Maria", "medicine_name": "Amoxicillin"}]


def test_submit_failure_is_generic_error():
    api = _client(lambda request: httpx.Response(502, json={"detail": "whatever"}))
    msg = api.submit_donation({})
    assert msg.kind == "error"
    assert msg.text == DONATION_FAILED


def test_unreachable_api_is_generic_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    msg = _client(handler).submit_request({})
    assert msg.kind == "error"
    assert msg.text == REQUEST_FAILED


def test_list_donations_parses_rows():
    api = _client(lambda request: httpx.Response(200, json=[DONATION_ROW]))
    rows = api.list_donations()
    assert rows[0].donor_name == "Maria"
    assert rows[0].status == "available"


def test_missing_required():
    values = {"donor_name": "Maria", "contact": " ", "medicine_name": "Amoxicillin", "quantity": ""}
    assert missing_required(values, DONATION_REQUIRED) == ["contact", "quantity"]
    assert missing_required({}, REQUEST_REQUIRED) == list(REQUEST_REQUIRED)


def test_show_date():
    assert show_date(None) == "Not specified"
    assert show_date("") == "Not specified"
    assert show_date(date(2026, 3, 31)) == "Mar 31, 2026"
