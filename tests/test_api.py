"""
Tests for the FastAPI transport (POST /verify, GET /health).
"""

from __future__ import annotations

from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from asset_oracle.api_server.server import create_app
from asset_oracle.core.exceptions import SigningError
from asset_oracle.crypto.signer import recover_address
from asset_oracle.verification.models import AttestationData

from fakes import FakeLedger


def _payload(**overrides) -> dict:
    body = {
        "id": "sub-api-1",
        "location": {
            "address": "1 Marine Drive",
            "coordinates": {"lat": 19.076, "lng": 72.8777},
            "city": "Mumbai",
            "state": "MH",
        },
        "spv": {"reg_id": "U12345MH2020PTC123456", "directors": ["A. Director"]},
        "documents": {"deed_hash": "0xdeadbeef"},
        "financials": {"valuation": 25000000},
    }
    body.update(overrides)
    return body


def test_health(client, signer):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "oracle_address": signer.address, "ledger_enabled": False}


def test_verify_returns_signed_result(client, signer):
    resp = client.post("/verify", json=_payload())
    assert resp.status_code == 200
    body = resp.json()
    assert body["submission_id"] == "sub-api-1"
    assert body["existence"]["passed"] is True
    assert body["existence"]["confidence"] == 0.95
    assert body["ownership"]["passed"] is True
    assert set(body["ownership"]["signals"]) == {"mca_registry", "deed_integrity"}
    assert body["activity"]["signals"]["foot_traffic"]["source"] == "MockGooglePlaces"
    assert body["ledger"] == {"status": "skipped", "transaction_ref": None, "error": None}
    att = body["attestation"]
    assert att["oracle_address"] == signer.address
    assert recover_address(att["signature"], att["commitment_root"], "sub-api-1") == signer.address


def test_verify_with_ledger_reports_transaction(make_aggregator):
    ledger = FakeLedger(tx_ref="5xApiSig")
    client = TestClient(create_app(make_aggregator(ledger=ledger)))
    resp = client.post("/verify", json=_payload(is_mock=True))
    assert resp.status_code == 200
    assert resp.json()["ledger"]["transaction_ref"] == "5xApiSig"
    assert ledger.calls[0][2] is True


def test_verify_malformed_body_is_400(client):
    resp = client.post("/verify", json={"id": "x"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["detail"] == "Invalid request body"
    assert any("location" in err["loc"] for err in body["errors"])


def test_verify_out_of_range_coordinates_is_400(client):
    payload = _payload()
    payload["location"]["coordinates"]["lat"] = 123.0
    assert client.post("/verify", json=payload).status_code == 400


def test_verify_blank_id_is_400(client):
    resp = client.post("/verify", json=_payload(id="   "))
    assert resp.status_code == 400
    assert "non-empty" in resp.json()["detail"]


def test_verify_signing_failure_is_500(make_aggregator):
    bad_signer = MagicMock()
    bad_signer.address = "0x" + "00" * 20
    bad_signer.sign.side_effect = SigningError("hsm unavailable")
    client = TestClient(create_app(make_aggregator(signer_override=bad_signer)))
    resp = client.post("/verify", json=_payload())
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Verification failed: hsm unavailable"


def test_missing_aggregator_is_503():
    app = create_app()
    # No lifespan run: aggregator never built
    resp = TestClient(app).get("/health")
    assert resp.status_code == 503


def test_verify_result_is_attestation_shape(client):
    att = client.post("/verify", json=_payload()).json()["attestation"]
    assert set(att) == set(AttestationData("", "", "").to_dict())
