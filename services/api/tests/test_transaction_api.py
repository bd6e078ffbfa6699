from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    db_path = tmp_path / "explorer_api.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+pysqlite:///{db_path}")
    monkeypatch.setenv("EXPLORER_DB_AUTO_CREATE", "true")
    monkeypatch.setenv("EXPLORER_TX_SOURCE", "db")
    monkeypatch.delenv("EXPLORER_MODULE_DISPLAY_LIMIT", raising=False)

    from services.api.app.main import app

    with TestClient(app) as c:
        yield c


def _record(**overrides: object) -> dict:
    record: dict = {
        "tx_id": "tx-api-1",
        "status": {"status": "success"},
        "timestamp_ms": 1_660_000_000_000,
        "payload": {
            "kind": "TransferObject",
            "object_ref": {"object_id": "0xB", "version": 1, "digest": "ZA=="},
            "recipient": "0xC",
        },
        "sender": "0xA",
        "gas_payment": {"object_id": "0xGAS"},
        "gas_budget": 10_000,
        "gas_fee": 57,
        "mutated": [{"object_id": "0xB"}],
        "created": [],
        "tx_signature": "c2lnbmF0dXJl",
        "authority_signatures": ["v1", "v2"],
    }
    record.update(overrides)
    return record


def _blocks(view: dict) -> list[str]:
    return [b["block"] for b in view["blocks"]]


def test_health(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_view_inline_record(client: TestClient) -> None:
    resp = client.post("/v1/transactions/view", json=_record())
    assert resp.status_code == 200

    view = resp.json()
    assert view["version"] == "1"
    assert view["tx_id"] == "tx-api-1"
    assert _blocks(view) == [
        "header",
        "addresses",
        "links",
        "gas",
        "tx_signature",
        "validator_signatures",
    ]

    links = view["blocks"][2]
    assert links == {"block": "links", "label": "Mutated", "target_ids": ["0xB"]}

    sender = view["blocks"][1]["fields"][0]
    assert sender["is_link"] is True
    assert sender["link_category"] == "address"


def test_view_inline_mismatch_returns_422(client: TestClient) -> None:
    resp = client.post("/v1/transactions/view", json=_record(kind="Publish"))
    assert resp.status_code == 422
    assert resp.json()["detail"].startswith("Unable to display transaction:")


def test_view_inline_missing_object_ref_returns_422(client: TestClient) -> None:
    payload = {"kind": "TransferObject", "recipient": "0xC"}
    resp = client.post("/v1/transactions/view", json=_record(payload=payload))
    assert resp.status_code == 422
    assert "object_ref" in resp.json()["detail"]


def test_view_inline_rejects_invalid_body(client: TestClient) -> None:
    body = _record()
    del body["gas_payment"]
    resp = client.post("/v1/transactions/view", json=body)
    assert resp.status_code == 422


def test_index_then_view(client: TestClient) -> None:
    created = client.post("/v1/transactions", json=_record())
    assert created.status_code == 200
    assert created.json() == {"tx_id": "tx-api-1", "kind": "TransferObject", "created": True}

    again = client.post("/v1/transactions", json=_record(gas_fee=60))
    assert again.status_code == 200
    assert again.json()["created"] is False

    resp = client.get("/v1/transactions/tx-api-1/view")
    assert resp.status_code == 200
    gas = next(b for b in resp.json()["blocks"] if b["block"] == "gas")
    assert gas["fields"][1] == {
        "label": "Gas Fees",
        "value": "60",
        "is_link": False,
        "link_category": None,
        "emphasize_monospace": False,
    }
    assert gas["notes"]


def test_view_unknown_tx_returns_404(client: TestClient) -> None:
    resp = client.get("/v1/transactions/does-not-exist/view")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Transaction not found"


def test_kind_endpoint(client: TestClient) -> None:
    client.post("/v1/transactions", json=_record())

    resp = client.get("/v1/transactions/tx-api-1/kind")
    assert resp.status_code == 200
    group = resp.json()
    assert group["block"] == "kind"
    assert group["title"] == "Transfer"
    assert [f["value"] for f in group["fields"]] == ["0xA", "0xB", "0xC"]


def test_kind_endpoint_unknown_kind_returns_null(client: TestClient) -> None:
    payload = {"kind": "ChangeEpoch", "data": {"epoch": 2}}
    client.post("/v1/transactions", json=_record(payload=payload))

    resp = client.get("/v1/transactions/tx-api-1/kind")
    assert resp.status_code == 200
    assert resp.json() is None


def test_module_limit_from_env(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    modules = {f"m{i}": f"module 0x0::m{i} {{}}" for i in range(10)}
    body = _record(payload={"kind": "Publish", "modules": modules})

    resp = client.post("/v1/transactions/view", json=body)
    block = next(b for b in resp.json()["blocks"] if b["block"] == "modules")
    assert [f["label"] for f in block["fields"]] == ["m0", "m1", "m2"]

    monkeypatch.setenv("EXPLORER_MODULE_DISPLAY_LIMIT", "4")
    resp = client.post("/v1/transactions/view", json=body)
    block = next(b for b in resp.json()["blocks"] if b["block"] == "modules")
    assert len(block["fields"]) == 4


def test_invalid_module_limit_returns_500(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("EXPLORER_MODULE_DISPLAY_LIMIT", "many")
    resp = client.post("/v1/transactions/view", json=_record())
    assert resp.status_code == 500
    assert "EXPLORER_MODULE_DISPLAY_LIMIT" in resp.json()["detail"]


def test_fixture_source(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXPLORER_TX_SOURCE", "fixture")

    resp = client.get("/v1/transactions/tx-publish-1/view")
    assert resp.status_code == 200
    assert _blocks(resp.json()) == [
        "header",
        "addresses",
        "links",
        "links",
        "modules",
        "gas",
        "tx_signature",
        "validator_signatures",
    ]

    failed = client.get("/v1/transactions/tx-call-failed-1/view").json()
    header = failed["blocks"][0]
    assert {"label": "Error", "value": "InsufficientGas"}.items() <= header["fields"][2].items()
    arguments = next(b for b in failed["blocks"] if b["block"] == "arguments")
    assert [f["value"] for f in arguments["fields"]] == ["0x3b8e1d2c4f5a", "[100,200]"]


def test_view_inline_empty_payload_kind_returns_422(client: TestClient) -> None:
    resp = client.post("/v1/transactions/view", json=_record(payload={"kind": ""}))
    assert resp.status_code == 422


def test_view_inline_unknown_kind_over_transfer_returns_422(client: TestClient) -> None:
    resp = client.post("/v1/transactions/view", json=_record(kind="ChangeEpoch"))
    assert resp.status_code == 422
    assert "does not match" in resp.json()["detail"]
