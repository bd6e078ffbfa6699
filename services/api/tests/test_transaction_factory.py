import pytest
from services.api.app.services.transaction_base import TransactionNotFoundError
from services.api.app.services.transaction_factory import (
    get_module_display_limit,
    get_transaction_source,
)
from services.api.app.services.transaction_fixtures import FixtureTransactionSource


def test_get_transaction_source_defaults_to_db(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXPLORER_TX_SOURCE", raising=False)
    source = get_transaction_source(db=None)  # type: ignore[arg-type]
    assert source.name == "db"


def test_get_transaction_source_fixture(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXPLORER_TX_SOURCE", "Fixture")
    source = get_transaction_source(db=None)  # type: ignore[arg-type]
    assert source.name == "fixture"


def test_get_transaction_source_rejects_unknown(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXPLORER_TX_SOURCE", "rpc")
    with pytest.raises(ValueError, match="Unknown EXPLORER_TX_SOURCE"):
        get_transaction_source(db=None)  # type: ignore[arg-type]


def test_module_display_limit_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXPLORER_MODULE_DISPLAY_LIMIT", raising=False)
    assert get_module_display_limit() == 3


@pytest.mark.parametrize("raw", ["zero", "0", "-2"])
def test_module_display_limit_rejects_invalid(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("EXPLORER_MODULE_DISPLAY_LIMIT", raw)
    with pytest.raises(ValueError, match="EXPLORER_MODULE_DISPLAY_LIMIT"):
        get_module_display_limit()


def test_fixture_source_covers_every_kind() -> None:
    source = FixtureTransactionSource()
    kinds = {source.get_transaction(tx_id).kind_tag for tx_id in source.tx_ids()}
    assert {"TransferObject", "Call", "Publish", "ChangeEpoch"} <= kinds


def test_fixture_source_unknown_tx() -> None:
    with pytest.raises(TransactionNotFoundError):
        FixtureTransactionSource(records=[]).get_transaction("tx-missing")
