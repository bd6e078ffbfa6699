from __future__ import annotations

from packages.shared.schemas.transaction_v1 import (
    CallPayloadV1,
    ExecutionStatusV1,
    ObjectRefV1,
    OtherPayloadV1,
    PublishPayloadV1,
    TransactionRecordV1,
    TransferObjectPayloadV1,
)
from services.api.app.services.transaction_base import TransactionNotFoundError

_ALICE = "0x8f1a5f2c3a6e4d7b9c0d1e2f3a4b5c6d7e8f9a0b"
_BOB = "0x2e9d4c1b0a7f6e5d4c3b2a1f0e9d8c7b6a5f4e3d"
_FRAMEWORK = "0x0000000000000000000000000000000000000002"
_SIGNATURES = [
    "kPXpdq0yqpBYxSMKq1ywdg3ZbkY0k0qKJTYR3v4C0tM=",
    "2AWsJ0nTXeYwTt5e3yX2ioo2nNnpDdK0Ee2bMOWTfQc=",
    "bE7d0QmIg0d2dvCkC9q0sW4z3FfQeQ9M9v1M6q2dY2o=",
]


def fixture_transactions() -> list[TransactionRecordV1]:
    """Deterministic sample transactions, one per kind plus a failed call."""

    return [
        TransactionRecordV1(
            tx_id="tx-transfer-1",
            status=ExecutionStatusV1(status="success"),
            timestamp_ms=1_660_000_000_000,
            payload=TransferObjectPayloadV1(
                object_ref=ObjectRefV1(object_id="0x5c1e0a3f7b2d", version=4, digest="aGk="),
                recipient=_BOB,
            ),
            sender=_ALICE,
            gas_payment=ObjectRefV1(object_id="0x9d3f6a1c2b4e", version=12),
            gas_budget=10_000,
            gas_fee=57,
            mutated=[
                ObjectRefV1(object_id="0x5c1e0a3f7b2d", version=5),
                ObjectRefV1(object_id="0x9d3f6a1c2b4e", version=13),
            ],
            tx_signature="Zm9vYmFyc2lnbmF0dXJlMQ==",
            authority_signatures=list(_SIGNATURES),
        ),
        TransactionRecordV1(
            tx_id="tx-call-1",
            status=ExecutionStatusV1(status="success"),
            timestamp_ms=1_660_000_100_000,
            payload=CallPayloadV1(
                package_object_id=_FRAMEWORK,
                module="devnet_nft",
                function="mint",
                arguments=["Example NFT", "An NFT created by the explorer fixtures", "ipfs://nft"],
            ),
            sender=_ALICE,
            gas_payment=ObjectRefV1(object_id="0x9d3f6a1c2b4e", version=13),
            gas_budget=10_000,
            gas_fee=441,
            mutated=[ObjectRefV1(object_id="0x9d3f6a1c2b4e", version=14)],
            created=[ObjectRefV1(object_id="0x7a2b9c4d1e6f", version=1)],
            tx_signature="Zm9vYmFyc2lnbmF0dXJlMg==",
            authority_signatures=list(_SIGNATURES),
        ),
        TransactionRecordV1(
            tx_id="tx-call-failed-1",
            status=ExecutionStatusV1(status="failure", error="InsufficientGas"),
            payload=CallPayloadV1(
                package_object_id=_FRAMEWORK,
                module="coin",
                function="split_vec",
                arguments=["0x3b8e1d2c4f5a", [100, 200]],
            ),
            sender=_BOB,
            gas_payment=ObjectRefV1(object_id="0x1f4e8b2a6c3d", version=2),
            gas_budget=100,
            gas_fee=100,
            tx_signature="Zm9vYmFyc2lnbmF0dXJlMw==",
            authority_signatures=list(_SIGNATURES[:2]),
        ),
        TransactionRecordV1(
            tx_id="tx-publish-1",
            status=ExecutionStatusV1(status="success"),
            timestamp_ms=1_660_000_200_000,
            payload=PublishPayloadV1(
                modules={
                    "counter": "module 0x0::counter { struct Counter has key { id: UID, value: u64 } }",
                    "registry": "module 0x0::registry { public fun register() { } }",
                }
            ),
            sender=_ALICE,
            gas_payment=ObjectRefV1(object_id="0x9d3f6a1c2b4e", version=14),
            gas_budget=20_000,
            gas_fee=1_203,
            mutated=[ObjectRefV1(object_id="0x9d3f6a1c2b4e", version=15)],
            created=[
                ObjectRefV1(object_id="0x44aa10bc93de", version=1),
                ObjectRefV1(object_id="0x44aa10bc93df", version=1),
            ],
            tx_signature="Zm9vYmFyc2lnbmF0dXJlNA==",
            authority_signatures=list(_SIGNATURES),
        ),
        TransactionRecordV1(
            tx_id="tx-other-1",
            status=ExecutionStatusV1(status="success"),
            payload=OtherPayloadV1(kind="ChangeEpoch", data={"epoch": 7}),
            gas_payment=ObjectRefV1(object_id="0x0000000000000005"),
            gas_budget=0,
            gas_fee=0,
            tx_signature="Zm9vYmFyc2lnbmF0dXJlNQ==",
            authority_signatures=list(_SIGNATURES),
        ),
    ]


class FixtureTransactionSource:
    """In-memory source over the fixture transactions. Intended for local dev and tests."""

    name = "fixture"

    def __init__(self, records: list[TransactionRecordV1] | None = None) -> None:
        records = fixture_transactions() if records is None else records
        self._records = {r.tx_id: r for r in records}

    def get_transaction(self, tx_id: str) -> TransactionRecordV1:
        record = self._records.get(tx_id)
        if record is None:
            raise TransactionNotFoundError(tx_id)
        return record

    def tx_ids(self) -> list[str]:
        return list(self._records)
