from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from packages.shared.schemas.transaction_v1 import TransactionRecordV1
from packages.shared.schemas.view_v1 import BlockTypeV1, FieldGroupV1, FieldV1


class TransactionViewError(Exception):
    """Base class for transaction view errors."""


class MalformedPayloadError(TransactionViewError):
    def __init__(self, kind: str, reason: str) -> None:
        super().__init__(f"{kind} payload is malformed: {reason}")
        self.kind = kind
        self.reason = reason


class TransactionNotFoundError(TransactionViewError):
    def __init__(self, tx_id: str) -> None:
        super().__init__(f"Transaction not found: {tx_id}")
        self.tx_id = tx_id


@dataclass(frozen=True, slots=True)
class KindFields:
    """Kind-specific fields produced by the kind formatter.

    An unknown transaction kind yields the empty value `KindFields()`.
    """

    title: str | None = None
    fields: tuple[FieldV1, ...] = ()
    arguments: tuple[str, ...] = ()
    modules: tuple[tuple[str, str], ...] = ()

    def as_group(self) -> FieldGroupV1 | None:
        if self.title is None:
            return None
        return FieldGroupV1(block=BlockTypeV1.KIND, title=self.title, fields=list(self.fields))


class TransactionSource(Protocol):
    name: str

    def get_transaction(self, tx_id: str) -> TransactionRecordV1: ...
