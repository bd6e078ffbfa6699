from __future__ import annotations

from packages.shared.schemas.transaction_v1 import TransactionRecordV1
from services.api.app.db.models import IndexedTransaction
from services.api.app.services.transaction_base import TransactionNotFoundError
from sqlalchemy.orm import Session


class DbTransactionSource:
    """Reads resolved transactions from the local `transactions` index."""

    name = "db"

    def __init__(self, db: Session) -> None:
        self._db = db

    def get_transaction(self, tx_id: str) -> TransactionRecordV1:
        row = self._db.get(IndexedTransaction, tx_id)
        if row is None:
            raise TransactionNotFoundError(tx_id)
        return TransactionRecordV1.model_validate(row.record_json)


def index_transaction(db: Session, record: TransactionRecordV1) -> IndexedTransaction:
    """Insert or replace a record. The caller commits."""

    record_json = record.model_dump(mode="json")

    row = db.get(IndexedTransaction, record.tx_id)
    if row is None:
        row = IndexedTransaction(tx_id=record.tx_id, kind=record.kind_tag, record_json=record_json)
        db.add(row)
    else:
        row.kind = record.kind_tag
        row.record_json = record_json

    return row
