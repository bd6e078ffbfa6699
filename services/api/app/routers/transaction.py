from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from packages.shared.schemas.transaction_v1 import TransactionRecordV1
from packages.shared.schemas.view_v1 import FieldGroupV1, ViewModelV1
from services.api.app.db.deps import get_db
from services.api.app.db.models import IndexedTransaction
from services.api.app.models.transaction import IndexTransactionResponse
from services.api.app.services.kind_formatter import format_kind
from services.api.app.services.transaction_base import (
    MalformedPayloadError,
    TransactionNotFoundError,
    TransactionViewError,
)
from services.api.app.services.transaction_db import index_transaction
from services.api.app.services.transaction_factory import (
    get_module_display_limit,
    get_transaction_source,
)
from services.api.app.services.view_assembler import assemble_view
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

router = APIRouter()


def _raise_view_http_error(e: Exception, tx_id: str | None = None) -> None:
    if isinstance(e, TransactionNotFoundError):
        raise HTTPException(status_code=404, detail="Transaction not found") from e

    if isinstance(e, MalformedPayloadError):
        logger.warning("Unable to display transaction %s: %s", tx_id or "<inline>", e)
        raise HTTPException(
            status_code=422, detail=f"Unable to display transaction: {e.reason}"
        ) from e

    if isinstance(e, TransactionViewError):
        raise HTTPException(status_code=500, detail=str(e)) from e

    logger.exception("Unexpected error while building view for %s", tx_id or "<inline>")
    raise HTTPException(status_code=500, detail="Internal Server Error") from e


def _module_display_limit() -> int:
    try:
        return get_module_display_limit()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e


@router.post("/v1/transactions/view", response_model=ViewModelV1)
def view_transaction_record(payload: TransactionRecordV1) -> ViewModelV1:
    limit = _module_display_limit()
    try:
        return assemble_view(payload, module_display_limit=limit)
    except Exception as e:
        _raise_view_http_error(e, payload.tx_id)


@router.post("/v1/transactions", response_model=IndexTransactionResponse)
def index_transaction_record(
    payload: TransactionRecordV1, db: Session = Depends(get_db)
) -> IndexTransactionResponse:
    created = db.get(IndexedTransaction, payload.tx_id) is None
    row = index_transaction(db, payload)
    db.commit()

    logger.info("Indexed transaction %s (kind=%s, created=%s)", row.tx_id, row.kind, created)
    return IndexTransactionResponse(tx_id=row.tx_id, kind=row.kind, created=created)


@router.get("/v1/transactions/{tx_id}/view", response_model=ViewModelV1)
def view_transaction(tx_id: str, db: Session = Depends(get_db)) -> ViewModelV1:
    try:
        source = get_transaction_source(db)
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    limit = _module_display_limit()
    try:
        record = source.get_transaction(tx_id)
        return assemble_view(record, module_display_limit=limit)
    except Exception as e:
        _raise_view_http_error(e, tx_id)


@router.get("/v1/transactions/{tx_id}/kind", response_model=FieldGroupV1 | None)
def view_transaction_kind(tx_id: str, db: Session = Depends(get_db)) -> FieldGroupV1 | None:
    try:
        source = get_transaction_source(db)
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    try:
        record = source.get_transaction(tx_id)
        kind_fields = format_kind(record.kind_tag, record.payload, record.sender)
    except Exception as e:
        _raise_view_http_error(e, tx_id)

    return kind_fields.as_group()
