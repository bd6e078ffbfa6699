from __future__ import annotations

import os

from services.api.app.services.transaction_base import TransactionSource
from services.api.app.services.view_assembler import MODULE_DISPLAY_LIMIT
from sqlalchemy.orm import Session


def get_transaction_source(db: Session) -> TransactionSource:
    """Select the upstream transaction source based on env vars.

    Defaults to the local DB index. EXPLORER_TX_SOURCE=fixture serves the deterministic
    fixture transactions instead.
    """

    mode = os.getenv("EXPLORER_TX_SOURCE", "db").strip().lower()

    if mode == "db":
        from services.api.app.services.transaction_db import DbTransactionSource

        return DbTransactionSource(db)

    if mode == "fixture":
        from services.api.app.services.transaction_fixtures import FixtureTransactionSource

        return FixtureTransactionSource()

    raise ValueError(f"Unknown EXPLORER_TX_SOURCE={mode!r}. Expected db or fixture.")


def get_module_display_limit() -> int:
    raw = os.getenv("EXPLORER_MODULE_DISPLAY_LIMIT", "").strip()
    if not raw:
        return MODULE_DISPLAY_LIMIT

    try:
        limit = int(raw)
    except ValueError as e:
        raise ValueError(f"EXPLORER_MODULE_DISPLAY_LIMIT must be an integer, got {raw!r}") from e

    if limit < 1:
        raise ValueError(f"EXPLORER_MODULE_DISPLAY_LIMIT must be >= 1, got {limit}")
    return limit
