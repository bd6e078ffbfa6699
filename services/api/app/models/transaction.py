from __future__ import annotations

from pydantic import BaseModel


class IndexTransactionResponse(BaseModel):
    tx_id: str
    kind: str
    created: bool
